"""Response mapping — HTTP status → MoondreamError, JSON body → dict."""
import json
import logging
from typing import Any

import httpx

from moondream_client.constants import (
    MSG_BAD_REQUEST,
    MSG_INTERNAL_SERVER_ERROR,
    MSG_JSON_ERROR,
    MSG_PAYLOAD_TOO_LARGE,
    MSG_STATUS_ERROR,
    MSG_TOO_MANY_REQUESTS,
    MSG_UNAUTHORIZED,
    MSG_UNEXPECTED_RESPONSE,
)
from moondream_client.errors import (
    BadRequestError,
    InternalServerError,
    MoondreamError,
    PayloadTooLargeError,
    RateLimitError,
    ResponseDecodeError,
    UnauthorizedError,
    UnexpectedResponseError,
)

logger = logging.getLogger(__name__)


def error_for_status(status_code: int, text: str = "") -> MoondreamError | None:
    """Map a terminal status to its error, or None for 200."""
    match status_code:
        case 200:
            return None
        case 400:
            return BadRequestError(MSG_BAD_REQUEST, status_code)
        case 401:
            return UnauthorizedError(MSG_UNAUTHORIZED, status_code)
        case 413:
            return PayloadTooLargeError(MSG_PAYLOAD_TOO_LARGE, status_code)
        case 429:
            return RateLimitError(MSG_TOO_MANY_REQUESTS, status_code)
        case 500:
            return InternalServerError(MSG_INTERNAL_SERVER_ERROR, status_code)
        case _:
            return UnexpectedResponseError(MSG_UNEXPECTED_RESPONSE % text, status_code, text)


def raise_for_status(status_code: int, text: str = "") -> None:
    match error_for_status(status_code, text):
        case None:
            pass
        case error:
            logger.warning(MSG_STATUS_ERROR, status_code)
            raise error


def decode_body(response: httpx.Response) -> dict[str, Any]:
    """Check the status of a fully read response and return its JSON object."""
    raise_for_status(response.status_code, response.text)
    try:
        body = json.loads(response.content)
    except (ValueError, RecursionError) as exc:
        raise ResponseDecodeError(MSG_JSON_ERROR % exc, response.status_code) from exc
    match body:
        case dict():
            return body
        case _:
            raise ResponseDecodeError(
                MSG_JSON_ERROR % f"expected an object, got {type(body).__name__}",
                response.status_code,
            )
