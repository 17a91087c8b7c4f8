"""Task kinds and request assembly — one generic shape for detect/point/query/caption."""
from dataclasses import dataclass
from enum import Enum
from typing import Any

from moondream_client.constants import (
    BEARER_PREFIX,
    CONTENT_TYPE_JSON,
    ENDPOINT_CAPTION,
    ENDPOINT_DETECT,
    ENDPOINT_POINT,
    ENDPOINT_QUERY,
    FIELD_IMAGE_URL,
    FIELD_STREAM,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
    HEADER_USER_AGENT,
    MSG_STREAM_NOT_SUPPORTED,
    USER_AGENT,
)


class CaptionLength(Enum):
    """Level of detail for generated captions."""

    SHORT = "short"  # a 1-2 sentence summary
    NORMAL = "normal"  # elements, context, colors, positioning


class TaskKind(Enum):
    # value: (endpoint, argument field, result field, streamable)
    DETECT = (ENDPOINT_DETECT, "object", "objects", False)
    POINT = (ENDPOINT_POINT, "object", "points", False)
    QUERY = (ENDPOINT_QUERY, "question", "answer", True)
    CAPTION = (ENDPOINT_CAPTION, "length", "caption", True)

    @property
    def endpoint(self) -> str:
        return self.value[0]

    @property
    def argument_field(self) -> str:
        return self.value[1]

    @property
    def result_field(self) -> str:
        return self.value[2]

    @property
    def streamable(self) -> bool:
        return self.value[3]


@dataclass(frozen=True)
class TaskResult:
    kind: TaskKind
    value: Any
    raw: dict[str, Any]

    @property
    def text(self) -> str | None:
        """The result as a string for query/caption, None for structured results."""
        match self.value:
            case str() as s:
                return s
            case _:
                return None

    @classmethod
    def from_json(cls, kind: TaskKind, body: dict[str, Any]) -> "TaskResult":
        return cls(kind=kind, value=body.get(kind.result_field), raw=body)


def _argument_value(argument: str | CaptionLength) -> str:
    match argument:
        case CaptionLength() as length:
            return length.value
        case _:
            return argument


def build_body(
    kind: TaskKind, image_url: str, argument: str | CaptionLength, stream: bool = False
) -> dict[str, Any]:
    if stream and not kind.streamable:
        raise ValueError(MSG_STREAM_NOT_SUPPORTED % kind.name.lower())
    body: dict[str, Any] = {
        FIELD_IMAGE_URL: image_url,
        kind.argument_field: _argument_value(argument),
    }
    match kind.streamable:
        case True:
            body[FIELD_STREAM] = stream
        case False:
            pass
    return body


def build_headers(api_key: str) -> dict[str, str]:
    return {
        HEADER_AUTHORIZATION: BEARER_PREFIX + api_key,
        HEADER_CONTENT_TYPE: CONTENT_TYPE_JSON,
        HEADER_USER_AGENT: USER_AGENT,
    }
