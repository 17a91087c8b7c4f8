"""Moondream errors — every failure a caller can see derives from MoondreamError."""


class MoondreamError(Exception):
    """Base error; carries the upstream status code when there is one."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class BadRequestError(MoondreamError):
    pass


class UnauthorizedError(MoondreamError):
    pass


class PayloadTooLargeError(MoondreamError):
    pass


class RateLimitError(MoondreamError):
    pass


class InternalServerError(MoondreamError):
    pass


class UnexpectedResponseError(MoondreamError):
    """Status outside the known set; keeps the raw response text."""

    def __init__(self, message: str, status_code: int | None = None, text: str = "") -> None:
        super().__init__(message, status_code)
        self.text = text


class HttpError(MoondreamError):
    """Transport failure while sending the request or reading the body."""


class ResponseDecodeError(MoondreamError):
    """A non-streaming body that is not valid JSON."""


class StreamDecodeError(MoondreamError):
    """A streamed body that is not valid UTF-8."""
