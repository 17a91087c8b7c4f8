"""All magic values live here — no inline literals anywhere else."""

VERSION = "0.1.0"

# Moondream cloud API
DEFAULT_BASE_URL = "https://api.moondream.ai/v1"
DEFAULT_TIMEOUT: float = 30.0
DEFAULT_IMAGE_FORMAT = "JPEG"
DEFAULT_LOG_LEVEL = "INFO"

ENDPOINT_DETECT = "/detect"
ENDPOINT_POINT = "/point"
ENDPOINT_QUERY = "/query"
ENDPOINT_CAPTION = "/caption"

# Request headers / body fields
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_USER_AGENT = "User-Agent"
BEARER_PREFIX = "Bearer "
CONTENT_TYPE_JSON = "application/json"
USER_AGENT = f"moondream-client/{VERSION}"
FIELD_IMAGE_URL = "image_url"
FIELD_STREAM = "stream"

# Image data URLs
DATA_URL_PREFIX = "data:"
DATA_URL_TEMPLATE = "data:%s;base64,%s"
MIME_JPEG = "image/jpeg"
MIME_PNG = "image/png"
MIME_GIF = "image/gif"
PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
GIF_MAGIC = (b"GIF87a", b"GIF89a")

# Streaming line protocol
STREAM_DATA_PREFIX = "data: "
STREAM_CHUNK_FIELD = "chunk"
STREAM_LINE_SEPARATOR = "\n"
STREAM_ENCODING = "utf-8"

# Upstream error messages (status code → message)
MSG_BAD_REQUEST = "Bad Request: Invalid parameters or image format"
MSG_UNAUTHORIZED = "Unauthorized: Invalid or missing API key"
MSG_PAYLOAD_TOO_LARGE = "Payload Too Large: Image size exceeds limits"
MSG_TOO_MANY_REQUESTS = "Too Many Requests: Rate limit exceeded"
MSG_INTERNAL_SERVER_ERROR = "Internal Server Error"
MSG_UNEXPECTED_RESPONSE = "Unexpected response: %s"
MSG_HTTP_ERROR = "HTTP Error: %s"
MSG_JSON_ERROR = "JSON deserialization failed: %s"
MSG_STREAM_DECODE_ERROR = "Stream is not valid UTF-8: %s"
MSG_STREAM_NOT_SUPPORTED = "Task %s does not support streaming"
MSG_UNSUPPORTED_IMAGE = "Unsupported image input: %s"

# Log messages
MSG_SUBMITTING = "→ %s %s (stream=%s)"
MSG_STREAM_CLOSED = "Stream closed after %d chunks"
MSG_LINE_DISCARDED = "Discarded stream line: %r"
MSG_CHUNK_DECODED = "Decoded chunk: %r"
MSG_TRAILING_DISCARDED = "Discarded %d unterminated characters at end of stream"
MSG_STATUS_ERROR = "Moondream returned HTTP %d"
