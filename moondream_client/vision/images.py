"""Image → base64 data URL for the `image_url` request field."""
import base64
import io
from pathlib import Path
from typing import Union

from PIL import Image

from moondream_client.constants import (
    DATA_URL_PREFIX,
    DATA_URL_TEMPLATE,
    DEFAULT_IMAGE_FORMAT,
    GIF_MAGIC,
    MIME_GIF,
    MIME_JPEG,
    MIME_PNG,
    MSG_UNSUPPORTED_IMAGE,
    PNG_MAGIC,
)

ImageInput = Union[bytes, str, Path, Image.Image]


def mime_for_format(fmt: str) -> str:
    match fmt.upper():
        case "PNG":
            return MIME_PNG
        case "GIF":
            return MIME_GIF
        case _:
            return MIME_JPEG


def sniff_mime(data: bytes) -> str:
    match data:
        case _ if data.startswith(PNG_MAGIC):
            return MIME_PNG
        case _ if data.startswith(GIF_MAGIC):
            return MIME_GIF
        case _:
            return MIME_JPEG


def _pil_bytes(image: Image.Image, fmt: str) -> bytes:
    buffer = io.BytesIO()
    if mime_for_format(fmt) == MIME_JPEG and image.mode not in ("RGB", "L"):
        image = image.convert("RGB")
    image.save(buffer, format=fmt)
    return buffer.getvalue()


def encode_image(image: ImageInput, fmt: str = DEFAULT_IMAGE_FORMAT) -> str:
    """Return a `data:<mime>;base64,...` URL.

    Raw bytes and files are sent untouched with a MIME type sniffed from their
    magic bytes; Pillow images are re-encoded in `fmt`. A string that is
    already a data URL passes through.
    """
    match image:
        case Image.Image():
            data, mime = _pil_bytes(image, fmt), mime_for_format(fmt)
        case bytes():
            data, mime = image, sniff_mime(image)
        case str() if image.startswith(DATA_URL_PREFIX):
            return image
        case str() | Path():
            data = Path(image).read_bytes()
            mime = sniff_mime(data)
        case _:
            raise TypeError(MSG_UNSUPPORTED_IMAGE % type(image).__name__)
    return DATA_URL_TEMPLATE % (mime, base64.standard_b64encode(data).decode())
