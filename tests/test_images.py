"""Image encoding tests"""
import base64
import io

import pytest
from PIL import Image

from moondream_client.vision.images import encode_image, mime_for_format, sniff_mime

PNG_HEADER = b"\x89PNG\r\n\x1a\n"


def decode_data_url(url: str) -> tuple[str, bytes]:
    header, payload = url.split(",", 1)
    return header, base64.b64decode(payload)


def test_mime_for_format():
    assert mime_for_format("png") == "image/png"
    assert mime_for_format("GIF") == "image/gif"
    assert mime_for_format("JPEG") == "image/jpeg"
    assert mime_for_format("webp") == "image/jpeg"


def test_sniff_mime():
    assert sniff_mime(PNG_HEADER + b"rest") == "image/png"
    assert sniff_mime(b"GIF89a...") == "image/gif"
    assert sniff_mime(b"\xff\xd8\xff\xe0") == "image/jpeg"


def test_raw_bytes_are_sent_untouched():
    raw = PNG_HEADER + b"pixels"

    header, payload = decode_data_url(encode_image(raw))

    assert header == "data:image/png;base64"
    assert payload == raw


def test_file_path_is_read(tmp_path):
    path = tmp_path / "photo.jpg"
    path.write_bytes(b"\xff\xd8\xff\xe0jpeg")

    header, payload = decode_data_url(encode_image(path))

    assert header == "data:image/jpeg;base64"
    assert payload == b"\xff\xd8\xff\xe0jpeg"


def test_string_path_is_read(tmp_path):
    path = tmp_path / "photo.gif"
    path.write_bytes(b"GIF87a-data")

    assert encode_image(str(path)).startswith("data:image/gif;base64,")


def test_data_url_passes_through():
    url = "data:image/png;base64,AAAA"

    assert encode_image(url) == url


def test_pil_image_is_encoded_as_jpeg():
    image = Image.new("RGB", (4, 4), "red")

    header, payload = decode_data_url(encode_image(image))

    assert header == "data:image/jpeg;base64"
    assert Image.open(io.BytesIO(payload)).format == "JPEG"


def test_pil_rgba_image_is_converted_for_jpeg():
    image = Image.new("RGBA", (4, 4), (0, 0, 255, 128))

    header, payload = decode_data_url(encode_image(image))

    assert Image.open(io.BytesIO(payload)).mode == "RGB"


def test_pil_image_honours_png_format():
    image = Image.new("RGBA", (2, 2))

    header, payload = decode_data_url(encode_image(image, "PNG"))

    assert header == "data:image/png;base64"
    assert payload.startswith(PNG_HEADER)


def test_unsupported_input_raises():
    with pytest.raises(TypeError):
        encode_image(12345)


def test_unsupported_input_names_the_type():
    with pytest.raises(TypeError, match="Unsupported image input: float"):
        encode_image(1.5)
