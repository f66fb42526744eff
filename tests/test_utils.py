from __future__ import annotations

import base64
import io

import pytest
from PIL import Image

from creative_studio.errors import EncodingError, ValidationError
from creative_studio.utils import file_to_base64, split_data_url, validate_image_upload


class FakeUpload(io.BytesIO):
    """Mimics Streamlit's UploadedFile: bytes plus name and declared type."""

    def __init__(self, data: bytes, name: str, type: str | None = None):  # noqa: A002
        super().__init__(data)
        self.name = name
        self.type = type


def _png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), color=(255, 0, 0)).save(buf, format="PNG")
    return buf.getvalue()


def test_file_to_base64_roundtrip() -> None:
    raw = bytes(range(256))
    encoded = file_to_base64(FakeUpload(raw, "frame.png", "image/png"))

    assert encoded.mime_type == "image/png"
    assert base64.b64decode(encoded.base64) == raw
    assert encoded.data == raw


def test_file_to_base64_guesses_type_from_name() -> None:
    encoded = file_to_base64(FakeUpload(b"\xff\xd8\xff", "photo.jpeg"))
    assert encoded.mime_type == "image/jpeg"


def test_file_to_base64_unknown_type() -> None:
    encoded = file_to_base64(b"raw")
    assert encoded.mime_type == "application/octet-stream"


def test_file_to_base64_unreadable_input() -> None:
    class Broken:
        name = "broken.png"

        def read(self):
            raise OSError("disk went away")

    with pytest.raises(EncodingError, match="disk went away"):
        file_to_base64(Broken())


def test_file_to_base64_rejects_header_with_separator() -> None:
    with pytest.raises(EncodingError):
        file_to_base64(FakeUpload(b"abc", "x.png", "image/png,evil"))


@pytest.mark.parametrize(
    "data_url",
    [
        "no separator at all",
        "data:image/png;base64,AAAA,BBBB",
        "image/png;base64,AAAA",
        "data:image/png,AAAA",
        "data:;base64,AAAA",
    ],
)
def test_split_data_url_malformed(data_url: str) -> None:
    with pytest.raises(EncodingError):
        split_data_url(data_url)


def test_split_data_url() -> None:
    assert split_data_url("data:image/webp;base64,AAAA") == ("AAAA", "image/webp")


def test_validate_image_upload_accepts_png() -> None:
    upload = FakeUpload(_png_bytes(), "frame.png", "image/png")
    validate_image_upload(upload)
    assert upload.tell() == 0


def test_validate_image_upload_rejects_non_image_type() -> None:
    with pytest.raises(ValidationError, match="valid image"):
        validate_image_upload(FakeUpload(b"hello", "notes.txt", "text/plain"))


def test_validate_image_upload_rejects_corrupt_image() -> None:
    with pytest.raises(ValidationError, match="valid image"):
        validate_image_upload(FakeUpload(b"not really a png", "frame.png", "image/png"))


def test_validate_image_upload_requires_file() -> None:
    with pytest.raises(ValidationError, match="upload an image"):
        validate_image_upload(None)
