"""
Utility functions for Creative Studio AI.
"""

from __future__ import annotations

import base64
import logging
import mimetypes
import os
import sys
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from .errors import EncodingError, ValidationError

_LOGGER_ROOT = "creative_studio"


def get_logger(name: str) -> logging.Logger:
    """
    Return a named logger under the package root logger.

    The root logger gets one stderr handler the first time this is called;
    its level comes from LOG_LEVEL (default INFO).
    """
    root = logging.getLogger(_LOGGER_ROOT)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
        root.addHandler(handler)
        raw_level = os.getenv("LOG_LEVEL", "INFO")
        level = resolve_log_level(raw_level)
        root.setLevel(level if level is not None else logging.INFO)
        root.propagate = False
        if level is None:
            root.warning(f"Ignoring unknown LOG_LEVEL={raw_level!r}, using INFO")
    return root.getChild(name)


def resolve_log_level(value) -> Optional[int]:
    """Numeric level for a name like "debug" or a number; None when unknown."""
    text = str(value or "").strip().upper()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text)
    return level if isinstance(level, int) else None


logger = get_logger("utils")


def _read_bytes(file) -> bytes:
    if isinstance(file, (bytes, bytearray)):
        return bytes(file)
    if hasattr(file, "getvalue"):
        data = file.getvalue()
    else:
        if hasattr(file, "seek"):
            file.seek(0)
        data = file.read()
    if isinstance(data, str):
        raise TypeError("expected a binary file, got text")
    return bytes(data)


def guess_mime_type(file) -> str:
    """Declared upload type, else a guess from the filename."""
    declared = getattr(file, "type", None)
    if isinstance(declared, str) and declared:
        return declared
    name = getattr(file, "name", None)
    if isinstance(name, str):
        guessed, _ = mimetypes.guess_type(name)
        if guessed:
            return guessed
    return "application/octet-stream"


def split_data_url(data_url: str) -> Tuple[str, str]:
    """
    Split "data:<mime>;base64,<payload>" into (payload, mime).

    Raises:
        EncodingError: if there is not exactly one "," separator or the header is malformed
    """
    parts = data_url.split(",")
    if len(parts) != 2:
        raise EncodingError("Invalid file format for base64 conversion.")
    header, payload = parts
    if not header.startswith("data:") or not header.endswith(";base64"):
        raise EncodingError("Invalid file format for base64 conversion.")
    mime_type = header[len("data:"):-len(";base64")]
    if not mime_type:
        raise EncodingError("Invalid file format for base64 conversion.")
    return payload, mime_type


def file_to_base64(file):
    """
    Convert an uploaded file into a SourceImage (base64 payload + media type).

    Args:
        file: Streamlit UploadedFile, any binary file-like object, or raw bytes

    Returns:
        SourceImage
    """
    from .config import SourceImage

    try:
        raw = _read_bytes(file)
    except (OSError, ValueError, TypeError) as exc:
        logger.error(f"Could not read upload: {exc}")
        raise EncodingError(f"Could not read the selected file: {exc}") from exc

    mime_type = guess_mime_type(file)
    data_url = f"data:{mime_type};base64,{base64.b64encode(raw).decode('ascii')}"
    payload, mime_type = split_data_url(data_url)
    logger.debug(f"Encoded {len(raw)} bytes as {mime_type}")
    return SourceImage(base64=payload, mime_type=mime_type)


def validate_image_upload(file) -> None:
    """
    Check that an upload really is an image before it is encoded.

    Raises:
        ValidationError: missing file, non-image media type, or unreadable image data
    """
    if file is None:
        raise ValidationError("Please upload an image to animate.")
    mime_type = guess_mime_type(file)
    if not mime_type.startswith("image/"):
        raise ValidationError("Please select a valid image file.")
    try:
        with Image.open(file) as image:
            image.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        logger.warning(f"Rejected upload {getattr(file, 'name', '<bytes>')}: {exc}")
        raise ValidationError("Please select a valid image file.") from exc
    finally:
        if hasattr(file, "seek"):
            file.seek(0)
