"""
Configuration, constants, and data models for Creative Studio AI.
"""

from __future__ import annotations

import base64
import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import ValidationError
from .utils import get_logger

logger = get_logger("config")


# ---------- Data Models ----------
class AspectRatio(str, Enum):
    """Frame shape for generated videos."""

    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"

    @property
    def label(self) -> str:
        return "Landscape" if self is AspectRatio.LANDSCAPE else "Portrait"

    @classmethod
    def parse(cls, value) -> "AspectRatio":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip())
        except ValueError:
            allowed = ", ".join(r.value for r in cls)
            raise ValidationError(f"Unsupported aspect ratio {value!r}; expected one of {allowed}") from None


@dataclass(frozen=True)
class SourceImage:
    """Base64 image payload plus its media type, ready for a video job."""
    base64: str
    mime_type: str

    @property
    def data(self) -> bytes:
        return base64.b64decode(self.base64)


@dataclass(frozen=True)
class GeneratedImage:
    data: bytes
    mime_type: str = "image/jpeg"

    @property
    def base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64}"


@dataclass(frozen=True)
class GeneratedVideo:
    """Downloaded video bytes; `st.video` renders `data` directly."""
    data: bytes
    mime_type: str = "video/mp4"
    source_uri: str = ""

    def __len__(self) -> int:
        return len(self.data)


# ---------- Models & Request Policy ----------
DEFAULT_IMAGE_MODEL = "imagen-4.0-generate-001"
DEFAULT_VIDEO_MODEL = "veo-3.1-fast-generate-preview"

IMAGE_COUNT = 1
IMAGE_OUTPUT_MIME_TYPE = "image/jpeg"
IMAGE_ASPECT_RATIO = "1:1"

VIDEO_COUNT = 1
VIDEO_RESOLUTION = "720p"
VIDEO_MIME_TYPE = "video/mp4"

# ---------- Polling ----------
DEFAULT_POLL_INTERVAL = 10.0
DEFAULT_MAX_POLL_ATTEMPTS = 60
DEFAULT_DOWNLOAD_TIMEOUT = 300.0

# ---------- UI Copy ----------
ACCEPTED_IMAGE_TYPES = ["png", "jpg", "jpeg", "gif", "webp"]

LOADING_MESSAGES = [
    "Warming up the digital canvas...",
    "Teaching pixels to dance...",
    "Assembling cinematic sequences...",
    "Rendering your masterpiece, frame by frame...",
    "This can take a few minutes. Great art needs patience!",
    "Final touches and color grading...",
]


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default


def get_poll_interval() -> float:
    """Seconds to wait between status checks of a video job."""
    value = _env_number("VEO_POLL_INTERVAL", DEFAULT_POLL_INTERVAL, float)
    return value if value >= 0 else DEFAULT_POLL_INTERVAL


def get_max_poll_attempts() -> Optional[int]:
    """
    Upper bound on status checks per video job.

    Returns:
        Attempt count, or None when VEO_MAX_POLL_ATTEMPTS is 0 (poll until done)
    """
    value = _env_number("VEO_MAX_POLL_ATTEMPTS", DEFAULT_MAX_POLL_ATTEMPTS, int)
    if value == 0:
        return None
    return value if value > 0 else DEFAULT_MAX_POLL_ATTEMPTS


def get_download_timeout() -> float:
    """Seconds allowed for the video fetch; must be positive."""
    value = _env_number("VEO_DOWNLOAD_TIMEOUT", DEFAULT_DOWNLOAD_TIMEOUT, float)
    if value <= 0:
        logger.warning(f"Ignoring non-positive VEO_DOWNLOAD_TIMEOUT={value}, using {DEFAULT_DOWNLOAD_TIMEOUT}")
        return DEFAULT_DOWNLOAD_TIMEOUT
    return value
