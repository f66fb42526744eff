"""
Gemini API client construction and model selection.
"""

from __future__ import annotations

import os
from typing import Optional

from google import genai

from .config import DEFAULT_IMAGE_MODEL, DEFAULT_VIDEO_MODEL
from .errors import ValidationError


def get_env_api_key() -> Optional[str]:
    """
    API key from the environment, if any.

    Prefers GEMINI_API_KEY; falls back to GOOGLE_GENAI_API_KEY for compatibility.
    """
    api_key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_GENAI_API_KEY")
    return api_key.strip() if api_key and api_key.strip() else None


def get_genai_client(api_key: Optional[str]) -> "genai.Client":
    """
    Build a client for the given key.

    A new client is created per request so a freshly selected key is always used.

    Raises:
        ValidationError: if no key is selected
    """
    if not api_key or not api_key.strip():
        raise ValidationError("An API key is required. Please select your key to proceed.")
    return genai.Client(api_key=api_key.strip())


def get_image_model_name() -> str:
    return os.getenv("IMAGEN_MODEL", DEFAULT_IMAGE_MODEL)


def get_video_model_name() -> str:
    return os.getenv("VEO_MODEL", DEFAULT_VIDEO_MODEL)
