"""
Image Generator - single text-to-image call against Imagen.
"""

from __future__ import annotations

from typing import Optional

from google.genai import types as genai_types

from .config import IMAGE_ASPECT_RATIO, IMAGE_COUNT, IMAGE_OUTPUT_MIME_TYPE, GeneratedImage
from .errors import EmptyResultError, RequestError, ValidationError
from .gemini_client import get_genai_client, get_image_model_name
from .utils import get_logger

logger = get_logger("image_generator")


async def generate_image(prompt: str, *, api_key: Optional[str], client=None) -> GeneratedImage:
    """
    Generate one square JPEG from a text prompt.

    Args:
        prompt: Non-blank description of the image
        api_key: Selected API key
        client: Pre-built genai.Client (tests); built from api_key when omitted

    Returns:
        GeneratedImage holding the first returned image's bytes

    Raises:
        ValidationError: blank prompt or missing key, before any network call
        EmptyResultError: the call succeeded but returned no images
        RequestError: the remote call failed
    """
    if not prompt or not prompt.strip():
        raise ValidationError("Please enter a prompt.")
    if client is None:
        client = get_genai_client(api_key)

    model_name = get_image_model_name()
    logger.info(f"Requesting image from {model_name} ({len(prompt)} char prompt)")
    try:
        response = await client.aio.models.generate_images(
            model=model_name,
            prompt=prompt,
            config=genai_types.GenerateImagesConfig(
                number_of_images=IMAGE_COUNT,
                output_mime_type=IMAGE_OUTPUT_MIME_TYPE,
                aspect_ratio=IMAGE_ASPECT_RATIO,
            ),
        )
    except Exception as exc:
        logger.error(f"Image generation request failed: {exc}")
        raise RequestError.wrap(exc) from exc

    images = getattr(response, "generated_images", None) or []
    image = getattr(images[0], "image", None) if images else None
    data = getattr(image, "image_bytes", None)
    if not data:
        logger.warning("Image response contained no images (possibly blocked)")
        raise EmptyResultError("No image was generated. The response may have been blocked.")

    mime_type = getattr(image, "mime_type", None) or IMAGE_OUTPUT_MIME_TYPE
    logger.info(f"Image received ({len(data)} bytes, {mime_type})")
    return GeneratedImage(data=data, mime_type=mime_type)
