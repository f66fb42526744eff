"""
Video Animator - submit an image-to-video job to Veo, poll it, download the result.

The job is a long-running operation: submission returns an operation whose
`done` flag only the server flips. We re-fetch it at a fixed interval until
it is done, then fetch the video bytes from the URI it reports.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Optional

import requests
from google.genai import types as genai_types

from .config import (
    VIDEO_COUNT,
    VIDEO_MIME_TYPE,
    VIDEO_RESOLUTION,
    AspectRatio,
    GeneratedVideo,
    SourceImage,
    get_download_timeout,
    get_max_poll_attempts,
    get_poll_interval,
)
from .errors import (
    DownloadError,
    GenerationCancelledError,
    GenerationTimeoutError,
    IncompleteResultError,
    RequestError,
    ValidationError,
)
from .gemini_client import get_genai_client, get_video_model_name
from .utils import get_logger

logger = get_logger("video_animator")

_UNSET = object()


async def generate_video(
    prompt: Optional[str],
    source_image: SourceImage,
    aspect_ratio,
    *,
    api_key: Optional[str],
    client=None,
    poll_interval: Optional[float] = None,
    max_attempts=_UNSET,
    cancel_event: Optional[asyncio.Event] = None,
    on_poll: Optional[Callable[[int, object], None]] = None,
    sleep=asyncio.sleep,
    downloader: Optional[Callable[..., requests.Response]] = None,
) -> GeneratedVideo:
    """
    Animate a still image into a short video.

    Args:
        prompt: Optional description of the motion
        source_image: Encoded image from file_to_base64
        aspect_ratio: "16:9" or "9:16" (or an AspectRatio)
        api_key: Selected API key; also appended to the download URL
        client: Pre-built genai.Client (tests); built from api_key when omitted
        poll_interval: Seconds between status checks (VEO_POLL_INTERVAL by default)
        max_attempts: Status-check bound; None polls until the server says done
        cancel_event: Set it to stop polling with GenerationCancelledError
        on_poll: Called as on_poll(attempt, operation) after every status check
        sleep: Awaitable used for the interval wait
        downloader: requests.get-compatible callable for the video fetch

    Returns:
        GeneratedVideo with the downloaded bytes
    """
    if source_image is None or not source_image.base64:
        raise ValidationError("Please upload an image to animate.")
    ratio = AspectRatio.parse(aspect_ratio)
    if client is None:
        client = get_genai_client(api_key)
    interval = get_poll_interval() if poll_interval is None else poll_interval
    attempts = get_max_poll_attempts() if max_attempts is _UNSET else max_attempts

    operation = await _submit(client, prompt, source_image, ratio)
    operation = await _poll_until_done(
        client,
        operation,
        interval=interval,
        max_attempts=attempts,
        cancel_event=cancel_event,
        on_poll=on_poll,
        sleep=sleep,
    )

    uri = _extract_video_uri(operation)
    if not uri:
        detail = _operation_error_message(operation)
        message = "Video generation finished but no video URI was found."
        if detail:
            message = f"{message} ({detail})"
        logger.error(message)
        raise IncompleteResultError(message)

    return await _download_video(uri, api_key, downloader or requests.get)


async def _submit(client, prompt: Optional[str], source_image: SourceImage, ratio: AspectRatio):
    model_name = get_video_model_name()
    logger.info(f"Submitting video job to {model_name} ({ratio.value}, {source_image.mime_type})")
    try:
        operation = await client.aio.models.generate_videos(
            model=model_name,
            prompt=prompt.strip() if prompt and prompt.strip() else None,
            image=genai_types.Image(
                image_bytes=source_image.data,
                mime_type=source_image.mime_type,
            ),
            config=genai_types.GenerateVideosConfig(
                number_of_videos=VIDEO_COUNT,
                resolution=VIDEO_RESOLUTION,
                aspect_ratio=ratio.value,
            ),
        )
    except Exception as exc:
        logger.error(f"Video submission failed: {exc}")
        raise RequestError.wrap(exc) from exc
    logger.info(f"Video job accepted: {getattr(operation, 'name', None)} (done={bool(operation.done)})")
    return operation


async def _poll_until_done(client, operation, *, interval, max_attempts, cancel_event, on_poll, sleep):
    """
    Re-fetch the operation until the server reports it done.

    The first status check follows submission directly; later checks are
    `interval` seconds apart.
    """
    attempt = 0
    while not operation.done:
        _check_cancelled(cancel_event)
        if max_attempts is not None and attempt >= max_attempts:
            message = f"Video generation did not finish after {attempt} status checks."
            logger.error(message)
            raise GenerationTimeoutError(message)
        if attempt > 0:
            await sleep(interval)
            _check_cancelled(cancel_event)

        attempt += 1
        try:
            operation = await client.aio.operations.get(operation)
        except Exception as exc:
            logger.error(f"Status check {attempt} failed: {exc}")
            raise RequestError.wrap(exc) from exc

        logger.info(f"Status check {attempt}: done={bool(operation.done)}")
        if on_poll:
            on_poll(attempt, operation)
    return operation


def _check_cancelled(cancel_event: Optional[asyncio.Event]) -> None:
    if cancel_event is not None and cancel_event.is_set():
        logger.info("Video job cancelled by caller")
        raise GenerationCancelledError("Video generation was cancelled.")


def _extract_video_uri(operation) -> Optional[str]:
    response = getattr(operation, "response", None) or getattr(operation, "result", None)
    videos = getattr(response, "generated_videos", None) or []
    if not videos:
        return None
    video = getattr(videos[0], "video", None)
    return getattr(video, "uri", None) or None


def _operation_error_message(operation) -> Optional[str]:
    error = getattr(operation, "error", None)
    if not error:
        return None
    if isinstance(error, dict):
        return error.get("message") or str(error)
    return str(error)


async def _download_video(uri: str, api_key: Optional[str], downloader) -> GeneratedVideo:
    """Fetch the finished video; the link only works with the API key attached."""
    logger.info("Downloading generated video...")
    try:
        resp = await asyncio.to_thread(
            downloader,
            uri,
            params={"key": api_key},
            timeout=get_download_timeout(),
        )
    except requests.exceptions.RequestException as exc:
        logger.error(f"Video download failed: {exc}")
        raise RequestError.wrap(exc) from exc
    except (ValueError, TypeError, OSError) as exc:
        logger.error(f"Video download could not be issued: {exc}")
        raise RequestError.wrap(exc) from exc

    if not resp.ok:
        logger.error(f"Video download returned {resp.status_code} {resp.reason}")
        raise DownloadError(resp.status_code, resp.reason or "")

    mime_type = resp.headers.get("content-type", VIDEO_MIME_TYPE).split(";")[0].strip() or VIDEO_MIME_TYPE
    logger.info(f"Video downloaded ({len(resp.content)} bytes)")
    return GeneratedVideo(data=resp.content, mime_type=mime_type, source_uri=uri)
