from __future__ import annotations

import logging
import os
import random
from functools import lru_cache
from typing import Any, Awaitable, Callable, Sequence

import replicate

from catresume.core.config import settings
from catresume.services.cat_script import (
    NEGATIVE_PROMPT,
    build_image_prompt,
    build_reference_image_prompt,
    build_simple_video_prompt,
    build_static_prompt,
    build_video_prompt,
)
from catresume.services.media_output import EMPTY_OUTPUT, normalize_media_output

logger = logging.getLogger(__name__)

CONTENT_ERROR_PREFIX = "Error generating content: "
IMAGE_ERROR_PREFIX = "Error generating cat image: "

MediaAttempt = Callable[[], Awaitable[str]]


class MediaGenerationError(RuntimeError):
    def __init__(self, message: str, *, code: str = "media_failed"):
        super().__init__(message)
        self.code = code


@lru_cache(maxsize=1)
def _client() -> replicate.Client:
    token = (os.getenv("REPLICATE_API_TOKEN") or "").strip()
    if not token:
        raise MediaGenerationError("REPLICATE_API_TOKEN is missing", code="media_disabled")
    return replicate.Client(api_token=token)


async def run_model(model: str, inputs: dict[str, Any]) -> str:
    """Run one generation model and return its output URL; empty output is an error."""
    raw = await _client().async_run(model, input=inputs)
    url = normalize_media_output(raw)
    if url == EMPTY_OUTPUT:
        raise MediaGenerationError(f"Model '{model.split(':')[0]}' returned no output", code="empty_output")
    return url


def _image_inputs(prompt: str) -> dict[str, Any]:
    return {
        "prompt": prompt,
        "negative_prompt": NEGATIVE_PROMPT,
        "width": 768,
        "height": 768,
        "num_inference_steps": 40,
        "seed": random.randint(0, 999_999),
    }


async def run_fallback_chain(
    steps: Sequence[tuple[str, MediaAttempt]],
    *,
    error_prefix: str = CONTENT_ERROR_PREFIX,
) -> str:
    """Run ``steps`` in order and return the first URL produced.

    When every step fails the result is ``error_prefix`` plus the last error
    message, returned rather than raised.
    """
    last_error: Exception | None = None
    for name, attempt in steps:
        try:
            url = await attempt()
        except Exception as exc:
            logger.warning("media_attempt_failed step=%s: %s", name, exc)
            last_error = exc
            continue
        if url == EMPTY_OUTPUT:
            last_error = MediaGenerationError(f"Step '{name}' returned no output", code="empty_output")
            logger.warning("media_attempt_failed step=%s: %s", name, last_error)
            continue
        logger.info("media_generated step=%s", name)
        return url

    message = str(last_error) if last_error else "no generation steps configured"
    logger.error("media_generation_exhausted: %s", message)
    return f"{error_prefix}{message}"


async def generate_cat_image(summary: str | None, keywords: Sequence[str] | None = None) -> str:
    prompt = build_image_prompt(keywords or [], summary)

    async def attempt() -> str:
        return await run_model(settings.replicate_image_model, _image_inputs(prompt))

    return await run_fallback_chain([("image", attempt)], error_prefix=IMAGE_ERROR_PREFIX)


async def generate_cat_video(summary: str | None, highlights: Sequence[str] | None = None) -> str:
    items = list(highlights or [])

    async def primary() -> str:
        reference_url = await run_model(settings.replicate_image_model, _image_inputs(build_reference_image_prompt()))
        return await run_model(
            settings.replicate_video_model,
            {
                "input_image": reference_url,
                "prompt": build_video_prompt(items, summary),
                "video_length": "25_frames_with_svd_xt",
                "frames_per_second": 6,
            },
        )

    async def secondary_video() -> str:
        return await run_model(
            settings.replicate_alt_video_model,
            {"prompt": build_simple_video_prompt(items, summary), "num_frames": 24, "fps": 8},
        )

    async def static_fallback() -> str:
        return await run_model(settings.replicate_image_model, _image_inputs(build_static_prompt(items, summary)))

    return await run_fallback_chain(
        [
            ("primary", primary),
            ("secondary_video", secondary_video),
            ("static_fallback", static_fallback),
        ]
    )
