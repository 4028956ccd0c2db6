from __future__ import annotations

import logging
import os
import uuid
from functools import lru_cache
from pathlib import Path
from typing import Sequence

from openai import AsyncOpenAI

from catresume.core.config import settings
from catresume.services.cat_script import build_cat_script

logger = logging.getLogger(__name__)

AUDIO_ERROR_PREFIX = "Error generating cat audio: "
AUDIO_ROUTE = "/audio"


@lru_cache(maxsize=1)
def _tts_client() -> AsyncOpenAI:
    key = (os.getenv("OPENAI_API_KEY") or "").strip()
    if not key:
        raise RuntimeError("OPENAI_API_KEY is missing")
    return AsyncOpenAI(
        api_key=key,
        base_url=(os.getenv("OPENAI_BASE_URL") or None),
        timeout=float(os.getenv("TTS_TIMEOUT_S", "60")),
        max_retries=int(os.getenv("OPENAI_MAX_RETRIES", "2")),
    )


async def synthesize_speech(script: str) -> bytes:
    response = await _tts_client().audio.speech.create(
        model=settings.tts_model,
        voice=settings.tts_voice,
        input=script,
    )
    return response.content


def audio_url_for(filename: str, base_url: str = settings.public_base_url) -> str:
    return f"{base_url}{AUDIO_ROUTE}/{filename}"


async def generate_cat_audio(
    summary: str | None,
    highlights: Sequence[str] | None,
    score: int,
    justification: str,
    *,
    audio_dir: str | Path = settings.audio_dir,
) -> str:
    """Narrate the highlights as Professor Whiskers and return the public URL of the mp3.

    Failures come back as an ``AUDIO_ERROR_PREFIX`` message instead of a URL.
    """
    try:
        script = build_cat_script(highlights or [], score, justification, summary)
        logger.debug("cat_audio_script chars=%s", len(script))

        audio = await synthesize_speech(script)
        if not audio:
            raise RuntimeError("TTS returned no audio")

        target_dir = Path(audio_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        filename = f"cat_audio_{uuid.uuid4().hex}.mp3"
        (target_dir / filename).write_bytes(audio)
    except Exception as exc:
        logger.warning("cat_audio_failed: %s", exc)
        return f"{AUDIO_ERROR_PREFIX}{exc}"

    url = audio_url_for(filename)
    logger.info("cat_audio_generated file=%s", filename)
    return url
