from __future__ import annotations

import logging
import os
import time

from catresume.ai.factory import get_ai_client
from catresume.ai.types import ChatMessage
from catresume.core.config import settings

logger = logging.getLogger(__name__)


class LLMError(RuntimeError):
    def __init__(self, message: str, *, code: str = "llm_unavailable"):
        super().__init__(message)
        self.code = code


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def llm_enabled() -> bool:
    if not settings.llm_enabled:
        return False
    provider = (os.getenv("AI_PROVIDER") or "openai").strip().lower()
    key_name = "ANTHROPIC_API_KEY" if provider == "claude" else "OPENAI_API_KEY"
    api_key = (os.getenv(key_name) or "").strip()
    if not api_key or _looks_like_placeholder(api_key):
        return False
    return True


async def text_completion(
    *,
    system_prompt: str,
    user_prompt: str,
    max_output_tokens: int = 500,
    json_mode: bool = False,
    stage: str = "unknown",
) -> str:
    """Single-shot completion for one pipeline stage.

    Raises ``LLMError`` for every failure mode so each stage can apply its own
    fallback value at the call site.
    """
    if not llm_enabled():
        raise LLMError("LLM is disabled or no API key is configured.", code="llm_disabled")

    started = time.perf_counter()
    try:
        content = await get_ai_client().complete(
            [
                ChatMessage(role="system", content=system_prompt),
                ChatMessage(role="user", content=user_prompt),
            ],
            max_tokens=max_output_tokens,
            json_mode=json_mode,
        )
    except Exception as exc:
        logger.warning("llm_completion_failed stage=%s prompt_len=%s: %s", stage, len(user_prompt), exc)
        raise LLMError(str(exc) or exc.__class__.__name__, code="llm_exception") from exc

    latency_ms = int((time.perf_counter() - started) * 1000)
    if not content:
        logger.warning("llm_completion_empty stage=%s latency_ms=%s", stage, latency_ms)
        raise LLMError("LLM returned an empty response.", code="llm_empty")

    logger.info("llm_completion stage=%s latency_ms=%s chars=%s", stage, latency_ms, len(content))
    return content
