from __future__ import annotations

import os
from typing import Optional, Sequence

from anthropic import AsyncAnthropic

from catresume.ai.types import ChatMessage


class ClaudeProvider:
    """Anthropic messages API. System turns are hoisted into the ``system`` parameter."""

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        timeout_s: float = 60.0,
        max_retries: int = 2,
        temperature: float = 0.4,
    ):
        self._model = model
        self._temperature = temperature
        key = (api_key or os.getenv("ANTHROPIC_API_KEY") or "").strip()
        if not key:
            raise RuntimeError("ANTHROPIC_API_KEY is missing")

        self._client = AsyncAnthropic(api_key=key, timeout=timeout_s, max_retries=max_retries)

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        *,
        max_tokens: int = 500,
        json_mode: bool = False,
    ) -> str:
        # No native JSON mode; the prompts already demand JSON-only output.
        _ = json_mode
        system = "\n\n".join(m.content for m in messages if m.role == "system")
        turns = [{"role": m.role, "content": m.content} for m in messages if m.role != "system"]

        create_kwargs = {
            "model": self._model,
            "max_tokens": max_tokens,
            "temperature": self._temperature,
            "messages": turns,
        }
        if system:
            create_kwargs["system"] = system

        message = await self._client.messages.create(**create_kwargs)
        parts = [getattr(block, "text", "") for block in message.content or []]
        return "".join(parts).strip()
