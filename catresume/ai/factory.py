from functools import lru_cache

from catresume.ai.config import load_ai_config
from catresume.ai.types import AIClient

from catresume.ai.providers.openai_provider import OpenAIProvider
from catresume.ai.providers.claude_provider import ClaudeProvider


@lru_cache(maxsize=1)
def get_ai_client() -> AIClient:
    cfg = load_ai_config()

    if cfg.provider == "openai":
        return OpenAIProvider(model=cfg.model, timeout_s=cfg.timeout_s, max_retries=cfg.max_retries)

    if cfg.provider == "claude":
        return ClaudeProvider(model=cfg.model, timeout_s=cfg.timeout_s, max_retries=cfg.max_retries)

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")
