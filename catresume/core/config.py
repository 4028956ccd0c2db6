from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_JOB_DESCRIPTION = (
    "We are hiring a Software Engineer to design, build and maintain web services. "
    "Requirements: 3+ years of professional software development, strong Python or "
    "JavaScript skills, experience with REST APIs, SQL databases and cloud platforms "
    "(AWS, GCP or Azure), familiarity with CI/CD and automated testing, and the "
    "ability to communicate clearly with product and design teams. A degree in "
    "Computer Science or equivalent experience is preferred."
)


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    log_level: str
    sentry_dsn: str | None
    rate_limit: str
    rate_limit_enabled: bool
    cors_allowed_origins: tuple[str, ...]
    upload_dir: str
    audio_dir: str
    public_base_url: str
    max_upload_bytes: int
    upload_retention_minutes: int
    llm_enabled: bool
    scoring_enabled: bool
    job_description: str
    default_highlights: tuple[str, ...]
    default_keywords: tuple[str, ...]
    replicate_image_model: str
    replicate_video_model: str
    replicate_alt_video_model: str
    tts_model: str
    tts_voice: str


settings = Settings(
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    rate_limit=_get_env("RATE_LIMIT", "10/minute") or "10/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ],
    ),
    upload_dir=_get_env("UPLOAD_DIR", "uploads") or "uploads",
    audio_dir=_get_env("AUDIO_DIR", "uploads/audio") or "uploads/audio",
    public_base_url=(_get_env("PUBLIC_BASE_URL", "http://localhost:3000") or "http://localhost:3000").rstrip("/"),
    max_upload_bytes=_get_env_int("MAX_UPLOAD_BYTES", 5 * 1024 * 1024),
    upload_retention_minutes=_get_env_int("UPLOAD_RETENTION_MINUTES", 60),
    llm_enabled=_get_env_bool("LLM_ENABLED", True),
    scoring_enabled=_get_env_bool("SCORING_ENABLED", True),
    job_description=_get_env("JOB_DESCRIPTION", DEFAULT_JOB_DESCRIPTION) or DEFAULT_JOB_DESCRIPTION,
    default_highlights=_get_env_list(
        "DEFAULT_HIGHLIGHTS",
        ["Professional Experience", "Technical Skills", "Education", "Achievements", "Key Strengths"],
    ),
    default_keywords=_get_env_list(
        "DEFAULT_KEYWORDS",
        ["Key Experience", "Technical Skills", "Education", "Achievements", "Core Competencies"],
    ),
    replicate_image_model=_get_env(
        "REPLICATE_IMAGE_MODEL",
        "stability-ai/sdxl:c221b2b8ef527988fb59bf24a8b97c4561f1c671f73bd389f866bfb27c061316",
    )
    or "",
    replicate_video_model=_get_env(
        "REPLICATE_VIDEO_MODEL",
        "stability-ai/stable-video-diffusion:3f0457e4619daac51203dedb472816fd4af51f3149fa7a9e0b5ffcf1b8172438",
    )
    or "",
    replicate_alt_video_model=_get_env(
        "REPLICATE_ALT_VIDEO_MODEL",
        "anotherjesse/zeroscope-v2-xl:9f747673945c62801b13b84701c783929c0ee784e4748ec062204894dda1a351",
    )
    or "",
    tts_model=_get_env("TTS_MODEL", "tts-1") or "tts-1",
    tts_voice=_get_env("TTS_VOICE", "alloy") or "alloy",
)

if settings.max_upload_bytes <= 0:
    raise RuntimeError("MAX_UPLOAD_BYTES must be a positive integer.")

if len(settings.default_highlights) < 1 or len(settings.default_keywords) < 1:
    raise RuntimeError("DEFAULT_HIGHLIGHTS and DEFAULT_KEYWORDS must not be empty.")
