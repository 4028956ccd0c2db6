"""Highlight and keyword extraction from unreliable LLM output.

Models asked for "a JSON array of 5 strings" answer with bare arrays, arrays
wrapped in objects, objects keyed by index or by phrase, markdown lists or
plain prose. ``coerce_highlights`` turns any of those into exactly ``count``
non-empty strings and never raises.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Sequence

from catresume.core.config import settings
from catresume.services.llm import text_completion

logger = logging.getLogger(__name__)

HIGHLIGHT_COUNT = 5
PLACEHOLDER_HIGHLIGHT = "Resume highlight"
_MIN_HEURISTIC_MATCHES = 3
_CHUNK_WORDS = 5

_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")
_NUMBERED_PATTERN = re.compile(r"\d+\.\s*([^\n]+)")
_BULLET_PATTERN = re.compile(r"[•\-\*]\s*([^\n]+)")
_NUMERIC_KEY_PATTERN = re.compile(r"^\s*\d+\s*$")
_PREAMBLE_PREFIXES = ("Here", "Top")

HIGHLIGHTS_SYSTEM_PROMPT = (
    "You extract resume highlights for on-screen text overlays in a funny cat-themed video. "
    "Answer with a JSON array of strings and nothing else."
)

KEYWORDS_SYSTEM_PROMPT = (
    "You are a recruiter matching a resume against a job description. "
    "Answer with a JSON array of strings and nothing else."
)


def _flatten(items: Sequence[Any]) -> list[Any]:
    flat: list[Any] = []
    for item in items:
        if isinstance(item, (list, tuple)):
            flat.extend(_flatten(item))
        else:
            flat.append(item)
    return flat


def _item_text(item: Any) -> str:
    if isinstance(item, str):
        return item.strip()
    if isinstance(item, dict):
        for value in item.values():
            if isinstance(value, str) and value.strip():
                return value.strip()
        return ""
    # Only strings and numbers carry highlight text.
    if isinstance(item, bool) or not isinstance(item, (int, float)):
        return ""
    return str(item).strip()


def _from_object(payload: dict[str, Any]) -> list[Any]:
    highlights = payload.get("highlights")
    if isinstance(highlights, list):
        return highlights

    flattened: list[Any] = []
    for value in payload.values():
        if isinstance(value, list):
            flattened.extend(value)
    if flattened:
        return flattened

    keys = [str(key) for key in payload.keys()]
    if keys and all(_NUMERIC_KEY_PATTERN.match(key) for key in keys):
        ordered = sorted(payload.items(), key=lambda kv: int(str(kv[0]).strip()))
        return [value for _key, value in ordered]

    if keys and all(" " in key.strip() for key in keys):
        return keys

    return list(payload.values())


def _from_json(parsed: Any) -> list[Any] | None:
    if isinstance(parsed, list):
        return parsed
    if isinstance(parsed, dict):
        return _from_object(parsed)
    return None


def parse_json_items(text: str) -> list[Any] | None:
    """Return the items of a JSON array (or array-like object) found in ``text``."""
    try:
        items = _from_json(json.loads(text))
    except (ValueError, TypeError):
        items = None
    if items is not None:
        return items

    match = _ARRAY_PATTERN.search(text)
    if not match:
        return None
    try:
        parsed = json.loads(match.group(0))
    except (ValueError, TypeError):
        return None
    return parsed if isinstance(parsed, list) else None


def extract_highlights_from_text(text: str, count: int = HIGHLIGHT_COUNT) -> list[str]:
    matches = [m.strip() for m in _NUMBERED_PATTERN.findall(text)]
    if len(matches) >= _MIN_HEURISTIC_MATCHES:
        return matches

    matches = [m.strip() for m in _BULLET_PATTERN.findall(text)]
    if len(matches) >= _MIN_HEURISTIC_MATCHES:
        return matches

    lines = [line.strip() for line in text.split("\n")]
    lines = [line for line in lines if len(line) > 10 and not line.startswith(_PREAMBLE_PREFIXES)]
    if len(lines) >= _MIN_HEURISTIC_MATCHES:
        return lines

    words = text.split()
    chunks = []
    for index in range(count):
        chunk = words[index * _CHUNK_WORDS : (index + 1) * _CHUNK_WORDS]
        if chunk:
            chunks.append(" ".join(chunk) + "...")
    return chunks


def normalize_count(
    items: Sequence[Any],
    count: int = HIGHLIGHT_COUNT,
    placeholder: str = PLACEHOLDER_HIGHLIGHT,
) -> list[str]:
    cleaned = [text for text in (_item_text(item) for item in _flatten(items)) if text]
    while len(cleaned) < count:
        cleaned.append(placeholder)
    return cleaned[:count]


def coerce_highlights(raw: str | None, count: int = HIGHLIGHT_COUNT) -> list[str]:
    text = (raw or "").strip()
    items = parse_json_items(text) if text else None
    if not items or not any(_item_text(item) for item in _flatten(items)):
        items = extract_highlights_from_text(text, count)
    return normalize_count(items, count)


async def get_resume_highlights(
    resume_text: str,
    *,
    defaults: Sequence[str] = settings.default_highlights,
) -> list[str]:
    user_prompt = (
        f"Here is a resume:\n{resume_text}\n\n"
        f"Please extract the top {HIGHLIGHT_COUNT} most important highlights from this resume. "
        "Focus on key skills, experience, education, or achievements. Format your response as a "
        f"JSON array of {HIGHLIGHT_COUNT} concise strings ONLY.\n\n"
        "IMPORTANT: Your entire response must be a valid JSON array and nothing else. For example:\n"
        '["10 years experience in software development", "Masters in Computer Science", '
        '"Led team of 15 engineers", "Expert in Python and JavaScript", "Increased revenue by 30%"]'
    )
    try:
        raw = await text_completion(
            system_prompt=HIGHLIGHTS_SYSTEM_PROMPT,
            user_prompt=user_prompt,
            max_output_tokens=500,
            stage="highlights",
        )
    except Exception as exc:
        logger.warning("resume_highlights_failed: %s", exc)
        return normalize_count(defaults)

    highlights = coerce_highlights(raw)
    logger.info("resume_highlights_extracted count=%s", len(highlights))
    return highlights


async def extract_relevant_keywords(
    resume_text: str,
    job_description: str = settings.job_description,
    *,
    defaults: Sequence[str] = settings.default_keywords,
) -> list[str]:
    user_prompt = (
        f"Job description:\n{job_description}\n\n"
        f"Resume:\n{resume_text}\n\n"
        f"List the {HIGHLIGHT_COUNT} resume keywords or short phrases most relevant to this job. "
        f"Respond with a JSON array of exactly {HIGHLIGHT_COUNT} strings, each under six words."
    )
    try:
        raw = await text_completion(
            system_prompt=KEYWORDS_SYSTEM_PROMPT,
            user_prompt=user_prompt,
            max_output_tokens=300,
            stage="keywords",
        )
    except Exception as exc:
        logger.warning("resume_keywords_failed: %s", exc)
        return normalize_count(defaults)

    keywords = coerce_highlights(raw)
    logger.info("resume_keywords_extracted count=%s", len(keywords))
    return keywords
