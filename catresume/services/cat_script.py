from __future__ import annotations

import re
from typing import Literal, Sequence

from catresume.services.highlights import HIGHLIGHT_COUNT, normalize_count

Tone = Literal["excited", "encouraging", "concerned"]

PROMPT_PLACEHOLDER = "Professional Skill"
GENERIC_HIGHLIGHTS = ("Experience", "Skills", "Education", "Achievements", "Strengths")

NEGATIVE_PROMPT = (
    "poor quality, blurry, distorted, disfigured, bad anatomy, text, watermark, signature, bad proportions"
)

_SENTENCE_SPLIT = re.compile(r"[.!?]+")

_ORDINALS = (
    ("First", "That's quite remarkable, isn't it? Meow!"),
    ("Second", "Very impressive skills indeed!"),
    ("Third", "Absolutely purrfect qualifications!"),
    ("Fourth", "This candidate really stands out!"),
    ("And finally", "Simply amazing!"),
)

_CLOSINGS: dict[Tone, str] = {
    "excited": (
        "I give this resume {score} out of 5 paws! {justification} "
        "Any company would be lucky to have this candidate. Meow meow!"
    ),
    "encouraging": (
        "I give this resume {score} out of 5 paws. {justification} "
        "With a little more grooming, this candidate could be the cat's whiskers! Meow!"
    ),
    "concerned": (
        "Hmm, I can only give this resume {score} out of 5 paws. {justification} "
        "This candidate has some catching up to do before pouncing on this role. Mrrow."
    ),
}


def select_tone(score: int) -> Tone:
    if score >= 4:
        return "excited"
    if score <= 2:
        return "concerned"
    return "encouraging"


def prepare_highlights(highlights: Sequence[str] | None, summary: str | None = None) -> list[str]:
    """Exactly five prompt-ready highlights, derived from the summary when none are given."""
    items = [h for h in (highlights or []) if isinstance(h, str) and h.strip()]
    if not items:
        sentences = [s.strip() for s in _SENTENCE_SPLIT.split(summary or "") if len(s.strip()) > 10]
        sentences = sentences[:HIGHLIGHT_COUNT]
        items = sentences if len(sentences) >= 3 else list(GENERIC_HIGHLIGHTS)
    return normalize_count(items, HIGHLIGHT_COUNT, PROMPT_PLACEHOLDER)


def build_cat_script(
    highlights: Sequence[str],
    score: int,
    justification: str,
    summary: str | None = None,
) -> str:
    items = prepare_highlights(highlights, summary)
    tone = select_tone(score)

    lines = [
        "Meow! Hello there, I'm Professor Whiskers, and today I'm reviewing a resume!",
        "Let me share with you the top highlights of this candidate:",
        "",
    ]
    for (ordinal, remark), highlight in zip(_ORDINALS, items):
        lines.append(f"{ordinal}, {highlight}! {remark}")
        lines.append("")
    lines.append(_CLOSINGS[tone].format(score=score, justification=justification.strip()))
    return "\n".join(lines).strip()


def build_image_prompt(highlights: Sequence[str], summary: str | None = None) -> str:
    highlights_text = ", ".join(prepare_highlights(highlights, summary))
    return (
        "A cute professional cat in a business suit presenting a resume on a screen. "
        f"The cat is pointing to a bullet-point list showing: {highlights_text}. "
        "Corporate office setting, colorful, detailed, professional lighting."
    )


def build_reference_image_prompt() -> str:
    return (
        "A cute orange tabby cat wearing a tiny business suit and glasses, sitting at a desk "
        "in a bright modern office, facing the camera, cinematic lighting, high detail."
    )


def build_video_prompt(highlights: Sequence[str], summary: str | None = None) -> str:
    items = prepare_highlights(highlights, summary)
    overlay = " | ".join(f'"{item}"' for item in items)
    return (
        "The professional cat gestures enthusiastically at a presentation screen while text "
        f"overlays appear one after another: {overlay}. Smooth camera motion, playful mood."
    )


def build_simple_video_prompt(highlights: Sequence[str], summary: str | None = None) -> str:
    items = prepare_highlights(highlights, summary)
    return (
        "A cute cat in a business suit giving a presentation about a job candidate "
        f"skilled in {items[0]} and {items[1]}, office background, cheerful."
    )


def build_static_prompt(highlights: Sequence[str], summary: str | None = None) -> str:
    items = prepare_highlights(highlights, summary)
    return (
        "A poster of a cute cat in a business suit standing next to a whiteboard that lists "
        f"five resume highlights: {'; '.join(items)}. Flat illustration, clean layout, bright colors."
    )
