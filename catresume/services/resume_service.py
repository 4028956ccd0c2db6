from __future__ import annotations

import logging
import time
from pathlib import Path

from catresume.core.config import settings
from catresume.parsing.parse import extract_pdf_text
from catresume.schemas.resume import MediaMode, ResumeAnalysisResponse, ScoreResult
from catresume.services.audio import generate_cat_audio
from catresume.services.highlights import extract_relevant_keywords, get_resume_highlights
from catresume.services.media import generate_cat_image, generate_cat_video
from catresume.services.scoring import score_resume
from catresume.services.summarizer import summarize_resume

logger = logging.getLogger(__name__)


async def analyze_resume_text(
    resume_text: str,
    *,
    media: MediaMode = "image",
    job_description: str = settings.job_description,
) -> ResumeAnalysisResponse:
    """Run every generation stage in order. Each stage substitutes its own fallback on failure."""
    started = time.perf_counter()

    summary = await summarize_resume(resume_text)
    highlights = await get_resume_highlights(resume_text)
    keywords = await extract_relevant_keywords(resume_text, job_description)
    if settings.scoring_enabled:
        result = await score_resume(resume_text, job_description)
    else:
        result = ScoreResult.unevaluated()

    image_url: str | None = None
    video_url: str | None = None
    if media == "video":
        video_url = await generate_cat_video(summary, highlights)
    else:
        image_url = await generate_cat_image(summary, keywords)

    audio_url = await generate_cat_audio(summary, highlights, result.score, result.justification)

    logger.info(
        "resume_processed media=%s score=%s latency_ms=%s",
        media,
        result.score,
        int((time.perf_counter() - started) * 1000),
    )
    return ResumeAnalysisResponse(
        summary=summary,
        highlights=highlights,
        keywords=keywords,
        image_url=image_url,
        audio_url=audio_url,
        video_url=video_url,
        score=result.score,
        justification=result.justification,
    )


async def process_resume(file_path: str | Path, *, media: MediaMode = "image") -> ResumeAnalysisResponse:
    resume_text = extract_pdf_text(file_path)
    logger.info("resume_text_extracted chars=%s", len(resume_text))
    return await analyze_resume_text(resume_text, media=media)
