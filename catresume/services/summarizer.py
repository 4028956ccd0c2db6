from __future__ import annotations

import logging

from catresume.services.llm import text_completion

logger = logging.getLogger(__name__)

SUMMARY_FALLBACK = "Failed to summarize resume due to an error. Please try again later."

SUMMARY_SYSTEM_PROMPT = (
    "You are an expert resume analyzer. Extract and summarize the most important information "
    "from this resume, focusing on skills, experience, education, and achievements. Format your "
    "response in a way that would be engaging when converted to a fun cat-themed video."
)


async def summarize_resume(resume_text: str, *, fallback: str = SUMMARY_FALLBACK) -> str:
    try:
        summary = await text_completion(
            system_prompt=SUMMARY_SYSTEM_PROMPT,
            user_prompt=f"Here is a resume:\n{resume_text}",
            max_output_tokens=1000,
            stage="summary",
        )
    except Exception as exc:
        logger.warning("resume_summary_failed: %s", exc)
        return fallback
    return summary
