from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from catresume.core.config import settings
from catresume.schemas.resume import ScoreResult
from catresume.services.llm import LLMError, text_completion

logger = logging.getLogger(__name__)

SCORE_SYSTEM_PROMPT = (
    "You are an experienced technical recruiter. Rate how well a resume fits a job description "
    "on a scale from 1 (poor fit) to 5 (excellent fit). "
    'Respond with a JSON object exactly of the form {"score": <integer 1-5>, "justification": "<one or two sentences>"} '
    "and nothing else."
)


def parse_score_response(raw: str) -> ScoreResult:
    """Validate a model answer; raises ``LLMError`` on anything but a well-formed score object."""
    text = (raw or "").strip()
    start, end = text.find("{"), text.rfind("}")
    if start == -1 or end <= start:
        raise LLMError("Score response is not a JSON object.", code="invalid_schema")
    try:
        payload = json.loads(text[start : end + 1])
    except ValueError as exc:
        raise LLMError("Score response is not valid JSON.", code="invalid_schema") from exc
    if not isinstance(payload, dict):
        raise LLMError("Score response is not a JSON object.", code="invalid_schema")
    try:
        return ScoreResult.model_validate(
            {"score": payload.get("score"), "justification": payload.get("justification")}
        )
    except ValidationError as exc:
        raise LLMError(f"Score response failed validation: {exc.error_count()} error(s)", code="invalid_schema") from exc


async def score_resume(resume_text: str, job_description: str = settings.job_description) -> ScoreResult:
    user_prompt = (
        f"Job description:\n{job_description}\n\n"
        f"Resume:\n{resume_text}\n\n"
        "Return the JSON object now."
    )
    try:
        raw = await text_completion(
            system_prompt=SCORE_SYSTEM_PROMPT,
            user_prompt=user_prompt,
            max_output_tokens=300,
            json_mode=True,
            stage="score",
        )
        result = parse_score_response(raw)
    except Exception as exc:
        logger.warning("resume_score_failed: %s", exc)
        return ScoreResult.default()

    logger.info("resume_scored score=%s", result.score)
    return result
