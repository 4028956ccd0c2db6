from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

MediaMode = Literal["image", "video"]

DEFAULT_SCORE = 3
DEFAULT_JUSTIFICATION = "Could not evaluate resume; defaulting to average fit."
UNEVALUATED_JUSTIFICATION = "Unable to evaluate"


class ScoreResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=1, le=5)
    justification: str = Field(min_length=1, max_length=2000)

    @field_validator("score", mode="before")
    @classmethod
    def _reject_non_integral(cls, value):
        # Accept 4 and "4", reject 4.5, True and "four".
        if isinstance(value, bool):
            raise ValueError("score must be an integer")
        if isinstance(value, float) and not value.is_integer():
            raise ValueError("score must be an integer")
        return value

    @field_validator("justification")
    @classmethod
    def _strip_justification(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("justification must not be blank")
        return stripped

    @classmethod
    def default(cls) -> "ScoreResult":
        return cls(score=DEFAULT_SCORE, justification=DEFAULT_JUSTIFICATION)

    @classmethod
    def unevaluated(cls) -> "ScoreResult":
        return cls(score=DEFAULT_SCORE, justification=UNEVALUATED_JUSTIFICATION)


class ResumeAnalysisResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    summary: str
    highlights: list[str] = Field(min_length=5, max_length=5)
    keywords: list[str] = Field(default_factory=list)
    image_url: str | None = Field(default=None, alias="imageUrl")
    audio_url: str = Field(alias="audioUrl")
    video_url: str | None = Field(default=None, alias="videoUrl")
    score: int = Field(ge=1, le=5)
    justification: str


class ErrorResponse(BaseModel):
    error: str
    details: str = ""
