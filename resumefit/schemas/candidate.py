from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

CandidateType = Literal["coop", "fulltime", "career_changer"]
JobType = Literal["coop", "fulltime"]
DetectionSource = Literal["user_selection", "onboarding", "resume_analysis", "default"]
ExperienceLevel = Literal["student", "career_changer", "experienced"]


class CandidateTypeInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    job_type: JobType | None = None
    career_goal: str | None = None
    resume_role_count: int | None = None
    has_active_education: bool | None = None
    total_experience_years: float | None = None

    @field_validator("resume_role_count", "total_experience_years", mode="before")
    @classmethod
    def _clamp_negative(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value < 0:
            return 0
        return value


class CandidateTypeResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    candidate_type: CandidateType
    confidence: float = Field(ge=0.0, le=1.0)
    detected_from: DetectionSource
    rule: str
