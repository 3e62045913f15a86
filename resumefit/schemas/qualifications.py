from __future__ import annotations

import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from resumefit.core.config.scoring import get_scoring_value

DegreeLevel = Literal["high_school", "associate", "bachelor", "master", "phd"]
RequirementKind = Literal["degree", "experience_years", "certification"]
RequirementStrength = Literal["required", "preferred"]

_DEGREE_LEVELS: tuple[str, ...] = ("high_school", "associate", "bachelor", "master", "phd")


def normalize_degree_level(value: Any) -> Any:
    """Map common spellings ("Bachelor's", "B.S.", "Ph.D.", "Master of Science") to a DegreeLevel."""
    if not isinstance(value, str):
        return value
    text = " ".join(value.strip().lower().replace("_", " ").split())
    if text.replace(" ", "_") in _DEGREE_LEVELS:
        return text.replace(" ", "_")

    aliases: dict[str, str] = get_scoring_value("qualification_fit.degree_level_aliases", {}) or {}
    candidates = [text, text.removesuffix(" degree")]
    words = text.split()
    if words:
        candidates.append(words[0])
    if len(words) >= 2:
        candidates.append(" ".join(words[:2]))
    for candidate in candidates:
        level = aliases.get(candidate)
        if level:
            return level
    return value


def _clamp_years(value: float | None) -> float | None:
    if value is None:
        return None
    number = float(value)
    if math.isnan(number) or number < 0:
        return 0.0
    return number


class JobRequirement(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: RequirementKind
    strength: RequirementStrength = "required"
    degree_level: DegreeLevel | None = None
    degree_fields: tuple[str, ...] = ()
    min_years: float | None = None
    certification: str | None = None

    @field_validator("degree_level", mode="before")
    @classmethod
    def _normalize_degree_level(cls, value: Any) -> Any:
        return normalize_degree_level(value)

    @field_validator("min_years")
    @classmethod
    def _clamp_min_years(cls, value: float | None) -> float | None:
        return _clamp_years(value)

    @field_validator("degree_fields")
    @classmethod
    def _strip_fields(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(item.strip() for item in value if item and item.strip())

    @model_validator(mode="after")
    def _validate_kind_payload(self) -> "JobRequirement":
        if self.kind == "degree" and self.degree_level is None:
            raise ValueError("degree requirements must set degree_level")
        if self.kind == "experience_years" and self.min_years is None:
            raise ValueError("experience_years requirements must set min_years")
        if self.kind == "certification" and not (self.certification or "").strip():
            raise ValueError("certification requirements must set certification")
        return self


class HeldDegree(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: DegreeLevel
    field: str | None = None

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> Any:
        return normalize_degree_level(value)


class CandidateQualifications(BaseModel):
    model_config = ConfigDict(frozen=True)

    degree: HeldDegree | None = None
    total_experience_years: float = 0.0
    certifications: tuple[str, ...] = ()

    @field_validator("total_experience_years", mode="before")
    @classmethod
    def _clamp_experience(cls, value: Any) -> Any:
        if value is None:
            return 0.0
        if isinstance(value, (int, float)):
            return _clamp_years(value)
        return value


class QualificationFitResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    degree_score: int = Field(ge=0, le=100)
    experience_score: int = Field(ge=0, le=100)
    certification_score: int = Field(ge=0, le=100)
    degree_met: bool = True
    experience_met: bool = True
    degree_note: str | None = None
    experience_note: str | None = None
    certifications_met: tuple[str, ...] = ()
    certifications_missing: tuple[str, ...] = ()
    gap_notes: tuple[str, ...] = ()
