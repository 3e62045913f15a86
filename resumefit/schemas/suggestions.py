from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .qualifications import RequirementStrength
from .resume import SectionName

SuggestionMode = Literal["Transformation", "Improvement", "Optimization", "Validation"]
StructuralCategory = Literal["section_presence", "section_order", "section_heading"]
StructuralPriority = Literal["critical", "warning", "suggestion"]
GapAddressability = Literal["terminology", "potential", "unfixable"]
GapPriority = Literal["critical", "high", "medium", "low"]


class PriorityBoosts(BaseModel):
    model_config = ConfigDict(frozen=True)

    keyword: int = Field(ge=0, le=2)
    quantification: int = Field(ge=-1, le=2)
    experience: int = Field(ge=-1, le=1)


class CalibrationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: SuggestionMode
    target_count_range: tuple[int, int]
    suggestions_target_count: int = Field(ge=0)
    priority_boosts: PriorityBoosts
    focus_areas: tuple[str, ...]
    reasoning: str

    @field_validator("focus_areas")
    @classmethod
    def _validate_focus_areas(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if len(value) != 4:
            raise ValueError("focus_areas must contain exactly 4 tags")
        return value


class StructuralSuggestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    category: StructuralCategory
    priority: StructuralPriority
    sections: tuple[str, ...] = ()
    message: str
    current_state: str
    recommended_action: str


class SectionOrderViolation(BaseModel):
    model_config = ConfigDict(frozen=True)

    section: str
    expected_position: int = Field(ge=0)
    actual_position: int = Field(ge=0)
    description: str


class SectionOrderValidation(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_correct_order: bool
    violations: tuple[SectionOrderViolation, ...] = ()
    recommended_order: tuple[str, ...] = ()


class ProcessedGap(BaseModel):
    """A missing keyword classified by whether the résumé can honestly close it."""

    model_config = ConfigDict(frozen=True)

    keyword: str
    category: str
    priority: GapPriority
    requirement: RequirementStrength
    potential_impact: int = Field(ge=0)
    addressability: GapAddressability
    reason: str
    evidence: str | None = None
    target_sections: tuple[SectionName, ...] = ()
    instruction: str


class GapSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_gaps: int = Field(default=0, ge=0)
    terminology_fixes: int = Field(default=0, ge=0)
    potential_additions: int = Field(default=0, ge=0)
    unfixable_gaps: int = Field(default=0, ge=0)
    total_potential_impact: int = Field(default=0, ge=0)


class GapProcessingResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    processed_gaps: tuple[ProcessedGap, ...] = ()
    summary: GapSummary = Field(default_factory=GapSummary)


class SectionGaps(BaseModel):
    model_config = ConfigDict(frozen=True)

    terminology_fixes: tuple[ProcessedGap, ...] = ()
    potential_additions: tuple[ProcessedGap, ...] = ()
    opportunities: tuple[ProcessedGap, ...] = ()
    cannot_fix: tuple[ProcessedGap, ...] = ()
