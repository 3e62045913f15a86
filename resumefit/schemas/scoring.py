from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .candidate import CandidateTypeResult
from .suggestions import GapProcessingResult

ComponentName = Literal["keywords", "qualification_fit", "content_quality", "sections", "format"]
COMPONENT_NAMES: tuple[ComponentName, ...] = (
    "keywords",
    "qualification_fit",
    "content_quality",
    "sections",
    "format",
)
ScoreTier = Literal["excellent", "strong", "moderate", "weak"]
ActionPriority = Literal["critical", "high", "medium", "low"]
ActionCategory = Literal["keywords", "qualifications", "content", "sections", "format"]

WEIGHT_SUM_TOLERANCE = 1e-6


class ComponentWeights(BaseModel):
    model_config = ConfigDict(frozen=True)

    keywords: float = Field(ge=0.0, le=1.0)
    qualification_fit: float = Field(ge=0.0, le=1.0)
    content_quality: float = Field(ge=0.0, le=1.0)
    sections: float = Field(ge=0.0, le=1.0)
    format: float = Field(ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _validate_sum(self) -> "ComponentWeights":
        total = self.total()
        if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
            raise ValueError(f"component weights must sum to 1.0, got {total:.8f}")
        return self

    def total(self) -> float:
        return self.keywords + self.qualification_fit + self.content_quality + self.sections + self.format

    def as_dict(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in COMPONENT_NAMES}


class ComponentScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    weight: float = Field(ge=0.0, le=1.0)
    weighted: float = Field(ge=0.0, le=100.0)
    details: dict[str, Any] = Field(default_factory=dict)


class ActionItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    priority: ActionPriority
    category: ActionCategory
    message: str
    potential_impact: int = Field(ge=0)


class ScoreBreakdown(BaseModel):
    """Terminal output of one scoring run."""

    model_config = ConfigDict(frozen=True)

    overall: int = Field(ge=0, le=100)
    tier: ScoreTier
    components: dict[ComponentName, ComponentScore]
    weights: ComponentWeights
    candidate_type: CandidateTypeResult
    detected_role: str
    detected_seniority: str
    keyword_coverage: float = Field(ge=0.0, le=100.0)
    missing_keywords: tuple[str, ...] = ()
    keyword_gaps: GapProcessingResult = Field(default_factory=GapProcessingResult)
    qualification_gaps: tuple[str, ...] = ()
    quantification_density: float = Field(default=0.0, ge=0.0, le=100.0)
    total_bullets: int = Field(default=0, ge=0)
    action_items: tuple[ActionItem, ...] = Field(default=(), max_length=5)
    algorithm_version: str

    def component_score(self, name: ComponentName) -> int:
        return self.components[name].score
