from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .qualifications import RequirementStrength

Importance = Literal["high", "medium", "low"]
MatchType = Literal["exact", "fuzzy", "semantic", "none"]
ResumeSectionName = Literal["summary", "skills", "experience", "education", "projects", "certifications", "other"]
PlacementLocation = Literal[
    "skills_section",
    "summary",
    "experience_bullet",
    "experience_paragraph",
    "education",
    "projects",
    "certifications",
    "other",
]


class KeywordSpec(BaseModel):
    """One keyword extracted from the job description, before matching."""

    model_config = ConfigDict(frozen=True)

    keyword: str = Field(min_length=1)
    category: str = "technical"
    importance: Importance = "medium"
    requirement: RequirementStrength = "required"
    aliases: tuple[str, ...] = ()

    @field_validator("keyword")
    @classmethod
    def _strip_keyword(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("keyword must not be blank")
        return stripped

    @field_validator("importance", "requirement", mode="before")
    @classmethod
    def _lower_enum(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value


class KeywordRecord(KeywordSpec):
    found: bool = False
    match_type: MatchType = "none"
    placement: tuple[ResumeSectionName, ...] = ()
    best_placement: PlacementLocation | None = None
    matched_text: str | None = None

    @model_validator(mode="after")
    def _validate_match_consistency(self) -> "KeywordRecord":
        if not self.found and (self.match_type != "none" or self.placement or self.best_placement):
            raise ValueError("missing keywords must have match_type 'none' and no placement")
        if self.found and self.match_type == "none":
            raise ValueError("found keywords must carry a match_type")
        return self


class KeywordMatchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    records: tuple[KeywordRecord, ...] = ()
    coverage: float = Field(ge=0.0, le=100.0)

    @property
    def matched(self) -> list[str]:
        return [record.keyword for record in self.records if record.found]

    @property
    def missing(self) -> list[str]:
        return [record.keyword for record in self.records if not record.found]
