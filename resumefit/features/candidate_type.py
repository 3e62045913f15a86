from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from resumefit.schemas.candidate import (
    CandidateType,
    CandidateTypeInput,
    CandidateTypeResult,
    DetectionSource,
    ExperienceLevel,
)

logger = logging.getLogger(__name__)

CAREER_CHANGE_GOAL = "switching-careers"


@dataclass(frozen=True)
class CandidateTypeRule:
    rule_id: str
    guard: Callable[[CandidateTypeInput], bool]
    candidate_type: CandidateType
    confidence: float
    detected_from: DetectionSource


def _roles(signals: CandidateTypeInput) -> int:
    return signals.resume_role_count or 0


def _years(signals: CandidateTypeInput) -> float:
    return signals.total_experience_years or 0.0


def _is_career_change_goal(signals: CandidateTypeInput) -> bool:
    return (signals.career_goal or "").strip().lower() == CAREER_CHANGE_GOAL


# Evaluated top to bottom; the first guard that passes decides the result.
CANDIDATE_TYPE_RULES: tuple[CandidateTypeRule, ...] = (
    CandidateTypeRule(
        rule_id="explicit_coop",
        guard=lambda s: s.job_type == "coop",
        candidate_type="coop",
        confidence=1.0,
        detected_from="user_selection",
    ),
    CandidateTypeRule(
        rule_id="fulltime_switching_careers",
        guard=lambda s: s.job_type == "fulltime" and _is_career_change_goal(s),
        candidate_type="career_changer",
        confidence=0.95,
        detected_from="onboarding",
    ),
    CandidateTypeRule(
        rule_id="fulltime_active_education_few_roles",
        guard=lambda s: s.job_type == "fulltime" and bool(s.has_active_education) and _roles(s) < 3,
        candidate_type="career_changer",
        confidence=0.70,
        detected_from="resume_analysis",
    ),
    CandidateTypeRule(
        rule_id="explicit_fulltime",
        guard=lambda s: s.job_type == "fulltime",
        candidate_type="fulltime",
        confidence=0.90,
        detected_from="user_selection",
    ),
    CandidateTypeRule(
        rule_id="inferred_coop",
        guard=lambda s: s.job_type is None and bool(s.has_active_education) and _roles(s) < 2,
        candidate_type="coop",
        confidence=0.80,
        detected_from="resume_analysis",
    ),
    CandidateTypeRule(
        rule_id="inferred_fulltime",
        guard=lambda s: s.job_type is None and _roles(s) >= 3 and _years(s) >= 3,
        candidate_type="fulltime",
        confidence=0.85,
        detected_from="resume_analysis",
    ),
)

DEFAULT_RULE = CandidateTypeRule(
    rule_id="default",
    guard=lambda s: True,
    candidate_type="fulltime",
    confidence=0.50,
    detected_from="default",
)

_EXPERIENCE_LEVELS: dict[str, ExperienceLevel] = {
    "coop": "student",
    "career_changer": "career_changer",
    "fulltime": "experienced",
}


def detect_candidate_type(signals: CandidateTypeInput | Mapping[str, Any] | None = None) -> CandidateTypeResult:
    if signals is None:
        signals = CandidateTypeInput()
    elif not isinstance(signals, CandidateTypeInput):
        signals = CandidateTypeInput.model_validate(signals)

    rule = next((item for item in CANDIDATE_TYPE_RULES if item.guard(signals)), DEFAULT_RULE)
    logger.debug(
        "candidate_type_detected rule=%s type=%s confidence=%s",
        rule.rule_id,
        rule.candidate_type,
        rule.confidence,
    )
    return CandidateTypeResult(
        candidate_type=rule.candidate_type,
        confidence=rule.confidence,
        detected_from=rule.detected_from,
        rule=rule.rule_id,
    )


def experience_level_for(candidate_type: CandidateType) -> ExperienceLevel:
    return _EXPERIENCE_LEVELS[candidate_type]
