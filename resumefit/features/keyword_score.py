from __future__ import annotations

from typing import Iterable

from pydantic import BaseModel, Field

from resumefit.core.config.scoring import get_scoring_value
from resumefit.schemas.keywords import KeywordRecord


class KeywordScoreResult(BaseModel):
    score: int = Field(ge=0, le=100)
    required_score: float
    preferred_bonus: float
    penalty_multiplier: float
    matched_required: list[str] = Field(default_factory=list)
    matched_preferred: list[str] = Field(default_factory=list)
    semantic_required: list[str] = Field(default_factory=list)
    missing_required: list[str] = Field(default_factory=list)
    missing_preferred: list[str] = Field(default_factory=list)


def _weight_table(path: str) -> dict[str, float]:
    return {str(key): float(value) for key, value in (get_scoring_value(path, {}) or {}).items()}


def _record_credit(
    record: KeywordRecord,
    importance_weights: dict[str, float],
    match_weights: dict[str, float],
    placement_weights: dict[str, float],
) -> float:
    importance = importance_weights.get(record.importance, importance_weights.get("medium", 0.6))
    match_weight = match_weights.get(record.match_type, 0.0)
    placement_weight = placement_weights.get(record.best_placement or "other", placement_weights.get("other", 0.65))
    return importance * match_weight * placement_weight


def calculate_keyword_score(records: Iterable[KeywordRecord]) -> KeywordScoreResult:
    importance_weights = _weight_table("keywords.importance_weights")
    match_weights = _weight_table("keywords.match_type_weights")
    placement_weights = _weight_table("keywords.placement_weights")
    missing_penalty = float(get_scoring_value("keywords.missing_required_penalty", 0.12))
    min_multiplier = float(get_scoring_value("keywords.min_penalty_multiplier", 0.30))
    bonus_cap = float(get_scoring_value("keywords.preferred_bonus_cap", 0.25))

    required_achieved = required_possible = 0.0
    preferred_achieved = preferred_possible = 0.0
    result = KeywordScoreResult(score=0, required_score=0.0, preferred_bonus=0.0, penalty_multiplier=1.0)

    for record in records:
        importance = importance_weights.get(record.importance, importance_weights.get("medium", 0.6))
        credit = _record_credit(record, importance_weights, match_weights, placement_weights) if record.found else 0.0
        if record.requirement == "required":
            required_possible += importance
            required_achieved += credit
            if record.found:
                result.matched_required.append(record.keyword)
                if record.match_type == "semantic":
                    result.semantic_required.append(record.keyword)
            else:
                result.missing_required.append(record.keyword)
        else:
            preferred_possible += importance
            preferred_achieved += credit
            if record.found:
                result.matched_preferred.append(record.keyword)
            else:
                result.missing_preferred.append(record.keyword)

    required_score = required_achieved / required_possible if required_possible > 0 else 1.0
    penalty_multiplier = max(min_multiplier, 1.0 - len(result.missing_required) * missing_penalty)
    preferred_ratio = preferred_achieved / preferred_possible if preferred_possible > 0 else 0.0
    preferred_bonus = preferred_ratio * bonus_cap
    final_score = min(1.0, required_score * penalty_multiplier + preferred_bonus)

    result.score = round(final_score * 100)
    result.required_score = round(required_score, 2)
    result.preferred_bonus = round(preferred_bonus, 2)
    result.penalty_multiplier = round(penalty_multiplier, 2)
    return result


def keyword_action_items(result: KeywordScoreResult) -> list[tuple[str, str]]:
    max_required = int(get_scoring_value("keywords.max_missing_required_listed", 4))
    max_semantic = int(get_scoring_value("keywords.max_semantic_listed", 2))
    max_preferred = int(get_scoring_value("keywords.max_missing_preferred_listed", 3))
    preferred_threshold = int(get_scoring_value("keywords.missing_preferred_threshold", 3))

    items: list[tuple[str, str]] = []
    if result.missing_required:
        items.append(("critical", f"Add missing REQUIRED keywords: {', '.join(result.missing_required[:max_required])}"))
    if result.semantic_required:
        items.append(
            ("high", f"Use exact terminology for required skills: {', '.join(result.semantic_required[:max_semantic])}")
        )
    if len(result.missing_preferred) > preferred_threshold:
        items.append(
            ("medium", f"Consider adding preferred keywords: {', '.join(result.missing_preferred[:max_preferred])}")
        )
    return items
