from __future__ import annotations

import logging
from functools import reduce
from typing import Mapping

from resumefit.core.config.scoring import get_scoring_value
from resumefit.schemas.candidate import CandidateType
from resumefit.schemas.scoring import COMPONENT_NAMES, ComponentWeights

logger = logging.getLogger(__name__)


def _as_floats(raw: Mapping | None) -> dict[str, float]:
    return {str(key): float(value) for key, value in (raw or {}).items()}


def _apply_delta(weights: dict[str, float], delta: Mapping[str, float]) -> dict[str, float]:
    return {name: weights.get(name, 0.0) + float(delta.get(name, 0.0)) for name in COMPONENT_NAMES}


def _normalize(weights: dict[str, float]) -> dict[str, float]:
    clamped = {name: max(0.0, weights.get(name, 0.0)) for name in COMPONENT_NAMES}
    total = sum(clamped.values())
    if total <= 0:
        share = 1.0 / len(COMPONENT_NAMES)
        return {name: share for name in COMPONENT_NAMES}
    return {name: value / total for name, value in clamped.items()}


def base_profile(candidate_type: CandidateType) -> dict[str, float]:
    profile = get_scoring_value(f"weights.base_profiles.{candidate_type}")
    if not profile:
        raise RuntimeError(f"Missing base weight profile for candidate type '{candidate_type}' in scoring config.")
    return _as_floats(profile)


def weight_deltas(candidate_type: CandidateType, role: str | None, seniority: str | None) -> list[dict[str, float]]:
    deltas: list[dict[str, float]] = []
    role_delta = _as_floats(get_scoring_value(f"weights.role_adjustments.{role}")) if role else {}
    if role_delta:
        deltas.append(role_delta)

    seniority_types = set(get_scoring_value("weights.seniority_adjusted_types", []) or [])
    if seniority and candidate_type in seniority_types:
        seniority_delta = _as_floats(get_scoring_value(f"weights.seniority_adjustments.{seniority}"))
        if seniority_delta:
            deltas.append(seniority_delta)
    return deltas


def resolve_component_weights(
    candidate_type: CandidateType,
    role: str | None = None,
    seniority: str | None = None,
) -> ComponentWeights:
    """Base profile + role delta + seniority delta, negatives clamped, renormalized to 1.0."""
    combined = reduce(_apply_delta, weight_deltas(candidate_type, role, seniority), base_profile(candidate_type))
    resolved = _normalize(combined)
    logger.debug(
        "weights_resolved candidate_type=%s role=%s seniority=%s weights=%s",
        candidate_type,
        role,
        seniority,
        {name: round(value, 4) for name, value in resolved.items()},
    )
    return ComponentWeights(**resolved)
