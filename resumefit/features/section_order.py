from __future__ import annotations

from typing import Iterable

from resumefit.core.config.scoring import get_scoring_value
from resumefit.schemas.candidate import CandidateType
from resumefit.schemas.suggestions import SectionOrderValidation, SectionOrderViolation


def recommended_order(candidate_type: CandidateType) -> tuple[str, ...]:
    order = get_scoring_value(f"section_order.recommended.{candidate_type}")
    if not order:
        raise RuntimeError(f"Missing recommended section order for '{candidate_type}' in scoring config.")
    return tuple(str(name) for name in order)


def validate_section_order(
    present_sections: Iterable[str],
    candidate_type: CandidateType,
) -> SectionOrderValidation:
    canonical = recommended_order(candidate_type)
    known: list[str] = []
    for name in present_sections:
        key = str(name).strip().lower()
        if key in canonical and key not in known:
            known.append(key)

    if len(known) < 2:
        return SectionOrderValidation(is_correct_order=True, recommended_order=canonical)

    expected_positions = {name: index for index, name in enumerate(item for item in canonical if item in known)}
    violations = [
        SectionOrderViolation(
            section=name,
            expected_position=expected_positions[name],
            actual_position=actual,
            description=(
                f'"{name}" appears at position {actual + 1} but should be at position '
                f"{expected_positions[name] + 1} for {candidate_type} candidates"
            ),
        )
        for actual, name in enumerate(known)
        if expected_positions[name] != actual
    ]
    return SectionOrderValidation(
        is_correct_order=not violations,
        violations=tuple(violations),
        recommended_order=canonical,
    )
