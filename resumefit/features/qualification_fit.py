from __future__ import annotations

import logging
import re
from datetime import date
from typing import Any, Iterable, Literal, Mapping

from resumefit.core.config.scoring import get_scoring_value
from resumefit.normalize.utils import contains_phrase
from resumefit.schemas.qualifications import (
    CandidateQualifications,
    HeldDegree,
    JobRequirement,
    QualificationFitResult,
)

logger = logging.getLogger(__name__)

FieldMatch = Literal["exact", "related", "unrestricted", "none"]

_MONTHS = r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?|Jul(?:y)?|Aug(?:ust)?|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)\.?"
_DATE_RANGE_PATTERN = re.compile(
    rf"(?:{_MONTHS}\s+)?(\d{{4}})\s*(?:-|–|—|to)\s*(?:{_MONTHS}\s+)?(\d{{4}}|present|current|now)",
    re.IGNORECASE,
)
_RELATED_FIELD_PATTERN = re.compile(
    r"\b(?:or\s+)?(?:an?\s+)?(?:other\s+)?(?:closely\s+)?related\s+(?:technical\s+|quantitative\s+)?(?:fields?|disciplines?|areas?)?",
    re.IGNORECASE,
)


def _format_years(value: float) -> str:
    return f"{round(value, 1):g}"


def _degree_levels() -> dict[str, int]:
    return {str(key): int(value) for key, value in (get_scoring_value("qualification_fit.degree_levels", {}) or {}).items()}


def _field_families() -> dict[str, list[str]]:
    raw = get_scoring_value("qualification_fit.degree_field_families", {}) or {}
    return {str(family): [str(alias).lower() for alias in aliases] for family, aliases in raw.items()}


def _families_of(text: str, families: dict[str, list[str]]) -> set[str]:
    lowered = text.lower()
    matched: set[str] = set()
    for family, aliases in families.items():
        if contains_phrase(lowered, family.replace("_", " ")) or any(contains_phrase(lowered, alias) for alias in aliases):
            matched.add(family)
    return matched


def check_field_match(resume_field: str | None, required_fields: Iterable[str]) -> FieldMatch:
    required = [item for item in required_fields if item and item.strip()]
    if not required:
        return "unrestricted"
    if not resume_field or not resume_field.strip():
        return "none"

    families = _field_families()
    marker = str(get_scoring_value("qualification_fit.related_field_marker", "related")).lower()
    held = resume_field.strip().lower()
    held_families = _families_of(held, families)

    allows_related = False
    for requirement in required:
        lowered = requirement.lower()
        if marker in lowered:
            allows_related = True
        core = " ".join(_RELATED_FIELD_PATTERN.sub(" ", lowered).split())
        if core and (core == held or contains_phrase(held, core)):
            return "exact"
        if held_families & _families_of(core or lowered, families):
            return "exact"

    if allows_related and held_families:
        return "related"
    return "none"


def _unmet_degree_score(requirement: JobRequirement, levels_short: int | None, scores: Mapping[str, Any]) -> int:
    if requirement.strength == "preferred":
        if levels_short == 1:
            return int(scores.get("preferred_one_level_below", 75))
        return int(scores.get("preferred_unmet", 50))
    return int(scores.get("unmet", 20))


def _score_degree(requirement: JobRequirement, held: HeldDegree | None) -> tuple[int, bool, str]:
    levels = _degree_levels()
    scores = get_scoring_value("qualification_fit.degree_scores", {}) or {}
    match_score = int(scores.get("match", 100))
    mismatch_score = int(scores.get("field_mismatch", 70))

    required_level = levels.get(requirement.degree_level or "", 0)
    held_level = levels.get(held.level, 0) if held else 0
    label = (requirement.degree_level or "degree").replace("_", " ")
    suffix = " (preferred)" if requirement.strength == "preferred" else ""

    if held is None:
        return _unmet_degree_score(requirement, None, scores), False, f"No degree listed{suffix}"
    if held_level < required_level:
        return (
            _unmet_degree_score(requirement, required_level - held_level, scores),
            False,
            f"Degree level below {label} requirement{suffix}",
        )

    field_match = check_field_match(held.field, requirement.degree_fields)
    if field_match == "exact":
        return match_score, True, "Degree fully matches requirements"
    if field_match == "related":
        return match_score, True, "Degree in related field"
    if field_match == "unrestricted":
        return match_score, True, f"Degree meets {label} requirement"
    return mismatch_score, True, "Degree level met but field differs"


def interpolate_curve(points: list[tuple[float, float]], x: float) -> float:
    if not points:
        return 0.0
    ordered = sorted(points)
    if x <= ordered[0][0]:
        return ordered[0][1]
    for (x0, y0), (x1, y1) in zip(ordered, ordered[1:]):
        if x <= x1:
            if x1 == x0:
                return y1
            return y0 + (y1 - y0) * (x - x0) / (x1 - x0)
    return ordered[-1][1]


def _experience_curve(strength: str) -> list[tuple[float, float]]:
    key = "preferred_experience_curve" if strength == "preferred" else "experience_curve"
    raw = get_scoring_value(f"qualification_fit.{key}") or get_scoring_value("qualification_fit.experience_curve", [])
    return [(float(x), float(y)) for x, y in raw or []]


def _score_experience(requirements: list[JobRequirement], held_years: float) -> tuple[int, bool, str | None]:
    if not requirements:
        return 100, True, None
    strictest = max(requirements, key=lambda item: item.min_years or 0.0)
    required = strictest.min_years or 0.0
    suffix = " (preferred)" if strictest.strength == "preferred" else ""

    if held_years >= required:
        return 100, True, f"{_format_years(held_years)} years meets {_format_years(required)}+ requirement"

    ratio = held_years / required
    score = round(interpolate_curve(_experience_curve(strictest.strength), ratio))
    gap = required - held_years
    return (
        max(0, min(100, score)),
        False,
        f"{_format_years(gap)} years below the {_format_years(required)}+ requirement{suffix}",
    )


def _certification_held(wanted: str, held: list[str]) -> bool:
    return any(contains_phrase(name, wanted) or contains_phrase(wanted, name) for name in held)


def _score_certifications(
    requirements: list[JobRequirement], held: Iterable[str]
) -> tuple[int, list[str], list[str]]:
    required = [item.certification.strip() for item in requirements if item.certification and item.certification.strip()]
    if not required:
        return 100, [], []
    held_lower = [name.strip().lower() for name in held if name and name.strip()]

    met: list[str] = []
    missing: list[str] = []
    for certification in required:
        if _certification_held(certification.lower(), held_lower):
            met.append(certification)
        else:
            missing.append(certification)
    return round(len(met) / len(required) * 100), met, missing


def calculate_qualification_fit(
    requirements: Iterable[JobRequirement | Mapping[str, Any]] | None,
    qualifications: CandidateQualifications | Mapping[str, Any] | None,
) -> QualificationFitResult:
    reqs = [item if isinstance(item, JobRequirement) else JobRequirement.model_validate(item) for item in requirements or []]
    if qualifications is None:
        qualifications = CandidateQualifications()
    elif not isinstance(qualifications, CandidateQualifications):
        qualifications = CandidateQualifications.model_validate(qualifications)

    degree_reqs = [item for item in reqs if item.kind == "degree"]
    experience_reqs = [item for item in reqs if item.kind == "experience_years"]
    certification_reqs = [item for item in reqs if item.kind == "certification"]

    degree_score, degree_met, degree_note = 100, True, None
    if degree_reqs:
        evaluated = [_score_degree(item, qualifications.degree) for item in degree_reqs]
        degree_score, degree_met, degree_note = max(evaluated, key=lambda item: item[0])

    experience_score, experience_met, experience_note = _score_experience(
        experience_reqs, qualifications.total_experience_years
    )
    certification_score, certs_met, certs_missing = _score_certifications(
        certification_reqs, qualifications.certifications
    )

    weights = get_scoring_value("qualification_fit.weights", {}) or {}
    score = round(
        degree_score * float(weights.get("degree", 0.4))
        + experience_score * float(weights.get("experience", 0.4))
        + certification_score * float(weights.get("certifications", 0.2))
    )

    gap_notes: list[str] = []
    if not experience_met and experience_note:
        gap_notes.append(experience_note)
    if not degree_met and degree_note:
        gap_notes.append(degree_note)
    if certs_missing:
        limit = int(get_scoring_value("qualification_fit.max_missing_certifications_listed", 2))
        gap_notes.append(f"Missing certifications: {', '.join(certs_missing[:limit])}")

    return QualificationFitResult(
        score=max(0, min(100, score)),
        degree_score=degree_score,
        experience_score=experience_score,
        certification_score=certification_score,
        degree_met=degree_met,
        experience_met=experience_met,
        degree_note=degree_note,
        experience_note=experience_note,
        certifications_met=tuple(certs_met),
        certifications_missing=tuple(certs_missing),
        gap_notes=tuple(gap_notes),
    )


def extract_experience_years(experience_text: str | None, today: date | None = None) -> float:
    """Sum date ranges ("Jan 2020 - Present", "2018 – 2021") into years, 1 decimal.

    Each range counts half a year extra to approximate partial years.
    """
    if not experience_text or not experience_text.strip():
        return 0.0
    current_year = (today or date.today()).year
    bonus_months = int(get_scoring_value("qualification_fit.experience_range_month_bonus", 6))

    total_months = 0
    for match in _DATE_RANGE_PATTERN.finditer(experience_text):
        start_year = int(match.group(1))
        end_raw = match.group(2).lower()
        end_year = current_year if end_raw in {"present", "current", "now"} else int(end_raw)
        if end_year >= start_year:
            total_months += (end_year - start_year) * 12 + bonus_months
    return round(total_months / 12, 1)
