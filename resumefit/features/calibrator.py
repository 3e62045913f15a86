from __future__ import annotations

import logging
import math
from typing import Iterable

from resumefit.core.config.scoring import get_scoring_value
from resumefit.schemas.candidate import ExperienceLevel
from resumefit.schemas.suggestions import CalibrationResult, PriorityBoosts, SuggestionMode

logger = logging.getLogger(__name__)

EXPERIENCE_LEVELS: tuple[ExperienceLevel, ...] = ("student", "career_changer", "experienced")


def _clamp(value: float, low: float, high: float) -> float:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return low
    return max(low, min(high, value))


def _format_number(value: float) -> str:
    return f"{value:g}"


def _mode_rows() -> list[dict]:
    rows = get_scoring_value("calibration.modes", []) or []
    if not rows:
        raise RuntimeError("Missing calibration.modes table in scoring config.")
    return rows


def _mode_row(mode: SuggestionMode) -> dict:
    for row in _mode_rows():
        if row["mode"] == mode:
            return row
    raise ValueError(f"Unknown suggestion mode: {mode}")


def get_suggestion_mode(ats_score: float) -> SuggestionMode:
    """Bands are half-open: [0, 30) Transformation ... [70, 100] Validation."""
    rows = _mode_rows()
    for row in rows:
        below = row.get("below")
        if below is not None and ats_score < float(below):
            return row["mode"]
    return rows[-1]["mode"]


def get_target_suggestion_count(mode: SuggestionMode) -> tuple[int, int]:
    row = _mode_row(mode)
    return int(row["min_count"]), int(row["max_count"])


def get_focus_areas_by_experience(level: ExperienceLevel) -> list[str]:
    areas = get_scoring_value(f"calibration.focus_areas.{level}")
    if not areas:
        raise ValueError(f"Unknown experience level: {level}")
    return [str(area) for area in areas]


def get_keyword_urgency_boost(missing_keywords_count: int) -> int:
    for row in get_scoring_value("calibration.keyword_boosts", []) or []:
        if missing_keywords_count >= int(row["min_missing"]):
            return int(row["boost"])
    return 0


def get_quantification_urgency_boost(density: float) -> int:
    for row in get_scoring_value("calibration.quantification_boosts", []) or []:
        if density < float(row["below"]):
            return int(row["boost"])
    return int(get_scoring_value("calibration.quantification_default_boost", -1))


def _build_reasoning(
    ats_score: float,
    mode: SuggestionMode,
    missing_keywords_count: int,
    keyword_boost: int,
    density: float,
    quantification_boost: int,
) -> str:
    keyword_note = f"(+{keyword_boost} urgency)" if keyword_boost > 0 else "(focus shift)"
    if quantification_boost > 0:
        quantification_note = f"(+{quantification_boost} urgency)"
    elif quantification_boost < 0:
        quantification_note = "(-depriorize)"
    else:
        quantification_note = "(balanced)"
    return " | ".join(
        [
            f"ATS Score {_format_number(ats_score)} → {mode} mode",
            f"{missing_keywords_count} missing keywords {keyword_note}",
            f"{_format_number(density)}% quantification {quantification_note}",
        ]
    )


def calibrate(
    overall: float,
    experience_level: ExperienceLevel,
    missing_keywords_count: int,
    quantification_density: float,
    total_bullets: int = 0,
) -> CalibrationResult:
    if experience_level not in EXPERIENCE_LEVELS:
        raise ValueError(
            f"Invalid experience level: {experience_level}. Must be student, career_changer, or experienced"
        )
    ats_score = _clamp(overall, 0.0, 100.0)
    density = _clamp(quantification_density, 0.0, 100.0)
    missing = int(max(0, missing_keywords_count or 0))
    bullets = int(max(0, total_bullets or 0))

    mode = get_suggestion_mode(ats_score)
    low, high = get_target_suggestion_count(mode)
    keyword_boost = get_keyword_urgency_boost(missing)
    quantification_boost = get_quantification_urgency_boost(density)
    experience_boost = int(_mode_row(mode).get("experience_boost", 0))

    result = CalibrationResult(
        mode=mode,
        target_count_range=(low, high),
        suggestions_target_count=(low + high) // 2,
        priority_boosts=PriorityBoosts(
            keyword=keyword_boost,
            quantification=quantification_boost,
            experience=experience_boost,
        ),
        focus_areas=tuple(get_focus_areas_by_experience(experience_level)),
        reasoning=_build_reasoning(ats_score, mode, missing, keyword_boost, density, quantification_boost),
    )
    logger.debug(
        "calibration_complete mode=%s target=%s bullets=%s",
        result.mode,
        result.suggestions_target_count,
        bullets,
    )
    return result


def get_suggestion_mode_description(mode: SuggestionMode) -> str:
    description = get_scoring_value(f"calibration.mode_descriptions.{mode}")
    if description is None:
        raise ValueError(f"Unknown suggestion mode: {mode}")
    return str(description)


def get_focus_areas_description(areas: Iterable[str]) -> str:
    descriptions = get_scoring_value("calibration.focus_area_descriptions", {}) or {}
    return ", ".join(str(descriptions.get(area, area)) for area in areas)


def validate_calibration_signals(
    overall: float,
    experience_level: str,
    missing_keywords_count: int,
    quantification_density: float,
    total_bullets: int,
) -> list[str]:
    errors: list[str] = []
    if overall < 0 or overall > 100:
        errors.append("ATS score must be between 0-100")
    if experience_level not in EXPERIENCE_LEVELS:
        errors.append(
            f"Invalid experience level: {experience_level}. Must be student, career_changer, or experienced"
        )
    if missing_keywords_count < 0:
        errors.append("Missing keywords count cannot be negative")
    if quantification_density < 0 or quantification_density > 100:
        errors.append("Quantification density must be between 0-100")
    if total_bullets <= 0:
        errors.append("Total bullets must be greater than 0")
    return errors
