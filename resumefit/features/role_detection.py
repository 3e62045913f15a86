from __future__ import annotations

import logging
import re

from resumefit.core.config.scoring import config_cached, get_scoring_value
from resumefit.schemas.candidate import CandidateType

logger = logging.getLogger(__name__)


@config_cached
def _role_patterns() -> tuple[tuple[str, tuple[re.Pattern[str], ...]], ...]:
    rows = get_scoring_value("role_detection.roles", []) or []
    return tuple(
        (str(row["role"]), tuple(re.compile(pattern, re.IGNORECASE) for pattern in row.get("patterns", [])))
        for row in rows
    )


@config_cached
def _seniority_patterns() -> tuple[tuple[str, tuple[re.Pattern[str], ...]], ...]:
    rows = get_scoring_value("role_detection.seniority", []) or []
    return tuple(
        (str(row["level"]), tuple(re.compile(pattern, re.IGNORECASE) for pattern in row.get("patterns", [])))
        for row in rows
    )


def detect_job_role(job_description_text: str | None) -> str:
    default_role = str(get_scoring_value("role_detection.default_role", "general"))
    text = job_description_text or ""
    if not text.strip():
        return default_role
    for role, patterns in _role_patterns():
        if any(pattern.search(text) for pattern in patterns):
            return role
    return default_role


def detect_seniority(job_description_text: str | None, candidate_type: CandidateType) -> str:
    default_level = str(get_scoring_value("role_detection.default_seniority", "mid"))
    unadjusted = set(get_scoring_value("role_detection.unadjusted_types", []) or [])
    text = job_description_text or ""
    if candidate_type in unadjusted or not text.strip():
        return default_level
    for level, patterns in _seniority_patterns():
        if any(pattern.search(text) for pattern in patterns):
            logger.debug("seniority_detected level=%s", level)
            return level
    return default_level
