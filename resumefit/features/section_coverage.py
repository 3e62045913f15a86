from __future__ import annotations

import re
from typing import Any, Iterable

from pydantic import BaseModel, Field

from resumefit.core.config.scoring import get_scoring_value
from resumefit.normalize.utils import extract_entries, split_skill_items
from resumefit.schemas.candidate import CandidateType
from resumefit.schemas.keywords import KeywordSpec
from resumefit.schemas.resume import ResumeSections

_COURSEWORK_RE = re.compile(r"(?:relevant\s+)?coursework[:\s]+([^.\n]+)", re.IGNORECASE)
_GPA_RE = re.compile(r"gpa[:\s]*(\d+\.?\d*)", re.IGNORECASE)
_PROJECT_RE = re.compile(r"capstone|project|thesis|research", re.IGNORECASE)
_HONORS_RE = re.compile(r"dean'?s?\s*list|honou?rs?|cum\s*laude|magna|summa|distinction", re.IGNORECASE)
_DATE_RE = re.compile(
    r"(?:(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\.?\s+)?\d{4}|expected|graduated",
    re.IGNORECASE,
)

_SECTION_LABELS = {
    "summary": "professional summary",
    "skills": "skills",
    "experience": "experience",
    "education": "education",
    "projects": "projects",
    "certifications": "certifications",
}


class SectionCheck(BaseModel):
    present: bool
    meets_threshold: bool
    points: float
    max_points: int
    quality_score: int | None = None
    issues: list[str] = Field(default_factory=list)


class EducationQuality(BaseModel):
    score: int = Field(ge=0, le=100)
    has_relevant_coursework: bool = False
    coursework_match_score: float = 0.0
    has_gpa: bool = False
    gpa_strong: bool = False
    has_projects: bool = False
    has_honors: bool = False
    has_dates: bool = False
    suggestions: list[str] = Field(default_factory=list)


class SectionCoverageResult(BaseModel):
    score: int = Field(ge=0, le=100)
    breakdown: dict[str, SectionCheck] = Field(default_factory=dict)
    education_quality: EducationQuality | None = None


def _profile(candidate_type: CandidateType) -> dict[str, dict[str, Any]]:
    profile = get_scoring_value(f"sections.profiles.{candidate_type}")
    if not profile:
        raise RuntimeError(f"Missing section profile for candidate type '{candidate_type}' in scoring config.")
    return profile


def evaluate_education_quality(
    education_text: str | None,
    keywords: Iterable[KeywordSpec],
    candidate_type: CandidateType,
) -> EducationQuality:
    if not education_text or not education_text.strip():
        return EducationQuality(score=0, suggestions=["Add education section"])

    settings = get_scoring_value("sections.education", {}) or {}
    keyword_names = [spec.keyword.lower() for spec in keywords]

    coursework = _COURSEWORK_RE.search(education_text)
    match_score = 0.0
    if coursework and keyword_names:
        listed = coursework.group(1).lower()
        matched = sum(1 for keyword in keyword_names if keyword in listed)
        cap = int(settings.get("coursework_keyword_cap", 10))
        match_score = min(1.0, matched / min(len(keyword_names), cap))

    gpa = _GPA_RE.search(education_text)
    has_gpa = gpa is not None
    gpa_strong = has_gpa and float(gpa.group(1)) >= float(settings.get("strong_gpa", 3.5))
    quality = EducationQuality(
        score=0,
        has_relevant_coursework=coursework is not None,
        coursework_match_score=round(match_score, 2),
        has_gpa=has_gpa,
        gpa_strong=gpa_strong,
        has_projects=bool(_PROJECT_RE.search(education_text)),
        has_honors=bool(_HONORS_RE.search(education_text)),
        has_dates=bool(_DATE_RE.search(education_text)),
    )

    table = settings.get("quality_weights", {}) or {}
    weights = table.get("coop" if candidate_type == "coop" else "default", {}) or {}
    gpa_points = 0.0
    if quality.gpa_strong:
        gpa_points = float(weights.get("gpa_strong", 0.0))
    elif quality.has_gpa:
        gpa_points = float(weights.get("gpa", 0.0))
    raw = (
        (float(weights.get("coursework", 0.0)) if quality.has_relevant_coursework else 0.0)
        + match_score * float(weights.get("coursework_match", 0.0))
        + gpa_points
        + (float(weights.get("projects", 0.0)) if quality.has_projects else 0.0)
        + (float(weights.get("honors", 0.0)) if quality.has_honors else 0.0)
        + (float(weights.get("dates", 0.0)) if quality.has_dates else 0.0)
        + float(weights.get("base", 0.0))
    )
    quality.score = round(min(1.0, raw) * 100)

    if candidate_type == "coop":
        if not quality.has_relevant_coursework:
            quality.suggestions.append("Add relevant coursework matching the job requirements")
        if not quality.has_gpa:
            quality.suggestions.append("Add GPA if 3.0+ (critical for co-op applications)")
        if not quality.has_projects:
            quality.suggestions.append("Add capstone project or academic projects")
        if not quality.has_honors and quality.gpa_strong:
            quality.suggestions.append("Add Dean's List or honors if applicable")
    return quality


def _graded_check(count: float, threshold: int, max_points: int, short_issue: str) -> SectionCheck:
    if count >= threshold:
        return SectionCheck(present=True, meets_threshold=True, points=max_points, max_points=max_points)
    partial = max_points * min(1.0, count / threshold) if threshold > 0 else max_points
    return SectionCheck(
        present=True,
        meets_threshold=False,
        points=round(partial, 1),
        max_points=max_points,
        issues=[short_issue],
    )


def _missing_check(name: str, max_points: int, candidate_type: CandidateType) -> SectionCheck:
    label = _SECTION_LABELS.get(name, name)
    issue = f"No {label} section"
    if name == "projects" and candidate_type == "coop":
        issue += " (important for co-op)"
    return SectionCheck(present=False, meets_threshold=False, points=0.0, max_points=max_points, issues=[issue])


def calculate_section_coverage(
    resume_sections: ResumeSections,
    candidate_type: CandidateType,
    keywords: Iterable[KeywordSpec] = (),
) -> SectionCoverageResult:
    profile = _profile(candidate_type)
    specs = list(keywords)
    education_settings = get_scoring_value("sections.education", {}) or {}
    breakdown: dict[str, SectionCheck] = {}
    education_quality: EducationQuality | None = None
    achieved = 0.0
    possible = 0.0

    for name in ("summary", "skills", "experience", "education", "projects"):
        rules = profile.get(name) or {}
        max_points = int(rules.get("max_points", 0))
        text = resume_sections.get(name)
        required = bool(rules.get("required", False))
        if text is None:
            if required:
                possible += max_points
                breakdown[name] = _missing_check(name, max_points, candidate_type)
            continue

        possible += max_points
        if name == "summary":
            length = len(text.strip())
            threshold = int(rules.get("min_length", 50))
            check = _graded_check(length, threshold, max_points, f"Summary too short ({length}/{threshold} chars)")
        elif name == "skills":
            count = len(split_skill_items(text))
            threshold = int(rules.get("min_items", 8))
            check = _graded_check(count, threshold, max_points, f"Only {count} skills listed (recommend {threshold}+)")
        elif name in ("experience", "projects"):
            count = len(extract_entries(text))
            threshold = int(rules.get("min_bullets", 2))
            noun = "experience bullets" if name == "experience" else "project entries"
            check = _graded_check(count, threshold, max_points, f"Only {count} {noun} (recommend {threshold}+)")
        else:
            if len(text.strip()) >= int(rules.get("min_length", 30)):
                education_quality = evaluate_education_quality(text, specs, candidate_type)
                share = float(education_settings.get("presence_share", 0.4)) + education_quality.score / 100 * float(
                    education_settings.get("quality_share", 0.6)
                )
                check = SectionCheck(
                    present=True,
                    meets_threshold=education_quality.score >= int(education_settings.get("meets_threshold_quality", 50)),
                    points=round(max_points * share, 1),
                    max_points=max_points,
                    quality_score=education_quality.score,
                    issues=list(education_quality.suggestions),
                )
            else:
                check = SectionCheck(
                    present=True,
                    meets_threshold=False,
                    points=round(max_points * float(education_settings.get("sparse_share", 0.3)), 1),
                    max_points=max_points,
                    issues=["Education section is sparse - add coursework, GPA, or projects"],
                )
        achieved += check.points
        breakdown[name] = check

    cert_rules = profile.get("certifications") or {}
    cert_count = len(extract_entries(resume_sections.get("certifications")))
    if cert_count and cert_count >= int(cert_rules.get("min_items", 1)):
        cert_points = int(cert_rules.get("max_points", 0))
        achieved += cert_points
        possible += cert_points
        breakdown["certifications"] = SectionCheck(
            present=True, meets_threshold=True, points=cert_points, max_points=cert_points
        )

    score = round(achieved / possible * 100) if possible > 0 else 0
    return SectionCoverageResult(
        score=max(0, min(100, score)),
        breakdown=breakdown,
        education_quality=education_quality,
    )


def section_action_items(result: SectionCoverageResult) -> list[tuple[str, str]]:
    items: list[tuple[str, str]] = []
    for check in result.breakdown.values():
        if check.issues and not check.meets_threshold:
            items.append(("medium" if check.present else "high", check.issues[0]))
    return items
