from __future__ import annotations

import re

from pydantic import BaseModel, Field

from resumefit.core.config.scoring import get_scoring_value
from resumefit.normalize.utils import count_words

_EMAIL_RE = re.compile(r"[\w.-]+@[\w.-]+\.\w{2,}")
_PHONE_RE = re.compile(r"(\+?1[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")
_LINKEDIN_RE = re.compile(r"linkedin\.com/in/", re.IGNORECASE)
_GITHUB_RE = re.compile(r"github\.com/", re.IGNORECASE)
_DATE_PATTERNS = (
    re.compile(
        r"\b(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?|Jul(?:y)?|Aug(?:ust)?|"
        r"Sep(?:tember)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)\s+\d{4}\b",
        re.IGNORECASE,
    ),
    re.compile(r"\b\d{1,2}/\d{4}\b"),
    re.compile(r"\b\d{4}\s*[-–—]\s*(?:\d{4}|Present|Current|Now)\b", re.IGNORECASE),
)
_HEADER_PATTERNS = (
    re.compile(r"\b(?:experience|work\s*experience|employment|professional\s*experience)\b", re.IGNORECASE),
    re.compile(r"\b(?:education|academic)\b", re.IGNORECASE),
    re.compile(r"\b(?:skills|technical\s*skills|core\s*competencies)\b", re.IGNORECASE),
    re.compile(r"\b(?:summary|profile|professional\s*summary)\b", re.IGNORECASE),
)
_BULLET_PATTERNS = (
    re.compile(r"^\s*[•‣◦⁃∙]\s", re.MULTILINE),
    re.compile(r"^\s*[-*]\s", re.MULTILINE),
    re.compile(r"^\s*\d+\.\s", re.MULTILINE),
)
_OBJECTIVE_RE = re.compile(r"\b(?:objective|career\s+objective)\s*[:|\n]", re.IGNORECASE)
_REFERENCES_RE = re.compile(r"\breferences\s+(?:available\s+)?(?:upon|on)\s+request\b", re.IGNORECASE)
_COMPLEX_FORMATTING_RE = re.compile(r"\t{2,}|\|.*\|.*\|")


class FormatResult(BaseModel):
    score: int = Field(ge=0, le=100)
    has_email: bool
    has_phone: bool
    has_linkedin: bool
    has_github: bool
    has_parseable_dates: bool
    has_section_headers: bool
    has_bullet_structure: bool
    appropriate_length: bool
    no_outdated_formats: bool
    word_count: int
    issues: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


def check_format(resume_text: str | None, *, has_experience: bool, has_summary: bool) -> FormatResult:
    text = resume_text or ""
    adjustments = get_scoring_value("format.adjustments", {}) or {}
    score = 1.0
    issues: list[str] = []
    warnings: list[str] = []

    def adjust(key: str) -> None:
        nonlocal score
        score += float(adjustments.get(key, 0.0))

    has_email = bool(_EMAIL_RE.search(text))
    if not has_email:
        adjust("missing_email")
        issues.append("No email address detected")

    has_phone = bool(_PHONE_RE.search(text))
    if not has_phone:
        adjust("missing_phone")
        warnings.append("No phone number detected")

    has_linkedin = bool(_LINKEDIN_RE.search(text))
    if has_linkedin:
        adjust("linkedin")
    has_github = bool(_GITHUB_RE.search(text))
    if has_github:
        adjust("github")

    date_count = sum(len(pattern.findall(text)) for pattern in _DATE_PATTERNS)
    has_dates = date_count >= int(get_scoring_value("format.min_dates", 2))
    if not has_dates and has_experience:
        adjust("few_dates")
        issues.append("Few or no parseable date formats found")

    headers_found = sum(1 for pattern in _HEADER_PATTERNS if pattern.search(text))
    has_headers = headers_found >= int(get_scoring_value("format.min_headers", 3))
    if not has_headers:
        adjust("few_headers")
        warnings.append(f"Only {headers_found} standard section headers detected")

    has_bullets = any(pattern.search(text) for pattern in _BULLET_PATTERNS)
    if not has_bullets and has_experience:
        adjust("no_bullets")
        warnings.append("No clear bullet point structure detected")

    word_count = count_words(text)
    min_words = int(get_scoring_value("format.min_words", 200))
    max_words = int(get_scoring_value("format.max_words", 1000))
    appropriate_length = True
    if word_count < min_words:
        adjust("too_short")
        appropriate_length = False
        issues.append(f"Resume too sparse ({word_count} words, recommend 300+)")
    elif word_count > max_words:
        adjust("too_long")
        appropriate_length = False
        warnings.append(f"Resume may be too long ({word_count} words, recommend under 800)")

    no_outdated = True
    if _OBJECTIVE_RE.search(text) and not has_summary:
        adjust("objective_without_summary")
        no_outdated = False
        issues.append('"Objective" section is outdated - use "Professional Summary" instead')
    if _REFERENCES_RE.search(text):
        adjust("references_line")
        no_outdated = False
        warnings.append('"References available upon request" is outdated - remove this line')

    if _COMPLEX_FORMATTING_RE.search(text):
        adjust("complex_formatting")
        warnings.append("Complex formatting detected (tables/columns may cause parsing issues)")

    return FormatResult(
        score=round(max(0.0, min(1.0, score)) * 100),
        has_email=has_email,
        has_phone=has_phone,
        has_linkedin=has_linkedin,
        has_github=has_github,
        has_parseable_dates=has_dates,
        has_section_headers=has_headers,
        has_bullet_structure=has_bullets,
        appropriate_length=appropriate_length,
        no_outdated_formats=no_outdated,
        word_count=word_count,
        issues=issues,
        warnings=warnings,
    )


def format_action_items(result: FormatResult) -> list[tuple[str, str]]:
    return [("high", issue) for issue in result.issues] + [("low", warning) for warning in result.warnings]
