from __future__ import annotations

import re
from typing import Iterable, Literal

from pydantic import BaseModel, Field

from resumefit.core.config.scoring import config_cached, get_scoring_value
from resumefit.normalize.utils import contains_phrase, extract_bullets
from resumefit.schemas.candidate import CandidateType
from resumefit.schemas.keywords import KeywordSpec
from resumefit.schemas.resume import ResumeSections

QuantificationTier = Literal["high", "medium", "low"]
VerbStrength = Literal["strong", "moderate", "weak", "unknown"]

_TIER_RANK: dict[str, int] = {"high": 3, "medium": 2, "low": 1}
_BULLET_SOURCES: tuple[str, ...] = ("experience", "projects", "education")


class ContentQualityResult(BaseModel):
    score: int = Field(ge=0, le=100)
    quantification_score: int = 0
    action_verb_score: int = 0
    keyword_density_score: int = 0
    total_bullets: int = 0
    bullets_with_metrics: int = 0
    high_tier_metrics: int = 0
    medium_tier_metrics: int = 0
    low_tier_metrics: int = 0
    strong_verb_count: int = 0
    moderate_verb_count: int = 0
    weak_verb_count: int = 0
    keywords_found: list[str] = Field(default_factory=list)
    keywords_missing: list[str] = Field(default_factory=list)

    @property
    def quantification_density(self) -> float:
        if self.total_bullets == 0:
            return 0.0
        return round(self.bullets_with_metrics / self.total_bullets * 100, 1)


@config_cached
def _quantification_patterns() -> tuple[tuple[re.Pattern[str], str], ...]:
    rows = get_scoring_value("content_quality.quantification_patterns", []) or []
    return tuple((re.compile(str(row["pattern"]), re.IGNORECASE), str(row["tier"])) for row in rows)


@config_cached
def _verb_sets() -> tuple[frozenset[str], frozenset[str], frozenset[str]]:
    return (
        frozenset(str(verb) for verb in get_scoring_value("content_quality.strong_verbs", []) or []),
        frozenset(str(verb) for verb in get_scoring_value("content_quality.moderate_verbs", []) or []),
        frozenset(str(verb) for verb in get_scoring_value("content_quality.weak_verbs", []) or []),
    )


def collect_bullets(resume_sections: ResumeSections) -> list[str]:
    bullets: list[str] = []
    for name in _BULLET_SOURCES:
        bullets.extend(extract_bullets(resume_sections.get(name)))
    return bullets


def quantification_tier(bullet: str) -> QuantificationTier | None:
    """Best metric tier found in a bullet, None when it carries no number."""
    best: str | None = None
    for pattern, tier in _quantification_patterns():
        if pattern.search(bullet) and (best is None or _TIER_RANK[tier] > _TIER_RANK[best]):
            best = tier
    return best  # type: ignore[return-value]


def classify_action_verb(bullet: str) -> VerbStrength:
    lowered = bullet.strip().lower()
    weak_phrases = get_scoring_value("content_quality.weak_phrases", []) or []
    if any(lowered.startswith(str(phrase)) for phrase in weak_phrases):
        return "weak"

    words = lowered.split()
    first = re.sub(r"[^a-z]", "", words[0]) if words else ""
    if not first:
        return "unknown"
    strong, moderate, weak = _verb_sets()
    if first in strong:
        return "strong"
    if first in moderate:
        return "moderate"
    if first in weak:
        return "weak"
    return "unknown"


def _score_quantification(bullets: list[str], result: ContentQualityResult) -> int:
    tier_points = get_scoring_value("content_quality.tier_points", {}) or {}
    mix = get_scoring_value("content_quality.quantification_mix", {}) or {}
    points = 0.0
    for bullet in bullets:
        tier = quantification_tier(bullet)
        if tier is None:
            continue
        result.bullets_with_metrics += 1
        points += float(tier_points.get(tier, 0.0))
        if tier == "high":
            result.high_tier_metrics += 1
        elif tier == "medium":
            result.medium_tier_metrics += 1
        else:
            result.low_tier_metrics += 1

    coverage = result.bullets_with_metrics / len(bullets)
    quality = points / result.bullets_with_metrics if result.bullets_with_metrics else 0.0
    return round((coverage * float(mix.get("coverage", 0.6)) + quality * float(mix.get("quality", 0.4))) * 100)


def _score_action_verbs(bullets: list[str], candidate_type: CandidateType, result: ContentQualityResult) -> int:
    for bullet in bullets:
        strength = classify_action_verb(bullet)
        if strength == "strong":
            result.strong_verb_count += 1
        elif strength == "moderate":
            result.moderate_verb_count += 1
        elif strength == "weak":
            result.weak_verb_count += 1

    scoring = get_scoring_value("content_quality.verb_scoring", {}) or {}
    total = len(bullets)
    if candidate_type == "coop":
        # Students get full credit for moderate verbs.
        raw = (result.strong_verb_count + result.moderate_verb_count) / total - result.weak_verb_count * float(
            scoring.get("coop_weak_penalty", 0.05)
        )
    else:
        raw = (
            result.strong_verb_count
            + result.moderate_verb_count * float(scoring.get("moderate_credit", 0.6))
            - result.weak_verb_count * float(scoring.get("weak_penalty", 0.2))
        ) / total
    return round(max(0.0, min(1.0, raw)) * 100)


def _score_keyword_density(bullets: list[str], keywords: list[KeywordSpec], result: ContentQualityResult) -> int:
    if not keywords:
        return int(get_scoring_value("content_quality.no_keywords_score", 50))
    text = "\n".join(bullets)
    for spec in keywords:
        if any(contains_phrase(text, surface) for surface in (spec.keyword, *spec.aliases)):
            result.keywords_found.append(spec.keyword)
        else:
            result.keywords_missing.append(spec.keyword)
    target = float(get_scoring_value("content_quality.keyword_density_target", 0.5))
    return round(min(1.0, len(result.keywords_found) / len(keywords) / target) * 100)


def calculate_content_quality(
    resume_sections: ResumeSections,
    keywords: Iterable[KeywordSpec],
    candidate_type: CandidateType,
) -> ContentQualityResult:
    specs = list(keywords)
    bullets = collect_bullets(resume_sections)
    if not bullets:
        return ContentQualityResult(score=0, total_bullets=0, keywords_missing=[spec.keyword for spec in specs])

    result = ContentQualityResult(score=0, total_bullets=len(bullets))
    result.quantification_score = _score_quantification(bullets, result)
    result.action_verb_score = _score_action_verbs(bullets, candidate_type, result)
    result.keyword_density_score = _score_keyword_density(bullets, specs, result)

    weights = get_scoring_value("content_quality.weights", {}) or {}
    result.score = max(
        0,
        min(
            100,
            round(
                result.quantification_score * float(weights.get("quantification", 0.35))
                + result.action_verb_score * float(weights.get("action_verbs", 0.30))
                + result.keyword_density_score * float(weights.get("keyword_density", 0.35))
            ),
        ),
    )
    return result


def content_action_items(result: ContentQualityResult) -> list[tuple[str, str]]:
    if result.total_bullets == 0:
        return [("high", "Add bullet points describing your accomplishments to experience or projects")]
    items: list[tuple[str, str]] = []
    if result.quantification_score < int(get_scoring_value("content_quality.low_quantification_score", 40)):
        items.append(
            (
                "high",
                f"Add metrics to bullets (only {result.bullets_with_metrics}/{result.total_bullets} have quantification)",
            )
        )
    if result.weak_verb_count > result.strong_verb_count:
        items.append(
            ("high", 'Replace weak verbs ("Helped", "Worked on") with strong verbs ("Led", "Developed", "Built")')
        )
    if result.bullets_with_metrics > 0 and result.low_tier_metrics > result.high_tier_metrics:
        items.append(("medium", "Upgrade metrics to higher-impact numbers ($, %, large scale)"))
    if result.keyword_density_score < int(get_scoring_value("content_quality.low_keyword_density_score", 50)):
        items.append(("low", "Incorporate more job description keywords into your experience bullets"))
    return items
