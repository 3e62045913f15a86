from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from resumefit.core.config.scoring import get_scoring_value
from resumefit.normalize.utils import contains_phrase
from resumefit.schemas.keywords import KeywordMatchResult, KeywordRecord
from resumefit.schemas.resume import ResumeSections, SectionName
from resumefit.schemas.suggestions import (
    GapAddressability,
    GapPriority,
    GapProcessingResult,
    GapSummary,
    ProcessedGap,
    SectionGaps,
)

logger = logging.getLogger(__name__)

_PRIORITY_ORDER: dict[str, int] = {"critical": 0, "high": 1, "medium": 2, "low": 3}


def _table(path: str) -> dict[str, list[str]]:
    raw = get_scoring_value(f"gap_addressability.{path}", {}) or {}
    return {str(key): [str(item) for item in values] for key, values in raw.items()}


def _first_term_found(text: str, terms: Iterable[str]) -> str | None:
    for term in terms:
        if contains_phrase(text, term):
            return term
    return None


def gap_priority(importance: str, requirement: str) -> GapPriority:
    table = get_scoring_value(f"gap_addressability.priority.{requirement}", {}) or {}
    return table.get(importance, "low")


def gap_impact(importance: str, requirement: str) -> int:
    base = get_scoring_value(f"gap_addressability.impact.base.{importance}", 0) or 0
    multiplier = 1.0
    if requirement != "required":
        multiplier = float(get_scoring_value("gap_addressability.impact.preferred_multiplier", 0.5))
    return round(float(base) * multiplier)


def target_sections_for(category: str) -> tuple[SectionName, ...]:
    table = _table("target_sections")
    return tuple(table.get(category.lower(), table.get("default", ["skills", "experience"])))  # type: ignore[arg-type]


def _classify(record: KeywordRecord, section_text: str, full_text: str) -> tuple[GapAddressability, str, str | None, str]:
    keyword = record.keyword
    lowered = keyword.lower()

    terminology = _table("terminology")
    variants = next((terms for term, terms in terminology.items() if term.lower() == lowered), None)
    if variants:
        found = _first_term_found(section_text, variants)
        if found:
            return (
                "terminology",
                f'Resume uses "{found}" which is equivalent',
                found,
                f'Change "{found}" to "{keyword}" for exact JD match',
            )

    for term, term_variants in terminology.items():
        if lowered in (item.lower() for item in term_variants) and contains_phrase(section_text, term):
            return (
                "terminology",
                f'Resume uses "{term}", can add "{keyword}" as explicit mention',
                term,
                f'Add "{keyword}" alongside existing "{term}"',
            )

    if contains_phrase(full_text, keyword):
        return (
            "terminology",
            f'Keyword "{keyword}" exists in resume but may not be prominent enough',
            keyword,
            f'Make "{keyword}" more prominent or add to skills section',
        )

    families = _table("technology_families")
    related = next((terms for term, terms in families.items() if term.lower() == lowered), None)
    if related:
        found = _first_term_found(section_text, related)
        if found:
            return (
                "potential",
                f'Resume has "{found}" which is related to {keyword}',
                found,
                f'Only add "{keyword}" if candidate genuinely has this experience',
            )

    category = record.category.lower()
    qualification_terms = get_scoring_value("gap_addressability.qualification_terms", []) or []
    unfixable_categories = get_scoring_value("gap_addressability.unfixable_categories", []) or []
    if category in unfixable_categories or any(contains_phrase(lowered, str(term)) for term in qualification_terms):
        return (
            "unfixable",
            "This is a qualification/certification that cannot be fabricated",
            None,
            f'Cannot add "{keyword}" - this requires actual qualification',
        )

    if category in (get_scoring_value("gap_addressability.addable_categories", []) or []):
        return (
            "potential",
            "No direct evidence in resume, but could be added if candidate has experience",
            None,
            f'Only add "{keyword}" if candidate genuinely has this skill',
        )
    return (
        "unfixable",
        "No evidence in resume and not a skill that can be easily added",
        None,
        f'Cannot reliably add "{keyword}" without evidence',
    )


def _missing_records(
    keywords: KeywordMatchResult | Iterable[KeywordRecord | Mapping[str, Any]],
) -> list[KeywordRecord]:
    records = keywords.records if isinstance(keywords, KeywordMatchResult) else keywords
    parsed = [item if isinstance(item, KeywordRecord) else KeywordRecord.model_validate(item) for item in records]
    return [record for record in parsed if not record.found]


def process_gap_addressability(
    keywords: KeywordMatchResult | Iterable[KeywordRecord | Mapping[str, Any]],
    resume_text: str | None = None,
    resume_sections: ResumeSections | Mapping[str, Any] | None = None,
) -> GapProcessingResult:
    if resume_sections is not None and not isinstance(resume_sections, ResumeSections):
        resume_sections = ResumeSections.model_validate(resume_sections)

    full_text = (resume_text or "").lower()
    if resume_sections is not None and resume_sections.present_sections():
        section_text = " ".join(resume_sections.get(name) or "" for name in resume_sections.present_sections()).lower()
    else:
        section_text = full_text
    if not full_text.strip():
        full_text = section_text

    gaps: list[ProcessedGap] = []
    for record in _missing_records(keywords):
        addressability, reason, evidence, instruction = _classify(record, section_text, full_text)
        gaps.append(
            ProcessedGap(
                keyword=record.keyword,
                category=record.category,
                priority=gap_priority(record.importance, record.requirement),
                requirement=record.requirement,
                potential_impact=gap_impact(record.importance, record.requirement),
                addressability=addressability,
                reason=reason,
                evidence=evidence,
                target_sections=target_sections_for(record.category),
                instruction=instruction,
            )
        )
    gaps.sort(key=lambda gap: _PRIORITY_ORDER[gap.priority])

    summary = GapSummary(
        total_gaps=len(gaps),
        terminology_fixes=sum(1 for gap in gaps if gap.addressability == "terminology"),
        potential_additions=sum(1 for gap in gaps if gap.addressability == "potential"),
        unfixable_gaps=sum(1 for gap in gaps if gap.addressability == "unfixable"),
        total_potential_impact=sum(gap.potential_impact for gap in gaps if gap.addressability != "unfixable"),
    )
    logger.debug(
        "gap_addressability_processed total=%s terminology=%s potential=%s unfixable=%s",
        summary.total_gaps,
        summary.terminology_fixes,
        summary.potential_additions,
        summary.unfixable_gaps,
    )
    return GapProcessingResult(processed_gaps=tuple(gaps), summary=summary)


def filter_gaps_for_section(gaps: Iterable[ProcessedGap], section: SectionName) -> SectionGaps:
    section_gaps = [gap for gap in gaps if section in gap.target_sections]
    return SectionGaps(
        terminology_fixes=tuple(
            gap for gap in section_gaps if gap.addressability == "terminology" and gap.requirement == "required"
        ),
        potential_additions=tuple(
            gap for gap in section_gaps if gap.addressability == "potential" and gap.requirement == "required"
        ),
        opportunities=tuple(
            gap for gap in section_gaps if gap.requirement == "preferred" and gap.addressability != "unfixable"
        ),
        cannot_fix=tuple(gap for gap in section_gaps if gap.addressability == "unfixable"),
    )
