from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from resumefit.core.config.scoring import get_scoring_value
from resumefit.features.aggregator import build_action_items, combine_scores, get_score_tier
from resumefit.features.candidate_type import detect_candidate_type
from resumefit.features.content_quality import calculate_content_quality, content_action_items
from resumefit.features.format_check import check_format, format_action_items
from resumefit.features.gap_addressability import process_gap_addressability
from resumefit.features.keyword_matcher import KeywordMatcher
from resumefit.features.keyword_score import calculate_keyword_score, keyword_action_items
from resumefit.features.qualification_fit import calculate_qualification_fit
from resumefit.features.role_detection import detect_job_role, detect_seniority
from resumefit.features.section_coverage import calculate_section_coverage, section_action_items
from resumefit.features.weights import resolve_component_weights
from resumefit.schemas.candidate import CandidateTypeInput, JobType
from resumefit.schemas.keywords import KeywordSpec
from resumefit.schemas.qualifications import CandidateQualifications, JobRequirement
from resumefit.schemas.resume import ResumeSections
from resumefit.schemas.scoring import ComponentScore, ScoreBreakdown

logger = logging.getLogger(__name__)


def _as_requirements(items: Iterable[JobRequirement | Mapping[str, Any]] | None) -> list[JobRequirement]:
    return [item if isinstance(item, JobRequirement) else JobRequirement.model_validate(item) for item in items or []]


def _as_keywords(items: Iterable[KeywordSpec | Mapping[str, Any] | str] | None) -> list[KeywordSpec]:
    specs: list[KeywordSpec] = []
    for item in items or []:
        if isinstance(item, KeywordSpec):
            specs.append(item)
        elif isinstance(item, str):
            specs.append(KeywordSpec(keyword=item))
        else:
            specs.append(KeywordSpec.model_validate(item))
    return specs


def _as_sections(value: ResumeSections | Mapping[str, Any] | None) -> ResumeSections:
    if value is None:
        return ResumeSections()
    if isinstance(value, ResumeSections):
        return value
    return ResumeSections.model_validate(value)


def _as_qualifications(value: CandidateQualifications | Mapping[str, Any] | None) -> CandidateQualifications:
    if value is None:
        return CandidateQualifications()
    if isinstance(value, CandidateQualifications):
        return value
    return CandidateQualifications.model_validate(value)


def _candidate_signals(
    value: CandidateTypeInput | Mapping[str, Any] | None,
    job_type: JobType | None,
    qualifications: CandidateQualifications,
) -> CandidateTypeInput:
    if value is None:
        signals = CandidateTypeInput()
    elif isinstance(value, CandidateTypeInput):
        signals = value
    else:
        signals = CandidateTypeInput.model_validate(value)

    updates: dict[str, Any] = {}
    if signals.job_type is None and job_type is not None:
        updates["job_type"] = job_type
    if signals.total_experience_years is None and qualifications.total_experience_years:
        updates["total_experience_years"] = qualifications.total_experience_years
    if updates:
        signals = CandidateTypeInput.model_validate({**signals.model_dump(), **updates})
    return signals


def _full_text(resume_text: str | None, sections: ResumeSections) -> str:
    if resume_text and resume_text.strip():
        return resume_text
    return "\n\n".join(sections.get(name) or "" for name in sections.present_sections())


def score(
    job_requirements: Iterable[JobRequirement | Mapping[str, Any]] | None,
    candidate_qualifications: CandidateQualifications | Mapping[str, Any] | None,
    keyword_list: Iterable[KeywordSpec | Mapping[str, Any] | str] | None,
    resume_sections: ResumeSections | Mapping[str, Any] | None,
    resume_text: str | None = None,
    job_description_text: str | None = None,
    job_type: JobType | None = None,
    candidate_type_input: CandidateTypeInput | Mapping[str, Any] | None = None,
    *,
    matcher: KeywordMatcher | None = None,
) -> ScoreBreakdown:
    """Run the whole pipeline and return an immutable score breakdown.

    Mappings are validated up front, so callers get either a pydantic
    ValidationError or a complete result.
    """
    requirements = _as_requirements(job_requirements)
    qualifications = _as_qualifications(candidate_qualifications)
    keywords = _as_keywords(keyword_list)
    sections = _as_sections(resume_sections)
    signals = _candidate_signals(candidate_type_input, job_type, qualifications)
    text = _full_text(resume_text, sections)

    candidate = detect_candidate_type(signals)
    candidate_type = candidate.candidate_type
    role = detect_job_role(job_description_text)
    seniority = detect_seniority(job_description_text, candidate_type)
    weights = resolve_component_weights(candidate_type, role, seniority)

    match_result = (matcher or KeywordMatcher()).match(keywords, sections, text)
    keyword_result = calculate_keyword_score(match_result.records)
    keyword_gaps = process_gap_addressability(match_result, text, sections)
    qualification_result = calculate_qualification_fit(requirements, qualifications)
    content_result = calculate_content_quality(sections, keywords, candidate_type)
    section_result = calculate_section_coverage(sections, candidate_type, keywords)
    format_result = check_format(text, has_experience=sections.has("experience"), has_summary=sections.has("summary"))

    scores = {
        "keywords": keyword_result.score,
        "qualification_fit": qualification_result.score,
        "content_quality": content_result.score,
        "sections": section_result.score,
        "format": format_result.score,
    }
    details: dict[str, dict[str, Any]] = {
        "keywords": {**keyword_result.model_dump(), "coverage": match_result.coverage},
        "qualification_fit": qualification_result.model_dump(),
        "content_quality": {
            **content_result.model_dump(),
            "quantification_density": content_result.quantification_density,
        },
        "sections": section_result.model_dump(),
        "format": format_result.model_dump(),
    }
    weight_map = weights.as_dict()
    components = {
        name: ComponentScore(
            score=value,
            weight=weight_map[name],
            weighted=round(value * weight_map[name], 2),
            details=details[name],
        )
        for name, value in scores.items()
    }

    overall = combine_scores(scores, weights)
    action_items = build_action_items(
        {
            "keywords": keyword_action_items(keyword_result),
            "qualifications": [("high", note) for note in qualification_result.gap_notes],
            "content": content_action_items(content_result),
            "sections": section_action_items(section_result),
            "format": format_action_items(format_result),
        },
        scores,
    )

    breakdown = ScoreBreakdown(
        overall=overall,
        tier=get_score_tier(overall),
        components=components,
        weights=weights,
        candidate_type=candidate,
        detected_role=role,
        detected_seniority=seniority,
        keyword_coverage=match_result.coverage,
        missing_keywords=tuple(match_result.missing),
        keyword_gaps=keyword_gaps,
        qualification_gaps=qualification_result.gap_notes,
        quantification_density=content_result.quantification_density,
        total_bullets=content_result.total_bullets,
        action_items=action_items,
        algorithm_version=str(get_scoring_value("algorithm_version", "unknown")),
    )
    logger.info(
        "scoring_run_complete overall=%s tier=%s candidate_type=%s role=%s seniority=%s",
        breakdown.overall,
        breakdown.tier,
        candidate_type,
        role,
        seniority,
    )
    return breakdown
