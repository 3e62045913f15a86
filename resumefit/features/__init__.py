from .aggregator import build_action_items, combine_scores, get_score_tier
from .calibrator import (
    calibrate,
    get_focus_areas_by_experience,
    get_focus_areas_description,
    get_keyword_urgency_boost,
    get_quantification_urgency_boost,
    get_suggestion_mode,
    get_suggestion_mode_description,
    get_target_suggestion_count,
    validate_calibration_signals,
)
from .candidate_type import CANDIDATE_TYPE_RULES, detect_candidate_type, experience_level_for
from .content_quality import ContentQualityResult, calculate_content_quality
from .format_check import FormatResult, check_format
from .gap_addressability import filter_gaps_for_section, process_gap_addressability
from .keyword_matcher import KeywordMatcher, calculate_coverage, match_keywords
from .keyword_score import KeywordScoreResult, calculate_keyword_score
from .qualification_fit import calculate_qualification_fit, check_field_match, extract_experience_years
from .role_detection import detect_job_role, detect_seniority
from .section_coverage import SectionCoverageResult, calculate_section_coverage
from .section_order import validate_section_order
from .structural import generate_structural_suggestions
from .weights import resolve_component_weights

__all__ = [
    "build_action_items",
    "combine_scores",
    "get_score_tier",
    "calibrate",
    "get_focus_areas_by_experience",
    "get_focus_areas_description",
    "get_keyword_urgency_boost",
    "get_quantification_urgency_boost",
    "get_suggestion_mode",
    "get_suggestion_mode_description",
    "get_target_suggestion_count",
    "validate_calibration_signals",
    "CANDIDATE_TYPE_RULES",
    "detect_candidate_type",
    "experience_level_for",
    "ContentQualityResult",
    "calculate_content_quality",
    "FormatResult",
    "check_format",
    "filter_gaps_for_section",
    "process_gap_addressability",
    "KeywordMatcher",
    "calculate_coverage",
    "match_keywords",
    "KeywordScoreResult",
    "calculate_keyword_score",
    "calculate_qualification_fit",
    "check_field_match",
    "extract_experience_years",
    "detect_job_role",
    "detect_seniority",
    "SectionCoverageResult",
    "calculate_section_coverage",
    "validate_section_order",
    "generate_structural_suggestions",
    "resolve_component_weights",
]
