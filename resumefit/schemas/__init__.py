from .candidate import CandidateType, CandidateTypeInput, CandidateTypeResult, ExperienceLevel, JobType
from .keywords import KeywordMatchResult, KeywordRecord, KeywordSpec
from .qualifications import CandidateQualifications, HeldDegree, JobRequirement, QualificationFitResult
from .resume import SECTION_NAMES, ResumeSections
from .scoring import COMPONENT_NAMES, ActionItem, ComponentScore, ComponentWeights, ScoreBreakdown
from .suggestions import (
    CalibrationResult,
    GapProcessingResult,
    GapSummary,
    PriorityBoosts,
    ProcessedGap,
    SectionGaps,
    SectionOrderValidation,
    SectionOrderViolation,
    StructuralSuggestion,
    SuggestionMode,
)

__all__ = [
    "ActionItem",
    "CalibrationResult",
    "CandidateQualifications",
    "CandidateType",
    "GapProcessingResult",
    "GapSummary",
    "CandidateTypeInput",
    "CandidateTypeResult",
    "COMPONENT_NAMES",
    "ComponentScore",
    "ComponentWeights",
    "ExperienceLevel",
    "HeldDegree",
    "JobRequirement",
    "JobType",
    "KeywordMatchResult",
    "KeywordRecord",
    "KeywordSpec",
    "PriorityBoosts",
    "ProcessedGap",
    "SectionGaps",
    "QualificationFitResult",
    "ResumeSections",
    "ScoreBreakdown",
    "SECTION_NAMES",
    "SectionOrderValidation",
    "SectionOrderViolation",
    "StructuralSuggestion",
    "SuggestionMode",
]
