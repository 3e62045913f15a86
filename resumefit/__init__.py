from resumefit.features.calibrator import calibrate
from resumefit.features.candidate_type import detect_candidate_type
from resumefit.features.qualification_fit import calculate_qualification_fit
from resumefit.features.section_order import validate_section_order
from resumefit.features.structural import generate_structural_suggestions
from resumefit.services.scoring_service import score

__version__ = "0.1.0"

__all__ = [
    "calibrate",
    "calculate_qualification_fit",
    "detect_candidate_type",
    "generate_structural_suggestions",
    "score",
    "validate_section_order",
]
