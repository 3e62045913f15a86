import itertools
import sys
import unittest
from pathlib import Path

from pydantic import ValidationError

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resumefit.features.role_detection import detect_job_role, detect_seniority  # noqa: E402
from resumefit.features.weights import resolve_component_weights  # noqa: E402
from resumefit.schemas.scoring import WEIGHT_SUM_TOLERANCE, ComponentWeights  # noqa: E402

_CANDIDATE_TYPES = ("coop", "fulltime", "career_changer")
_ROLES = (
    "software_engineer",
    "data_scientist",
    "data_analyst",
    "product_manager",
    "designer",
    "marketing",
    "finance",
    "operations",
    "general",
)
_SENIORITY = ("entry", "mid", "senior", "lead", "executive")


class ComponentWeightTests(unittest.TestCase):
    def test_every_profile_sums_to_one(self):
        for candidate_type, role, seniority in itertools.product(_CANDIDATE_TYPES, _ROLES, _SENIORITY):
            weights = resolve_component_weights(candidate_type, role, seniority)
            self.assertLessEqual(abs(weights.total() - 1.0), WEIGHT_SUM_TOLERANCE, (candidate_type, role, seniority))
            self.assertTrue(all(value >= 0 for value in weights.as_dict().values()))

    def test_base_profiles_without_adjustments(self):
        weights = resolve_component_weights("fulltime", "general", "mid")
        self.assertAlmostEqual(weights.keywords, 0.40)
        self.assertAlmostEqual(weights.qualification_fit, 0.15)
        self.assertAlmostEqual(weights.content_quality, 0.20)
        self.assertAlmostEqual(weights.sections, 0.15)
        self.assertAlmostEqual(weights.format, 0.10)

    def test_career_changer_leans_on_qualifications_and_sections(self):
        changer = resolve_component_weights("career_changer", "general", "mid")
        fulltime = resolve_component_weights("fulltime", "general", "mid")
        self.assertGreater(changer.qualification_fit, fulltime.qualification_fit)
        self.assertGreater(changer.sections, fulltime.sections)
        self.assertLess(changer.keywords, fulltime.keywords)

    def test_role_adjustment_applies(self):
        weights = resolve_component_weights("fulltime", "software_engineer", "mid")
        self.assertAlmostEqual(weights.keywords, 0.43)
        self.assertAlmostEqual(weights.sections, 0.12)

    def test_designer_shifts_weight_to_format(self):
        weights = resolve_component_weights("coop", "designer", "mid")
        self.assertAlmostEqual(weights.format, 0.15)
        self.assertAlmostEqual(weights.keywords, 0.37)

    def test_seniority_only_adjusts_fulltime(self):
        senior = resolve_component_weights("fulltime", "general", "senior")
        self.assertAlmostEqual(senior.keywords, 0.35)
        self.assertAlmostEqual(senior.qualification_fit, 0.20)
        coop = resolve_component_weights("coop", "general", "senior")
        self.assertEqual(coop, resolve_component_weights("coop", "general", "mid"))

    def test_invalid_weight_sum_is_rejected(self):
        with self.assertRaises(ValidationError):
            ComponentWeights(keywords=0.5, qualification_fit=0.5, content_quality=0.5, sections=0.0, format=0.0)


class RoleDetectionTests(unittest.TestCase):
    def test_role_families(self):
        self.assertEqual(detect_job_role("Senior Software Engineer, Payments"), "software_engineer")
        self.assertEqual(detect_job_role("Machine Learning Scientist"), "data_scientist")
        self.assertEqual(detect_job_role("Product Designer"), "designer")
        self.assertEqual(detect_job_role("Registered Nurse"), "general")
        self.assertEqual(detect_job_role(None), "general")

    def test_seniority_levels(self):
        self.assertEqual(detect_seniority("Senior Software Engineer", "fulltime"), "senior")
        self.assertEqual(detect_seniority("Director of Engineering", "fulltime"), "executive")
        self.assertEqual(detect_seniority("Tech Lead, Platform", "fulltime"), "lead")
        self.assertEqual(detect_seniority("Junior Developer", "fulltime"), "entry")
        self.assertEqual(detect_seniority("Backend Developer", "fulltime"), "mid")

    def test_seniority_is_not_read_for_students_or_career_changers(self):
        self.assertEqual(detect_seniority("Senior Software Engineer", "coop"), "mid")
        self.assertEqual(detect_seniority("Senior Software Engineer", "career_changer"), "mid")


if __name__ == "__main__":
    unittest.main()
