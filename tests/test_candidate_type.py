import sys
import unittest
from pathlib import Path

from pydantic import ValidationError

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resumefit.features.candidate_type import (  # noqa: E402
    CANDIDATE_TYPE_RULES,
    detect_candidate_type,
    experience_level_for,
)
from resumefit.schemas.candidate import CandidateTypeInput, CandidateTypeResult  # noqa: E402


class CandidateTypeTests(unittest.TestCase):
    def test_explicit_coop_wins_over_every_other_signal(self):
        result = detect_candidate_type(
            {
                "job_type": "coop",
                "career_goal": "switching-careers",
                "resume_role_count": 9,
                "has_active_education": False,
                "total_experience_years": 12,
            }
        )
        self.assertEqual(result.candidate_type, "coop")
        self.assertEqual(result.confidence, 1.0)
        self.assertEqual(result.detected_from, "user_selection")
        self.assertEqual(result.rule, "explicit_coop")

    def test_fulltime_switching_careers_is_career_changer(self):
        result = detect_candidate_type({"job_type": "fulltime", "career_goal": "switching-careers"})
        self.assertEqual(result.candidate_type, "career_changer")
        self.assertEqual(result.confidence, 0.95)
        self.assertEqual(result.detected_from, "onboarding")

    def test_fulltime_with_active_education_and_few_roles(self):
        result = detect_candidate_type(
            {"job_type": "fulltime", "has_active_education": True, "resume_role_count": 2}
        )
        self.assertEqual(result.candidate_type, "career_changer")
        self.assertEqual(result.confidence, 0.70)
        self.assertEqual(result.rule, "fulltime_active_education_few_roles")

    def test_fulltime_with_active_education_and_missing_role_count(self):
        result = detect_candidate_type({"job_type": "fulltime", "has_active_education": True})
        self.assertEqual(result.candidate_type, "career_changer")

    def test_explicit_fulltime(self):
        result = detect_candidate_type(
            {"job_type": "fulltime", "has_active_education": True, "resume_role_count": 3}
        )
        self.assertEqual(result.candidate_type, "fulltime")
        self.assertEqual(result.confidence, 0.90)
        self.assertEqual(result.detected_from, "user_selection")

    def test_inferred_coop_from_resume(self):
        result = detect_candidate_type({"has_active_education": True, "resume_role_count": 1})
        self.assertEqual(result.candidate_type, "coop")
        self.assertEqual(result.confidence, 0.80)
        self.assertEqual(result.detected_from, "resume_analysis")

    def test_inferred_fulltime_from_resume(self):
        result = detect_candidate_type({"resume_role_count": 4, "total_experience_years": 6})
        self.assertEqual(result.candidate_type, "fulltime")
        self.assertEqual(result.confidence, 0.85)
        self.assertEqual(result.rule, "inferred_fulltime")

    def test_default_when_no_rule_applies(self):
        for signals in (None, {}, {"resume_role_count": 3, "total_experience_years": 1}):
            result = detect_candidate_type(signals)
            self.assertEqual(result.candidate_type, "fulltime")
            self.assertEqual(result.confidence, 0.50)
            self.assertEqual(result.detected_from, "default")

    def test_exactly_one_rule_is_reported(self):
        rule_ids = {rule.rule_id for rule in CANDIDATE_TYPE_RULES} | {"default"}
        result = detect_candidate_type(CandidateTypeInput(job_type="fulltime"))
        self.assertIn(result.rule, rule_ids)

    def test_negative_counts_are_clamped(self):
        signals = CandidateTypeInput(resume_role_count=-2, total_experience_years=-1.5)
        self.assertEqual(signals.resume_role_count, 0)
        self.assertEqual(signals.total_experience_years, 0)

    def test_invalid_job_type_and_confidence_are_rejected(self):
        with self.assertRaises(ValidationError):
            CandidateTypeInput(job_type="internship")
        with self.assertRaises(ValidationError):
            CandidateTypeResult(candidate_type="coop", confidence=1.5, detected_from="default", rule="default")

    def test_experience_levels(self):
        self.assertEqual(experience_level_for("coop"), "student")
        self.assertEqual(experience_level_for("career_changer"), "career_changer")
        self.assertEqual(experience_level_for("fulltime"), "experienced")


if __name__ == "__main__":
    unittest.main()
