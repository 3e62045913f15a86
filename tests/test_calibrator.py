import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resumefit.features.calibrator import (  # noqa: E402
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


class SuggestionModeTests(unittest.TestCase):
    def test_mode_boundaries(self):
        expected = {
            0: "Transformation",
            29: "Transformation",
            30: "Improvement",
            49: "Improvement",
            50: "Optimization",
            69: "Optimization",
            70: "Validation",
            100: "Validation",
        }
        for score, mode in expected.items():
            self.assertEqual(get_suggestion_mode(score), mode, score)

    def test_target_ranges(self):
        self.assertEqual(get_target_suggestion_count("Transformation"), (8, 12))
        self.assertEqual(get_target_suggestion_count("Improvement"), (5, 8))
        self.assertEqual(get_target_suggestion_count("Optimization"), (3, 5))
        self.assertEqual(get_target_suggestion_count("Validation"), (1, 2))

    def test_urgency_boosts(self):
        self.assertEqual([get_keyword_urgency_boost(count) for count in (0, 1, 2, 4, 5, 20)], [0, 0, 1, 1, 2, 2])
        self.assertEqual(
            [get_quantification_urgency_boost(value) for value in (0, 29.9, 30, 49, 50, 79, 80, 100)],
            [2, 2, 1, 1, 0, 0, -1, -1],
        )

    def test_focus_areas(self):
        self.assertEqual(
            get_focus_areas_by_experience("student"),
            ["quantification_projects", "academic_framing", "gpa_guidance", "skill_expansion"],
        )
        self.assertEqual(len(get_focus_areas_by_experience("career_changer")), 4)
        self.assertEqual(
            get_focus_areas_description(["metric_enhancement", "custom_tag"]),
            "Strengthening metrics and numbers, custom_tag",
        )


class CalibrateTests(unittest.TestCase):
    def test_transformation_scenario(self):
        result = calibrate(25, "student", 6, 20, 10)
        self.assertEqual(result.mode, "Transformation")
        self.assertEqual(result.target_count_range, (8, 12))
        self.assertEqual(result.suggestions_target_count, 10)
        self.assertEqual(result.priority_boosts.keyword, 2)
        self.assertEqual(result.priority_boosts.quantification, 2)
        self.assertEqual(result.priority_boosts.experience, 1)
        self.assertEqual(
            result.reasoning,
            "ATS Score 25 → Transformation mode | 6 missing keywords (+2 urgency) | 20% quantification (+2 urgency)",
        )

    def test_validation_scenario(self):
        result = calibrate(88, "experienced", 1, 85, 14)
        self.assertEqual(result.mode, "Validation")
        self.assertEqual(result.suggestions_target_count, 1)
        self.assertEqual(result.priority_boosts.keyword, 0)
        self.assertEqual(result.priority_boosts.quantification, -1)
        self.assertEqual(result.priority_boosts.experience, -1)
        self.assertIn("(focus shift)", result.reasoning)
        self.assertIn("(-depriorize)", result.reasoning)
        self.assertEqual(result.focus_areas[0], "leadership_language")

    def test_out_of_range_inputs_are_clamped(self):
        result = calibrate(150, "career_changer", -3, -10, -1)
        self.assertEqual(result.mode, "Validation")
        self.assertEqual(result.priority_boosts.keyword, 0)
        self.assertEqual(result.priority_boosts.quantification, 2)
        self.assertTrue(result.reasoning.startswith("ATS Score 100 → Validation mode"))

    def test_unknown_experience_level_raises(self):
        with self.assertRaises(ValueError):
            calibrate(40, "expert", 0, 50, 5)

    def test_mode_description(self):
        self.assertEqual(
            get_suggestion_mode_description("Improvement"),
            "Your resume has a solid foundation. Let's address the key gaps.",
        )

    def test_signal_validation_reports_every_problem(self):
        errors = validate_calibration_signals(101, "expert", -1, 120, 0)
        self.assertEqual(len(errors), 5)
        self.assertEqual(validate_calibration_signals(50, "student", 2, 40, 8), [])


if __name__ == "__main__":
    unittest.main()
