import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resumefit.features.aggregator import build_action_items, get_score_tier, potential_impact  # noqa: E402

_COMPONENT_SCORES = {
    "keywords": 60,
    "qualification_fit": 40,
    "content_quality": 70,
    "sections": 80,
    "format": 90,
}


class ScoreTierTests(unittest.TestCase):
    def test_tier_boundaries(self):
        cases = [
            (0, "weak"),
            (54, "weak"),
            (54.9, "weak"),
            (55, "moderate"),
            (69, "moderate"),
            (70, "strong"),
            (84, "strong"),
            (85, "excellent"),
            (100, "excellent"),
        ]
        for overall, expected in cases:
            self.assertEqual(get_score_tier(overall), expected, overall)


class ActionItemTests(unittest.TestCase):
    def setUp(self):
        self.raw_items = {
            "keywords": [("medium", "Add Go"), ("critical", "Add Python")],
            "qualifications": [("high", "Close the degree gap")],
            "content": [("high", "Quantify bullets"), ("medium", "Use stronger verbs")],
            "sections": [("high", "Add a skills section"), ("low", "Reorder sections")],
            "format": [("high", "Quantify bullets"), ("medium", "Trim length")],
        }

    def test_items_are_ordered_deduplicated_and_capped(self):
        items = build_action_items(self.raw_items, _COMPONENT_SCORES)
        self.assertEqual(
            [item.message for item in items],
            ["Add Python", "Quantify bullets", "Close the degree gap", "Add a skills section", "Add Go"],
        )
        self.assertEqual([item.priority for item in items], ["critical", "high", "high", "high", "medium"])

    def test_first_occurrence_of_duplicate_message_wins(self):
        items = build_action_items(self.raw_items, _COMPONENT_SCORES)
        quantify = [item for item in items if item.message == "Quantify bullets"]
        self.assertEqual(len(quantify), 1)
        self.assertEqual(quantify[0].category, "content")
        self.assertEqual(quantify[0].potential_impact, 10)

    def test_equal_impact_prefers_weaker_component(self):
        items = build_action_items(
            {"sections": [("high", "Add a skills section")], "qualifications": [("high", "Close the degree gap")]},
            _COMPONENT_SCORES,
        )
        self.assertEqual([item.category for item in items], ["qualifications", "sections"])

    def test_short_lists_are_not_padded(self):
        items = build_action_items({"format": [("low", "Trim length")]}, _COMPONENT_SCORES)
        self.assertEqual(len(items), 1)
        self.assertEqual(items[0].potential_impact, 2)

    def test_potential_impact_lookup(self):
        self.assertEqual(potential_impact("keywords", "critical"), 15)
        self.assertEqual(potential_impact("qualifications", "low"), 8)
        self.assertEqual(potential_impact("sections", "medium"), 4)
        self.assertEqual(potential_impact("keywords", "low"), 0)


if __name__ == "__main__":
    unittest.main()
