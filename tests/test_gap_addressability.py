import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resumefit.features.gap_addressability import (  # noqa: E402
    filter_gaps_for_section,
    gap_impact,
    gap_priority,
    process_gap_addressability,
)

_SECTIONS = {
    "skills": "Python, MySQL, Flask",
    "experience": "- Worked in two-week sprints with a Scrum team\n- Built CI/CD pipelines for the billing service",
}

_RECORDS = [
    {"keyword": "Python", "importance": "high", "found": True, "match_type": "exact", "placement": ["skills"]},
    {"keyword": "SQL", "importance": "high"},
    {"keyword": "Agile", "importance": "medium"},
    {"keyword": "Django", "importance": "medium", "requirement": "preferred"},
    {"keyword": "PhD", "importance": "high", "requirement": "preferred", "category": "qualifications"},
    {"keyword": "Rust", "importance": "low"},
    {"keyword": "Stakeholder management", "importance": "medium", "category": "soft_skills"},
    {"keyword": "GitHub Actions", "importance": "medium", "requirement": "preferred"},
]


class GapAddressabilityTests(unittest.TestCase):
    def setUp(self):
        self.result = process_gap_addressability(_RECORDS, None, _SECTIONS)
        self.by_keyword = {gap.keyword: gap for gap in self.result.processed_gaps}

    def test_only_missing_keywords_become_gaps(self):
        self.assertNotIn("Python", self.by_keyword)
        self.assertEqual(self.result.summary.total_gaps, 7)

    def test_equivalent_wording_is_a_terminology_fix(self):
        sql = self.by_keyword["SQL"]
        self.assertEqual(sql.addressability, "terminology")
        self.assertEqual(sql.evidence, "MySQL")
        self.assertEqual(sql.instruction, 'Change "MySQL" to "SQL" for exact JD match')
        self.assertEqual(self.by_keyword["Agile"].evidence, "Scrum")

    def test_broader_term_in_resume_allows_explicit_mention(self):
        gap = self.by_keyword["GitHub Actions"]
        self.assertEqual(gap.addressability, "terminology")
        self.assertEqual(gap.evidence, "CI/CD")
        self.assertEqual(gap.reason, 'Resume uses "CI/CD", can add "GitHub Actions" as explicit mention')

    def test_related_technology_is_a_potential_addition(self):
        gap = self.by_keyword["Django"]
        self.assertEqual(gap.addressability, "potential")
        self.assertEqual(gap.evidence, "Python")
        self.assertEqual(self.by_keyword["Rust"].addressability, "potential")
        self.assertIsNone(self.by_keyword["Rust"].evidence)

    def test_qualifications_and_non_skills_are_unfixable(self):
        self.assertEqual(self.by_keyword["PhD"].addressability, "unfixable")
        self.assertEqual(self.by_keyword["PhD"].target_sections, ("education", "summary"))
        self.assertEqual(self.by_keyword["Stakeholder management"].addressability, "unfixable")

    def test_priority_and_impact_follow_importance_and_requirement(self):
        self.assertEqual(self.by_keyword["SQL"].priority, "critical")
        self.assertEqual(self.by_keyword["SQL"].potential_impact, 12)
        self.assertEqual(self.by_keyword["Django"].priority, "low")
        self.assertEqual(self.by_keyword["Django"].potential_impact, 4)
        self.assertEqual(gap_priority("high", "preferred"), "medium")
        self.assertEqual(gap_priority("low", "required"), "medium")
        self.assertEqual(gap_impact("high", "preferred"), 6)

    def test_gaps_are_sorted_by_priority_keeping_input_order(self):
        self.assertEqual(
            [gap.keyword for gap in self.result.processed_gaps],
            ["SQL", "Agile", "Stakeholder management", "PhD", "Rust", "Django", "GitHub Actions"],
        )

    def test_summary_excludes_unfixable_impact(self):
        summary = self.result.summary
        self.assertEqual(summary.terminology_fixes, 3)
        self.assertEqual(summary.potential_additions, 2)
        self.assertEqual(summary.unfixable_gaps, 2)
        self.assertEqual(summary.total_potential_impact, 32)

    def test_keyword_present_only_in_full_text_is_flagged_as_not_prominent(self):
        result = process_gap_addressability([{"keyword": "Kafka"}], "Streamed events through Kafka topics", _SECTIONS)
        gap = result.processed_gaps[0]
        self.assertEqual(gap.addressability, "terminology")
        self.assertEqual(gap.evidence, "Kafka")

    def test_no_missing_keywords_gives_empty_result(self):
        result = process_gap_addressability([], "", None)
        self.assertEqual(result.processed_gaps, ())
        self.assertEqual(result.summary.total_gaps, 0)


class FilterGapsForSectionTests(unittest.TestCase):
    def setUp(self):
        self.gaps = process_gap_addressability(_RECORDS, None, _SECTIONS).processed_gaps

    def test_projects_section_buckets(self):
        filtered = filter_gaps_for_section(self.gaps, "projects")
        self.assertEqual([gap.keyword for gap in filtered.terminology_fixes], ["SQL", "Agile"])
        self.assertEqual([gap.keyword for gap in filtered.potential_additions], ["Rust"])
        self.assertEqual([gap.keyword for gap in filtered.opportunities], ["Django", "GitHub Actions"])
        self.assertEqual(filtered.cannot_fix, ())

    def test_education_section_only_holds_unfixable_qualification(self):
        filtered = filter_gaps_for_section(self.gaps, "education")
        self.assertEqual([gap.keyword for gap in filtered.cannot_fix], ["PhD"])
        self.assertEqual(filtered.opportunities, ())

    def test_empty_gap_list(self):
        filtered = filter_gaps_for_section([], "skills")
        self.assertEqual(filtered.terminology_fixes, ())
        self.assertEqual(filtered.cannot_fix, ())


if __name__ == "__main__":
    unittest.main()
