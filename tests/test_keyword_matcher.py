import sys
import unittest
from pathlib import Path
from unittest import mock

from pydantic import ValidationError

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resumefit.features.keyword_matcher import KeywordMatcher, calculate_coverage  # noqa: E402
from resumefit.features.keyword_score import calculate_keyword_score, keyword_action_items  # noqa: E402
from resumefit.schemas.keywords import KeywordRecord, KeywordSpec  # noqa: E402
from resumefit.schemas.resume import ResumeSections  # noqa: E402


def _sections() -> ResumeSections:
    return ResumeSections(
        summary="Backend engineer focused on reliable APIs and cloud platforms.",
        skills="Languages: Python, JavaScript, TypeScript\nTools: Docker, PostgreSQL",
        experience=(
            "Acme Corp, Software Engineer\n"
            "- Deployed services on k8s clusters serving 50,000 users\n"
            "- Built pipelines for data ingestion across three teams\n"
            "Maintained internal tooling for release management"
        ),
    )


class KeywordMatcherTests(unittest.TestCase):
    def setUp(self):
        self.matcher = KeywordMatcher(semantic_enabled=True)

    def _record(self, keyword, **extra):
        result = self.matcher.match([KeywordSpec(keyword=keyword, **extra)], _sections())
        return result.records[0]

    def test_exact_match_in_skills_section(self):
        record = self._record("Python", importance="high")
        self.assertTrue(record.found)
        self.assertEqual(record.match_type, "exact")
        self.assertEqual(record.placement, ("skills",))
        self.assertEqual(record.best_placement, "skills_section")

    def test_java_does_not_match_javascript(self):
        record = self._record("Java")
        self.assertFalse(record.found)
        self.assertEqual(record.match_type, "none")
        self.assertEqual(record.placement, ())

    def test_caller_aliases_count_as_exact(self):
        record = self._record("Postgres", aliases=("PostgreSQL",))
        self.assertEqual(record.match_type, "exact")

    def test_taxonomy_synonym_is_fuzzy(self):
        record = self._record("Kubernetes")
        self.assertTrue(record.found)
        self.assertEqual(record.match_type, "fuzzy")
        self.assertEqual(record.placement, ("experience",))
        self.assertEqual(record.best_placement, "experience_bullet")

    def test_edit_distance_is_fuzzy(self):
        record = self._record("Typescrpt")
        self.assertEqual(record.match_type, "fuzzy")

    def test_multi_word_keyword_matches_semantically(self):
        record = self._record("data pipelines")
        self.assertTrue(record.found)
        self.assertEqual(record.match_type, "semantic")

    def test_semantic_tier_can_be_disabled(self):
        matcher = KeywordMatcher(semantic_enabled=False)
        result = matcher.match([KeywordSpec(keyword="data pipelines")], _sections())
        self.assertFalse(result.records[0].found)

    def test_later_tiers_are_not_evaluated_after_an_exact_hit(self):
        with mock.patch.object(self.matcher, "_fuzzy_hits") as fuzzy, mock.patch.object(
            self.matcher, "_semantic_hits"
        ) as semantic:
            record = self._record("Docker")
        self.assertEqual(record.match_type, "exact")
        fuzzy.assert_not_called()
        semantic.assert_not_called()

    def test_semantic_tier_runs_only_when_fuzzy_misses(self):
        with mock.patch.object(self.matcher, "_semantic_hits", return_value=[]) as semantic:
            self.assertEqual(self._record("Typescrpt").match_type, "fuzzy")
            semantic.assert_not_called()
            self.assertFalse(self._record("Haskell").found)
            semantic.assert_called_once()

    def test_records_keep_input_order_and_count(self):
        keywords = ["Go", "Python", "Docker", "Python"]
        result = self.matcher.match([{"keyword": item} for item in keywords], _sections())
        self.assertEqual([record.keyword for record in result.records], keywords)
        self.assertEqual(result.missing, ["Go"])

    def test_full_text_only_hits_are_placed_as_other(self):
        result = self.matcher.match(
            [KeywordSpec(keyword="Terraform")],
            ResumeSections(skills="Python"),
            "Jane Doe\nInfrastructure as code with Terraform",
        )
        self.assertEqual(result.records[0].placement, ("other",))
        self.assertEqual(result.records[0].best_placement, "other")

    def test_invalid_importance_is_rejected(self):
        with self.assertRaises(ValidationError):
            KeywordSpec(keyword="Python", importance="urgent")

    def test_found_flag_and_match_type_stay_consistent(self):
        with self.assertRaises(ValidationError):
            KeywordRecord(keyword="Python", found=False, match_type="exact")
        with self.assertRaises(ValidationError):
            KeywordRecord(keyword="Python", found=True, match_type="none")


class CoverageTests(unittest.TestCase):
    def test_no_keywords_means_full_coverage(self):
        self.assertEqual(calculate_coverage([]), 100.0)

    def test_coverage_is_importance_weighted(self):
        records = [
            KeywordRecord(keyword="Python", importance="high", found=True, match_type="exact", placement=("skills",)),
            KeywordRecord(keyword="Go", importance="low"),
        ]
        self.assertAlmostEqual(calculate_coverage(records), round(1.0 / 1.3 * 100, 2))

    def test_coverage_never_decreases_when_a_keyword_becomes_found(self):
        missing = KeywordRecord(keyword="Go", importance="medium")
        found = KeywordRecord(keyword="Go", importance="medium", found=True, match_type="fuzzy", placement=("skills",))
        base = KeywordRecord(keyword="Python", importance="high", found=True, match_type="exact", placement=("skills",))
        self.assertLessEqual(calculate_coverage([base, missing]), calculate_coverage([base, found]))


class KeywordScoreTests(unittest.TestCase):
    def test_all_required_found_in_skills_scores_full(self):
        records = [
            KeywordRecord(
                keyword="Python",
                importance="high",
                found=True,
                match_type="exact",
                placement=("skills",),
                best_placement="skills_section",
            )
        ]
        self.assertEqual(calculate_keyword_score(records).score, 100)

    def test_missing_required_keyword_applies_penalty(self):
        records = [
            KeywordRecord(
                keyword="Python",
                importance="high",
                found=True,
                match_type="exact",
                placement=("skills",),
                best_placement="skills_section",
            ),
            KeywordRecord(keyword="Go", importance="high"),
        ]
        result = calculate_keyword_score(records)
        self.assertEqual(result.score, 44)
        self.assertEqual(result.penalty_multiplier, 0.88)
        self.assertEqual(result.missing_required, ["Go"])
        self.assertEqual(keyword_action_items(result)[0], ("critical", "Add missing REQUIRED keywords: Go"))

    def test_no_required_keywords_starts_from_full_base(self):
        records = [KeywordRecord(keyword="GraphQL", requirement="preferred")]
        result = calculate_keyword_score(records)
        self.assertEqual(result.required_score, 1.0)
        self.assertEqual(result.score, 100)

    def test_semantic_required_match_asks_for_exact_terminology(self):
        records = [
            KeywordRecord(
                keyword="data pipelines",
                found=True,
                match_type="semantic",
                placement=("experience",),
                best_placement="experience_bullet",
            )
        ]
        items = keyword_action_items(calculate_keyword_score(records))
        self.assertEqual(items, [("high", "Use exact terminology for required skills: data pipelines")])


if __name__ == "__main__":
    unittest.main()
