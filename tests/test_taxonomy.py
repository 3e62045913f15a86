import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resumefit.taxonomy import get_default_taxonomy_provider  # noqa: E402
from resumefit.taxonomy.local_taxonomy import LocalTaxonomy  # noqa: E402


class TaxonomyTests(unittest.TestCase):
    def test_synonym_normalization_resolves_canonical_id(self):
        taxonomy = LocalTaxonomy()
        normalized, canonical_id = taxonomy.normalize_skill("  Amazon   Web Services ")
        self.assertEqual(normalized, "amazon web services")
        self.assertEqual(canonical_id, "skill_aws")

    def test_aliases_for_lists_every_surface_of_a_skill(self):
        taxonomy = LocalTaxonomy()
        self.assertIn("k8s", taxonomy.aliases_for("skill_kubernetes"))
        self.assertIn("kubernetes", taxonomy.aliases_for("skill_kubernetes"))
        self.assertEqual(taxonomy.aliases_for("skill_unknown"), ())

    def test_unknown_skill_has_no_canonical_id(self):
        _, canonical_id = LocalTaxonomy().normalize_skill("underwater basket weaving")
        self.assertIsNone(canonical_id)

    def test_java_is_not_an_alias_of_javascript(self):
        _, canonical_id = LocalTaxonomy().normalize_skill("java")
        self.assertNotEqual(canonical_id, "skill_javascript")

    def test_default_provider_is_cached(self):
        self.assertIs(get_default_taxonomy_provider(), get_default_taxonomy_provider())


if __name__ == "__main__":
    unittest.main()
