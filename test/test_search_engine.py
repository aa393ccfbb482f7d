"""Tests for weighted recursive document scoring."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from FungiLens.core.models import Document, FieldWeights
from FungiLens.services.search import SearchSettings, WeightedSearchEngine, normalize_query


class TestScoring(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = WeightedSearchEngine()

    def test_word_start_match_in_value(self) -> None:
        doc = Document("fly", {"commonName": "Fly Agaric", "taxonomy": {"family": "Amanitaceae"}})
        result = self.engine.score(doc, "agaric")
        self.assertIn("commonName", result.matched_paths)
        self.assertGreater(result.score, 0)
        self.assertEqual(result.score, 100)

    def test_list_elements_credit_the_owning_field(self) -> None:
        doc = Document("x", {"ecologyAndHabitat": {"substrate": ["dead wood", "soil"]}})
        result = self.engine.score(doc, "wood")
        self.assertEqual(result.matched_paths, frozenset({"ecologyAndHabitat.substrate"}))
        self.assertIn("ecologyAndHabitat", result.matched_perspectives)
        self.assertEqual(result.score, 50)

    def test_short_query_does_not_filter(self) -> None:
        doc = Document("fly", {"commonName": "Fly Agaric"})
        for query in ("", "a", "  A  ", None):
            with self.subTest(query=query):
                result = self.engine.score(doc, query)
                self.assertEqual(result.score, 0)
                self.assertFalse(result.filtering)
                self.assertEqual(result.matched_paths, frozenset())

    def test_field_name_match_earns_half_weight(self) -> None:
        doc = Document("x", {"habitat": "forest"})
        result = self.engine.score(doc, "habitat")
        self.assertEqual(result.score, 25)
        self.assertEqual(result.matched_paths, frozenset({"habitat"}))

    def test_query_is_case_insensitive(self) -> None:
        doc = Document("fly", {"commonName": "Fly Agaric"})
        self.assertEqual(self.engine.score(doc, "FLY").score, 100)
        self.assertEqual(self.engine.score(doc, "FLY").query, "fly")

    def test_numbers_and_booleans_are_text(self) -> None:
        doc = Document("x", {"firstDocumented": 1753, "edible": True})
        self.assertEqual(self.engine.score(doc, "1753").score, 20)
        self.assertEqual(self.engine.score(doc, "true").score, 20)

    def test_objects_inside_lists(self) -> None:
        doc = Document("x", {"lookalikes": [{"name": "Amanita caesarea"}, None, [["caesarea"]]]})
        result = self.engine.score(doc, "caesarea")
        self.assertEqual(result.matched_paths, frozenset({"lookalikes.name", "lookalikes"}))
        self.assertEqual(result.score, 100 + 20)

    def test_depth_bound(self) -> None:
        doc = Document("x", {"a": {"b": {"c": "target"}}})
        shallow = WeightedSearchEngine(settings=SearchSettings(max_depth=1))
        self.assertEqual(shallow.score(doc, "target").score, 0)
        self.assertEqual(self.engine.score(doc, "target").score, 20)

    def test_custom_weights(self) -> None:
        engine = WeightedSearchEngine(weights=FieldWeights(weights={"habitat": 10}, default=1))
        doc = Document("x", {"habitat": "oak forest", "notes": "forest floor"})
        self.assertEqual(engine.score(doc, "forest").score, 11)

    def test_empty_document_scores_zero(self) -> None:
        result = self.engine.score(Document("x", {}), "agaric")
        self.assertEqual(result.score, 0)
        self.assertTrue(result.filtering)


class TestProperties(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = WeightedSearchEngine()

    def test_deterministic_and_order_independent(self) -> None:
        data = {"commonName": "Oyster Mushroom", "tags": ["edible"], "notes": "edible when cooked"}
        reordered = dict(reversed(list(data.items())))
        first = self.engine.score(Document("a", data), "edible")
        second = self.engine.score(Document("a", data), "edible")
        third = self.engine.score(Document("a", reordered), "edible")
        self.assertEqual(first, second)
        self.assertEqual(first.score, third.score)
        self.assertEqual(first.matched_paths, third.matched_paths)

    def test_adding_a_field_never_lowers_the_score(self) -> None:
        base = {"commonName": "Oyster Mushroom"}
        extended = dict(base, habitat="oyster beds")
        before = self.engine.score(Document("a", base), "oyster").score
        after = self.engine.score(Document("a", extended), "oyster").score
        self.assertGreaterEqual(after, before)
        self.assertGreater(after, before)

    def test_score_all_keeps_input_order(self) -> None:
        docs = [Document("a", {"name": "x"}), Document("b", {"name": "oyster"})]
        results = self.engine.score_all(docs, "oyster")
        self.assertEqual([r.document.id for r in results], ["a", "b"])


class TestMatching(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = WeightedSearchEngine()

    def test_word_start_and_substring(self) -> None:
        self.assertTrue(self.engine.matches_word("Fly Agaric", "ag"))
        self.assertFalse(self.engine.matches_word("Fly Agaric", "ga"))
        self.assertTrue(self.engine.matches_word("Fly Agaric", "gar"))

    def test_special_characters_are_literal(self) -> None:
        self.assertTrue(self.engine.matches_word("c++ notes", "c++"))
        self.assertFalse(self.engine.matches_word("abc", "a.c"))

    def test_none_never_matches(self) -> None:
        self.assertFalse(self.engine.matches_word(None, "abc"))
        self.assertFalse(self.engine.matches_word("abc", ""))

    def test_search_in_object_ignores_non_mappings(self) -> None:
        matched: set[str] = set()
        self.assertEqual(self.engine.search_in_object("agaric", "agaric", "", matched), 0)
        self.assertEqual(matched, set())

    def test_normalize_query(self) -> None:
        self.assertEqual(normalize_query("  Fly Agaric "), "fly agaric")
        self.assertEqual(normalize_query(None), "")

    def test_filter_query_respects_minimum_length(self) -> None:
        self.assertEqual(self.engine.filter_query("  Wood "), "wood")
        self.assertEqual(self.engine.filter_query(" A "), "")
        self.assertEqual(self.engine.filter_query(None), "")
        strict = WeightedSearchEngine(settings=SearchSettings(min_query_length=5))
        self.assertEqual(strict.filter_query("wood"), "")


class TestPerspectiveTranslation(unittest.TestCase):
    def test_first_and_last_segments(self) -> None:
        engine = WeightedSearchEngine()
        perspectives = engine.extract_perspectives(
            ["taxonomy.family", "notes", "medicinalAndHealth.activeCompounds", "lookalikes.edibility"]
        )
        self.assertEqual(
            perspectives,
            ("safetyAndIdentification", "medicinalAndHealth", "taxonomy"),
        )

    def test_unknown_fields_credit_nothing(self) -> None:
        self.assertEqual(WeightedSearchEngine().extract_perspectives(["notes", "foo.bar"]), ())


if __name__ == "__main__":
    unittest.main()
