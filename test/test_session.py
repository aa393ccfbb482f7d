"""Tests for the search session: events, channel and projection refresh."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from FungiLens.core.extractor import PerspectiveExtractor
from FungiLens.core.models import Document, Visibility
from FungiLens.core.perspectives import PerspectiveTaxonomy
from FungiLens.services import (
    EventChannel,
    PerspectiveAggregator,
    PerspectivesChanged,
    ProjectionChanged,
    QueryChanged,
    SearchCompleted,
    SearchSession,
    WeightedSearchEngine,
)


def _session() -> SearchSession:
    documents = [
        Document(
            "amanita-muscaria",
            {
                "commonName": "Fly Agaric",
                "edibility": "no",
                "taxonomy": {"genus": "Amanita"},
                "safetyAndIdentification": {"edibility": "poisonous"},
            },
        ),
        Document(
            "pleurotus-ostreatus",
            {
                "commonName": "Oyster Mushroom",
                "taxonomy": {"genus": "Pleurotus"},
                "ecologyAndHabitat": {"substrate": ["dead wood"]},
            },
        ),
    ]
    taxonomy = PerspectiveTaxonomy()
    return SearchSession(
        documents=documents,
        engine=WeightedSearchEngine(taxonomy=taxonomy),
        aggregator=PerspectiveAggregator(),
        extractor=PerspectiveExtractor(taxonomy),
    )


class TestSearchSession(unittest.TestCase):
    def test_initially_everything_visible(self) -> None:
        session = _session()
        self.assertEqual(set(session.visibility.values()), {Visibility.VISIBLE})
        self.assertIsNone(session.last_ranking)

    def test_search_publishes_completion(self) -> None:
        session = _session()
        events: list[SearchCompleted] = []
        session.subscribe(SearchCompleted, events.append)

        ranking = session.search("agaric")

        self.assertEqual(len(events), 1)
        self.assertEqual(events[0].query, "agaric")
        self.assertEqual(events[0].visible_count, 1)
        self.assertEqual(events[0].total_count, 2)
        self.assertIs(session.last_ranking, ranking)
        self.assertEqual(session.visibility["pleurotus-ostreatus"], Visibility.HIDDEN)

    def test_visibility_snapshots_are_replaced_not_mutated(self) -> None:
        session = _session()
        session.search("agaric")
        before = session.visibility
        session.search("oyster")
        self.assertEqual(before["amanita-muscaria"], Visibility.VISIBLE)
        self.assertEqual(session.visibility["amanita-muscaria"], Visibility.HIDDEN)
        with self.assertRaises(TypeError):
            session.visibility["amanita-muscaria"] = Visibility.VISIBLE  # type: ignore[index]

    def test_failing_subscriber_is_isolated(self) -> None:
        session = _session()
        received: list[SearchCompleted] = []

        def broken(_event: SearchCompleted) -> None:
            raise RuntimeError("boom")

        session.subscribe(SearchCompleted, broken)
        session.subscribe(SearchCompleted, received.append)
        with self.assertLogs("FungiLens", level="WARNING") as captured:
            session.search("oyster")

        self.assertEqual(len(received), 1)
        self.assertTrue(any("boom" in line for line in captured.output))

    def test_unsubscribe(self) -> None:
        session = _session()
        received: list[SearchCompleted] = []
        session.subscribe(SearchCompleted, received.append)
        session.unsubscribe(SearchCompleted, received.append)
        session.unsubscribe(SearchCompleted, received.append)
        session.search("oyster")
        self.assertEqual(received, [])

    def test_perspective_change_refreshes_displayed_fields(self) -> None:
        session = _session()
        initial = session.display("amanita-muscaria", "edibility")
        self.assertEqual(initial, {"root": "no", "safetyAndIdentification": "poisonous"})

        events: list[ProjectionChanged] = []
        session.subscribe(ProjectionChanged, events.append)
        session.set_active_perspectives(["taxonomy", "taxonomy"])

        self.assertEqual(session.active_perspectives, ("taxonomy",))
        self.assertEqual(len(events), 1)
        (projection,) = events[0].projections.values()
        self.assertEqual(projection, {"root": "no"})

    def test_hide_stops_refreshing(self) -> None:
        session = _session()
        session.display("amanita-muscaria", "edibility")
        session.hide("amanita-muscaria", "edibility")
        self.assertEqual(dict(session.set_active_perspectives([])), {})

    def test_empty_collection_reports_the_query(self) -> None:
        taxonomy = PerspectiveTaxonomy()
        session = SearchSession(
            documents=[],
            engine=WeightedSearchEngine(taxonomy=taxonomy),
            aggregator=PerspectiveAggregator(),
            extractor=PerspectiveExtractor(taxonomy),
        )
        events: list[SearchCompleted] = []
        session.subscribe(SearchCompleted, events.append)

        ranking = session.search("  Wood ")
        self.assertEqual(ranking.summary.query, "wood")
        self.assertEqual((events[0].visible_count, events[0].total_count), (0, 0))

        self.assertEqual(session.search("a").summary.query, "")

    def test_unknown_perspectives_are_ignored(self) -> None:
        session = _session()
        session.display("amanita-muscaria", "edibility")
        projections = session.set_active_perspectives(["lookalikes"])
        self.assertEqual(
            list(projections.values()),
            [{"root": "no", "safetyAndIdentification": "poisonous"}],
        )

    def test_unknown_document(self) -> None:
        session = _session()
        with self.assertRaises(KeyError):
            session.get("missing")
        with self.assertRaises(KeyError):
            session.display("missing", "edibility")


class TestEventChannel(unittest.TestCase):
    def test_pump_processes_events_in_order(self) -> None:
        session = _session()
        seen: list[str] = []
        session.subscribe(SearchCompleted, lambda event: seen.append(f"search:{event.query}"))
        session.subscribe(
            ProjectionChanged,
            lambda event: seen.append(f"perspectives:{','.join(event.perspectives)}"),
        )

        channel = EventChannel()
        channel.publish(QueryChanged("agaric"))
        channel.publish(PerspectivesChanged(("taxonomy",)))
        channel.publish(QueryChanged("oyster"))

        self.assertEqual(session.pump(channel), 3)
        self.assertTrue(channel.empty())
        self.assertEqual(seen, ["search:agaric", "perspectives:taxonomy", "search:oyster"])
        self.assertEqual(session.last_ranking.summary.query, "oyster")

    def test_unknown_event_rejected(self) -> None:
        with self.assertRaises(TypeError):
            _session().handle("not an event")  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
