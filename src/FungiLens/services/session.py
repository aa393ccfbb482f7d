"""Search session: the event-facing owner of ranking and projection state.

One session is constructed per application run and passed to whatever issues
queries. Input arrives either as direct calls (``search``,
``set_active_perspectives``) or as messages on an ``EventChannel`` drained by
``pump``. Results are delivered to subscribers registered per event type.

Debouncing is the caller's job; every call runs a full cycle synchronously.
"""

from __future__ import annotations

import queue
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Iterable, Iterator, Mapping, Sequence, TypeVar, Union

from FungiLens.core.extractor import ExtractMode, PerspectiveExtractor, as_mode
from FungiLens.core.models import Document, RankedCollection, Visibility
from FungiLens.services.aggregate import PerspectiveAggregator
from FungiLens.services.search import WeightedSearchEngine
from FungiLens.utils.log import log


@dataclass(frozen=True, slots=True)
class QueryChanged:
    query: str


@dataclass(frozen=True, slots=True)
class PerspectivesChanged:
    perspectives: Sequence[str] = ()


@dataclass(frozen=True, slots=True)
class SearchCompleted:
    """Published after every ranking cycle."""

    query: str
    visible_count: int
    total_count: int
    matched_perspectives: Sequence[str]
    perspective_hit_counts: Mapping[str, int]


@dataclass(frozen=True, slots=True)
class DisplayedField:
    """A field currently shown for a document."""

    document_id: str
    field_path: str | None = None
    mode: ExtractMode = ExtractMode.SIMPLE


@dataclass(frozen=True, slots=True)
class ProjectionChanged:
    """Published after the active perspectives changed."""

    perspectives: Sequence[str]
    projections: Mapping[DisplayedField, dict[str, Any]]


InputEvent = Union[QueryChanged, PerspectivesChanged]
E = TypeVar("E")


class EventChannel:
    """FIFO channel carrying input events to a session."""

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[InputEvent] = queue.SimpleQueue()

    def publish(self, event: InputEvent) -> None:
        self._queue.put(event)

    def drain(self) -> Iterator[InputEvent]:
        """Yield queued events until the channel is empty."""
        while True:
            try:
                yield self._queue.get_nowait()
            except queue.Empty:
                return

    def empty(self) -> bool:
        return self._queue.empty()


@dataclass(slots=True)
class SearchSession:
    """Owns the documents, visibility annotations and displayed fields.

    Visibility annotations are replaced as a whole at the end of a cycle, so
    readers never observe a mix of two rankings.
    """

    documents: Sequence[Document]
    engine: WeightedSearchEngine
    aggregator: PerspectiveAggregator
    extractor: PerspectiveExtractor
    _by_id: dict[str, Document] = field(init=False, repr=False)
    _visibility: Mapping[str, Visibility] = field(init=False, repr=False)
    _active: tuple[str, ...] = field(init=False, default=(), repr=False)
    _displayed: dict[DisplayedField, dict[str, Any]] = field(init=False, default_factory=dict, repr=False)
    _subscribers: dict[type, list[Callable[[Any], None]]] = field(init=False, default_factory=dict, repr=False)
    last_ranking: RankedCollection | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        self.documents = tuple(self.documents)
        self._by_id = {document.id: document for document in self.documents}
        self._visibility = MappingProxyType({doc_id: Visibility.VISIBLE for doc_id in self._by_id})

    @property
    def visibility(self) -> Mapping[str, Visibility]:
        return self._visibility

    @property
    def active_perspectives(self) -> tuple[str, ...]:
        return self._active

    @property
    def displayed(self) -> Mapping[DisplayedField, dict[str, Any]]:
        return MappingProxyType(self._displayed)

    def get(self, document_id: str) -> Document:
        """Return a document by id.

        Raises:
            KeyError: If the id is unknown.
        """
        return self._by_id[document_id]

    def subscribe(self, event_type: type[E], callback: Callable[[E], None]) -> Callable[[E], None]:
        """Register a callback for one output event type."""
        self._subscribers.setdefault(event_type, []).append(callback)
        return callback

    def unsubscribe(self, event_type: type[E], callback: Callable[[E], None]) -> None:
        callbacks = self._subscribers.get(event_type, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def search(self, query: str) -> RankedCollection:
        """Run one ranking cycle and publish ``SearchCompleted``."""
        results = self.engine.score_all(self.documents, query)
        ranking = self.aggregator.rank(results, query=self.engine.filter_query(query))

        self._visibility = MappingProxyType(dict(ranking.visibility))
        self.last_ranking = ranking

        summary = ranking.summary
        log.info(
            "Search completed: query=%r visible=%d/%d perspectives=%s",
            query,
            summary.visible_count,
            summary.total_count,
            dict(summary.perspective_hit_counts),
        )
        self._publish(
            SearchCompleted(
                query=query,
                visible_count=summary.visible_count,
                total_count=summary.total_count,
                matched_perspectives=tuple(summary.matched_perspectives),
                perspective_hit_counts=dict(summary.perspective_hit_counts),
            )
        )
        return ranking

    def display(
        self,
        document_id: str,
        field_path: str | None = None,
        mode: ExtractMode | str = ExtractMode.SIMPLE,
    ) -> dict[str, Any]:
        """Start displaying a field and return its current projection.

        Raises:
            KeyError: If the document id is unknown.
        """
        key = DisplayedField(document_id=document_id, field_path=field_path, mode=as_mode(mode))
        projection = self._project(key)
        self._displayed[key] = projection
        return projection

    def hide(self, document_id: str, field_path: str | None = None, mode: ExtractMode | str = ExtractMode.SIMPLE) -> None:
        key = DisplayedField(document_id=document_id, field_path=field_path, mode=as_mode(mode))
        self._displayed.pop(key, None)

    def set_active_perspectives(self, perspectives: Iterable[str]) -> Mapping[DisplayedField, dict[str, Any]]:
        """Switch the active perspectives and re-extract every displayed field."""
        self._active = tuple(dict.fromkeys(perspectives))
        refreshed = {key: self._project(key) for key in self._displayed}
        self._displayed = refreshed
        log.info("Active perspectives: %s (%d fields refreshed)", list(self._active) or "all", len(refreshed))
        projections = MappingProxyType(dict(refreshed))
        self._publish(ProjectionChanged(perspectives=self._active, projections=projections))
        return projections

    def handle(self, event: InputEvent) -> None:
        """Dispatch one input event."""
        if isinstance(event, QueryChanged):
            self.search(event.query)
        elif isinstance(event, PerspectivesChanged):
            self.set_active_perspectives(event.perspectives)
        else:
            raise TypeError(f"Unsupported event: {type(event).__name__}")

    def pump(self, channel: EventChannel) -> int:
        """Process all pending events on a channel in order.

        Returns:
            Number of events processed.
        """
        count = 0
        for event in channel.drain():
            self.handle(event)
            count += 1
        return count

    def _project(self, key: DisplayedField) -> dict[str, Any]:
        document = self._by_id[key.document_id]
        return self.extractor.extract(document, key.field_path, self._active, key.mode)

    def _publish(self, event: Any) -> None:
        for callback in list(self._subscribers.get(type(event), ())):
            try:
                callback(event)
            except Exception as error:  # noqa: BLE001 - subscriber failure must be isolated
                log.warning("Subscriber failed: event=%s error=%s", type(event).__name__, error)
