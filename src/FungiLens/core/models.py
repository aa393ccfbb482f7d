from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Sequence


ROOT_KEY = "root"


@dataclass(frozen=True, slots=True)
class Document:
    """Canonical entity document.

    Documents are parsed once at the boundary (see ``FungiLens.sources.files``)
    and passed by reference through the pipeline. Nothing downstream mutates
    them.

    Attributes:
        id: Stable document identifier (usually the slug).
        data: Nested field tree. Top-level keys named after a known perspective
            hold that perspective's sub-tree; all other keys are root fields.
    """

    id: str
    data: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))


@dataclass(frozen=True, slots=True)
class FieldWeights:
    """Relevance weight per bare field name.

    Attributes:
        weights: Field name to integer weight.
        default: Weight used for unlisted field names.
    """

    weights: Mapping[str, int]
    default: int = 20

    def weight_for(self, name: str) -> int:
        return self.weights.get(name, self.default)


@dataclass(frozen=True, slots=True)
class SearchResult:
    """Relevance of one document for one query.

    Attributes:
        document: The scored document.
        score: Non-negative additive relevance score.
        matched_paths: Field paths that matched, by name or value.
        matched_perspectives: Perspectives credited for the matches.
        query: Normalized query; empty when the query was too short to filter.
    """

    document: Document
    score: float = 0.0
    matched_paths: frozenset[str] = frozenset()
    matched_perspectives: Sequence[str] = ()
    query: str = ""

    @property
    def filtering(self) -> bool:
        """Whether this result should take part in visibility filtering."""
        return bool(self.query)


class Visibility(str, Enum):
    """Display state assigned to a document after a ranking cycle."""

    VISIBLE = "visible"
    HIDDEN = "hidden"
    DIMMED = "dimmed"


@dataclass(frozen=True, slots=True)
class CollectionSummary:
    """External-facing aggregate of one search cycle."""

    query: str
    visible_count: int
    total_count: int
    matched_perspectives: Sequence[str] = ()
    perspective_hit_counts: Mapping[str, int] = field(default_factory=dict)

    def as_payload(self) -> dict[str, Any]:
        """Return the ``search completed`` event payload."""
        return {
            "query": self.query,
            "visibleCount": self.visible_count,
            "totalCount": self.total_count,
            "matchedPerspectives": list(self.matched_perspectives),
            "perspectiveHitCounts": dict(self.perspective_hit_counts),
        }


@dataclass(frozen=True, slots=True)
class RankedCollection:
    """Ordering and visibility decisions for a whole collection.

    Attributes:
        ordered: Results sorted by descending score (stable).
        visibility: Document id to display state.
        summary: Aggregate counts for the cycle.
    """

    ordered: Sequence[SearchResult]
    visibility: Mapping[str, Visibility]
    summary: CollectionSummary

    @property
    def visible(self) -> frozenset[str]:
        return frozenset(doc_id for doc_id, state in self.visibility.items() if state is Visibility.VISIBLE)

    def visible_results(self) -> list[SearchResult]:
        """Return visible results in ranked order."""
        return [r for r in self.ordered if self.visibility.get(r.document.id) is Visibility.VISIBLE]
