"""Weighted recursive relevance scoring for entity documents."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence

from FungiLens.core.models import Document, FieldWeights, SearchResult
from FungiLens.core.perspectives import PerspectiveTaxonomy
from FungiLens.utils.log import log

_DEFAULT_WEIGHTS: dict[str, int] = {
    "commonName": 100,
    "scientificName": 100,
    "name": 100,
    "tags": 100,
    "genus": 90,
    "family": 90,
    "species": 90,
    "edibility": 70,
    "toxicityLevel": 70,
    "medicinalProperties": 60,
    "activeCompounds": 60,
    "primaryCompounds": 60,
    "secondaryMetabolites": 60,
    "flavorProfile": 50,
    "substrate": 50,
    "habitat": 50,
    "description": 30,
    "notes": 30,
}


def default_field_weights() -> FieldWeights:
    return FieldWeights(weights=dict(_DEFAULT_WEIGHTS), default=20)


@dataclass(frozen=True, slots=True)
class SearchSettings:
    """Tunables of the scoring engine.

    Attributes:
        min_query_length: Normalized queries shorter than this do not filter.
        substring_min_length: Minimum query length for plain substring matches.
        field_name_ratio: Share of a field's weight credited for a key match.
        max_depth: Nesting levels below which traversal stops.
    """

    min_query_length: int = 2
    substring_min_length: int = 3
    field_name_ratio: float = 0.5
    max_depth: int = 32


def normalize_query(query: str | None) -> str:
    return (query or "").strip().lower()


def _as_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(slots=True)
class WeightedSearchEngine:
    """Score documents against a free-text query.

    Every key or value that matches the query adds its field weight to the
    score; the contributions are additive, so traversal order never changes
    the result.
    """

    weights: FieldWeights = field(default_factory=default_field_weights)
    taxonomy: PerspectiveTaxonomy = field(default_factory=PerspectiveTaxonomy)
    settings: SearchSettings = field(default_factory=SearchSettings)

    def score(self, document: Document, query: str | None) -> SearchResult:
        """Score one document.

        Args:
            document: Document to score.
            query: Raw query text.

        Returns:
            SearchResult with score, matched paths and perspectives. A query
            below the minimum length yields an unfiltered zero-score result.
        """
        normalized = self.filter_query(query)
        if not normalized:
            return SearchResult(document=document)

        matched: set[str] = set()
        total = self.search_in_object(document.data, normalized, "", matched)
        perspectives = self.extract_perspectives(matched)
        if total > 0:
            log.debug(
                "Scored document: id=%s score=%.1f paths=%s perspectives=%s",
                document.id,
                total,
                sorted(matched),
                perspectives,
            )
        return SearchResult(
            document=document,
            score=total,
            matched_paths=frozenset(matched),
            matched_perspectives=perspectives,
            query=normalized,
        )

    def filter_query(self, query: str | None) -> str:
        """Return the normalized query, or "" when it is too short to filter."""
        normalized = normalize_query(query)
        return normalized if len(normalized) >= self.settings.min_query_length else ""

    def score_all(self, documents: Iterable[Document], query: str | None) -> list[SearchResult]:
        """Score a collection, preserving input order."""
        return [self.score(document, query) for document in documents]

    def matches_word(self, text: Any, query: str) -> bool:
        """Return whether text contains the query at a word start.

        Queries of ``substring_min_length`` characters or more also match
        anywhere inside the text.
        """
        if text is None or not query:
            return False
        lowered = _as_text(text).lower()
        needle = query.lower()
        if re.search(r"\b" + re.escape(needle), lowered):
            return True
        return len(needle) >= self.settings.substring_min_length and needle in lowered

    def search_in_object(
        self,
        node: Any,
        query: str,
        path: str,
        matched: set[str],
        depth: int = 0,
    ) -> float:
        """Recursively score a mapping, recording matched field paths.

        Args:
            node: Mapping to walk; anything else scores zero.
            query: Normalized query.
            path: Dotted path of ``node`` inside the document.
            matched: Collects matched paths; shared across the recursion.
            depth: Current nesting level.

        Returns:
            Accumulated score of ``node`` and its descendants.
        """
        if not isinstance(node, Mapping) or depth > self.settings.max_depth:
            return 0.0

        score = 0.0
        for key, value in node.items():
            key = str(key)
            current_path = f"{path}.{key}" if path else key
            weight = self.weights.weight_for(key)

            if self.matches_word(key, query):
                score += weight * self.settings.field_name_ratio
                matched.add(current_path)

            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                score += self._search_in_sequence(value, query, current_path, weight, matched, depth)
            elif isinstance(value, Mapping):
                score += self.search_in_object(value, query, current_path, matched, depth + 1)
            elif self.matches_word(value, query):
                score += weight
                matched.add(current_path)
        return score

    def _search_in_sequence(
        self,
        items: Sequence[Any],
        query: str,
        path: str,
        weight: int,
        matched: set[str],
        depth: int,
    ) -> float:
        # Elements share the owning field's path and weight; no key credit per element.
        score = 0.0
        for item in items:
            if item is None:
                continue
            if isinstance(item, Mapping):
                score += self.search_in_object(item, query, path, matched, depth + 1)
            elif isinstance(item, (list, tuple)):
                if depth < self.settings.max_depth:
                    score += self._search_in_sequence(item, query, path, weight, matched, depth + 1)
            elif self.matches_word(item, query):
                score += weight
                matched.add(path)
        return score

    def extract_perspectives(self, matched_paths: Iterable[str]) -> tuple[str, ...]:
        """Translate matched paths into perspective names.

        Both the first and the last segment of each path are looked up in the
        field-to-perspective table: a match may sit inside a perspective
        sub-tree or be a well-known field found anywhere.
        """
        found: dict[str, None] = {}
        for path in sorted(matched_paths):
            segments = path.split(".")
            for segment in (segments[0], segments[-1]):
                perspective = self.taxonomy.perspective_for_field(segment)
                if perspective:
                    found.setdefault(perspective)
        return tuple(found)
