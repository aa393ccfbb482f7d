"""Collection-level ranking, visibility and perspective hit counts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from FungiLens.core.models import (
    CollectionSummary,
    RankedCollection,
    SearchResult,
    Visibility,
)
from FungiLens.utils.log import log


@dataclass(frozen=True, slots=True)
class PerspectiveAggregator:
    """Turn per-document search results into collection decisions.

    Attributes:
        min_score: A document is visible only when its score is strictly
            greater than this.
        hide_unmatched: Hide non-matching documents; when false they are
            dimmed instead.
    """

    min_score: float = 0.0
    hide_unmatched: bool = True

    def rank(
        self,
        results: Sequence[SearchResult],
        min_score: float | None = None,
        query: str | None = None,
    ) -> RankedCollection:
        """Order results and decide visibility.

        Args:
            results: One result per document, in collection order.
            min_score: Optional override of the configured threshold.
            query: Normalized filtering query of the cycle, empty when the
                query does not filter. Taken from the results when omitted.

        Returns:
            RankedCollection with ordering, visibility and summary.
        """
        threshold = self.min_score if min_score is None else min_score
        if query is None:
            query = next((r.query for r in results if r.filtering), "")

        if not query:
            visibility = {r.document.id: Visibility.VISIBLE for r in results}
            summary = CollectionSummary(query="", visible_count=len(results), total_count=len(results))
            return RankedCollection(ordered=tuple(results), visibility=visibility, summary=summary)

        # sorted() is stable: equal scores keep collection order.
        ordered = tuple(sorted(results, key=lambda r: -r.score))
        hidden_state = Visibility.HIDDEN if self.hide_unmatched else Visibility.DIMMED

        visibility: dict[str, Visibility] = {}
        hit_counts: dict[str, int] = {}
        for result in ordered:
            if result.score > threshold:
                visibility[result.document.id] = Visibility.VISIBLE
                for perspective in dict.fromkeys(result.matched_perspectives):
                    hit_counts[perspective] = hit_counts.get(perspective, 0) + 1
            else:
                visibility[result.document.id] = hidden_state

        visible_count = sum(1 for result in ordered if result.score > threshold)
        summary = CollectionSummary(
            query=query,
            visible_count=visible_count,
            total_count=len(results),
            matched_perspectives=tuple(hit_counts),
            perspective_hit_counts=hit_counts,
        )
        log.debug("Ranked collection: query=%s visible=%d total=%d", query, visible_count, len(results))
        return RankedCollection(ordered=ordered, visibility=visibility, summary=summary)
