"""Search service layer for FungiLens.

Provides the scoring engine, the collection aggregator, the event-facing
search session, and factory functions that wire them from configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from FungiLens.core.extractor import PerspectiveExtractor
from FungiLens.core.models import Document, FieldWeights
from FungiLens.services.aggregate import PerspectiveAggregator
from FungiLens.services.search import SearchSettings, WeightedSearchEngine
from FungiLens.services.session import (
    EventChannel,
    PerspectivesChanged,
    ProjectionChanged,
    QueryChanged,
    SearchCompleted,
    SearchSession,
)

if TYPE_CHECKING:
    from FungiLens.config import AppConfig


def create_search_engine(config: AppConfig) -> WeightedSearchEngine:
    """Create a scoring engine from the search and perspective config."""
    search = config.search
    return WeightedSearchEngine(
        weights=FieldWeights(weights=dict(search.field_weights), default=search.default_weight),
        taxonomy=config.perspectives,
        settings=SearchSettings(
            min_query_length=search.min_query_length,
            substring_min_length=search.substring_min_length,
            field_name_ratio=search.field_name_ratio,
            max_depth=search.max_depth,
        ),
    )


def create_search_session(config: AppConfig, documents: Sequence[Document]) -> SearchSession:
    """Create a search session over a loaded document collection.

    Args:
        config: Application configuration.
        documents: Documents parsed at the boundary.

    Returns:
        Configured SearchSession instance.
    """
    return SearchSession(
        documents=documents,
        engine=create_search_engine(config),
        aggregator=PerspectiveAggregator(
            min_score=config.search.min_score,
            hide_unmatched=config.search.hide_unmatched,
        ),
        extractor=PerspectiveExtractor(config.perspectives),
    )


__all__ = [
    "EventChannel",
    "PerspectiveAggregator",
    "PerspectivesChanged",
    "ProjectionChanged",
    "QueryChanged",
    "SearchCompleted",
    "SearchSession",
    "WeightedSearchEngine",
    "create_search_engine",
    "create_search_session",
]
