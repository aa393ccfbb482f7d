"""Mappers from core results to display view models.

``map_fields`` is the collaborator that asks the classifier about every field
of a document and orders the fields for display. The remaining helpers turn
rankings and projections into views for the output writers.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping, Sequence

from FungiLens.core.classifier import Category, ValueClassifier
from FungiLens.core.models import Document, RankedCollection
from FungiLens.core.perspectives import PerspectiveTaxonomy
from FungiLens.renderers.view_models import FieldView, ProjectionView, ResultView

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")
_CITED_MARKERS = ("sources", "confidence", "consensus", "last_updated")
_TITLE_FIELDS = ("commonName", "name", "latinName", "scientificName")
_NESTED_BOOST = 50


def format_label(field_name: str) -> str:
    """Turn ``capDiameter`` or ``cap_diameter`` into ``Cap Diameter``."""
    spaced = _CAMEL_RE.sub(" ", field_name.replace("_", " "))
    words = [word for word in spaced.split(" ") if word]
    return " ".join(word[:1].upper() + word[1:] for word in words)


def unwrap_cited_value(value: Any) -> Any:
    """Return the payload of a cited-value wrapper, or the value unchanged.

    A cited value looks like ``{"value": ..., "sources": [...], "confidence": 80}``.
    """
    if isinstance(value, Mapping) and "value" in value and any(marker in value for marker in _CITED_MARKERS):
        return value["value"]
    return value


def map_fields(
    document: Document,
    classifier: ValueClassifier,
    *,
    exclude: Iterable[str] = (),
    max_depth: int = 1,
    max_fields: int = 20,
) -> list[FieldView]:
    """List a document's displayable fields ordered by priority.

    Nested objects are flattened ``max_depth`` levels: their children are
    listed too (with a priority boost) unless they are nested objects or
    lists themselves.

    Args:
        document: Document to map.
        classifier: Value classifier.
        exclude: Top-level keys to skip.
        max_depth: Levels of nested objects to flatten.
        max_fields: Maximum number of views returned; 0 returns all.

    Returns:
        Field views, highest priority first (stable for ties).
    """
    excluded = set(exclude)
    views: list[FieldView] = []
    for key, raw in document.data.items():
        if key in excluded:
            continue
        views.extend(_map_field(key, raw, "", classifier, depth=0, max_depth=max_depth, boost=0))

    views.sort(key=lambda view: -view.priority)
    return views[:max_fields] if max_fields else views


def _map_field(
    key: str,
    raw: Any,
    parent: str,
    classifier: ValueClassifier,
    *,
    depth: int,
    max_depth: int,
    boost: int,
) -> list[FieldView]:
    value = unwrap_cited_value(raw)
    if value is None:
        return []

    path = f"{parent}.{key}" if parent else key
    result = classifier.classify(value, key)
    view = FieldView(
        name=key,
        path=path,
        label=format_label(key),
        category=result.category.value,
        variant=result.variant,
        priority=result.priority + boost,
        value=value,
    )
    if depth > 0 and (result.category is Category.NESTED or isinstance(value, (list, tuple))):
        return []

    views = [view]
    if result.category is Category.NESTED and depth < max_depth:
        for child_key, child in value.items():
            views.extend(
                _map_field(
                    str(child_key),
                    child,
                    path,
                    classifier,
                    depth=depth + 1,
                    max_depth=max_depth,
                    boost=_NESTED_BOOST,
                )
            )
    return views


def document_title(document: Document) -> str:
    """Return the best display name for a document."""
    for name in _TITLE_FIELDS:
        value = unwrap_cited_value(document.data.get(name))
        if isinstance(value, str) and value.strip():
            return value.strip()
    return document.id


def map_ranking_to_views(
    ranking: RankedCollection,
    taxonomy: PerspectiveTaxonomy,
    *,
    include_hidden: bool = False,
) -> list[ResultView]:
    """Map a ranked collection to result views.

    Args:
        ranking: Output of a ranking cycle.
        taxonomy: Used to label matched perspectives.
        include_hidden: Also list hidden and dimmed documents.

    Returns:
        Views in ranked order.
    """
    views: list[ResultView] = []
    for position, result in enumerate(ranking.ordered, start=1):
        state = ranking.visibility.get(result.document.id)
        if state is None:
            continue
        if not include_hidden and state.value != "visible":
            continue
        views.append(
            ResultView(
                rank=position,
                id=result.document.id,
                title=document_title(result.document),
                score=result.score,
                visibility=state.value,
                matched_paths=tuple(sorted(result.matched_paths)),
                matched_perspectives=tuple(taxonomy.label(p) for p in result.matched_perspectives),
            )
        )
    return views


def map_projection_to_view(
    document_id: str,
    field_path: str | None,
    projection: Mapping[str, Any],
    perspectives: Sequence[str],
    taxonomy: PerspectiveTaxonomy,
) -> ProjectionView:
    """Map an extraction result to a projection view."""
    return ProjectionView(
        document_id=document_id,
        field_path=field_path,
        perspectives=tuple(perspectives),
        values=tuple((key, taxonomy.label(key), value) for key, value in projection.items()),
    )
