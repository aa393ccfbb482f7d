"""View models for output rendering.

Display-oriented structures that keep presentation concerns out of the core
models. Used by OutputWriter implementations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence


@dataclass(frozen=True, slots=True)
class FieldView:
    """One displayable field of a document.

    Attributes:
        name: Bare field name.
        path: Dotted path from the document root.
        label: Human label derived from the field name.
        category: Presentation category value (e.g. "tag").
        variant: Optional category variant (e.g. "image").
        priority: Display ordering weight, higher first.
        value: The (unwrapped) field value.
    """

    name: str
    path: str
    label: str
    category: str
    variant: str | None
    priority: int
    value: Any


@dataclass(frozen=True, slots=True)
class ResultView:
    """One ranked document for output.

    Attributes:
        rank: 1-based position in the ranked order.
        id: Document id.
        title: Display name of the document.
        score: Relevance score.
        visibility: Visibility state value.
        matched_paths: Matched field paths, sorted.
        matched_perspectives: Perspective labels credited for the matches.
    """

    rank: int
    id: str
    title: str
    score: float
    visibility: str
    matched_paths: Sequence[str]
    matched_perspectives: Sequence[str]


@dataclass(frozen=True, slots=True)
class ProjectionView:
    """Extracted data for one field grouped by originating perspective."""

    document_id: str
    field_path: str | None
    perspectives: Sequence[str]
    values: Sequence[tuple[str, str, Any]]
