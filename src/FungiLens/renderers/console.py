"""Console text output renderers.

Renders result, projection and field views into human-friendly text.
Provides ConsoleOutputWriter implementation for command output.
"""

from __future__ import annotations

import json
from typing import Any, Iterable

from FungiLens.core.models import CollectionSummary
from FungiLens.renderers.base import OutputWriter
from FungiLens.renderers.view_models import FieldView, ProjectionView, ResultView
from FungiLens.utils.log import log

_VALUE_PREVIEW = 120


def _fmt_value(value: Any) -> str:
    """Format a field value as a single short line."""
    if isinstance(value, str):
        text = value
    elif isinstance(value, bool):
        text = "yes" if value else "no"
    else:
        text = json.dumps(value, ensure_ascii=False, default=str)
    text = " ".join(text.split())
    if len(text) > _VALUE_PREVIEW:
        return text[: _VALUE_PREVIEW - 3] + "..."
    return text


def render_search_text(results: Iterable[ResultView], summary: CollectionSummary) -> str:
    """Render ranked results into a human-readable text block.

    Args:
        results: Result views in ranked order.
        summary: Aggregate counts of the search cycle.

    Returns:
        A formatted string ready to be printed.
    """
    lines: list[str] = []
    if summary.query:
        lines.append(f'Query "{summary.query}": {summary.visible_count} of {summary.total_count} visible')
    else:
        lines.append(f"No filter: {summary.total_count} documents")
    if summary.perspective_hit_counts:
        hits = ", ".join(f"{name}={count}" for name, count in summary.perspective_hit_counts.items())
        lines.append(f"Perspectives: {hits}")
    lines.append("")

    for view in results:
        marker = "" if view.visibility == "visible" else f" [{view.visibility}]"
        lines.append(f"{view.rank}. {view.title} ({view.id}){marker}")
        if summary.query:
            lines.append(f"   Score: {view.score:g}")
        if view.matched_perspectives:
            lines.append(f"   Perspectives: {', '.join(view.matched_perspectives)}")
        if view.matched_paths:
            lines.append(f"   Matched: {', '.join(view.matched_paths)}")
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def render_projection_text(projection: ProjectionView) -> str:
    """Render a perspective projection into text."""
    field = projection.field_path or "(all)"
    lines = [f"{projection.document_id} / {field}"]
    if projection.perspectives:
        lines.append(f"Active: {', '.join(projection.perspectives)}")
    if not projection.values:
        lines.append("   (no data)")
    for _key, label, value in projection.values:
        lines.append(f"   {label}: {_fmt_value(value)}")
    return "\n".join(lines) + "\n"


def render_fields_text(document_id: str, fields: Iterable[FieldView]) -> str:
    """Render a prioritized field listing into text."""
    lines = [document_id]
    for view in fields:
        kind = f"{view.category}/{view.variant}" if view.variant else view.category
        lines.append(f"   {view.label} [{kind}, {view.priority}]: {_fmt_value(view.value)}")
    return "\n".join(lines) + "\n"


class ConsoleOutputWriter(OutputWriter):
    """Write results to console via logging."""

    def write_search_result(self, results: list[ResultView], summary: CollectionSummary) -> None:
        self._emit(render_search_text(results, summary))

    def write_projection(self, projection: ProjectionView) -> None:
        self._emit(render_projection_text(projection))

    def write_fields(self, document_id: str, fields: list[FieldView]) -> None:
        self._emit(render_fields_text(document_id, fields))

    def finalize(self, action: str) -> None:
        """No-op for console output."""

    @staticmethod
    def _emit(text: str) -> None:
        for line in text.splitlines():
            log.info(line)
