"""JSON output renderers.

Renders view models into JSON-serializable objects.
Provides JsonFileWriter implementation for command output.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable

from FungiLens.core.models import CollectionSummary
from FungiLens.renderers.base import OutputWriter
from FungiLens.renderers.view_models import FieldView, ProjectionView, ResultView
from FungiLens.utils.log import log


def render_json(results: Iterable[ResultView]) -> list[dict[str, Any]]:
    """Render result views into JSON-serializable Python objects.

    Args:
        results: Iterable of result views.

    Returns:
        A list of dicts, one per result.
    """
    return [
        {
            "rank": view.rank,
            "id": view.id,
            "title": view.title,
            "score": view.score,
            "visibility": view.visibility,
            "matchedPaths": list(view.matched_paths),
            "matchedPerspectives": list(view.matched_perspectives),
        }
        for view in results
    ]


def render_projection_json(projection: ProjectionView) -> dict[str, Any]:
    return {
        "documentId": projection.document_id,
        "field": projection.field_path,
        "perspectives": list(projection.perspectives),
        "values": {key: value for key, _label, value in projection.values},
    }


def render_fields_json(document_id: str, fields: Iterable[FieldView]) -> dict[str, Any]:
    return {
        "documentId": document_id,
        "fields": [
            {
                "path": view.path,
                "label": view.label,
                "category": view.category,
                "variant": view.variant,
                "priority": view.priority,
                "value": view.value,
            }
            for view in fields
        ],
    }


class JsonFileWriter(OutputWriter):
    """Accumulate results and write to JSON file on finalize."""

    def __init__(self, base_dir: str) -> None:
        """Initialize JSON writer.

        Args:
            base_dir: Base output directory.
        """
        self.output_dir = Path(base_dir) / "json"
        self.all_results: list[dict[str, Any]] = []

    def write_search_result(self, results: list[ResultView], summary: CollectionSummary) -> None:
        """Accumulate a search cycle for later writing."""
        self.all_results.append({"summary": summary.as_payload(), "results": render_json(results)})

    def write_projection(self, projection: ProjectionView) -> None:
        self.all_results.append(render_projection_json(projection))

    def write_fields(self, document_id: str, fields: list[FieldView]) -> None:
        self.all_results.append(render_fields_json(document_id, fields))

    def finalize(self, action: str) -> None:
        """Write accumulated results to JSON file.

        Args:
            action: The CLI command name (used in filename).
        """
        payload = json.dumps(self.all_results, ensure_ascii=False, indent=2, default=str)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_path = self.output_dir / f"{action}_{timestamp}.json"
        output_path.write_text(payload, encoding="utf-8")
        log.info("JSON saved to %s", output_path)
