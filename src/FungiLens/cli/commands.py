"""Command implementations for FungiLens CLI.

Encapsulates business logic for the search, extract and fields commands,
separated from CLI parameter handling and output formatting.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from FungiLens.config import AppConfig
from FungiLens.core.classifier import ValueClassifier
from FungiLens.core.extractor import ExtractMode
from FungiLens.renderers import OutputWriter
from FungiLens.renderers.mapper import map_fields, map_projection_to_view, map_ranking_to_views
from FungiLens.services import SearchSession
from FungiLens.utils.log import log


@dataclass(slots=True)
class SearchCommand:
    """Run one ranking cycle and write the ranked collection."""

    config: AppConfig
    session: SearchSession
    output_writer: OutputWriter

    def execute(self, query: str, *, show_hidden: bool = False) -> None:
        log.debug("Running search query=%r show_hidden=%s", query, show_hidden)
        ranking = self.session.search(query)
        views = map_ranking_to_views(ranking, self.config.perspectives, include_hidden=show_hidden)
        self.output_writer.write_search_result(views, ranking.summary)


@dataclass(slots=True)
class ExtractCommand:
    """Project one document field through the selected perspectives."""

    config: AppConfig
    session: SearchSession
    output_writer: OutputWriter

    def execute(
        self,
        document_id: str,
        field_path: str | None,
        perspectives: Sequence[str] = (),
        mode: ExtractMode | str = ExtractMode.SIMPLE,
    ) -> None:
        """Extract and write a projection.

        Args:
            document_id: Id of a loaded document.
            field_path: Dotted field path, or None for whole sub-trees.
            perspectives: Active perspectives; empty means all.
            mode: Extraction mode.

        Raises:
            KeyError: If the document id is unknown.
        """
        self.session.set_active_perspectives(perspectives)
        projection = self.session.display(document_id, field_path, mode)
        log.debug("Extracted %s/%s: %d entries", document_id, field_path, len(projection))
        view = map_projection_to_view(
            document_id,
            field_path,
            projection,
            self.session.active_perspectives,
            self.config.perspectives,
        )
        self.output_writer.write_projection(view)


@dataclass(slots=True)
class FieldsCommand:
    """List a document's fields in display priority order."""

    config: AppConfig
    session: SearchSession
    classifier: ValueClassifier
    output_writer: OutputWriter

    def execute(self, document_id: str) -> None:
        document = self.session.get(document_id)
        display = self.config.display
        fields = map_fields(
            document,
            self.classifier,
            exclude=display.exclude_fields,
            max_depth=display.max_depth,
            max_fields=display.max_fields,
        )
        self.output_writer.write_fields(document_id, fields)
