"""Base classes for output writers.

Provides abstraction for writing command results to console or files.
Separates control flow from output logic for better testability.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from FungiLens.core.models import CollectionSummary
from FungiLens.renderers.view_models import FieldView, ProjectionView, ResultView


class OutputWriter(ABC):
    """Abstract base class for command output writers."""

    @abstractmethod
    def write_search_result(self, results: list[ResultView], summary: CollectionSummary) -> None:
        """Write the outcome of one search cycle.

        Args:
            results: Ranked result views to display.
            summary: Aggregate counts of the cycle.
        """

    @abstractmethod
    def write_projection(self, projection: ProjectionView) -> None:
        """Write the perspective projection of one field."""

    @abstractmethod
    def write_fields(self, document_id: str, fields: list[FieldView]) -> None:
        """Write the prioritized field listing of one document."""

    @abstractmethod
    def finalize(self, action: str) -> None:
        """Finalize output (e.g., write accumulated results to file).

        Args:
            action: The CLI command name (e.g., 'search').
        """


@dataclass(slots=True)
class MultiOutputWriter(OutputWriter):
    """Delegate output to multiple writers."""

    writers: Sequence[OutputWriter]

    def write_search_result(self, results: list[ResultView], summary: CollectionSummary) -> None:
        for writer in self.writers:
            writer.write_search_result(results, summary)

    def write_projection(self, projection: ProjectionView) -> None:
        for writer in self.writers:
            writer.write_projection(projection)

    def write_fields(self, document_id: str, fields: list[FieldView]) -> None:
        for writer in self.writers:
            writer.write_fields(document_id, fields)

    def finalize(self, action: str) -> None:
        """Finalize all writers."""
        for writer in self.writers:
            writer.finalize(action)
