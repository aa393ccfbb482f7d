"""Perspective-scoped field extraction.

Projects a document through a set of active perspectives. The result maps the
originating perspective (or ``root`` for top-level fields) to the value found
there. Extraction keeps no memory between calls: the same inputs always yield
an equal result.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Mapping, Sequence

from FungiLens.core.models import ROOT_KEY, Document
from FungiLens.core.perspectives import PerspectiveTaxonomy
from FungiLens.utils.log import log

_MISSING = object()


class ExtractMode(str, Enum):
    """Extraction mode.

    ``simple`` resolves one field path. ``deep`` without a path returns whole
    perspective sub-trees.
    """

    SIMPLE = "simple"
    DEEP = "deep"


def as_mode(mode: Any) -> ExtractMode:
    """Return ``DEEP`` for ``"deep"`` and ``SIMPLE`` for anything else."""
    value = mode.value if isinstance(mode, ExtractMode) else mode
    return ExtractMode.DEEP if value == ExtractMode.DEEP.value else ExtractMode.SIMPLE


def resolve_path(node: Any, segments: Sequence[str]) -> Any:
    """Follow key segments through nested mappings.

    Returns:
        The value found, or ``None`` when any segment is missing or an
        intermediate value is not a mapping.
    """
    current = node
    for segment in segments:
        if not isinstance(current, Mapping):
            return None
        current = current.get(segment, _MISSING)
        if current is _MISSING:
            return None
    return current


class PerspectiveExtractor:
    """Resolve field paths against a document's perspectives."""

    def __init__(self, taxonomy: PerspectiveTaxonomy) -> None:
        self.taxonomy = taxonomy

    def extract(
        self,
        document: Document | Mapping[str, Any],
        field_path: str | None,
        active_perspectives: Iterable[str] | None = None,
        mode: ExtractMode | str = ExtractMode.SIMPLE,
    ) -> dict[str, Any]:
        """Extract the data visible for a field under the active perspectives.

        Args:
            document: Document (or raw field tree) to read.
            field_path: Dotted path such as ``edibility`` or
                ``taxonomy.family``. May be empty in deep mode.
            active_perspectives: Currently active perspectives. When empty,
                every known perspective is searched.
            mode: ``deep``; any other value means ``simple``.

        Returns:
            Fresh mapping of perspective name (or ``root``) to value.
        """
        data = document.data if isinstance(document, Document) else document
        if not isinstance(data, Mapping):
            return {}

        mode = as_mode(mode)
        candidates = self.taxonomy.candidates(active_perspectives)

        if not field_path:
            if mode is ExtractMode.DEEP:
                return self._extract_subtrees(data, candidates)
            return {}

        segments = [segment for segment in field_path.split(".") if segment]
        if not segments:
            return {}

        if len(segments) == 1:
            extracted = self._extract_single(data, segments[0], candidates)
        elif self.taxonomy.is_perspective(segments[0]):
            extracted = self._extract_scoped(data, segments[0], segments[1:])
        else:
            extracted = self._extract_across(data, segments, candidates)

        log.debug("extract path=%s candidates=%d hits=%s", field_path, len(candidates), sorted(extracted))
        return extracted

    def _extract_subtrees(self, data: Mapping[str, Any], candidates: Sequence[str]) -> dict[str, Any]:
        extracted: dict[str, Any] = {}
        for name in candidates:
            subtree = data.get(name)
            if isinstance(subtree, Mapping) and subtree:
                extracted[name] = subtree
        return extracted

    def _extract_single(
        self,
        data: Mapping[str, Any],
        key: str,
        candidates: Sequence[str],
    ) -> dict[str, Any]:
        extracted: dict[str, Any] = {}
        root_value = data.get(key)
        if root_value is not None:
            extracted[ROOT_KEY] = root_value

        # Every perspective holding the key is reported, not just the first.
        for name in candidates:
            subtree = data.get(name)
            if not isinstance(subtree, Mapping):
                continue
            value = subtree.get(key)
            if value is not None:
                extracted[name] = value
        return extracted

    def _extract_scoped(
        self,
        data: Mapping[str, Any],
        perspective: str,
        remaining: Sequence[str],
    ) -> dict[str, Any]:
        value = resolve_path(data.get(perspective), remaining)
        return {perspective: value} if value is not None else {}

    def _extract_across(
        self,
        data: Mapping[str, Any],
        segments: Sequence[str],
        candidates: Sequence[str],
    ) -> dict[str, Any]:
        extracted: dict[str, Any] = {}
        for name in candidates:
            value = resolve_path(data.get(name), segments)
            if value is not None:
                extracted[name] = value
        return extracted
