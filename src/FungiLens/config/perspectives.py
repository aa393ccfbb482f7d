"""Perspective taxonomy configuration."""

from __future__ import annotations

from typing import Any, Mapping

from FungiLens.config.common import (
    expect_str,
    expect_str_list,
    expect_str_mapping,
    get_optional_value,
    get_section,
)
from FungiLens.core.perspectives import (
    DEFAULT_FIELD_MAP,
    DEFAULT_LABELS,
    DEFAULT_PERSPECTIVES,
    PerspectiveTaxonomy,
)


def load_perspectives(raw: Mapping[str, Any]) -> PerspectiveTaxonomy:
    """Load the perspective taxonomy.

    Missing keys fall back to the built-in fungus taxonomy.

    Raises:
        TypeError: If config types are invalid.
    """
    section = get_section(raw, "perspectives", required=False)
    names = [
        expect_str(name, f"perspectives.names[{idx}]").strip()
        for idx, name in enumerate(
            expect_str_list(
                get_optional_value(section, "names", list(DEFAULT_PERSPECTIVES)), "perspectives.names"
            )
        )
    ]
    field_map = expect_str_mapping(
        get_optional_value(section, "field_map", dict(DEFAULT_FIELD_MAP)), "perspectives.field_map"
    )
    labels = expect_str_mapping(
        get_optional_value(section, "labels", dict(DEFAULT_LABELS)), "perspectives.labels"
    )
    return PerspectiveTaxonomy(names=tuple(names), field_map=field_map, labels=labels)


def check_perspectives(taxonomy: PerspectiveTaxonomy) -> None:
    """Validate taxonomy constraints.

    Raises:
        ValueError: If names are empty or the field map points at unknown
            perspectives.
    """
    if not taxonomy.names:
        raise ValueError("perspectives.names must include at least one perspective")
    if any(not name for name in taxonomy.names):
        raise ValueError("perspectives.names must not contain empty names")
    if "root" in taxonomy.names:
        raise ValueError("perspectives.names must not contain the reserved name: root")
    unknown = sorted({target for target in taxonomy.field_map.values() if not taxonomy.is_perspective(target)})
    if unknown:
        raise ValueError(f"perspectives.field_map targets unknown perspectives: {unknown}")
