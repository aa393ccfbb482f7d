"""Search domain configuration: scoring tunables and field weights."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from FungiLens.config.common import (
    expect_bool,
    expect_float,
    expect_int,
    expect_int_mapping,
    get_optional_value,
    get_required_value,
    get_section,
)


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Store validated search behavior and field weights.

    Attributes:
        min_query_length: Queries shorter than this show everything.
        substring_min_length: Minimum query length for substring matching.
        field_name_ratio: Share of the weight credited for a field-name match.
        max_depth: Maximum nesting depth walked by the scorer.
        min_score: Visibility threshold (strictly greater than).
        hide_unmatched: Hide non-matching documents instead of dimming them.
        field_weights: Field name to weight, without the default entry.
        default_weight: Weight for unlisted field names.
    """

    min_query_length: int
    substring_min_length: int
    field_name_ratio: float
    max_depth: int
    min_score: float
    hide_unmatched: bool
    field_weights: Mapping[str, int]
    default_weight: int


def load_search(raw: Mapping[str, Any]) -> SearchConfig:
    """Load search domain config from raw mapping.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed search configuration.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = get_section(raw, "search", required=True)
    weights = expect_int_mapping(
        get_required_value(section, "field_weights", "search.field_weights"),
        "search.field_weights",
    )
    if "default" not in weights:
        raise ValueError("Missing required config: search.field_weights.default")
    default_weight = weights.pop("default")

    return SearchConfig(
        min_query_length=expect_int(
            get_optional_value(section, "min_query_length", 2), "search.min_query_length"
        ),
        substring_min_length=expect_int(
            get_optional_value(section, "substring_min_length", 3), "search.substring_min_length"
        ),
        field_name_ratio=expect_float(
            get_optional_value(section, "field_name_ratio", 0.5), "search.field_name_ratio"
        ),
        max_depth=expect_int(get_optional_value(section, "max_depth", 32), "search.max_depth"),
        min_score=expect_float(get_optional_value(section, "min_score", 0), "search.min_score"),
        hide_unmatched=expect_bool(
            get_optional_value(section, "hide_unmatched", True), "search.hide_unmatched"
        ),
        field_weights=weights,
        default_weight=default_weight,
    )


def check_search(config: SearchConfig) -> None:
    """Validate search domain constraints.

    Raises:
        ValueError: If values violate search constraints.
    """
    if config.min_query_length < 1:
        raise ValueError("search.min_query_length must be positive")
    if config.substring_min_length < 1:
        raise ValueError("search.substring_min_length must be positive")
    if not 0 <= config.field_name_ratio <= 1:
        raise ValueError("search.field_name_ratio must be between 0 and 1")
    if config.max_depth <= 0:
        raise ValueError("search.max_depth must be positive")
    if config.min_score < 0:
        raise ValueError("search.min_score must not be negative")
    if config.default_weight < 0:
        raise ValueError("search.field_weights.default must not be negative")
    negative = sorted(name for name, weight in config.field_weights.items() if weight < 0)
    if negative:
        raise ValueError(f"search.field_weights has negative weights: {negative}")
