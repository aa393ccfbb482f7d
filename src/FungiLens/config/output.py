"""Output and display domain configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from FungiLens.config.common import (
    expect_int,
    expect_str,
    expect_str_list,
    get_optional_value,
    get_required_value,
    get_section,
)

_ALLOWED_FORMATS = {"console", "json"}


@dataclass(frozen=True, slots=True)
class OutputConfig:
    """Output configuration."""

    base_dir: str
    formats: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class DisplayConfig:
    """Field listing limits used when mapping documents for display.

    Attributes:
        max_fields: Maximum number of fields listed per document (0 = all).
        max_depth: How many nested levels are flattened into the listing.
        exclude_fields: Top-level keys never listed.
    """

    max_fields: int
    max_depth: int
    exclude_fields: tuple[str, ...]


def load_output(raw: Mapping[str, Any]) -> OutputConfig:
    """Load output domain config from raw mapping.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = get_section(raw, "output", required=True)
    formats = tuple(
        item.strip().lower()
        for item in expect_str_list(get_required_value(section, "formats", "output.formats"), "output.formats")
    )
    return OutputConfig(
        base_dir=expect_str(get_optional_value(section, "base_dir", "output"), "output.base_dir"),
        formats=formats,
    )


def check_output(config: OutputConfig) -> None:
    """Validate output domain constraints.

    Raises:
        ValueError: If values violate output constraints.
    """
    if not config.formats:
        raise ValueError("output.formats must include at least one format")
    unknown = set(config.formats) - _ALLOWED_FORMATS
    if unknown:
        raise ValueError(f"output.formats has unknown formats: {sorted(unknown)}")
    if "json" in config.formats and not config.base_dir.strip():
        raise ValueError("output.base_dir must not be empty")


def load_display(raw: Mapping[str, Any]) -> DisplayConfig:
    """Load display limits; the whole section is optional."""
    section = get_section(raw, "display", required=False)
    return DisplayConfig(
        max_fields=expect_int(get_optional_value(section, "max_fields", 20), "display.max_fields"),
        max_depth=expect_int(get_optional_value(section, "max_depth", 1), "display.max_depth"),
        exclude_fields=tuple(
            expect_str_list(
                get_optional_value(section, "exclude_fields", ["_id", "_creationTime", "slug", "seoName"]),
                "display.exclude_fields",
            )
        ),
    )


def check_display(config: DisplayConfig) -> None:
    if config.max_fields < 0:
        raise ValueError("display.max_fields must not be negative")
    if config.max_depth < 0:
        raise ValueError("display.max_depth must not be negative")
