"""Runtime domain configuration (logging, document source)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from FungiLens.config.common import (
    expect_bool,
    expect_str,
    get_optional_value,
    get_required_value,
    get_section,
)

_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Store validated logging settings."""

    level: str
    to_file: bool
    dir: str


@dataclass(frozen=True, slots=True)
class DocumentsConfig:
    """Where entity documents are read from and how they are identified.

    Attributes:
        path: JSON file or directory of JSON files.
        id_field: Top-level key holding the document id.
    """

    path: str
    id_field: str


def load_runtime(raw: Mapping[str, Any]) -> RuntimeConfig:
    """Load runtime configuration from raw mapping.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed runtime configuration.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = get_section(raw, "log", required=True)
    return RuntimeConfig(
        level=expect_str(get_required_value(section, "level", "log.level"), "log.level").upper(),
        to_file=expect_bool(get_optional_value(section, "to_file", False), "log.to_file"),
        dir=expect_str(get_optional_value(section, "dir", "log"), "log.dir"),
    )


def check_runtime(config: RuntimeConfig) -> None:
    """Validate runtime domain constraints.

    Raises:
        ValueError: If values violate runtime constraints.
    """
    if config.level not in _ALLOWED_LOG_LEVELS:
        raise ValueError(f"log.level must be one of {sorted(_ALLOWED_LOG_LEVELS)}")
    if config.to_file and not config.dir.strip():
        raise ValueError("log.dir must not be empty")


def load_documents(raw: Mapping[str, Any]) -> DocumentsConfig:
    """Load document source configuration."""
    section = get_section(raw, "documents", required=True)
    return DocumentsConfig(
        path=expect_str(get_required_value(section, "path", "documents.path"), "documents.path"),
        id_field=expect_str(get_optional_value(section, "id_field", "slug"), "documents.id_field"),
    )


def check_documents(config: DocumentsConfig) -> None:
    """Validate document source constraints."""
    if not config.path.strip():
        raise ValueError("documents.path must not be empty")
    if not config.id_field.strip():
        raise ValueError("documents.id_field must not be empty")
