from __future__ import annotations

"""Application config orchestration and YAML loading entrypoints."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from FungiLens.config.output import (
    DisplayConfig,
    OutputConfig,
    check_display,
    check_output,
    load_display,
    load_output,
)
from FungiLens.config.perspectives import check_perspectives, load_perspectives
from FungiLens.config.runtime import (
    DocumentsConfig,
    RuntimeConfig,
    check_documents,
    check_runtime,
    load_documents,
    load_runtime,
)
from FungiLens.config.search import SearchConfig, check_search, load_search
from FungiLens.core.perspectives import PerspectiveTaxonomy

DEFAULT_CONFIG_PATH = Path("config/default.yml")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    documents: DocumentsConfig
    search: SearchConfig
    perspectives: PerspectiveTaxonomy
    display: DisplayConfig
    output: OutputConfig


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse normalized mapping into AppConfig."""
    runtime = load_runtime(raw)
    documents = load_documents(raw)
    search = load_search(raw)
    perspectives = load_perspectives(raw)
    display = load_display(raw)
    output = load_output(raw)

    check_runtime(runtime)
    check_documents(documents)
    check_search(search)
    check_perspectives(perspectives)
    check_display(display)
    check_output(output)

    config = AppConfig(
        runtime=runtime,
        documents=documents,
        search=search,
        perspectives=perspectives,
        display=display,
        output=output,
    )
    check_cross_domain(config)
    return config


def load_config(path: Path) -> AppConfig:
    """Load YAML config file without default merge."""
    return load_config_with_defaults(path, default_path=path)


def load_config_with_defaults(config_path: Path, default_path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load config by merging defaults and optional override."""
    base = parse_yaml(default_path.read_text(encoding="utf-8"))
    if config_path == default_path:
        return parse_config_dict(base)
    override = parse_yaml(config_path.read_text(encoding="utf-8"))
    return parse_config_dict(merge_config_dicts(base, override))


def check_cross_domain(config: AppConfig) -> None:
    """Validate cross-domain constraints."""
    if config.perspectives.is_perspective(config.documents.id_field):
        raise ValueError("documents.id_field must not name a perspective")
    if config.search.substring_min_length < config.search.min_query_length:
        raise ValueError("search.substring_min_length must be >= search.min_query_length")


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse raw YAML text into a mapping."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings; override wins on leaves and lists."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
