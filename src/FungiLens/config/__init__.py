from __future__ import annotations

"""Public configuration API for FungiLens."""

from FungiLens.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    check_cross_domain,
    load_config,
    load_config_with_defaults,
    parse_config_dict,
)
from FungiLens.config.output import DisplayConfig, OutputConfig
from FungiLens.config.runtime import DocumentsConfig, RuntimeConfig
from FungiLens.config.search import SearchConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "RuntimeConfig",
    "DocumentsConfig",
    "SearchConfig",
    "DisplayConfig",
    "OutputConfig",
    "AppConfig",
    "load_config",
    "load_config_with_defaults",
    "parse_config_dict",
    "check_cross_domain",
]
