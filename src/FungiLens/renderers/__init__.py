"""Output renderers for command results.

Provides abstraction and implementations for writing search results,
perspective projections and field listings to console or JSON.
"""

from __future__ import annotations

from FungiLens.config import OutputConfig
from FungiLens.renderers.base import MultiOutputWriter, OutputWriter
from FungiLens.renderers.console import ConsoleOutputWriter, render_search_text
from FungiLens.renderers.json import JsonFileWriter, render_json


def create_output_writer(config: OutputConfig) -> OutputWriter:
    """Create output writer based on config.

    Args:
        config: Output configuration.

    Returns:
        Writer delegating to every configured format.

    Raises:
        ValueError: If no format is configured.
    """
    writers: list[OutputWriter] = []
    if "console" in config.formats:
        writers.append(ConsoleOutputWriter())
    if "json" in config.formats:
        writers.append(JsonFileWriter(config.base_dir))

    if not writers:
        raise ValueError("No output writers configured")
    return MultiOutputWriter(writers)


__all__ = [
    "OutputWriter",
    "ConsoleOutputWriter",
    "JsonFileWriter",
    "MultiOutputWriter",
    "render_json",
    "render_search_text",
    "create_output_writer",
]
