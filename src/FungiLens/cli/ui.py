"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from FungiLens.cli.runner import CommandRunner
from FungiLens.config import DEFAULT_CONFIG_PATH, load_config, load_config_with_defaults
from FungiLens.core.extractor import ExtractMode


@click.group(help="FungiLens: search fungus documents and view them by perspective.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to YAML config file (merged over the default config when present).",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config.

    Args:
        ctx: Click context.
        config_path: Path to YAML config file.
    """
    load_dotenv()

    if DEFAULT_CONFIG_PATH.exists():
        cfg = load_config_with_defaults(config_path)
    else:
        cfg = load_config(config_path)
    ctx.obj = cfg


@cli.command("search")
@click.argument("query")
@click.option("--show-hidden", is_flag=True, help="Also list hidden and dimmed documents.")
@click.pass_context
def search_cmd(ctx: click.Context, query: str, show_hidden: bool) -> None:
    """Rank all documents against QUERY."""
    CommandRunner(ctx.obj).run_search(ctx.command.name, query, show_hidden=show_hidden)


@cli.command("extract")
@click.argument("document_id")
@click.option("--field", "field_path", default=None, help="Dotted field path, e.g. edibility or taxonomy.family.")
@click.option(
    "--perspective",
    "perspectives",
    multiple=True,
    help="Active perspective (repeatable). Defaults to all perspectives.",
)
@click.option(
    "--mode",
    type=click.Choice([mode.value for mode in ExtractMode]),
    default=ExtractMode.SIMPLE.value,
    show_default=True,
)
@click.pass_context
def extract_cmd(
    ctx: click.Context,
    document_id: str,
    field_path: str | None,
    perspectives: tuple[str, ...],
    mode: str,
) -> None:
    """Show a field of DOCUMENT_ID grouped by perspective."""
    CommandRunner(ctx.obj).run_extract(ctx.command.name, document_id, field_path, perspectives, mode)


@cli.command("fields")
@click.argument("document_id")
@click.pass_context
def fields_cmd(ctx: click.Context, document_id: str) -> None:
    """List the fields of DOCUMENT_ID in display priority order."""
    CommandRunner(ctx.obj).run_fields(ctx.command.name, document_id)
