"""Command runner for coordinating CLI execution.

Manages component lifecycle, logging configuration, and error handling for
command execution.
"""

from __future__ import annotations

from typing import Callable, Sequence

import click

from FungiLens.cli.commands import ExtractCommand, FieldsCommand, SearchCommand
from FungiLens.config import AppConfig
from FungiLens.core.classifier import ValueClassifier
from FungiLens.renderers import OutputWriter, create_output_writer
from FungiLens.services import SearchSession, create_search_session
from FungiLens.sources.files import load_documents
from FungiLens.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution.

    Handles logging configuration, document loading, component creation and
    error handling for CLI commands.
    """

    def __init__(self, config: AppConfig) -> None:
        """Initialize command runner.

        Args:
            config: Application configuration.
        """
        self.config = config

    def run_search(self, action: str, query: str, *, show_hidden: bool = False) -> None:
        """Execute the search command.

        Raises:
            click.Abort: When the search fails.
        """

        def execute(session: SearchSession, writer: OutputWriter) -> None:
            SearchCommand(self.config, session, writer).execute(query, show_hidden=show_hidden)

        self._run(action, execute)

    def run_extract(
        self,
        action: str,
        document_id: str,
        field_path: str | None,
        perspectives: Sequence[str],
        mode: str,
    ) -> None:
        """Execute the extract command.

        Raises:
            click.ClickException: When the document id is unknown.
            click.Abort: When extraction fails otherwise.
        """

        def execute(session: SearchSession, writer: OutputWriter) -> None:
            self._require_document(session, document_id)
            ExtractCommand(self.config, session, writer).execute(document_id, field_path, perspectives, mode)

        self._run(action, execute)

    def run_fields(self, action: str, document_id: str) -> None:
        """Execute the fields command.

        Raises:
            click.ClickException: When the document id is unknown.
            click.Abort: When the listing fails otherwise.
        """

        def execute(session: SearchSession, writer: OutputWriter) -> None:
            self._require_document(session, document_id)
            FieldsCommand(self.config, session, ValueClassifier(), writer).execute(document_id)

        self._run(action, execute)

    def _run(self, action: str, execute: Callable[[SearchSession, OutputWriter], None]) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
        try:
            documents = load_documents(self.config.documents.path, id_field=self.config.documents.id_field)
            session = create_search_session(self.config, documents)
            output_writer = create_output_writer(self.config.output)

            execute(session, output_writer)
            output_writer.finalize(action)
        except click.ClickException:
            raise
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("%s failed: %s", action.capitalize(), e)
            raise click.Abort from e

    @staticmethod
    def _require_document(session: SearchSession, document_id: str) -> None:
        try:
            session.get(document_id)
        except KeyError:
            raise click.ClickException(f"Unknown document id: {document_id}") from None
