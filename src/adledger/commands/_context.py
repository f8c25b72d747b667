"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy Ledger initialization and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from adledger.config.logging import configure_logging
from adledger.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from adledger.config.settings import LedgerSettings
    from adledger.infrastructure.ledger import Ledger
    from adledger.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The ledger is lazily opened on first use so ``--help`` and
    ``--version`` never touch the database.
    """

    def __init__(self, settings: LedgerSettings) -> None:
        self.settings = settings
        self._ledger: Ledger | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def ledger(self) -> Ledger:
        """The ledger instance (created lazily on first access)."""
        if self._ledger is None:
            from adledger.infrastructure.ledger import Ledger

            self._ledger = Ledger(self.settings)
        return self._ledger

    def close(self) -> None:
        if self._ledger is not None:
            self._ledger.close()
            self._ledger = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            list_limit=self.settings.listing.list_limit,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
