"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy Store initialization, translation of
domain errors into ServiceResult, and centralized result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from posctl.config.logging import bind_operation, clear_operation
from posctl.domain.errors import PosError
from posctl.output.formatters import OutputSettings, format_result
from posctl.services.result import ServiceResult
from posctl.services.telemetry import pop_last_span

if TYPE_CHECKING:
    from collections.abc import Callable

    from posctl.config.settings import PosSettings
    from posctl.infrastructure.store import Store


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The store is lazily
    initialized on first use so ``--help`` and ``--version`` never
    trigger database access.
    """

    def __init__(self, settings: PosSettings) -> None:
        self.settings = settings
        self._store: Store | None = None

        # Configure structured logging
        from posctl.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            echo_sql=settings.database.echo,
        )

        # Enable telemetry context var when verbose
        if settings.verbose:
            from posctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def store(self) -> Store:
        """The store instance (created lazily on first access)."""
        if self._store is None:
            from posctl.infrastructure.store import Store

            self._store = Store(self.settings)
            self._store.init_plugins()
        return self._store

    def run(self, op: str, action: Callable[[], dict[str, Any]]) -> None:
        """Run *action*, wrap its outcome in a ServiceResult, and emit it.

        Domain errors become error results; anything else propagates.
        """
        bind_operation(op)
        try:
            result = ServiceResult.success(op, action())
        except PosError as exc:
            result = ServiceResult.failure(op, exc)
        finally:
            clear_operation()

        span = pop_last_span()
        if span is not None:
            result = result.model_copy(update={"meta": {"telemetry": span.to_dict()}})
        self.emit(result)

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
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
