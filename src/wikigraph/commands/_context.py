"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Owns the session :class:`Vault` and the emission of
results (stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from wikigraph.output.formatters import OutputSettings, format_result
from wikigraph.services.base import NO_VAULT_WARNING

if TYPE_CHECKING:
    from wikigraph.config.settings import WikigraphSettings
    from wikigraph.infrastructure.vault import Vault
    from wikigraph.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The vault is created lazily so ``--help`` and ``--version`` never
    touch the filesystem.
    """

    def __init__(self, settings: WikigraphSettings) -> None:
        self.settings = settings
        self._vault: Vault | None = None
        self._indexed = False

        from wikigraph.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            levels=settings.log_levels,
        )

    @property
    def vault(self) -> Vault:
        """The session vault (created on first access)."""
        if self._vault is None:
            from wikigraph.infrastructure.vault import Vault

            self._vault = Vault.from_settings(self.settings)
        return self._vault

    def indexed_vault(self) -> Vault:
        """The session vault with its link index built.

        There is no persistent index, so read commands rebuild it once per
        invocation. Skipped documents are reported on stderr; an unreadable
        vault root is emitted as an error (exit 1).
        """
        if not self._indexed:
            from wikigraph.services.links import LinkService

            result = LinkService(self.vault).rebuild_index()
            if not result.ok:
                self.emit(result)
            if not self.settings.json_output:
                # The read command reports a missing vault itself.
                for warning in result.warnings:
                    if warning != NO_VAULT_WARNING:
                        click.echo(f"WARNING: {warning}", err=True)
            self._indexed = True
        return self.vault

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout. Warnings go to stderr so they don't
          pollute piped output (JSON mode keeps them in the payload).
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
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
