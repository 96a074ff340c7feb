"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy style loading and centralized result
emission (stdout/stderr routing, write-back, exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click
import structlog

from layergroups.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from layergroups.config.settings import LayerGroupsSettings
    from layergroups.infrastructure.style import StyleDocument
    from layergroups.services.groups import GroupService
    from layergroups.services.result import ServiceResult

log = structlog.get_logger(__name__)


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The style document is loaded on first use so ``--help`` and
    ``--version`` never touch the filesystem.
    """

    def __init__(self, settings: LayerGroupsSettings) -> None:
        self.settings = settings
        self._document: StyleDocument | None = None

        from layergroups.config.logging import bind_style, configure_logging

        configure_logging(verbosity=settings.verbose, log_json=settings.log_json)
        bind_style(settings.resolved_style_path)
        log.debug(
            "config.located",
            source=str(settings.config_source),
            path=str(settings.config_path) if settings.config_path else None,
        )

    @property
    def document(self) -> StyleDocument:
        """The style document (loaded lazily on first access)."""
        if self._document is None:
            from layergroups.infrastructure.style import StyleFormatError, load_style

            try:
                self._document = load_style(self.settings.resolved_style_path)
            except StyleFormatError as exc:
                raise click.ClickException(str(exc)) from exc
        return self._document

    @property
    def groups(self) -> GroupService:
        from layergroups.services.groups import GroupService

        return GroupService(self.document.stack)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: the style file is written back if the stack changed,
          then output goes to stdout. Warnings go to stderr outside JSON mode.
        * Failure: nothing is written, output goes to stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            if result.mutated:
                from layergroups.infrastructure.style import save_style

                save_style(self.document, indent=self.settings.style.indent)
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
