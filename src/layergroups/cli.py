"""Root CLI group for layergroups with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from layergroups import __version__
from layergroups.commands import register_commands
from layergroups.commands._context import AppContext
from layergroups.config.settings import LayerGroupsSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="layergroups")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output (ids only).")
@click.option(
    "-v", "--verbose", count=True, help="Log to stderr: -v for events, -vv for host calls."
)
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-s",
    "--style",
    "style_path",
    default=None,
    type=click.Path(dir_okay=False),
    help="Style JSON file to operate on (overrides [style] path).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: int,
    log_json: bool,
    config_path: str | None,
    style_path: str | None,
) -> None:
    """layergroups: virtual layer groups for style layer stacks."""
    ctx.ensure_object(dict)
    settings = LayerGroupsSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        style_path=Path(style_path).absolute() if style_path else None,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
