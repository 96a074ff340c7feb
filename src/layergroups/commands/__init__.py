"""Subcommand modules for layergroups.

Provides register_commands() which uses deferred imports to keep
``layergroups --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``group`` command group and the ``layers`` command."""
    from layergroups.commands.group import group
    from layergroups.commands.layers import layers

    cli.add_command(group)
    cli.add_command(layers)
