"""Click command classes that carry an ``--examples`` flag.

``examples=`` text is declared next to each command so ``layergroups group
move --examples`` prints ready-to-paste invocations and exits.
"""

from __future__ import annotations

from typing import Any

import click


class _WithExamples:
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._print_examples,
                    help="Show usage examples.",
                )
            )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value:
            click.echo(f"Examples for '{ctx.command_path}':\n\n{self.examples}")
            ctx.exit(0)


class LgCommand(_WithExamples, click.Command):
    pass


class LgGroup(_WithExamples, click.Group):
    command_class = LgCommand
