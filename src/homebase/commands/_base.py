"""Click base classes: an ``--examples`` flag on commands and groups.

``--help`` stays short; ``--examples`` prints the usage examples passed as
``examples=`` when the command was declared, then exits.
"""

from __future__ import annotations

from typing import Any

import click


def _examples_option(examples: str) -> click.Option:
    def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value and not ctx.resilient_parsing:
            click.echo(f"Examples for '{ctx.command_path}':\n")
            click.echo(examples)
            ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=show,
        help="Show usage examples.",
    )


class _ExamplesMixin:
    """Accepts ``examples=`` and exposes it as an eager ``--examples`` flag."""

    params: list[click.Parameter]

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(_examples_option(examples))


class HomebaseCommand(_ExamplesMixin, click.Command):
    """A leaf command."""


class HomebaseGroup(_ExamplesMixin, click.Group):
    """A command group; nested commands and groups use the homebase classes."""

    command_class = HomebaseCommand
    group_class = type
