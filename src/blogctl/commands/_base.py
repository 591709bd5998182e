"""Click command classes that take an ``examples=`` block.

``--help`` stays short; ``blogctl build --examples`` prints the block and
exits before any option validation or site loading happens.
"""

from __future__ import annotations

from typing import Any

import click


def _examples_option(examples: str) -> click.Option:
    def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value:
            click.echo(f"Examples for '{ctx.command_path}':\n\n{examples}")
            ctx.exit(0)

    return click.Option(
        ["--examples"],
        is_flag=True,
        is_eager=True,
        expose_value=False,
        callback=show,
        help="Show usage examples.",
    )


class _ExamplesMixin:
    params: list[click.Parameter]

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(_examples_option(examples))


class BlogCommand(_ExamplesMixin, click.Command):
    """A command with an optional ``--examples`` flag."""


class BlogGroup(_ExamplesMixin, click.Group):
    """A group with an optional ``--examples`` flag.

    Its subcommands are :class:`BlogCommand` unless they pass ``cls=``.
    """

    command_class = BlogCommand
