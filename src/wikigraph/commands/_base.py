"""Click classes shared by the ``index``, ``links`` and ``graph`` groups.

Commands declared through a :class:`WgGroup` accept ``examples=...``: a
block of sample invocations printed by ``--examples`` instead of being
folded into ``--help``.
"""

from __future__ import annotations

from typing import Any

import click

_EXAMPLES_HINT = "Run with --examples for sample invocations."


class _ExamplesMixin:
    """Adds an eager ``--examples`` flag when ``examples`` is given."""

    examples: str | None

    def _init_examples(self, examples: str | None) -> None:
        self.examples = examples
        if examples and not getattr(self, "epilog", None):
            self.epilog = _EXAMPLES_HINT

    def get_params(self, ctx: click.Context) -> list[click.Parameter]:
        params: list[click.Parameter] = [*super().get_params(ctx)]  # type: ignore[misc]
        if self.examples:
            params.append(self._examples_option())
        return params

    def _examples_option(self) -> click.Option:
        text = self.examples

        def _print(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
            if not value or ctx.resilient_parsing:
                return
            click.echo(f"Examples for '{ctx.command_path}':\n")
            click.echo(text)
            ctx.exit(0)

        return click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=_print,
            help="Show usage examples.",
        )


class WgCommand(_ExamplesMixin, click.Command):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class WgGroup(_ExamplesMixin, click.Group):
    """Group whose subcommands are :class:`WgCommand` by default."""

    command_class = WgCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
