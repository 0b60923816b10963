"""Subcommand modules for wikigraph.

:func:`register_commands` imports groups lazily so ``wikigraph --help``
stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``index``, ``links`` and ``graph`` groups on the root CLI."""
    from wikigraph.commands.graph import graph
    from wikigraph.commands.index import index
    from wikigraph.commands.links import links

    cli.add_command(index)
    cli.add_command(links)
    cli.add_command(graph)
