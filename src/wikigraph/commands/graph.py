"""Command group: graph projection of the link index."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from wikigraph.commands._base import WgGroup
from wikigraph.services.graph import GraphService

if TYPE_CHECKING:
    from wikigraph.commands._context import AppContext

_GRAPH_EXAMPLES = """\
  wikigraph graph show
  wikigraph graph show --include-unresolved
  wikigraph --json graph stats"""

_UNRESOLVED_OPTION = click.option(
    "--include-unresolved/--drop-unresolved",
    default=None,
    help="Add placeholder nodes for links whose target does not exist.",
)


@click.group(cls=WgGroup, examples=_GRAPH_EXAMPLES)
def graph() -> None:
    """Project the link index onto a document graph."""


@graph.command(
    examples="""\
  wikigraph graph show
  wikigraph --json graph show --include-unresolved"""
)
@_UNRESOLVED_OPTION
@click.pass_obj
def show(app: AppContext, include_unresolved: bool | None) -> None:
    """List every node (with link count) and edge."""
    service = GraphService(app.indexed_vault())
    app.emit(service.build_graph(include_unresolved=include_unresolved))


@graph.command(
    examples="""\
  wikigraph graph stats
  wikigraph --json graph stats"""
)
@_UNRESOLVED_OPTION
@click.pass_obj
def stats(app: AppContext, include_unresolved: bool | None) -> None:
    """Show node and edge counts."""
    service = GraphService(app.indexed_vault())
    app.emit(service.graph_stats(include_unresolved=include_unresolved))
