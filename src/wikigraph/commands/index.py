"""Command group: link index maintenance."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from wikigraph.commands._base import WgGroup
from wikigraph.services.links import LinkService

if TYPE_CHECKING:
    from wikigraph.commands._context import AppContext

_INDEX_EXAMPLES = """\
  wikigraph index rebuild
  wikigraph --vault ~/notes index stats
  wikigraph --json index rebuild"""


@click.group(cls=WgGroup, examples=_INDEX_EXAMPLES)
def index() -> None:
    """Build and inspect the in-memory link index."""


@index.command(
    examples="""\
  wikigraph index rebuild
  wikigraph --json index rebuild"""
)
@click.pass_obj
def rebuild(app: AppContext) -> None:
    """Scan the vault and rebuild forward and backward indices."""
    app.emit(LinkService(app.vault).rebuild_index())


@index.command(
    examples="""\
  wikigraph index stats
  wikigraph --json index stats"""
)
@click.pass_obj
def stats(app: AppContext) -> None:
    """Show indexed file and link totals."""
    app.emit(LinkService(app.indexed_vault()).index_stats())
