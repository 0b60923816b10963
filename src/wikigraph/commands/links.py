"""Command group: per-document link queries."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from wikigraph.commands._base import WgGroup
from wikigraph.services.links import LinkService

if TYPE_CHECKING:
    from wikigraph.commands._context import AppContext

_LINKS_EXAMPLES = """\
  wikigraph links backlinks "projects/Roadmap.md"
  wikigraph links show "Daily.md"
  wikigraph --json links show "Daily.md\""""


@click.group(cls=WgGroup, examples=_LINKS_EXAMPLES)
def links() -> None:
    """Query outgoing links and backlinks of a document."""


@links.command(
    examples="""\
  wikigraph links backlinks "Roadmap.md"
  wikigraph -q links backlinks "projects/Roadmap.md\""""
)
@click.argument("doc_id")
@click.pass_obj
def backlinks(app: AppContext, doc_id: str) -> None:
    """List documents that link to DOC_ID (a vault-relative path)."""
    app.emit(LinkService(app.indexed_vault()).backlinks(doc_id))


@links.command(
    examples="""\
  wikigraph links show "Daily.md"
  wikigraph --json links show "journal/2024-01-01.md\""""
)
@click.argument("doc_id")
@click.pass_obj
def show(app: AppContext, doc_id: str) -> None:
    """Resolve every link in DOC_ID and report which targets exist."""
    app.emit(LinkService(app.vault).link_info(doc_id))
