"""Vault — the session object injected into every service.

One Vault per collection session. It owns the document store, the
reference resolver, and the single :class:`LinkIndex` instance, so index
state is never module-global: services share it by holding the Vault.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wikigraph.domain.paths import DEFAULT_EXTENSION
from wikigraph.infrastructure.filesystem import DocumentStore, FileSystemStore
from wikigraph.infrastructure.graph.builder import GraphBuilder
from wikigraph.infrastructure.link_index import DEFAULT_CONTEXT_MAX_CHARS, LinkIndex
from wikigraph.infrastructure.resolver import ReferenceResolver

if TYPE_CHECKING:
    from wikigraph.config.settings import WikigraphSettings


class Vault:
    """A document collection plus its in-memory link index."""

    def __init__(
        self,
        store: DocumentStore,
        *,
        extension: str = DEFAULT_EXTENSION,
        context_max_chars: int = DEFAULT_CONTEXT_MAX_CHARS,
        include_unresolved: bool = False,
    ) -> None:
        self._store = store
        self._resolver = ReferenceResolver(store, extension=extension)
        self._index = LinkIndex(store, self._resolver, context_max_chars=context_max_chars)
        self._include_unresolved = include_unresolved

    @classmethod
    def from_settings(cls, settings: WikigraphSettings) -> Vault:
        """Build a filesystem-backed vault from resolved settings."""
        return cls(
            FileSystemStore(settings.vault_root),
            extension=settings.vault.extension,
            context_max_chars=settings.backlinks.context_max_chars,
            include_unresolved=settings.graph.include_unresolved,
        )

    @property
    def store(self) -> DocumentStore:
        return self._store

    @property
    def root(self) -> str:
        """The collection root, or ``""`` when no vault is configured."""
        return self._store.root_path()

    @property
    def resolver(self) -> ReferenceResolver:
        return self._resolver

    @property
    def index(self) -> LinkIndex:
        return self._index

    def graph_builder(self, *, include_unresolved: bool | None = None) -> GraphBuilder:
        """A graph builder over this vault's index.

        *include_unresolved* overrides the configured default when given.
        """
        if include_unresolved is None:
            include_unresolved = self._include_unresolved
        return GraphBuilder(self._index, self._resolver, include_unresolved=include_unresolved)
