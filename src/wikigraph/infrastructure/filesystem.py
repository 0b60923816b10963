"""Document store — the I/O collaborator consumed by the indexing engine.

INVARIANT: Files are truth. The in-memory index is derived from the store
and can always be rebuilt from it.

The engine only needs four capabilities (read, list, exists, root), captured
by :class:`DocumentStore`. :class:`FileSystemStore` implements them over a
vault directory. Document ids are vault-relative POSIX paths; the empty id
``""`` denotes the vault root.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

from wikigraph.domain.paths import is_hidden, join_id
from wikigraph.infrastructure.errors import DocumentReadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentEntry:
    """One entry of a directory listing."""

    name: str
    is_dir: bool
    modified: datetime | None = None


class DocumentStore(Protocol):
    """Read-side collaborator surface of a document collection."""

    def read_document(self, doc_id: str) -> str: ...

    def list_documents(self, dir_id: str) -> list[DocumentEntry]: ...

    def exists(self, doc_id: str) -> bool: ...

    def root_path(self) -> str: ...


# ---------------------------------------------------------------------------
# Filesystem implementation
# ---------------------------------------------------------------------------


class FileSystemStore:
    """UTF-8 text documents under a vault directory.

    A store built with ``root=None`` represents "no vault configured": its
    :meth:`root_path` is empty and every document is missing.
    """

    def __init__(self, root: Path | None) -> None:
        self._root = root

    @property
    def root(self) -> Path | None:
        return self._root

    def root_path(self) -> str:
        return str(self._root) if self._root is not None else ""

    def _full_path(self, doc_id: str) -> Path:
        if self._root is None:
            msg = "No vault configured"
            raise ValueError(msg)
        path = self._root / doc_id if doc_id else self._root

        # Guard against path traversal via crafted ids ("../outside")
        if not path.resolve().is_relative_to(self._root.resolve()):
            msg = f"Path escapes vault root: {doc_id}"
            raise ValueError(msg)
        return path

    def read_document(self, doc_id: str) -> str:
        """Return the text of *doc_id*, raising :class:`DocumentReadError`."""
        try:
            return self._full_path(doc_id).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            raise DocumentReadError(doc_id, str(exc)) from exc

    def list_documents(self, dir_id: str) -> list[DocumentEntry]:
        """List the entries of directory *dir_id* (unsorted, hidden included).

        Symlinks are reported as they are, not as their targets: a link to
        a directory is listed with ``is_dir=False`` and a walk never enters
        it.

        Raises :class:`OSError` when the directory cannot be listed.
        """
        try:
            directory = self._full_path(dir_id)
        except ValueError as exc:
            raise NotADirectoryError(str(exc)) from exc

        entries: list[DocumentEntry] = []
        for child in directory.iterdir():
            try:
                stat = child.stat()
                modified: datetime | None = datetime.fromtimestamp(stat.st_mtime, tz=UTC)
            except OSError:
                # Dangling symlink; still listed so the walk can report it.
                modified = None
            is_dir = child.is_dir() and not child.is_symlink()
            entries.append(DocumentEntry(name=child.name, is_dir=is_dir, modified=modified))
        return entries

    def exists(self, doc_id: str) -> bool:
        try:
            return self._full_path(doc_id).is_file()
        except (OSError, ValueError):
            return False


# ---------------------------------------------------------------------------
# Collection walk
# ---------------------------------------------------------------------------


def walk_documents(
    store: DocumentStore,
    *,
    on_error: Callable[[str, OSError], None] | None = None,
) -> Iterator[str]:
    """Yield the id of every non-hidden file in the collection.

    Depth-first, entries visited in lexical order per directory, so the walk
    order is stable across platforms. Hidden files are skipped and hidden
    directories are never descended into. Yields nothing when no vault is
    configured.

    A root that cannot be listed raises :class:`OSError`. Failures on nested
    directories are passed to *on_error* (or logged) and the walk continues.
    The generator can be abandoned early; no further listing happens.
    """
    if not store.root_path():
        return

    yield from _walk_dir(store, "", store.list_documents(""), on_error)


def _walk_dir(
    store: DocumentStore,
    dir_id: str,
    entries: list[DocumentEntry],
    on_error: Callable[[str, OSError], None] | None,
) -> Iterator[str]:
    for entry in sorted(entries, key=lambda e: e.name):
        if is_hidden(entry.name):
            continue
        child_id = join_id(dir_id, entry.name)
        if not entry.is_dir:
            yield child_id
            continue
        try:
            children = store.list_documents(child_id)
        except OSError as exc:
            if on_error is not None:
                on_error(child_id, exc)
            else:
                logger.debug("Skipping unreadable directory %s: %s", child_id, exc)
            continue
        yield from _walk_dir(store, child_id, children, on_error)
