"""Shared pytest fixtures and test helpers for wikigraph tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from wikigraph.infrastructure.errors import DocumentReadError
from wikigraph.infrastructure.filesystem import DocumentEntry, FileSystemStore
from wikigraph.infrastructure.vault import Vault


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def vault_root(tmp_path: Path) -> Path:
    """Temporary, empty vault directory."""
    root = tmp_path / "vault"
    root.mkdir()
    return root


@pytest.fixture
def vault(vault_root: Path) -> Vault:
    """Vault over :func:`vault_root` with default settings (index not built)."""
    return Vault(FileSystemStore(vault_root))


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run in a temp CWD with no config env, so no stray wikigraph.toml is found."""
    monkeypatch.delenv("WIKIGRAPH_CONFIG", raising=False)
    monkeypatch.delenv("WIKIGRAPH_VAULT_ROOT", raising=False)
    monkeypatch.chdir(tmp_path)
    yield


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_doc(root: Path, doc_id: str, text: str = "") -> Path:
    """Write *text* to ``root/doc_id``, creating parent directories."""
    path = root / doc_id
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def hub_vault(root: Path) -> None:
    """Hub linking to three spokes that do not link back."""
    write_doc(root, "Hub.md", "[[A]] [[B]] [[C]]")
    write_doc(root, "A.md", "spoke a")
    write_doc(root, "B.md", "spoke b")
    write_doc(root, "C.md", "spoke c")


class MemoryStore:
    """In-memory :class:`DocumentStore` with injectable read/list failures.

    Directories are implied by the ``/`` separators in document ids.
    """

    def __init__(
        self,
        docs: dict[str, str],
        *,
        root: str = "memory",
        unreadable: frozenset[str] = frozenset(),
        unlistable: frozenset[str] = frozenset(),
    ) -> None:
        self.docs = dict(docs)
        self._root = root
        self._unreadable = unreadable
        self._unlistable = unlistable

    def read_document(self, doc_id: str) -> str:
        if doc_id in self._unreadable or doc_id not in self.docs:
            raise DocumentReadError(doc_id, "unreadable")
        return self.docs[doc_id]

    def list_documents(self, dir_id: str) -> list[DocumentEntry]:
        if dir_id in self._unlistable:
            raise PermissionError(f"permission denied: {dir_id!r}")
        prefix = f"{dir_id}/" if dir_id else ""
        entries: dict[str, bool] = {}
        for doc_id in self.docs:
            if not doc_id.startswith(prefix):
                continue
            name, sep, _rest = doc_id[len(prefix) :].partition("/")
            entries[name] = entries.get(name, False) or bool(sep)
        if dir_id and not entries:
            raise FileNotFoundError(dir_id)
        return [DocumentEntry(name=name, is_dir=is_dir) for name, is_dir in entries.items()]

    def exists(self, doc_id: str) -> bool:
        return doc_id in self.docs

    def root_path(self) -> str:
        return self._root


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Undo handler changes made by ``configure_logging`` during a test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    wg = logging.getLogger("wikigraph")
    wg_level = wg.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    wg.setLevel(wg_level)
    for name in list(logging.root.manager.loggerDict):
        if name.startswith("wikigraph."):
            logging.getLogger(name).setLevel(logging.NOTSET)
