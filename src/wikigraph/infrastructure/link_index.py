"""LinkIndex — forward and backward link indices over a document collection.

INVARIANT: The forward and backward maps are one unit. They are guarded by
a single reader/writer lock and replaced together, so readers see either
the previous complete index or the new complete index, never a partial one.

- **Forward**: document id -> ordered, de-duplicated references.
- **Backward**: reference key -> documents citing it. Keyed by the raw
  reference text and, when resolution yields a different string, by the
  resolved path as well.

The index lives in memory only; :meth:`LinkIndex.rebuild` reconstructs it
from the document store.
"""

from __future__ import annotations

import logging
from posixpath import basename

from wikigraph.domain.links import parse_references
from wikigraph.domain.models import Backlink, IndexStats, Link, RebuildReport
from wikigraph.domain.paths import base_name
from wikigraph.infrastructure.errors import DocumentReadError, IndexRebuildError
from wikigraph.infrastructure.filesystem import DocumentStore, walk_documents
from wikigraph.infrastructure.locks import ReadWriteLock
from wikigraph.infrastructure.resolver import ReferenceResolver

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT_MAX_CHARS = 100


def _add_unique(index: dict[str, list[str]], key: str, doc_id: str) -> None:
    sources = index.setdefault(key, [])
    if doc_id not in sources:
        sources.append(doc_id)


class LinkIndex:
    """Owned, thread-safe link index for one document collection.

    Construct once per vault session and share the instance; every
    operation that reads indexed state takes the shared side of the lock,
    :meth:`rebuild` takes the exclusive side for its whole pass.
    """

    def __init__(
        self,
        store: DocumentStore,
        resolver: ReferenceResolver,
        *,
        context_max_chars: int = DEFAULT_CONTEXT_MAX_CHARS,
    ) -> None:
        self._store = store
        self._resolver = resolver
        self._context_max_chars = context_max_chars
        self._forward: dict[str, list[str]] = {}
        self._backward: dict[str, list[str]] = {}
        self._lock = ReadWriteLock()

    @property
    def extension(self) -> str:
        return self._resolver.extension

    # ------------------------------------------------------------------
    # Rebuild
    # ------------------------------------------------------------------

    def rebuild(self) -> RebuildReport:
        """Replace both indices with a fresh scan of the collection.

        Unreadable documents and directories are skipped and reported in
        :attr:`RebuildReport.warnings`. A missing or unset root leaves the
        index empty without error.

        Raises:
            IndexRebuildError: The root exists but cannot be listed.
        """
        with self._lock.write_locked():
            self._forward = {}
            self._backward = {}

            root = self._store.root_path()
            if not root:
                logger.debug("No vault configured; index left empty")
                return RebuildReport()

            warnings: list[str] = []

            def skip_dir(dir_id: str, exc: OSError) -> None:
                logger.warning("Skipping unreadable directory %s: %s", dir_id, exc)
                warnings.append(f"Skipped directory {dir_id}: {exc}")

            try:
                doc_ids = list(walk_documents(self._store, on_error=skip_dir))
            except FileNotFoundError:
                logger.warning("Vault root %s does not exist; index left empty", root)
                return RebuildReport(warnings=[f"Vault root does not exist: {root}"])
            except OSError as exc:
                raise IndexRebuildError(root, str(exc)) from exc

            names = self._resolver.build_name_index(doc_ids)
            ext = self._resolver.extension

            for doc_id in doc_ids:
                if not basename(doc_id).endswith(ext):
                    continue
                try:
                    text = self._store.read_document(doc_id)
                except DocumentReadError as exc:
                    logger.warning("Skipping unreadable document %s: %s", doc_id, exc.reason)
                    warnings.append(f"Skipped document {doc_id}: {exc.reason}")
                    continue

                references = parse_references(text)
                self._forward[doc_id] = references
                for reference in references:
                    _add_unique(self._backward, reference, doc_id)
                    resolution = self._resolver.resolve(reference, names=names)
                    if resolution.found and resolution.path != reference:
                        _add_unique(self._backward, resolution.path, doc_id)

            return RebuildReport(
                total_files=len(self._forward),
                total_links=self._count_links(),
                warnings=warnings,
            )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def backlinks(self, doc_id: str) -> list[Backlink]:
        """Documents citing *doc_id*, by full id first, then by base name.

        Sources are de-duplicated within this call (first occurrence wins).
        Context lines are read from the sources after the lock is released
        and degrade to ``""`` when a source cannot be read.
        """
        target = base_name(doc_id, self.extension)
        sources: list[str] = []
        with self._lock.read_locked():
            for key in (doc_id, target):
                for source in self._backward.get(key, ()):
                    if source not in sources:
                        sources.append(source)

        return [
            Backlink(
                source_path=source,
                source_title=base_name(source, self.extension),
                context=self._context(source, target),
            )
            for source in sources
        ]

    def _context(self, source: str, target: str) -> str:
        """First line of *source* mentioning ``[[target``, trimmed and capped.

        Heuristic: a reference spanning lines, or written as a full path,
        yields no context; plain-text mentions can win over the real link.
        """
        try:
            text = self._store.read_document(source)
        except DocumentReadError:
            return ""

        pattern = "[[" + target
        limit = self._context_max_chars
        for line in text.split("\n"):
            if pattern in line:
                line = line.strip()
                if len(line) > limit:
                    line = line[:limit] + "..."
                return line
        return ""

    def link_info(self, doc_id: str) -> list[Link]:
        """Resolve every reference in the *current* content of *doc_id*.

        Reads through the store rather than the index, so the answer is
        fresh even when the index is stale.

        Raises:
            DocumentReadError: *doc_id* cannot be read.
        """
        text = self._store.read_document(doc_id)
        links: list[Link] = []
        for reference in parse_references(text):
            resolution = self._resolver.resolve(reference)
            links.append(Link(text=reference, target_path=resolution.path, exists=resolution.found))
        return links

    def stats(self) -> IndexStats:
        with self._lock.read_locked():
            return IndexStats(total_files=len(self._forward), total_links=self._count_links())

    def outgoing(self, doc_id: str) -> list[str] | None:
        """Indexed references of *doc_id*, or None if it was not indexed."""
        with self._lock.read_locked():
            references = self._forward.get(doc_id)
            return list(references) if references is not None else None

    def export_forward_index(self) -> dict[str, list[str]]:
        """Deep copy of the forward index, safe to use without the lock."""
        with self._lock.read_locked():
            return {doc_id: list(refs) for doc_id, refs in self._forward.items()}

    def export_backward_index(self) -> dict[str, list[str]]:
        """Deep copy of the backward index, safe to use without the lock."""
        with self._lock.read_locked():
            return {key: list(sources) for key, sources in self._backward.items()}

    def _count_links(self) -> int:
        return sum(len(refs) for refs in self._forward.values())
