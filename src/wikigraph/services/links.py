"""LinkService — index rebuild, backlinks, outgoing links, index statistics.

Thin adapter over :class:`~wikigraph.infrastructure.link_index.LinkIndex`:
translates index exceptions into ServiceResult errors and index records
into validated payloads.
"""

from __future__ import annotations

import time
from dataclasses import asdict

import structlog

from wikigraph.infrastructure.errors import DocumentReadError, IndexRebuildError
from wikigraph.services.base import BaseService
from wikigraph.services.contracts import (
    BacklinksData,
    IndexStatsData,
    LinksData,
    RebuildData,
    dump_validated,
)
from wikigraph.services.result import ServiceResult

log = structlog.get_logger(__name__)


class LinkService(BaseService):
    """Handles the link index and per-document link queries."""

    def rebuild_index(self) -> ServiceResult:
        """Rebuild the forward and backward indices from the document store.

        Skipped documents surface as warnings; only an unwalkable root
        fails the operation.
        """
        t0 = time.perf_counter()
        try:
            report = self._vault.index.rebuild()
        except IndexRebuildError as exc:
            log.warning("index.rebuild_failed", root=exc.root, reason=exc.reason)
            return ServiceResult.failure(
                "rebuild_index",
                "ROOT_UNREADABLE",
                str(exc),
                root=exc.root,
            )
        duration_ms = round((time.perf_counter() - t0) * 1000, 2)

        log.info(
            "index.rebuilt",
            files=report.total_files,
            links=report.total_links,
            skipped=len(report.warnings),
            duration_ms=duration_ms,
        )
        return ServiceResult(
            ok=True,
            op="rebuild_index",
            data=dump_validated(
                RebuildData,
                {
                    "root": self._vault.root,
                    "total_files": report.total_files,
                    "total_links": report.total_links,
                },
            ),
            warnings=[*self._config_warnings(), *report.warnings],
            meta={"duration_ms": duration_ms},
        )

    def backlinks(self, doc_id: str) -> ServiceResult:
        """List the documents that cite *doc_id*, with context lines."""
        items = [asdict(b) for b in self._vault.index.backlinks(doc_id)]
        return ServiceResult(
            ok=True,
            op="backlinks",
            data=dump_validated(BacklinksData, {"id": doc_id, "count": len(items), "items": items}),
            warnings=self._config_warnings(),
        )

    def link_info(self, doc_id: str) -> ServiceResult:
        """Resolve each reference in the current content of *doc_id*.

        Unresolved references are returned with ``exists=False``. An
        unreadable document fails the operation with no partial data.
        """
        if not self._vault.root:
            return ServiceResult(
                ok=True,
                op="link_info",
                data=dump_validated(
                    LinksData, {"id": doc_id, "count": 0, "resolved": 0, "items": []}
                ),
                warnings=self._config_warnings(),
            )
        try:
            links = self._vault.index.link_info(doc_id)
        except DocumentReadError as exc:
            return ServiceResult.failure(
                "link_info",
                "NOT_FOUND",
                f"Document '{doc_id}' cannot be read",
                reason=exc.reason,
            )

        items = [asdict(link) for link in links]
        return ServiceResult(
            ok=True,
            op="link_info",
            data=dump_validated(
                LinksData,
                {
                    "id": doc_id,
                    "count": len(items),
                    "resolved": sum(1 for link in links if link.exists),
                    "items": items,
                },
            ),
        )

    def index_stats(self) -> ServiceResult:
        """File and link totals of the current index."""
        stats = self._vault.index.stats()
        return ServiceResult(
            ok=True,
            op="index_stats",
            data=dump_validated(IndexStatsData, asdict(stats)),
            warnings=self._config_warnings(),
        )
