"""GraphService — node/edge view of the link index.

Read-only: the graph is projected from a snapshot of the forward index on
every call and never stored.
"""

from __future__ import annotations

from dataclasses import asdict

import structlog

from wikigraph.services.base import BaseService
from wikigraph.services.contracts import GraphData, GraphStatsData, dump_validated
from wikigraph.services.result import ServiceResult

log = structlog.get_logger(__name__)


class GraphService(BaseService):
    """Handles graph projection queries."""

    def build_graph(self, *, include_unresolved: bool | None = None) -> ServiceResult:
        """Return every node and edge of the document graph.

        Args:
            include_unresolved: Add placeholder nodes for references that
                do not resolve. Defaults to the ``[graph]`` config.
        """
        graph = self._vault.graph_builder(include_unresolved=include_unresolved).build()
        log.debug("graph.built", nodes=len(graph.nodes), edges=len(graph.edges))
        return ServiceResult(
            ok=True,
            op="build_graph",
            data=dump_validated(
                GraphData,
                {
                    "node_count": len(graph.nodes),
                    "edge_count": len(graph.edges),
                    "nodes": [asdict(n) for n in graph.nodes],
                    "edges": [asdict(e) for e in graph.edges],
                },
            ),
            warnings=self._config_warnings(),
        )

    def graph_stats(self, *, include_unresolved: bool | None = None) -> ServiceResult:
        """Node and edge counts of the document graph."""
        stats = self._vault.graph_builder(include_unresolved=include_unresolved).stats()
        return ServiceResult(
            ok=True,
            op="graph_stats",
            data=dump_validated(GraphStatsData, asdict(stats)),
            warnings=self._config_warnings(),
        )
