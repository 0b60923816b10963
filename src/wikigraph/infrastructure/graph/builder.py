"""GraphBuilder — node/edge projection of the link index.

Rebuilt per request, no cache. Reads a deep-copied snapshot of the forward
index, so after the snapshot is taken the projection needs no lock and may
run alongside a rebuild (it then sees the previous, consistent index).
The builder never mutates the index.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import networkx as nx

from wikigraph.domain.models import Graph, GraphEdge, GraphNode, GraphStats
from wikigraph.domain.paths import base_name, is_primary_document, with_extension

if TYPE_CHECKING:
    from wikigraph.infrastructure.link_index import LinkIndex
    from wikigraph.infrastructure.resolver import ReferenceResolver

logger = logging.getLogger(__name__)

# Parallel edges are kept: two distinct references resolving to the same
# target are two edges.
type _Graph = nx.MultiDiGraph


class GraphBuilder:
    """Projects the forward index onto a directed multigraph of documents."""

    def __init__(
        self,
        index: LinkIndex,
        resolver: ReferenceResolver,
        *,
        include_unresolved: bool = False,
    ) -> None:
        self._index = index
        self._resolver = resolver
        self._include_unresolved = include_unresolved

    def build(self) -> Graph:
        """Build the graph from the current index snapshot.

        Only primary text documents take part. Unresolved references are
        dropped unless ``include_unresolved`` is set, in which case they
        link to a placeholder node named after the reference.
        Nodes are sorted by id, edges by ``(source, target)``.
        """
        return self._project(self._build_nx())

    def stats(self) -> GraphStats:
        graph = self.build()
        return GraphStats(node_count=len(graph.nodes), edge_count=len(graph.edges))

    def _build_nx(self) -> _Graph:
        snapshot = self._index.export_forward_index()
        ext = self._resolver.extension
        try:
            names = self._resolver.build_name_index()
        except OSError as exc:
            logger.warning("Name index unavailable, name-based resolution disabled: %s", exc)
            names = {}

        g: _Graph = nx.MultiDiGraph()
        for source, references in snapshot.items():
            if not is_primary_document(source, ext):
                continue
            if source not in g:
                g.add_node(source, label=base_name(source, ext))

            for reference in references:
                resolution = self._resolver.resolve(reference, names=names)
                if resolution.found:
                    target = resolution.path
                    if not is_primary_document(target, ext):
                        continue
                elif self._include_unresolved:
                    target = with_extension(reference, ext)
                else:
                    continue

                if target not in g:
                    g.add_node(target, label=base_name(target, ext))
                g.add_edge(source, target)
        return g

    @staticmethod
    def _project(g: _Graph) -> Graph:
        """Convert the multigraph into sorted node and edge records.

        ``link_count`` is the number of distinct neighbours in either
        direction: a mutual pair counts once per endpoint.
        """
        nodes = [
            GraphNode(
                id=node_id,
                label=g.nodes[node_id]["label"],
                link_count=len(set(nx.all_neighbors(g, node_id))),
            )
            for node_id in sorted(g.nodes)
        ]
        edges = sorted(
            (GraphEdge(source=u, target=v) for u, v in g.edges()),
            key=lambda e: (e.source, e.target),
        )
        return Graph(nodes=nodes, edges=edges)
