"""Result records produced by the indexing engine.

Frozen dataclasses; the service layer converts them to validated payload
dicts (see :mod:`wikigraph.services.contracts`).
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving a reference. ``path`` is empty when not found."""

    path: str
    found: bool

    @classmethod
    def missing(cls) -> Resolution:
        return cls(path="", found=False)


@dataclass(frozen=True)
class Link:
    """An outgoing reference from a document with its resolution."""

    text: str
    target_path: str
    exists: bool


@dataclass(frozen=True)
class Backlink:
    """A document citing another, with a display title and a context line."""

    source_path: str
    source_title: str
    context: str


@dataclass
class GraphNode:
    """A document in the graph projection.

    ``link_count`` counts the distinct documents connected to this node,
    in either direction. Parallel edges (two references in one document
    resolving to the same target) appear twice in ``Graph.edges`` but add
    only one to each endpoint's ``link_count``.
    """

    id: str
    label: str
    link_count: int = 0


@dataclass(frozen=True)
class GraphEdge:
    source: str
    target: str


@dataclass(frozen=True)
class Graph:
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)


@dataclass(frozen=True)
class IndexStats:
    total_files: int
    total_links: int


@dataclass(frozen=True)
class GraphStats:
    node_count: int
    edge_count: int


@dataclass(frozen=True)
class RebuildReport:
    """Summary of a full index rebuild.

    ``warnings`` lists the documents or directories that were skipped
    because they could not be read.
    """

    total_files: int = 0
    total_links: int = 0
    warnings: list[str] = field(default_factory=list)
