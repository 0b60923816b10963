"""Typed payload contracts for service boundaries.

These models validate operation payload shapes before they leave the
service layer so key regressions (for example ``items`` vs ``links``)
fail fast in tests and during development.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


def dump_validated[T: BaseModel](model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


class RebuildData(BaseModel):
    """Payload contract for ``LinkService.rebuild_index``."""

    root: str
    total_files: int
    total_links: int


class IndexStatsData(BaseModel):
    """Payload contract for ``LinkService.index_stats``."""

    total_files: int
    total_links: int


class BacklinkItem(BaseModel):
    source_path: str
    source_title: str
    context: str


class BacklinksData(BaseModel):
    """Payload contract for ``LinkService.backlinks``."""

    id: str
    count: int
    items: list[BacklinkItem]


class LinkItem(BaseModel):
    text: str
    target_path: str
    exists: bool


class LinksData(BaseModel):
    """Payload contract for ``LinkService.link_info``."""

    id: str
    count: int
    resolved: int
    items: list[LinkItem]


class NodeItem(BaseModel):
    id: str
    label: str
    link_count: int


class EdgeItem(BaseModel):
    source: str
    target: str


class GraphData(BaseModel):
    """Payload contract for ``GraphService.build_graph``."""

    node_count: int
    edge_count: int
    nodes: list[NodeItem]
    edges: list[EdgeItem]


class GraphStatsData(BaseModel):
    """Payload contract for ``GraphService.graph_stats``."""

    node_count: int
    edge_count: int
