"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from wikigraph.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from wikigraph.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
        if verbose and result.meta:
            for key, value in result.meta.items():
                console.print(Text(f"  {key}: {value}", style="dim"))
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: one id/path per line for list results."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} - {msg}"

    for key, id_key in (("items", None), ("nodes", "id")):
        rows = result.data.get(key)
        if rows:
            return "\n".join(_row_id(row, id_key) for row in rows)
    return f"OK: {result.op}"


def _row_id(row: dict[str, Any], id_key: str | None) -> str:
    if id_key is not None:
        return str(row[id_key])
    for key in ("source_path", "target_path", "text"):
        if row.get(key):
            return str(row[key])
    return ""


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text.assemble(("OK", "wg.ok"), (f"  {result.op}", "wg.op")))


def _field(console: Console, key: str, value: Any) -> None:
    style = "wg.path" if key in ("id", "root") else "wg.count"
    console.print(Text.assemble((f"  {key}: ", "wg.key"), (str(value), style)))


def _table(*columns: str) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    for column in columns:
        table.add_column(column)
    return table


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text.assemble(("ERROR", "wg.error"), (f"  {result.op}", "wg.op"), f" - {msg}")
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_backlinks(result: ServiceResult, console: Console) -> None:
    items = result.data.get("items", [])
    table = _table("Source", "Title", "Context")
    for item in items:
        table.add_row(
            Text(item["source_path"], style="wg.path"),
            Text(item["source_title"], style="wg.title"),
            Text(item["context"]),
        )
    console.print(table)
    count = result.data.get("count", len(items))
    console.print(Text(f"\n{count} backlinks to {result.data['id']}"))


def _render_links(result: ServiceResult, console: Console) -> None:
    items = result.data.get("items", [])
    table = _table("Link", "Target", "Exists")
    for item in items:
        exists = Text("yes", style="wg.ok") if item["exists"] else Text("no", style="wg.missing")
        table.add_row(Text(item["text"]), Text(item["target_path"], style="wg.path"), exists)
    console.print(table)
    console.print(f"\n{result.data.get('resolved', 0)}/{len(items)} links resolved")


def _render_graph(result: ServiceResult, console: Console) -> None:
    nodes = _table("Node", "Label", "Links")
    for node in result.data.get("nodes", []):
        nodes.add_row(
            Text(node["id"], style="wg.path"),
            Text(node["label"]),
            Text(str(node["link_count"]), style="wg.count"),
        )
    console.print(nodes)

    edges = _table("Source", "Target")
    for edge in result.data.get("edges", []):
        edges.add_row(Text(edge["source"]), Text(edge["target"]))
    console.print(edges)
    console.print(f"\n{result.data['node_count']} nodes, {result.data['edge_count']} edges")


_OP_RENDERERS: dict[str, Any] = {
    "rebuild_index": _render_generic,
    "index_stats": _render_generic,
    "graph_stats": _render_generic,
    "backlinks": _render_backlinks,
    "link_info": _render_links,
    "build_graph": _render_graph,
}
