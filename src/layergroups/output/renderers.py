"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from layergroups.output.console import create_console, get_output

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from layergroups.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
    else:
        _render_error(result, console)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode: ids only."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item["id"]) for item in items if isinstance(item, dict))
    layer_ids = result.data.get("layer_ids")
    if isinstance(layer_ids, list):
        return "\n".join(layer_ids)
    if "id" in result.data:
        return str(result.data["id"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="lg.ok"), Text(f"  {result.op}", style="lg.op"))


def _field(console: Console, key: str, value: Any) -> None:
    line = Text()
    line.append(f"  {key}: ", style="lg.key")
    line.append("-" if value is None else str(value))
    console.print(line)


def _contiguity(value: bool) -> Text:
    if value:
        return Text("yes")
    return Text("fragmented", style="lg.fragmented")


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console) -> None:
    error = result.error
    line = Text("ERROR", style="lg.error")
    line.append(f"  {result.op}", style="lg.op")
    if error is not None:
        line.append(f"  {error.message}")
    console.print(line)
    if error is not None and error.detail:
        for key, value in error.detail.items():
            _field(console, key, value)


def _render_mutation(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    data = result.data
    _field(console, "group", data.get("group_id"))
    layer_ids = data.get("layer_ids")
    if layer_ids is not None:
        _field(console, "layers", ", ".join(layer_ids) or "(none)")
    for key in ("id", "first_id", "last_id", "contiguous", "cleared"):
        if key in data:
            _field(console, key, data[key])


def _render_group(result: ServiceResult, console: Console) -> None:
    data = result.data
    _status_line(console, result)
    _field(console, "group", data["group_id"])
    _field(console, "first", data.get("first_id"))
    _field(console, "last", data.get("last_id"))
    line = Text("  contiguous: ", style="lg.key")
    line.append_text(_contiguity(data["contiguous"]))
    console.print(line)

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Index", justify="right")
    table.add_column("Layer", style="lg.id")
    for item in data["items"]:
        table.add_row(str(item["index"]), Text(item["id"]))
    console.print(table)


def _render_groups(result: ServiceResult, console: Console) -> None:
    items = result.data["items"]
    if not items:
        console.print("No groups.")
        return
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Group", style="lg.group")
    table.add_column("Layers", justify="right")
    table.add_column("First", style="lg.id")
    table.add_column("Last", style="lg.id")
    table.add_column("Contiguous")
    for item in items:
        table.add_row(
            Text(item["id"]),
            str(item["count"]),
            Text(item["first_id"] or "-"),
            Text(item["last_id"] or "-"),
            _contiguity(item["contiguous"]),
        )
    console.print(table)


def _render_layers(result: ServiceResult, console: Console) -> None:
    items = result.data["items"]
    if not items:
        console.print("Layer stack is empty.")
        return
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Index", justify="right")
    table.add_column("Layer", style="lg.id")
    table.add_column("Group", style="lg.group")
    for item in items:
        table.add_row(str(item["index"]), Text(item["id"]), Text(item["group"] or ""))
    console.print(table)


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Callable[[ServiceResult, Console], None]] = {
    "add_group": _render_mutation,
    "add_layer": _render_mutation,
    "move_group": _render_mutation,
    "remove_group": _render_mutation,
    "assign": _render_mutation,
    "unassign": _render_mutation,
    "show_group": _render_group,
    "list_groups": _render_groups,
    "list_layers": _render_layers,
}
