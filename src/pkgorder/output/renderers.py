"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from pkgorder.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from pkgorder.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Order-producing ops print one package per line so the output can be
    piped straight into an installer loop.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    data = result.data
    if "order" in data:
        return "\n".join(data["order"])
    if result.op == "max_dependencies":
        return str(data.get("package", ""))
    if result.op == "dependencies":
        return "\n".join(data.get("dependencies", []))
    items = data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item["id"]) for item in items if isinstance(item, dict) and "id" in item)

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK/ERROR status line."""
    label = Text("OK", style="pkg.ok")
    op = Text(f"  {result.op}", style="pkg.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="pkg.key")
    if key in ("package", "installed"):
        v = Text(str(value), style="pkg.name")
    elif isinstance(value, list):
        v = Text(", ".join(str(item) for item in value) or "-")
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the meta block (verbose only)."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        console.print(f"    {k}: {v}")


def _order_table(order: list[str], *, target: str | None = None) -> Table:
    """Build a numbered Rich Table for an installation order."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", style="pkg.index", justify="right")
    table.add_column("Package", style="pkg.name", no_wrap=True)
    for idx, name in enumerate(order, start=1):
        label = Text(name, style="pkg.target") if name == target else name
        table.add_row(str(idx), label)
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="pkg.error")
    op = Text(f"  {result.op}", style="pkg.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if err and err.code:
        console.print(Text(f"  code: {err.code}", style="dim"))
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Order renderers ───────────────────────────────────────────────────


def _render_order(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render install_order / install_all / to_install as a numbered table."""
    d = result.data
    _status_line(console, result)
    for key in ("package", "installed", "roots"):
        if key in d:
            _field(console, key, d[key])

    order = d.get("order", [])
    if order:
        console.print()
        console.print(_order_table(order, target=d.get("package")))
    else:
        console.print("\nNothing to install.")
    console.print(f"\n{d.get('count', len(order))} packages")
    if verbose:
        _render_meta(console, result)


def _render_max_dependencies(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "package", d.get("package", ""))
    count = Text(str(d.get("dependency_count", 0)), style="pkg.count")
    console.print(Text("  dependency_count: ", style="pkg.key"), count, sep="")
    _field(console, "dependencies", d.get("dependencies", []))
    if verbose:
        _render_meta(console, result)


def _render_packages(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list_packages as a table of packages and direct dependencies."""
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Package", style="pkg.name", no_wrap=True)
    table.add_column("Dependencies")
    roots = set(result.data.get("roots", []))
    if verbose:
        table.add_column("Root", justify="center")

    for item in items:
        row: list[str] = [str(item["id"]), ", ".join(item.get("dependencies", [])) or "-"]
        if verbose:
            row.append("yes" if item["id"] in roots else "")
        table.add_row(*row)

    console.print(table)
    console.print(
        f"\n{result.data.get('count', len(items))} packages, "
        f"{result.data.get('edges', 0)} dependencies"
    )


def _render_dependencies(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    for key in ("package", "dependencies", "dependents"):
        _field(console, key, d.get(key, []))


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, dict):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Any] = {
    "install_order": _render_order,
    "install_all": _render_order,
    "to_install": _render_order,
    "max_dependencies": _render_max_dependencies,
    "list_packages": _render_packages,
    "dependencies": _render_dependencies,
}
