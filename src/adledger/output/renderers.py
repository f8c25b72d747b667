"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from adledger.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from adledger.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False, list_limit: int = 0) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if not result.ok:
        _render_error(result, console, verbose=verbose)
    elif "items" in result.data:
        _render_ad_list(result, console, list_limit=list_limit)
    else:
        _render_ad(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output: ad IDs only, or a one-line error."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item.get("id", "")) for item in items)
    return str(result.data.get("id", f"OK: {result.op}"))


# ── Helpers ───────────────────────────────────────────────────────────


def format_timestamp(value: int | None) -> str:
    """Epoch nanoseconds as ISO 8601 UTC (``-`` when absent)."""
    if value is None:
        return "-"
    return datetime.fromtimestamp(value / 1_000_000_000, UTC).isoformat(timespec="seconds")


def _format_amount(amount: Any) -> str:
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    return str(amount)


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text.assemble(("OK", "ledger.ok"), (f"  {result.op}", "ledger.op")))


def _field(console: Console, key: str, value: Any, style: str = "") -> None:
    console.print(Text.assemble((f"  {key}: ", "ledger.key"), (str(value), style)))


def _bid_table(bids: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Bidder")
    table.add_column("Amount", justify="right", style="ledger.amount")
    for i, bid in enumerate(bids, start=1):
        table.add_row(str(i), str(bid.get("bidder", "")), _format_amount(bid.get("amount")))
    return table


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text.assemble(("ERROR", "ledger.error"), (f"  {result.op}", "ledger.op"), f": {msg}")
    )
    if err is not None:
        _field(console, "code", err.code)
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


def _render_ad(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a single ad: key fields, then its bids."""
    d = result.data
    _status_line(console, result)
    _field(console, "id", d.get("id", ""), "ledger.id")
    _field(console, "owner", d.get("owner", ""))
    _field(console, "itemType", d.get("itemType", ""))
    _field(console, "itemDescription", d.get("itemDescription", ""))
    status = str(d.get("status", ""))
    _field(console, "status", status, style_for_status(status))
    _field(console, "createdAt", format_timestamp(d.get("createdAt")))
    _field(console, "updatedAt", format_timestamp(d.get("updatedAt")))

    bids = d.get("bids") or []
    if bids:
        console.print()
        console.print(_bid_table(bids))
    elif verbose:
        _field(console, "bids", "none")


def _render_ad_list(result: ServiceResult, console: Console, *, list_limit: int = 0) -> None:
    items: list[dict[str, Any]] = result.data.get("items", [])
    _status_line(console, result)
    if not items:
        console.print(Text("  No ads.", style="dim"))
        return

    shown = items[:list_limit] if list_limit else items

    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("ID", style="ledger.id", no_wrap=True)
    table.add_column("Item Type")
    table.add_column("Description")
    table.add_column("Status")
    table.add_column("Bids", justify="right")
    table.add_column("Top Bid", justify="right", style="ledger.amount")

    for item in shown:
        bids = item.get("bids") or []
        top = max((b.get("amount", 0) for b in bids), default=None)
        status = str(item.get("status", ""))
        table.add_row(
            str(item.get("id", "")),
            str(item.get("itemType", "")),
            str(item.get("itemDescription", "")),
            Text(status, style=style_for_status(status)),
            str(len(bids)),
            "-" if top is None else _format_amount(top),
        )
    console.print(table)

    hidden = len(items) - len(shown)
    if hidden > 0:
        console.print(Text(f"  ... and {hidden} more", style="dim"))
