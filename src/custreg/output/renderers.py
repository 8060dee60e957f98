"""Rich renderers for ServiceResult.

Results carrying a customer get a field table; failures list every
violated field; everything else falls back to key-value lines.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from custreg.output.console import buffered_console, drain, style_for_kind
from custreg.transport.codec import encode_result

if TYPE_CHECKING:
    from rich.console import Console

    from custreg.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = buffered_console()
    payload = encode_result(result)
    if result.ok:
        _status_line(console, result)
        customer = payload["data"].get("customer")
        if customer is not None:
            _render_customer(console, customer)
        for key, value in payload["data"].items():
            if key != "customer":
                _field(console, key, value)
    else:
        _render_error(console, result, verbose=verbose)
    if verbose and result.meta:
        _field(console, "meta", result.meta)
    return drain(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    customer = result.data.get("customer")
    if customer is not None:
        return str(customer.id)
    return f"OK: {result.op}"


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="reg.ok"), Text(f"  {result.op}", style="reg.op"), sep="")


def _field(console: Console, key: str, value: Any) -> None:
    if isinstance(value, (dict, list)):
        value = json.dumps(value, separators=(",", ":"), default=str)
    console.print(Text(f"  {key}: ", style="reg.key"), Text(str(value)), sep="")


def _render_customer(console: Console, customer: dict[str, Any]) -> None:
    info = customer.get("info", {})
    kind = str(info.get("kind", ""))
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("field", style="reg.key")
    table.add_column("value")
    table.add_row("id", Text(str(customer.get("id")), style="reg.id"))
    table.add_row("state", str(customer.get("state")))
    table.add_row("kind", Text(kind, style=style_for_kind(kind)))
    for key, value in info.items():
        if key != "kind":
            table.add_row(key, "" if value is None else str(value))
    for collection in ("addresses", "contacts", "tax_infos"):
        items = customer.get(collection) or []
        if items:
            table.add_row(collection, json.dumps(items, separators=(",", ":")))
    console.print(table)


def _render_error(console: Console, result: ServiceResult, *, verbose: bool) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    code = err.code.value if err else "UNKNOWN"
    console.print(
        Text("ERROR", style="reg.error"),
        Text(f"  {result.op}", style="reg.op"),
        Text(f" [{code}] "),
        Text(msg),
        sep="",
    )
    if err is None:
        return
    for violation in err.fields:
        console.print(
            Text("  - ", style="reg.key"),
            Text(violation["field"], style="reg.field"),
            Text(f" ({violation['rule']})", style="reg.key"),
            sep="",
        )
    if verbose and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            if k != "fields":
                console.print(f"    {k}: {v}")
