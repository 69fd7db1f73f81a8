"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich markup) or machines
(--json). ``run`` results get a one-line verdict; other ops fall back
to key/value rows.
"""

from __future__ import annotations

import json as _json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.markup import escape

from discountctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from discountctl.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    no_color: bool = False


def _render_data(console: Console, data: dict[str, Any]) -> None:
    for key, value in data.items():
        if isinstance(value, (dict, list)):
            value = _json.dumps(value, separators=(",", ":"))
        console.print(f"  [dc.key]{escape(str(key))}:[/] {escape(str(value))}")


def _describe_discount(discount: dict[str, Any]) -> str:
    value = discount["value"]
    if value["kind"] == "percentage":
        amount = f"{value['value']:g}% off"
    else:
        amount = f"{value['amount']:g} off"
    targets = ", ".join(t["kind"].replace("_", " ") for t in discount["targets"])
    message = f" ({discount['message']})" if discount.get("message") else ""
    return f"{amount} {targets}{message}"


def _render_run(console: Console, data: dict[str, Any], *, quiet: bool) -> None:
    discounts = data["result"]["discounts"]
    if discounts:
        for discount in discounts:
            console.print(f"  [dc.discount]discount:[/] {escape(_describe_discount(discount))}")
    else:
        console.print("  [dc.none]no discount[/]")
    if quiet:
        return
    console.print(f"  [dc.key]outcome:[/] {data['outcome']}")
    if data.get("amount") is not None:
        console.print(f"  [dc.key]amount:[/] [dc.amount]{data['amount']}[/]")
    console.print(
        f"  [dc.key]strategy:[/] {data['result']['discountApplicationStrategy']}"
    )


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    console = create_console(no_color=settings.no_color)
    if not result.ok:
        error_msg = result.error.message if result.error else "Unknown error"
        code = f"{result.error.code}: " if result.error else ""
        console.print(f"[dc.error]ERROR:[/] {result.op} - {escape(code + error_msg)}")
        if result.error and not settings.quiet:
            _render_data(console, result.error.detail)
        return get_output(console).rstrip("\n")

    console.print(f"[dc.ok]OK:[/] [dc.op]{result.op}[/]")
    if result.op == "run" and "result" in result.data:
        _render_run(console, result.data, quiet=settings.quiet)
    elif result.data and not settings.quiet:
        _render_data(console, result.data)
    if settings.verbose and result.meta:
        _render_data(console, result.meta)
    return get_output(console).rstrip("\n")
