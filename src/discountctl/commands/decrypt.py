"""Command: decrypt one attribute value for diagnostics."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from discountctl.commands._base import DiscountCommand

if TYPE_CHECKING:
    from discountctl.commands._context import AppContext


@click.command(
    cls=DiscountCommand,
    examples="""\
  discountctl decrypt 'q1w2e3...=='
  discountctl --json decrypt 'q1w2e3...=='""",
)
@click.argument("value")
@click.pass_obj
def decrypt(app: AppContext, value: str) -> None:
    """Decode, decrypt and parse VALUE without applying the rule."""
    app.emit(app.service.decrypt(value))
