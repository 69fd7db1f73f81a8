"""Command: configuration validation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from discountctl.commands._base import DiscountCommand

if TYPE_CHECKING:
    from discountctl.commands._context import AppContext


@click.command(
    cls=DiscountCommand,
    examples="""\
  discountctl check
  DISCOUNTCTL_CRYPTO__KEY_HEX=... DISCOUNTCTL_CRYPTO__IV_HEX=... discountctl check
  discountctl -c /etc/discountctl.toml --json check""",
)
@click.pass_obj
def check(app: AppContext) -> None:
    """Check that the key, IV and rule are usable."""
    app.emit(app.service.check_config())
