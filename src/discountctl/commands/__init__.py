"""Subcommand modules for discountctl.

register_commands() defers imports so ``discountctl --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from discountctl.commands.check import check
    from discountctl.commands.decrypt import decrypt
    from discountctl.commands.run import run

    cli.add_command(run)
    cli.add_command(decrypt)
    cli.add_command(check)
