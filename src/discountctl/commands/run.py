"""Command: evaluate the discount rule for one cart."""

from __future__ import annotations

import json
from typing import IO, TYPE_CHECKING

import click

from discountctl.commands._base import DiscountCommand
from discountctl.domain.types import Cart, CartAttribute, RunInput

if TYPE_CHECKING:
    from discountctl.commands._context import AppContext


@click.command(
    cls=DiscountCommand,
    examples="""\
  discountctl run cart.json
  cat cart.json | discountctl run
  discountctl run --value 'q1w2e3...=='
  discountctl --json run cart.json
  discountctl run --function-output cart.json""",
)
@click.argument("input_file", type=click.File("r"), default="-")
@click.option("--value", default=None, help="Encrypted cart attribute, instead of INPUT_FILE.")
@click.option(
    "--function-output",
    is_flag=True,
    help="Print only the RunResult JSON the host consumes.",
)
@click.pass_obj
def run(app: AppContext, input_file: IO[str], value: str | None, function_output: bool) -> None:
    """Evaluate the minimum-spend rule for a cart.

    INPUT_FILE holds the host's cart JSON, e.g.
    {"cart": {"attribute": {"key": "total_price", "value": "..."}}}.
    """
    svc = app.service
    if value is not None:
        result = svc.run(RunInput(cart=Cart(attribute=CartAttribute(value=value))))
    else:
        result = svc.run_json(input_file.read())

    if function_output and result.ok:
        click.echo(json.dumps(result.data["result"], indent=2))
        return
    app.emit(result)

