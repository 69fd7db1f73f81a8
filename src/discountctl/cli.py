"""Root CLI group for discountctl with global flags and command registration."""

from __future__ import annotations

import click
from pydantic import ValidationError

from discountctl import __version__
from discountctl.commands import register_commands
from discountctl.commands._context import AppContext
from discountctl.config.settings import DiscountSettings
from discountctl.output.formatters import OutputSettings, format_result
from discountctl.services.result import ServiceError, ServiceResult


def _config_error(op: str, exc: ValidationError) -> ServiceResult:
    """Map a settings validation failure to an INVALID_CONFIG result."""
    issues = [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    ]
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(
            code="INVALID_CONFIG",
            message=f"{len(issues)} configuration issue(s)",
            detail={"issues": issues},
        ),
    )


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="discountctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logs and stage timings.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """discountctl: minimum-spend discount over an encrypted cart total."""
    try:
        settings = DiscountSettings.load(
            config_path=config_path,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    except ValidationError as exc:
        result = _config_error(ctx.invoked_subcommand or "cli", exc)
        output = OutputSettings(json_output=json_output, quiet=quiet, verbose=verbose)
        click.echo(format_result(result, settings=output), err=True)
        raise SystemExit(1) from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
