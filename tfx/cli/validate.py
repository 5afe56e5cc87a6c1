"""Validate command implementation."""

from __future__ import annotations

import asyncio
import json
import sys

import click

from tfx.core.crawl import ConcurrencyLimiter, ValidationReport, run_crawl
from tfx.core.errors import AggregateError, TfxError
from tfx.core.validate import NoopValidator, TerraformValidator, Validator
from tfx.models.config import ValidateConfig
from tfx.ui.progress import RichProgressReporter
from tfx.utils.runtime import binary_available


def build_validator(config: ValidateConfig) -> Validator:
    if config.dry_run:
        return NoopValidator()
    return TerraformValidator(binary=config.terraform_bin, init=config.init)


async def _execute(
    config: ValidateConfig,
    validator: Validator,
    show_progress: bool,
) -> ValidationReport:
    limiter = ConcurrencyLimiter(config.max_concurrency_fs, config.max_concurrency_process)
    if not show_progress:
        return await run_crawl(
            config.root_path,
            validator=validator,
            limiter=limiter,
            extensions=config.extensions,
            timeout=config.timeout,
        )
    with RichProgressReporter() as reporter:
        return await run_crawl(
            config.root_path,
            validator=validator,
            limiter=limiter,
            extensions=config.extensions,
            reporter=reporter,
            timeout=config.timeout,
        )


def _plural(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


def run_validate(
    *,
    config: ValidateConfig,
    output_format: str,
    show_progress: bool,
    verbose: bool,
) -> None:
    """Crawl the configured root, validate every module and report the outcome."""
    if not config.dry_run and not binary_available(config.terraform_bin):
        click.echo(
            f"Error: {config.terraform_bin} not found on PATH. "
            "Install Terraform, pass --terraform-bin, or use --dry-run.",
            err=True,
        )
        sys.exit(1)

    report = asyncio.run(
        _execute(config, build_validator(config), show_progress=show_progress)
    )

    outcome: TfxError | None = None
    try:
        report.raise_for_errors()
    except TfxError as exc:
        outcome = exc

    if output_format == "json":
        payload = report.to_dict()
        payload["error"] = str(outcome) if outcome is not None else None
        click.echo(json.dumps(payload, indent=2, sort_keys=True))
        if outcome is not None:
            sys.exit(1)
        return

    verb = "Found" if config.dry_run else "Validated"
    click.echo(
        f"{verb} {_plural(len(report.validated), 'module', 'modules')} across "
        f"{_plural(len(report.crawled), 'directory', 'directories')}.",
        err=True,
    )
    if verbose:
        for path in sorted(report.validated):
            click.echo(f"  {path}", err=True)

    if outcome is None:
        return

    failures = outcome.errors if isinstance(outcome, AggregateError) else [outcome]
    for error in failures:
        click.echo(f"Error: {error}", err=True)
    sys.exit(1)
