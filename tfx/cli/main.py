"""Main CLI entry point for tfx."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError as ConfigValidationError
from rich.logging import RichHandler

from tfx import __version__
from tfx.branding import CLI_PRIMARY_COMMAND
from tfx.models.config import DEFAULT_MAX_CONCURRENCY_FS, ValidateConfig
from tfx.ui.console import err_console
from tfx.utils.config import ConfigFileError, discover_config, load_config_file


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _format_config_error(exc: ConfigValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error["loc"]) or "config"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name=CLI_PRIMARY_COMMAND)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file with option defaults (default: ./.tfx.yaml when present)",
)
@click.option(
    "--no-interactive",
    is_flag=True,
    envvar="TFX_NON_INTERACTIVE",
    help="Disable live progress output (same as TFX_NON_INTERACTIVE=1)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    config_path: Path | None,
    no_interactive: bool,
) -> None:
    """Validate every Terraform module under a directory tree, concurrently."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["no_interactive"] = no_interactive
    _configure_logging(verbose)

    source = config_path or discover_config()
    if source is not None:
        try:
            defaults = load_config_file(source)
        except ConfigFileError as exc:
            click.echo(f"Error: {exc}", err=True)
            sys.exit(2)
        ctx.default_map = {"validate": defaults}

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command("validate")
@click.argument(
    "root",
    required=False,
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option(
    "--max-concurrency-fs",
    type=click.IntRange(min=1),
    default=DEFAULT_MAX_CONCURRENCY_FS,
    show_default=True,
    envvar="TFX_MAX_CONCURRENCY_FS",
    help="Maximum simultaneous directory listings",
)
@click.option(
    "--max-concurrency-process",
    type=click.IntRange(min=1),
    default=None,
    envvar="TFX_MAX_CONCURRENCY_PROCESS",
    help="Maximum simultaneous terraform processes (default: CPU count)",
)
@click.option(
    "--extension",
    "-e",
    multiple=True,
    default=("tf",),
    show_default=True,
    help="File extension that marks a module directory (repeatable)",
)
@click.option(
    "--terraform-bin",
    default="terraform",
    show_default=True,
    envvar="TFX_TERRAFORM_BIN",
    help="Terraform-compatible executable to run (e.g. tofu)",
)
@click.option(
    "--init/--no-init",
    default=True,
    show_default=True,
    help="Run `init -backend=false` before `validate` in each module",
)
@click.option("--dry-run", is_flag=True, help="Crawl and report modules without running terraform")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Overall deadline in seconds; outstanding work is cancelled when it expires",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Report format (json is written to stdout)",
)
@click.pass_context
def validate_cmd(
    ctx: click.Context,
    root: Path,
    max_concurrency_fs: int,
    max_concurrency_process: int | None,
    extension: tuple[str, ...],
    terraform_bin: str,
    init: bool,
    dry_run: bool,
    timeout: float | None,
    output_format: str,
) -> None:
    """Run terraform validate once in every module directory under ROOT.

    A module directory is any directory holding at least one file with a
    qualifying extension. Hidden files and directories are skipped.

    \b
    Examples:
      tfx validate
      tfx validate infra --max-concurrency-process 2
      tfx validate --dry-run --format json
    """
    from tfx.cli.validate import run_validate
    from tfx.ui.policy import should_show_progress

    settings = {
        "root_path": root,
        "max_concurrency_fs": max_concurrency_fs,
        "extensions": list(extension),
        "terraform_bin": terraform_bin,
        "init": init,
        "dry_run": dry_run,
        "timeout": timeout,
    }
    if max_concurrency_process is not None:
        settings["max_concurrency_process"] = max_concurrency_process
    try:
        config = ValidateConfig(**settings)
    except ConfigValidationError as exc:
        click.echo(f"Error: invalid configuration: {_format_config_error(exc)}", err=True)
        sys.exit(2)

    run_validate(
        config=config,
        output_format=output_format,
        show_progress=should_show_progress(
            force=False if ctx.obj.get("no_interactive") else None,
            machine_output=output_format == "json",
        ),
        verbose=ctx.obj.get("verbose", False),
    )


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
