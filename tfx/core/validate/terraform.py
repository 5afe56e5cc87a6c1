"""Terraform CLI validator."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from tfx.core.errors import ValidatorFailure

logger = logging.getLogger(__name__)

INIT_ARGS = ("init", "-input=false", "-backend=false", "-no-color")
VALIDATE_ARGS = ("validate", "-no-color")


@dataclass(frozen=True)
class CommandResult:
    """Exit status and captured streams of one terraform invocation."""

    returncode: int
    stdout: bytes
    stderr: bytes


@dataclass(frozen=True)
class TerraformValidator:
    """Runs ``terraform validate`` (optionally preceded by ``init``) in a directory."""

    binary: str = "terraform"
    init: bool = True

    async def validate(self, path: Path) -> None:
        if self.init:
            await self._run_step(path, "init", INIT_ARGS)
        await self._run_step(path, "validate", VALIDATE_ARGS)

    async def _run_step(self, path: Path, step: str, args: tuple[str, ...]) -> None:
        result = await self.run(path, args)
        if result.returncode == 0:
            return
        # terraform writes some diagnostics to stdout only.
        output = result.stderr.strip() or result.stdout.strip()
        try:
            diagnostic = output.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ValidatorFailure(
                f"terraform {step} failed with exit status {result.returncode} "
                "and undecodable output"
            ) from exc
        raise ValidatorFailure(f"terraform {step} failed: {diagnostic}")

    async def run(self, path: Path, args: tuple[str, ...]) -> CommandResult:
        """Run the terraform binary with ``args`` inside ``path``."""
        logger.debug("running %s %s in %s", self.binary, " ".join(args), path)
        try:
            process = await asyncio.create_subprocess_exec(
                self.binary,
                *args,
                cwd=path,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            raise ValidatorFailure(f"{self.binary} executable not found") from exc
        except PermissionError as exc:
            raise ValidatorFailure(f"{self.binary} is not executable: {exc}") from exc
        try:
            stdout, stderr = await process.communicate()
            returncode = await process.wait()
        except asyncio.CancelledError:
            if process.returncode is None:
                process.kill()
                await process.wait()
            raise
        return CommandResult(returncode=returncode, stdout=stdout, stderr=stderr)
