"""Test helpers for building module trees and fake validators."""

from __future__ import annotations

import asyncio
import stat
from pathlib import Path

from tfx.core.errors import ValidatorFailure


def make_tree(root: Path, files: list[str]) -> Path:
    """Create empty files (and their parent directories) under ``root``.

    Entries ending in ``/`` create an empty directory instead of a file.
    """
    for relative in files:
        target = root / relative
        if relative.endswith("/"):
            target.mkdir(parents=True, exist_ok=True)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("")
    return root


class RecordingValidator:
    """Records every invocation and the peak number of concurrent calls."""

    def __init__(
        self,
        failures: dict[Path, str] | None = None,
        delay: float = 0.0,
    ) -> None:
        self.failures = failures or {}
        self.delay = delay
        self.calls: list[Path] = []
        self.active = 0
        self.peak = 0

    async def validate(self, path: Path) -> None:
        self.calls.append(path)
        self.active += 1
        self.peak = max(self.peak, self.active)
        try:
            await asyncio.sleep(self.delay)
            if path in self.failures:
                raise ValidatorFailure(self.failures[path])
        finally:
            self.active -= 1


def write_fake_terraform(
    directory: Path,
    *,
    fail_step: str | None = None,
    stream: str = "stderr",
) -> Path:
    """Write a shell script standing in for the terraform binary.

    Every invocation appends ``<cwd> <args>`` to ``$TFX_FAKE_LOG``. When
    ``fail_step`` matches the first argument the script exits 1 with a message
    on ``stream`` ("stderr" or "stdout").
    """
    directory.mkdir(parents=True, exist_ok=True)
    script = directory / "terraform"
    fail_case = ""
    redirect = " >&2" if stream == "stderr" else ""
    if fail_step:
        fail_case = (
            f'if [ "$1" = "{fail_step}" ]; then\n'
            f'  echo "Error: {fail_step} rejected $(pwd)"{redirect}\n'
            "  exit 1\n"
            "fi\n"
        )
    script.write_text(
        "#!/bin/sh\n"
        'if [ -n "$TFX_FAKE_LOG" ]; then\n'
        '  echo "$(pwd) $*" >> "$TFX_FAKE_LOG"\n'
        "fi\n"
        f"{fail_case}"
        "exit 0\n"
    )
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script
