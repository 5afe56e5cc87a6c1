"""Validator interface."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class Validator(Protocol):
    """Checks one module directory.

    ``validate`` returns normally on success and raises
    ``ValidatorFailure`` with a diagnostic otherwise. Implementations keep no
    state between calls and must tolerate concurrent invocations.
    """

    async def validate(self, path: Path) -> None: ...


class NoopValidator:
    """Accepts every directory. Used for dry runs."""

    async def validate(self, path: Path) -> None:
        return None
