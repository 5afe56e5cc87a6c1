"""Error taxonomy and aggregation for crawl and validation runs."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path


class TfxError(Exception):
    """Base class for every error reported through the error channel."""


class TraversalError(TfxError):
    """A directory could not be listed, or an entry vanished mid-listing."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"failed to crawl {path}: {reason}")


class ValidationError(TfxError):
    """The external validator rejected a module directory."""

    def __init__(self, path: Path, diagnostic: str) -> None:
        self.path = path
        self.diagnostic = diagnostic
        super().__init__(f"failed to validate {path}: {diagnostic}")


class DeadlineExceededError(TfxError):
    """The overall run deadline expired before every task finished."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"deadline of {timeout:g}s exceeded; outstanding tasks were cancelled")


class AggregateError(TfxError):
    """Two or more errors folded into one."""

    def __init__(self, errors: list[TfxError]) -> None:
        self.errors = errors
        super().__init__("Errors: " + ", ".join(str(err) for err in errors))


class ChannelClosedError(RuntimeError):
    """Raised when sending on a sender that has already been closed."""


class ValidatorFailure(Exception):
    """Raised by a validator with the diagnostic for a failed check."""

    def __init__(self, diagnostic: str) -> None:
        self.diagnostic = diagnostic
        super().__init__(diagnostic)


def join_errors(errors: Iterable[TfxError]) -> None:
    """Fold collected errors into a single outcome.

    No errors returns normally, a single error is raised unchanged and two or
    more are raised as one AggregateError.
    """
    collected = list(errors)
    if not collected:
        return
    if len(collected) == 1:
        raise collected[0]
    raise AggregateError(collected)
