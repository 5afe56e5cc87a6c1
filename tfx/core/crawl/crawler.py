"""Bounded-concurrency recursive crawler.

Each directory is handled by its own task. A crawl task lists its directory
under a filesystem permit, spawns a child crawl task per sub-directory and
dispatches at most one validation task when it sees a qualifying file.
Failures are sent to the shared error channel; nothing is raised across
tasks. The root learns that every task is done when the channel closes.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Coroutine
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any

from tfx.core.crawl.channel import ErrorSender, error_channel
from tfx.core.crawl.limiter import ConcurrencyLimiter
from tfx.core.crawl.reporting import NullReporter, ProgressReporter
from tfx.core.errors import (
    DeadlineExceededError,
    TfxError,
    TraversalError,
    ValidationError,
    ValidatorFailure,
    join_errors,
)
from tfx.core.validate.base import Validator

logger = logging.getLogger(__name__)

HIDDEN_PREFIX = "."
DEFAULT_EXTENSIONS = frozenset({".tf"})


class EntryKind(StrEnum):
    """How the crawler treats one directory entry."""

    HIDDEN = "hidden"
    DIRECTORY = "directory"
    QUALIFYING_FILE = "qualifying_file"
    OTHER = "other"


@dataclass(frozen=True)
class Entry:
    name: str
    path: Path
    kind: EntryKind


@dataclass
class Listing:
    """Entries enumerated from one directory, plus the error that cut it short."""

    entries: list[Entry]
    error: OSError | None = None


def classify_entry(entry: os.DirEntry[str], extensions: frozenset[str]) -> EntryKind:
    """Classify a directory entry. Symlinks are never followed."""
    if entry.name.startswith(HIDDEN_PREFIX):
        return EntryKind.HIDDEN
    if entry.is_dir(follow_symlinks=False):
        return EntryKind.DIRECTORY
    if entry.is_file(follow_symlinks=False):
        if os.path.splitext(entry.name)[1] in extensions:
            return EntryKind.QUALIFYING_FILE
    return EntryKind.OTHER


def list_directory(path: Path, extensions: frozenset[str]) -> Listing:
    """Enumerate and classify ``path``. Blocking; run it off the event loop.

    An OSError stops the enumeration; the entries read before it are kept.
    """
    entries: list[Entry] = []
    try:
        with os.scandir(path) as iterator:
            for entry in iterator:
                entries.append(
                    Entry(
                        name=entry.name,
                        path=Path(entry.path),
                        kind=classify_entry(entry, extensions),
                    )
                )
    except OSError as exc:
        return Listing(entries=entries, error=exc)
    return Listing(entries=entries)


def describe_os_error(exc: OSError) -> str:
    return exc.strerror or str(exc) or type(exc).__name__


@dataclass
class CrawlContext:
    """State shared by every task of one crawl run."""

    limiter: ConcurrencyLimiter
    validator: Validator
    extensions: frozenset[str] = DEFAULT_EXTENSIONS
    reporter: ProgressReporter = field(default_factory=NullReporter)
    crawled: list[Path] = field(default_factory=list)
    validated: list[Path] = field(default_factory=list)
    cancelled: bool = False
    # Strong references so the event loop does not collect running tasks.
    _tasks: set[asyncio.Task[None]] = field(default_factory=set)

    def spawn(self, coro: Coroutine[Any, Any, None], sender: ErrorSender) -> None:
        """Run ``coro`` as a task that owns ``sender``.

        The sender is closed when the task ends, whatever the reason, including
        a cancellation that lands before the coroutine starts.
        """
        if self.cancelled:
            coro.close()
            sender.close()
            return
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        task.add_done_callback(lambda _task: sender.close())

    def cancel_all(self) -> None:
        self.cancelled = True
        for task in list(self._tasks):
            task.cancel()


def spawn_crawl(path: Path, sender: ErrorSender, context: CrawlContext) -> None:
    context.spawn(crawl(path, sender, context), sender)


async def crawl(path: Path, sender: ErrorSender, context: CrawlContext) -> None:
    """Crawl one directory, fanning out to its children."""
    with sender:
        context.crawled.append(path)
        try:
            await _crawl_directory(path, sender, context)
        except TraversalError as exc:
            error = exc
        except Exception as exc:
            logger.exception("Crawl failed unexpectedly for %s", path)
            error = TraversalError(path, f"{type(exc).__name__}: {exc}")
        else:
            return

        logger.debug("%s", error)
        sender.send(error)
        context.reporter.crawl_failed(path, error)


async def _crawl_directory(path: Path, sender: ErrorSender, context: CrawlContext) -> None:
    context.reporter.crawl_started(path)
    async with context.limiter.fs():
        listing = await asyncio.to_thread(list_directory, path, context.extensions)
        logger.debug("listed %s (%d entries)", path, len(listing.entries))
        dispatched = False
        for entry in listing.entries:
            if entry.kind is EntryKind.DIRECTORY:
                spawn_crawl(entry.path, sender.clone(), context)
            elif entry.kind is EntryKind.QUALIFYING_FILE and not dispatched:
                dispatched = True
                dispatch_validation(path, sender.clone(), context)

    if listing.error is not None:
        raise TraversalError(path, describe_os_error(listing.error))
    context.reporter.crawl_finished(path)


def dispatch_validation(path: Path, sender: ErrorSender, context: CrawlContext) -> None:
    """Start the single validation task for ``path``."""
    logger.debug("dispatching validation for %s", path)
    context.validated.append(path)
    context.spawn(_run_validation(path, sender, context), sender)


async def _run_validation(path: Path, sender: ErrorSender, context: CrawlContext) -> None:
    with sender:
        async with context.limiter.process():
            try:
                context.reporter.validation_started(path)
                await context.validator.validate(path)
            except ValidatorFailure as exc:
                error = ValidationError(path, exc.diagnostic)
            except Exception as exc:
                logger.exception("Validator crashed for %s", path)
                error = ValidationError(path, f"{type(exc).__name__}: {exc}")
            else:
                context.reporter.validation_finished(path)
                return

        logger.debug("%s", error)
        sender.send(error)
        context.reporter.validation_failed(path, error)


@dataclass
class ValidationReport:
    """Everything one run observed, plus its errors."""

    root: Path
    crawled: list[Path]
    validated: list[Path]
    errors: list[TfxError]

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        join_errors(self.errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": str(self.root),
            "ok": self.ok,
            "crawled": sorted(str(p) for p in self.crawled),
            "validated": sorted(str(p) for p in self.validated),
            "errors": [str(err) for err in self.errors],
        }


async def run_crawl(
    root: Path,
    *,
    validator: Validator,
    limiter: ConcurrencyLimiter,
    extensions: frozenset[str] = DEFAULT_EXTENSIONS,
    reporter: ProgressReporter | None = None,
    timeout: float | None = None,
) -> ValidationReport:
    """Crawl ``root`` and wait until every spawned task has finished."""
    context = CrawlContext(
        limiter=limiter,
        validator=validator,
        extensions=extensions,
        reporter=reporter or NullReporter(),
    )
    sender, receiver = error_channel()
    spawn_crawl(root, sender, context)

    errors: list[TfxError] = []
    try:
        async with asyncio.timeout(timeout):
            async for error in receiver:
                errors.append(error)
    except TimeoutError:
        if timeout is None:
            raise
        logger.warning("deadline of %ss exceeded; cancelling outstanding tasks", timeout)
        context.cancel_all()
        async for error in receiver:
            errors.append(error)
        errors.append(DeadlineExceededError(timeout))

    return ValidationReport(
        root=root,
        crawled=context.crawled,
        validated=context.validated,
        errors=errors,
    )


async def validate_tree(
    root: Path,
    *,
    validator: Validator,
    max_concurrency_fs: int,
    max_concurrency_process: int,
    extensions: frozenset[str] = DEFAULT_EXTENSIONS,
    reporter: ProgressReporter | None = None,
    timeout: float | None = None,
) -> ValidationReport:
    """Validate every module under ``root``.

    Returns the report on success. Raises the single error, or an
    AggregateError, when anything failed.
    """
    report = await run_crawl(
        root,
        validator=validator,
        limiter=ConcurrencyLimiter(max_concurrency_fs, max_concurrency_process),
        extensions=extensions,
        reporter=reporter,
        timeout=timeout,
    )
    report.raise_for_errors()
    return report
