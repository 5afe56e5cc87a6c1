"""Tests for the rich progress reporter."""

from __future__ import annotations

import io
from pathlib import Path

from rich.console import Console

from tfx.core.errors import TraversalError, ValidationError
from tfx.ui.console import TFX_THEME
from tfx.ui.progress import RichProgressReporter


def _reporter() -> tuple[RichProgressReporter, io.StringIO]:
    buffer = io.StringIO()
    console = Console(file=buffer, force_terminal=False, width=200, theme=TFX_THEME)
    return RichProgressReporter(console=console), buffer


def test_counts_crawled_directories() -> None:
    reporter, _ = _reporter()
    reporter.crawl_started(Path("/a"))
    reporter.crawl_finished(Path("/a"))
    reporter.crawl_failed(Path("/b"), TraversalError(Path("/b"), "gone"))

    assert reporter.crawled == 2
    assert reporter.failed == 1


def test_validation_lifecycle_prints_outcome() -> None:
    reporter, buffer = _reporter()
    reporter.validation_started(Path("/mod/ok"))
    reporter.validation_started(Path("/mod/bad"))
    assert len(reporter.progress.tasks) == 3

    reporter.validation_finished(Path("/mod/ok"))
    reporter.validation_failed(Path("/mod/bad"), ValidationError(Path("/mod/bad"), "x"))

    output = buffer.getvalue()
    assert "Validated /mod/ok" in output
    assert "Failed to validate /mod/bad" in output
    assert len(reporter.progress.tasks) == 1


def test_context_manager_starts_and_stops() -> None:
    reporter, _ = _reporter()
    with reporter as entered:
        assert entered is reporter
        assert reporter.progress.live.is_started
    assert not reporter.progress.live.is_started
