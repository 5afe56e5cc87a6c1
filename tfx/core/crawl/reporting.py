"""Progress hooks invoked by the crawler."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from tfx.core.errors import TfxError


class ProgressReporter(Protocol):
    """Receives lifecycle events for crawl and validation tasks."""

    def crawl_started(self, path: Path) -> None: ...

    def crawl_finished(self, path: Path) -> None: ...

    def crawl_failed(self, path: Path, error: TfxError) -> None: ...

    def validation_started(self, path: Path) -> None: ...

    def validation_finished(self, path: Path) -> None: ...

    def validation_failed(self, path: Path, error: TfxError) -> None: ...


class NullReporter:
    """Discards every event."""

    def crawl_started(self, path: Path) -> None:
        pass

    def crawl_finished(self, path: Path) -> None:
        pass

    def crawl_failed(self, path: Path, error: TfxError) -> None:
        pass

    def validation_started(self, path: Path) -> None:
        pass

    def validation_finished(self, path: Path) -> None:
        pass

    def validation_failed(self, path: Path, error: TfxError) -> None:
        pass
