"""Rich progress display for crawl runs."""

from __future__ import annotations

from pathlib import Path
from types import TracebackType

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TaskID, TextColumn, TimeElapsedColumn

from tfx.core.errors import TfxError
from tfx.ui.console import err_console


class RichProgressReporter:
    """One spinner per running validation and a crawled-directory counter.

    Use as a context manager; the live display stops on exit.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or err_console
        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        )
        self._crawl_task = self.progress.add_task("Crawling", total=None)
        self._validations: dict[Path, TaskID] = {}
        self.crawled = 0
        self.failed = 0

    def __enter__(self) -> RichProgressReporter:
        self.progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.progress.stop()

    def _update_crawl(self) -> None:
        self.progress.update(
            self._crawl_task,
            description=f"Crawled {self.crawled} director{'y' if self.crawled == 1 else 'ies'}",
        )

    def crawl_started(self, path: Path) -> None:
        pass

    def crawl_finished(self, path: Path) -> None:
        self.crawled += 1
        self._update_crawl()

    def crawl_failed(self, path: Path, error: TfxError) -> None:
        self.crawled += 1
        self.failed += 1
        self._update_crawl()
        self.console.print(f"[error]✗[/error] Failed crawl [path]{escape(str(path))}[/path]")

    def validation_started(self, path: Path) -> None:
        self._validations[path] = self.progress.add_task(
            f"Validating {escape(str(path))}", total=None
        )

    def validation_finished(self, path: Path) -> None:
        self._finish(path)
        self.console.print(f"[success]✓[/success] Validated [path]{escape(str(path))}[/path]")

    def validation_failed(self, path: Path, error: TfxError) -> None:
        self.failed += 1
        self._finish(path)
        self.console.print(
            f"[error]✗[/error] Failed to validate [path]{escape(str(path))}[/path]"
        )

    def _finish(self, path: Path) -> None:
        task_id = self._validations.pop(path, None)
        if task_id is not None:
            self.progress.remove_task(task_id)
