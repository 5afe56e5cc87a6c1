"""Shared Rich Console and style definitions.

Progress and diagnostics go to stderr via ``err_console``; stdout is kept
for machine-readable output.
"""

from __future__ import annotations

from rich.console import Console
from rich.theme import Theme

TFX_THEME = Theme(
    {
        "info": "cyan",
        "success": "bold green",
        "warning": "bold yellow",
        "error": "bold red",
        "heading": "bold cyan",
        "muted": "dim",
        "path": "bold white",
    }
)

err_console = Console(stderr=True, theme=TFX_THEME)
