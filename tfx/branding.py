"""Product naming shared by the CLI."""

from __future__ import annotations

CLI_PRIMARY_COMMAND = "tfx"
