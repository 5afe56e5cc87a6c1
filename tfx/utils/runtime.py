"""Runtime environment helpers."""

from __future__ import annotations

import shutil


def binary_available(binary: str) -> bool:
    """Return True if ``binary`` resolves on PATH (or is an executable path)."""
    return shutil.which(binary) is not None
