"""Config file loading for CLI defaults."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG_NAME = ".tfx.yaml"

KNOWN_KEYS = frozenset({
    "max_concurrency_fs",
    "max_concurrency_process",
    "extension",
    "terraform_bin",
    "init",
    "dry_run",
    "timeout",
    "output_format",
})


class ConfigFileError(ValueError):
    """Raised when a config file cannot be read or has an invalid shape."""


def discover_config(directory: Path | None = None) -> Path | None:
    """Return ``.tfx.yaml`` in ``directory`` (default cwd) if it exists."""
    candidate = (directory or Path.cwd()) / DEFAULT_CONFIG_NAME
    return candidate if candidate.is_file() else None


def load_config_file(path: Path) -> dict[str, Any]:
    """Load option defaults from a YAML mapping.

    Keys may use hyphens or underscores. ``extensions`` is accepted as an alias
    of ``extension`` and ``format`` sets the output format. Unknown keys are
    rejected.
    """
    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigFileError(f"cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigFileError(f"invalid YAML in {path}: {exc}") from exc

    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ConfigFileError(f"config file {path} must contain a mapping")

    defaults: dict[str, Any] = {}
    for raw_key, value in payload.items():
        key = str(raw_key).replace("-", "_")
        if key == "extensions":
            key = "extension"
        elif key == "format":
            key = "output_format"
        if key not in KNOWN_KEYS:
            raise ConfigFileError(f"unknown key in {path}: {raw_key}")
        if key == "extension" and isinstance(value, str):
            value = [value]
        defaults[key] = value
    return defaults
