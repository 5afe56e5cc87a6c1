"""Validated settings for a validate run."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field, PositiveFloat, PositiveInt, field_validator

DEFAULT_MAX_CONCURRENCY_FS = 64


def default_process_concurrency() -> int:
    return os.cpu_count() or 4


class ValidateConfig(BaseModel):
    """Settings consumed by the crawler at start-up."""

    root_path: Path = Field(default_factory=lambda: Path("."))
    max_concurrency_fs: PositiveInt = DEFAULT_MAX_CONCURRENCY_FS
    max_concurrency_process: PositiveInt = Field(default_factory=default_process_concurrency)
    extensions: frozenset[str] = frozenset({".tf"})
    terraform_bin: str = "terraform"
    init: bool = True
    dry_run: bool = False
    timeout: PositiveFloat | None = None

    @field_validator("root_path")
    @classmethod
    def _root_must_be_directory(cls, value: Path) -> Path:
        if not value.is_dir():
            raise ValueError(f"not a directory: {value}")
        return value

    @field_validator("extensions", mode="before")
    @classmethod
    def _normalize_extensions(cls, value: object) -> object:
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple, set, frozenset)):
            return value
        normalized = set()
        for item in value:
            text = str(item).strip()
            if not text or text == ".":
                raise ValueError("extensions must not be empty")
            normalized.add(text if text.startswith(".") else f".{text}")
        if not normalized:
            raise ValueError("at least one extension is required")
        return frozenset(normalized)

    @field_validator("terraform_bin")
    @classmethod
    def _binary_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("terraform binary must not be blank")
        return value
