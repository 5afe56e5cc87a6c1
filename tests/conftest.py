"""Shared test fixtures for the tfx test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.helpers import RecordingValidator, make_tree


@pytest.fixture
def module_tree(tmp_path: Path) -> Path:
    """A small tree: two modules, one hidden module and a plain directory."""
    return make_tree(
        tmp_path / "infra",
        [
            "main.tf",
            "variables.tf",
            "README.md",
            "network/vpc.tf",
            "network/subnets/",
            ".terraform/modules/cached.tf",
            "docs/overview.md",
        ],
    )


@pytest.fixture
def recording_validator() -> RecordingValidator:
    return RecordingValidator()


@pytest.fixture
def fake_log(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the fake terraform script at a log file and return its path."""
    log = tmp_path / "terraform.log"
    monkeypatch.setenv("TFX_FAKE_LOG", str(log))
    return log
