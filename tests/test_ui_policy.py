"""Tests for tfx.ui.policy — when live progress is shown."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from tfx.ui.policy import CI_ENV_VARS, should_show_progress


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in CI_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.delenv("TERM", raising=False)


def _console(terminal: bool) -> Console:
    return Console(file=io.StringIO(), force_terminal=terminal)


def test_force_wins() -> None:
    assert should_show_progress(force=True, machine_output=True) is True
    assert should_show_progress(force=False, console=_console(True)) is False


def test_machine_output_disables_progress() -> None:
    assert should_show_progress(machine_output=True, console=_console(True)) is False


@pytest.mark.parametrize("var", sorted(CI_ENV_VARS))
def test_ci_disables_progress(var: str, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(var, "1")
    assert should_show_progress(console=_console(True)) is False


def test_dumb_terminal(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TERM", "dumb")
    assert should_show_progress(console=_console(True)) is False


@pytest.mark.parametrize("terminal", [True, False])
def test_follows_stderr_terminal(terminal: bool) -> None:
    assert should_show_progress(console=_console(terminal)) is terminal


def test_piped_stdin_does_not_disable_progress(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    assert should_show_progress(console=_console(True)) is True


def test_non_interactive_flag_is_not_an_env_rule(monkeypatch: pytest.MonkeyPatch) -> None:
    # TFX_NON_INTERACTIVE is handled by the --no-interactive option.
    monkeypatch.setenv("TFX_NON_INTERACTIVE", "1")
    assert should_show_progress(console=_console(True)) is True
