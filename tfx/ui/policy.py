"""Decide whether live progress is drawn on stderr."""

from __future__ import annotations

import os

from rich.console import Console

from tfx.ui.console import err_console

CI_ENV_VARS = frozenset({
    "CI",
    "GITHUB_ACTIONS",
    "GITLAB_CI",
    "JENKINS_URL",
    "TF_BUILD",
    "BUILDKITE",
    "CIRCLECI",
    "TRAVIS",
})


def should_show_progress(
    *,
    force: bool | None = None,
    machine_output: bool = False,
    console: Console | None = None,
) -> bool:
    """Return True when the progress display should be rendered.

    ``force`` wins outright. Otherwise progress is off for JSON output, under
    CI, with ``TERM=dumb`` and whenever the stderr console is not a terminal.
    """
    if force is not None:
        return force
    if machine_output:
        return False
    if any(os.environ.get(var) for var in CI_ENV_VARS):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return (console or err_console).is_terminal
