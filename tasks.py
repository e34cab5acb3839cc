"""Developer tasks powered by Invoke."""

from __future__ import annotations

import pathlib
import subprocess
from typing import Iterable

from invoke import task

ROOT = pathlib.Path(__file__).parent.resolve()
RESULTS_DIR = ROOT / "results"


def _run(command: Iterable[str] | str) -> None:
    if isinstance(command, str):
        cmd = command
    else:
        cmd = " ".join(command)
    subprocess.run(cmd, shell=True, check=True, cwd=ROOT)


def _ensure_results_dir() -> None:
    RESULTS_DIR.mkdir(exist_ok=True)


@task
def tests(_context):
    """Run the unit and end-to-end suite."""
    _run(["uv", "run", "pytest", "tests/"])


@task
def coverage(_context):
    """Run tests under coverage and write reports to results/."""
    _ensure_results_dir()
    _run(["uv", "run", "coverage", "erase"])
    _run(
        [
            "uv", "run", "coverage", "run", "--source", "src/edamcp",
            "-m", "pytest", "tests/", "--junitxml=results/pytest.xml",
        ]
    )
    _run(["uv", "run", "coverage", "report"])
    _run(["uv", "run", "coverage", "html", "-d", "results/htmlcov"])


@task
def browsers(_context):
    """Install the Chromium build Playwright drives."""
    _run(["uv", "run", "playwright", "install", "chromium"])


@task
def lint(_context):
    """Run formatting and type checks."""
    _run(["uv", "run", "black", "--check", "src", "tests"])
    _run(["uv", "run", "mypy", "src"])


@task
def serve(_context, transport="stdio", headed=False):
    """Start the MCP server locally."""
    command = ["uv", "run", "onlineeda-mcp", "--transport", transport]
    if headed:
        command.append("--headed")
    _run(command)


@task
def build(_context):
    """Build distribution artifacts."""
    _run(["uv", "build"])
