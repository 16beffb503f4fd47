"""Utility functions to print formatted CLI messages for progress updates."""

from __future__ import annotations

import shlex
from pathlib import Path

import click

__all__ = ["echo_banner", "echo_command", "echo_success"]


def echo_banner(text: str) -> None:
    """Print *text* framed by two rows of stars.

    Args:
        text: Banner text.
    """
    stars = "*" * len(text)
    click.secho(f"\n{stars}\n{text}\n{stars}", fg="cyan")


def echo_command(tool: str, cmd: list[str]) -> None:
    """Echo the exact command about to be executed.

    Args:
        tool: Executable name or path; only its basename is shown.
        cmd: Command vector.
    """
    click.echo(f"Running {Path(tool).name.upper()} with the following command:\n{shlex.join(cmd)}\n")


def echo_success(text: str) -> None:
    """Echo a green success message prefixed with a tick.

    Args:
        text: Message to display.
    """
    click.secho(f"✓ {text}", fg="green")
