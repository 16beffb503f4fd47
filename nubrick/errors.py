"""Custom exceptions raised by the nubrick bricks."""

from __future__ import annotations

import shlex
from typing import Sequence


class NuBrickError(RuntimeError):
    """Base class for every error raised on purpose by *nubrick*."""

    pass


class MissingArgumentError(NuBrickError):
    """Raised when a mandatory input field was not supplied."""

    def __init__(self, structure: str, field: str) -> None:
        self.structure = structure
        self.field = field
        super().__init__(f"{structure}.{field} is mandatory and has no default")


class ExternalToolFailure(NuBrickError):
    """Raised when an external command exits with a non-zero status.

    Attributes:
        cmd: Command vector that failed.
        returncode: Exit status reported by the process (``None`` on timeout).
        output: Captured stdout/stderr text, when it was captured.
    """

    def __init__(
        self,
        cmd: Sequence[str],
        returncode: int | None,
        output: str | None = None,
    ) -> None:
        self.cmd = [str(c) for c in cmd]
        self.returncode = returncode
        self.output = output
        super().__init__(self._message())

    def _message(self) -> str:
        msg = f"The {self.cmd[0]} command failed with status {self.returncode}:\n  {shlex.join(self.cmd)}"
        if self.output:
            msg += f"\nwith that error message:\n{self.output.rstrip()}"
        return msg


class ExternalToolTimeout(ExternalToolFailure):
    """Raised when an external command exceeds its allotted run time."""

    def __init__(
        self,
        cmd: Sequence[str],
        timeout: float,
        output: str | None = None,
    ) -> None:
        self.timeout = timeout
        super().__init__(cmd, None, output)

    def _message(self) -> str:
        msg = f"The {self.cmd[0]} command timed out after {self.timeout:g} s:\n  {shlex.join(self.cmd)}"
        if self.output:
            msg += f"\n{self.output.rstrip()}"
        return msg


__all__ = [
    "NuBrickError",
    "MissingArgumentError",
    "ExternalToolFailure",
    "ExternalToolTimeout",
]
