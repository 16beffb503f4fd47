"""Execution back-ends for running external neuroimaging tools."""

from __future__ import annotations

import subprocess
from abc import ABC, abstractmethod
from typing import Mapping, Sequence


class ExecutionEngine(ABC):
    """Abstract execution engine.

    Concrete implementations launch the process either directly on the host
    or inside a container. The interface is intentionally small so that new
    engines can be added without touching call sites.
    """

    @abstractmethod
    def run(
        self,
        args: Sequence[str],
        *,
        volumes: Sequence[str] = (),
        env: Mapping[str, str] | None = None,
        capture: bool = False,
        timeout: float | None = None,
    ) -> subprocess.CompletedProcess:
        """Run the command vector *args* and wait for it to exit.

        Args:
            args: Command vector; ``args[0]`` is the executable.
            volumes: Host directories the command reads or writes.
            env: Extra environment variables for the process.
            capture: Capture combined stdout/stderr instead of streaming it.
            timeout: Optional limit in seconds.

        Returns:
            Completed process description.

        Raises:
            subprocess.CalledProcessError: On a non-zero exit status.
            subprocess.TimeoutExpired: When *timeout* elapses.
        """
        raise NotImplementedError
