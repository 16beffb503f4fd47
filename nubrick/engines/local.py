"""Run tools straight from ``PATH`` on the host."""

from __future__ import annotations

import subprocess
from typing import Mapping, Sequence

from nubrick.utils import proc

from .base import ExecutionEngine


class LocalEngine(ExecutionEngine):
    """Execute tools natively. Host paths need no translation."""

    def run(
        self,
        args: Sequence[str],
        *,
        volumes: Sequence[str] = (),
        env: Mapping[str, str] | None = None,
        capture: bool = False,
        timeout: float | None = None,
    ) -> subprocess.CompletedProcess:
        """Delegate to :func:`nubrick.utils.proc.run_cmd`."""
        return proc.run_cmd(args, capture=capture, timeout=timeout, env=env)
