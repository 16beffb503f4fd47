"""Run external command-line tools without going through a shell."""

from __future__ import annotations

import os
import shlex
import subprocess
import sys
from typing import Mapping, Optional, Sequence

import structlog

log = structlog.get_logger()


def run_cmd(
    cmd: Sequence[str],
    *,
    capture: bool = False,
    timeout: Optional[float] = None,
    env: Optional[Mapping[str, str]] = None,
) -> subprocess.CompletedProcess:
    """Execute *cmd* synchronously and check its exit status.

    Args:
        cmd: Command vector. Every element is passed as a discrete argument,
            so paths containing spaces need no quoting.
        capture: When True, capture combined stdout and stderr as text and
            return it in ``stdout``. Otherwise the child writes straight to
            the inherited console streams.
        timeout: Optional limit in seconds. ``None`` waits indefinitely.
        env: Extra environment variables layered over :data:`os.environ`.

    Returns:
        :class:`subprocess.CompletedProcess` describing the execution result.
        ``stdout`` is ``None`` unless *capture* is True.

    Raises:
        subprocess.CalledProcessError: If the command exits with a non-zero
            status. ``output`` holds the captured text when available.
        subprocess.TimeoutExpired: If *timeout* elapses first. The child is
            killed before the exception propagates.
    """
    cmd = [str(c) for c in cmd]
    full_env = {**os.environ, **env} if env else None

    log.info("run-cmd", cmd=shlex.join(cmd))

    if capture:
        res = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            timeout=timeout,
            env=full_env,
        )
        if res.returncode != 0:
            raise subprocess.CalledProcessError(res.returncode, cmd, output=res.stdout)
        return res

    # Flush our own buffers first so the child's output lands in order.
    sys.stdout.flush()
    sys.stderr.flush()
    res = subprocess.run(cmd, timeout=timeout, env=full_env)
    if res.returncode != 0:
        raise subprocess.CalledProcessError(res.returncode, cmd)
    return res
