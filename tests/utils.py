"""Test helpers for nubrick modules."""

from __future__ import annotations

import subprocess
from pathlib import Path


def fake_run_factory(calls: list[list[str]], *, returncode: int = 0, output: str = ""):
    """Create a fake runner that records commands and writes expected outputs.

    ``nu_correct`` writes its output volume (last argument) plus the ``.imp``
    file next to it; ``gzip`` replaces its argument by ``<file>.gz``. A
    non-zero *returncode* makes ``nu_correct`` fail without writing anything.
    """

    def _fake_run(cmd, *, capture: bool = False, timeout=None, env=None):
        cmd = [str(c) for c in cmd]
        calls.append(cmd)
        prog = Path(cmd[0]).name
        if prog == "nu_correct":
            if returncode != 0:
                raise subprocess.CalledProcessError(
                    returncode, cmd, output=output if capture else None
                )
            out = Path(cmd[-1])
            out.write_bytes(b"corrected")
            out.with_suffix(".imp").write_text("imp\n")
        elif prog == "gzip":
            src = Path(cmd[-1])
            src.with_name(src.name + ".gz").write_bytes(b"\x1f\x8b" + src.read_bytes())
            src.unlink()
        stdout = output if capture else None
        return subprocess.CompletedProcess(cmd, 0, stdout)

    return _fake_run
