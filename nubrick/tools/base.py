"""Base classes for external tool wrappers."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from typing import Mapping, Sequence

from nubrick.engines import ExecutionEngine


@dataclass
class ToolSpec:
    """Specification returned by :class:`Tool.build_spec`.

    Attributes mirror the arguments of :func:`ExecutionEngine.run` for
    convenience.
    """

    args: Sequence[str]
    volumes: Sequence[str] = field(default_factory=list)
    env: Mapping[str, str] = field(default_factory=dict)


class Tool:
    """Base class for wrappers around external utilities."""

    def execute(
        self,
        engine: ExecutionEngine,
        *,
        capture: bool = False,
        timeout: float | None = None,
    ) -> subprocess.CompletedProcess:
        """Build a :class:`ToolSpec` and execute it with *engine*."""
        spec = self.build_spec()
        return engine.run(
            spec.args,
            volumes=spec.volumes,
            env=spec.env,
            capture=capture,
            timeout=timeout,
        )

    def build_spec(self) -> ToolSpec:
        """Return a :class:`ToolSpec` describing how to run this tool."""
        raise NotImplementedError
