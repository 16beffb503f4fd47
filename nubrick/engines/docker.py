"""Docker execution engine."""

from __future__ import annotations

import os
import subprocess
from typing import Mapping, Sequence

import structlog

from nubrick.utils import proc

from .base import ExecutionEngine

log = structlog.get_logger()


class DockerEngine(ExecutionEngine):
    """Run tools inside a Docker container.

    Every directory listed in *volumes* is bind-mounted at the same path
    inside the container, so the command vector built for the host can be
    passed through untouched.
    """

    def __init__(self, image: str, platform: str | None = None) -> None:
        """Configure the engine.

        Args:
            image: Container reference such as ``my/image:tag``.
            platform: Optional ``docker --platform`` value to request a
                specific architecture when pulling the image.
        """
        if not image:
            raise ValueError("DockerEngine requires a container image")
        self.image = image
        self.platform = platform

    def build_command(
        self,
        args: Sequence[str],
        *,
        volumes: Sequence[str] = (),
        env: Mapping[str, str] | None = None,
    ) -> list[str]:
        """Return the ``docker run`` vector wrapping *args*."""
        cmd: list[str] = ["docker", "run", "--rm"]
        if hasattr(os, "getuid"):
            # Outputs must stay owned by the caller, not root.
            cmd += ["--user", f"{os.getuid()}:{os.getgid()}"]
        if self.platform:
            cmd += ["--platform", self.platform]
        # The working directory is mounted too so relative paths still resolve.
        cwd = os.getcwd()
        for host in dict.fromkeys([cwd, *(str(v) for v in volumes)]):
            cmd += ["-v", f"{host}:{host}"]
        cmd += ["-w", cwd]
        for key, value in (env or {}).items():
            cmd += ["-e", f"{key}={value}"]
        cmd.append(self.image)
        cmd.extend(str(a) for a in args)
        return cmd

    def run(
        self,
        args: Sequence[str],
        *,
        volumes: Sequence[str] = (),
        env: Mapping[str, str] | None = None,
        capture: bool = False,
        timeout: float | None = None,
    ) -> subprocess.CompletedProcess:
        """Execute *args* in the configured image.

        Raises:
            subprocess.CalledProcessError: If the container exits with a
                non-zero status.
        """
        cmd = self.build_command(args, volumes=volumes, env=env)
        log.info("docker.run", image=self.image, args=list(args))
        try:
            return proc.run_cmd(cmd, capture=capture, timeout=timeout)
        except subprocess.CalledProcessError as exc:
            log.error("docker.failed", image=self.image, returncode=exc.returncode)
            raise
