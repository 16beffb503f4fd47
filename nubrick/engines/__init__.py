"""Execution engines."""

from __future__ import annotations

from nubrick.config import BrickSettings
from nubrick.errors import NuBrickError

from .base import ExecutionEngine
from .docker import DockerEngine
from .local import LocalEngine


def engine_from_settings(settings: BrickSettings) -> ExecutionEngine:
    """Instantiate the engine selected by ``settings.engine``.

    Raises:
        NuBrickError: If the docker engine is selected without an image
            (possible when settings were copied with unvalidated updates).
    """
    if settings.engine == "docker":
        if not settings.image:
            raise NuBrickError("engine 'docker' requires 'image' in the settings")
        return DockerEngine(settings.image, platform=settings.platform)
    return LocalEngine()


__all__ = ["ExecutionEngine", "LocalEngine", "DockerEngine", "engine_from_settings"]
