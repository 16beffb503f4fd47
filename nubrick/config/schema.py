"""
Pydantic model for the process-wide settings consumed by the bricks.

The values used to live in global variables; they are now validated once and
passed explicitly to every brick call.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


def _default_tmp_dir() -> Path:
    """Return ``$NUBRICK_TMPDIR`` or the platform temp directory."""
    return Path(os.environ.get("NUBRICK_TMPDIR") or tempfile.gettempdir())


class BrickSettings(BaseModel):
    """Settings shared by every brick invocation.

    Attributes:
        zip_ext: Archive suffix checked literally against volume filenames.
        zip_cmd: Command compressing a file in place, producing
            ``<file><zip_ext>``. May contain flags (``"gzip -9"``).
        tool: Executable name of the non-uniformity correction tool.
        tmp_dir: Parent folder of the per-call scratch directories.
        engine: Where external tools run (``local`` or ``docker``).
        image: Container image providing the tool (docker engine only).
        platform: Optional ``docker --platform`` value.
    """

    zip_ext: str = ".gz"
    zip_cmd: str = "gzip"
    tool: str = "nu_correct"
    tmp_dir: Path = Field(default_factory=_default_tmp_dir)
    engine: Literal["local", "docker"] = "local"
    image: Optional[str] = None
    platform: Optional[str] = None

    @field_validator("zip_ext")
    @classmethod
    def _dotted(cls, value: str) -> str:
        """Require a leading dot so suffix comparison stays literal."""
        if not value.startswith(".") or len(value) < 2:
            raise ValueError(f"zip_ext must look like '.gz', got {value!r}")
        return value

    @field_validator("zip_cmd", "tool")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        """Reject blank command names."""
        if not value.strip():
            raise ValueError("command name must not be empty")
        return value

    @model_validator(mode="after")
    def _docker_needs_image(self):
        """The docker engine cannot run without a container image."""
        if self.engine == "docker" and not self.image:
            raise ValueError("engine 'docker' requires 'image'")
        return self
