"""Tool wrapper for the MINC ``nu_correct`` utility (N3 correction).

Type ``nu_correct -help`` in a terminal for the options that can be passed
through ``arg``.
"""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import TYPE_CHECKING

from nubrick.config import BrickSettings

from .base import Tool, ToolSpec

if TYPE_CHECKING:  # pragma: no cover
    from nubrick.bricks.nu_correct import NuCorrectInputs

#: File names of the artifacts inside the scratch directory.
SCRATCH_NU = "t1_nu.mnc"
SCRATCH_IMP = "t1_nu.imp"


class NuCorrectTool(Tool):
    """Build the command vector for one ``nu_correct`` run."""

    def __init__(
        self,
        files_in: NuCorrectInputs,
        scratch_dir: Path,
        settings: BrickSettings,
        arg: str = "",
    ):
        """Store the defaulted inputs and the scratch location."""
        self.files_in = files_in
        self.scratch_dir = Path(scratch_dir)
        self.settings = settings
        self.arg = arg

    @property
    def scratch_nu(self) -> Path:
        """Corrected volume written by the tool."""
        return self.scratch_dir / SCRATCH_NU

    @property
    def scratch_imp(self) -> Path:
        """Intensity mapping written next to :attr:`scratch_nu`."""
        return self.scratch_dir / SCRATCH_IMP

    def build_spec(self) -> ToolSpec:  # type: ignore[override]
        """Return ``nu_correct -tmpdir D [ARG] [-mask M] T1 OUT`` as a :class:`ToolSpec`."""
        t1 = Path(self.files_in.t1)
        mask = self.files_in.mask_path

        args: list[str] = [self.settings.tool, "-tmpdir", str(self.scratch_dir)]
        if self.arg.strip():
            args.extend(shlex.split(self.arg))
        if mask is not None:
            args += ["-mask", str(mask)]
        args += [str(t1), str(self.scratch_nu)]

        volumes = [str(self.scratch_dir), str(t1.resolve().parent)]
        if mask is not None:
            volumes.append(str(Path(mask).resolve().parent))
        return ToolSpec(args, volumes, {})
