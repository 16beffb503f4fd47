"""
Public façade for the *utils* package.

Anything imported here becomes part of the *stable* public API.
"""

from __future__ import annotations

from .naming import VolumeName, split_volume_name, is_zipped
from .proc import run_cmd
from .scratch import make_scratch_dir, discard_scratch
from .display import echo_banner, echo_command, echo_success

__all__: list[str] = [
    "VolumeName",
    "split_volume_name",
    "is_zipped",
    "run_cmd",
    "make_scratch_dir",
    "discard_scratch",
    "echo_banner",
    "echo_command",
    "echo_success",
]
