"""Bricks: one function per external processing step.

Every brick follows the same contract – ``(files_in, files_out, opt)`` in,
the same three structures with defaults filled in out – so that a pipeline
planner can call it with ``flag_test`` to learn file names without running
anything.
"""

from .nu_correct import (
    OMITTED,
    NuCorrectInputs,
    NuCorrectOptions,
    NuCorrectOutputs,
    Omitted,
    describe,
    nu_correct,
    set_defaults,
)

__all__ = [
    "OMITTED",
    "Omitted",
    "NuCorrectInputs",
    "NuCorrectOutputs",
    "NuCorrectOptions",
    "describe",
    "nu_correct",
    "set_defaults",
]
