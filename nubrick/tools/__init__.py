"""Wrappers for external correction tools."""

from .base import Tool, ToolSpec
from .nu_correct import NuCorrectTool, SCRATCH_NU, SCRATCH_IMP

__all__ = ["Tool", "ToolSpec", "NuCorrectTool", "SCRATCH_NU", "SCRATCH_IMP"]
