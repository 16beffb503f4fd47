"""Pytest configuration for nubrick tests."""

from __future__ import annotations

import pytest

from nubrick.config import BrickSettings
from nubrick.utils import proc

from .utils import fake_run_factory


@pytest.fixture
def settings(tmp_path):
    """Settings whose scratch folders live inside ``tmp_path/scratch``."""
    return BrickSettings(tmp_dir=tmp_path / "scratch")


@pytest.fixture
def fake_tools(monkeypatch):
    """Replace :func:`nubrick.utils.proc.run_cmd` by a recording fake.

    Returns:
        List receiving every command vector that would have been executed.
    """
    calls: list[list[str]] = []
    monkeypatch.setattr(proc, "run_cmd", fake_run_factory(calls))
    return calls


@pytest.fixture
def t1(tmp_path):
    """Create an (empty) T1 volume inside ``tmp_path/data``."""
    data = tmp_path / "data"
    data.mkdir()
    path = data / "subj01.mnc"
    path.write_bytes(b"")
    return path
