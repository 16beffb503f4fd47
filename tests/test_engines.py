import os
import subprocess

import pytest

from nubrick.config import BrickSettings
from nubrick.engines import DockerEngine, LocalEngine, engine_from_settings
from nubrick.errors import NuBrickError
from nubrick.utils import proc


def test_docker_engine_builds_command(monkeypatch, tmp_path):
    """Verify docker engine builds command behavior."""
    called = {}

    def fake_run(cmd, **kwargs):
        called["cmd"] = cmd
        called.update(kwargs)
        return subprocess.CompletedProcess(cmd, 0)

    monkeypatch.setattr(subprocess, "run", fake_run)
    monkeypatch.chdir(tmp_path)

    eng = DockerEngine("minc:test", platform="linux/amd64")
    eng.run(["nu_correct", "/data/in.mnc"], volumes=["/data", "/data", "/scratch"], env={"A": "1"})

    cmd = called["cmd"]
    assert cmd[:3] == ["docker", "run", "--rm"]
    assert "--platform" in cmd and "linux/amd64" in cmd
    joined = " ".join(cmd)
    assert f"{tmp_path}:{tmp_path}" in joined
    assert joined.count("/data:/data") == 1
    assert "/scratch:/scratch" in joined
    assert cmd[cmd.index("-w") + 1] == str(tmp_path)
    assert "-e" in cmd and "A=1" in cmd
    assert cmd[-3:] == ["minc:test", "nu_correct", "/data/in.mnc"]


def test_docker_engine_runs_as_caller(monkeypatch):
    """Verify docker engine runs as caller behavior."""
    if not hasattr(os, "getuid"):
        pytest.skip("POSIX only")
    cmd = DockerEngine("img").build_command(["true"])
    assert cmd[cmd.index("--user") + 1] == f"{os.getuid()}:{os.getgid()}"


def test_docker_engine_requires_image():
    """Verify docker engine requires image behavior."""
    with pytest.raises(ValueError):
        DockerEngine("")


def test_docker_failure_propagates(monkeypatch):
    """Verify docker failure propagates behavior."""

    def fake_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 125)

    monkeypatch.setattr(subprocess, "run", fake_run)
    with pytest.raises(subprocess.CalledProcessError) as info:
        DockerEngine("img").run(["nu_correct"])
    assert info.value.cmd[0] == "docker"


def test_local_engine_delegates_to_run_cmd(monkeypatch):
    """Verify local engine delegates to run cmd behavior."""
    seen = {}

    def fake_run_cmd(cmd, *, capture=False, timeout=None, env=None):
        seen.update(cmd=cmd, capture=capture, timeout=timeout, env=env)
        return subprocess.CompletedProcess(cmd, 0, "")

    monkeypatch.setattr(proc, "run_cmd", fake_run_cmd)
    LocalEngine().run(["nu_correct", "a"], volumes=["/x"], capture=True, timeout=3)
    assert seen == {"cmd": ["nu_correct", "a"], "capture": True, "timeout": 3, "env": None}


def test_engine_from_settings():
    """Verify engine from settings behavior."""
    assert isinstance(engine_from_settings(BrickSettings()), LocalEngine)
    eng = engine_from_settings(BrickSettings(engine="docker", image="img:1"))
    assert isinstance(eng, DockerEngine)
    assert eng.image == "img:1"


def test_engine_from_unvalidated_settings_without_image():
    """Verify engine from unvalidated settings without image behavior."""
    settings = BrickSettings().model_copy(update={"engine": "docker"})
    with pytest.raises(NuBrickError, match="image"):
        engine_from_settings(settings)
