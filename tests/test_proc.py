import subprocess

import pytest

from nubrick.utils.proc import run_cmd


def test_run_cmd_echo():
    """Verify RUN CMD echo behavior."""
    res = run_cmd(["bash", "-c", "echo hello"])
    assert res.returncode == 0
    assert res.stdout is None


def test_run_cmd_capture_merges_streams():
    """Verify RUN CMD capture merges streams behavior."""
    res = run_cmd(["bash", "-c", "echo out; echo err >&2"], capture=True)
    assert "out" in res.stdout
    assert "err" in res.stdout


def test_run_cmd_failure_carries_output():
    """Verify RUN CMD failure carries output behavior."""
    with pytest.raises(subprocess.CalledProcessError) as info:
        run_cmd(["bash", "-c", "echo broken; exit 3"], capture=True)
    assert info.value.returncode == 3
    assert "broken" in info.value.output


def test_run_cmd_failure_streaming():
    """Verify RUN CMD failure streaming behavior."""
    with pytest.raises(subprocess.CalledProcessError) as info:
        run_cmd(["bash", "-c", "exit 4"])
    assert info.value.returncode == 4


def test_run_cmd_timeout():
    """Verify RUN CMD timeout behavior."""
    with pytest.raises(subprocess.TimeoutExpired):
        run_cmd(["sleep", "5"], capture=True, timeout=0.2)


def test_run_cmd_env_and_no_shell(tmp_path):
    """Verify RUN CMD env and no shell behavior."""
    odd = tmp_path / "a b;c"
    res = run_cmd(
        ["bash", "-c", 'printf "%s|%s" "$1" "$NUBRICK_X"', "_", str(odd)],
        capture=True,
        env={"NUBRICK_X": "1"},
    )
    assert res.stdout == f"{odd}|1"
