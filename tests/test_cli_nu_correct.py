import json

from click.testing import CliRunner

from nubrick.cli import main as cli_main
from nubrick.utils import proc

from .utils import fake_run_factory


def _run(args, tmp_path):
    runner = CliRunner()
    return runner.invoke(cli_main, args, env={"NUBRICK_TMPDIR": str(tmp_path / "scratch")})


def test_test_mode_prints_resolved_paths(tmp_path, monkeypatch):
    """Verify test mode prints resolved paths behavior."""
    def _boom(*args, **kwargs):
        raise AssertionError("no process may be spawned in test mode")

    monkeypatch.setattr(proc, "run_cmd", _boom)
    res = _run(["nu-correct", "/data/subj01.mnc.gz", "--no-t1-imp", "--test"], tmp_path)
    assert res.exit_code == 0, res.output
    data = json.loads(res.output)
    assert data["files_in"]["mask"] == {"omitted": True}
    assert data["files_out"]["t1_nu"] == "/data/subj01_nu.mnc.gz"
    assert data["files_out"]["t1_imp"] == {"omitted": True}
    assert data["opt"]["folder_out"] == "/data"
    assert data["opt"]["flag_test"] is True


def test_run_writes_outputs(tmp_path, monkeypatch):
    """Verify run writes outputs behavior."""
    calls: list[list[str]] = []
    monkeypatch.setattr(proc, "run_cmd", fake_run_factory(calls))
    t1 = tmp_path / "subj01.mnc"
    t1.write_bytes(b"")
    mask = tmp_path / "mask.mnc"

    res = _run(
        ["nu-correct", str(t1), "--mask", str(mask), "--arg", "-iterations 10", "--quiet"],
        tmp_path,
    )

    assert res.exit_code == 0, res.output
    assert (tmp_path / "subj01_nu.mnc").exists()
    assert (tmp_path / "subj01_nu.imp").exists()
    assert "corrected volume" in res.output
    assert calls[0][3:7] == ["-iterations", "10", "-mask", str(mask)]
    assert list((tmp_path / "scratch").iterdir()) == []


def test_conflicting_output_flags(tmp_path):
    """Verify conflicting output flags behavior."""
    res = _run(["nu-correct", "a.mnc", "--t1-nu", "b.mnc", "--no-t1-nu", "--test"], tmp_path)
    assert res.exit_code == 2
    assert "mutually exclusive" in res.output


def test_tool_failure_is_reported(tmp_path, monkeypatch):
    """Verify tool failure is reported behavior."""
    calls: list[list[str]] = []
    monkeypatch.setattr(proc, "run_cmd", fake_run_factory(calls, returncode=1, output="cannot open"))
    t1 = tmp_path / "s.mnc"
    t1.write_bytes(b"")

    res = _run(["nu-correct", str(t1), "-q"], tmp_path)

    assert res.exit_code == 1
    assert "cannot open" in res.output


def test_docker_engine_needs_image(tmp_path):
    """Verify docker engine needs image behavior."""
    res = _run(["nu-correct", "a.mnc", "--engine", "docker"], tmp_path)
    assert res.exit_code == 2
    assert "--image" in res.output


def test_settings_file_is_applied(tmp_path):
    """Verify settings file is applied behavior."""
    cfg = tmp_path / "s.yaml"
    cfg.write_text("zip_ext: .bz2\n")
    res = _run(["--config", str(cfg), "nu-correct", "/d/a.mnc.bz2", "--test"], tmp_path)
    assert res.exit_code == 0, res.output
    assert json.loads(res.output)["files_out"]["t1_nu"] == "/d/a_nu.mnc.bz2"


def test_invalid_settings_file(tmp_path):
    """Verify invalid settings file behavior."""
    cfg = tmp_path / "s.yaml"
    cfg.write_text("zip_ext: bz2\n")
    res = _run(["--config", str(cfg), "nu-correct", "a.mnc", "--test"], tmp_path)
    assert res.exit_code == 1
    assert "Invalid configuration" in res.output


def test_help_lists_command():
    """Verify help lists command behavior."""
    res = CliRunner().invoke(cli_main, ["--help"])
    assert res.exit_code == 0
    assert "nu-correct" in res.output
