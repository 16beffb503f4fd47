import pytest

from nubrick.utils.scratch import discard_scratch, make_scratch_dir


def test_scratch_dirs_are_unique(tmp_path):
    """Verify scratch dirs are unique behavior."""
    a = make_scratch_dir("subj01_nu", tmp_path)
    b = make_scratch_dir("subj01_nu", tmp_path)
    assert a != b
    assert a.is_dir() and b.is_dir()
    assert a.name.startswith("nubrick_tmp_")
    assert a.name.endswith("_subj01_nu")


def test_scratch_label_is_sanitised(tmp_path):
    """Verify scratch label is sanitised behavior."""
    path = make_scratch_dir("a b/c", tmp_path)
    assert path.parent == tmp_path.resolve()
    assert path.name.endswith("_a-b-c")


def test_scratch_root_is_created(tmp_path):
    """Verify scratch root is created behavior."""
    path = make_scratch_dir("x", tmp_path / "deep" / "root")
    assert path.is_dir()


def test_discard_scratch(tmp_path):
    """Verify discard scratch behavior."""
    path = make_scratch_dir("x", tmp_path)
    (path / "sub").mkdir()
    (path / "sub" / "f").write_text("1")
    assert discard_scratch(path)
    assert not path.exists()
    # already gone
    assert discard_scratch(path)


def test_discard_scratch_non_strict_swallows_errors(tmp_path, monkeypatch):
    """Verify discard scratch non strict swallows errors behavior."""
    import shutil

    path = make_scratch_dir("x", tmp_path)

    def _fail(p):
        raise PermissionError(p)

    monkeypatch.setattr(shutil, "rmtree", _fail)
    assert discard_scratch(path, strict=False) is False
    with pytest.raises(PermissionError):
        discard_scratch(path)
