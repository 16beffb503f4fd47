"""
YAML settings loader.

Search precedence (first match wins)
1. An explicit path argument (``--config`` on the CLI).
2. ``<project>/code/config/nu_correct.yaml`` – project-local override.
3. The packaged default shipped inside the wheel.

The document may either list keys at the top level or nest them under a
``defaults:`` mapping; top-level keys win. Environment overrides
(``$NUBRICK_TMPDIR``) apply only when the YAML leaves ``tmp_dir`` unset.
"""

from __future__ import annotations

from importlib.resources import as_file, files
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from .schema import BrickSettings

_DEFAULT_SETTINGS = files("nubrick.resources") / "nu_correct.yaml"
_FNAME = "nu_correct.yaml"


def _project_local(root: Optional[str | Path]) -> Optional[Path]:
    """Return ``<root>/code/config/nu_correct.yaml`` or *None*."""
    if root is None:
        return None
    return Path(root).expanduser().resolve() / "code" / "config" / _FNAME


def _first_existing(*candidates: Optional[Path]) -> Optional[Path]:
    """Return the first path in *candidates* that exists on disk."""
    for p in candidates:
        if p is not None and p.exists():
            return p
    return None


def _load_yaml(path: Path) -> dict:
    """Read a YAML mapping; an empty file yields an empty dict."""
    data = yaml.safe_load(path.read_text()) or {}
    if not isinstance(data, dict):
        raise RuntimeError(f"Invalid configuration – {path} does not contain a mapping")
    return data


def resolve_settings_path(
    explicit: Optional[str | Path] = None,
    project_root: Optional[str | Path] = None,
) -> Path:
    """Resolve the settings file according to the documented precedence.

    Raises:
        FileNotFoundError: When *explicit* is given but does not exist.
    """
    if explicit is not None:
        explicit = Path(explicit).expanduser().resolve()
        if not explicit.exists():
            raise FileNotFoundError(explicit)
    resolved = _first_existing(explicit, _project_local(project_root))
    if resolved is None:
        with as_file(_DEFAULT_SETTINGS) as p:
            resolved = p
    return resolved


def load_settings(
    path: Optional[str | Path] = None,
    *,
    project_root: Optional[str | Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> BrickSettings:
    """Return validated :class:`BrickSettings`.

    Args:
        path: Explicit YAML file. ``None`` triggers the search sequence.
        project_root: Root folder searched for a project-local override.
        overrides: Values taking precedence over the file; ``None`` entries
            are ignored so unset CLI options do not clobber the YAML.

    Returns:
        Settings object ready to be passed to the bricks.

    Raises:
        RuntimeError: When the merged document fails validation.
    """
    data = _load_yaml(resolve_settings_path(path, project_root))
    defaults = data.get("defaults") or {}
    merged: dict = {**defaults, **{k: v for k, v in data.items() if k != "defaults"}}
    merged.update({k: v for k, v in (overrides or {}).items() if v is not None})
    # A null tmp_dir in YAML means "use the environment / platform default".
    if merged.get("tmp_dir") is None:
        merged.pop("tmp_dir", None)

    try:
        return BrickSettings(**merged)
    except Exception as exc:  # pydantic.ValidationError
        raise RuntimeError(f"Invalid configuration – {exc}") from exc
