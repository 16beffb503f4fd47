"""Scratch directories used while an external tool is running.

Every brick invocation owns one scratch folder. Its name embeds the label of
the output being produced (handy when inspecting a crowded temp directory)
plus a random token, so concurrent invocations never share a folder even
when they target the same output name.
"""

from __future__ import annotations

import logging
import re
import shutil
import tempfile
from pathlib import Path

log = logging.getLogger(__name__)

__all__ = ["make_scratch_dir", "discard_scratch"]

_PREFIX = "nubrick_tmp_"
_UNSAFE_RE = re.compile(r"[^\w.\-]+")


def make_scratch_dir(label: str, root: Path | None = None) -> Path:
    """Create and return a fresh, uniquely named scratch directory.

    Args:
        label: Human-readable tag appended to the folder name (typically the
            base name of the output file). Characters that are awkward in
            paths are replaced by ``-``.
        root: Parent directory. ``None`` uses the platform temp directory.

    Returns:
        Absolute path of the created directory.
    """
    if root is not None:
        root = Path(root).expanduser()
        root.mkdir(parents=True, exist_ok=True)
    suffix = "_" + _UNSAFE_RE.sub("-", label) if label else ""
    path = Path(tempfile.mkdtemp(prefix=_PREFIX, suffix=suffix, dir=root)).resolve()
    log.debug("Created scratch directory %s", path)
    return path


def discard_scratch(path: Path, *, strict: bool = True) -> bool:
    """Recursively remove *path*.

    Args:
        path: Scratch directory created by :func:`make_scratch_dir`.
        strict: When True (the success path) filesystem errors propagate.
            When False (cleaning up after a failure) errors are logged and
            swallowed so they do not mask the original exception.

    Returns:
        ``True`` when the directory is gone afterwards.
    """
    if not path.exists():
        return True
    if strict:
        shutil.rmtree(path)
        log.debug("Deleted scratch directory %s", path)
        return True
    try:
        shutil.rmtree(path)
    except OSError as exc:
        log.error("Could not delete scratch directory %s: %s", path, exc)
        return False
    log.debug("Deleted scratch directory %s", path)
    return True
