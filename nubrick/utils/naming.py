"""Filename helpers for volume files that may carry an archive suffix.

Volumes are routinely stored compressed (``subj01.mnc.gz``). Deriving an
output name from such a file must strip *both* suffixes to recover the true
base name, and re-attach both of them to the derived name. The helpers below
only manipulate names; they never touch the filesystem.
"""

from __future__ import annotations

from pathlib import Path
from typing import NamedTuple

__all__ = ["VolumeName", "split_volume_name", "is_zipped"]


class VolumeName(NamedTuple):
    """Components of a volume filename.

    Attributes:
        directory: Parent folder (``Path(".")`` for bare filenames).
        base: Filename without the format and archive suffixes.
        ext: Effective extension, e.g. ``.mnc`` or ``.mnc.gz``.
    """

    directory: Path
    base: str
    ext: str


def split_volume_name(path: str | Path, zip_ext: str = ".gz") -> VolumeName:
    """Split *path* into directory, base name and effective extension.

    When the last suffix equals *zip_ext* one more suffix is stripped from the
    base name and both are kept together as the effective extension::

        >>> split_volume_name("/data/subj01.mnc.gz")
        VolumeName(directory=PosixPath('/data'), base='subj01', ext='.mnc.gz')
        >>> split_volume_name("subj01.mnc")
        VolumeName(directory=PosixPath('.'), base='subj01', ext='.mnc')

    Args:
        path: Volume filename.
        zip_ext: Archive suffix, compared literally (case-sensitive).

    Returns:
        :class:`VolumeName` tuple.
    """
    path = Path(path)
    directory = path.parent  # "." for bare filenames
    base, ext = path.stem, path.suffix

    if ext and ext == zip_ext:
        inner = Path(base)
        base, ext = inner.stem, inner.suffix + zip_ext

    return VolumeName(directory, base, ext)


def is_zipped(path: str | Path, zip_ext: str = ".gz") -> bool:
    """Return ``True`` when the last suffix of *path* is *zip_ext*."""
    return Path(path).suffix == zip_ext
