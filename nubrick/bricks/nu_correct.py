"""Non-uniformity correction of a T1 volume with ``nu_correct``.

The brick is a thin wrapper around the MINC tool ``nu_correct`` which
implements the N3 method [1]. It works with any MR volume, including raw
(non-stereotaxic) data; supplying a mask of the region of interest improves
the estimate.

Call contract::

    files_in, files_out, opt = nu_correct(files_in, files_out, opt)

``files_in``
    ``t1`` (mandatory) – the T1 volume.
    ``mask`` (default ``OMITTED``) – binary mask of a region of interest.

``files_out``
    ``t1_nu`` (default ``<folder_out>/<base>_nu<ext>``) – corrected volume.
    ``t1_imp`` (default ``<folder_out>/<base>_nu.imp``) – estimated
    intensity mapping, never compressed.
    A field left unset (``None`` or ``""``) receives its default name; a
    field set to :data:`OMITTED` is computed but not saved.

``opt``
    ``arg`` (default ``""``) – extra arguments passed to ``nu_correct``.
    ``flag_verbose`` (default ``True``) – print progress and let the tool
    write to the console.
    ``flag_test`` (default ``False``) – only fill in the defaults.
    ``folder_out`` (default: folder of ``t1``) – where default outputs go.
    The folder must exist beforehand.
    ``timeout`` (default ``None``) – seconds before the tool is killed.

All three structures are returned with their defaults filled in. Unknown
fields are kept untouched so callers may attach their own bookkeeping.

[1] J.G. Sled, A.P. Zijdenbos and A.C. Evans, "A non-parametric method for
    automatic correction of intensity non-uniformity in MRI data", IEEE
    Transactions on Medical Imaging, vol. 17, n. 1, pp. 87-97, 1998.
"""

from __future__ import annotations

import enum
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple, Type, TypeVar, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator

from nubrick.config import BrickSettings
from nubrick.engines import ExecutionEngine, engine_from_settings
from nubrick.errors import ExternalToolFailure, ExternalToolTimeout, MissingArgumentError
from nubrick.tools import NuCorrectTool
from nubrick.utils import proc
from nubrick.utils.display import echo_banner, echo_command
from nubrick.utils.naming import is_zipped, split_volume_name
from nubrick.utils.scratch import discard_scratch, make_scratch_dir

log = structlog.get_logger()

__all__ = [
    "Omitted",
    "OMITTED",
    "NuCorrectInputs",
    "NuCorrectOutputs",
    "NuCorrectOptions",
    "set_defaults",
    "nu_correct",
    "describe",
    "OMITTED_JSON",
]

BANNER = "Non-uniformity correction on T1 volume"


# --------------------------------------------------------------------------- #
# Data model                                                                  #
# --------------------------------------------------------------------------- #
class Omitted(enum.Enum):
    """Marker for an input or output that is intentionally absent."""

    OMITTED = "omitted"

    def __repr__(self) -> str:
        return "OMITTED"


OMITTED = Omitted.OMITTED

#: ``None`` = use the default, ``OMITTED`` = skip, ``Path`` = concrete file.
MaybePath = Union[Path, Omitted, None]


#: JSON spelling of OMITTED; unlike a string it cannot be read back as a path.
OMITTED_JSON = {"omitted": True}


def _from_json_marker(value: Any) -> Any:
    """Turn the JSON spelling written by :func:`describe` back into ``OMITTED``."""
    if isinstance(value, Mapping) and dict(value) == OMITTED_JSON:
        return OMITTED
    return value


def _blank_to_none(value: Any) -> Any:
    """Treat an empty string like an unset field."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


class _Structure(BaseModel):
    """Permissive base: unknown fields are accepted and preserved."""

    model_config = ConfigDict(extra="allow")


class NuCorrectInputs(_Structure):
    """Input files of the brick."""

    t1: Optional[Path] = None
    mask: MaybePath = OMITTED

    @field_validator("t1", mode="before")
    @classmethod
    def _t1_blank(cls, value: Any) -> Any:
        """An empty ``t1`` counts as missing."""
        return _blank_to_none(value)

    @field_validator("mask", mode="before")
    @classmethod
    def _mask_absent(cls, value: Any) -> Any:
        """No mask is spelled ``OMITTED`` whichever way the caller says it."""
        value = _blank_to_none(_from_json_marker(value))
        return OMITTED if value is None else value

    @property
    def mask_path(self) -> Optional[Path]:
        """Return the mask as a path, or ``None`` when omitted."""
        return None if self.mask is OMITTED else self.mask


class NuCorrectOutputs(_Structure):
    """Output files of the brick."""

    t1_nu: MaybePath = None
    t1_imp: MaybePath = None

    @field_validator("t1_nu", "t1_imp", mode="before")
    @classmethod
    def _blank(cls, value: Any) -> Any:
        """An empty name means "use the default name"."""
        return _blank_to_none(_from_json_marker(value))


class NuCorrectOptions(_Structure):
    """Options of the brick."""

    arg: str = ""
    flag_verbose: bool = True
    flag_test: bool = False
    folder_out: Optional[Path] = None
    timeout: Optional[float] = Field(default=None, gt=0)

    @field_validator("folder_out", mode="before")
    @classmethod
    def _blank(cls, value: Any) -> Any:
        """An empty folder means "next to the input"."""
        return _blank_to_none(value)


_M = TypeVar("_M", bound=_Structure)


def _coerce(model: Type[_M], value: Union[_M, Mapping[str, Any], None]) -> _M:
    """Return a private, validated copy of *value* as *model*.

    Callers' objects are never mutated; defaults are applied on the copy.
    """
    if value is None:
        return model()
    if isinstance(value, model):
        return value.model_copy(deep=True)
    if isinstance(value, BaseModel):
        value = value.model_dump()
    return model.model_validate(dict(value))


# --------------------------------------------------------------------------- #
# Defaulting                                                                  #
# --------------------------------------------------------------------------- #
def set_defaults(
    files_in: Union[NuCorrectInputs, Mapping[str, Any], None],
    files_out: Union[NuCorrectOutputs, Mapping[str, Any], None] = None,
    opt: Union[NuCorrectOptions, Mapping[str, Any], None] = None,
    settings: Optional[BrickSettings] = None,
) -> Tuple[NuCorrectInputs, NuCorrectOutputs, NuCorrectOptions]:
    """Validate the three structures and fill in every default.

    The function is pure: it touches neither the filesystem nor the caller's
    objects, and feeding its result back in returns equal structures.

    Args:
        files_in: Input files (model or mapping). ``t1`` is mandatory.
        files_out: Output files; ``None`` means "all defaults".
        opt: Options; ``None`` means "all defaults".
        settings: Supplies the archive suffix used for name derivation.

    Returns:
        Tuple ``(files_in, files_out, opt)`` with defaults applied.

    Raises:
        MissingArgumentError: If ``files_in.t1`` is absent.
        pydantic.ValidationError: If a field has the wrong type.
    """
    settings = settings or BrickSettings()

    fin = _coerce(NuCorrectInputs, files_in)
    if fin.t1 is None:
        raise MissingArgumentError("files_in", "t1")
    fout = _coerce(NuCorrectOutputs, files_out)
    o = _coerce(NuCorrectOptions, opt)

    name = split_volume_name(fin.t1, settings.zip_ext)

    if o.folder_out is None:
        o.folder_out = name.directory
    if fout.t1_nu is None:
        fout.t1_nu = o.folder_out / f"{name.base}_nu{name.ext}"
    if fout.t1_imp is None:
        fout.t1_imp = o.folder_out / f"{name.base}_nu.imp"

    return fin, fout, o


def describe(
    files_in: NuCorrectInputs,
    files_out: NuCorrectOutputs,
    opt: NuCorrectOptions,
) -> dict:
    """Return the defaulted structures as JSON-friendly dictionaries.

    ``OMITTED`` is written as ``{"omitted": true}``, which the models read
    back as ``OMITTED``; ``null`` keeps meaning "use the default".
    """

    def _plain(model: BaseModel) -> dict:
        out = {}
        for key, value in model.model_dump().items():
            if value is OMITTED:
                value = dict(OMITTED_JSON)
            elif isinstance(value, Path):
                value = str(value)
            out[key] = value
        return out

    return {"files_in": _plain(files_in), "files_out": _plain(files_out), "opt": _plain(opt)}


# --------------------------------------------------------------------------- #
# Running                                                                     #
# --------------------------------------------------------------------------- #
def _scratch_label(
    files_in: NuCorrectInputs, files_out: NuCorrectOutputs, settings: BrickSettings
) -> str:
    """Return the tag embedded in the scratch folder name."""
    if files_out.t1_nu is not OMITTED:
        return split_volume_name(files_out.t1_nu, settings.zip_ext).base
    return split_volume_name(files_in.t1, settings.zip_ext).base + "_nu"


def _decode(output: Any) -> Optional[str]:
    """Return captured output as text."""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output


def _run_tool(
    tool: NuCorrectTool,
    engine: ExecutionEngine,
    opt: NuCorrectOptions,
    settings: BrickSettings,
) -> None:
    """Execute ``nu_correct`` and turn process errors into brick errors.

    The exit status is checked in both modes. In verbose mode the tool output
    goes straight to the console, so the error carries no captured text.
    """
    spec = tool.build_spec()
    if opt.flag_verbose:
        echo_command(settings.tool, list(spec.args))
    log.info("nu-correct.run", cmd=shlex.join(spec.args), verbose=opt.flag_verbose)

    try:
        tool.execute(engine, capture=not opt.flag_verbose, timeout=opt.timeout)
    except subprocess.TimeoutExpired as exc:
        log.error("nu-correct.timeout", timeout=exc.timeout)
        raise ExternalToolTimeout(exc.cmd, exc.timeout, _decode(exc.output)) from exc
    except subprocess.CalledProcessError as exc:
        log.error("nu-correct.failed", returncode=exc.returncode)
        raise ExternalToolFailure(exc.cmd, exc.returncode, _decode(exc.output)) from exc


def _compress(path: Path, settings: BrickSettings) -> Path:
    """Compress *path* in place and return the archive path."""
    cmd = [*shlex.split(settings.zip_cmd), str(path)]
    try:
        proc.run_cmd(cmd, capture=True)
    except subprocess.CalledProcessError as exc:
        raise ExternalToolFailure(exc.cmd, exc.returncode, _decode(exc.output)) from exc
    return path.with_name(path.name + settings.zip_ext)


def _move(src: Path, dst: Path) -> None:
    """Move *src* to *dst*; the destination folder must already exist."""
    shutil.move(str(src), str(dst))
    log.info("nu-correct.write", path=str(dst))


def _relocate(tool: NuCorrectTool, files_out: NuCorrectOutputs, settings: BrickSettings) -> None:
    """Move the requested scratch artifacts to their final destinations.

    Artifacts whose output is :data:`OMITTED` stay in the scratch folder and
    disappear with it.
    """
    if files_out.t1_nu is not OMITTED:
        target = Path(files_out.t1_nu)
        src = tool.scratch_nu
        if is_zipped(target, settings.zip_ext):
            src = _compress(src, settings)
        _move(src, target)

    if files_out.t1_imp is not OMITTED:
        _move(tool.scratch_imp, Path(files_out.t1_imp))


def nu_correct(
    files_in: Union[NuCorrectInputs, Mapping[str, Any], None],
    files_out: Union[NuCorrectOutputs, Mapping[str, Any], None] = None,
    opt: Union[NuCorrectOptions, Mapping[str, Any], None] = None,
    *,
    settings: Optional[BrickSettings] = None,
    engine: Optional[ExecutionEngine] = None,
) -> Tuple[NuCorrectInputs, NuCorrectOutputs, NuCorrectOptions]:
    """Run a non-uniformity correction on a T1 volume.

    Args:
        files_in: Input files, see the module docstring.
        files_out: Output files, see the module docstring.
        opt: Options, see the module docstring.
        settings: Process-wide settings; defaults to :class:`BrickSettings`.
        engine: Execution engine; defaults to the one named in *settings*.

    Returns:
        The three structures with defaults filled in.

    Raises:
        MissingArgumentError: If ``files_in.t1`` is absent.
        ExternalToolFailure: If ``nu_correct`` or the compression command
            exits with a non-zero status.
        ExternalToolTimeout: If ``opt.timeout`` elapses.
        OSError: On filesystem errors while moving outputs.
    """
    settings = settings or BrickSettings()
    files_in, files_out, opt = set_defaults(files_in, files_out, opt, settings)

    if opt.flag_test:
        return files_in, files_out, opt

    engine = engine or engine_from_settings(settings)

    if opt.flag_verbose:
        echo_banner(BANNER)

    scratch = make_scratch_dir(_scratch_label(files_in, files_out, settings), settings.tmp_dir)
    tool = NuCorrectTool(files_in, scratch, settings, opt.arg)
    try:
        _run_tool(tool, engine, opt, settings)
        _relocate(tool, files_out, settings)
    except BaseException:
        # Interrupts included; the original error is what the caller sees.
        discard_scratch(scratch, strict=False)
        raise
    discard_scratch(scratch)

    log.info("nu-correct.done", t1=str(files_in.t1))
    return files_in, files_out, opt
