"""Entry-point for ``nubrick-cli nu-correct``."""

from __future__ import annotations

import json
from pathlib import Path

import click
import structlog

from nubrick.bricks.nu_correct import OMITTED, describe, nu_correct
from nubrick.errors import NuBrickError
from nubrick.utils.display import echo_success

log = structlog.get_logger()


def _output(path: Path | None, skip: bool, name: str):
    """Map a ``--x`` / ``--no-x`` option pair onto the three-way field value."""
    if path is not None and skip:
        raise click.UsageError(f"--{name} and --no-{name} are mutually exclusive")
    return OMITTED if skip else path


@click.command("nu-correct")
@click.argument("t1", type=click.Path(dir_okay=False, path_type=Path))
@click.option("-m", "--mask", type=click.Path(dir_okay=False, path_type=Path), help="Binary mask of a region of interest.")
@click.option("--t1-nu", type=click.Path(dir_okay=False, path_type=Path), help="Corrected volume [default: <T1>_nu.<ext>].")
@click.option("--no-t1-nu", is_flag=True, help="Do not save the corrected volume.")
@click.option("--t1-imp", type=click.Path(dir_okay=False, path_type=Path), help="Intensity mapping [default: <T1>_nu.imp].")
@click.option("--no-t1-imp", is_flag=True, help="Do not save the intensity mapping.")
@click.option("--arg", default="", help="Extra arguments passed verbatim to nu_correct.")
@click.option(
    "-o",
    "--folder-out",
    type=click.Path(file_okay=False, path_type=Path),
    help="Folder for default outputs [default: folder of T1].",
)
@click.option("--test", "flag_test", is_flag=True, help="Print the resolved file names as JSON and exit.")
@click.option("-q", "--quiet", is_flag=True, help="Capture the tool output instead of streaming it.")
@click.option("--timeout", type=click.FloatRange(min=0, min_open=True), help="Kill the tool after this many seconds.")
@click.option("--engine", type=click.Choice(["local", "docker"]), help="Override the execution engine.")
@click.option("--image", help="Container image for the docker engine.")
@click.pass_obj
def cli(
    ctx_obj,
    t1: Path,
    mask: Path | None,
    t1_nu: Path | None,
    no_t1_nu: bool,
    t1_imp: Path | None,
    no_t1_imp: bool,
    arg: str,
    folder_out: Path | None,
    flag_test: bool,
    quiet: bool,
    timeout: float | None,
    engine: str | None,
    image: str | None,
) -> None:
    """Non-uniformity correction (N3) of the T1 volume T1."""
    settings = ctx_obj["settings"]
    overrides = {k: v for k, v in {"engine": engine, "image": image}.items() if v is not None}
    if overrides:
        settings = settings.model_copy(update=overrides)
    if settings.engine == "docker" and not settings.image:
        raise click.UsageError("the docker engine needs --image or 'image' in the settings YAML")

    files_in = {"t1": t1, "mask": mask}
    files_out = {
        "t1_nu": _output(t1_nu, no_t1_nu, "t1-nu"),
        "t1_imp": _output(t1_imp, no_t1_imp, "t1-imp"),
    }
    opt = {
        "arg": arg,
        "flag_verbose": not quiet,
        "flag_test": flag_test,
        "folder_out": folder_out,
        "timeout": timeout,
    }

    try:
        files_in, files_out, opt = nu_correct(files_in, files_out, opt, settings=settings)
    except NuBrickError as exc:
        raise click.ClickException(str(exc)) from exc

    if flag_test:
        click.echo(json.dumps(describe(files_in, files_out, opt), indent=2))
        return

    for label, path in (("corrected volume", files_out.t1_nu), ("intensity mapping", files_out.t1_imp)):
        if path is not OMITTED:
            echo_success(f"{label}: {path}")


__all__ = ["cli"]
