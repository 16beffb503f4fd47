"""Expose the project-wide Click group for the ``nubrick-cli`` script.

The module:

* declares a single Click *group* called :pyfunc:`main`;
* wires common global flags (settings YAML, project root, verbosity, logs);
* sets up logging via :pyfunc:`nubrick.utils.logging.setup_logging`;
* loads the validated :class:`~nubrick.config.BrickSettings` once;
* registers every brick sub-command located in sibling modules.
"""

from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any, Dict

import click

from nubrick import __version__
from nubrick.config import load_settings
from nubrick.utils.logging import setup_logging


class LazyGroup(click.Group):
    """Click group that imports sub-commands lazily."""

    def __init__(self, *args, **kwargs):
        """Initialise the base class and prepare the lazy registry."""
        self._lazy: dict[str, str] = {}
        super().__init__(*args, **kwargs)

    def set_lazy_command(self, name: str, target: str) -> None:
        """Register *name* to be imported from ``target`` on first use."""
        self._lazy[name] = target

    def list_commands(self, ctx):  # noqa: D401 - Click signature
        """Return eager and lazy command names for the help screen."""
        return sorted({*super().list_commands(ctx), *self._lazy})

    def get_command(self, ctx, cmd_name):  # noqa: D401 - Click signature
        """Resolve *cmd_name* from the eager map or import table."""
        cmd = super().get_command(ctx, cmd_name)
        if cmd is not None:
            return cmd
        target = self._lazy.get(cmd_name)
        if not target:
            return None
        module_name, attr = target.split(":", 1)
        cmd = getattr(importlib.import_module(module_name), attr)
        self.add_command(cmd, name=cmd_name)
        return cmd


_CTX: Dict[str, Any] = dict(
    help_option_names=["-h", "--help"],
    show_default=True,
    max_content_width=120,
)


@click.group(
    cls=LazyGroup,
    context_settings=_CTX,
    help="""\b
nubrick-cli – wrappers around MINC correction tools.
""",
)
@click.version_option(__version__)
@click.option(
    "-c",
    "--config",
    type=click.Path(dir_okay=False, exists=True, path_type=Path),
    help="Settings YAML overriding the packaged defaults.",
)
@click.option(
    "-r",
    "--project-root",
    type=click.Path(file_okay=False, path_type=Path),
    help="Project folder searched for code/config/nu_correct.yaml.",
)
@click.option("-v", "--verbose", is_flag=True, help="INFO-level console output.")
@click.option("--debug", is_flag=True, help="DEBUG-level console output.")
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Write a rotating JSON log into this folder.",
)
@click.option(
    "--save-logfile",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Mirror console output into this plain-text file.",
)
@click.pass_context
def main(  # noqa: D401 – Click requires the callback to be named “main”.
    ctx: click.Context,
    config: Path | None,
    project_root: Path | None,
    verbose: bool,
    debug: bool,
    log_dir: Path | None,
    save_logfile: Path | None,
) -> None:
    """Root command executed by *nubrick-cli*.

    Raises:
        click.ClickException: When the settings file fails validation.
    """
    setup_logging(
        verbose=verbose,
        debug=debug,
        log_dir=log_dir,
        extra_text_log=save_logfile,
    )

    try:
        settings = load_settings(config, project_root=project_root)
    except RuntimeError as exc:
        raise click.ClickException(str(exc)) from exc

    ctx.obj = {
        "settings": settings,
        "verbose": verbose,
        "debug": debug,
    }


main.set_lazy_command("nu-correct", "nubrick.cli.nu_correct:cli")

cli = main
__all__: list[str] = ["main"]
