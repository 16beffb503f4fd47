"""
Package-level logging configuration.

* Rich console output (colourised, nicely formatted).
* Rotating **JSON** log file when a log directory is known
  (``$NUBRICK_LOG_DIR`` or the ``log_dir`` argument).
* Optional plain-text mirror controlled via ``--save-logfile`` on the CLI.

The public helper :func:`setup_logging` wires everything and should be the
sole entry-point used by the CLI. Library code never configures logging.
"""

from __future__ import annotations

import atexit
import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional

import structlog
from rich.logging import RichHandler
from structlog.dev import ConsoleRenderer as StructlogConsoleRenderer
from structlog.stdlib import LoggerFactory

__all__ = ["setup_logging"]


# --------------------------------------------------------------------------- #
# Internal helpers – file-based handlers                                      #
# --------------------------------------------------------------------------- #
def _json_file_handler(log_dir: Path | None, level: int) -> logging.Handler | None:
    """Return a rotating *JSON* file handler or *None* without a log folder.

    Args:
        log_dir: Folder supplied by the caller; ``$NUBRICK_LOG_DIR`` wins.
        level: Log-level for the handler.

    Returns:
        Handler writing ``nubrick.log`` inside the resolved folder.
    """
    env_dir = os.environ.get("NUBRICK_LOG_DIR")
    if env_dir:
        logdir = Path(env_dir).expanduser()
    elif log_dir is not None:
        logdir = Path(log_dir).expanduser()
    else:
        return None
    logdir.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        filename=logdir / "nubrick.log",
        maxBytes=5_000_000,  # ~5 MB before rollover
        backupCount=3,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def _plain_text_file_handler(
    path: Optional[Path], level: int
) -> logging.Handler | None:
    """Return a plain-text file handler or *None* when *path* is *None*."""
    if path is None:
        return None

    path = path.expanduser().resolve()
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(path, encoding="utf-8", mode="a")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    atexit.register(handler.close)
    return handler


# --------------------------------------------------------------------------- #
# Public API                                                                  #
# --------------------------------------------------------------------------- #
def setup_logging(
    *,
    verbose: bool = False,
    debug: bool = False,
    log_dir: Path | None = None,
    extra_text_log: Optional[Path] = None,
) -> None:
    """Configure rich console logging and optional file mirrors.

    Args:
        verbose: Emit INFO-level messages to the console.
        debug: Emit DEBUG-level messages plus rich tracebacks.
        log_dir: Folder receiving the rotating JSON log.
        extra_text_log: Optional path for a plain-text mirror of console output.
    """
    console_lvl = (
        logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    )
    file_lvl = logging.DEBUG if debug else logging.INFO

    handlers: list[logging.Handler] = [
        RichHandler(
            level=console_lvl,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            markup=False,
        )
    ]

    json_handler = _json_file_handler(log_dir, file_lvl)
    if json_handler:
        handlers.append(json_handler)

    txt_handler = _plain_text_file_handler(extra_text_log, console_lvl)
    if txt_handler:
        handlers.append(txt_handler)

    # Root logger stays at DEBUG; handlers filter. force=True lets repeated
    # CLI invocations in one interpreter (tests) reconfigure cleanly.
    logging.basicConfig(
        level=logging.DEBUG,
        handlers=handlers,
        format="%(message)s",
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            (
                StructlogConsoleRenderer()
                if verbose or debug
                else structlog.processors.JSONRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            min(console_lvl, file_lvl) if json_handler else console_lvl
        ),
        logger_factory=LoggerFactory(),
    )
