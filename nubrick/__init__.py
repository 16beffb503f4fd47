"""
nubrick package initialisation.

Exposes the version string resolved from the installed distribution metadata
and re-exports the public brick and settings helpers so call-sites can do::

    from nubrick import nu_correct, load_settings
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str = version("nubrick")
except PackageNotFoundError:
    # Source tree without an installed wheel.
    __version__ = "0.0.0"

from .bricks import OMITTED, nu_correct  # noqa: E402
from .config import BrickSettings, load_settings  # noqa: E402
from .errors import ExternalToolFailure, ExternalToolTimeout, MissingArgumentError  # noqa: E402

__all__: list[str] = [
    "__version__",
    "OMITTED",
    "nu_correct",
    "BrickSettings",
    "load_settings",
    "MissingArgumentError",
    "ExternalToolFailure",
    "ExternalToolTimeout",
]
