"""
Configuration package façade.

* :func:`load_settings` – locate, parse and validate the settings YAML.
* :class:`BrickSettings` – Pydantic model holding the validated values.
"""

from .loader import load_settings, resolve_settings_path  # noqa: F401
from .schema import BrickSettings  # noqa: F401

__all__: list[str] = ["load_settings", "resolve_settings_path", "BrickSettings"]
