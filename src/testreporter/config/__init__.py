"""Reporter settings and their YAML loader."""

from .loader import load_settings, parse_settings
from .models import ReporterSettings

__all__ = [
    "ReporterSettings",
    "load_settings",
    "parse_settings",
]
