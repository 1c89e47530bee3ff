"""YAML loader and validation for reporter settings."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml
from jsonschema import Draft7Validator

from testreporter.publish import LatestResultMode
from testreporter.reporting import ReportFormat

from .models import ReporterSettings


def load_settings(path: str) -> ReporterSettings:
    """Load and validate a settings file."""
    settings_path = Path(path).expanduser().resolve()
    raw = yaml.safe_load(settings_path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, Mapping):
        raise ValueError("Settings file must contain a mapping at the top level")
    return parse_settings(raw, settings_path.parent)


def parse_settings(raw: Mapping[str, Any], base: Path) -> ReporterSettings:
    errors = sorted(_validator.iter_errors(dict(raw)), key=lambda e: list(e.path))
    if errors:
        messages = "; ".join(f"{'/'.join(map(str, err.path)) or 'root'}: {err.message}" for err in errors)
        raise ValueError(f"Settings schema validation failed: {messages}")
    defaults = ReporterSettings()
    output_dir = Path(raw["output_dir"]).expanduser()
    if not output_dir.is_absolute():
        output_dir = base / output_dir
    formats = defaults.formats
    if "formats" in raw:
        formats = tuple(ReportFormat.parse(name) for name in raw["formats"])
        if len(set(formats)) != len(formats):
            raise ValueError(f"formats lists the same report format twice: {list(raw['formats'])}")
    latest_mode = defaults.latest_mode
    if "latest" in raw:
        latest_mode = LatestResultMode.parse(raw["latest"])
    return ReporterSettings(
        output_dir=output_dir,
        formats=formats,
        latest_mode=latest_mode,
        color=bool(raw.get("color", defaults.color)),
    )


SETTINGS_SCHEMA = {
    "type": "object",
    "required": ["output_dir"],
    "additionalProperties": False,
    "properties": {
        "output_dir": {"type": "string", "minLength": 1},
        "formats": {"type": "array", "minItems": 1, "items": {"type": "string"}},
        "latest": {"type": "string"},
        "color": {"type": "boolean"},
    },
}
_validator = Draft7Validator(SETTINGS_SCHEMA)
