"""Settings helpers for the setup tool."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict

import yaml

from .engine.types import LibraryDescriptor
from .errors import ConfigurationError


@dataclass(frozen=True)
class SetupSettings:
    """Typed wrapper around the settings dictionary."""

    raw: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.raw.get(key, default)

    @property
    def project_dir(self) -> Path:
        return Path(self.raw["project_dir"])

    @property
    def library(self) -> LibraryDescriptor:
        options = self.raw.get("library", {})
        known = {item.name for item in fields(LibraryDescriptor)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ConfigurationError(f"Unknown library settings: {', '.join(unknown)}")
        return LibraryDescriptor(**{key: str(value) for key, value in options.items()})


DEFAULTS: Dict[str, Any] = {
    "project_dir": "sketch",
    "html_file": "index.html",
    "config_file": "p5-config.json",
    "types_file": "types/global.d.ts",
    "version_choices": 15,
    "api_base_url": "https://data.jsdelivr.com/v1/package/npm",
    "http_timeout": 15,
    "library": {},
}


def load_settings(path: str | Path | None = None) -> SetupSettings:
    """Load settings from YAML, merging with defaults."""

    data: Dict[str, Any] = DEFAULTS.copy()
    data["library"] = dict(DEFAULTS["library"])

    if path is not None and Path(path).exists():
        with Path(path).open("r", encoding="utf-8") as stream:
            try:
                user = yaml.safe_load(stream) or {}
            except yaml.YAMLError as exc:
                raise ConfigurationError(f"Invalid settings file {path}: {exc}") from exc
        if not isinstance(user, dict):
            raise ConfigurationError(f"Settings file {path} must contain a mapping")
        merge_into(data, user)

    return SetupSettings(data)


def merge_into(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Recursively merge override into base dict."""

    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_into(base[key], value)
        else:
            base[key] = value
