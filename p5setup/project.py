"""Persistence of the project configuration record."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .engine.types import DeliveryMode
from .errors import ConfigurationError
from .storage import Storage

DEFAULT_CONFIG_FILE = "p5-config.json"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class ProjectConfig:
    """Library version and delivery mode currently wired into the project."""

    version: str
    mode: DeliveryMode
    type_defs_version: Optional[str] = None
    last_updated: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "mode": self.mode.value,
            "typeDefsVersion": self.type_defs_version,
            "lastUpdated": self.last_updated,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectConfig":
        try:
            return cls(
                version=str(data["version"]),
                mode=DeliveryMode(data.get("mode", DeliveryMode.CDN.value)),
                type_defs_version=data.get("typeDefsVersion"),
                last_updated=data.get("lastUpdated"),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid configuration record: {exc}") from exc


class ConfigManager:
    """Loads and saves the configuration record through a :class:`Storage`."""

    def __init__(self, storage: Storage, config_path: str = DEFAULT_CONFIG_FILE) -> None:
        self.storage = storage
        self.config_path = config_path

    def load(self) -> Optional[ProjectConfig]:
        """Return the stored record, or ``None`` when the project has none yet."""

        if not self.storage.exists(self.config_path):
            return None
        try:
            data = self.storage.read_json(self.config_path)
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigurationError(f"Could not read {self.config_path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f"{self.config_path} must contain a JSON object")
        return ProjectConfig.from_dict(data)

    def save(
        self,
        version: str,
        mode: DeliveryMode | str = DeliveryMode.CDN,
        type_defs_version: Optional[str] = None,
    ) -> ProjectConfig:
        config = ProjectConfig(
            version=version,
            mode=DeliveryMode(mode),
            type_defs_version=type_defs_version,
            last_updated=_now(),
        )
        self.storage.write_json(self.config_path, config.to_dict())
        return config

    def default(self) -> ProjectConfig:
        return ProjectConfig(version="latest", mode=DeliveryMode.CDN, last_updated=_now())
