"""File system access for the setup workflow.

All paths handed to :class:`FileStorage` are relative to its root, which is
normally the project directory holding ``index.html``. Deletions report
success as a boolean instead of raising, so callers can warn and continue.
"""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import Any, List, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class Storage(Protocol):
    """Port for reading and writing project files."""

    def read_text(self, path: str) -> str:
        ...

    def write_text(self, path: str, content: str) -> None:
        ...

    def write_bytes(self, path: str, content: bytes) -> None:
        ...

    def read_json(self, path: str) -> Any:
        ...

    def write_json(self, path: str, data: Any) -> None:
        ...

    def exists(self, path: str) -> bool:
        ...

    def list_dir(self, path: str) -> List[str]:
        ...

    def create_dir(self, path: str) -> None:
        ...

    def delete_file(self, path: str) -> bool:
        ...

    def delete_dir(self, path: str) -> bool:
        ...


class FileStorage:
    """Storage backed by a directory on disk."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def resolve(self, path: str) -> Path:
        return self.root / path

    def read_text(self, path: str) -> str:
        return self.resolve(path).read_text(encoding="utf-8")

    def write_text(self, path: str, content: str) -> None:
        target = self.resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")

    def write_bytes(self, path: str, content: bytes) -> None:
        target = self.resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)

    def read_json(self, path: str) -> Any:
        return json.loads(self.read_text(path))

    def write_json(self, path: str, data: Any) -> None:
        self.write_text(path, json.dumps(data, indent=2))

    def exists(self, path: str) -> bool:
        return self.resolve(path).exists()

    def list_dir(self, path: str) -> List[str]:
        target = self.resolve(path)
        if not target.is_dir():
            return []
        return sorted(entry.name for entry in target.iterdir())

    def create_dir(self, path: str) -> None:
        self.resolve(path).mkdir(parents=True, exist_ok=True)

    def delete_file(self, path: str) -> bool:
        try:
            self.resolve(path).unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not delete %s: %s", path, exc)
            return False
        return True

    def delete_dir(self, path: str) -> bool:
        target = self.resolve(path)
        if not target.exists():
            return True
        try:
            shutil.rmtree(target)
        except OSError as exc:
            logger.warning("Could not delete %s: %s", path, exc)
            return False
        return True
