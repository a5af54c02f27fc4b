"""Pytest configuration shared across test modules."""

from __future__ import annotations

import os
from typing import Any, Dict, Iterable, List, Optional, Sequence

import pytest

from p5setup.config import load_settings
from p5setup.prompts import CANCEL
from p5setup.storage import FileStorage
from p5setup.versions import DownloadResult

os.environ.setdefault("P5SETUP_LOG_LEVEL", "DEBUG")


class FakeFetcher:
    """In-memory stand-in for the jsDelivr fetcher."""

    def __init__(
        self,
        versions: Optional[List[str]] = None,
        latest: Optional[Dict[str, str]] = None,
        missing: Iterable[str] = (),
    ) -> None:
        self.versions = versions or ["2.0.5", "2.0.4", "1.11.10"]
        self.latest = latest or {"p5": "2.0.5", "@types/p5": "1.7.7"}
        self.missing = set(missing)
        self.downloads: List[str] = []

    def get_versions(self, package: Optional[str] = None) -> List[str]:
        return list(self.versions)

    def get_latest(self, package: Optional[str] = None) -> str:
        return self.latest[package or "p5"]

    def download(self, url: str) -> DownloadResult:
        self.downloads.append(url)
        if url in self.missing:
            return DownloadResult(ok=False, status_code=404)
        return DownloadResult(ok=True, status_code=200, content=f"// {url}".encode())


class ScriptedPrompter:
    """Prompter replaying a fixed list of answers in order."""

    def __init__(self, answers: Sequence[Any]) -> None:
        self.answers = list(answers)
        self.questions: List[str] = []
        self.messages: List[str] = []
        self.cancelled: List[str] = []

    def _next(self, question: str) -> Any:
        self.questions.append(question)
        return self.answers.pop(0)

    def intro(self, message: str) -> None:
        self.messages.append(message)

    def outro(self, message: str) -> None:
        self.messages.append(message)

    def note(self, message: str, title: str) -> None:
        self.messages.append(f"{title}: {message}")

    def cancel(self, message: str) -> None:
        self.cancelled.append(message)

    def is_cancel(self, value: Any) -> bool:
        return value is CANCEL

    def confirm(self, message: str) -> Any:
        return self._next(message)

    def confirm_change(self, message: str) -> Any:
        return self._next(message)

    def select_version(self, versions: Sequence[str], count: int = 15) -> Any:
        return self._next("version")

    def select_mode(self) -> Any:
        return self._next("mode")


@pytest.fixture()
def settings():
    """Default settings with no YAML overrides."""

    return load_settings(None)


@pytest.fixture()
def storage(tmp_path):
    """File storage rooted at a temporary project directory."""

    return FileStorage(tmp_path)


@pytest.fixture()
def fetcher():
    return FakeFetcher()
