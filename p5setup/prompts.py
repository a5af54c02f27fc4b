"""User interaction for the setup workflow.

Prompt methods return the chosen value, or :data:`CANCEL` when the user
backs out. Callers check with ``is_cancel`` before using the value.
"""

from __future__ import annotations

import sys
from typing import Any, List, Optional, Protocol, Sequence, TextIO, Tuple, runtime_checkable

from .engine.types import DeliveryMode


class _Cancel:
    def __repr__(self) -> str:
        return "CANCEL"


CANCEL: Any = _Cancel()

CHANGE_VERSION_PROMPT = "Do you want to change the version?"


@runtime_checkable
class Prompter(Protocol):
    """Port for every interaction with the person running the setup."""

    def intro(self, message: str) -> None:
        ...

    def outro(self, message: str) -> None:
        ...

    def note(self, message: str, title: str) -> None:
        ...

    def cancel(self, message: str) -> None:
        ...

    def is_cancel(self, value: Any) -> bool:
        ...

    def confirm(self, message: str) -> Any:
        ...

    def confirm_change(self, message: str) -> Any:
        ...

    def select_version(self, versions: Sequence[str], count: int = 15) -> Any:
        ...

    def select_mode(self) -> Any:
        ...


class ConsolePrompter:
    """Line-based prompts on a terminal. EOF or Ctrl+C cancels."""

    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        package: str = "p5",
        local_dir: str = "lib",
    ) -> None:
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.package = package
        self.local_dir = local_dir

    def _write(self, text: str) -> None:
        self.stdout.write(text + "\n")
        self.stdout.flush()

    def _ask(self, question: str) -> Any:
        self.stdout.write(question)
        self.stdout.flush()
        try:
            line = self.stdin.readline()
        except KeyboardInterrupt:
            return CANCEL
        if not line:
            return CANCEL
        return line.strip()

    def intro(self, message: str) -> None:
        self._write(f"┌  {message}")

    def outro(self, message: str) -> None:
        self._write(f"└  {message}")

    def note(self, message: str, title: str) -> None:
        self._write(f"◇  {title}")
        for line in message.splitlines():
            self._write(f"│  {line}")

    def cancel(self, message: str) -> None:
        self._write(f"■  {message}")

    def is_cancel(self, value: Any) -> bool:
        return value is CANCEL

    def confirm(self, message: str) -> Any:
        while True:
            answer = self._ask(f"{message} [y/N] ")
            if answer is CANCEL:
                return CANCEL
            if answer.lower() in ("y", "yes"):
                return True
            if answer.lower() in ("", "n", "no"):
                return False
            self._write("Please answer y or n.")

    def confirm_change(self, message: str) -> Any:
        return self.confirm(message)

    def select(self, message: str, options: Sequence[Tuple[Any, str]]) -> Any:
        """Ask for one of ``options`` (value, label) by number; blank picks the first."""

        if not options:
            return CANCEL
        self._write(message)
        for index, (_, label) in enumerate(options, start=1):
            self._write(f"  {index}) {label}")
        while True:
            answer = self._ask(f"Choice [1-{len(options)}]: ")
            if answer is CANCEL:
                return CANCEL
            if not answer:
                return options[0][0]
            if answer.isdigit() and 1 <= int(answer) <= len(options):
                return options[int(answer) - 1][0]
            self._write("Invalid choice.")

    def select_version(self, versions: Sequence[str], count: int = 15) -> Any:
        shown: List[Tuple[Any, str]] = [(version, version) for version in list(versions)[:count]]
        return self.select(f"Select {self.package} version:", shown)

    def select_mode(self) -> Any:
        return self.select(
            "Choose delivery mode:",
            [
                (DeliveryMode.CDN.value, "CDN (jsdelivr)"),
                (DeliveryMode.LOCAL.value, f"Local (download to {self.local_dir}/)"),
            ],
        )


class PresetPrompter:
    """Answers every prompt from values supplied up front.

    Used for non-interactive runs. Changing an existing configuration is
    always confirmed; other confirmations answer ``assume_yes``. The
    version prompt returns the preset version even when it is not among
    the listed versions.
    """

    def __init__(self, version: str, mode: DeliveryMode | str, *, assume_yes: bool = False) -> None:
        self.version = version
        self.mode = DeliveryMode(mode).value
        self.assume_yes = assume_yes
        self.messages: List[str] = []

    def intro(self, message: str) -> None:
        self.messages.append(message)

    def outro(self, message: str) -> None:
        self.messages.append(message)

    def note(self, message: str, title: str) -> None:
        self.messages.append(f"{title}: {message}")

    def cancel(self, message: str) -> None:
        self.messages.append(message)

    def is_cancel(self, value: Any) -> bool:
        return value is CANCEL

    def confirm(self, message: str) -> Any:
        return self.assume_yes

    def confirm_change(self, message: str) -> Any:
        return True

    def select_version(self, versions: Sequence[str], count: int = 15) -> Any:
        return self.version

    def select_mode(self) -> Any:
        return self.mode
