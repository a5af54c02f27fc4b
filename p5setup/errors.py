"""Error definitions for the setup workflow."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when settings or the project configuration record are invalid."""


class VersionFetchError(RuntimeError):
    """Raised when the version API cannot be reached or returns a bad payload."""


class SetupCancelled(Exception):
    """Raised when the user cancels an interactive prompt."""
