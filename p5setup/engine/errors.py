"""Exceptions raised by the reconciliation engine."""

from __future__ import annotations


class InvalidInput(TypeError):
    """Raised when a reference candidate is not a string."""
