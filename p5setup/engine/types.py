"""Typed data structures used by the script reconciliation engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Provider(str, Enum):
    """Delivery channel encoded by a script reference."""

    JSDELIVR = "jsdelivr"
    CDNJS = "cdnjs"
    UNPKG = "unpkg"
    LOCAL = "local"


class DeliveryMode(str, Enum):
    """Where the library is loaded from."""

    CDN = "cdn"
    LOCAL = "local"


class Strategy(str, Enum):
    """Placement decision taken by a reconciliation call."""

    UPDATED_EXISTING = "updated-existing"
    REPLACED_MARKER = "replaced-marker"
    INSERTED_NEW = "inserted-new"
    NO_ANCHOR_AVAILABLE = "no-anchor-available"


LOCAL_VERSION = "local"

DEFAULT_PROVIDER = Provider.JSDELIVR


@dataclass(frozen=True)
class LibraryDescriptor:
    """Names that shape the reference templates for one client-side library."""

    package: str = "p5"
    cdnjs_name: str = "p5.js"
    dist_dir: str = "lib"
    stem: str = "p5"
    local_dir: str = "lib"
    marker: str = "P5JS_SCRIPT_TAG"
    types_package: str = "@types/p5"

    def filename(self, minified: bool) -> str:
        return f"{self.stem}.min.js" if minified else f"{self.stem}.js"


DEFAULT_LIBRARY = LibraryDescriptor()


@dataclass(frozen=True)
class ReferenceMatch:
    """Outcome of classifying a single reference string."""

    version: str
    minified: bool
    provider: Provider


@dataclass(frozen=True)
class Preferences:
    """Prior intent carried from an existing reference into a new one."""

    minified: bool = False
    provider: Optional[Provider] = None


@dataclass(frozen=True)
class ReconciliationOutcome:
    """Result of a single reconciliation call."""

    document: str
    changed: bool
    strategy: Strategy
    reference: Optional[str] = None

    @property
    def markup(self) -> str:
        return self.document
