"""Classification of script references against known URL shapes.

Each rule in the catalog pairs a provider with the fully anchored shape of
the references that provider serves. Rules are tried in a fixed order and
the first match wins, so classification never depends on the content
being classified.

The local rules always come after every CDN rule. A project that nests a
CDN-looking path under its local directory must still classify as the
CDN it names, never as a local copy.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterator, Optional, Tuple

from .errors import InvalidInput
from .types import DEFAULT_LIBRARY, LOCAL_VERSION, LibraryDescriptor, Provider, ReferenceMatch

_SCHEME = r"https?://"
_VERSION = r"(?P<version>[^/]+?)"
_MINIFIED = r"(?P<min>min\.)?"
_LOCAL_PREFIX = r"(?:\./)?"


@dataclass(frozen=True)
class ReferencePattern:
    """A single provider shape with its compiled matcher."""

    provider: Provider
    regex: re.Pattern[str]

    def match(self, value: str) -> Optional[ReferenceMatch]:
        found = self.regex.fullmatch(value)
        if found is None:
            return None
        groups = found.groupdict()
        return ReferenceMatch(
            version=groups.get("version") or LOCAL_VERSION,
            minified=bool(groups.get("min")),
            provider=self.provider,
        )


class ReferencePatternCatalog:
    """Ordered set of reference shapes for one library."""

    def __init__(self, patterns: Tuple[ReferencePattern, ...]) -> None:
        self.patterns = patterns

    def __iter__(self) -> Iterator[ReferencePattern]:
        return iter(self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)

    def classify(self, value: object) -> Optional[ReferenceMatch]:
        """Return the match from the first rule accepting ``value``, if any."""

        if not isinstance(value, str):
            raise InvalidInput(f"Reference must be a string, got {type(value).__name__}")
        candidate = value.strip()
        if not candidate:
            return None
        for pattern in self.patterns:
            match = pattern.match(candidate)
            if match is not None:
                return match
        return None


def _pattern(provider: Provider, expression: str) -> ReferencePattern:
    return ReferencePattern(provider=provider, regex=re.compile(expression))


@lru_cache(maxsize=16)
def build_catalog(library: LibraryDescriptor = DEFAULT_LIBRARY) -> ReferencePatternCatalog:
    """Compile the reference shapes for ``library`` in priority order."""

    package = re.escape(library.package)
    cdnjs_name = re.escape(library.cdnjs_name)
    dist_dir = re.escape(library.dist_dir)
    stem = re.escape(library.stem)
    local_dir = re.escape(library.local_dir)
    artifact = rf"{stem}\.{_MINIFIED}js"

    return ReferencePatternCatalog(
        (
            _pattern(
                Provider.JSDELIVR,
                rf"{_SCHEME}cdn\.jsdelivr\.net/npm/{package}@{_VERSION}/{dist_dir}/{artifact}",
            ),
            _pattern(
                Provider.CDNJS,
                rf"{_SCHEME}cdnjs\.cloudflare\.com/ajax/libs/{cdnjs_name}/{_VERSION}/{artifact}",
            ),
            _pattern(
                Provider.UNPKG,
                rf"{_SCHEME}unpkg\.com/{package}@{_VERSION}/{dist_dir}/{artifact}",
            ),
            # Local rules last: see module docstring.
            _pattern(Provider.LOCAL, rf"{_LOCAL_PREFIX}{local_dir}/{artifact}"),
            _pattern(
                Provider.LOCAL,
                rf"{_LOCAL_PREFIX}{local_dir}/{package}@{_VERSION}\.{_MINIFIED}js",
            ),
        )
    )


def classify_reference(
    value: object,
    library: LibraryDescriptor = DEFAULT_LIBRARY,
) -> Optional[ReferenceMatch]:
    """Classify ``value`` using the catalog for ``library``."""

    return build_catalog(library).classify(value)
