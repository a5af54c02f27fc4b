"""Anchor discovery within a parsed document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from bs4 import Comment, Tag  # type: ignore

from .document import DocumentAdapter
from .patterns import ReferencePatternCatalog
from .types import DeliveryMode, Preferences, ReferenceMatch


@dataclass(frozen=True)
class ScriptAnchor:
    """Existing ``<script>`` element carrying a recognized reference."""

    node: Tag
    match: ReferenceMatch

    def preferences(self, mode: DeliveryMode) -> Preferences:
        """Derive prior intent; the provider only survives into CDN delivery."""

        provider = self.match.provider if mode is DeliveryMode.CDN else None
        return Preferences(minified=self.match.minified, provider=provider)


@dataclass(frozen=True)
class MarkerAnchor:
    """Placeholder comment waiting to be replaced by a reference."""

    node: Comment


def find_script_anchor(
    document: DocumentAdapter,
    catalog: ReferencePatternCatalog,
) -> Optional[ScriptAnchor]:
    """Return the first script in document order whose ``src`` classifies."""

    for script in document.scripts():
        src = script.get('src')
        if not isinstance(src, str):
            continue
        match = catalog.classify(src)
        if match is not None:
            return ScriptAnchor(node=script, match=match)
    return None


def find_marker_anchor(document: DocumentAdapter, token: str) -> Optional[MarkerAnchor]:
    """Return the marker comment inside ``<head>``, matched exactly after trimming."""

    comment = document.find_comment(token)
    if comment is None:
        return None
    return MarkerAnchor(node=comment)
