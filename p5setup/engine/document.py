"""Thin wrapper around BeautifulSoup for the reconciliation engine."""

from __future__ import annotations

from typing import Iterator, List, Optional

from bs4 import BeautifulSoup, Comment, Tag  # type: ignore
from bs4.element import PageElement  # type: ignore

DOCTYPE = "<!DOCTYPE html>\n"


class DocumentAdapter:
    """Parsed HTML document exposing the handful of operations the engine needs."""

    def __init__(self, markup: str) -> None:
        try:
            self.soup = BeautifulSoup(markup, 'lxml')
        except Exception:
            # Fallback to html.parser if lxml isn't installed
            self.soup = BeautifulSoup(markup, 'html.parser')

    @property
    def head(self) -> Optional[Tag]:
        head = self.soup.find('head')
        return head if isinstance(head, Tag) else None

    def scripts(self) -> List[Tag]:
        """Return ``<script>`` elements in document order."""

        return [tag for tag in self.soup.find_all('script') if isinstance(tag, Tag)]

    def find_comment(self, token: str, container: Optional[Tag] = None) -> Optional[Comment]:
        """Return the first comment under ``container`` whose trimmed text is ``token``."""

        root = container if container is not None else self.head
        if root is None:
            return None
        for node in _walk(root):
            if isinstance(node, Comment) and node.strip() == token:
                return node
        return None

    def new_script(self, src: str) -> Tag:
        return self.soup.new_tag('script', src=src)

    def insert_first(self, container: Tag, node: Tag) -> None:
        container.insert(0, node)

    def replace(self, old: PageElement, new: PageElement) -> None:
        old.replace_with(new)

    def serialize(self) -> str:
        root = self.soup.find('html')
        if root is None:
            return DOCTYPE + str(self.soup)
        return DOCTYPE + str(root)


def _walk(node: PageElement) -> Iterator[PageElement]:
    """Yield ``node``'s descendants depth-first, in document order."""

    for child in getattr(node, 'contents', []):
        yield child
        yield from _walk(child)
