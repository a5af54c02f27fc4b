"""Shared helpers for reconciliation engine tests."""

from __future__ import annotations

from bs4 import BeautifulSoup, Comment  # type: ignore

MARKER = "<!-- P5JS_SCRIPT_TAG -->"


def make_document(head: str | None = "", body: str = "<main></main>") -> str:
    """Return an HTML page; ``head=None`` leaves out the ``<head>`` element."""

    head_markup = "" if head is None else f"<head>{head}</head>"
    return f"<!DOCTYPE html>\n<html>{head_markup}<body>{body}</body></html>"


def script_sources(markup: str) -> list[str]:
    soup = BeautifulSoup(markup, "html.parser")
    return [tag.get("src") for tag in soup.find_all("script") if tag.get("src")]


def head_children(markup: str) -> list:
    soup = BeautifulSoup(markup, "html.parser")
    return soup.head.find_all(True, recursive=False)


def comments(markup: str) -> list[str]:
    soup = BeautifulSoup(markup, "html.parser")
    return [node.strip() for node in soup.find_all(string=lambda text: isinstance(text, Comment))]
