"""BeautifulSoup helpers shared by the tree-based transforms."""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from html_compactor.config import settings

# Builder that keeps fragments as written (no html/head/body wrappers)
FRAGMENT_PARSER = "html.parser"


def parse_document(raw_html: str, *, parser: str | None = None) -> BeautifulSoup:
    """Parse a full document the way a browser would, wrappers included."""
    return BeautifulSoup(raw_html, parser or settings.tree_parser)


def parse_fragment(raw_html: str) -> BeautifulSoup:
    """Parse markup without adding any structure that was not in the input."""
    return BeautifulSoup(raw_html, FRAGMENT_PARSER)


def serialize(node: BeautifulSoup | Tag) -> str:
    return str(node)
