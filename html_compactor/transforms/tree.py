"""Tree-walking transforms built on a parsed document.

Both transforms parse the input into a browser-like document first. A
parse failure is raised as :class:`MarkupParseError` so the caller can keep
the original markup and record a warning; nothing partial is returned.
"""

from __future__ import annotations

import html as html_lib

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from html_compactor.errors import MarkupParseError
from html_compactor.transforms.regex import MINIMAL_DOCUMENT
from html_compactor.utils.html import parse_document, serialize

_TEXT_NOISE_TAGS = ["script", "style", "noscript", "link"]
_STRUCTURE_NOISE_TAGS = ["script", "style", "noscript", "link", "meta", "svg"]

_HEADINGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})

_KEEP_ATTRIBUTES = frozenset({"id", "class", "href", "src", "alt", "type", "name", "value"})


def _parse(raw_html: str) -> BeautifulSoup:
    try:
        return parse_document(raw_html)
    except Exception as exc:
        raise MarkupParseError(f"Could not parse document: {exc}") from exc


# ---------------------------------------------------------------------------
# Text with structure markers
# ---------------------------------------------------------------------------
def _text_of(el: Tag) -> str:
    return el.get_text().strip()


def _walk_text(root: Tag) -> str:
    lines: list[str] = []
    # Document-order walk on an explicit stack; marked elements are not entered
    stack = list(reversed(list(root.children)))

    while stack:
        node = stack.pop()
        if isinstance(node, NavigableString):
            if isinstance(node, PreformattedString):
                continue
            text = node.strip()
            if text:
                lines.append(text)
            continue
        if not isinstance(node, Tag):
            continue

        tag = node.name.lower()
        if tag in _HEADINGS:
            lines.append(f"\n## {_text_of(node)}")
        elif tag == "li":
            lines.append(f"- {_text_of(node)}")
        elif tag == "a":
            lines.append(f"[{_text_of(node)}]({node.get('href') or '#'})")
        else:
            stack.extend(reversed(list(node.children)))

    return "\n".join(lines)


def extract_text(raw_html: str) -> str:
    """Reduce a document to its text, marking headings, list items and links.

    Headings become ``## text``, list items ``- text`` and links
    ``[text](href)``. Nesting is not indented. The result is wrapped in
    ``<pre>`` inside a bare document.
    """
    soup = _parse(raw_html)
    for el in soup.find_all(_TEXT_NOISE_TAGS):
        el.decompose()

    root = soup.body if soup.body is not None else soup
    text = _walk_text(root)
    return MINIMAL_DOCUMENT.format(body=f"<pre>{html_lib.escape(text, quote=False)}</pre>")


# ---------------------------------------------------------------------------
# Structure only
# ---------------------------------------------------------------------------
def _clean_attributes(element: Tag) -> None:
    for attr in list(element.attrs):
        if attr not in _KEEP_ATTRIBUTES and not attr.startswith("aria-"):
            del element[attr]
    src = element.get("src")
    if isinstance(src, str) and src.startswith("data:"):
        element["src"] = "[IMG]"


def _clean_tree(root: Tag) -> None:
    # Deepest elements first, so a dropped subtree is never revisited
    for element in reversed([root, *root.find_all(True)]):
        if element.name.lower() in _STRUCTURE_NOISE_TAGS:
            element.decompose()
        else:
            _clean_attributes(element)


def _document_shell(soup: BeautifulSoup) -> Tag:
    root = soup.new_tag("html")
    body = soup.new_tag("body")
    root.append(soup.new_tag("head"))
    root.append(body)
    for child in list(soup.contents):
        body.append(child.extract())
    soup.append(root)
    return root


def extract_structure(raw_html: str) -> str:
    """Keep the element tree, drop noise elements and most attributes.

    Only ``id``, ``class``, ``href``, ``src``, ``alt``, ``type``, ``name``,
    ``value`` and ``aria-*`` survive, and inline ``data:`` sources become
    ``[IMG]``. Input the parser leaves without a root, such as an empty
    string, still comes back as an ``html``/``head``/``body`` document.
    """
    soup = _parse(raw_html)
    root = soup.html
    if root is None:
        root = _document_shell(soup)

    _clean_tree(root)
    return serialize(root)
