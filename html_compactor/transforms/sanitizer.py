"""Allow-list markup sanitizer.

Walks a BeautifulSoup tree and keeps only the tags, attributes and URL
schemes a :class:`SanitizerProfile` allows. A disallowed tag is unwrapped,
so its text and any allowed descendants stay in place. Tags whose content
is not text (scripts, styles, ...) are dropped together with that content.

This is best-effort size reduction, not a security boundary.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from fnmatch import fnmatchcase

from bs4 import BeautifulSoup, Tag
from bs4.element import PreformattedString

from html_compactor.utils.html import parse_fragment, serialize

# Dropped with their content when not allowed
_NON_TEXT_TAGS = frozenset({"script", "style", "noscript", "textarea", "option"})
# Attributes whose value is a URL and gets a scheme check
_URL_ATTRIBUTES = frozenset({"href", "src", "cite", "action"})

_RE_SCHEME = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.\-]*):")
# Control characters and whitespace browsers ignore inside a scheme
_RE_URL_NOISE = re.compile(r"[\x00-\x20\x7f]+")


@dataclass(frozen=True)
class SanitizerProfile:
    name: str
    allowed_tags: frozenset[str]
    allowed_attributes: dict[str, tuple[str, ...]]
    allowed_schemes: frozenset[str]
    allowed_schemes_by_tag: dict[str, frozenset[str]] = field(default_factory=dict)

    def attribute_allowed(self, tag: str, attr: str) -> bool:
        patterns = self.allowed_attributes.get(tag, ()) + self.allowed_attributes.get("*", ())
        return any(fnmatchcase(attr, pattern) for pattern in patterns)

    def schemes_for(self, tag: str) -> frozenset[str]:
        return self.allowed_schemes_by_tag.get(tag, self.allowed_schemes)


LENIENT = SanitizerProfile(
    name="sanitize",
    allowed_tags=frozenset({
        "html", "head", "body", "title", "meta",
        "div", "span", "p", "a", "img", "br", "hr",
        "h1", "h2", "h3", "h4", "h5", "h6",
        "ul", "ol", "li", "dl", "dt", "dd",
        "table", "thead", "tbody", "tr", "th", "td",
        "form", "input", "button", "select", "option", "textarea", "label",
        "header", "footer", "nav", "main", "section", "article", "aside",
        "strong", "em", "b", "i", "u", "small", "mark", "code", "pre",
        "blockquote", "figure", "figcaption", "video", "audio", "source",
    }),
    allowed_attributes={
        "*": ("id", "class", "title", "role", "aria-*", "data-*"),
        "a": ("href", "target", "rel"),
        "img": ("src", "alt", "width", "height"),
        "input": ("type", "name", "value", "placeholder", "required", "disabled"),
        "button": ("type", "name", "value", "disabled"),
        "select": ("name", "required", "disabled"),
        "option": ("value", "selected"),
        "textarea": ("name", "placeholder", "required", "disabled", "rows", "cols"),
        "form": ("action", "method"),
        "meta": ("charset", "name", "content"),
        "video": ("src", "controls", "width", "height"),
        "audio": ("src", "controls"),
        "source": ("src", "type"),
    },
    allowed_schemes=frozenset({"http", "https", "mailto", "tel"}),
    allowed_schemes_by_tag={"img": frozenset({"http", "https", "data"})},
)

STRICT = SanitizerProfile(
    name="sanitize-strict",
    allowed_tags=frozenset({
        "html", "head", "body", "title",
        "div", "span", "p", "a", "br",
        "h1", "h2", "h3", "h4", "h5", "h6",
        "ul", "ol", "li",
        "table", "tr", "th", "td",
        "strong", "em", "b", "i",
        "header", "footer", "nav", "main", "section",
    }),
    allowed_attributes={
        "*": ("id", "class"),
        "a": ("href",),
    },
    allowed_schemes=frozenset({"http", "https"}),
)


def _url_allowed(value: str, schemes: frozenset[str]) -> bool:
    cleaned = _RE_URL_NOISE.sub("", value)
    if cleaned.startswith("//"):
        return "http" in schemes or "https" in schemes
    match = _RE_SCHEME.match(cleaned)
    if match is None:
        # Relative URL, fragment or query
        return True
    return match.group(1).lower() in schemes


def _filter_attributes(tag: Tag, profile: SanitizerProfile) -> None:
    name = tag.name.lower()
    for attr in list(tag.attrs):
        key = attr.lower()
        if not profile.attribute_allowed(name, key):
            del tag[attr]
            continue
        if key in _URL_ATTRIBUTES:
            value = tag.get(attr)
            if isinstance(value, list):
                value = " ".join(value)
            if value and not _url_allowed(value, profile.schemes_for(name)):
                del tag[attr]


def _filter_tree(root: BeautifulSoup, profile: SanitizerProfile) -> None:
    # Reverse document order: every node is handled before its ancestors
    # are unwrapped or dropped, without recursing into the tree
    for node in reversed(list(root.descendants)):
        if not isinstance(node, Tag):
            # Comments, doctypes, CDATA and processing instructions
            if isinstance(node, PreformattedString):
                node.extract()
            continue

        name = node.name.lower()
        if name not in profile.allowed_tags:
            if name in _NON_TEXT_TAGS:
                node.decompose()
            else:
                node.unwrap()
            continue

        _filter_attributes(node, profile)


def sanitize(html: str, profile: SanitizerProfile = LENIENT) -> str:
    """Filter ``html`` down to what ``profile`` allows."""
    soup: BeautifulSoup = parse_fragment(html)
    _filter_tree(soup, profile)
    return serialize(soup)


def sanitize_lenient(html: str) -> str:
    return sanitize(html, LENIENT)


def sanitize_strict(html: str) -> str:
    return sanitize(html, STRICT)
