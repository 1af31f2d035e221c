"""Regex-based HTML rewrites.

Every function here is ``str -> str``. None of them parse the markup, so
malformed input just means a pattern does not match; they never raise.
"""

from __future__ import annotations

import itertools
import re
from functools import reduce
from typing import Callable

# Comments, except IE conditional comments
_RE_COMMENT = re.compile(r"<!--(?!\[if)[\s\S]*?-->", flags=re.IGNORECASE)
_RE_INTER_TAG_WS = re.compile(r">\s+<")
_RE_WS_RUN = re.compile(r"\s{2,}")
_RE_WS_AROUND_EQ = re.compile(r"\s*=\s*")

_RE_IMG_SRC = re.compile(
    r"""src=["']data:image/[^;]+;base64,[^"']+["']""", flags=re.IGNORECASE
)
_RE_CSS_IMG_URL = re.compile(
    r"""url\(["']?data:image/[^;]+;base64,[^)"']+["']?\)""", flags=re.IGNORECASE
)
_RE_IMG_SRCSET = re.compile(
    r"""srcset=["'][^"']*data:image/[^;]+;base64,[^"']+["']""", flags=re.IGNORECASE
)
# Fonts and anything else inlined through url(data:...)
_RE_CSS_DATA_URL = re.compile(r"""url\(["']?data:[^)]+["']?\)""", flags=re.IGNORECASE)

_RE_STYLE_ATTR = re.compile(r"""\s+style=["'][^"']*["']""", flags=re.IGNORECASE)
_RE_STYLE_BLOCK = re.compile(r"<style[^>]*>[\s\S]*?</style>", flags=re.IGNORECASE)
_RE_ID_ATTR = re.compile(r"""\s+id=["'][^"']*["']""", flags=re.IGNORECASE)

_RE_BODY = re.compile(r"<body[^>]*>([\s\S]*?)</body>", flags=re.IGNORECASE)
_RE_SCRIPT = re.compile(r"<script[^>]*>[\s\S]*?</script>", flags=re.IGNORECASE)
_RE_NOSCRIPT = re.compile(r"<noscript[^>]*>[\s\S]*?</noscript>", flags=re.IGNORECASE)
_RE_LINK = re.compile(r"<link[^>]*>", flags=re.IGNORECASE)
_RE_META = re.compile(r"<meta[^>]*>", flags=re.IGNORECASE)
_RE_SVG = re.compile(r"<svg[^>]*>[\s\S]*?</svg>", flags=re.IGNORECASE)

MINIMAL_DOCUMENT = (
    '<!DOCTYPE html><html><head><meta charset="UTF-8"></head><body>{body}</body></html>'
)


def minify(html: str) -> str:
    """Drop comments and collapse whitespace.

    Comments go first so a removed comment cannot leave a whitespace gap
    behind that the later passes would only half collapse.
    """
    result = _RE_COMMENT.sub("", html)
    result = _RE_INTER_TAG_WS.sub("><", result)
    result = _RE_WS_RUN.sub(" ", result)
    result = _RE_WS_AROUND_EQ.sub("=", result)
    return result.strip()


def strip_base64(html: str) -> str:
    """Replace inlined base64 payloads with numbered placeholders.

    Images become ``[IMG_n]`` and other ``url(data:...)`` payloads become
    ``[DATA_n]``. Numbering starts at 1 on every call and runs across all
    four passes.
    """
    counter = itertools.count(1)

    result = _RE_IMG_SRC.sub(lambda _m: f'src="[IMG_{next(counter)}]"', html)
    result = _RE_CSS_IMG_URL.sub(lambda _m: f"url([IMG_{next(counter)}])", result)
    result = _RE_IMG_SRCSET.sub(lambda _m: f'srcset="[IMG_{next(counter)}]"', result)
    result = _RE_CSS_DATA_URL.sub(lambda _m: f"url([DATA_{next(counter)}])", result)
    return result


def strip_styles(html: str) -> str:
    """Remove ``style`` attributes and ``<style>`` blocks."""
    result = _RE_STYLE_ATTR.sub("", html)
    return _RE_STYLE_BLOCK.sub("", result)


def strip_ids(html: str) -> str:
    """Remove ``id`` attributes."""
    return _RE_ID_ATTR.sub("", html)


def extract_body(html: str) -> str:
    """Keep only the first ``<body>`` region, re-wrapped in a bare document.

    Scripts, noscript, link and meta tags are dropped and each ``<svg>``
    block collapses to ``[SVG]``. Input without a body is returned as is.
    """
    match = _RE_BODY.search(html)
    if match is None:
        return html

    body = match.group(1)
    body = _RE_SCRIPT.sub("", body)
    body = _RE_NOSCRIPT.sub("", body)
    body = _RE_LINK.sub("", body)
    body = _RE_META.sub("", body)
    body = _RE_SVG.sub("[SVG]", body)
    return MINIMAL_DOCUMENT.format(body=body.strip())


AGGRESSIVE_STEPS: tuple[Callable[[str], str], ...] = (
    extract_body,
    strip_base64,
    strip_styles,
    minify,
)


def aggressive(html: str) -> str:
    """Run every regex rewrite in order: body, base64, styles, whitespace."""
    return reduce(lambda acc, step: step(acc), AGGRESSIVE_STEPS, html)
