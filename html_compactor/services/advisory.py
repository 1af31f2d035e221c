"""Size-based advice: which method to use and what it will cost.

Nothing here runs a compaction. ``recommend_method`` and ``estimate_tokens``
are pure functions of their input; ``available_methods`` is a static
catalog for presentation.
"""

from __future__ import annotations

import math

from html_compactor.models.schemas import CompactionMethod, MethodCategory, MethodInfo

# Exclusive upper bound on input size -> method, least aggressive first
_RECOMMENDATION_THRESHOLDS: tuple[tuple[int, CompactionMethod], ...] = (
    (30_000, CompactionMethod.NONE),
    (50_000, CompactionMethod.REGEX_MINIFY),
    (100_000, CompactionMethod.LIB_SANITIZE),
    (200_000, CompactionMethod.REGEX_STRIP_BASE64),
    (500_000, CompactionMethod.COMBINED_OPTIMAL),
)
_FALLBACK_METHOD = CompactionMethod.COMBINED_MAXIMUM

# Rough average for HTML; not a tokenizer
_CHARS_PER_TOKEN = 4


def recommend_method(size: int) -> CompactionMethod:
    """Pick a method for an input of ``size`` characters."""
    for upper, method in _RECOMMENDATION_THRESHOLDS:
        if size < upper:
            return method
    return _FALLBACK_METHOD


def recommendation_order() -> list[CompactionMethod]:
    """Recommended methods from least to most aggressive."""
    return [method for _, method in _RECOMMENDATION_THRESHOLDS] + [_FALLBACK_METHOD]


def estimate_tokens(html: str) -> int:
    return math.ceil(len(html) / _CHARS_PER_TOKEN)


def format_bytes(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


_CATALOG: tuple[MethodInfo, ...] = (
    # Regex methods
    MethodInfo(
        value=CompactionMethod.NONE,
        label="None",
        description="No compaction - send as-is",
        category=MethodCategory.REGEX,
        expected_reduction="0%",
    ),
    MethodInfo(
        value=CompactionMethod.REGEX_MINIFY,
        label="Regex: Minify",
        description="Remove whitespace and comments",
        category=MethodCategory.REGEX,
        expected_reduction="10-20%",
    ),
    MethodInfo(
        value=CompactionMethod.REGEX_STRIP_BASE64,
        label="Regex: Strip Base64",
        description="Replace base64 data URLs with placeholders",
        category=MethodCategory.REGEX,
        expected_reduction="50-90%",
    ),
    MethodInfo(
        value=CompactionMethod.REGEX_STRIP_STYLES,
        label="Regex: Strip Styles",
        description="Remove inline styles and style tags",
        category=MethodCategory.REGEX,
        expected_reduction="20-40%",
    ),
    MethodInfo(
        value=CompactionMethod.REGEX_EXTRACT_BODY,
        label="Regex: Body Only",
        description="Extract body, remove scripts/head",
        category=MethodCategory.REGEX,
        expected_reduction="30-50%",
    ),
    MethodInfo(
        value=CompactionMethod.REGEX_AGGRESSIVE,
        label="Regex: Aggressive",
        description="All regex methods combined",
        category=MethodCategory.REGEX,
        expected_reduction="60-80%",
    ),
    # Sanitizer methods
    MethodInfo(
        value=CompactionMethod.LIB_SANITIZE,
        label="Lib: Sanitize",
        description="Allow-list sanitizer with safe defaults",
        category=MethodCategory.LIBRARY,
        expected_reduction="20-40%",
    ),
    MethodInfo(
        value=CompactionMethod.LIB_SANITIZE_STRICT,
        label="Lib: Sanitize Strict",
        description="Allow-list sanitizer with minimal tags",
        category=MethodCategory.LIBRARY,
        expected_reduction="40-60%",
    ),
    # Tree-walker methods
    MethodInfo(
        value=CompactionMethod.DOM_EXTRACT_TEXT,
        label="DOM: Text Only",
        description="Extract text content with structure markers",
        category=MethodCategory.DOM,
        expected_reduction="70-90%",
    ),
    MethodInfo(
        value=CompactionMethod.DOM_EXTRACT_STRUCTURE,
        label="DOM: Clean Structure",
        description="Keep structure, strip most attributes",
        category=MethodCategory.DOM,
        expected_reduction="40-60%",
    ),
    # Combined methods
    MethodInfo(
        value=CompactionMethod.COMBINED_OPTIMAL,
        label="Combined: Optimal",
        description="Best for LLM (sanitize + strip base64 + minify)",
        category=MethodCategory.COMBINED,
        expected_reduction="60-85%",
    ),
    MethodInfo(
        value=CompactionMethod.COMBINED_MAXIMUM,
        label="Combined: Maximum",
        description="Maximum reduction (may lose layout)",
        category=MethodCategory.COMBINED,
        expected_reduction="80-95%",
    ),
)


def available_methods() -> list[MethodInfo]:
    return [info.model_copy() for info in _CATALOG]
