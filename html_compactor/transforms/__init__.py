from html_compactor.transforms.regex import (
    aggressive,
    extract_body,
    minify,
    strip_base64,
    strip_ids,
    strip_styles,
)
from html_compactor.transforms.sanitizer import (
    LENIENT,
    STRICT,
    SanitizerProfile,
    sanitize,
    sanitize_lenient,
    sanitize_strict,
)
from html_compactor.transforms.tree import extract_structure, extract_text

__all__ = [
    "LENIENT",
    "STRICT",
    "SanitizerProfile",
    "aggressive",
    "extract_body",
    "extract_structure",
    "extract_text",
    "minify",
    "sanitize",
    "sanitize_lenient",
    "sanitize_strict",
    "strip_base64",
    "strip_ids",
    "strip_styles",
]
