"""Shrink captured HTML documents before handing them to an LLM."""

from html_compactor.models.schemas import (
    CompactionMethod,
    CompactionOptions,
    CompactionResult,
    MethodInfo,
)
from html_compactor.services.advisory import available_methods, estimate_tokens, recommend_method
from html_compactor.services.compactor import compact, compact_async

__all__ = [
    "CompactionMethod",
    "CompactionOptions",
    "CompactionResult",
    "MethodInfo",
    "available_methods",
    "compact",
    "compact_async",
    "estimate_tokens",
    "recommend_method",
]
