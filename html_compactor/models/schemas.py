from __future__ import annotations

import enum
from typing import Any

from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator


# ---------------------------------------------------------------------------
# Compaction methods
# ---------------------------------------------------------------------------
class CompactionMethod(str, enum.Enum):
    NONE = "none"
    # Regex transforms
    REGEX_MINIFY = "regex-minify"
    REGEX_STRIP_BASE64 = "regex-strip-base64"
    REGEX_STRIP_STYLES = "regex-strip-styles"
    REGEX_EXTRACT_BODY = "regex-extract-body"
    REGEX_AGGRESSIVE = "regex-aggressive"
    # Allow-list sanitizer
    LIB_SANITIZE = "lib-sanitize"
    LIB_SANITIZE_STRICT = "lib-sanitize-strict"
    # Tree walkers
    DOM_EXTRACT_TEXT = "dom-extract-text"
    DOM_EXTRACT_STRUCTURE = "dom-extract-structure"
    # Fixed compositions
    COMBINED_OPTIMAL = "combined-optimal"
    COMBINED_MAXIMUM = "combined-maximum"


class MethodCategory(str, enum.Enum):
    REGEX = "regex"
    LIBRARY = "library"
    DOM = "dom"
    COMBINED = "combined"


def _coerce_method(value: Any) -> Any:
    """Turn known method strings into ``CompactionMethod``; keep unknown ones."""
    if isinstance(value, CompactionMethod):
        return value
    if isinstance(value, str):
        try:
            return CompactionMethod(value)
        except ValueError:
            return value
    return value


class CompactionOptions(BaseModel):
    """How a single ``compact`` call should shrink its input."""

    method: CompactionMethod | str = Field(
        description="Compaction method. Unknown values fall back to 'none' with a warning."
    )
    max_size: int | None = Field(
        default=None,
        ge=0,
        description="Hard cap on output characters. Longer output is truncated with a marker.",
    )
    preserve_ids: bool = Field(
        default=True,
        description="Keep id attributes. When false, ids are stripped after the pipeline runs.",
    )

    @field_validator("method", mode="before")
    @classmethod
    def coerce_method(cls, v: Any) -> Any:
        return _coerce_method(v)


class CompactionResult(BaseModel):
    html: str
    original_size: int
    compacted_size: int
    reduction_percent: int = Field(
        description="Rounded percentage decrease in length; negative when the output grew."
    )
    method: CompactionMethod | str
    warnings: list[str] = Field(default_factory=list)
    processing_time: float = Field(description="Wall-clock duration in milliseconds.")

    @field_validator("method", mode="before")
    @classmethod
    def coerce_method(cls, v: Any) -> Any:
        return _coerce_method(v)


class MethodInfo(BaseModel):
    """Catalog entry describing a method for presentation."""

    value: CompactionMethod
    label: str
    description: str
    category: MethodCategory
    expected_reduction: str


# ---------------------------------------------------------------------------
# HTTP payloads
# ---------------------------------------------------------------------------
class CompactRequest(BaseModel):
    html: str = Field(description="Raw HTML document to compact.")
    method: CompactionMethod | str | None = Field(
        default=None,
        description="Compaction method. When omitted the recommended method for the input size is used.",
    )
    max_size: int | None = Field(default=None, ge=0)
    preserve_ids: bool = True

    @field_validator("method", mode="before")
    @classmethod
    def coerce_method(cls, v: Any) -> Any:
        return _coerce_method(v)


class CompactUrlRequest(BaseModel):
    url: str = Field(description="Page to fetch and compact.")
    method: CompactionMethod | str | None = None
    max_size: int | None = Field(default=None, ge=0)
    preserve_ids: bool = True

    @field_validator("method", mode="before")
    @classmethod
    def coerce_method(cls, v: Any) -> Any:
        return _coerce_method(v)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("URL must not be empty")
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https"):
            raise ValueError(
                f"URL must start with http:// or https:// (got {parsed.scheme!r})"
            )
        if not parsed.netloc:
            raise ValueError("URL must include a valid domain (e.g. https://example.com)")
        return v


class CompactResponse(CompactionResult):
    original_tokens: int = Field(description="Token estimate for the input.")
    estimated_tokens: int = Field(description="Token estimate for the compacted output.")


class RecommendResponse(BaseModel):
    size: int
    method: CompactionMethod


class TokenEstimateRequest(BaseModel):
    html: str


class TokenEstimateResponse(BaseModel):
    characters: int
    tokens: int
