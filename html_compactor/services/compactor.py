"""Compactor: runs a compaction method over an HTML document.

Each method maps to a fixed, ordered pipeline of transforms::

    regex-aggressive   extract_body → strip_base64 → strip_styles → minify
    combined-optimal   strip_base64 → sanitize(lenient) → minify
    combined-maximum   extract_body → strip_base64 → strip_styles → sanitize(strict) → minify

``compact`` wraps the pipeline with timing, size metrics and advisory
warnings. It never raises: an unknown method behaves like ``none`` and any
failure inside a pipeline discards the partial output and returns the
input unchanged, with the error recorded as a warning.
"""

from __future__ import annotations

import asyncio
import math
import time
from typing import Callable

from html_compactor.config import settings
from html_compactor.models.schemas import CompactionMethod, CompactionOptions, CompactionResult
from html_compactor.services.advisory import format_bytes
from html_compactor.transforms.regex import (
    AGGRESSIVE_STEPS,
    extract_body,
    minify,
    strip_base64,
    strip_ids,
    strip_styles,
)
from html_compactor.transforms.sanitizer import sanitize_lenient, sanitize_strict
from html_compactor.transforms.tree import extract_structure, extract_text
from html_compactor.utils.logging import get_logger

log = get_logger(__name__)

Step = Callable[[str], str]

PIPELINES: dict[CompactionMethod, tuple[Step, ...]] = {
    CompactionMethod.NONE: (),
    CompactionMethod.REGEX_MINIFY: (minify,),
    CompactionMethod.REGEX_STRIP_BASE64: (strip_base64,),
    CompactionMethod.REGEX_STRIP_STYLES: (strip_styles,),
    CompactionMethod.REGEX_EXTRACT_BODY: (extract_body,),
    CompactionMethod.REGEX_AGGRESSIVE: AGGRESSIVE_STEPS,
    CompactionMethod.LIB_SANITIZE: (sanitize_lenient,),
    CompactionMethod.LIB_SANITIZE_STRICT: (sanitize_strict,),
    CompactionMethod.DOM_EXTRACT_TEXT: (extract_text,),
    CompactionMethod.DOM_EXTRACT_STRUCTURE: (extract_structure,),
    CompactionMethod.COMBINED_OPTIMAL: (strip_base64, sanitize_lenient, minify),
    CompactionMethod.COMBINED_MAXIMUM: (
        extract_body,
        strip_base64,
        strip_styles,
        sanitize_strict,
        minify,
    ),
}

TRUNCATION_MARKER = "<!-- TRUNCATED -->"


def _method_name(method: CompactionMethod | str) -> str:
    return method.value if isinstance(method, CompactionMethod) else str(method)


def _reduction_percent(original_size: int, compacted_size: int) -> int:
    if original_size == 0:
        return 0
    # Half-up rounding; may go negative when the output grew
    return math.floor((1 - compacted_size / original_size) * 100 + 0.5)


def _truncate(html: str, max_size: int) -> str:
    if max_size <= len(TRUNCATION_MARKER):
        return html[:max_size]
    return html[: max_size - len(TRUNCATION_MARKER)] + TRUNCATION_MARKER


def _run_pipeline(
    html: str,
    pipeline: tuple[Step, ...],
    options: CompactionOptions,
    warnings: list[str],
) -> str:
    compacted = html
    for step in pipeline:
        compacted = step(compacted)
        log.debug("  %s -> %s", step.__name__, format_bytes(len(compacted)))

    # Identity pipelines stay byte-identical; options only advise
    if not pipeline:
        if options.max_size is not None and len(compacted) > options.max_size:
            warnings.append(
                f"HTML is {format_bytes(len(compacted))}, above max_size of "
                f"{options.max_size} characters (not truncated for method none)"
            )
        return compacted

    if not options.preserve_ids:
        compacted = strip_ids(compacted)
    if options.max_size is not None and len(compacted) > options.max_size:
        warnings.append(
            f"Output truncated from {len(compacted)} to max_size of {options.max_size} characters"
        )
        compacted = _truncate(compacted, options.max_size)
    return compacted


def compact(html: str, options: CompactionOptions | CompactionMethod | str) -> CompactionResult:
    """Compact ``html`` with the method in ``options`` and report how it went."""
    if not isinstance(options, CompactionOptions):
        options = CompactionOptions(method=options)

    start = time.perf_counter()
    method = options.method
    name = _method_name(method)
    original_size = len(html)
    warnings: list[str] = []

    log.info("Compacting with method %s (original %s)", name, format_bytes(original_size))

    pipeline = PIPELINES.get(method)
    if pipeline is None:
        warnings.append(f"Unknown method: {name}, using none")
        pipeline = ()

    try:
        step_warnings: list[str] = []
        compacted = _run_pipeline(html, pipeline, options, step_warnings)
        warnings.extend(step_warnings)
    except Exception as exc:
        log.error("Method %s failed, keeping original HTML: %s", name, exc, exc_info=True)
        warnings.append(f"Method {name} failed: {exc}")
        compacted = html

    processing_time = (time.perf_counter() - start) * 1000
    compacted_size = len(compacted)
    reduction = _reduction_percent(original_size, compacted_size)

    log.info(
        "Compacted %s -> %s (%d%%) in %.0fms",
        format_bytes(original_size),
        format_bytes(compacted_size),
        reduction,
        processing_time,
    )

    if compacted_size > settings.size_warning_chars:
        warnings.append(
            f"HTML is still {format_bytes(compacted_size)} - may be too large for some models"
        )
    if compacted_size > settings.size_limit_chars:
        warnings.append(
            f"HTML exceeds {settings.size_limit_chars // 1000}KB - LLM will likely truncate or fail"
        )
    for warning in warnings:
        log.warning(warning)

    return CompactionResult(
        html=compacted,
        original_size=original_size,
        compacted_size=compacted_size,
        reduction_percent=reduction,
        method=method,
        warnings=warnings,
        processing_time=processing_time,
    )


async def compact_async(
    html: str, options: CompactionOptions | CompactionMethod | str
) -> CompactionResult:
    """Run :func:`compact` on a worker thread so event loops stay responsive."""
    return await asyncio.to_thread(compact, html, options)
