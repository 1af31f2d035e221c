"""API routes for the compaction service."""

from __future__ import annotations

import httpx
from fastapi import APIRouter, HTTPException, Query

from html_compactor.config import settings
from html_compactor.models.schemas import (
    CompactionMethod,
    CompactionOptions,
    CompactRequest,
    CompactResponse,
    CompactUrlRequest,
    MethodInfo,
    RecommendResponse,
    TokenEstimateRequest,
    TokenEstimateResponse,
)
from html_compactor.services.advisory import available_methods, estimate_tokens, recommend_method
from html_compactor.services.compactor import compact_async
from html_compactor.utils.http import fetch_page
from html_compactor.utils.logging import get_logger

log = get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["compaction"])


async def _compact_response(
    html: str,
    method: CompactionMethod | str | None,
    *,
    max_size: int | None,
    preserve_ids: bool,
) -> CompactResponse:
    if len(html) > settings.max_request_chars:
        raise HTTPException(
            status_code=413,
            detail=f"HTML is {len(html)} characters; limit is {settings.max_request_chars}",
        )
    if method is None:
        method = recommend_method(len(html))
        log.info("No method requested, using recommended %s", method.value)

    options = CompactionOptions(method=method, max_size=max_size, preserve_ids=preserve_ids)
    result = await compact_async(html, options)
    return CompactResponse(
        **result.model_dump(),
        original_tokens=estimate_tokens(html),
        estimated_tokens=estimate_tokens(result.html),
    )


@router.post("/compact", response_model=CompactResponse)
async def compact_html(request: CompactRequest) -> CompactResponse:
    """Compact a raw HTML document. Failures come back as warnings, not errors."""
    return await _compact_response(
        request.html,
        request.method,
        max_size=request.max_size,
        preserve_ids=request.preserve_ids,
    )


@router.post("/compact/url", response_model=CompactResponse)
async def compact_url(request: CompactUrlRequest) -> CompactResponse:
    """Fetch a page and compact its HTML."""
    try:
        html = await fetch_page(request.url)
    except httpx.HTTPError as exc:
        log.warning("Failed to fetch %s: %s", request.url, exc)
        raise HTTPException(status_code=502, detail=f"Could not fetch {request.url}: {exc}")
    return await _compact_response(
        html,
        request.method,
        max_size=request.max_size,
        preserve_ids=request.preserve_ids,
    )


@router.get("/methods", response_model=list[MethodInfo])
async def list_methods() -> list[MethodInfo]:
    """List every compaction method with its expected reduction."""
    return available_methods()


@router.get("/recommend", response_model=RecommendResponse)
async def recommend(size: int = Query(ge=0, description="Input size in characters.")) -> RecommendResponse:
    return RecommendResponse(size=size, method=recommend_method(size))


@router.post("/tokens", response_model=TokenEstimateResponse)
async def tokens(request: TokenEstimateRequest) -> TokenEstimateResponse:
    return TokenEstimateResponse(characters=len(request.html), tokens=estimate_tokens(request.html))
