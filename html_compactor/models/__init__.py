from html_compactor.models.schemas import (
    CompactionMethod,
    CompactionOptions,
    CompactionResult,
    CompactRequest,
    CompactResponse,
    CompactUrlRequest,
    MethodCategory,
    MethodInfo,
    RecommendResponse,
    TokenEstimateRequest,
    TokenEstimateResponse,
)

__all__ = [
    "CompactionMethod",
    "CompactionOptions",
    "CompactionResult",
    "CompactRequest",
    "CompactResponse",
    "CompactUrlRequest",
    "MethodCategory",
    "MethodInfo",
    "RecommendResponse",
    "TokenEstimateRequest",
    "TokenEstimateResponse",
]
