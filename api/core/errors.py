"""
Mapping upstream failures to client-facing HTTP errors.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException

from .http import UpstreamError

logger = logging.getLogger(__name__)


def not_found(error: str, **extra: Any) -> HTTPException:
    return HTTPException(status_code=404, detail={"error": error, **extra})


def bad_request(error: str, **extra: Any) -> HTTPException:
    return HTTPException(status_code=400, detail={"error": error, **extra})


def from_upstream(
    exc: UpstreamError,
    *,
    error: str,
    not_found_detail: dict[str, Any] | None = None,
    status_code: int = 502,
) -> HTTPException:
    """
    Upstream 404 becomes our 404 when the caller supplies a detail for it;
    everything else (timeouts, 5xx, bad JSON) becomes `status_code`.
    """
    if not_found_detail is not None and exc.not_found:
        return HTTPException(status_code=404, detail=not_found_detail)

    logger.error("upstream_failed error=%r url=%s details=%s", error, exc.url, exc)
    return HTTPException(status_code=status_code, detail={"error": error, "details": str(exc)})
