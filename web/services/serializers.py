"""Serializer helpers for API error responses."""

from __future__ import annotations

from typing import Tuple

from analytics.errors import ChannelNotFoundError, UpstreamError



def error_to_response(exc: Exception) -> Tuple[dict, int]:
    """Map a pipeline exception to a JSON body and HTTP status."""
    if isinstance(exc, ChannelNotFoundError):
        return {"error": str(exc), "kind": "not_found"}, 404
    if isinstance(exc, UpstreamError):
        return {
            "error": str(exc),
            "kind": "upstream",
            "status": exc.status,
            "detail": exc.body,
        }, 502
    return {"error": str(exc), "kind": "internal"}, 500
