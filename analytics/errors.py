"""Error types raised by the channel analytics pipeline."""

from __future__ import annotations

from typing import Optional


class ChannelAuditError(Exception):
    """Base error for a failed analytics run."""


class UpstreamError(ChannelAuditError):
    """The YouTube Data API returned a non-success response or was unreachable."""

    def __init__(self, message: str, status: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body


class ChannelNotFoundError(ChannelAuditError, ValueError):
    """No channel, handle, or uploads playlist matched the request."""


class NoVideosFoundError(ChannelNotFoundError):
    """The channel exists but its uploads playlist has no videos."""
