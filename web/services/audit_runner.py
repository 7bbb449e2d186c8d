"""Audit runner: fetch a channel's uploads and build the analytics report."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from analytics.channel_analyzer import ChannelAnalyzer
from analytics.channel_fetcher import YouTubeChannelFetcher
from analytics.errors import ChannelNotFoundError

CHANNEL_ID_PATTERN = re.compile(r"^UC[\w-]{10,}$")
HANDLE_PATTERN = re.compile(r"^@?[\w.-]{3,}$")


def normalize_handle(handle: str) -> str:
    normalized = (handle or "").strip()
    if not normalized.startswith("@"):
        normalized = "@" + normalized
    return normalized



def is_channel_id(value: str) -> bool:
    return bool(CHANNEL_ID_PATTERN.match((value or "").strip()))



def validate_handle(handle: str) -> bool:
    return bool(HANDLE_PATTERN.match((handle or "").strip()))



def clamp_max_results(raw_value: Optional[str], default: int, cap: int) -> int:
    """Parse a requested result cap; out-of-range values are clamped silently."""
    try:
        requested = int(raw_value) if raw_value not in (None, "") else default
    except (TypeError, ValueError):
        requested = default
    return max(1, min(requested, cap))



def _emit(logger: Optional[Callable[[str], None]], message: str) -> None:
    if logger:
        logger(message)



def resolve_channel(
    handle: str,
    api_key: str,
    timeout: int = 30,
    fetcher: Optional[YouTubeChannelFetcher] = None,
) -> Dict[str, Any]:
    """Resolve an @handle to ``{channelId, title, subscriberCount}``."""
    if not api_key:
        raise ValueError("YOUTUBE_API_KEY is missing")

    handle = normalize_handle(handle)
    if not validate_handle(handle):
        raise ChannelNotFoundError(f"Invalid channel handle: {handle}")

    fetcher = fetcher or YouTubeChannelFetcher(api_key, timeout=timeout)
    return fetcher.resolve_handle(handle)



def run_channel_audit(
    channel_id: str,
    api_key: str,
    max_results: int,
    timeout: int = 30,
    logger: Optional[Callable[[str], None]] = None,
    fetcher: Optional[YouTubeChannelFetcher] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Fetch up to ``max_results`` recent uploads and return the analytics report.

    Any upstream failure propagates; there is no partial report.
    """
    if not api_key:
        raise ValueError("YOUTUBE_API_KEY is missing")
    if not channel_id:
        raise ValueError("channelId is required")

    fetcher = fetcher or YouTubeChannelFetcher(api_key, timeout=timeout)

    _emit(logger, f"Fetching up to {max_results} videos for {channel_id}...")
    records = fetcher.fetch_channel_videos(channel_id, max_results)
    _emit(logger, f"Fetched {len(records)} videos (~{fetcher.quota_used} quota units)")

    report = ChannelAnalyzer(channel_id, records, now=now).generate_report()
    _emit(logger, f"Channel average: {report['channelAvgVpd']} views/day")
    return report
