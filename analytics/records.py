"""Video record types and the ingestion boundary for YouTube API payloads."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from dateutil import parser as dateparser

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class RawVideoRecord:
    video_id: str
    title: str
    published_at: datetime
    view_count: int
    like_count: int
    comment_count: int
    duration: str


@dataclass(frozen=True)
class VideoMetric:
    video_id: str
    title: str
    published_at: datetime
    view_count: int
    like_count: int
    comment_count: int
    duration_seconds: int
    days_since_publish: int
    views_per_day: float
    engagement_rate: Optional[float]
    velocity_score: Optional[float] = None
    velocity_label: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "videoId": self.video_id,
            "title": self.title,
            "publishedAt": format_timestamp(self.published_at),
            "viewCount": self.view_count,
            "likeCount": self.like_count,
            "commentCount": self.comment_count,
            "durationSeconds": self.duration_seconds,
            "daysSincePublish": self.days_since_publish,
            "viewsPerDay": round(self.views_per_day, 2),
            "engagementRate": round(self.engagement_rate, 5) if self.engagement_rate is not None else None,
            "velocityScore": round(self.velocity_score, 3) if self.velocity_score is not None else None,
            "velocityLabel": self.velocity_label,
        }


def format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_published_at(raw_value: Optional[str]) -> datetime:
    """Parse an RFC 3339 timestamp into an aware UTC datetime, epoch when unusable."""
    if not raw_value:
        return EPOCH
    try:
        parsed = dateparser.parse(raw_value)
    except (ValueError, OverflowError):
        return EPOCH
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _count(statistics: Dict[str, Any], key: str) -> int:
    # The API sends counts as strings and omits them when hidden by the owner.
    try:
        return int(statistics.get(key, 0) or 0)
    except (TypeError, ValueError):
        return 0


def raw_video_from_api(item: Dict[str, Any]) -> RawVideoRecord:
    """Build a RawVideoRecord from one ``videos.list`` item, defaulting missing fields."""
    snippet = item.get("snippet") or {}
    statistics = item.get("statistics") or {}
    content_details = item.get("contentDetails") or {}

    return RawVideoRecord(
        video_id=str(item.get("id", "")),
        title=snippet.get("title") or "",
        published_at=parse_published_at(snippet.get("publishedAt")),
        view_count=_count(statistics, "viewCount"),
        like_count=_count(statistics, "likeCount"),
        comment_count=_count(statistics, "commentCount"),
        duration=content_details.get("duration") or "",
    )
