"""Upload cadence: gaps between uploads and the best-performing publish slot."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from analytics.records import VideoMetric

SECONDS_PER_DAY = 86400
DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

# UTC hour windows, [start, end). Night wraps past midnight.
HOUR_BUCKETS = (
    ("morning", ((6, 12),)),
    ("afternoon", ((12, 18),)),
    ("evening", ((18, 22),)),
    ("night", ((22, 24), (0, 6))),
)


def hour_bucket(hour: int) -> str:
    for name, windows in HOUR_BUCKETS:
        if any(start <= hour < end for start, end in windows):
            return name
    raise ValueError(f"Hour out of range: {hour}")


@dataclass(frozen=True)
class SlotPerformance:
    name: str
    count: int
    avg_views_per_day: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "count": self.count,
            "avgViewsPerDay": round(self.avg_views_per_day, 1),
        }


@dataclass(frozen=True)
class UploadCadence:
    avg_days_between_uploads: float = 0.0
    uploads_per_week: float = 0.0
    best_day_of_week: Optional[str] = None
    best_day_avg_vpd: float = 0.0
    best_hour_bucket: Optional[str] = None
    best_hour_bucket_avg_vpd: float = 0.0
    day_of_week_performance: List[SlotPerformance] = field(default_factory=list)
    hour_bucket_performance: List[SlotPerformance] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "avgDaysBetweenUploads": round(self.avg_days_between_uploads, 1),
            "uploadsPerWeek": round(self.uploads_per_week, 2),
            "bestDayOfWeek": self.best_day_of_week,
            "bestDayAvgVpd": round(self.best_day_avg_vpd, 1),
            "bestHourBucket": self.best_hour_bucket,
            "bestHourBucketAvgVpd": round(self.best_hour_bucket_avg_vpd, 1),
            "dayOfWeekPerformance": [slot.to_dict() for slot in self.day_of_week_performance],
            "hourBucketPerformance": [slot.to_dict() for slot in self.hour_bucket_performance],
        }


def upload_gaps(videos: Sequence[VideoMetric]) -> List[float]:
    """Days between consecutive uploads, oldest first; negative gaps are skipped."""
    ordered = sorted(videos, key=lambda video: video.published_at)
    gaps = []
    for previous, current in zip(ordered, ordered[1:]):
        gap = (current.published_at - previous.published_at).total_seconds() / SECONDS_PER_DAY
        if gap >= 0:
            gaps.append(gap)
    return gaps


def _group_performance(keyed: Sequence[Tuple[str, float]]) -> List[SlotPerformance]:
    groups: Dict[str, List[float]] = {}
    for key, views_per_day in keyed:
        groups.setdefault(key, []).append(views_per_day)
    return [
        SlotPerformance(name=key, count=len(values), avg_views_per_day=float(np.mean(values)))
        for key, values in groups.items()
    ]


def _best(slots: Sequence[SlotPerformance]) -> Optional[SlotPerformance]:
    best = None
    for slot in slots:
        # Strict comparison keeps the first-encountered slot on ties.
        if best is None or slot.avg_views_per_day > best.avg_views_per_day:
            best = slot
    return best


def analyze_upload_cadence(videos: Sequence[VideoMetric]) -> UploadCadence:
    """Compute cadence over the full video set (not a quartile)."""
    if not videos:
        return UploadCadence()

    gaps = upload_gaps(videos)
    avg_gap = float(np.mean(gaps)) if gaps else 0.0
    uploads_per_week = 7 / avg_gap if avg_gap > 0 else 0.0

    # Slots are UTC regardless of the offset a record was published with.
    ordered = [
        (video.published_at.astimezone(timezone.utc), video.views_per_day)
        for video in sorted(videos, key=lambda video: video.published_at)
    ]
    day_slots = _group_performance([(DAY_NAMES[published.weekday()], vpd) for published, vpd in ordered])
    hour_slots = _group_performance([(hour_bucket(published.hour), vpd) for published, vpd in ordered])
    best_day = _best(day_slots)
    best_hour = _best(hour_slots)

    return UploadCadence(
        avg_days_between_uploads=avg_gap,
        uploads_per_week=uploads_per_week,
        best_day_of_week=best_day.name,
        best_day_avg_vpd=best_day.avg_views_per_day,
        best_hour_bucket=best_hour.name,
        best_hour_bucket_avg_vpd=best_hour.avg_views_per_day,
        day_of_week_performance=day_slots,
        hour_bucket_performance=hour_slots,
    )
