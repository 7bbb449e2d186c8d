"""Per-video metrics, velocity classification and quartile segmentation."""

from __future__ import annotations

import math
import re
from dataclasses import replace
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

import numpy as np

from analytics.records import RawVideoRecord, VideoMetric

DURATION_PATTERN = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")
SECONDS_PER_DAY = 86400

EXPLODING = "Exploding"
OUTPERFORMING = "Outperforming"
BASELINE = "Baseline"
UNDERPERFORMING = "Underperforming"

# Evaluated top-down, first match wins; lower bounds are inclusive.
VELOCITY_BANDS = (
    (1.5, EXPLODING),
    (1.1, OUTPERFORMING),
    (0.9, BASELINE),
)
VELOCITY_LABELS = (EXPLODING, OUTPERFORMING, BASELINE, UNDERPERFORMING)


def duration_seconds(duration_iso: Optional[str]) -> int:
    """
    Parse ISO 8601 duration to seconds.
    Example: PT2M30S = 150 seconds
    """
    match = DURATION_PATTERN.search(duration_iso or "")
    if not match:
        return 0

    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    seconds = int(match.group(3) or 0)
    return hours * 3600 + minutes * 60 + seconds


def calculate_metric(record: RawVideoRecord, now: datetime) -> VideoMetric:
    """Derive age, views/day and engagement for one video.

    Age is floored to whole days with a minimum of one.
    """
    elapsed = (now - record.published_at).total_seconds()
    days_since_publish = max(1, math.floor(elapsed / SECONDS_PER_DAY))

    views = record.view_count
    engagement_rate = (record.like_count + record.comment_count) / views if views > 0 else None

    return VideoMetric(
        video_id=record.video_id,
        title=record.title,
        published_at=record.published_at,
        view_count=views,
        like_count=record.like_count,
        comment_count=record.comment_count,
        duration_seconds=duration_seconds(record.duration),
        days_since_publish=days_since_publish,
        views_per_day=views / days_since_publish,
        engagement_rate=engagement_rate,
    )


def channel_average(metrics: Sequence[VideoMetric]) -> float:
    if not metrics:
        return 0.0
    return float(np.mean([metric.views_per_day for metric in metrics]))


def classify_velocity(score: float) -> str:
    for lower_bound, label in VELOCITY_BANDS:
        if score >= lower_bound:
            return label
    return UNDERPERFORMING


def velocity_score(views_per_day: float, average: float) -> float:
    return views_per_day / (average or 1)


def apply_velocity(metric: VideoMetric, average: float) -> VideoMetric:
    score = velocity_score(metric.views_per_day, average)
    return replace(metric, velocity_score=score, velocity_label=classify_velocity(score))


def velocity_distribution(metrics: Sequence[VideoMetric]) -> dict:
    counts = {label.lower(): 0 for label in VELOCITY_LABELS}
    for metric in metrics:
        if metric.velocity_label:
            counts[metric.velocity_label.lower()] += 1
    return counts


def rank_by_views_per_day(metrics: Sequence[VideoMetric]) -> List[VideoMetric]:
    # sorted() is stable, so equal views/day keep their input order.
    return sorted(metrics, key=lambda metric: metric.views_per_day, reverse=True)


def quartile_size(count: int) -> int:
    return max(1, count // 4)


def segment_quartiles(ranked: Sequence[VideoMetric]) -> Tuple[List[VideoMetric], List[VideoMetric]]:
    """Slice top and bottom quartiles from a list already ranked by views/day.

    With fewer than eight videos the two slices can share members; that
    overlap is kept rather than shrinking either quartile.
    """
    if not ranked:
        return [], []
    size = quartile_size(len(ranked))
    return list(ranked[:size]), list(ranked[len(ranked) - size:])
