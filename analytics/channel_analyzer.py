"""
Channel Analyzer
Turns a channel's raw video records into the views-per-day analytics report.

Pipeline:
1. Per-video metrics (age, views/day, engagement)
2. Velocity scoring against the channel average
3. Quartile segmentation by views/day
4. Title structure, keywords, upload cadence and format clusters
5. Rule-based observations and experiments
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from analytics.cadence import analyze_upload_cadence
from analytics.errors import NoVideosFoundError
from analytics.formats import cluster_formats
from analytics.insights import synthesize_insights
from analytics.metrics import (
    apply_velocity,
    calculate_metric,
    channel_average,
    rank_by_views_per_day,
    segment_quartiles,
    velocity_distribution,
)
from analytics.records import RawVideoRecord, VideoMetric
from analytics.titles import extract_keywords, title_metrics

logger = logging.getLogger(__name__)

LISTED_VIDEOS = 15


def _mean_or_none(values: Sequence[float]) -> Optional[float]:
    return float(np.mean(values)) if values else None


class ChannelAnalyzer:
    def __init__(self, channel_id: str, records: Sequence[RawVideoRecord], now: Optional[datetime] = None):
        """Initialize analyzer with one run's raw records and capture time."""
        self.channel_id = channel_id
        self.records = list(records)
        self.now = now or datetime.now(timezone.utc)

    def calculate_metrics(self) -> List[VideoMetric]:
        """Metrics with velocity filled in, in input order."""
        base = [calculate_metric(record, self.now) for record in self.records]
        average = channel_average(base)
        return [apply_velocity(metric, average) for metric in base]

    def generate_report(self) -> Dict[str, Any]:
        """Generate the complete analytics report."""
        if not self.records:
            raise NoVideosFoundError(f"No videos found for channel: {self.channel_id}")

        metrics = self.calculate_metrics()
        average = channel_average(metrics)
        ranked = rank_by_views_per_day(metrics)
        top_quartile, bottom_quartile = segment_quartiles(ranked)

        duration_top = _mean_or_none([video.duration_seconds for video in top_quartile])
        duration_bottom = _mean_or_none([video.duration_seconds for video in bottom_quartile])
        engagement_top = _mean_or_none(
            [video.engagement_rate for video in top_quartile if video.engagement_rate is not None]
        )
        engagement_bottom = _mean_or_none(
            [video.engagement_rate for video in bottom_quartile if video.engagement_rate is not None]
        )

        keywords = extract_keywords(top_quartile)
        distribution = velocity_distribution(metrics)
        title_top = title_metrics(top_quartile)
        title_bottom = title_metrics(bottom_quartile)
        cadence = analyze_upload_cadence(metrics)
        clusters = cluster_formats(metrics)

        summary_text = synthesize_insights(
            velocity_counts=distribution,
            total_videos=len(metrics),
            duration_top=duration_top,
            duration_bottom=duration_bottom,
            engagement_top=engagement_top,
            engagement_bottom=engagement_bottom,
            title_top=title_top,
            title_bottom=title_bottom,
            cadence=cadence,
            clusters=clusters,
            keywords=keywords,
            channel_avg_vpd=average,
        )

        logger.info(
            "Analyzed %d videos for %s: avg %.1f views/day, quartile size %d, %d format clusters",
            len(metrics), self.channel_id, average, len(top_quartile), len(clusters),
        )

        return {
            "channelId": self.channel_id,
            "channelAvgVpd": round(average, 1),
            "summary": {
                "avgDurationTop": duration_top,
                "avgDurationBottom": duration_bottom,
                "avgEngagementTop": engagement_top,
                "avgEngagementBottom": engagement_bottom,
                "topTitleKeywords": [{"word": word, "count": count} for word, count in keywords],
                "velocityDistribution": distribution,
            },
            "topVideos": [video.to_dict() for video in ranked[:LISTED_VIDEOS]],
            "bottomVideos": [video.to_dict() for video in ranked[-LISTED_VIDEOS:]],
            "titleAnalysis": {
                "topQuartile": title_top.to_dict(),
                "bottomQuartile": title_bottom.to_dict(),
            },
            "uploadCadence": cadence.to_dict(),
            "formatClusters": [cluster.to_dict() for cluster in clusters],
            "aiSummary": summary_text,
        }
