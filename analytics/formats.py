"""Format clustering: group videos by structural title patterns."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

import numpy as np

from analytics.records import VideoMetric
from analytics.titles import has_comparison, has_numbers, has_question, tokenize

COUNTRY_TERMS = frozenset({
    "usa", "america", "american", "americans", "usmnt", "uswnt",
    "mexico", "mexican", "canada", "canadian", "brazil", "brazilian",
    "argentina", "argentine", "argentinian", "uruguay", "colombia",
    "england", "english", "france", "french", "spain", "spanish",
    "germany", "german", "portugal", "portuguese", "italy", "italian",
    "netherlands", "dutch", "belgium", "croatia", "morocco", "senegal",
    "japan", "japanese", "korea", "korean", "australia", "australian",
})

WHY_PATTERN = re.compile(r"\bwhy\b", re.IGNORECASE)
IS_PATTERN = re.compile(r"\bis\b", re.IGNORECASE)
BEST_PATTERN = re.compile(r"\bbest\b", re.IGNORECASE)


def is_framing(title: str) -> bool:
    return bool(IS_PATTERN.search(title))


def why_framing(title: str) -> bool:
    return bool(WHY_PATTERN.search(title))


def best_list(title: str) -> bool:
    return bool(BEST_PATTERN.search(title))


def mentions_country(title: str) -> bool:
    return any(token in COUNTRY_TERMS for token in tokenize(title))


@dataclass(frozen=True)
class FormatPattern:
    name: str
    label: str
    matches: Callable[[str], bool]


FORMAT_PATTERNS = (
    FormatPattern("question", "Question titles", has_question),
    FormatPattern("is_framing", "\"Is ...\" framing", is_framing),
    FormatPattern("why_framing", "\"Why ...\" explainers", why_framing),
    FormatPattern("best_list", "\"Best\" rankings", best_list),
    FormatPattern("head_to_head", "Head-to-head (vs)", has_comparison),
    FormatPattern("numbered", "Numbered titles", has_numbers),
    FormatPattern("country", "Country / nationality", mentions_country),
)


@dataclass(frozen=True)
class FormatCluster:
    pattern: str
    label: str
    count: int
    avg_views_per_day: float
    avg_engagement_rate: Optional[float]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pattern": self.pattern,
            "label": self.label,
            "count": self.count,
            "avgViewsPerDay": round(self.avg_views_per_day, 1),
            "avgEngagementRate": (
                round(self.avg_engagement_rate, 5) if self.avg_engagement_rate is not None else None
            ),
        }


def _mean_engagement(videos: Sequence[VideoMetric]) -> Optional[float]:
    rates = [video.engagement_rate for video in videos if video.engagement_rate is not None]
    return float(np.mean(rates)) if rates else None


def cluster_formats(videos: Sequence[VideoMetric]) -> List[FormatCluster]:
    """Rank title formats by average views/day.

    Membership is not exclusive: a title such as "Why is Brazil the best?"
    counts toward five clusters, and clusters are never partitioned.
    """
    clusters = []
    for pattern in FORMAT_PATTERNS:
        matching = [video for video in videos if pattern.matches(video.title or "")]
        if not matching:
            continue
        clusters.append(FormatCluster(
            pattern=pattern.name,
            label=pattern.label,
            count=len(matching),
            avg_views_per_day=float(np.mean([video.views_per_day for video in matching])),
            avg_engagement_rate=_mean_engagement(matching),
        ))

    return sorted(clusters, key=lambda cluster: cluster.avg_views_per_day, reverse=True)
