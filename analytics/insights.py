"""Rule-based strategic summary built from the channel statistics.

Each observation rule contributes at most one sentence and is evaluated
independently. Experiments are derived from the same signals, padded with
generic A/B suggestions up to ``MIN_EXPERIMENTS`` and capped at
``MAX_EXPERIMENTS``.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from analytics.cadence import UploadCadence
from analytics.formats import FormatCluster
from analytics.titles import TitleMetrics

DURATION_GAP_SECONDS = 30
TITLE_GAP_THRESHOLD = 0.05
ENGAGEMENT_BAND = 1.1
MIN_EXPERIMENTS = 3
MAX_EXPERIMENTS = 5

GENERIC_EXPERIMENTS = (
    "A/B test two thumbnail concepts on the next upload using YouTube's Test & Compare and keep the higher click-through variant.",
    "A/B test title phrasing on one upload: swap the title after 48 hours and compare views/day before and after the change.",
    "A/B test the opening 30 seconds: alternate a cold-open hook with a straight intro across the next 4 uploads and compare views/day.",
)


def format_duration(seconds: float) -> str:
    total = int(round(seconds))
    return f"{total // 60}m {total % 60}s"


def format_pct(value: float) -> str:
    text = f"{value * 100:.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    return f"{text}%"


def format_vpd(value: float) -> str:
    if value >= 1000:
        return f"{value / 1000:.1f}k"
    return f"{value:.1f}"


def _gap(top: float, bottom: float) -> Optional[float]:
    """Signed top-minus-bottom gap when it clears the 5-point threshold, else None."""
    diff = top - bottom
    # Rounded so float noise (0.3 - 0.25) does not fall under the boundary.
    if round(abs(diff), 9) >= TITLE_GAP_THRESHOLD:
        return diff
    return None


def velocity_observation(counts: Dict[str, int], total: int) -> str:
    above = counts.get("exploding", 0) + counts.get("outperforming", 0)
    return (
        f"{above} of {total} videos are running above the channel's views-per-day baseline "
        f"({counts.get('exploding', 0)} Exploding, {counts.get('outperforming', 0)} Outperforming), "
        f"while {counts.get('underperforming', 0)} are Underperforming."
    )


def duration_observation(duration_top: Optional[float], duration_bottom: Optional[float]) -> Optional[str]:
    if duration_top is None or duration_bottom is None:
        return None
    diff = duration_top - duration_bottom
    if abs(diff) <= DURATION_GAP_SECONDS:
        return None
    direction = "longer" if diff > 0 else "shorter"
    return (
        f"Top-quartile videos average {format_duration(duration_top)}, vs {format_duration(duration_bottom)} "
        f"for the bottom quartile: {format_duration(abs(diff))} {direction} on average."
    )


def numerals_observation(numerals_gap: Optional[float], top: TitleMetrics, bottom: TitleMetrics) -> Optional[str]:
    if numerals_gap is None:
        return None
    top_pct = format_pct(top.pct_with_numbers)
    bottom_pct = format_pct(bottom.pct_with_numbers)
    if numerals_gap > 0:
        return (
            f"{top_pct} of top-quartile titles contain numbers vs {bottom_pct} of bottom-quartile titles; "
            "numerals correlate with higher views per day."
        )
    return (
        f"Only {top_pct} of top-quartile titles contain numbers vs {bottom_pct} of bottom-quartile titles; "
        "numerals correlate with lower views per day on this channel."
    )


def emotional_observation(emotional_gap: Optional[float], top: TitleMetrics, bottom: TitleMetrics) -> Optional[str]:
    if emotional_gap is None:
        return None
    top_pct = format_pct(top.pct_with_emotional)
    bottom_pct = format_pct(bottom.pct_with_emotional)
    if emotional_gap > 0:
        return (
            f"Emotional keywords appear in {top_pct} of top-quartile titles vs {bottom_pct} of bottom-quartile titles; "
            "high-intensity wording is associated with faster view velocity."
        )
    return (
        f"Bottom-quartile titles lean on emotional keywords more heavily ({bottom_pct} vs {top_pct} in the top quartile); "
        "intensity wording alone is not driving velocity."
    )


def cadence_observation(cadence: UploadCadence) -> str:
    rhythm = (
        f"The channel uploads every {cadence.avg_days_between_uploads:.1f} days on average "
        f"({cadence.uploads_per_week:.1f} uploads/week)"
    )
    if cadence.best_day_of_week and cadence.best_hour_bucket:
        return (
            f"{rhythm}; {cadence.best_day_of_week} {cadence.best_hour_bucket} uploads (UTC) perform best "
            f"at {format_vpd(cadence.best_day_avg_vpd)} views/day for that weekday."
        )
    return f"{rhythm}; there is not enough history to identify a best upload slot."


def format_observation(clusters: Sequence[FormatCluster]) -> Optional[str]:
    if not clusters:
        return None
    top = clusters[0]
    text = (
        f"\"{top.label}\" is the strongest title format at {format_vpd(top.avg_views_per_day)} views/day "
        f"across {top.count} video{'s' if top.count != 1 else ''}"
    )
    if len(clusters) > 1:
        second = clusters[1]
        text += f", ahead of \"{second.label}\" at {format_vpd(second.avg_views_per_day)} views/day"
    return text + "."


def engagement_observation(engagement_top: Optional[float], engagement_bottom: Optional[float]) -> Optional[str]:
    if engagement_top is None or engagement_bottom is None:
        return None
    top_pct = format_pct(engagement_top)
    bottom_pct = format_pct(engagement_bottom)
    if engagement_top > engagement_bottom * ENGAGEMENT_BAND:
        return (
            f"Higher-velocity videos also show stronger engagement ({top_pct} vs {bottom_pct}), "
            "suggesting topic selection drives both metrics."
        )
    if engagement_bottom > engagement_top * ENGAGEMENT_BAND:
        return (
            f"Engagement rate does not predict velocity: bottom-quartile videos average higher engagement "
            f"({bottom_pct}) than the top ({top_pct}), so view speed is driven by other factors."
        )
    return (
        f"Engagement rates are similar across quartiles (top: {top_pct}, bottom: {bottom_pct}), "
        "suggesting engagement rate alone does not determine velocity."
    )


def keyword_observation(keywords: Sequence[Tuple[str, int]]) -> Optional[str]:
    if not keywords:
        return None
    quoted = ", ".join(f"\"{word}\"" for word, _ in keywords[:3])
    return f"Top-performing titles feature keywords like {quoted}, which consistently drive higher view velocity."


def build_experiments(
    duration_top: Optional[float],
    channel_avg_vpd: float,
    cadence: UploadCadence,
    clusters: Sequence[FormatCluster],
    numerals_gap: Optional[float],
    emotional_gap: Optional[float],
) -> List[str]:
    experiments = []

    if duration_top is not None:
        experiments.append(
            f"Replicate the top-quartile runtime: produce the next 3 videos at roughly {format_duration(duration_top)} "
            f"and compare views/day against the {format_vpd(channel_avg_vpd)} channel average."
        )

    if cadence.best_day_of_week and cadence.best_hour_bucket:
        experiments.append(
            f"Test the best slot: publish the next 4 uploads on {cadence.best_day_of_week} in the "
            f"{cadence.best_hour_bucket} window (UTC) and compare views/day with off-slot uploads."
        )
    else:
        experiments.append(
            "Test a fixed publishing slot: hold day and hour constant for the next 4 uploads to build a cadence baseline."
        )

    if clusters:
        top = clusters[0]
        experiments.append(
            f"Build a 3-part series using the \"{top.label}\" format and track whether it holds "
            f"{format_vpd(top.avg_views_per_day)} views/day."
        )

    if numerals_gap is not None and numerals_gap > 0:
        experiments.append(
            "Put a specific number (ranking, year, or count) in the next 5 titles and compare views/day with unnumbered titles."
        )

    if emotional_gap is not None:
        if emotional_gap > 0:
            experiments.append(
                "Add one high-intensity keyword (e.g. \"insane\", \"legendary\") to the next 5 titles and measure the lift in views/day."
            )
        else:
            experiments.append(
                "Drop intensity keywords from the next 5 titles in favour of plain descriptive phrasing and measure views/day."
            )

    for generic in GENERIC_EXPERIMENTS:
        if len(experiments) >= MIN_EXPERIMENTS:
            break
        experiments.append(generic)

    return experiments[:MAX_EXPERIMENTS]


def synthesize_insights(
    *,
    velocity_counts: Dict[str, int],
    total_videos: int,
    duration_top: Optional[float],
    duration_bottom: Optional[float],
    engagement_top: Optional[float],
    engagement_bottom: Optional[float],
    title_top: TitleMetrics,
    title_bottom: TitleMetrics,
    cadence: UploadCadence,
    clusters: Sequence[FormatCluster],
    keywords: Sequence[Tuple[str, int]],
    channel_avg_vpd: float,
) -> Dict[str, List[str]]:
    numerals_gap = _gap(title_top.pct_with_numbers, title_bottom.pct_with_numbers)
    emotional_gap = _gap(title_top.pct_with_emotional, title_bottom.pct_with_emotional)

    candidates = [
        velocity_observation(velocity_counts, total_videos),
        duration_observation(duration_top, duration_bottom),
        numerals_observation(numerals_gap, title_top, title_bottom),
        emotional_observation(emotional_gap, title_top, title_bottom),
        cadence_observation(cadence),
        format_observation(clusters),
        engagement_observation(engagement_top, engagement_bottom),
        keyword_observation(keywords),
    ]

    return {
        "keyObservations": [sentence for sentence in candidates if sentence],
        "recommendedExperiments": build_experiments(
            duration_top, channel_avg_vpd, cadence, clusters, numerals_gap, emotional_gap
        ),
    }
