import unittest
from datetime import datetime, timedelta, timezone

from analytics.metrics import (
    apply_velocity,
    calculate_metric,
    channel_average,
    classify_velocity,
    duration_seconds,
    quartile_size,
    rank_by_views_per_day,
    segment_quartiles,
    velocity_distribution,
)
from analytics.records import RawVideoRecord, VideoMetric

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


def _record(video_id="v1", views=1000, likes=50, comments=10, age=timedelta(days=10), duration="PT5M"):
    return RawVideoRecord(
        video_id=video_id,
        title=f"Video {video_id}",
        published_at=NOW - age,
        view_count=views,
        like_count=likes,
        comment_count=comments,
        duration=duration,
    )


def _metric(video_id, views_per_day, duration=300):
    return VideoMetric(
        video_id=video_id,
        title=video_id,
        published_at=NOW,
        view_count=int(views_per_day),
        like_count=0,
        comment_count=0,
        duration_seconds=duration,
        days_since_publish=1,
        views_per_day=views_per_day,
        engagement_rate=None,
    )


class DurationParserTests(unittest.TestCase):
    def test_full_and_partial_tokens(self):
        self.assertEqual(duration_seconds("PT1H2M3S"), 3723)
        self.assertEqual(duration_seconds("PT2M30S"), 150)
        self.assertEqual(duration_seconds("PT45S"), 45)
        self.assertEqual(duration_seconds("PT1H"), 3600)

    def test_unparseable_tokens_are_zero(self):
        self.assertEqual(duration_seconds(""), 0)
        self.assertEqual(duration_seconds(None), 0)
        self.assertEqual(duration_seconds("P0D"), 0)
        self.assertEqual(duration_seconds("garbage"), 0)


class MetricCalculatorTests(unittest.TestCase):
    def test_views_per_day_and_engagement(self):
        metric = calculate_metric(_record(views=1000, likes=50, comments=10, age=timedelta(days=10)), NOW)
        self.assertEqual(metric.days_since_publish, 10)
        self.assertAlmostEqual(metric.views_per_day, 100.0)
        self.assertAlmostEqual(metric.engagement_rate, 0.06)
        self.assertEqual(metric.duration_seconds, 300)
        self.assertIsNone(metric.velocity_label)

    def test_days_since_publish_is_floored_and_at_least_one(self):
        for age in (timedelta(seconds=5), timedelta(hours=2), timedelta(hours=23, minutes=59), timedelta(0)):
            metric = calculate_metric(_record(age=age), NOW)
            self.assertEqual(metric.days_since_publish, 1)

        self.assertEqual(calculate_metric(_record(age=timedelta(days=3, hours=23)), NOW).days_since_publish, 3)

    def test_future_timestamp_still_one_day(self):
        metric = calculate_metric(_record(age=-timedelta(days=2)), NOW)
        self.assertEqual(metric.days_since_publish, 1)

    def test_zero_views_gives_null_engagement(self):
        metric = calculate_metric(_record(views=0, likes=3, comments=1), NOW)
        self.assertIsNone(metric.engagement_rate)
        self.assertEqual(metric.views_per_day, 0)


class VelocityClassifierTests(unittest.TestCase):
    def test_threshold_boundaries_are_inclusive(self):
        self.assertEqual(classify_velocity(1.5), "Exploding")
        self.assertEqual(classify_velocity(1.499999), "Outperforming")
        self.assertEqual(classify_velocity(1.1), "Outperforming")
        self.assertEqual(classify_velocity(1.099999), "Baseline")
        self.assertEqual(classify_velocity(0.9), "Baseline")
        self.assertEqual(classify_velocity(0.899999), "Underperforming")
        self.assertEqual(classify_velocity(0), "Underperforming")

    def test_apply_velocity_returns_new_metric(self):
        original = _metric("a", 150.0)
        scored = apply_velocity(original, 100.0)
        self.assertAlmostEqual(scored.velocity_score, 1.5)
        self.assertEqual(scored.velocity_label, "Exploding")
        self.assertIsNone(original.velocity_score)

    def test_zero_channel_average_uses_one(self):
        scored = apply_velocity(_metric("a", 0.0), 0.0)
        self.assertEqual(scored.velocity_score, 0.0)
        self.assertEqual(scored.velocity_label, "Underperforming")

    def test_channel_average_and_distribution(self):
        metrics = [_metric("a", 400.0), _metric("b", 100.0), _metric("c", 100.0)]
        average = channel_average(metrics)
        self.assertAlmostEqual(average, 200.0)
        scored = [apply_velocity(metric, average) for metric in metrics]
        self.assertEqual(
            velocity_distribution(scored),
            {"exploding": 1, "outperforming": 0, "baseline": 0, "underperforming": 2},
        )
        self.assertEqual(channel_average([]), 0.0)


class QuartileSegmenterTests(unittest.TestCase):
    def test_quartile_size(self):
        self.assertEqual(quartile_size(0), 1)
        self.assertEqual(quartile_size(1), 1)
        self.assertEqual(quartile_size(7), 1)
        self.assertEqual(quartile_size(8), 2)
        self.assertEqual(quartile_size(100), 25)

    def test_single_video_is_both_quartiles(self):
        ranked = [_metric("only", 10.0)]
        top, bottom = segment_quartiles(ranked)
        self.assertEqual(top, bottom)
        self.assertEqual(top[0].video_id, "only")

    def test_rank_is_stable_and_slices_ends(self):
        metrics = [
            _metric("a", 50.0), _metric("b", 200.0), _metric("c", 50.0), _metric("d", 10.0),
            _metric("e", 300.0), _metric("f", 50.0), _metric("g", 1.0), _metric("h", 75.0),
        ]
        ranked = rank_by_views_per_day(metrics)
        self.assertEqual([m.video_id for m in ranked], ["e", "b", "h", "a", "c", "f", "d", "g"])

        top, bottom = segment_quartiles(ranked)
        self.assertEqual([m.video_id for m in top], ["e", "b"])
        self.assertEqual([m.video_id for m in bottom], ["d", "g"])

    def test_two_videos_take_one_each(self):
        ranked = rank_by_views_per_day([_metric("a", 1.0), _metric("b", 2.0)])
        top, bottom = segment_quartiles(ranked)
        self.assertEqual([m.video_id for m in top], ["b"])
        self.assertEqual([m.video_id for m in bottom], ["a"])

    def test_empty_input(self):
        self.assertEqual(segment_quartiles([]), ([], []))


if __name__ == "__main__":
    unittest.main()
