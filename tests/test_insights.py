import unittest

from analytics.cadence import UploadCadence
from analytics.formats import FormatCluster
from analytics.insights import (
    GENERIC_EXPERIMENTS,
    duration_observation,
    format_duration,
    format_pct,
    synthesize_insights,
)
from analytics.titles import TitleMetrics

CADENCE = UploadCadence(
    avg_days_between_uploads=3.5,
    uploads_per_week=2.0,
    best_day_of_week="Friday",
    best_day_avg_vpd=420.0,
    best_hour_bucket="evening",
    best_hour_bucket_avg_vpd=380.0,
)
CLUSTERS = [
    FormatCluster("head_to_head", "Head-to-head (vs)", 4, 900.0, 0.04),
    FormatCluster("numbered", "Numbered titles", 6, 450.0, None),
]


def _synthesize(**overrides):
    kwargs = dict(
        velocity_counts={"exploding": 2, "outperforming": 1, "baseline": 3, "underperforming": 4},
        total_videos=10,
        duration_top=600.0,
        duration_bottom=300.0,
        engagement_top=0.05,
        engagement_bottom=0.03,
        title_top=TitleMetrics(),
        title_bottom=TitleMetrics(),
        cadence=CADENCE,
        clusters=CLUSTERS,
        keywords=[("messi", 3), ("final", 2)],
        channel_avg_vpd=250.0,
    )
    kwargs.update(overrides)
    return synthesize_insights(**kwargs)


class FormattingTests(unittest.TestCase):
    def test_formatters(self):
        self.assertEqual(format_duration(600), "10m 0s")
        self.assertEqual(format_duration(125.4), "2m 5s")
        self.assertEqual(format_pct(0.6), "60%")
        self.assertEqual(format_pct(0.125), "12.5%")
        self.assertEqual(format_pct(0.0), "0%")


class ObservationRuleTests(unittest.TestCase):
    def test_velocity_and_cadence_always_emitted(self):
        observations = _synthesize(duration_top=None, duration_bottom=None, clusters=[])["keyObservations"]
        self.assertIn("3 of 10 videos", observations[0])
        self.assertIn("4 are Underperforming", observations[0])
        self.assertTrue(any("every 3.5 days" in text and "Friday evening" in text for text in observations))

    def test_duration_rule_threshold(self):
        self.assertIn("5m 0s longer", duration_observation(600.0, 300.0))
        self.assertIn("shorter", duration_observation(300.0, 600.0))
        self.assertIsNone(duration_observation(330.0, 300.0))
        self.assertIsNone(duration_observation(None, 300.0))

    def test_numerals_rule_fires_at_five_points(self):
        result = _synthesize(
            title_top=TitleMetrics(pct_with_numbers=0.30),
            title_bottom=TitleMetrics(pct_with_numbers=0.25),
        )
        numerals = [text for text in result["keyObservations"] if "contain numbers" in text]
        self.assertEqual(len(numerals), 1)
        self.assertIn("30%", numerals[0])
        self.assertIn("25%", numerals[0])
        self.assertIn("higher views per day", numerals[0])
        self.assertTrue(any("specific number" in text for text in result["recommendedExperiments"]))

    def test_numerals_rule_silent_below_threshold(self):
        result = _synthesize(
            title_top=TitleMetrics(pct_with_numbers=0.30),
            title_bottom=TitleMetrics(pct_with_numbers=0.26),
        )
        self.assertFalse(any("contain numbers" in text for text in result["keyObservations"]))

    def test_negative_numerals_gap_has_no_experiment(self):
        result = _synthesize(
            title_top=TitleMetrics(pct_with_numbers=0.1),
            title_bottom=TitleMetrics(pct_with_numbers=0.5),
        )
        self.assertTrue(any("lower views per day" in text for text in result["keyObservations"]))
        self.assertFalse(any("specific number" in text for text in result["recommendedExperiments"]))

    def test_emotional_rule_wording_flips(self):
        positive = _synthesize(
            title_top=TitleMetrics(pct_with_emotional=0.5),
            title_bottom=TitleMetrics(pct_with_emotional=0.1),
        )
        self.assertTrue(any("high-intensity wording" in text for text in positive["keyObservations"]))
        self.assertTrue(any("Add one high-intensity keyword" in text for text in positive["recommendedExperiments"]))

        negative = _synthesize(
            title_top=TitleMetrics(pct_with_emotional=0.1),
            title_bottom=TitleMetrics(pct_with_emotional=0.5),
        )
        self.assertTrue(any("lean on emotional keywords" in text for text in negative["keyObservations"]))
        self.assertTrue(any("Drop intensity keywords" in text for text in negative["recommendedExperiments"]))

    def test_top_format_contrasts_second(self):
        observations = _synthesize()["keyObservations"]
        formats = [text for text in observations if "strongest title format" in text]
        self.assertEqual(len(formats), 1)
        self.assertIn("Head-to-head (vs)", formats[0])
        self.assertIn("ahead of \"Numbered titles\"", formats[0])

        single = _synthesize(clusters=CLUSTERS[:1])["keyObservations"]
        self.assertFalse(any("ahead of" in text for text in single))

    def test_rule_order(self):
        observations = _synthesize(
            title_top=TitleMetrics(pct_with_numbers=0.5, pct_with_emotional=0.5),
        )["keyObservations"]
        self.assertEqual(len(observations), 8)
        self.assertIn("views-per-day baseline", observations[0])
        self.assertIn("Top-quartile videos average", observations[1])
        self.assertIn("contain numbers", observations[2])
        self.assertIn("Emotional keywords", observations[3])
        self.assertIn("uploads every", observations[4])
        self.assertIn("strongest title format", observations[5])
        self.assertIn("stronger engagement", observations[6])
        self.assertIn("\"messi\"", observations[7])


class ExperimentTests(unittest.TestCase):
    def test_pads_with_generic_ab_tests(self):
        experiments = _synthesize(duration_top=None, clusters=[])["recommendedExperiments"]
        self.assertEqual(len(experiments), 3)
        self.assertIn("Friday", experiments[0])
        self.assertEqual(experiments[1:], list(GENERIC_EXPERIMENTS[:2]))

    def test_caps_at_five(self):
        experiments = _synthesize(
            title_top=TitleMetrics(pct_with_numbers=0.9, pct_with_emotional=0.9),
        )["recommendedExperiments"]
        self.assertEqual(len(experiments), 5)
        self.assertIn("10m 0s", experiments[0])
        self.assertIn("Head-to-head (vs)", experiments[2])
        self.assertFalse(any(text in experiments for text in GENERIC_EXPERIMENTS))


if __name__ == "__main__":
    unittest.main()
