import unittest
from datetime import datetime, timezone

from analytics.formats import cluster_formats, mentions_country
from analytics.records import VideoMetric
from analytics.titles import analyze_title, extract_keywords, title_metrics

NOW = datetime(2026, 6, 1, tzinfo=timezone.utc)


def _video(title, views_per_day=100.0, engagement=0.05, video_id=None):
    return VideoMetric(
        video_id=video_id or title,
        title=title,
        published_at=NOW,
        view_count=int(views_per_day),
        like_count=0,
        comment_count=0,
        duration_seconds=300,
        days_since_publish=1,
        views_per_day=views_per_day,
        engagement_rate=engagement,
    )


class TitleFeatureTests(unittest.TestCase):
    def test_messi_goat_title(self):
        features = analyze_title("Is Messi the GOAT? (2026 Preview)")
        self.assertTrue(features.has_numbers)
        self.assertTrue(features.has_question)
        self.assertFalse(features.has_comparison)
        self.assertTrue(features.has_emotional)
        self.assertEqual(features.char_length, len("Is Messi the GOAT? (2026 Preview)"))
        self.assertEqual(features.word_count, 6)

    def test_comparison_is_word_bounded(self):
        self.assertTrue(analyze_title("Brazil VS Argentina").has_comparison)
        self.assertTrue(analyze_title("Messi versus Ronaldo").has_comparison)
        self.assertTrue(analyze_title("USA vs. Mexico").has_comparison)
        self.assertFalse(analyze_title("Canvas tips").has_comparison)
        self.assertFalse(analyze_title("Universal reactions").has_comparison)

    def test_emotional_keyword_needs_whole_token(self):
        self.assertTrue(analyze_title("This save was INSANE!!!").has_emotional)
        self.assertFalse(analyze_title("Goatee grooming guide").has_emotional)

    def test_word_count_trims_whitespace(self):
        self.assertEqual(analyze_title("   two   words  ").word_count, 2)
        self.assertEqual(analyze_title("").word_count, 0)


class TitleMetricsTests(unittest.TestCase):
    def test_aggregates(self):
        metrics = title_metrics([
            _video("Top 10 goals"),
            _video("Who wins? Brazil vs France"),
            _video("Legendary comeback"),
            _video("Quiet training day"),
        ])
        self.assertAlmostEqual(metrics.pct_with_numbers, 0.25)
        self.assertAlmostEqual(metrics.pct_with_question, 0.25)
        self.assertAlmostEqual(metrics.pct_with_comparison, 0.25)
        self.assertAlmostEqual(metrics.pct_with_emotional, 0.25)
        self.assertAlmostEqual(metrics.avg_word_count, (3 + 5 + 2 + 3) / 4)

    def test_empty_set_is_all_zero(self):
        metrics = title_metrics([])
        self.assertEqual(
            metrics.to_dict(),
            {
                "pctWithNumbers": 0.0,
                "pctWithQuestion": 0.0,
                "pctWithComparison": 0.0,
                "pctWithEmotional": 0.0,
                "avgCharLength": 0.0,
                "avgWordCount": 0.0,
            },
        )


class KeywordExtractorTests(unittest.TestCase):
    def test_frequency_with_stopwords_and_short_tokens_removed(self):
        videos = [
            _video("World Cup: the final is here"),
            _video("Messi vs Mbappe - World Cup final"),
            _video("A Messi masterclass"),
        ]
        keywords = extract_keywords(videos)
        self.assertEqual(keywords[:3], [("world", 2), ("cup", 2), ("final", 2)])
        self.assertIn(("messi", 2), keywords)
        words = [word for word, _ in keywords]
        self.assertNotIn("the", words)
        self.assertNotIn("vs", words)
        self.assertNotIn("a", words)

    def test_punctuation_splits_tokens(self):
        keywords = extract_keywords([_video("Brazil/Argentina rivalry")])
        self.assertEqual([word for word, _ in keywords], ["brazil", "argentina", "rivalry"])

    def test_idempotent_and_capped_at_ten(self):
        videos = [_video(" ".join(f"word{i}" for i in range(15)))]
        first = extract_keywords(videos)
        self.assertEqual(len(first), 10)
        self.assertEqual(first, extract_keywords(videos))
        self.assertEqual(first[0], ("word0", 1))


class FormatClusterTests(unittest.TestCase):
    def test_clusters_overlap_and_sort_descending(self):
        videos = [
            _video("Why is Brazil the best?", views_per_day=500.0, engagement=0.10, video_id="a"),
            _video("Top 5 saves", views_per_day=100.0, engagement=None, video_id="b"),
            _video("England vs France recap", views_per_day=300.0, engagement=0.02, video_id="c"),
        ]
        clusters = cluster_formats(videos)
        names = [cluster.pattern for cluster in clusters]

        self.assertEqual(
            set(names),
            {"question", "is_framing", "why_framing", "best_list", "head_to_head", "numbered", "country"},
        )
        total_memberships = sum(cluster.count for cluster in clusters)
        self.assertGreater(total_memberships, len(videos))

        averages = [cluster.avg_views_per_day for cluster in clusters]
        self.assertEqual(averages, sorted(averages, reverse=True))

        by_name = {cluster.pattern: cluster for cluster in clusters}
        self.assertEqual(by_name["country"].count, 2)
        self.assertAlmostEqual(by_name["country"].avg_views_per_day, 400.0)
        self.assertIsNone(by_name["numbered"].avg_engagement_rate)
        self.assertAlmostEqual(by_name["head_to_head"].avg_engagement_rate, 0.02)

    def test_zero_match_clusters_dropped(self):
        clusters = cluster_formats([_video("Matchday vlog")])
        self.assertEqual(clusters, [])

    def test_ties_keep_pattern_order(self):
        clusters = cluster_formats([_video("Why is it 2026?", views_per_day=50.0)])
        self.assertEqual(
            [cluster.pattern for cluster in clusters],
            ["question", "is_framing", "why_framing", "numbered"],
        )

    def test_country_terms(self):
        self.assertTrue(mentions_country("Inside the USMNT camp"))
        self.assertTrue(mentions_country("Brazilian flair"))
        self.assertFalse(mentions_country("Join us live"))


if __name__ == "__main__":
    unittest.main()
