"""
Markdown Report Generator
Renders a channel analytics report as a markdown document.
"""

from datetime import datetime

from analytics.insights import format_duration, format_pct, format_vpd


def _fmt_optional_duration(value):
    return format_duration(value) if value is not None else "N/A"


def _fmt_optional_pct(value):
    return format_pct(value) if value is not None else "N/A"


class MarkdownReportGenerator:
    def __init__(self, report, channel_title=None):
        """Initialize generator with an analytics report"""
        self.report = report
        self.channel_title = channel_title or report.get("channelId", "")

    def generate_header(self):
        """Generate report header"""
        date_str = datetime.now().strftime('%B %d, %Y')
        video_count = sum(self.report["summary"]["velocityDistribution"].values())

        return f"""# Channel Performance Report
**Channel:** {self.channel_title}
**Date:** {date_str}
**Videos Analyzed:** {video_count}
**Channel Average:** {self.report['channelAvgVpd']} views/day

---

"""

    def generate_strategic_summary(self):
        """Observations and experiments"""
        summary = self.report.get("aiSummary", {})
        text = "## Strategic Summary\n\n### Key Observations\n\n"
        for observation in summary.get("keyObservations", []):
            text += f"- {observation}\n"

        text += "\n### Recommended Experiments\n\n"
        for idx, experiment in enumerate(summary.get("recommendedExperiments", []), 1):
            text += f"{idx}. {experiment}\n"

        return text + "\n---\n\n"

    def generate_quartile_comparison(self):
        summary = self.report["summary"]
        top = self.report["titleAnalysis"]["topQuartile"]
        bottom = self.report["titleAnalysis"]["bottomQuartile"]
        distribution = summary["velocityDistribution"]

        text = f"""## Top vs Bottom Quartile

| Metric | Top Quartile | Bottom Quartile |
|---|---|---|
| Avg duration | {_fmt_optional_duration(summary['avgDurationTop'])} | {_fmt_optional_duration(summary['avgDurationBottom'])} |
| Avg engagement | {_fmt_optional_pct(summary['avgEngagementTop'])} | {_fmt_optional_pct(summary['avgEngagementBottom'])} |
| Titles with numbers | {format_pct(top['pctWithNumbers'])} | {format_pct(bottom['pctWithNumbers'])} |
| Titles with a question | {format_pct(top['pctWithQuestion'])} | {format_pct(bottom['pctWithQuestion'])} |
| Titles with vs/versus | {format_pct(top['pctWithComparison'])} | {format_pct(bottom['pctWithComparison'])} |
| Titles with emotional keywords | {format_pct(top['pctWithEmotional'])} | {format_pct(bottom['pctWithEmotional'])} |
| Avg title length | {top['avgCharLength']} chars | {bottom['avgCharLength']} chars |
| Avg word count | {top['avgWordCount']} | {bottom['avgWordCount']} |

**Velocity distribution:** 🚀 {distribution['exploding']} Exploding · 📈 {distribution['outperforming']} Outperforming · ➖ {distribution['baseline']} Baseline · 📉 {distribution['underperforming']} Underperforming

**Top title keywords:**
"""
        for keyword in summary["topTitleKeywords"]:
            text += f"- `{keyword['word']}` ({keyword['count']})\n"

        return text + "\n---\n\n"

    def generate_cadence_and_formats(self):
        cadence = self.report["uploadCadence"]
        text = f"""## Upload Cadence

- Average gap between uploads: {cadence['avgDaysBetweenUploads']} days
- Uploads per week: {cadence['uploadsPerWeek']}
- Best day: {cadence['bestDayOfWeek'] or 'N/A'} ({cadence['bestDayAvgVpd']} views/day)
- Best hour window (UTC): {cadence['bestHourBucket'] or 'N/A'} ({cadence['bestHourBucketAvgVpd']} views/day)

## Title Formats

| Format | Videos | Avg Views/Day | Avg Engagement |
|---|---|---|---|
"""
        for cluster in self.report["formatClusters"]:
            text += (
                f"| {cluster['label']} | {cluster['count']} | {format_vpd(cluster['avgViewsPerDay'])} "
                f"| {_fmt_optional_pct(cluster['avgEngagementRate'])} |\n"
            )

        return text + "\n---\n\n"

    def generate_video_table(self, heading, videos):
        text = f"## {heading}\n\n| Title | Views | Views/Day | Velocity | Engagement | Duration | Published |\n|---|---|---|---|---|---|---|\n"
        for video in videos:
            title = video["title"].replace("|", "\\|")
            text += (
                f"| [{title}](https://youtube.com/watch?v={video['videoId']}) | {video['viewCount']:,} "
                f"| {format_vpd(video['viewsPerDay'])} | {video['velocityLabel']} "
                f"| {_fmt_optional_pct(video['engagementRate'])} | {format_duration(video['durationSeconds'])} "
                f"| {video['publishedAt'][:10]} |\n"
            )
        return text + "\n"

    def generate(self):
        """Generate complete report"""
        return "".join([
            self.generate_header(),
            self.generate_strategic_summary(),
            self.generate_quartile_comparison(),
            self.generate_cadence_and_formats(),
            self.generate_video_table("Top Videos by Views/Day", self.report["topVideos"]),
            self.generate_video_table("Bottom Videos by Views/Day", self.report["bottomVideos"]),
        ])
