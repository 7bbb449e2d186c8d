"""
Excel Exporter
Creates a multi-tab Excel workbook from a channel analytics report.
"""

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter


TITLE_FILL = PatternFill(start_color="1F4E78", end_color="1F4E78", fill_type="solid")
HEADER_FILL = PatternFill(start_color="D9D9D9", end_color="D9D9D9", fill_type="solid")
SECTION_FILL = PatternFill(start_color="EEF3F8", end_color="EEF3F8", fill_type="solid")

VIDEO_COLUMNS = [
    ("Title", "title"),
    ("Video URL", None),
    ("Published", "publishedAt"),
    ("Views", "viewCount"),
    ("Likes", "likeCount"),
    ("Comments", "commentCount"),
    ("Duration (s)", "durationSeconds"),
    ("Days Live", "daysSincePublish"),
    ("Views/Day", "viewsPerDay"),
    ("Engagement Rate", "engagementRate"),
    ("Velocity Score", "velocityScore"),
    ("Velocity", "velocityLabel"),
]


def clean_cell(value):
    """Strip control characters that openpyxl refuses to write."""
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value


def autosize_columns(worksheet, max_width=80):
    """Auto-size columns to content width with a reasonable cap."""
    widths = {}
    for row in worksheet.iter_rows():
        for cell in row:
            value = cell.value
            if value is None:
                continue
            length = len(str(value))
            widths[cell.column] = max(widths.get(cell.column, 0), length)

    for col_idx, width in widths.items():
        worksheet.column_dimensions[get_column_letter(col_idx)].width = min(max(width + 2, 10), max_width)


def style_title_row(worksheet, end_column):
    """Style and merge row 1 as title."""
    if end_column > 1:
        worksheet.merge_cells(start_row=1, start_column=1, end_row=1, end_column=end_column)
    cell = worksheet.cell(row=1, column=1)
    cell.fill = TITLE_FILL
    cell.font = Font(bold=True, color="FFFFFF", size=13)
    cell.alignment = Alignment(horizontal="center", vertical="center")


def style_header_row(worksheet, row_idx, end_column):
    """Style a header row."""
    for col in range(1, end_column + 1):
        cell = worksheet.cell(row=row_idx, column=col)
        cell.fill = HEADER_FILL
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)


def style_section_row(worksheet, row_idx, end_column):
    """Style section rows for readability."""
    for col in range(1, end_column + 1):
        cell = worksheet.cell(row=row_idx, column=col)
        cell.fill = SECTION_FILL
        cell.font = Font(bold=True)


class ReportExcelExporter:
    def __init__(self, report):
        self.report = report

    def create_summary_tab(self, workbook):
        ws = workbook.create_sheet("Summary")
        summary = self.report["summary"]
        distribution = summary["velocityDistribution"]
        cadence = self.report["uploadCadence"]

        rows = [
            ["CHANNEL ANALYTICS - SUMMARY"],
            [""],
            ["Channel", ""],
            ["Channel ID", clean_cell(self.report["channelId"])],
            ["Average Views/Day", self.report["channelAvgVpd"]],
            [""],
            ["Quartile Comparison", ""],
            ["Avg Duration Top (s)", summary["avgDurationTop"]],
            ["Avg Duration Bottom (s)", summary["avgDurationBottom"]],
            ["Avg Engagement Top", summary["avgEngagementTop"]],
            ["Avg Engagement Bottom", summary["avgEngagementBottom"]],
            [""],
            ["Velocity Distribution", ""],
            ["Exploding", distribution["exploding"]],
            ["Outperforming", distribution["outperforming"]],
            ["Baseline", distribution["baseline"]],
            ["Underperforming", distribution["underperforming"]],
            [""],
            ["Upload Cadence", ""],
            ["Avg Days Between Uploads", cadence["avgDaysBetweenUploads"]],
            ["Uploads per Week", cadence["uploadsPerWeek"]],
            ["Best Day", cadence["bestDayOfWeek"] or "N/A"],
            ["Best Hour Window (UTC)", cadence["bestHourBucket"] or "N/A"],
        ]

        for row in rows:
            ws.append(row)

        style_title_row(ws, 2)
        for section_row in (3, 7, 13, 19):
            style_section_row(ws, section_row, 2)
        ws.freeze_panes = "A4"
        autosize_columns(ws)

    def create_video_tab(self, workbook, sheet_name, videos):
        ws = workbook.create_sheet(sheet_name)
        ws.append([sheet_name.upper()])
        ws.append([header for header, _ in VIDEO_COLUMNS])

        for video in videos:
            row = []
            for _, key in VIDEO_COLUMNS:
                if key is None:
                    row.append(f"https://youtube.com/watch?v={video['videoId']}")
                else:
                    row.append(clean_cell(video.get(key)))
            ws.append(row)

        style_title_row(ws, len(VIDEO_COLUMNS))
        style_header_row(ws, 2, len(VIDEO_COLUMNS))
        ws.freeze_panes = "A3"
        autosize_columns(ws)

    def create_titles_tab(self, workbook):
        ws = workbook.create_sheet("Titles & Formats")
        top = self.report["titleAnalysis"]["topQuartile"]
        bottom = self.report["titleAnalysis"]["bottomQuartile"]

        ws.append(["TITLE STRUCTURE AND FORMATS"])
        ws.append(["Metric", "Top Quartile", "Bottom Quartile"])
        for label, key in [
            ("% with numbers", "pctWithNumbers"),
            ("% with question", "pctWithQuestion"),
            ("% with vs/versus", "pctWithComparison"),
            ("% with emotional keyword", "pctWithEmotional"),
            ("Avg characters", "avgCharLength"),
            ("Avg words", "avgWordCount"),
        ]:
            ws.append([label, top[key], bottom[key]])

        ws.append([""])
        format_header_row = ws.max_row + 1
        ws.append(["Format", "Videos", "Avg Views/Day", "Avg Engagement"])
        for cluster in self.report["formatClusters"]:
            ws.append([clean_cell(cluster["label"]), cluster["count"], cluster["avgViewsPerDay"], cluster["avgEngagementRate"]])

        ws.append([""])
        keyword_header_row = ws.max_row + 1
        ws.append(["Top Keyword", "Count"])
        for keyword in self.report["summary"]["topTitleKeywords"]:
            ws.append([clean_cell(keyword["word"]), keyword["count"]])

        style_title_row(ws, 4)
        style_header_row(ws, 2, 3)
        style_header_row(ws, format_header_row, 4)
        style_header_row(ws, keyword_header_row, 2)
        autosize_columns(ws)

    def create_insights_tab(self, workbook):
        ws = workbook.create_sheet("Strategic Summary")
        summary = self.report.get("aiSummary", {})

        ws.append(["STRATEGIC SUMMARY"])
        ws.append(["Key Observations"])
        observations_row = ws.max_row
        for observation in summary.get("keyObservations", []):
            ws.append([clean_cell(observation)])

        ws.append([""])
        ws.append(["Recommended Experiments"])
        experiments_row = ws.max_row
        for idx, experiment in enumerate(summary.get("recommendedExperiments", []), 1):
            ws.append([clean_cell(f"{idx}. {experiment}")])

        style_title_row(ws, 1)
        style_section_row(ws, observations_row, 1)
        style_section_row(ws, experiments_row, 1)
        for row in ws.iter_rows(min_row=2):
            for cell in row:
                cell.alignment = Alignment(wrap_text=True, vertical="top")
        ws.column_dimensions["A"].width = 120

    def export(self, output_path):
        workbook = Workbook()
        workbook.remove(workbook.active)

        self.create_summary_tab(workbook)
        self.create_video_tab(workbook, "Top Videos", self.report["topVideos"])
        self.create_video_tab(workbook, "Bottom Videos", self.report["bottomVideos"])
        self.create_titles_tab(workbook)
        self.create_insights_tab(workbook)

        workbook.save(output_path)
        return str(output_path)
