import json
import sys
from pathlib import Path

from analytics.channel_fetcher import YouTubeChannelFetcher
from analytics.errors import ChannelAuditError
from analytics.export_to_excel import ReportExcelExporter
from analytics.generate_markdown_report import MarkdownReportGenerator
from web.config import AppConfig
from web.services.audit_runner import clamp_max_results, is_channel_id, resolve_channel, run_channel_audit


def run_step(step_name, fn):
    print(f"\n🚀 Running Step: {step_name}...")
    try:
        result = fn()
    except Exception as e:
        print(f"❌ Exception in {step_name}: {e}")
        return False, None
    return True, result


def main():
    if len(sys.argv) < 2:
        print("Usage: python3 main.py \"CHANNEL_ID_OR_@HANDLE\" [MAX_RESULTS]")
        sys.exit(1)

    config = AppConfig.from_env()
    if not config.youtube_api_key:
        print("❌ Error: YOUTUBE_API_KEY not found in .env file")
        sys.exit(1)

    channel = sys.argv[1].strip()
    max_results = clamp_max_results(
        sys.argv[2] if len(sys.argv) > 2 else None,
        default=config.default_max_results,
        cap=config.max_results_cap,
    )
    fetcher = YouTubeChannelFetcher(config.youtube_api_key, timeout=config.youtube_timeout_seconds)

    try:
        # Step 1: Resolve channel
        channel_title = channel
        if is_channel_id(channel):
            channel_id = channel
        else:
            print(f"🔍 Resolving handle {channel}...")
            resolved = resolve_channel(channel, config.youtube_api_key, fetcher=fetcher)
            channel_id = resolved["channelId"]
            channel_title = resolved["title"] or channel
            print(f"   Channel: {channel_title} ({resolved['subscriberCount']:,} subscribers)")
        print(f"✅ Identified Channel ID: {channel_id}")

        # Step 2: Fetch + analyze
        report = run_channel_audit(
            channel_id,
            config.youtube_api_key,
            max_results,
            logger=lambda message: print(f"   {message}"),
            fetcher=fetcher,
        )
    except ChannelAuditError as e:
        print(f"❌ Error: {e}")
        sys.exit(1)
    except ValueError as e:
        print(f"❌ Validation Error: {e}")
        sys.exit(1)

    output_dir = Path(config.output_folder) / channel_id
    output_dir.mkdir(parents=True, exist_ok=True)

    # Step 3: Save JSON report
    report_path = output_dir / "report.json"
    success, _ = run_step(
        "Saving JSON Report",
        lambda: report_path.write_text(json.dumps(report, indent=2, ensure_ascii=False), encoding="utf-8"),
    )
    if not success:
        sys.exit(1)

    # Step 4: Export to Excel
    excel_path = output_dir / "report.xlsx"
    success, _ = run_step("Exporting to Excel", lambda: ReportExcelExporter(report).export(excel_path))
    if not success:
        # We don't exit here because we still want to generate the markdown report
        print("⚠️ Excel export failed, proceeding to Markdown report.")

    # Step 5: Generate Markdown Report
    markdown_path = output_dir / "report.md"
    run_step(
        "Generating Markdown Report",
        lambda: markdown_path.write_text(
            MarkdownReportGenerator(report, channel_title=channel_title).generate(), encoding="utf-8"
        ),
    )

    print("\n💡 Key Observations:")
    for observation in report["aiSummary"]["keyObservations"]:
        print(f"   - {observation}")

    print(f"\n📁 Reports saved to: {output_dir}")
    print("\n✅ Channel Analysis Complete!")


if __name__ == "__main__":
    main()
