import asyncio
import argparse
import json
import logging
import sys
from typing import List
from core.engine import Engine
from core.aggregator import MetricAggregator
from core.errors import ScanError
from core.metric_registry import MetricRegistry
from fetch.http_client import MAIN_PAGE_TIMEOUT
from models.report import ScanReport

STATUS_ICONS = {"pass": "✓", "warning": "⚠", "fail": "✗"}


def render_report(report: ScanReport) -> str:
    """Plain-text rendering of a scan report."""
    lines: List[str] = [
        f"SEO report for {report.domain}",
        f"URL: {report.final_url}",
        f"Scanned: {report.scan_date}",
        "",
    ]
    for metric in report.metrics:
        icon = STATUS_ICONS.get(metric.status.value, "?")
        lines.append(f"{icon} {metric.name}: {metric.score}/100 - {metric.value}")
        for issue in metric.issues:
            lines.append(f"    issue: {issue}")
        for recommendation in metric.recommendations:
            lines.append(f"    tip:   {recommendation}")

    counts = MetricAggregator.summarize(report.metrics)
    lines.append("")
    lines.append(
        f"Overall score: {report.overall_score}/100 "
        f"({counts['pass']} passed, {counts['warning']} warnings, {counts['fail']} failed)"
    )
    return "\n".join(lines)


def render_error(error: ScanError) -> str:
    lines = [f"Scan failed ({error.category.value}): {error.message}"]
    if error.domain:
        lines.append(f"Domain: {error.domain}")
    lines.append("Suggestions:")
    lines.extend(f"  - {suggestion}" for suggestion in error.suggestions)
    return "\n".join(lines)


def main():
    parser = argparse.ArgumentParser(description="Single-page SEO scanner CLI")
    parser.add_argument("domain", nargs="?", help="Target domain (e.g., example.com or https://example.com)")
    parser.add_argument("--format", type=str, default="json", choices=["json", "text"], help="Output format (default: json)")
    parser.add_argument("--timeout", type=float, default=MAIN_PAGE_TIMEOUT, help=f"Main page timeout in seconds (default: {MAIN_PAGE_TIMEOUT:g})")
    parser.add_argument("--log-level", type=str, default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging verbosity level (default: WARNING)")
    parser.add_argument("--exclude", type=str, nargs="+", help="Exclude specific metrics (e.g., --exclude page_speed analytics)")
    parser.add_argument("--list-metrics", action="store_true", help="List all available metrics and exit")
    parser.add_argument("--headers-file", type=str, help="Path to JSON file containing additional HTTP headers (e.g., Cookie, Authorization)")
    args = parser.parse_args()

    # Configure logging
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=getattr(logging, args.log_level),
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    logger = logging.getLogger(__name__)

    # Importing the engine registered every metric
    if args.list_metrics:
        print("Available metrics:")
        print("\nPassive metrics (examine the main page):")
        for name in MetricRegistry.get_metrics_by_type("passive"):
            print(f"  - {name}")
        print("\nActive metrics (make additional HTTP requests):")
        for name in MetricRegistry.get_metrics_by_type("active"):
            print(f"  - {name}")
        return 0

    if not args.domain:
        parser.error("domain is required unless using --list-metrics")

    # Load custom headers from JSON file if provided
    custom_headers = {}
    if args.headers_file:
        try:
            with open(args.headers_file, 'r') as f:
                custom_headers = json.load(f)
        except FileNotFoundError:
            logger.error(f"Headers file not found: {args.headers_file}")
            return 2
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in headers file: {e}")
            return 2
        if not isinstance(custom_headers, dict):
            logger.error("Headers file must contain a JSON object (dictionary)")
            return 2
        logger.info(f"Loaded {len(custom_headers)} custom headers from {args.headers_file}")

    exclude_set = set(args.exclude) if args.exclude else set()
    invalid_excludes = exclude_set - set(MetricRegistry.get_all_names())
    if invalid_excludes:
        logger.error(f"Invalid metric names: {', '.join(sorted(invalid_excludes))}")
        logger.info(f"Available metrics: {', '.join(MetricRegistry.get_all_names())}")
        return 2

    async def run():
        engine = Engine(exclude_metrics=exclude_set, custom_headers=custom_headers, timeout=args.timeout)
        return await engine.scan(args.domain)

    try:
        report = asyncio.run(run())
    except ScanError as e:
        logger.info(f"Scan failed: {e!r}")
        if args.format == "json":
            print(json.dumps(e.to_dict(), indent=2))
        else:
            print(render_error(e), file=sys.stderr)
        return 1

    if args.format == "json":
        print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(render_report(report))
    return 0

if __name__ == "__main__":
    sys.exit(main())
