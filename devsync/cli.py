"""Command line entry point.

  devsync analyze ./project [--output report.txt] [--validate]
  devsync validate report.txt
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from devsync.config import get_settings
from devsync.schemas.detector_config import DetectorConfig
from devsync.services.analysis_service import AnalysisService
from devsync.services.collector_service import CollectorService
from devsync.services.grading_service import GradingService, format_grade_report
from devsync.services.report_service import ReportService
from devsync.services.validation_service import ValidationService

logger = logging.getLogger(__name__)


def cmd_analyze(path: str, output: Optional[str], check: bool) -> int:
    """Analyze ``path``; returns 1 only when ``check`` finds an inconsistent report."""
    settings = get_settings()
    service = AnalysisService(
        config=DetectorConfig.from_settings(settings),
        collector=CollectorService(settings.excluded_patterns, settings.source_extensions),
    )
    result = service.analyze(path)
    report = ReportService().render(result)
    grade = GradingService().calculate_grade(result.severity_counts, result.total_loc)
    logger.info(str(grade))

    if output:
        Path(output).write_text(report, encoding="utf-8")
        print(f"Report written to {output}")
    else:
        print(report)
    print(format_grade_report(grade))

    if check:
        return _print_validation(report)
    return 0


def cmd_validate(report_path: str) -> int:
    try:
        text = Path(report_path).read_text(encoding="utf-8")
    except OSError as e:
        print(f"Error: cannot read report {report_path}: {e}", file=sys.stderr)
        return 1
    return _print_validation(text)


def _print_validation(text: str) -> int:
    validation = ValidationService().validate(text)
    if validation.is_valid:
        print(f"Report is consistent ({validation.extracted_data['total_issues']} issues)")
        return 0
    print(f"Report is inconsistent ({len(validation.errors)} problems):", file=sys.stderr)
    for error in validation.errors:
        print(f"  - {error}", file=sys.stderr)
    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="devsync",
        description="DevSync - Java code-quality analyzer with a verifiable text report.",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    analyze_parser = subparsers.add_parser("analyze", help="Analyze a Java source tree.")
    analyze_parser.add_argument("path", nargs="?", default=".", help="Project root (default: current directory)")
    analyze_parser.add_argument("--output", "-o", help="Write the report to this file instead of stdout")
    analyze_parser.add_argument(
        "--validate",
        action="store_true",
        help="Re-parse the rendered report and check its counts",
    )

    validate_parser = subparsers.add_parser("validate", help="Check a saved report for consistency.")
    validate_parser.add_argument("report", help="Path to a report produced by 'devsync analyze'")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "analyze":
        return cmd_analyze(args.path, args.output, args.validate)
    if args.command == "validate":
        return cmd_validate(args.report)
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
