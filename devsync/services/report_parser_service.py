"""Parses rendered reports back into structured data."""

import logging
import re
from collections import defaultdict
from typing import Optional

from devsync.detectors.base import GLYPH_SEVERITIES, SEVERITY_ORDER, DetectorKind, Severity
from devsync.schemas.report import MethodThresholdDetails, ParsedIssue, ParsedReport
from devsync.services.report_service import (
    DETAILS_HEADER,
    FILE_HEADER,
    ISSUE_MARKER,
    NO_ISSUES_LINE,
    SECTION_HEADERS,
    SEVERITY_HEADER,
    SUMMARY_HEADER,
    TYPE_HEADER,
)

logger = logging.getLogger(__name__)

_GLYPHS = "|".join(re.escape(glyph) for glyph in sorted(GLYPH_SEVERITIES, key=len, reverse=True))
ISSUE_PATTERN = re.compile(
    rf"^{ISSUE_MARKER} (?P<glyph>{_GLYPHS}) \[(?P<kind>\w+)\] "
    r"(?P<file>.+?):(?P<line>\d+) - (?P<body>.*)$"
)
BODY_PATTERN = re.compile(
    r"^(?P<message>.*?) \| Suggestions:\s?(?P<suggestion>.*?)"
    r"(?: \| DetailedReason:\s?(?P<reason>.*))?$"
)
COUNT_PATTERN = re.compile(r"^(?P<name>[\w-]+)\s*:\s*(?P<count>\d+)$")
FILE_PATTERN = re.compile(r"^File: (?P<file>.+?) \(Total: (?P<total>\d+)\)$")
FILE_SEVERITY_PATTERN = re.compile(r"^\s+(?P<name>\w+)\s*:\s*(?P<count>\d+)$")
SUMMARY_PATTERN = re.compile(
    r"^Analyzed (?P<files>\d+) files, found (?P<total>\d+) issues "
    r"\((?P<critical>\d+) critical, (?P<high>\d+) high, (?P<medium>\d+) medium, (?P<low>\d+) low\)$"
)
LINES_PATTERN = re.compile(r"Method spans (\d+) lines \((exceeds|within) threshold of (\d+)\)")
CYCLOMATIC_PATTERN = re.compile(r"Cyclomatic complexity is (\d+) \((exceeds|within) max of (\d+)\)")

SEVERITY_NAMES = {severity.value for severity in SEVERITY_ORDER}


def parse_threshold_details(detailed_reason: Optional[str]) -> Optional[MethodThresholdDetails]:
    """Extract LongMethod metrics from a detailed reason, if present."""
    if not detailed_reason:
        return None
    lines_match = LINES_PATTERN.search(detailed_reason)
    if not lines_match:
        return None
    details = MethodThresholdDetails(
        line_count=int(lines_match.group(1)),
        exceeds_line_count=lines_match.group(2) == "exceeds",
        line_threshold=int(lines_match.group(3)),
    )
    cyclomatic = CYCLOMATIC_PATTERN.search(detailed_reason)
    if cyclomatic:
        details.cyclomatic_complexity = int(cyclomatic.group(1))
        details.exceeds_cyclomatic_complexity = cyclomatic.group(2) == "exceeds"
        details.max_cyclomatic_complexity = int(cyclomatic.group(3))
    return details


class ReportParserService:
    """Reads the text report grammar back into a ParsedReport.

    Parsing never raises on malformed input: lines that do not fit their
    section are collected in ``format_errors``.
    """

    def parse(self, text: str) -> ParsedReport:
        report = ParsedReport()
        section: Optional[str] = None
        current_file: Optional[str] = None

        for number, raw in enumerate(text.splitlines(), start=1):
            line = raw.rstrip()
            stripped = line.strip()

            header = next((h for h in SECTION_HEADERS if stripped.startswith(h)), None)
            if header:
                section = header
                current_file = None
                if header not in report.sections:
                    report.sections.append(header)
                continue
            if not stripped:
                section = None
                continue
            if stripped.startswith("-") or section is None:
                continue

            if section == SUMMARY_HEADER:
                report.summary = stripped
            elif section == SEVERITY_HEADER:
                self._parse_severity(report, number, stripped)
            elif section == TYPE_HEADER:
                self._parse_type(report, number, stripped)
            elif section == FILE_HEADER:
                current_file = self._parse_file_line(report, number, line, current_file)
            elif section == DETAILS_HEADER:
                self._parse_issue(report, number, stripped)

        if report.format_errors:
            logger.warning(f"Report has {len(report.format_errors)} malformed lines")
        return report

    def _error(self, report: ParsedReport, number: int, message: str, line: str) -> None:
        report.format_errors.append(f"Line {number}: {message}: {line!r}")

    def _parse_severity(self, report: ParsedReport, number: int, line: str) -> None:
        match = COUNT_PATTERN.match(line)
        if not match or match.group("name") not in SEVERITY_NAMES:
            self._error(report, number, "invalid severity count", line)
            return
        report.severity_counts[match.group("name")] = int(match.group("count"))

    def _parse_type(self, report: ParsedReport, number: int, line: str) -> None:
        match = COUNT_PATTERN.match(line)
        if not match:
            self._error(report, number, "invalid issue type count", line)
            return
        report.type_counts[match.group("name")] = int(match.group("count"))

    def _parse_file_line(
        self,
        report: ParsedReport,
        number: int,
        line: str,
        current_file: Optional[str],
    ) -> Optional[str]:
        file_match = FILE_PATTERN.match(line.strip())
        if file_match:
            file = file_match.group("file")
            if file in report.file_counts:
                self._error(report, number, "duplicate file entry", line)
            report.file_counts[file] = {"total": int(file_match.group("total"))}
            return file

        severity_match = FILE_SEVERITY_PATTERN.match(line)
        if severity_match and current_file is not None:
            name = severity_match.group("name")
            if name in SEVERITY_NAMES:
                report.file_counts[current_file][name.lower()] = int(severity_match.group("count"))
                return current_file
        self._error(report, number, "invalid file breakdown entry", line)
        return current_file

    def _parse_issue(self, report: ParsedReport, number: int, line: str) -> None:
        if line == NO_ISSUES_LINE:
            return
        match = ISSUE_PATTERN.match(line)
        if not match:
            self._error(report, number, "invalid issue line", line)
            return

        body = match.group("body")
        body_match = BODY_PATTERN.match(body)
        if body_match:
            message = body_match.group("message")
            suggestion = body_match.group("suggestion")
            reason = body_match.group("reason")
        else:
            message, suggestion, reason = body, "", None

        kind = match.group("kind")
        report.issues.append(
            ParsedIssue(
                severity=Severity.from_glyph(match.group("glyph")).value,
                kind=kind,
                file=match.group("file"),
                line=int(match.group("line")),
                message=message,
                suggestion=suggestion,
                detailed_reason=reason,
                threshold_details=(
                    parse_threshold_details(reason) if kind == DetectorKind.LONG_METHOD.value else None
                ),
            )
        )

    def highlight_map(self, text: str) -> dict[str, dict[str, list[int]]]:
        """file -> issue kind -> sorted distinct line numbers."""
        grouped: dict[str, dict[str, set[int]]] = defaultdict(lambda: defaultdict(set))
        for issue in self.parse(text).issues:
            grouped[issue.file][issue.kind].add(issue.line)
        return {
            file: {kind: sorted(lines) for kind, lines in kinds.items()}
            for file, kinds in grouped.items()
        }


def parse(text: str) -> ParsedReport:
    return ReportParserService().parse(text)


def highlight_map(text: str) -> dict[str, dict[str, list[int]]]:
    return ReportParserService().highlight_map(text)
