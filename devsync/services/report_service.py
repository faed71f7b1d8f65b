"""Text report rendering.

Report layout::

    === DevSync Code Analysis Report ===

    SUMMARY
    -------
    Analyzed 3 files, found 2 issues (1 critical, 1 high, 0 medium, 0 low)

    SEVERITY BREAKDOWN
    ------------------
    Critical: 1
    ...

    ISSUE TYPE BREAKDOWN
    --------------------
    MemoryLeak: 1
    ...

    FILE-WISE BREAKDOWN
    -------------------
    File: src/App.java (Total: 2)
      Critical: 1
      High: 1

    DETAILED ISSUES
    ---------------
    🚨 🔴 [MemoryLeak] src/App.java:12 - <message> | Suggestions: <text>

``ReportParserService`` reads exactly this grammar back.
"""

import logging
from collections import Counter, defaultdict
from typing import Optional

from devsync.detectors.base import SEVERITY_ORDER, DetectorKind, Issue, Severity
from devsync.services.analysis_service import AnalysisResult, summarize

logger = logging.getLogger(__name__)

TITLE = "=== DevSync Code Analysis Report ==="
SUMMARY_HEADER = "SUMMARY"
SEVERITY_HEADER = "SEVERITY BREAKDOWN"
TYPE_HEADER = "ISSUE TYPE BREAKDOWN"
FILE_HEADER = "FILE-WISE BREAKDOWN"
DETAILS_HEADER = "DETAILED ISSUES"
SECTION_HEADERS = [SUMMARY_HEADER, SEVERITY_HEADER, TYPE_HEADER, FILE_HEADER, DETAILS_HEADER]
MANDATORY_SECTIONS = [SEVERITY_HEADER, TYPE_HEADER, FILE_HEADER, DETAILS_HEADER]

ISSUE_MARKER = "🚨"
NO_ISSUES_LINE = "🎉 No issues found in the code."
SUGGESTIONS_TAG = "Suggestions:"
REASON_TAG = "DetailedReason:"
FIELD_SEPARATOR = " | "


def normalize_field(text: Optional[str]) -> str:
    """Flatten a message field so it fits on one report line."""
    if not text:
        return ""
    # same line boundaries as str.splitlines in the parser
    parts = (part.strip() for part in text.splitlines())
    flattened = " ".join(part for part in parts if part)
    return flattened.replace(FIELD_SEPARATOR, " / ").strip()


def format_issue(issue: Issue) -> str:
    kind = DetectorKind(issue.kind).value
    severity = Severity(issue.severity)
    line = (
        f"{ISSUE_MARKER} {severity.glyph} [{kind}] {normalize_field(issue.file)}:{issue.line} - "
        f"{normalize_field(issue.message)}{FIELD_SEPARATOR}{SUGGESTIONS_TAG} {normalize_field(issue.suggestion)}"
    )
    if issue.detailed_reason:
        line += f"{FIELD_SEPARATOR}{REASON_TAG} {normalize_field(issue.detailed_reason)}"
    return line


class ReportService:
    """Serializes an AnalysisResult into the canonical text report."""

    def render(self, result: AnalysisResult) -> str:
        issues = list(result.issues)
        lines = [TITLE, ""]

        lines += self._header(SUMMARY_HEADER)
        lines.append(summarize(result.total_files, issues))
        lines.append("")

        severity_counts = Counter(Severity(issue.severity) for issue in issues)
        lines += self._header(SEVERITY_HEADER)
        for severity in SEVERITY_ORDER:
            lines.append(f"{severity.value}: {severity_counts[severity]}")
        lines.append("")

        type_counts = Counter(DetectorKind(issue.kind).value for issue in issues)
        lines += self._header(TYPE_HEADER)
        for kind, count in sorted(type_counts.items(), key=lambda item: (-item[1], item[0])):
            lines.append(f"{kind}: {count}")
        lines.append("")

        lines += self._header(FILE_HEADER)
        lines += self._file_breakdown(issues)
        lines.append("")

        lines += self._header(DETAILS_HEADER)
        if issues:
            ordered = sorted(issues, key=lambda issue: Severity(issue.severity).rank)
            lines += [format_issue(issue) for issue in ordered]
        else:
            lines.append(NO_ISSUES_LINE)

        logger.debug(f"Rendered report with {len(issues)} issues")
        return "\n".join(lines) + "\n"

    @staticmethod
    def _header(title: str) -> list[str]:
        return [title, "-" * len(title)]

    @staticmethod
    def _file_breakdown(issues: list[Issue]) -> list[str]:
        per_file: dict[str, Counter] = defaultdict(Counter)
        for issue in issues:
            per_file[normalize_field(issue.file)][Severity(issue.severity)] += 1

        lines = []
        ordered = sorted(per_file.items(), key=lambda item: (-sum(item[1].values()), item[0]))
        for file, counts in ordered:
            lines.append(f"File: {file} (Total: {sum(counts.values())})")
            for severity in SEVERITY_ORDER:
                if counts[severity]:
                    lines.append(f"  {severity.value}: {counts[severity]}")
        return lines


def render(result: AnalysisResult) -> str:
    return ReportService().render(result)
