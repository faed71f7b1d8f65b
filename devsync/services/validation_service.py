"""Report consistency validation.

Counts declared in the summary sections are re-derived from the detailed
issue list and compared one by one. Every mismatch is collected; nothing
fails fast.
"""

import logging
from collections import Counter, defaultdict

from devsync.detectors.base import SEVERITY_ORDER
from devsync.schemas.report import ParsedReport, ValidationResult
from devsync.services.report_parser_service import SUMMARY_PATTERN, ReportParserService
from devsync.services.report_service import MANDATORY_SECTIONS

logger = logging.getLogger(__name__)


class ValidationService:
    def __init__(self, parser: ReportParserService | None = None):
        self.parser = parser or ReportParserService()

    def validate(self, text: str) -> ValidationResult:
        report = self.parser.parse(text)
        errors: list[str] = []

        for section in MANDATORY_SECTIONS:
            if section not in report.sections:
                errors.append(f"Missing section: {section}")
        errors.extend(f"Format error: {error}" for error in report.format_errors)
        errors.extend(self._check_required_fields(report))
        errors.extend(self._check_severity_counts(report))
        errors.extend(self._check_type_counts(report))
        errors.extend(self._check_file_counts(report))
        errors.extend(self._check_summary(report))

        if errors:
            logger.warning(f"Report validation found {len(errors)} problems")
        return ValidationResult(
            is_valid=not errors,
            errors=errors,
            extracted_data={
                "summary": report.summary,
                "severity_counts": dict(report.severity_counts),
                "type_counts": dict(report.type_counts),
                "file_counts": {file: dict(counts) for file, counts in report.file_counts.items()},
                "issues": [issue.model_dump() for issue in report.issues],
                "total_issues": len(report.issues),
            },
        )

    def _check_required_fields(self, report: ParsedReport) -> list[str]:
        errors = []
        for index, issue in enumerate(report.issues, start=1):
            missing = [
                name
                for name in ("severity", "kind", "file", "message")
                if not str(getattr(issue, name)).strip()
            ]
            if missing:
                errors.append(f"Issue {index} is missing required fields: {', '.join(missing)}")
            if not isinstance(issue.line, int) or issue.line < 0:
                errors.append(f"Issue {index} has an invalid line number: {issue.line!r}")
        return errors

    def _check_severity_counts(self, report: ParsedReport) -> list[str]:
        actual = Counter(issue.severity for issue in report.issues)
        errors = []
        for severity in SEVERITY_ORDER:
            declared = report.severity_counts.get(severity.value, 0)
            if declared != actual[severity.value]:
                errors.append(
                    f"Severity count mismatch for {severity.value}: "
                    f"declared {declared}, found {actual[severity.value]} issues"
                )
        return errors

    def _check_type_counts(self, report: ParsedReport) -> list[str]:
        actual = Counter(issue.kind for issue in report.issues)
        errors = []
        for kind in sorted(set(report.type_counts) | set(actual)):
            declared = report.type_counts.get(kind, 0)
            if declared != actual[kind]:
                errors.append(
                    f"Issue type count mismatch for {kind}: declared {declared}, found {actual[kind]} issues"
                )
        return errors

    def _check_file_counts(self, report: ParsedReport) -> list[str]:
        actual: dict[str, Counter] = defaultdict(Counter)
        for issue in report.issues:
            actual[issue.file]["total"] += 1
            actual[issue.file][issue.severity.lower()] += 1

        errors = []
        for file in sorted(set(report.file_counts) | set(actual)):
            declared = report.file_counts.get(file, {})
            found = actual.get(file, Counter())
            if declared.get("total", 0) != found["total"]:
                errors.append(
                    f"File total mismatch for {file}: declared {declared.get('total', 0)}, "
                    f"found {found['total']} issues"
                )
            for severity in SEVERITY_ORDER:
                key = severity.value.lower()
                if declared.get(key, 0) != found[key]:
                    errors.append(
                        f"File severity mismatch for {file} ({severity.value}): "
                        f"declared {declared.get(key, 0)}, found {found[key]} issues"
                    )
        return errors

    def _check_summary(self, report: ParsedReport) -> list[str]:
        if report.summary is None:
            return []
        match = SUMMARY_PATTERN.match(report.summary)
        if not match:
            return [f"Format error: invalid summary line: {report.summary!r}"]

        errors = []
        if int(match.group("total")) != len(report.issues):
            errors.append(
                f"Summary total mismatch: declared {match.group('total')}, found {len(report.issues)} issues"
            )
        actual = Counter(issue.severity for issue in report.issues)
        for severity in SEVERITY_ORDER[:4]:
            declared = int(match.group(severity.value.lower()))
            if declared != actual[severity.value]:
                errors.append(
                    f"Summary {severity.value.lower()} count mismatch: "
                    f"declared {declared}, found {actual[severity.value]} issues"
                )
        return errors


def validate(text: str) -> ValidationResult:
    return ValidationService().validate(text)
