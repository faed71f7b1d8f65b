"""Long method detection by line span and decision points."""

from devsync.detectors.base import Detector, DetectorKind, Issue, Severity
from devsync.parsers.java_parser import JavaSource
from devsync.schemas.detector_config import DetectorOptions


def _verdict(value: int, limit: int) -> str:
    return "exceeds" if value > limit else "within"


class LongMethodDetector(Detector):
    name = "LongMethodDetector"
    kind = DetectorKind.LONG_METHOD

    def detect(self, source: JavaSource, options: DetectorOptions) -> list[Issue]:
        max_lines = options.value("max_method_length", 50)
        max_complexity = options.value("max_method_complexity", 10)

        issues = []
        for method in source.unit.methods:
            if not method.has_body:
                continue
            span = method.end_line - method.line + 1
            complexity = method.decision_points
            if span <= max_lines and complexity <= max_complexity:
                continue

            if span > 2 * max_lines or complexity > 2 * max_complexity:
                severity = Severity.HIGH
            else:
                severity = Severity.MEDIUM
            reason = (
                f"Method spans {span} lines ({_verdict(span, max_lines)} threshold of {max_lines}), "
                f"Cyclomatic complexity is {complexity} "
                f"({_verdict(complexity, max_complexity)} max of {max_complexity})"
            )
            issues.append(
                self.issue(
                    source,
                    method.line,
                    severity,
                    f"Method '{method.name}' is too long ({span} lines, complexity {complexity})",
                    "Extract cohesive blocks into smaller well-named methods",
                    reason,
                )
            )
        return issues
