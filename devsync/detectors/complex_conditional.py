"""Complex ``if`` conditions and deeply nested ``if`` chains."""

from devsync.detectors.base import Detector, DetectorKind, Issue, Severity
from devsync.parsers.java_parser import JavaSource
from devsync.schemas.detector_config import DetectorOptions


class ComplexConditionalDetector(Detector):
    name = "ComplexConditionalDetector"
    kind = DetectorKind.COMPLEX_CONDITIONAL

    def detect(self, source: JavaSource, options: DetectorOptions) -> list[Issue]:
        max_operators = options.value("max_conditional_operators", 4)
        max_nesting = options.value("max_nesting_depth", 3)

        issues = []
        for method in source.unit.methods:
            for conditional in method.conditionals:
                operators = conditional.logical_operators
                nesting = conditional.nesting_level
                if operators <= max_operators and nesting <= max_nesting:
                    continue

                severity = Severity.HIGH if operators > 2 * max_operators else Severity.MEDIUM
                issues.append(
                    self.issue(
                        source,
                        conditional.line,
                        severity,
                        f"Complex conditional in method '{method.name}' "
                        f"({operators} logical operators, nesting level {nesting})",
                        "Extract the condition into a well-named boolean method or use guard clauses",
                    )
                )
        return sorted(issues, key=lambda issue: issue.line)
