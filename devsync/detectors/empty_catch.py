"""Empty or log-only catch blocks."""

from devsync.detectors.base import Detector, DetectorKind, Issue, Severity
from devsync.parsers.java_parser import JavaSource
from devsync.schemas.detector_config import DetectorOptions

INTENTIONAL_NAMES = {"ignored", "expected"}
WEAK_HANDLING_MAX_CHARS = 60


class EmptyCatchDetector(Detector):
    name = "EmptyCatchDetector"
    kind = DetectorKind.EMPTY_CATCH

    def detect(self, source: JavaSource, options: DetectorOptions) -> list[Issue]:
        issues = []
        for method in source.unit.methods:
            for clause in method.catch_clauses:
                if not clause.statements:
                    intentional = clause.parameter in INTENTIONAL_NAMES
                    issues.append(
                        self.issue(
                            source,
                            clause.line,
                            Severity.LOW if intentional else Severity.HIGH,
                            f"Empty catch block swallows {clause.exception_type} in method '{method.name}'",
                            "Handle the exception, rethrow it, or log it with context",
                        )
                    )
                    continue

                if len(clause.statements) == 1:
                    statement = clause.statements[0].lower()
                    if ("print" in statement or "log" in statement) and len(statement) < WEAK_HANDLING_MAX_CHARS:
                        issues.append(
                            self.issue(
                                source,
                                clause.line,
                                Severity.LOW,
                                f"Catch block for {clause.exception_type} only logs: {clause.statements[0].strip()}",
                                "Log with context and either recover or propagate the exception",
                            )
                        )
        return sorted(issues, key=lambda issue: issue.line)
