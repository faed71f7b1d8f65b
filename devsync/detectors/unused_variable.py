"""Unused local variables and parameters."""

from dataclasses import dataclass

from devsync.detectors.base import Detector, DetectorKind, Issue, Severity
from devsync.parsers.java_parser import JavaSource, MethodDeclaration
from devsync.schemas.detector_config import DetectorOptions


@dataclass
class UnusedName:
    name: str
    line: int
    method: MethodDeclaration
    is_parameter: bool
    has_initializer: bool

    @property
    def risk(self) -> float:
        score = 0.5
        if self.is_parameter:
            score += 0.2
        if self.method.is_public:
            score += 0.1
        if self.has_initializer:
            score += 0.1
        return round(min(1.0, score), 2)

    @property
    def analysis(self) -> str:
        if self.is_parameter:
            return "Unused method parameter"
        if self.has_initializer:
            return "Variable initialized but never used"
        return "Dead code - variable declared but never referenced"

    @property
    def suggestion(self) -> str:
        if self.is_parameter:
            return "Remove parameter or prefix with underscore if intentionally unused"
        return "Remove unused variable declaration to improve code clarity"

    @property
    def detailed_reason(self) -> str:
        reasons = [f"variable '{self.name}' is declared"]
        if self.has_initializer:
            reasons.append("it has an initializer value that is computed but never used")
        if self.is_parameter:
            reasons.append("it's a method parameter that is never referenced in the method body")
        reasons.append("it is never read or referenced anywhere in its scope")
        return (
            "This variable is flagged because: "
            + ", ".join(reasons)
            + ". Unused variables waste memory, reduce code readability, and may indicate"
            " incomplete implementation or refactoring artifacts."
        )


def unused_names(method: MethodDeclaration) -> list[UnusedName]:
    """Locals and parameters of ``method`` that are never referenced."""
    if method.is_constructor or not method.has_body:
        return []

    unused = []
    for variable in method.local_variables:
        if variable.name not in method.references:
            unused.append(
                UnusedName(variable.name, variable.line, method, False, variable.has_initializer)
            )
    for parameter in method.parameters:
        if parameter.name and parameter.name not in method.references:
            unused.append(UnusedName(parameter.name, method.line, method, True, False))
    return unused


class UnusedVariableDetector(Detector):
    name = "UnusedVariableDetector"
    kind = DetectorKind.UNUSED_VARIABLE

    def detect(self, source: JavaSource, options: DetectorOptions) -> list[Issue]:
        issues = []
        for method in source.unit.methods:
            for unused in unused_names(method):
                issues.append(
                    self.issue(
                        source,
                        unused.line,
                        Severity.HIGH if unused.risk >= 0.7 else Severity.MEDIUM,
                        f"Variable '{unused.name}' declared but never used in method "
                        f"{method.name} - {unused.analysis}",
                        unused.suggestion,
                        unused.detailed_reason,
                    )
                )
        return issues
