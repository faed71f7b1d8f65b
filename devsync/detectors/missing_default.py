"""Missing default detection for switch statements and expressions.

Each switch without a ``default`` label is scored with a weighted risk model:

    risk = clamp(0, 1.5, 0.6 + context + completeness + complexity - safety)

- context (max 0.5): where the switch lives (public method, constructor,
  nested switch, value-producing switch, private method) weighted by 0.3,
  plus bonuses for public methods, returned values and nesting.
- completeness (max 0.4): enum coverage, very small non-enum switches,
  empty case bodies.
- complexity (max 0.3): long case bodies, fallthrough, many cases.
- safety (max 0.3): well-known enum names (Status, State...), comments that
  declare the switch exhaustive, test methods.

A switch is reported when the risk exceeds 0.5, except in test methods
below 0.8 and for fully covered enums with a safe name.
"""

import logging
from dataclasses import dataclass

from devsync.detectors.base import Detector, DetectorKind, Issue, Severity
from devsync.parsers.java_parser import JavaSource, MethodDeclaration, SwitchStatement
from devsync.schemas.detector_config import DetectorOptions

logger = logging.getLogger(__name__)

BASE_RISK = 0.6
MAX_RISK = 1.5
REPORT_THRESHOLD = 0.5
TEST_METHOD_THRESHOLD = 0.8
ESTIMATED_ENUM_VALUES = 5

CONTEXT_WEIGHTS = {
    "public_method": 1.0,
    "private_method": 0.7,
    "constructor": 0.9,
    "nested_switch": 1.2,
    "return_value": 1.1,
}
SAFE_ENUM_PATTERNS = ("status", "state", "type", "kind", "mode", "level")
EXHAUSTIVE_KEYWORDS = ("exhaustive", "all cases", "all values", "no default", "intentional")
NON_ENUM_TYPES = {
    "byte", "short", "char", "int", "long",
    "Byte", "Short", "Character", "Integer", "Long", "String",
}
LITERAL_PREFIXES = ('"', "'", "-")


@dataclass
class SwitchContext:
    """Facts about one switch that feed the risk model."""

    switch: SwitchStatement
    method: MethodDeclaration
    is_enum: bool
    type_name: str
    enum_values: int

    @property
    def case_count(self) -> int:
        return self.switch.case_count

    @property
    def is_public(self) -> bool:
        return self.method.is_public

    @property
    def returns_value(self) -> bool:
        return self.switch.has_return or self.switch.used_as_value

    @property
    def nested(self) -> bool:
        return self.switch.nesting_level > 1

    @property
    def coverage(self) -> float:
        return self.case_count / max(1, self.enum_values)

    @property
    def safe_name(self) -> bool:
        lowered = self.type_name.lower()
        return any(pattern in lowered for pattern in SAFE_ENUM_PATTERNS)

    @property
    def has_empty_cases(self) -> bool:
        return any(case.is_empty for case in self.switch.cases if not case.is_default)

    @property
    def has_complex_cases(self) -> bool:
        return any(len(case.statements) > 3 for case in self.switch.cases)

    @property
    def has_fallthrough(self) -> bool:
        cases = self.switch.cases
        return any(
            not case.arrow and not case.is_empty and not case.ends_with_jump
            for case in cases[:-1]
        )

    @property
    def has_exhaustive_comment(self) -> bool:
        text = " ".join(self.switch.comments).lower()
        return any(keyword in text for keyword in EXHAUSTIVE_KEYWORDS)


def classify_selector(
    switch: SwitchStatement,
    declared_enums: dict[str, list[str]],
) -> tuple[bool, str, int]:
    """Return ``(is_enum, type_name, enum_value_count)`` for a switch selector."""
    if switch.selector_kind not in {"identifier", "field_access"}:
        return False, "unknown", 0
    if switch.selector_type in NON_ENUM_TYPES:
        return False, switch.selector_type, 0
    labels = [label for case in switch.cases for label in case.labels]
    if any(label.startswith(LITERAL_PREFIXES) or label[:1].isdigit() for label in labels):
        return False, switch.selector_type or "unknown", 0

    type_name = switch.selector_type or switch.selector.split(".")[0]
    if type_name in declared_enums:
        return True, type_name, len(declared_enums[type_name])
    return True, type_name, ESTIMATED_ENUM_VALUES


def context_name(ctx: SwitchContext) -> str:
    if ctx.is_public:
        return "public_method"
    if ctx.method.is_constructor:
        return "constructor"
    if ctx.nested:
        return "nested_switch"
    if ctx.returns_value:
        return "return_value"
    return "private_method"


def context_score(ctx: SwitchContext) -> float:
    score = CONTEXT_WEIGHTS[context_name(ctx)] * 0.3
    if ctx.is_public:
        score += 0.2
    if ctx.returns_value:
        score += 0.25
    if ctx.nested:
        score += 0.15
    return min(0.5, score)


def completeness_score(ctx: SwitchContext) -> float:
    score = 0.0
    if ctx.is_enum:
        if ctx.coverage < 0.8:
            score += 0.3
        elif ctx.coverage < 1.0:
            score += 0.2
    elif ctx.case_count < 3:
        score += 0.2
    if ctx.has_empty_cases:
        score += 0.1
    return min(0.4, score)


def complexity_score(ctx: SwitchContext) -> float:
    score = 0.0
    if ctx.has_complex_cases:
        score += 0.15
    if ctx.has_fallthrough:
        score += 0.2
    if ctx.case_count > 10:
        score += 0.1
    return min(0.3, score)


def safety_score(ctx: SwitchContext) -> float:
    score = 0.0
    if ctx.is_enum and ctx.safe_name:
        score += 0.2
    if ctx.has_exhaustive_comment:
        score += 0.15
    if ctx.method.is_test:
        score += 0.1
    return min(0.3, score)


def risk_score(ctx: SwitchContext) -> float:
    raw = (
        BASE_RISK
        + context_score(ctx)
        + completeness_score(ctx)
        + complexity_score(ctx)
        - safety_score(ctx)
    )
    return max(0.0, min(MAX_RISK, raw))


def should_report(ctx: SwitchContext, risk: float) -> bool:
    if ctx.switch.has_default:
        return False
    if ctx.method.is_test and risk < TEST_METHOD_THRESHOLD:
        return False
    if ctx.is_enum and ctx.case_count == ctx.enum_values and ctx.safe_name:
        return False
    return risk > REPORT_THRESHOLD


def severity_for(ctx: SwitchContext, risk: float) -> Severity:
    if ctx.is_public and (risk > 1.0 or ctx.returns_value):
        return Severity.CRITICAL
    if risk > 0.8 or (ctx.is_enum and ctx.case_count < ctx.enum_values * 0.8):
        return Severity.HIGH
    return Severity.MEDIUM


def analysis_text(ctx: SwitchContext) -> str:
    findings = []
    if ctx.returns_value:
        findings.append("Missing return path")
    if ctx.is_enum and ctx.case_count < ctx.enum_values:
        findings.append("Incomplete enum coverage")
    if ctx.is_public:
        findings.append("Public API risk")
    if ctx.has_fallthrough:
        findings.append("Fallthrough complexity")
    if ctx.has_empty_cases:
        findings.append("Empty case blocks")
    return ", ".join(findings) if findings else "Missing default case"


def suggestion_text(ctx: SwitchContext) -> str:
    suggestions = []
    if ctx.returns_value:
        suggestions.append("Add default with appropriate return value")
    else:
        suggestions.append("Add default case with error handling")
    if ctx.is_enum:
        suggestions.append("Handle all enum values or document intentional omissions")
    if ctx.has_fallthrough:
        suggestions.append("Add explicit break statements")
    suggestions.append("Consider throwing IllegalArgumentException in default")
    suggestions.append("Add logging for unexpected values")
    return ", ".join(suggestions)


class MissingDefaultDetector(Detector):
    name = "MissingDefaultDetector"
    kind = DetectorKind.MISSING_DEFAULT

    def detect(self, source: JavaSource, options: DetectorOptions) -> list[Issue]:
        declared_enums = source.unit.enums
        issues = []
        for method in source.unit.methods:
            for switch in method.switches:
                if switch.has_default:
                    continue
                ctx = self._context(switch, method, declared_enums)
                risk = risk_score(ctx)
                if not should_report(ctx, risk):
                    logger.debug(
                        f"Skipping switch on '{switch.selector}' in {source.path}:{switch.line} "
                        f"(risk {risk:.2f})"
                    )
                    continue
                issues.append(
                    self.issue(
                        source,
                        switch.line,
                        severity_for(ctx, risk),
                        f"Switch on '{switch.selector}' ({ctx.case_count} cases, Risk: {risk:.2f})"
                        f" - {analysis_text(ctx)}",
                        suggestion_text(ctx),
                    )
                )
        return sorted(issues, key=lambda issue: issue.line)

    def _context(
        self,
        switch: SwitchStatement,
        method: MethodDeclaration,
        declared_enums: dict[str, list[str]],
    ) -> SwitchContext:
        is_enum, type_name, enum_values = classify_selector(switch, declared_enums)
        return SwitchContext(
            switch=switch,
            method=method,
            is_enum=is_enum,
            type_name=type_name,
            enum_values=enum_values,
        )

