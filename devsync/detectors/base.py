"""Base detector interfaces and the issue model shared by the pipeline."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from devsync.parsers.java_parser import JavaSource
from devsync.schemas.detector_config import DetectorOptions


class Severity(str, Enum):
    """Issue severity levels, most severe first."""

    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    ERROR = "Error"

    @property
    def rank(self) -> int:
        return SEVERITY_ORDER.index(self)

    @property
    def glyph(self) -> str:
        return SEVERITY_GLYPHS[self]

    @classmethod
    def from_glyph(cls, glyph: str) -> "Severity":
        """Map a report glyph back to its severity; unknown glyphs map to ERROR."""
        return GLYPH_SEVERITIES.get(glyph, cls.ERROR)


SEVERITY_ORDER = [
    Severity.CRITICAL,
    Severity.HIGH,
    Severity.MEDIUM,
    Severity.LOW,
    Severity.ERROR,
]

# The only place glyphs are defined; renderer and parser both go through it.
SEVERITY_GLYPHS = {
    Severity.CRITICAL: "🔴",
    Severity.HIGH: "🟡",
    Severity.MEDIUM: "🟠",
    Severity.LOW: "⚠️",
    Severity.ERROR: "❌",
}
GLYPH_SEVERITIES = {glyph: severity for severity, glyph in SEVERITY_GLYPHS.items()}


class DetectorKind(str, Enum):
    """Issue kinds as they appear between brackets in a report."""

    MAGIC_NUMBER = "MagicNumber"
    LONG_IDENTIFIER = "LongIdentifier"
    LONG_PARAMETER_LIST = "LongParameterList"
    LONG_STATEMENT = "LongStatement"
    BROKEN_MODULARIZATION = "BrokenModularization"
    DEFICIENT_ENCAPSULATION = "DeficientEncapsulation"
    UNNECESSARY_ABSTRACTION = "UnnecessaryAbstraction"
    MISSING_DEFAULT = "MissingDefault"
    UNUSED_VARIABLE = "UnusedVariable"
    MEMORY_LEAK = "MemoryLeak"
    EMPTY_CATCH = "EmptyCatch"
    LONG_METHOD = "LongMethod"
    COMPLEX_CONDITIONAL = "ComplexConditional"
    PARSE_ERROR = "ParseError"
    DETECTOR_ERROR = "DetectorError"


@dataclass(frozen=True)
class Issue:
    """A single code-quality finding."""

    kind: DetectorKind
    file: str
    line: int
    severity: Severity
    message: str
    suggestion: str = ""
    detailed_reason: Optional[str] = None


class Detector:
    """Base class for detectors.

    A detector is a pure function of one parsed file and its own options.
    Subclasses set ``name`` (the configuration key) and ``kind`` and
    implement ``detect``.
    """

    name: str = "base"
    kind: DetectorKind

    def detect(self, source: JavaSource, options: DetectorOptions) -> list[Issue]:
        raise NotImplementedError

    def issue(
        self,
        source: JavaSource,
        line: int,
        severity: Severity,
        message: str,
        suggestion: str,
        detailed_reason: Optional[str] = None,
    ) -> Issue:
        return Issue(
            kind=self.kind,
            file=source.path,
            line=max(0, line),
            severity=severity,
            message=message,
            suggestion=suggestion,
            detailed_reason=detailed_reason,
        )
