"""Long parameter list detection via a method signature pattern."""

import re

from devsync.detectors.base import Detector, DetectorKind, Issue, Severity
from devsync.detectors.lexical import code_text, line_for_offset, split_top_level
from devsync.parsers.java_parser import JavaSource
from devsync.schemas.detector_config import DetectorOptions

METHOD_SIGNATURE = re.compile(
    r"^[ \t]*(?:@[\w$.]+[ \t]+)*"
    r"(?:(?:public|protected|private|static|final|abstract|synchronized|native|default|strictfp)\s+)*"
    r"(?:<[^;{}()]*>\s+)?"
    r"(?P<return>[\w$.]+(?:<[^;{}()]*>)?(?:\[\])*)\s+"
    r"(?P<name>[A-Za-z_$][\w$]*)\s*"
    r"\((?P<params>[^()]*)\)",
    re.MULTILINE,
)
NOT_RETURN_TYPES = {"return", "new", "else", "throw", "case", "yield", "assert"}
CONTROL_KEYWORDS = {"if", "for", "while", "switch", "catch", "synchronized", "try", "do"}
PARAMETER_MODIFIER = re.compile(r"@[\w$.]+(?:\([^)]*\))?\s*|\bfinal\s+")


def parameter_type(parameter: str) -> str:
    """``final Map<String, Integer> counts`` -> ``Map<String,Integer>``."""
    cleaned = PARAMETER_MODIFIER.sub("", parameter).strip()
    type_part = cleaned.rsplit(None, 1)[0] if " " in cleaned else cleaned
    return re.sub(r"\s+", "", type_part)


class LongParameterListDetector(Detector):
    name = "LongParameterListDetector"
    kind = DetectorKind.LONG_PARAMETER_LIST

    def detect(self, source: JavaSource, options: DetectorOptions) -> list[Issue]:
        max_count = options.value("max_parameter_count", 4)
        max_types = options.value("max_parameter_types", 3)

        text = code_text(source.lines)
        issues = []
        for match in METHOD_SIGNATURE.finditer(text):
            if match.group("return") in NOT_RETURN_TYPES or match.group("name") in CONTROL_KEYWORDS:
                continue
            parameters = split_top_level(match.group("params"))
            count = len(parameters)
            distinct_types = len({parameter_type(p) for p in parameters})
            if count <= max_count and distinct_types <= max_types:
                continue

            if count > 2 * max_count:
                severity = Severity.HIGH
            elif count > max_count:
                severity = Severity.MEDIUM
            else:
                severity = Severity.LOW
            method = match.group("name")
            issues.append(
                self.issue(
                    source,
                    line_for_offset(text, match.start("name")),
                    severity,
                    f"Method '{method}' has {count} parameters of {distinct_types} distinct types "
                    f"(limits: {max_count} parameters, {max_types} types)",
                    "Group related parameters into a parameter object or use a builder",
                )
            )
        return issues
