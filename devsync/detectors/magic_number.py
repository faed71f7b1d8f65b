"""Magic number detection over comment-free source lines."""

import re
from collections import Counter

from devsync.detectors.base import Detector, DetectorKind, Issue, Severity
from devsync.detectors.lexical import code_lines, is_header_line
from devsync.parsers.java_parser import JavaSource
from devsync.schemas.detector_config import DetectorOptions

NUMBER_LITERAL = re.compile(
    r"(?<![\w$.])"
    r"(?:0[xX][0-9a-fA-F_]+|0[bB][01_]+|\d[\d_]*(?:\.\d+)?(?:[eE][+-]?\d+)?)"
    r"[lLfFdD]?"
    r"(?![\w$.])"
)


def numeric_value(literal: str) -> float:
    text = literal.replace("_", "").lower()
    if text.startswith("0x"):
        return float(int(text[2:].rstrip("l"), 16))
    if text.startswith("0b"):
        return float(int(text[2:].rstrip("l"), 2))
    return float(text.rstrip("lfd"))


class MagicNumberDetector(Detector):
    """Flags numeric literals other than 0, 1 and -1.

    Named constants (``static final`` declarations) are skipped. A value that
    recurs at least ``magic_number_threshold`` times in one file is reported
    as Medium instead of Low.
    """

    name = "MagicNumberDetector"
    kind = DetectorKind.MAGIC_NUMBER

    def detect(self, source: JavaSource, options: DetectorOptions) -> list[Issue]:
        threshold = options.value("magic_number_threshold", 3)

        occurrences: list[tuple[int, str, float]] = []
        for number, code in code_lines(source.lines):
            if is_header_line(code) or re.search(r"\bstatic\s+final\b|\bfinal\s+static\b", code):
                continue
            for match in NUMBER_LITERAL.finditer(code):
                literal = match.group(0)
                value = numeric_value(literal)
                if value in (0.0, 1.0):
                    continue
                occurrences.append((number, literal, value))

        counts = Counter(value for _, _, value in occurrences)
        issues = []
        for number, literal, value in occurrences:
            repeated = counts[value] >= threshold
            severity = Severity.MEDIUM if repeated else Severity.LOW
            message = f"Magic number {literal} used directly in code"
            if repeated:
                message += f" ({counts[value]} occurrences in file)"
            issues.append(
                self.issue(
                    source,
                    number,
                    severity,
                    message,
                    f"Replace {literal} with a named constant that explains its meaning",
                )
            )
        return issues
