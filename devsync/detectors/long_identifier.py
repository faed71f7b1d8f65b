"""Long identifier detection."""

import re

from devsync.detectors.base import Detector, DetectorKind, Issue, Severity
from devsync.detectors.lexical import code_lines, is_header_line, split_words
from devsync.parsers.java_parser import JavaSource
from devsync.schemas.detector_config import DetectorOptions

IDENTIFIER = re.compile(r"(?<![\w$])[A-Za-z_$][\w$]*")


class LongIdentifierDetector(Detector):
    name = "LongIdentifierDetector"
    kind = DetectorKind.LONG_IDENTIFIER

    def detect(self, source: JavaSource, options: DetectorOptions) -> list[Issue]:
        max_length = options.value("max_identifier_length", 32)
        max_words = options.value("max_identifier_words", 5)

        seen: set[str] = set()
        issues = []
        for number, code in code_lines(source.lines):
            if is_header_line(code):
                continue
            for match in IDENTIFIER.finditer(code):
                identifier = match.group(0)
                if identifier in seen:
                    continue
                length = len(identifier)
                words = len(split_words(identifier))
                if length <= max_length and words <= max_words:
                    continue
                seen.add(identifier)

                if length > 2 * max_length:
                    severity = Severity.HIGH
                elif length > max_length:
                    severity = Severity.MEDIUM
                else:
                    severity = Severity.LOW
                issues.append(
                    self.issue(
                        source,
                        number,
                        severity,
                        f"Identifier '{identifier}' is too long ({length} chars, {words} words)",
                        f"Shorten to at most {max_length} characters and {max_words} words "
                        "while keeping the name descriptive",
                    )
                )
        return issues
