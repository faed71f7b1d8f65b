"""Long statement detection: overlong lines, operator-heavy lines, long call chains."""

import re

from devsync.detectors.base import Detector, DetectorKind, Issue, Severity
from devsync.detectors.lexical import code_lines, is_header_line
from devsync.parsers.java_parser import JavaSource
from devsync.schemas.detector_config import DetectorOptions

OPERATOR_CHARS = set("+-*/%<>=!")
GENERIC_ARGUMENTS = re.compile(r"<[\w\s,?.\[\]]*>")
CHAINED_CALL = re.compile(r"\.\s*[A-Za-z_$][\w$]*\s*\(")


def count_operators(code: str) -> int:
    previous = None
    while previous != code:
        previous = code
        code = GENERIC_ARGUMENTS.sub("", code)
    return sum(1 for char in code if char in OPERATOR_CHARS)


class LongStatementDetector(Detector):
    name = "LongStatementDetector"
    kind = DetectorKind.LONG_STATEMENT

    def detect(self, source: JavaSource, options: DetectorOptions) -> list[Issue]:
        max_chars = options.value("max_statement_chars", 120)
        max_operators = options.value("max_statement_tokens", 5)
        max_chain = options.value("max_method_chain_length", 3)

        issues = []
        for number, code in code_lines(source.lines):
            if is_header_line(code):
                continue
            length = len(source.lines[number - 1].strip())
            operators = count_operators(code)
            chain = len(CHAINED_CALL.findall(code))

            problems = []
            if length > max_chars:
                problems.append(f"{length} characters (max {max_chars})")
            if operators > max_operators:
                problems.append(f"{operators} operators (max {max_operators})")
            if chain > max_chain:
                problems.append(f"{chain} chained calls (max {max_chain})")
            if not problems:
                continue

            if len(problems) > 1 or length > 2 * max_chars:
                severity = Severity.MEDIUM
            else:
                severity = Severity.LOW
            issues.append(
                self.issue(
                    source,
                    number,
                    severity,
                    f"Statement is too long: {', '.join(problems)}",
                    "Split the statement and introduce well-named intermediate variables",
                )
            )
        return issues
