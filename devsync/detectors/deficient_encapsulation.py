"""Deficient encapsulation per class."""

import re

from devsync.detectors.base import Detector, DetectorKind, Issue, Severity
from devsync.parsers.java_parser import JavaSource
from devsync.schemas.detector_config import DetectorOptions

ACCESSOR_NAME = re.compile(r"^(?:get|set|is)[A-Z]")


class DeficientEncapsulationDetector(Detector):
    name = "DeficientEncapsulationDetector"
    kind = DetectorKind.DEFICIENT_ENCAPSULATION

    def detect(self, source: JavaSource, options: DetectorOptions) -> list[Issue]:
        max_ratio = options.value("max_public_ratio", 0.3)
        max_accessors = options.value("max_accessor_count", 10)
        issues = []

        for declaration in source.unit.types:
            if declaration.kind not in {"class", "enum"}:
                continue

            total = declaration.field_count
            public = sum(len(f.names) for f in declaration.fields if f.is_public and not f.is_constant)
            if total and public / total > max_ratio:
                ratio = public / total
                issues.append(
                    self.issue(
                        source,
                        declaration.line,
                        Severity.HIGH if ratio > 2 * max_ratio else Severity.MEDIUM,
                        f"Class '{declaration.name}' exposes {public}/{total} fields publicly "
                        f"({ratio:.0%}, max {max_ratio:.0%})",
                        "Make fields private and provide intention-revealing methods",
                    )
                )

            accessors = sum(1 for m in declaration.methods if ACCESSOR_NAME.match(m.name))
            members = declaration.member_count
            if accessors > max_accessors and members and accessors / members > 0.5:
                issues.append(
                    self.issue(
                        source,
                        declaration.line,
                        Severity.MEDIUM,
                        f"Class '{declaration.name}' is dominated by accessors "
                        f"({accessors} of {members} members)",
                        "Move behaviour that uses these values into the class instead of exposing state",
                    )
                )
        return issues
