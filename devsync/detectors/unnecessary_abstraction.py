"""Unnecessary abstraction: near-empty abstract types and Base/Adapter shells."""

from devsync.detectors.base import Detector, DetectorKind, Issue, Severity
from devsync.parsers.java_parser import JavaSource
from devsync.schemas.detector_config import DetectorOptions

SUSPICIOUS_SUFFIXES = ("Base", "Adapter")


class UnnecessaryAbstractionDetector(Detector):
    name = "UnnecessaryAbstractionDetector"
    kind = DetectorKind.UNNECESSARY_ABSTRACTION

    def detect(self, source: JavaSource, options: DetectorOptions) -> list[Issue]:
        max_members = options.value("max_abstraction_usage", 1)
        issues = []

        for declaration in source.unit.types:
            if declaration.kind not in {"class", "interface"}:
                continue
            if "FunctionalInterface" in declaration.annotations:
                continue
            members = declaration.member_count
            if members > max_members:
                continue
            if not (declaration.is_abstract or declaration.name.endswith(SUSPICIOUS_SUFFIXES)):
                continue

            issues.append(
                self.issue(
                    source,
                    declaration.line,
                    Severity.MEDIUM if members == 0 else Severity.LOW,
                    f"{declaration.kind.capitalize()} '{declaration.name}' adds an abstraction "
                    f"layer with only {members} member(s)",
                    "Inline the abstraction into its implementation or give it real responsibilities",
                )
            )
        return issues
