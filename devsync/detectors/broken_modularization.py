"""Broken modularization: too many imports or too many public mutable fields in one file."""

from devsync.detectors.base import Detector, DetectorKind, Issue, Severity
from devsync.parsers.java_parser import JavaSource
from devsync.schemas.detector_config import DetectorOptions


class BrokenModularizationDetector(Detector):
    name = "BrokenModularizationDetector"
    kind = DetectorKind.BROKEN_MODULARIZATION

    def detect(self, source: JavaSource, options: DetectorOptions) -> list[Issue]:
        max_imports = options.value("max_coupling_count", 10)
        max_public_fields = options.value("max_public_fields", 5)
        unit = source.unit
        issues = []

        imports = len(unit.imports)
        if imports > max_imports:
            severity = Severity.HIGH if imports > 2 * max_imports else Severity.MEDIUM
            issues.append(
                self.issue(
                    source,
                    self._first_import_line(source),
                    severity,
                    f"High coupling: file imports {imports} types (max {max_imports})",
                    "Split the file into smaller modules with focused dependencies",
                )
            )

        public_fields = [
            declaration
            for type_declaration in unit.types
            if type_declaration.kind != "interface"
            for declaration in type_declaration.fields
            if declaration.is_public and not declaration.is_constant
        ]
        count = sum(len(declaration.names) for declaration in public_fields)
        if count > max_public_fields:
            issues.append(
                self.issue(
                    source,
                    public_fields[0].line,
                    Severity.MEDIUM,
                    f"Low encapsulation: {count} public non-constant fields (max {max_public_fields})",
                    "Make fields private and expose behaviour through methods",
                )
            )
        return issues

    def _first_import_line(self, source: JavaSource) -> int:
        for number, line in enumerate(source.lines, start=1):
            if line.lstrip().startswith("import "):
                return number
        return 1
