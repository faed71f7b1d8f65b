"""Analysis orchestrator: runs the detector pipeline over a source tree."""

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from devsync.detectors import SEVERITY_ORDER, Detector, DetectorKind, Issue, Severity, default_detectors
from devsync.errors import SourceParseError
from devsync.parsers.java_parser import JavaParser, JavaSource, split_lines
from devsync.schemas.detector_config import DetectorConfig
from devsync.services.collector_service import CollectorService

logger = logging.getLogger(__name__)

LARGE_CLASS_LOC = 500
COMMENT_PREFIXES = ("//", "/*", "*")


def count_lines_of_code(text: str) -> int:
    """Non-blank physical lines that do not start with a comment marker."""
    count = 0
    for line in split_lines(text):
        stripped = line.strip()
        if stripped and not stripped.startswith(COMMENT_PREFIXES):
            count += 1
    return count


def summarize(total_files: int, issues: Sequence[Issue]) -> str:
    counts = Counter(issue.severity for issue in issues)
    return (
        f"Analyzed {total_files} files, found {len(issues)} issues "
        f"({counts[Severity.CRITICAL]} critical, {counts[Severity.HIGH]} high, "
        f"{counts[Severity.MEDIUM]} medium, {counts[Severity.LOW]} low)"
    )


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of one analysis run."""

    issues: tuple[Issue, ...] = ()
    total_files: int = 0
    processed_files: int = 0
    severity_counts: dict[Severity, int] = field(
        default_factory=lambda: {severity: 0 for severity in SEVERITY_ORDER}
    )
    detector_counts: dict[str, int] = field(default_factory=dict)
    total_loc: int = 0
    total_classes: int = 0
    total_methods: int = 0
    total_packages: int = 0
    large_classes: int = 0
    avg_complexity: float = 0.0
    summary: str = ""

    @property
    def total_issues(self) -> int:
        return len(self.issues)

    @classmethod
    def from_issues(cls, issues: Sequence[Issue], total_files: Optional[int] = None, **metrics: Any) -> "AnalysisResult":
        """Build a result whose counts are derived from ``issues``."""
        files = total_files if total_files is not None else len({issue.file for issue in issues})
        severity_counts = {severity: 0 for severity in SEVERITY_ORDER}
        detector_counts: Counter = Counter()
        for issue in issues:
            severity_counts[issue.severity] += 1
            detector_counts[DetectorKind(issue.kind).value] += 1
        metrics.setdefault("processed_files", files)
        return cls(
            issues=tuple(issues),
            total_files=files,
            severity_counts=severity_counts,
            detector_counts=dict(detector_counts),
            summary=summarize(files, issues),
            **metrics,
        )


class AnalysisService:
    """Runs every enabled detector over every collected file.

    Failures are contained: a file that cannot be parsed yields a single
    ParseError issue, and a detector that raises yields a single
    DetectorError issue for that file while the remaining detectors and files
    carry on.
    """

    def __init__(
        self,
        config: Optional[DetectorConfig] = None,
        detectors: Optional[Sequence[Detector]] = None,
        collector: Optional[CollectorService] = None,
        parser: Optional[JavaParser] = None,
    ):
        self.config = config or DetectorConfig()
        self.detectors = list(detectors) if detectors is not None else default_detectors()
        self.collector = collector or CollectorService()
        self.parser = parser or JavaParser()
        self._warn_unknown_names()

    def _warn_unknown_names(self) -> None:
        known = {detector.name for detector in self.detectors}
        for name in self.config.detectors:
            if name not in known:
                logger.warning(f"Unknown detector '{name}' in configuration; ignoring it")

    def analyze(self, root: str | Path) -> AnalysisResult:
        """Analyze every source file under ``root``."""
        root_path = Path(root)
        files = self.collector.collect(root_path)
        logger.info(f"Starting analysis of {len(files)} files under {root_path}")

        issues: list[Issue] = []
        processed = 0
        total_loc = 0
        classes = 0
        methods = 0
        complexity = 0
        large_classes = 0
        packages: set[str] = set()

        for file_path in files:
            display_path = self._display_path(root_path, file_path)
            try:
                source = self.parser.parse_file(file_path, display_path)
            except SourceParseError as e:
                logger.warning(f"Could not parse {display_path}: {e}")
                issues.append(
                    Issue(
                        kind=DetectorKind.PARSE_ERROR,
                        file=display_path,
                        line=e.line or 0,
                        severity=Severity.ERROR,
                        message=f"Failed to parse file: {e}",
                        suggestion="Fix the syntax error so the file can be analyzed",
                    )
                )
                continue

            processed += 1
            issues.extend(self.analyze_source(source))

            unit = source.unit
            loc = count_lines_of_code(source.text)
            total_loc += loc
            classes += unit.class_count
            methods += sum(1 for method in unit.methods if not method.is_constructor)
            complexity += unit.branch_count
            if unit.package:
                packages.add(unit.package)
            if loc > LARGE_CLASS_LOC and unit.class_count:
                large_classes += 1

        result = AnalysisResult.from_issues(
            issues,
            total_files=len(files),
            processed_files=processed,
            total_loc=total_loc,
            total_classes=classes,
            total_methods=methods,
            total_packages=len(packages),
            large_classes=large_classes,
            avg_complexity=round(complexity / classes, 2) if classes else 0.0,
        )
        logger.info(result.summary)
        logger.info(
            "Severity breakdown: "
            + ", ".join(f"{severity.value}={count}" for severity, count in result.severity_counts.items())
        )
        return result

    def analyze_source(self, source: JavaSource) -> list[Issue]:
        """Run the enabled detectors over one parsed file."""
        issues: list[Issue] = []
        for detector in self.detectors:
            if not self.config.is_enabled(detector.name):
                logger.debug(f"{detector.name} disabled; skipping {source.path}")
                continue
            try:
                found = detector.detect(source, self.config.options_for(detector.name))
            except Exception as e:
                logger.exception(f"{detector.name} failed on {source.path}")
                found = [
                    Issue(
                        kind=DetectorKind.DETECTOR_ERROR,
                        file=source.path,
                        line=0,
                        severity=Severity.ERROR,
                        message=f"{detector.name} failed: {e}",
                        suggestion="Other detectors still ran on this file",
                    )
                ]
            logger.debug(f"{detector.name}: {len(found)} issues in {source.path}")
            issues.extend(found)
        return issues

    @staticmethod
    def _display_path(root: Path, file_path: Path) -> str:
        if root.is_dir():
            try:
                return file_path.relative_to(root).as_posix()
            except ValueError:
                pass
        return file_path.name


def analyze(
    root: str | Path,
    config: Optional[DetectorConfig | Mapping[str, Any]] = None,
    detectors: Optional[Sequence[Detector]] = None,
) -> AnalysisResult:
    """Analyze ``root`` with ``config`` (a DetectorConfig or a plain mapping)."""
    if config is not None and not isinstance(config, DetectorConfig):
        config = DetectorConfig.from_mapping(config)
    return AnalysisService(config=config, detectors=detectors).analyze(root)
