"""Letter grading from severity counts and project size.

Scores are density based so that large and small projects are graded on the
same scale:

- weighted density = (10*critical + 5*high + 2*medium + 0.5*low) per KLOC
  picks the base score from five linear bands
- raw density (issues per KLOC) drives the size penalties and is the
  reported ``issue_density``
"""

import logging
from dataclasses import dataclass
from typing import Mapping

from devsync.detectors.base import Severity

logger = logging.getLogger(__name__)

SEVERITY_WEIGHTS = {
    Severity.CRITICAL: 10.0,
    Severity.HIGH: 5.0,
    Severity.MEDIUM: 2.0,
    Severity.LOW: 0.5,
}

EXCELLENT_THRESHOLD = 0.5
GOOD_THRESHOLD = 2.0
ACCEPTABLE_THRESHOLD = 5.0
POOR_THRESHOLD = 10.0

GRADE_SCALE = [
    (97, "A+"),
    (93, "A"),
    (90, "A-"),
    (87, "B+"),
    (83, "B"),
    (80, "B-"),
    (77, "C+"),
    (73, "C"),
    (70, "C-"),
    (67, "D+"),
    (63, "D"),
    (60, "D-"),
]
QUALITY_LEVELS = {
    "A": "Excellent",
    "B": "Good",
    "C": "Acceptable",
    "D": "Poor",
}


@dataclass(frozen=True)
class GradeResult:
    letter: str
    numeric_score: float
    issue_density: float
    total_loc: int
    total_issues: int
    quality_level: str
    recommendation: str
    weighted_density: float = 0.0

    def __str__(self) -> str:
        return (
            f"Grade: {self.letter} ({self.numeric_score:.1f}%) | Quality: {self.quality_level} | "
            f"Density: {self.issue_density:.2f} issues/KLOC | LOC: {self.total_loc} | "
            f"Issues: {self.total_issues}"
        )


def _count(severity_counts: Mapping, severity: Severity) -> int:
    # Accept both Severity keys and their string names.
    return int(severity_counts.get(severity, severity_counts.get(severity.value, 0)) or 0)


class GradingService:
    """Maps severity counts and total LOC to a GradeResult."""

    def calculate_grade(self, severity_counts: Mapping, total_loc: int) -> GradeResult:
        if total_loc <= 0:
            return GradeResult("N/A", 0.0, 0.0, 0, 0, "Unknown", "Cannot grade: No code to analyze")

        counts = {severity: _count(severity_counts, severity) for severity in SEVERITY_WEIGHTS}
        total_issues = sum(counts.values())
        if total_issues == 0:
            return GradeResult(
                "A+",
                100.0,
                0.0,
                total_loc,
                0,
                "Excellent",
                "Perfect! No issues detected. Continue following best practices.",
            )

        kloc = total_loc / 1000.0
        weighted = sum(SEVERITY_WEIGHTS[severity] * count for severity, count in counts.items())
        density = total_issues / kloc
        weighted_density = weighted / kloc

        critical = counts[Severity.CRITICAL]
        high = counts[Severity.HIGH]
        score = self.apply_penalties(self.base_score(weighted_density), critical, total_loc, density)
        letter = self.letter_for(score)
        logger.debug(
            f"Graded {total_loc} LOC: density={density:.2f}, weighted={weighted_density:.2f}, "
            f"score={score:.2f} ({letter})"
        )
        return GradeResult(
            letter=letter,
            numeric_score=score,
            issue_density=density,
            total_loc=total_loc,
            total_issues=total_issues,
            quality_level=QUALITY_LEVELS.get(letter[0], "Failing"),
            recommendation=self.recommendation_for(letter, critical, high),
            weighted_density=weighted_density,
        )

    @staticmethod
    def base_score(density: float) -> float:
        if density < EXCELLENT_THRESHOLD:
            return 100 - (density / EXCELLENT_THRESHOLD) * 10
        if density < GOOD_THRESHOLD:
            ratio = (density - EXCELLENT_THRESHOLD) / (GOOD_THRESHOLD - EXCELLENT_THRESHOLD)
            return 90 - ratio * 10
        if density < ACCEPTABLE_THRESHOLD:
            ratio = (density - GOOD_THRESHOLD) / (ACCEPTABLE_THRESHOLD - GOOD_THRESHOLD)
            return 80 - ratio * 10
        if density < POOR_THRESHOLD:
            ratio = (density - ACCEPTABLE_THRESHOLD) / (POOR_THRESHOLD - ACCEPTABLE_THRESHOLD)
            return 70 - ratio * 10
        return max(0.0, 60 - (density - POOR_THRESHOLD) * 2)

    @staticmethod
    def apply_penalties(score: float, critical: int, total_loc: int, density: float) -> float:
        if critical * 1000.0 / total_loc > 1.0:
            score -= 10
        elif critical > 0:
            score -= 5

        if density > 20:
            score -= 15
        elif density > 15:
            score -= 10

        # A project with critical issues and a notable density cannot exceed a C.
        if critical > 0 and density > 5:
            score = min(score, 79)
        return max(0.0, min(100.0, score))

    @staticmethod
    def letter_for(score: float) -> str:
        for minimum, letter in GRADE_SCALE:
            if score >= minimum:
                return letter
        return "F"

    @staticmethod
    def recommendation_for(letter: str, critical: int, high: int) -> str:
        band = letter[0]
        if band == "A":
            return "Excellent code quality! Minor polish recommended."
        if band == "B":
            return f"Good quality. Address {critical + high} high-priority issues."
        if band == "C":
            return "Acceptable but needs improvement. Focus on critical issues first."
        if band == "D":
            return f"Poor quality. Immediate refactoring required for {critical} critical issues."
        return "Failing quality standards. Major overhaul needed. Do not deploy."


def format_grade_report(result: GradeResult) -> str:
    """Boxed, human-readable grade summary with the density benchmarks."""
    rule = "=" * 60
    lines = [
        "+" + "-" * 58 + "+",
        "|" + "CODE QUALITY GRADE REPORT".center(58) + "|",
        "+" + "-" * 58 + "+",
        "",
        f"Overall Grade: {result.letter} ({result.numeric_score:.1f}%)",
        f"Quality Level: {result.quality_level}",
        f"Project Size: {result.total_loc:,} lines of code",
        f"Total Issues: {result.total_issues}",
        f"Issue Density: {result.issue_density:.2f} issues per 1000 lines (KLOC)",
        f"Weighted Density: {result.weighted_density:.2f} severity-weighted issues per KLOC",
        f"Recommendation: {result.recommendation}",
        "",
        rule,
        "Industry Benchmarks (severity-weighted issues per KLOC):",
        f"  A (Excellent):  < {EXCELLENT_THRESHOLD} weighted/KLOC",
        f"  B (Good):       < {GOOD_THRESHOLD} weighted/KLOC",
        f"  C (Acceptable): < {ACCEPTABLE_THRESHOLD} weighted/KLOC",
        f"  D (Poor):       < {POOR_THRESHOLD} weighted/KLOC",
        f"  F (Failing):    >= {POOR_THRESHOLD} weighted/KLOC",
        rule,
    ]
    return "\n".join(lines) + "\n"


def calculate_grade(severity_counts: Mapping, total_loc: int) -> GradeResult:
    return GradingService().calculate_grade(severity_counts, total_loc)
