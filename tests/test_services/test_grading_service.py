"""Tests for letter grading."""

import itertools

import pytest

from devsync.detectors.base import Severity
from devsync.services.grading_service import GradingService, calculate_grade, format_grade_report


def _counts(critical=0, high=0, medium=0, low=0):
    return {
        Severity.CRITICAL: critical,
        Severity.HIGH: high,
        Severity.MEDIUM: medium,
        Severity.LOW: low,
    }


class TestGradeBoundaries:
    """Test the fixed grading outcomes."""

    def test_zero_issues_is_a_plus(self):
        """No issues means a perfect score regardless of size."""
        grade = calculate_grade(_counts(), 1234)

        assert grade.letter == "A+"
        assert grade.numeric_score == 100.0
        assert grade.issue_density == 0.0
        assert grade.quality_level == "Excellent"

    def test_no_code_is_not_gradable(self):
        grade = calculate_grade(_counts(low=3), 0)

        assert grade.letter == "N/A"
        assert grade.recommendation == "Cannot grade: No code to analyze"

    @pytest.mark.parametrize(
        "low,lower,upper",
        [
            (1, 90, 100),
            (3, 80, 90),
            (6, 70, 80),
        ],
    )
    def test_density_bands(self, low, lower, upper):
        """Low-severity issues per KLOC land in the expected score band."""
        grade = calculate_grade(_counts(low=low), 1000)

        assert lower <= grade.numeric_score < upper
        assert grade.issue_density == pytest.approx(float(low))
        assert grade.total_issues == low

    def test_string_keys_are_accepted(self):
        by_enum = calculate_grade(_counts(high=2, low=1), 2000)
        by_name = calculate_grade({"High": 2, "Low": 1}, 2000)

        assert by_enum == by_name

    def test_error_severity_is_ignored(self):
        counts = _counts(low=1)
        counts[Severity.ERROR] = 40

        assert calculate_grade(counts, 1000) == calculate_grade(_counts(low=1), 1000)

    def test_critical_issue_penalty(self):
        """A single critical issue costs more than its weight alone."""
        critical = calculate_grade(_counts(critical=1), 10000)
        high = calculate_grade(_counts(high=1), 10000)

        assert critical.numeric_score == pytest.approx(90 - 10 / 3 - 5)
        assert critical.letter == "B-"
        assert high.letter == "A-"

    def test_score_never_negative(self):
        grade = calculate_grade(_counts(critical=50, high=50), 100)

        assert grade.numeric_score == 0.0
        assert grade.letter == "F"
        assert grade.quality_level == "Failing"


class TestGradeMonotonicity:
    """More issues at fixed size never improve the score."""

    @pytest.mark.parametrize("severity", [Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW])
    def test_adding_an_issue_never_raises_score(self, severity):
        service = GradingService()
        for critical, high, medium, low in itertools.product(range(0, 4), range(0, 4), range(0, 6), range(0, 12, 3)):
            counts = _counts(critical, high, medium, low)
            before = service.calculate_grade(counts, 1500).numeric_score
            counts[severity] += 1
            after = service.calculate_grade(counts, 1500).numeric_score

            assert after <= before


class TestLetterScale:
    """Test score-to-letter mapping."""

    @pytest.mark.parametrize(
        "score,letter",
        [
            (100, "A+"),
            (97, "A+"),
            (95, "A"),
            (90, "A-"),
            (88, "B+"),
            (80, "B-"),
            (75, "C"),
            (70, "C-"),
            (64, "D"),
            (60, "D-"),
            (59.9, "F"),
            (0, "F"),
        ],
    )
    def test_letter_for(self, score, letter):
        assert GradingService.letter_for(score) == letter

    def test_recommendations(self):
        assert GradingService.recommendation_for("B+", 1, 2) == "Good quality. Address 3 high-priority issues."
        assert GradingService.recommendation_for("F", 0, 0).startswith("Failing quality standards")


class TestGradeReport:
    """Test the printable grade summary."""

    def test_format_grade_report(self):
        grade = calculate_grade(_counts(low=3), 1000)

        text = format_grade_report(grade)

        assert "CODE QUALITY GRADE REPORT" in text
        assert f"Overall Grade: {grade.letter}" in text
        assert "Issue Density: 3.00 issues per 1000 lines (KLOC)" in text
        assert "Project Size: 1,000 lines of code" in text
        assert "Weighted Density: 1.50 severity-weighted issues per KLOC" in text
        assert "Industry Benchmarks (severity-weighted issues per KLOC):" in text
        assert "  A (Excellent):  < 0.5 weighted/KLOC" in text
        assert grade.weighted_density == pytest.approx(1.5)

    def test_str(self):
        grade = calculate_grade(_counts(), 500)

        assert str(grade).startswith("Grade: A+ (100.0%)")
