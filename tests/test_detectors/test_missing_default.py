"""Tests for the weighted missing-default detector."""

import pytest

from devsync.detectors.base import DetectorKind, Severity
from devsync.detectors.missing_default import MissingDefaultDetector
from devsync.schemas.detector_config import DetectorOptions


@pytest.fixture
def detector():
    return MissingDefaultDetector()


class TestMissingDefaultReporting:
    """Which switches are reported."""

    def test_fully_covered_safe_enum_is_exempt(self, detector, parse_java, sample_java_order_service):
        """A complete switch over a *Status enum needs no default."""
        source = parse_java(sample_java_order_service, "OrderService.java")

        assert detector.detect(source, DetectorOptions()) == []

    def test_switch_with_default_is_not_reported(self, detector, parse_java, sample_java_pricing):
        """Only the switch without default is reported."""
        source = parse_java(sample_java_pricing, "Pricing.java")
        issues = detector.detect(source, DetectorOptions())

        assert len(issues) == 1
        assert issues[0].line == 6

    def test_public_value_switch_is_critical(self, detector, parse_java, sample_java_pricing):
        """A public method returning from a small int switch is the riskiest case."""
        issue = detector.detect(parse_java(sample_java_pricing, "Pricing.java"), DetectorOptions())[0]

        assert issue.kind == DetectorKind.MISSING_DEFAULT
        assert issue.severity == Severity.CRITICAL
        assert issue.file == "Pricing.java"
        assert issue.message == (
            "Switch on 'tier' (2 cases, Risk: 1.30) - Missing return path, Public API risk"
        )
        assert issue.suggestion.startswith("Add default with appropriate return value")

    def test_partial_safe_enum_is_reported(self, detector, parse_java):
        """Missing enum constants are reported even for safe enum names."""
        code = """public class Shipping {
    enum OrderStatus { PENDING, SHIPPED, DELIVERED, RETURNED, CANCELLED }

    void announce(OrderStatus status) {
        switch (status) {
            case PENDING:
                send();
                break;
            case SHIPPED:
                send();
                break;
        }
    }

    void send() {
    }
}
"""
        issues = detector.detect(parse_java(code), DetectorOptions())

        assert len(issues) == 1
        assert "Incomplete enum coverage" in issues[0].message
        assert "Handle all enum values" in issues[0].suggestion
        assert issues[0].severity == Severity.HIGH

    def test_test_method_with_low_risk_is_skipped(self, detector, parse_java):
        """Test methods are only reported above the higher threshold."""
        body = """switch (code) {
            case 1:
                first();
                break;
            case 2:
                second();
                break;
            case 3:
                third();
                break;
        }"""
        in_test = parse_java(f"class Checks {{ void testCodes(int code) {{ {body} }} }}")
        in_code = parse_java(f"class Checks {{ void handleCodes(int code) {{ {body} }} }}")

        assert detector.detect(in_test, DetectorOptions()) == []
        issues = detector.detect(in_code, DetectorOptions())
        assert len(issues) == 1
        assert issues[0].severity == Severity.HIGH
        assert "Risk: 0.81" in issues[0].message

    def test_exhaustive_comment_lowers_risk(self, detector, parse_java):
        """A comment declaring the switch exhaustive counts as safety."""
        code = """class Modes {
    void apply(int mode) {
        // exhaustive: only 1..3 are produced upstream
        switch (mode) {
            case 1:
                run();
                break;
            case 2:
                run();
                break;
            case 3:
                run();
                break;
        }
    }

    void run() {
    }
}
"""
        issues = detector.detect(parse_java(code), DetectorOptions())

        assert len(issues) == 1
        assert "Risk: 0.66" in issues[0].message
        assert issues[0].severity == Severity.MEDIUM

    def test_fallthrough_is_flagged(self, detector, parse_java):
        """A case that runs into the next one raises the risk and is explained."""
        code = """class Steps {
    void step(int n) {
        switch (n) {
            case 1:
                prepare();
            case 2:
                run();
                break;
            case 3:
                run();
                break;
        }
    }

    void prepare() {
    }

    void run() {
    }
}
"""
        issues = detector.detect(parse_java(code), DetectorOptions())

        assert len(issues) == 1
        assert "Fallthrough complexity" in issues[0].message
        assert "Add explicit break statements" in issues[0].suggestion


class TestMissingDefaultSwitchExpressions:
    """Arrow-form switches."""

    def test_arrow_cases_do_not_fall_through(self, detector, parse_java):
        code = """public class Labels {
    enum Speed { FAST, SLOW }

    public String label(Speed speed) {
        return switch (speed) {
            case FAST -> "fast";
            case SLOW -> "slow";
        };
    }
}
"""
        issues = detector.detect(parse_java(code), DetectorOptions())

        # Speed is fully covered but not a recognised safe name.
        assert len(issues) == 1
        assert "Fallthrough" not in issues[0].message
        assert issues[0].severity == Severity.CRITICAL
