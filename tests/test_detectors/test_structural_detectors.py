"""Tests for the type-level design detectors."""

import pytest

from devsync.detectors.base import DetectorKind, Severity
from devsync.detectors.broken_modularization import BrokenModularizationDetector
from devsync.detectors.deficient_encapsulation import DeficientEncapsulationDetector
from devsync.detectors.unnecessary_abstraction import UnnecessaryAbstractionDetector
from devsync.schemas.detector_config import DetectorOptions


def _imports(count: int) -> str:
    return "".join(f"import com.shop.model.Type{i};\n" for i in range(count))


class TestBrokenModularizationDetector:
    """Test coupling and public field checks."""

    def test_too_many_imports(self, parse_java):
        code = "package com.shop;\n\n" + _imports(11) + "\nclass Hub {\n}\n"

        issues = BrokenModularizationDetector().detect(parse_java(code), DetectorOptions())

        assert len(issues) == 1
        assert issues[0].kind == DetectorKind.BROKEN_MODULARIZATION
        assert issues[0].line == 3
        assert issues[0].severity == Severity.MEDIUM
        assert "imports 11 types" in issues[0].message

    def test_very_high_coupling_is_high(self, parse_java):
        code = _imports(21) + "class Hub {\n}\n"

        issues = BrokenModularizationDetector().detect(parse_java(code), DetectorOptions())

        assert [issue.severity for issue in issues] == [Severity.HIGH]

    def test_public_mutable_fields(self, parse_java):
        code = """class Settings {
    public static final int LIMIT = 3;
    public int a, b, c;
    public String d;
    public long e;
    public boolean f;
}
"""
        issues = BrokenModularizationDetector().detect(parse_java(code), DetectorOptions())

        assert len(issues) == 1
        assert issues[0].line == 3
        assert "6 public non-constant fields" in issues[0].message

    def test_small_file_is_clean(self, parse_java, sample_java_clean):
        assert BrokenModularizationDetector().detect(parse_java(sample_java_clean), DetectorOptions()) == []


class TestDeficientEncapsulationDetector:
    """Test public field ratio and accessor dominance."""

    @pytest.mark.parametrize(
        "fields,expected",
        [
            ("public int a;\n public int b;\n private int c;\n", Severity.HIGH),
            ("public int a;\n private int b;\n private int c;\n", Severity.MEDIUM),
        ],
    )
    def test_public_ratio(self, parse_java, fields, expected):
        code = f"class Holder {{\n {fields}}}\n"

        issues = DeficientEncapsulationDetector().detect(parse_java(code), DetectorOptions())

        assert [issue.severity for issue in issues] == [expected]
        assert issues[0].line == 1

    def test_constants_do_not_count(self, parse_java):
        code = """class Limits {
    public static final int MAX = 10;
    private int current;
}
"""
        assert DeficientEncapsulationDetector().detect(parse_java(code), DetectorOptions()) == []

    def test_accessor_dominated_class(self, parse_java):
        getters = "".join(
            f"    public int getValue{i}() {{\n        return value{i % 5};\n    }}\n" for i in range(11)
        )
        fields = "".join(f"    private int value{i};\n" for i in range(5))
        code = "class Bean {\n" + fields + getters + "}\n"

        issues = DeficientEncapsulationDetector().detect(parse_java(code), DetectorOptions())

        assert len(issues) == 1
        assert issues[0].severity == Severity.MEDIUM
        assert "(11 of 16 members)" in issues[0].message

    def test_interfaces_are_skipped(self, parse_java):
        code = "interface Limits {\n    int MAX = 10;\n}\n"

        assert DeficientEncapsulationDetector().detect(parse_java(code), DetectorOptions()) == []


class TestUnnecessaryAbstractionDetector:
    """Test near-empty abstractions."""

    def test_empty_abstract_base_is_medium(self, parse_java):
        code = "abstract class HandlerBase {\n}\n"

        issues = UnnecessaryAbstractionDetector().detect(parse_java(code), DetectorOptions())

        assert len(issues) == 1
        assert issues[0].kind == DetectorKind.UNNECESSARY_ABSTRACTION
        assert issues[0].severity == Severity.MEDIUM
        assert issues[0].message == "Class 'HandlerBase' adds an abstraction layer with only 0 member(s)"

    def test_single_method_interface_is_low(self, parse_java):
        code = "interface Named {\n    String name();\n}\n"

        issues = UnnecessaryAbstractionDetector().detect(parse_java(code), DetectorOptions())

        assert [issue.severity for issue in issues] == [Severity.LOW]

    def test_functional_interface_is_skipped(self, parse_java):
        code = "@FunctionalInterface\ninterface Callback {\n    void call();\n}\n"

        assert UnnecessaryAbstractionDetector().detect(parse_java(code), DetectorOptions()) == []

    def test_adapter_with_real_members_is_skipped(self, parse_java):
        code = """class PrinterAdapter {
    void print() {
    }

    void flush() {
    }
}
"""
        assert UnnecessaryAbstractionDetector().detect(parse_java(code), DetectorOptions()) == []

    def test_concrete_class_is_skipped(self, parse_java):
        assert UnnecessaryAbstractionDetector().detect(
            parse_java("class Plain {\n}\n"), DetectorOptions()
        ) == []
