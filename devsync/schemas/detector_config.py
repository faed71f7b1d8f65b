"""Detector configuration schemas."""

from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T", int, float)

# Detector name -> (settings flag, settings threshold fields)
SETTINGS_LAYOUT: dict[str, tuple[str, tuple[str, ...]]] = {
    "MagicNumberDetector": ("magic_number_enabled", ("magic_number_threshold",)),
    "LongIdentifierDetector": (
        "long_identifier_enabled",
        ("max_identifier_length", "max_identifier_words"),
    ),
    "LongParameterListDetector": (
        "long_parameter_enabled",
        ("max_parameter_count", "max_parameter_types"),
    ),
    "LongStatementDetector": (
        "long_statement_enabled",
        ("max_statement_chars", "max_statement_tokens", "max_method_chain_length"),
    ),
    "BrokenModularizationDetector": (
        "broken_modularization_enabled",
        ("max_coupling_count", "max_public_fields"),
    ),
    "DeficientEncapsulationDetector": (
        "deficient_encapsulation_enabled",
        ("max_public_ratio", "max_accessor_count"),
    ),
    "UnnecessaryAbstractionDetector": (
        "unnecessary_abstraction_enabled",
        ("max_abstraction_usage",),
    ),
    "MissingDefaultDetector": ("missing_default_enabled", ()),
    "UnusedVariableDetector": ("unused_variable_enabled", ()),
    "MemoryLeakDetector": ("memory_leak_enabled", ()),
    "EmptyCatchDetector": ("empty_catch_enabled", ()),
    "LongMethodDetector": (
        "long_method_enabled",
        ("max_method_length", "max_method_complexity"),
    ),
    "ComplexConditionalDetector": (
        "complex_conditional_enabled",
        ("max_conditional_operators", "max_nesting_depth"),
    ),
}


class DetectorOptions(BaseModel):
    """Per-detector switch and numeric thresholds."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    thresholds: dict[str, float] = Field(default_factory=dict)

    def value(self, key: str, default: T) -> T:
        """Threshold ``key`` coerced to the type of ``default``."""
        raw = self.thresholds.get(key)
        if raw is None:
            return default
        return type(default)(raw)


class DetectorConfig(BaseModel):
    """Configuration for one analysis run, keyed by detector name.

    Names that are not listed run with default thresholds.
    """

    model_config = ConfigDict(frozen=True)

    detectors: dict[str, DetectorOptions] = Field(default_factory=dict)

    def is_enabled(self, name: str) -> bool:
        options = self.detectors.get(name)
        return options is None or options.enabled

    def options_for(self, name: str) -> DetectorOptions:
        return self.detectors.get(name) or DetectorOptions()

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "DetectorConfig":
        """Build from ``{name: {"enabled": bool, "thresholds": {...}}}``.

        A bare boolean value is accepted as the enabled flag.
        """
        detectors = {}
        for name, entry in raw.items():
            if isinstance(entry, DetectorOptions):
                detectors[name] = entry
            elif isinstance(entry, bool):
                detectors[name] = DetectorOptions(enabled=entry)
            else:
                detectors[name] = DetectorOptions.model_validate(entry)
        return cls(detectors=detectors)

    @classmethod
    def from_settings(cls, settings: Any) -> "DetectorConfig":
        """Build from the flat settings surface (see ``devsync.config.Settings``)."""
        detectors = {}
        for name, (flag, threshold_fields) in SETTINGS_LAYOUT.items():
            detectors[name] = DetectorOptions(
                enabled=getattr(settings, flag),
                thresholds={key: getattr(settings, key) for key in threshold_fields},
            )
        return cls(detectors=detectors)
