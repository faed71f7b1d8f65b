"""Code-quality detectors.

The registry is a closed, ordered list; report ordering within a file
follows it.
"""

from devsync.detectors.base import (
    SEVERITY_ORDER,
    Detector,
    DetectorKind,
    Issue,
    Severity,
)
from devsync.detectors.broken_modularization import BrokenModularizationDetector
from devsync.detectors.complex_conditional import ComplexConditionalDetector
from devsync.detectors.deficient_encapsulation import DeficientEncapsulationDetector
from devsync.detectors.empty_catch import EmptyCatchDetector
from devsync.detectors.long_identifier import LongIdentifierDetector
from devsync.detectors.long_method import LongMethodDetector
from devsync.detectors.long_parameter_list import LongParameterListDetector
from devsync.detectors.long_statement import LongStatementDetector
from devsync.detectors.magic_number import MagicNumberDetector
from devsync.detectors.memory_leak import MemoryLeakDetector
from devsync.detectors.missing_default import MissingDefaultDetector
from devsync.detectors.unnecessary_abstraction import UnnecessaryAbstractionDetector
from devsync.detectors.unused_variable import UnusedVariableDetector

DETECTOR_CLASSES: list[type[Detector]] = [
    MagicNumberDetector,
    LongIdentifierDetector,
    LongParameterListDetector,
    LongStatementDetector,
    BrokenModularizationDetector,
    DeficientEncapsulationDetector,
    UnnecessaryAbstractionDetector,
    MissingDefaultDetector,
    UnusedVariableDetector,
    MemoryLeakDetector,
    EmptyCatchDetector,
    LongMethodDetector,
    ComplexConditionalDetector,
]


def default_detectors() -> list[Detector]:
    """Fresh instances of every registered detector, in report order."""
    return [detector_class() for detector_class in DETECTOR_CLASSES]


__all__ = [
    "DETECTOR_CLASSES",
    "SEVERITY_ORDER",
    "Detector",
    "DetectorKind",
    "Issue",
    "Severity",
    "default_detectors",
]
