"""Pydantic schemas."""

from devsync.schemas.detector_config import DetectorConfig, DetectorOptions
from devsync.schemas.report import (
    MethodThresholdDetails,
    ParsedIssue,
    ParsedReport,
    ValidationResult,
)

__all__ = [
    "DetectorConfig",
    "DetectorOptions",
    "MethodThresholdDetails",
    "ParsedIssue",
    "ParsedReport",
    "ValidationResult",
]
