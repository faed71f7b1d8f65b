"""DevSync: Java code-quality analysis with a round-trippable text report."""

from devsync.schemas.detector_config import DetectorConfig, DetectorOptions
from devsync.services.analysis_service import AnalysisResult, AnalysisService, analyze
from devsync.services.grading_service import GradeResult, calculate_grade, format_grade_report
from devsync.services.report_parser_service import highlight_map, parse
from devsync.services.report_service import render
from devsync.services.validation_service import validate

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult",
    "AnalysisService",
    "DetectorConfig",
    "DetectorOptions",
    "GradeResult",
    "analyze",
    "calculate_grade",
    "format_grade_report",
    "highlight_map",
    "parse",
    "render",
    "validate",
]
