"""Report parsing and validation schemas."""

from typing import Any

from pydantic import BaseModel, Field


class MethodThresholdDetails(BaseModel):
    """Metrics carried in a LongMethod issue's detailed reason."""

    line_count: int
    line_threshold: int
    exceeds_line_count: bool
    cyclomatic_complexity: int | None = None
    max_cyclomatic_complexity: int | None = None
    exceeds_cyclomatic_complexity: bool = False


class ParsedIssue(BaseModel):
    """One detailed-issue line read back from a report."""

    severity: str
    kind: str
    file: str
    line: int
    message: str
    suggestion: str = ""
    detailed_reason: str | None = None
    threshold_details: MethodThresholdDetails | None = None


class ParsedReport(BaseModel):
    """Everything the parser extracted from a report text."""

    summary: str | None = None
    sections: list[str] = Field(default_factory=list)
    severity_counts: dict[str, int] = Field(default_factory=dict)
    type_counts: dict[str, int] = Field(default_factory=dict)
    file_counts: dict[str, dict[str, int]] = Field(default_factory=dict)
    issues: list[ParsedIssue] = Field(default_factory=list)
    format_errors: list[str] = Field(default_factory=list)


class ValidationResult(BaseModel):
    """Outcome of cross-checking a report's summary sections against its issues."""

    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    extracted_data: dict[str, Any] = Field(default_factory=dict)
