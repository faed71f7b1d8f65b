"""Exceptions raised inside the analysis pipeline."""

from typing import Optional


class DevSyncError(Exception):
    """Base class for analyzer errors."""


class SourceParseError(DevSyncError):
    """A source file could not be turned into a syntax tree."""

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        super().__init__(message)
        self.line = line
