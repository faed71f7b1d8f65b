"""Source file discovery."""

import logging
import os
from pathlib import Path
from typing import Iterable, Optional

from devsync.config import get_settings

logger = logging.getLogger(__name__)


class CollectorService:
    """Finds analyzable source files under a root directory.

    Directory and file names below the root are skipped when they contain
    any exclusion pattern (case-insensitive substring match). The root itself
    is never matched against the patterns.
    """

    def __init__(
        self,
        excluded_patterns: Optional[Iterable[str]] = None,
        extensions: Optional[Iterable[str]] = None,
    ):
        settings = get_settings()
        patterns = settings.excluded_patterns if excluded_patterns is None else excluded_patterns
        suffixes = settings.source_extensions if extensions is None else extensions
        self.excluded_patterns = [p.lower() for p in patterns if p]
        self.extensions = {s.lower() if s.startswith(".") else f".{s.lower()}" for s in suffixes}

    def is_excluded(self, name: str) -> bool:
        lowered = name.lower()
        return any(pattern in lowered for pattern in self.excluded_patterns)

    def collect(self, root: str | Path) -> list[Path]:
        """Sorted list of candidate files; empty when the root is missing or unreadable."""
        root_path = Path(root)
        if root_path.is_file():
            return [root_path] if root_path.suffix.lower() in self.extensions else []
        if not root_path.is_dir() or not os.access(root_path, os.R_OK | os.X_OK):
            logger.warning(f"Source root {root_path} does not exist or is not readable")
            return []

        collected: list[Path] = []
        for current, dirs, files in os.walk(root_path):
            dirs[:] = sorted(d for d in dirs if not self.is_excluded(d))
            for filename in sorted(files):
                if self.is_excluded(filename):
                    continue
                if os.path.splitext(filename)[1].lower() not in self.extensions:
                    continue
                collected.append(Path(current) / filename)

        logger.info(f"Collected {len(collected)} source files under {root_path}")
        return collected
