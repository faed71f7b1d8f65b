"""Analyzer configuration using Pydantic Settings."""

from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Analyzer settings loaded from environment variables (prefix ``DEVSYNC_``)."""

    model_config = SettingsConfigDict(
        env_prefix="DEVSYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    log_level: str = "INFO"

    # Source collection
    excluded_patterns: List[str] = ["test", "target", "build", ".git"]
    source_extensions: List[str] = [".java"]

    # Detector switches
    magic_number_enabled: bool = True
    long_identifier_enabled: bool = True
    long_parameter_enabled: bool = True
    long_statement_enabled: bool = True
    broken_modularization_enabled: bool = True
    deficient_encapsulation_enabled: bool = True
    unnecessary_abstraction_enabled: bool = True
    missing_default_enabled: bool = True
    unused_variable_enabled: bool = True
    memory_leak_enabled: bool = True
    empty_catch_enabled: bool = True
    long_method_enabled: bool = True
    complex_conditional_enabled: bool = True

    # Long method
    max_method_length: int = 50
    max_method_complexity: int = 10

    # Long parameter list
    max_parameter_count: int = 4
    max_parameter_types: int = 3

    # Long identifier
    max_identifier_length: int = 32
    max_identifier_words: int = 5

    # Magic number
    magic_number_threshold: int = 3

    # Complex conditional
    max_conditional_operators: int = 4
    max_nesting_depth: int = 3

    # Long statement
    max_statement_tokens: int = 5
    max_statement_chars: int = 120
    max_method_chain_length: int = 3

    # Modularization / encapsulation
    max_coupling_count: int = 10
    max_public_fields: int = 5
    max_public_ratio: float = 0.3
    max_accessor_count: int = 10

    # Unnecessary abstraction
    max_abstraction_usage: int = 1

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure the log level is one the logging module understands."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"log_level must be a standard logging level, got {v!r}")
        return level

    @field_validator("source_extensions", mode="after")
    @classmethod
    def normalize_extensions(cls, v: List[str]) -> List[str]:
        return [ext if ext.startswith(".") else f".{ext}" for ext in v]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
