"""tsdetective error types with typed error codes.

Error code ranges:
- 1xxx: Extraction (input, parse, grammar)
- 2xxx: Config
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Extraction (1xxx)
    INVALID_INPUT = 1001
    PARSE_ERROR = 1002
    DIALECT_UNAVAILABLE = 1003

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_MISSING_REQUIRED = 2003
    CONFIG_FILE_NOT_FOUND = 2004


@dataclass(frozen=True, slots=True)
class TsDetectiveError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class InvalidInputError(TsDetectiveError):
    """The source handed to an extraction entry point is unusable."""

    @classmethod
    def missing_source(cls) -> "InvalidInputError":
        return cls(
            code=ErrorCode.INVALID_INPUT,
            message="src not given",
        )

    @classmethod
    def unsupported_type(cls, value: Any) -> "InvalidInputError":
        type_name = type(value).__name__
        return cls(
            code=ErrorCode.INVALID_INPUT,
            message=f"Unsupported source type: {type_name}",
            details={"type": type_name},
        )

    @classmethod
    def invalid_options(cls, field: str, reason: str) -> "InvalidInputError":
        return cls(
            code=ErrorCode.INVALID_INPUT,
            message=f"Invalid option '{field}': {reason}",
            details={"field": field, "reason": reason},
        )

    @classmethod
    def undecodable(cls, position: int, reason: str) -> "InvalidInputError":
        return cls(
            code=ErrorCode.INVALID_INPUT,
            message=f"Source bytes are not valid UTF-8 at offset {position}: {reason}",
            details={"position": position, "reason": reason},
        )


class ParseError(TsDetectiveError):
    """Source text could not be turned into a syntax tree."""

    @classmethod
    def syntax(cls, line: int, column: int, dialect: str) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_ERROR,
            message=f"Syntax error at line {line}, column {column} ({dialect})",
            details={"line": line, "column": column, "dialect": dialect},
        )

    @classmethod
    def dialect_unavailable(cls, dialect: str, reason: str) -> "ParseError":
        return cls(
            code=ErrorCode.DIALECT_UNAVAILABLE,
            message=f"Grammar not available for dialect '{dialect}': {reason}",
            details={"dialect": dialect, "reason": reason},
        )


class ConfigError(TsDetectiveError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def missing_required(cls, field: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_MISSING_REQUIRED,
            message=f"Missing required config field: {field}",
            details={"field": field},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )
