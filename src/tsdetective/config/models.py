"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (TSDETECTIVE__SECTION__KEY)
3. Project YAML (.tsdetective/config.yaml)
4. Global YAML (~/.config/tsdetective/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    TSDETECTIVE__<SECTION>__<KEY>=<VALUE>

Examples:
    TSDETECTIVE__LOGGING__LEVEL=DEBUG
    TSDETECTIVE__EXTRACT__MIXED_IMPORTS=true
    TSDETECTIVE__EXTRACT__PARSER=javascript
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from tsdetective.models import ExtractOptions, ParserName

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        TSDETECTIVE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG logs every parse.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ExtractConfig(BaseModel):
    """Default extraction options for the CLI.

    Env vars:
        TSDETECTIVE__EXTRACT__SKIP_TYPE_IMPORTS: Drop type-only imports
        TSDETECTIVE__EXTRACT__SKIP_ASYNC_IMPORTS: Drop dynamic import()
        TSDETECTIVE__EXTRACT__MIXED_IMPORTS: Report require() calls
        TSDETECTIVE__EXTRACT__JSX: Parse JSX/TSX
        TSDETECTIVE__EXTRACT__PARSER: typescript or javascript
    """

    skip_type_imports: bool = False
    skip_async_imports: bool = False
    mixed_imports: bool = Field(
        default=False,
        description="Report CommonJS require() calls alongside ES module syntax.",
    )
    jsx: bool = False
    parser: ParserName = "typescript"

    def to_options(self, **overrides: bool | str | None) -> ExtractOptions:
        """Build ExtractOptions, applying non-None overrides."""
        values = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return ExtractOptions(**values)


class TsDetectiveConfig(BaseModel):
    """Root configuration model."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    extract: ExtractConfig = Field(default_factory=ExtractConfig)
