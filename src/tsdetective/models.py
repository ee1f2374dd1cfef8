"""Dependency records and per-run extraction options."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ParserName = Literal["typescript", "javascript"]


@dataclass(frozen=True, slots=True)
class DependencyRecord:
    """One dependency reference found in a source file."""

    specifier: str
    imported_names: tuple[str, ...] | None = None  # Only set for import declarations

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output. ``importedNames`` is omitted when unset."""
        result: dict[str, Any] = {"specifier": self.specifier}
        if self.imported_names is not None:
            result["importedNames"] = list(self.imported_names)
        return result


class ExtractOptions(BaseModel):
    """Behavioral switches for one extraction run.

    Accepts snake_case field names or their camelCase aliases, so
    ``{"skipTypeImports": True}`` and ``{"skip_type_imports": True}`` are
    equivalent. Unknown keys are ignored.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )

    skip_type_imports: bool = Field(
        default=False,
        description="Drop type-only import declarations and import-type references.",
    )
    skip_async_imports: bool = Field(
        default=False,
        description="Drop dynamic import() expressions.",
    )
    mixed_imports: bool = Field(
        default=False,
        description="Also report CommonJS require() calls.",
    )
    jsx: bool = Field(
        default=False,
        description="Parse with the JSX/TSX grammar.",
    )
    parser: ParserName = Field(
        default="typescript",
        description="Front-end grammar used for source text.",
    )
