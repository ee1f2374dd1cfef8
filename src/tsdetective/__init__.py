"""tsdetective - dependency specifiers of JavaScript and TypeScript modules."""

from tsdetective.classify import classify
from tsdetective.core.errors import InvalidInputError, ParseError, TsDetectiveError
from tsdetective.models import DependencyRecord, ExtractOptions
from tsdetective.ops import extract, extract_file, extract_tsx

__version__ = "0.1.0"

__all__ = [
    "DependencyRecord",
    "ExtractOptions",
    "InvalidInputError",
    "ParseError",
    "TsDetectiveError",
    "classify",
    "extract",
    "extract_file",
    "extract_tsx",
]
