"""
jsondiffer - Path-Addressed JSON Comparison Engine

Computes a structured difference between two JSON documents, with ignored
paths, order-insensitive arrays and best-effort source line numbers for
each difference.
"""

from .engine import JsonDiffEngine, compare, compare_files, compare_texts
from .differ import Differ, diff
from .models import (
    CompareOptions,
    DiffEntry,
    DiffResult,
    DiffType,
    EngineConfig,
    LogLevel,
    MISSING,
)
from .paths import PathPattern, PatternKind, matches
from .lines import LineCorrelator, PositionResolver
from .ordering import sort_entries
from .profile import ProfileLoader, load_profile
from .render import format_entry, format_json, format_result
from .exceptions import (
    JsonDiffError,
    InvalidPatternError,
    PatternCompileError,
    JsonParseError,
    InputFileError,
    ProfileError,
    MaxDepthExceededError,
    PayloadSizeError,
)

__version__ = "1.0.0"
__all__ = [
    # Engine
    "JsonDiffEngine",
    "EngineConfig",
    "LogLevel",
    "compare",
    "compare_files",
    "compare_texts",
    # Comparator
    "Differ",
    "diff",
    "CompareOptions",
    # Results
    "DiffEntry",
    "DiffResult",
    "DiffType",
    "MISSING",
    # Path matching
    "PathPattern",
    "PatternKind",
    "matches",
    # Line correlation and ordering
    "LineCorrelator",
    "PositionResolver",
    "sort_entries",
    # Profiles and rendering
    "ProfileLoader",
    "load_profile",
    "format_entry",
    "format_result",
    "format_json",
    # Errors
    "JsonDiffError",
    "InvalidPatternError",
    "PatternCompileError",
    "JsonParseError",
    "InputFileError",
    "ProfileError",
    "MaxDepthExceededError",
    "PayloadSizeError",
]
