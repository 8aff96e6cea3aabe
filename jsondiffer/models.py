"""Data models for the jsondiffer engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Optional

from .paths import PathPattern


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class _Missing:
    """Marker for an entry side that carries no value (distinct from JSON null)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


class DiffType(Enum):
    ADDED = "ADDED"
    REMOVED = "REMOVED"
    MODIFIED = "MODIFIED"
    ARRAY_ITEM_CHANGED = "ARRAY_ITEM_CHANGED"
    ARRAY_REORDERED = "ARRAY_REORDERED"
    IGNORED = "IGNORED"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @property
    def readable_text(self) -> str:
        return self.value

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    def __str__(self) -> str:
        return self.symbol


_SYMBOLS = {
    DiffType.ADDED: "+",
    DiffType.REMOVED: "-",
    DiffType.MODIFIED: "~",
    DiffType.ARRAY_ITEM_CHANGED: "!",
    DiffType.ARRAY_REORDERED: "*",
    DiffType.IGNORED: "?",
}

_DESCRIPTIONS = {
    DiffType.ADDED: "Property exists in target but not in source",
    DiffType.REMOVED: "Property exists in source but not in target",
    DiffType.MODIFIED: "Property exists in both but with different values",
    DiffType.ARRAY_ITEM_CHANGED: "Array item has changed",
    DiffType.ARRAY_REORDERED: "Array elements are reordered",
    DiffType.IGNORED: "Property was ignored based on configuration",
}


@dataclass
class EngineConfig:
    """Global configuration for the comparison engine."""
    max_depth: int = 200  # capped at utils.max_supported_depth()
    max_payload_size_mb: float = 50
    resolve_lines: bool = True
    sort_entries: bool = True
    log_level: LogLevel = LogLevel.INFO


@dataclass
class DiffEntry:
    """A single difference found during comparison."""
    type: DiffType
    path: str
    old_value: Any = MISSING
    new_value: Any = MISSING
    left_line: Optional[int] = None
    right_line: Optional[int] = None

    @property
    def has_old_value(self) -> bool:
        return self.old_value is not MISSING

    @property
    def has_new_value(self) -> bool:
        return self.new_value is not MISSING

    def to_dict(self) -> dict:
        result = {
            "type": self.type.value,
            "path": self.path,
        }
        if self.has_old_value:
            result["old_value"] = self.old_value
        if self.has_new_value:
            result["new_value"] = self.new_value
        if self.left_line is not None:
            result["left_line"] = self.left_line
        if self.right_line is not None:
            result["right_line"] = self.right_line
        return result


@dataclass
class DiffResult:
    """Complete diff between two JSON documents."""
    entries: list[DiffEntry] = field(default_factory=list)
    left_source: Optional[Path] = None
    right_source: Optional[Path] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_identical(self) -> bool:
        """True when nothing but ignored locations was reported."""
        return all(e.type == DiffType.IGNORED for e in self.entries)

    def count_by_type(self) -> dict[DiffType, int]:
        counts = {t: 0 for t in DiffType}
        for entry in self.entries:
            counts[entry.type] += 1
        return counts

    def to_dict(self) -> dict:
        result = {
            "timestamp": self.timestamp.isoformat(),
            "is_identical": self.is_identical,
            "summary": {t.value: n for t, n in self.count_by_type().items() if n},
            "entries": [e.to_dict() for e in self.entries],
        }
        if self.left_source is not None:
            result["left_source"] = str(self.left_source)
        if self.right_source is not None:
            result["right_source"] = str(self.right_source)
        return result


@dataclass(frozen=True)
class CompareOptions:
    """Rules applied to one comparison."""
    ignore_patterns: tuple[PathPattern, ...] = ()
    unordered_array_patterns: tuple[PathPattern, ...] = ()
    show_nested_differences: bool = False
    identify_array_item_changes: bool = True

    def __post_init__(self):
        # Accept any iterable (lists from callers, generators) but store tuples.
        object.__setattr__(self, "ignore_patterns", _as_patterns(self.ignore_patterns))
        object.__setattr__(
            self, "unordered_array_patterns", _as_patterns(self.unordered_array_patterns)
        )

    def is_ignored(self, path: str) -> bool:
        return any(p.matches(path) for p in self.ignore_patterns)

    def is_unordered(self, path: str) -> bool:
        return any(p.matches(path) for p in self.unordered_array_patterns)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> CompareOptions:
        """
        Build options from a profile mapping.

        Recognized keys: ``ignore``, ``unordered``, ``show_nested_differences``
        and ``identify_array_item_changes``. Each pattern is either a plain
        string (exact address) or a mapping with a ``regex`` or ``wildcard``
        key. Invalid regexes raise InvalidPatternError here, before any
        comparison runs.
        """
        data = data or {}
        identify = data.get("identify_array_item_changes")
        return cls(
            ignore_patterns=tuple(
                PathPattern.from_config(p) for p in data.get("ignore") or ()
            ),
            unordered_array_patterns=tuple(
                PathPattern.from_config(p) for p in data.get("unordered") or ()
            ),
            show_nested_differences=bool(data.get("show_nested_differences", False)),
            identify_array_item_changes=True if identify is None else bool(identify),
        )


def _as_patterns(items: Iterable) -> tuple[PathPattern, ...]:
    return tuple(
        p if isinstance(p, PathPattern) else PathPattern.from_config(p)
        for p in items
    )
