"""Text and JSON rendering of diff results."""

from __future__ import annotations

import json
from typing import Any

from .models import DiffEntry, DiffResult, DiffType

HEADER = "DIFF-JSON v1"


def format_value(value: Any) -> str:
    """Render a payload value as compact JSON."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def format_lines(entry: DiffEntry) -> str:
    if entry.left_line is not None and entry.right_line is not None:
        return f" (L{entry.left_line}:L{entry.right_line})"
    if entry.left_line is not None:
        return f" (L{entry.left_line})"
    if entry.right_line is not None:
        return f" (L{entry.right_line})"
    return ""


def format_payload(entry: DiffEntry) -> str:
    if entry.type == DiffType.ADDED:
        return format_value(entry.new_value)
    if entry.type == DiffType.REMOVED:
        return format_value(entry.old_value)
    if entry.type in (DiffType.MODIFIED, DiffType.ARRAY_ITEM_CHANGED):
        return f"{format_value(entry.old_value)} -> {format_value(entry.new_value)}"
    if entry.type == DiffType.ARRAY_REORDERED:
        return "[REORDERED]"
    return "[IGNORED]"


def format_entry(entry: DiffEntry, readable: bool = True) -> str:
    """
    Format one entry as a single line.

    Readable:  ``[MODIFIED] $.name (L1:L1): "John" -> "Jane"``
    Symbolic:  ``~ $.name (L1:L1): "John" -> "Jane"``
    """
    if readable:
        label = f"[{entry.type.readable_text}]"
    else:
        label = entry.type.symbol
    return f"{label} {entry.path}{format_lines(entry)}: {format_payload(entry)}"


def format_result(result: DiffResult, readable: bool = True) -> str:
    """Format a complete result with its DIFF-JSON header."""
    lines = [HEADER]
    if result.left_source is not None:
        lines.append(f"LEFT: {result.left_source}")
    if result.right_source is not None:
        lines.append(f"RIGHT: {result.right_source}")
    lines.append(f"TIMESTAMP: {result.timestamp.isoformat()}")
    lines.append("")
    lines.extend(format_entry(entry, readable) for entry in result.entries)
    return "\n".join(lines) + "\n"


def format_json(result: DiffResult) -> str:
    """Format a result as an indented JSON report."""
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
