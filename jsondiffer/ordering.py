"""Presentation ordering for diff entries."""

from __future__ import annotations

import sys
from typing import Iterable

from .models import DiffEntry

# Entries without any line number go last
NO_LINE = sys.maxsize


def position_key(entry: DiffEntry) -> int:
    if entry.left_line is not None:
        return entry.left_line
    if entry.right_line is not None:
        return entry.right_line
    return NO_LINE


def sort_entries(entries: Iterable[DiffEntry]) -> list[DiffEntry]:
    """Order entries by source position, keeping walk order for ties."""
    return sorted(entries, key=position_key)
