"""Best-effort mapping from addresses to source line numbers."""

from __future__ import annotations

import json
from typing import Any, Optional, Protocol

from .paths import ROOT, build_path, field_name, parent_path


class PositionResolver(Protocol):
    """Anything that can map an address to a (1-based) source line."""

    def line_for(self, path: str) -> Optional[int]:
        """Return the line for ``path``, or None when nothing is known."""


class LineCorrelator:
    """
    Approximate line lookup for one source document.

    This is not a line-tracking parser. Each object field is assigned the
    first line in the document where its key appears as ``"key":``, no matter
    where in the tree that occurrence sits. Array elements default to the line
    of the field holding the array; fields inside elements get their own
    entries. Results are advisory and only meant for navigation.

    Lookup falls back, in order, to:
    1. the exact address
    2. the nearest ancestor reached by stripping trailing ``.segment`` parts
    3. any recorded address ending in the same bare field name
    """

    def __init__(self, text: str, tree: Any):
        self._source_lines = text.splitlines()
        self._key_lines: dict[str, Optional[int]] = {}
        self._lines: dict[str, int] = {}
        self._record(tree, ROOT, None)

    @classmethod
    def from_text(cls, text: str) -> LineCorrelator:
        """Parse ``text`` and correlate it with its own tree."""
        return cls(text, json.loads(text))

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, path: str) -> bool:
        return path in self._lines

    def line_for(self, path: str) -> Optional[int]:
        line = self._lines.get(path)
        if line is not None:
            return line

        ancestor = parent_path(path)
        while ancestor is not None:
            line = self._lines.get(ancestor)
            if line is not None:
                return line
            ancestor = parent_path(ancestor)

        name = field_name(path)
        if name is None:
            return None
        suffix = f".{name}"
        for recorded, line in self._lines.items():
            if recorded.endswith(suffix):
                return line
        return None

    def _record(self, value: Any, path: str, container_line: Optional[int]):
        if isinstance(value, dict):
            for key, child in value.items():
                child_path = build_path(path, key)
                line = self._first_line_of_key(key)
                if line is not None:
                    self._lines[child_path] = line
                self._record(child, child_path, line)
        elif isinstance(value, list):
            for i, item in enumerate(value):
                item_path = build_path(path, i)
                if container_line is not None:
                    self._lines[item_path] = container_line
                self._record(item, item_path, container_line)

    def _first_line_of_key(self, key: str) -> Optional[int]:
        if key not in self._key_lines:
            self._key_lines[key] = self._scan_for_key(key)
        return self._key_lines[key]

    def _scan_for_key(self, key: str) -> Optional[int]:
        # Keys may be written with or without \u escapes in the source
        needles = {
            json.dumps(key, ensure_ascii=False) + ":",
            json.dumps(key) + ":",
        }
        for number, line in enumerate(self._source_lines, start=1):
            if any(needle in line for needle in needles):
                return number
        return None
