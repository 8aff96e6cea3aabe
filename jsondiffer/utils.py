"""Utility functions for the jsondiffer engine."""

from __future__ import annotations

import json
import math
import sys
from typing import Any, Optional

from .paths import ROOT, build_path


def get_json_size_mb(obj: Any) -> float:
    """Get the approximate size of a JSON object in megabytes."""
    json_str = json.dumps(obj, default=str)
    return len(json_str.encode('utf-8')) / (1024 * 1024)


def is_numeric(value: Any) -> bool:
    """Check if a value is numeric (int or float)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def values_equal(old: Any, new: Any) -> bool:
    """
    Deep JSON equality.

    Booleans never equal numbers and integers never equal floats, so 1 and
    1.0 differ. Objects ignore key order and arrays do not.
    """
    if isinstance(old, bool) or isinstance(new, bool):
        return type(old) is type(new) and old == new

    if is_numeric(old) and is_numeric(new):
        if type(old) is not type(new):
            return False
        if old == new:
            return True
        # NaN is accepted by the json module; keep it equal to itself
        return isinstance(old, float) and isinstance(new, float) and math.isnan(old) and math.isnan(new)

    if isinstance(old, dict) and isinstance(new, dict):
        if old.keys() != new.keys():
            return False
        return all(values_equal(old[k], new[k]) for k in old)

    if isinstance(old, list) and isinstance(new, list):
        if len(old) != len(new):
            return False
        return all(values_equal(a, b) for a, b in zip(old, new))

    if type(old) is not type(new):
        return False

    return old == new


def find_depth_violation(data: Any, max_depth: int) -> Optional[str]:
    """
    Return the address of the first container nested deeper than ``max_depth``.

    Walks iteratively so that pathological documents are rejected before the
    recursive comparison starts.
    """
    stack = [(data, ROOT, 0)]
    while stack:
        value, path, depth = stack.pop()
        if not isinstance(value, (dict, list)):
            continue
        if depth >= max_depth:
            return path
        if isinstance(value, dict):
            children = value.items()
        else:
            children = enumerate(value)
        for key, child in children:
            if isinstance(child, (dict, list)):
                stack.append((child, build_path(path, key), depth + 1))
    return None


def max_supported_depth() -> int:
    """
    Deepest ``max_depth`` the recursive walk can handle.

    The comparison, equality check and line recording all recurse, using up
    to two frames per nesting level on top of the caller's stack.
    """
    return sys.getrecursionlimit() // 4
