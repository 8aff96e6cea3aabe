"""Recursive tree diff for the jsondiffer engine."""

from __future__ import annotations

from typing import Any, Optional

from .lines import PositionResolver
from .models import CompareOptions, DiffEntry, DiffType, MISSING
from .paths import ROOT, build_path
from .utils import values_equal


class Differ:
    """
    Walks two parsed JSON trees in lock-step and collects differences.

    Handles:
    - Ignored addresses (reported once, never descended into)
    - Object key comparison (removed, added, common keys)
    - Ordered arrays, index by index or as a whole
    - Unordered arrays (reported as reordered, optionally with nested diffs)

    Entries come out in walk order: depth-first, pre-order, left-side keys
    first. Line numbers are attached when position resolvers are given.
    """

    def __init__(
        self,
        options: Optional[CompareOptions] = None,
        left_lines: Optional[PositionResolver] = None,
        right_lines: Optional[PositionResolver] = None
    ):
        self.options = options or CompareOptions()
        self.left_lines = left_lines
        self.right_lines = right_lines

        self.entries: list[DiffEntry] = []

    def diff(self, left: Any, right: Any, path: str = ROOT) -> list[DiffEntry]:
        """
        Compare two values and return the entries collected so far.

        Args:
            left: The source value
            right: The target value
            path: Address of the values being compared

        Returns:
            List of diff entries in walk order
        """
        self._compare(left, right, path)
        return self.entries

    def _compare(self, left: Any, right: Any, path: str):
        if self.options.is_ignored(path):
            self._add_entry(DiffType.IGNORED, path)
            return

        if isinstance(left, dict) and isinstance(right, dict):
            self._diff_objects(left, right, path)
        elif isinstance(left, list) and isinstance(right, list):
            if self.options.is_unordered(path):
                self._diff_unordered_arrays(left, right, path)
            else:
                self._diff_ordered_arrays(left, right, path)
        elif not values_equal(left, right):
            self._add_entry(DiffType.MODIFIED, path, old_value=left, new_value=right)

    def _diff_objects(self, left: dict, right: dict, path: str):
        """Compare two objects."""
        for key, value in left.items():
            if key in right:
                continue

            child_path = build_path(path, key)
            if self.options.is_ignored(child_path):
                self._add_entry(DiffType.IGNORED, child_path)
                continue

            self._add_entry(DiffType.REMOVED, child_path, old_value=value)

        for key, value in right.items():
            child_path = build_path(path, key)

            if self.options.is_ignored(child_path):
                self._add_entry(DiffType.IGNORED, child_path)
                continue

            if key not in left:
                self._add_entry(DiffType.ADDED, child_path, new_value=value)
                continue

            # Both have the key - recurse
            self._compare(left[key], value, child_path)

    def _diff_ordered_arrays(self, left: list, right: list, path: str):
        """Compare arrays index-by-index (order matters)."""
        if not self.options.identify_array_item_changes:
            if not values_equal(left, right):
                self._add_entry(DiffType.MODIFIED, path, old_value=left, new_value=right)
            return

        # Compare common elements
        min_len = min(len(left), len(right))
        for i in range(min_len):
            self._compare(left[i], right[i], build_path(path, i))

        # Handle extra items in left
        for i in range(min_len, len(left)):
            self._add_entry(DiffType.REMOVED, build_path(path, i), old_value=left[i])

        # Handle extra items in right
        for i in range(min_len, len(right)):
            self._add_entry(DiffType.ADDED, build_path(path, i), new_value=right[i])

    def _diff_unordered_arrays(self, left: list, right: list, path: str):
        """
        Compare arrays whose order does not matter.

        Any sequence difference is reported as a single ARRAY_REORDERED entry,
        whether or not the two arrays hold the same elements. With
        show_nested_differences, elements are then paired greedily (same
        ``id`` on both objects, or deep equality; first match wins) and the
        pairs are compared. Duplicates without ids may pair arbitrarily.
        """
        if values_equal(left, right):
            return

        self._add_entry(DiffType.ARRAY_REORDERED, path)

        if not self.options.show_nested_differences:
            return

        matches = self._match_items(left, right)
        matched_right = set(matches.values())

        for i, left_item in enumerate(left):
            item_path = build_path(path, i)
            j = matches.get(i)
            if j is None:
                self._add_entry(DiffType.REMOVED, item_path, old_value=left_item)
            elif not values_equal(left_item, right[j]):
                self._compare(left_item, right[j], item_path)

        for j, right_item in enumerate(right):
            if j not in matched_right:
                self._add_entry(DiffType.ADDED, build_path(path, j), new_value=right_item)

    @staticmethod
    def _match_items(left: list, right: list) -> dict[int, int]:
        """Pair left indices with right indices, first match wins."""
        matches: dict[int, int] = {}
        taken: set[int] = set()

        for i, left_item in enumerate(left):
            for j, right_item in enumerate(right):
                if j in taken:
                    continue
                if _same_id(left_item, right_item) or values_equal(left_item, right_item):
                    matches[i] = j
                    taken.add(j)
                    break

        return matches

    def _add_entry(
        self,
        diff_type: DiffType,
        path: str,
        old_value: Any = MISSING,
        new_value: Any = MISSING
    ):
        """Add a diff entry."""
        self.entries.append(DiffEntry(
            type=diff_type,
            path=path,
            old_value=old_value,
            new_value=new_value,
            left_line=self.left_lines.line_for(path) if self.left_lines is not None else None,
            right_line=self.right_lines.line_for(path) if self.right_lines is not None else None,
        ))


def _same_id(left: Any, right: Any) -> bool:
    if not (isinstance(left, dict) and isinstance(right, dict)):
        return False
    if "id" not in left or "id" not in right:
        return False
    return values_equal(left["id"], right["id"])


def diff(
    left: Any,
    right: Any,
    options: Optional[CompareOptions] = None,
    left_lines: Optional[PositionResolver] = None,
    right_lines: Optional[PositionResolver] = None
) -> list[DiffEntry]:
    """
    Convenience function to diff two parsed JSON values.

    Returns entries in walk order; use ``ordering.sort_entries`` to order
    them by position.
    """
    return Differ(options, left_lines, right_lines).diff(left, right)
