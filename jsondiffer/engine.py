"""Main comparison engine for jsondiffer."""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from .differ import Differ
from .exceptions import (
    InputFileError,
    JsonParseError,
    MaxDepthExceededError,
    PayloadSizeError,
)
from .lines import LineCorrelator
from .models import CompareOptions, DiffResult, EngineConfig
from .ordering import sort_entries
from .utils import find_depth_violation, get_json_size_mb, max_supported_depth

logger = logging.getLogger(__name__)


class JsonDiffEngine:
    """
    Main comparison engine that runs the pipeline:

    1. Loading: read and parse documents (files or text)
    2. Validation: payload size and nesting depth limits
    3. Line correlation: map addresses to source lines when text is known
    4. Diffing: recursive comparison driven by CompareOptions
    5. Ordering: sort entries by source position

    Every error is raised before the diff walk starts.
    """

    VERSION = "1.0.0"

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Initialize the engine.

        Args:
            config: Engine configuration (uses defaults if not provided)
        """
        self.config = config or EngineConfig()

    def compare(
        self,
        left: Any,
        right: Any,
        options: Optional[CompareOptions] = None,
        left_text: Optional[str] = None,
        right_text: Optional[str] = None
    ) -> DiffResult:
        """
        Compare two parsed JSON documents.

        Args:
            left: The source document
            right: The target document
            options: Comparison rules (defaults if not provided)
            left_text: Raw text of the source document, enables line numbers
            right_text: Raw text of the target document, enables line numbers

        Returns:
            DiffResult with entries sorted by position
        """
        start_time = time.time()
        options = options or CompareOptions()

        self._validate_inputs(left, right)

        left_lines = right_lines = None
        if self.config.resolve_lines:
            if left_text is not None:
                left_lines = LineCorrelator(left_text, left)
            if right_text is not None:
                right_lines = LineCorrelator(right_text, right)

        differ = Differ(options, left_lines, right_lines)
        entries = differ.diff(left, right)

        if self.config.sort_entries:
            entries = sort_entries(entries)

        duration_ms = int((time.time() - start_time) * 1000)
        logger.debug("Compared documents in %dms: %d entries", duration_ms, len(entries))

        return DiffResult(
            entries=entries,
            timestamp=datetime.now(timezone.utc),
        )

    def compare_texts(
        self,
        left_text: str,
        right_text: str,
        options: Optional[CompareOptions] = None,
        left_name: Optional[str] = None,
        right_name: Optional[str] = None
    ) -> DiffResult:
        """Parse two JSON texts and compare them with line numbers."""
        left = self._parse(left_text, left_name)
        right = self._parse(right_text, right_name)
        return self.compare(left, right, options, left_text, right_text)

    def compare_files(
        self,
        left_path: str | Path,
        right_path: str | Path,
        options: Optional[CompareOptions] = None
    ) -> DiffResult:
        """
        Compare two JSON files.

        Args:
            left_path: Path to the source file
            right_path: Path to the target file
            options: Comparison rules (defaults if not provided)

        Returns:
            DiffResult carrying both file paths
        """
        left_path = Path(left_path)
        right_path = Path(right_path)
        logger.info("Comparing %s with %s", left_path, right_path)

        left_text = self._read(left_path)
        right_text = self._read(right_path)

        result = self.compare_texts(
            left_text, right_text, options, str(left_path), str(right_path)
        )
        result.left_source = left_path
        result.right_source = right_path

        logger.info("Found %d differences", len(result.entries))
        return result

    def _validate_inputs(self, left: Any, right: Any):
        """Validate input documents against the engine limits."""
        max_depth = min(self.config.max_depth, max_supported_depth())
        for side, document in (("left", left), ("right", right)):
            path = find_depth_violation(document, max_depth)
            if path is not None:
                logger.warning("%s document nests deeper than %d at %s", side, max_depth, path)
                raise MaxDepthExceededError(max_depth, path)

            size = get_json_size_mb(document)
            if size > self.config.max_payload_size_mb:
                raise PayloadSizeError(size, self.config.max_payload_size_mb)

    @staticmethod
    def _read(path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise InputFileError(str(path), f"not valid UTF-8 ({e.reason})") from e
        except OSError as e:
            raise InputFileError(str(path), e.strerror or str(e)) from e

    @staticmethod
    def _parse(text: str, source: Optional[str]) -> Any:
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise JsonParseError(e.msg, source, e.lineno, e.colno) from e
        except RecursionError as e:
            raise JsonParseError("document nests too deeply to parse", source) from e


def compare(
    left: Any,
    right: Any,
    options: Optional[CompareOptions] = None,
    left_text: Optional[str] = None,
    right_text: Optional[str] = None,
    config: Optional[EngineConfig] = None
) -> DiffResult:
    """
    Convenience function to compare two parsed JSON documents.

    Args:
        left: The source document
        right: The target document
        options: Optional comparison rules
        left_text: Optional raw text of the source, for line numbers
        right_text: Optional raw text of the target, for line numbers
        config: Optional engine configuration

    Returns:
        DiffResult with entries sorted by position
    """
    engine = JsonDiffEngine(config)
    return engine.compare(left, right, options, left_text, right_text)


def compare_texts(
    left_text: str,
    right_text: str,
    options: Optional[CompareOptions] = None,
    config: Optional[EngineConfig] = None
) -> DiffResult:
    """Convenience function to compare two JSON texts."""
    return JsonDiffEngine(config).compare_texts(left_text, right_text, options)


def compare_files(
    left_path: str | Path,
    right_path: str | Path,
    options: Optional[CompareOptions] = None,
    config: Optional[EngineConfig] = None
) -> DiffResult:
    """Convenience function to compare two JSON files."""
    return JsonDiffEngine(config).compare_files(left_path, right_path, options)
