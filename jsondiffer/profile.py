"""Comparison profiles: YAML, JSON or TOML files holding CompareOptions."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any, Optional

import yaml

from .exceptions import ProfileError
from .models import CompareOptions

logger = logging.getLogger(__name__)

PATTERN_KEYS = ("ignore", "unordered")
FLAG_KEYS = ("show_nested_differences", "identify_array_item_changes")


class ProfileLoader:
    """
    Loads a comparison profile from disk.

    Usage:
        loader = ProfileLoader("rules.yaml")
        options = loader.options()

    Profile example (YAML):
        ignore:
          - $.timestamp
          - regex: '^\\$\\.meta\\.'
        unordered:
          - wildcard: $.users[*].tags
        show_nested_differences: true
    """

    def __init__(self, profile_path: str | Path):
        """
        Initialize the loader.

        Args:
            profile_path: Path to a .yaml/.yml/.json or .toml profile
        """
        self.profile_path = Path(profile_path)
        self._data: Optional[dict] = None

    @property
    def data(self) -> dict:
        """Load and cache the profile mapping from file."""
        if self._data is None:
            self._data = self._load()
            validate_profile(self._data, str(self.profile_path))
        return self._data

    def options(self) -> CompareOptions:
        """Build CompareOptions from the profile."""
        options = CompareOptions.from_dict(self.data)
        logger.debug(
            "Loaded profile %s: %d ignore, %d unordered patterns",
            self.profile_path,
            len(options.ignore_patterns),
            len(options.unordered_array_patterns),
        )
        return options

    def _load(self) -> dict:
        """Load profile from TOML, YAML or JSON file."""
        if not self.profile_path.exists():
            raise ProfileError("Profile file not found", str(self.profile_path))

        try:
            content = self.profile_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ProfileError(f"Failed to read profile: {e}", str(self.profile_path)) from e

        if self.profile_path.suffix.lower() == ".toml":
            try:
                data = tomllib.loads(content)
            except tomllib.TOMLDecodeError as e:
                raise ProfileError(f"Failed to parse profile: {e}", str(self.profile_path)) from e
        else:
            # YAML also handles JSON since JSON is valid YAML
            try:
                data = yaml.safe_load(content)
            except yaml.YAMLError as e:
                raise ProfileError(f"Failed to parse profile: {e}", str(self.profile_path)) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ProfileError("Profile must be a mapping", str(self.profile_path))
        return data


def validate_profile(data: dict, path: Optional[str] = None):
    """Reject unknown keys and values of the wrong shape."""
    unknown = sorted(set(data) - set(PATTERN_KEYS) - set(FLAG_KEYS))
    if unknown:
        raise ProfileError(f"Unknown profile keys: {', '.join(unknown)}", path)

    for key in PATTERN_KEYS:
        value = data.get(key)
        if value is not None and not isinstance(value, list):
            raise ProfileError(f"'{key}' must be a list of patterns", path)

    for key in FLAG_KEYS:
        value = data.get(key)
        if value is not None and not isinstance(value, bool):
            raise ProfileError(f"'{key}' must be true or false", path)


def load_profile(profile_path: str | Path) -> CompareOptions:
    """
    Load CompareOptions from a profile file.

    Args:
        profile_path: Path to a YAML, JSON or TOML profile

    Returns:
        CompareOptions built from the profile
    """
    return ProfileLoader(profile_path).options()


def options_from_mapping(data: Any) -> CompareOptions:
    """Build CompareOptions from an already-loaded profile mapping."""
    if data is None:
        return CompareOptions()
    if not isinstance(data, dict):
        raise ProfileError("Profile must be a mapping")
    validate_profile(data)
    return CompareOptions.from_dict(data)
