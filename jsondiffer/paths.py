"""Address patterns and address helpers for the jsondiffer engine."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Any, Optional

from jsonpath_ng import parse as jsonpath_parse
from jsonpath_ng.exceptions import JsonPathLexerError, JsonPathParserError

from .exceptions import InvalidPatternError

ROOT = "$"

_WILDCARD_TOKENS = re.compile(r"\.\.|\[\*\]|\.\*|\*|.", re.S)
_INDEX_SUFFIX = re.compile(r"(\[[^\]]*\])+$")


class PatternKind(Enum):
    EXACT = "exact"
    REGEX = "regex"
    WILDCARD = "wildcard"


@lru_cache(maxsize=256)
def _compile_regex(pattern: str) -> re.Pattern:
    """Compile and cache a regex pattern."""
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidPatternError(pattern, str(e)) from e


@lru_cache(maxsize=256)
def _compile_wildcard(pattern: str) -> re.Pattern:
    """
    Translate a JSONPath wildcard pattern into an anchored regex.

    Supports:
    - Any index: $.items[*].name
    - Any single key: $.meta.*
    - Recursive descent: $..updatedAt
    """
    try:
        jsonpath_parse(pattern)
    except (JsonPathLexerError, JsonPathParserError) as e:
        raise InvalidPatternError(pattern, str(e)) from e

    parts = []
    for token in _WILDCARD_TOKENS.findall(pattern):
        if token == "..":
            parts.append(r"(?:\.[^.\[]+|\[\d+\])*\.")
        elif token == "[*]":
            parts.append(r"\[\d+\]")
        elif token == ".*":
            parts.append(r"\.[^.\[]+")
        elif token == "*":
            parts.append(r"[^.\[]+")
        else:
            parts.append(re.escape(token))
    return re.compile("".join(parts) + r"\Z")


@dataclass(frozen=True)
class PathPattern:
    """
    A configured address pattern.

    EXACT patterns match by string equality. REGEX patterns are searched in
    the address, so anchors are up to the author. WILDCARD patterns use
    JSONPath notation and always cover the whole address. Nothing matches by
    prefix implicitly: use a regex or ``$..`` to reach descendants.
    """
    pattern: str
    kind: PatternKind = PatternKind.EXACT
    _regex: Optional[re.Pattern] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        if not isinstance(self.pattern, str):
            raise InvalidPatternError(repr(self.pattern), "pattern must be a string")
        if self.kind == PatternKind.REGEX:
            object.__setattr__(self, "_regex", _compile_regex(self.pattern))
        elif self.kind == PatternKind.WILDCARD:
            object.__setattr__(self, "_regex", _compile_wildcard(self.pattern))

    @classmethod
    def exact(cls, pattern: str) -> PathPattern:
        return cls(pattern, PatternKind.EXACT)

    @classmethod
    def regex(cls, pattern: str) -> PathPattern:
        return cls(pattern, PatternKind.REGEX)

    @classmethod
    def wildcard(cls, pattern: str) -> PathPattern:
        return cls(pattern, PatternKind.WILDCARD)

    @classmethod
    def from_config(cls, value: Any) -> PathPattern:
        """
        Build a pattern from a profile value.

        A plain string is an exact address. A mapping selects the form with a
        single ``regex`` or ``wildcard`` (or ``exact``) key.
        """
        if isinstance(value, PathPattern):
            return value
        if isinstance(value, str):
            return cls.exact(value)
        if isinstance(value, dict) and len(value) == 1:
            (kind_name, pattern), = value.items()
            try:
                kind = PatternKind(kind_name)
            except ValueError:
                raise InvalidPatternError(
                    str(pattern), f"unknown pattern kind '{kind_name}'"
                ) from None
            return cls(pattern, kind)
        raise InvalidPatternError(
            repr(value), "expected a string or a mapping with one of: exact, regex, wildcard"
        )

    def matches(self, path: str) -> bool:
        if self._regex is None:
            return path == self.pattern
        if self.kind == PatternKind.WILDCARD:
            return self._regex.match(path) is not None
        return self._regex.search(path) is not None

    def __str__(self) -> str:
        if self.kind == PatternKind.EXACT:
            return self.pattern
        return f"{self.kind.value}:{self.pattern}"


def matches(pattern: PathPattern, path: str) -> bool:
    """Check whether ``path`` matches ``pattern``."""
    return pattern.matches(path)


def build_path(parent_path: str, key: str | int) -> str:
    """Build an address from parent address and object key or array index."""
    if isinstance(key, int):
        return f"{parent_path}[{key}]"
    return f"{parent_path}.{key}"


def parent_path(path: str) -> Optional[str]:
    """Strip the trailing ``.segment`` of an address; None once nothing is left."""
    idx = path.rfind(".")
    if idx <= 0:
        return None
    return path[:idx]


def field_name(path: str) -> Optional[str]:
    """Return the last field name of an address with index suffixes removed."""
    idx = path.rfind(".")
    if idx < 0:
        return None
    name = _INDEX_SUFFIX.sub("", path[idx + 1:])
    return name or None
