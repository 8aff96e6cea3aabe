"""Custom exceptions for the jsondiffer engine."""


class JsonDiffError(Exception):
    """Base exception for jsondiffer errors."""
    pass


class InvalidPatternError(JsonDiffError):
    """Raised when an address pattern cannot be compiled."""
    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid path pattern '{pattern}': {reason}")
        self.pattern = pattern
        self.reason = reason


PatternCompileError = InvalidPatternError


class JsonParseError(JsonDiffError):
    """Raised when a document is not valid JSON."""
    def __init__(self, message: str, source: str = None, line: int = None, column: int = None):
        location = source or "<text>"
        if line is not None:
            location = f"{location}:{line}:{column}"
        super().__init__(f"Failed to parse JSON ({location}): {message}")
        self.message = message
        self.source = source
        self.line = line
        self.column = column


class InputFileError(JsonDiffError):
    """Raised when an input document cannot be read."""
    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to read file {path}: {reason}")
        self.path = path
        self.reason = reason


class ProfileError(JsonDiffError):
    """Raised when a comparison profile cannot be loaded."""
    def __init__(self, message: str, path: str = None):
        super().__init__(f"{message} ({path})" if path else message)
        self.message = message
        self.path = path


class MaxDepthExceededError(JsonDiffError):
    """Raised when a document nests deeper than the configured limit."""
    def __init__(self, depth: int, path: str):
        super().__init__(f"Maximum depth ({depth}) exceeded at path: {path}")
        self.depth = depth
        self.path = path


class PayloadSizeError(JsonDiffError):
    """Raised when payload size exceeds limit."""
    def __init__(self, size_mb: float, limit_mb: float):
        super().__init__(f"Payload size ({size_mb:.2f}MB) exceeds limit ({limit_mb}MB)")
        self.size_mb = size_mb
        self.limit_mb = limit_mb
