"""Exceptions raised by the matching engine and batch session."""

from .models import FolderKind


class MatcherError(Exception):
    """Base class for all media pair matcher errors."""


class ConfigurationError(MatcherError):
    """Raised when a match pass is requested with required folders unset."""

    def __init__(self, missing: list[FolderKind]):
        self.missing = list(missing)
        names = ", ".join(kind.value for kind in self.missing)
        super().__init__(f"Please select all three folders (missing: {names})")


class CompileError(MatcherError):
    """Raised when a pattern rule is not a valid regular expression."""

    def __init__(self, index: int, pattern: str, reason: str):
        self.index = index
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Rule {index + 1} ({pattern!r}) is invalid: {reason}")


class DirectoryReadError(MatcherError):
    """Raised when a folder cannot be listed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load directory contents of {path}: {reason}")
