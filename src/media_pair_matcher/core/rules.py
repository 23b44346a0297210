"""Pattern rules used to reduce a filename to its match key."""

import logging
import re
from collections.abc import Iterable, Iterator

from .errors import CompileError
from .models import DEFAULT_PATTERNS

logger = logging.getLogger(__name__)

# Immutable, ordered sequence of compiled removal patterns
CompiledRules = tuple[re.Pattern[str], ...]


def compile_rules(raw_patterns: Iterable[str | re.Pattern[str]]) -> CompiledRules:
    """
    Compile raw pattern strings into case-insensitive removal patterns.

    Blank patterns are dropped before compilation, since an empty pattern
    matches everywhere and would collapse every key to an empty string.
    Already compiled patterns are kept as they are.

    Args:
        raw_patterns: Raw regular expressions in application order

    Returns:
        Tuple of compiled patterns, in the same order

    Raises:
        CompileError: If any pattern is invalid. The index refers to the
            position in ``raw_patterns``, blank entries included.
        TypeError: If an entry is neither a string nor a compiled pattern

    Example:
        >>> rules = compile_rules([r"\\.[^.]+$", "", r"[-_.\\s]"])
        >>> len(rules)
        2
    """
    compiled = []
    for index, pattern in enumerate(raw_patterns):
        if isinstance(pattern, re.Pattern):
            compiled.append(pattern)
            continue
        if not isinstance(pattern, str):
            raise TypeError(f"Rule {index + 1} must be a string, got {type(pattern).__name__}")
        if not pattern.strip():
            continue
        try:
            compiled.append(re.compile(pattern, re.IGNORECASE))
        except re.error as e:
            logger.error(f"Rule {index} failed to compile: {pattern!r} ({e})")
            raise CompileError(index, pattern, str(e)) from e

    return tuple(compiled)


class RuleSet:
    """Ordered, editable list of raw pattern rules."""

    def __init__(self, patterns: Iterable[str] | None = None):
        """
        Initialize the rule set.

        Args:
            patterns: Initial raw patterns, defaults to DEFAULT_PATTERNS
        """
        self._defaults = list(DEFAULT_PATTERNS if patterns is None else patterns)
        self._patterns = list(self._defaults)
        self._compiled: CompiledRules | None = None
        self._compiled_from: tuple[str, ...] | None = None

    @property
    def patterns(self) -> list[str]:
        """Copy of the raw patterns."""
        return list(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._patterns))

    def __getitem__(self, index: int) -> str:
        return self._patterns[index]

    def append(self, pattern: str = "") -> int:
        """Add a rule at the end and return its index."""
        self._patterns.append(pattern)
        return len(self._patterns) - 1

    def replace(self, index: int, pattern: str) -> None:
        """Replace the rule at ``index`` in place. No validation happens here."""
        self._patterns[index] = pattern

    def remove(self, index: int) -> str:
        """Delete the rule at ``index`` and return it."""
        return self._patterns.pop(index)

    def reset(self) -> None:
        """Restore the rules the set was created with."""
        self._patterns = list(self._defaults)

    def compile(self) -> CompiledRules:
        """
        Compile the current rules, reusing the last result if nothing changed.

        Raises:
            CompileError: If any rule is invalid
        """
        snapshot = tuple(self._patterns)
        if self._compiled is None or self._compiled_from != snapshot:
            self._compiled = compile_rules(snapshot)
            self._compiled_from = snapshot
            logger.debug(f"Compiled {len(self._compiled)} of {len(snapshot)} rules")
        return self._compiled

    def __repr__(self) -> str:
        return f"RuleSet({self._patterns!r})"
