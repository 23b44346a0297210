"""Tests for pattern rules module."""

import re

import pytest

from ..errors import CompileError
from ..models import DEFAULT_PATTERNS
from ..rules import RuleSet, compile_rules


class TestCompileRules:
    """Test cases for compile_rules."""

    def test_compiles_in_order(self) -> None:
        """Test that patterns keep their order."""
        rules = compile_rules([r"\.[^.]+$", r"[-_.\s]"])

        assert [rule.pattern for rule in rules] == [r"\.[^.]+$", r"[-_.\s]"]

    def test_case_insensitive(self) -> None:
        """Test that compiled rules ignore case."""
        (rule,) = compile_rules(["1080P"])

        assert rule.flags & re.IGNORECASE
        assert rule.sub("", "show.1080p") == "show."

    def test_blank_patterns_dropped(self) -> None:
        """Test that empty and whitespace-only patterns are skipped."""
        rules = compile_rules(["", r"\[.*?\]", "   ", ""])

        assert len(rules) == 1
        assert rules[0].pattern == r"\[.*?\]"

    def test_all_blank(self) -> None:
        """Test that only blank patterns compile to nothing."""
        assert compile_rules(["", " "]) == ()

    def test_compiled_patterns_kept(self) -> None:
        """Test that already compiled patterns pass through unchanged."""
        extension = re.compile(r"\.[^.]+$")

        rules = compile_rules([extension, "", r"[-_]"])

        assert rules[0] is extension
        assert rules[1].pattern == r"[-_]"

    def test_rejects_other_types(self) -> None:
        """Test that entries other than strings and patterns are refused."""
        with pytest.raises(TypeError):
            compile_rules([r"\.[^.]+$", None])

    def test_invalid_pattern_reports_index(self) -> None:
        """Test that the failing pattern index is reported."""
        with pytest.raises(CompileError) as exc_info:
            compile_rules([r"\.[^.]+$", "", "(unclosed"])

        assert exc_info.value.index == 2
        assert exc_info.value.pattern == "(unclosed"
        assert exc_info.value.reason
        assert "Rule 3" in str(exc_info.value)

    def test_first_invalid_pattern_wins(self) -> None:
        """Test that compilation stops at the first invalid pattern."""
        with pytest.raises(CompileError) as exc_info:
            compile_rules(["[", "("])

        assert exc_info.value.index == 0


class TestRuleSet:
    """Test cases for RuleSet class."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.rules = RuleSet()

    def test_defaults(self) -> None:
        """Test that a new rule set starts with the five default rules."""
        assert self.rules.patterns == DEFAULT_PATTERNS
        assert len(self.rules) == 5

    def test_custom_initial_patterns(self) -> None:
        """Test creating a rule set from custom patterns."""
        rules = RuleSet(["a", "b"])

        assert list(rules) == ["a", "b"]
        assert rules[1] == "b"

    def test_append_adds_empty_rule(self) -> None:
        """Test that append adds a blank rule at the end."""
        index = self.rules.append()

        assert index == 5
        assert self.rules[5] == ""
        assert len(self.rules.compile()) == 5

    def test_replace_in_place(self) -> None:
        """Test replacing a rule without changing the order."""
        self.rules.replace(2, "(2160p|1080p)")

        assert self.rules[2] == "(2160p|1080p)"
        assert len(self.rules) == 5

    def test_replace_does_not_validate(self) -> None:
        """Test that invalid rules are only rejected when compiled."""
        self.rules.replace(0, "(")

        assert self.rules[0] == "("
        with pytest.raises(CompileError) as exc_info:
            self.rules.compile()
        assert exc_info.value.index == 0

    def test_remove(self) -> None:
        """Test deleting a rule."""
        removed = self.rules.remove(0)

        assert removed == DEFAULT_PATTERNS[0]
        assert self.rules.patterns == DEFAULT_PATTERNS[1:]

    def test_reset(self) -> None:
        """Test restoring the initial rules."""
        self.rules.append("extra")
        self.rules.replace(0, "x")
        self.rules.reset()

        assert self.rules.patterns == DEFAULT_PATTERNS

    def test_patterns_is_a_copy(self) -> None:
        """Test that mutating the returned list does not change the rule set."""
        patterns = self.rules.patterns
        patterns.clear()

        assert len(self.rules) == 5

    def test_compile_is_cached(self) -> None:
        """Test that compiling twice without edits returns the same object."""
        first = self.rules.compile()
        second = self.rules.compile()

        assert first is second

    def test_compile_rebuilt_after_edit(self) -> None:
        """Test that editing a rule invalidates the compiled cache."""
        first = self.rules.compile()
        self.rules.replace(4, r"[-_\s]")
        second = self.rules.compile()

        assert first is not second
        assert second[4].pattern == r"[-_\s]"

    def test_failed_compile_keeps_previous_cache_unused(self) -> None:
        """Test that fixing an invalid rule compiles cleanly again."""
        self.rules.compile()
        self.rules.replace(1, "[")
        with pytest.raises(CompileError):
            self.rules.compile()

        self.rules.replace(1, r"\[.*?\]")
        assert len(self.rules.compile()) == 5
