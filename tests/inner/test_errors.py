"""Tests for error formatting."""

import pytest

from inner import InnerError, InnerPanic, InnerParseError, InnerResolveError, InnerTokenError


class TestErrorFormatting:
    """Test the detailed error messages."""

    def test_message_only(self):
        """Test an error with just a message."""
        assert str(InnerError("Something failed")) == "Error: Something failed"

    def test_all_fields(self):
        """Test the order of detail sections."""
        error = InnerParseError(
            message="Bad clause",
            received="Token: 'x'",
            expected="'if'",
            context="In an invocation",
            suggestion="Remove it",
            example="inner!(x)"
        )

        assert str(error) == (
            "Error: Bad clause\n"
            "Received: Token: 'x'\n"
            "Expected: 'if'\n"
            "Context: In an invocation\n"
            "Suggestion: Remove it\n"
            "Example: inner!(x)"
        )

    def test_source_context_marker(self):
        """Test that the context marks the offending line and column."""
        error = InnerTokenError(message="Unclosed block", line=2, column=3, source="x,\nelse {\n")

        assert str(error) == (
            "Error: Unclosed block\n"
            "Location: Line 2, Column 3\n"
            "\n"
            "Source Context:\n"
            "    1: x,\n"
            "  → 2: else {\n"
            "         ^\n"
            "    3: "
        )

    def test_no_context_without_source(self):
        """Test that the location is given alone when the source is unknown."""
        error = InnerTokenError(message="Bad", line=1, column=1)

        assert str(error) == "Error: Bad\nLocation: Line 1, Column 1"

    def test_context_at_first_line(self):
        """Test the context window at the start of the source."""
        error = InnerParseError(message="Bad", line=1, column=4, source="x, unless A")

        assert str(error).endswith(
            "Source Context:\n"
            "  → 1: x, unless A\n"
            "          ^"
        )

    def test_resolve_error_keeps_value(self):
        """Test the unresolvable variant error."""
        error = InnerResolveError(5, label="x")

        assert error.value == 5
        assert error.label == "x"
        assert str(error).startswith('Error: Cannot determine the expected variant of "x" (type int)')

    @pytest.mark.parametrize("error_class", [InnerTokenError, InnerParseError, InnerResolveError])
    def test_hierarchy(self, error_class):
        """Test that compile and resolve errors share a base class."""
        assert issubclass(error_class, InnerError)

    def test_panic_is_separate(self):
        """Test that a panic is not a compile error."""
        panic = InnerPanic("Unexpected value found", label=None)

        assert not isinstance(panic, InnerError)
        assert str(panic) == "Unexpected value found"
