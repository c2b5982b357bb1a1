"""Tests for parsing directive invocations into descriptors."""

import pytest

from inner import InnerDirective, InnerFallbackKind, InnerParseError, InnerParser


class TestParser:
    """Test the invocation grammar."""

    def test_bare_target(self, facade):
        """Test an invocation with only a target."""
        invocation = facade.parse("inner", "x")

        assert invocation.directive == InnerDirective.INNER
        assert invocation.target.text == "x"
        assert invocation.variant is None
        assert invocation.fallback is None
        assert invocation.fallback_kind == InnerFallbackKind.ABSENT

    def test_if_else_capture(self, facade):
        """Test a variant clause followed by a capturing else block."""
        invocation = facade.parse("inner", "x, if Fruit.Apple, else |e| { 0 }")

        assert invocation.variant.path.text == "Fruit.Apple"
        assert invocation.fallback.keyword == "else"
        assert invocation.fallback.binding == "e"
        assert invocation.fallback.is_block
        assert invocation.fallback.body.text == " 0 "
        assert invocation.fallback_kind == InnerFallbackKind.CAPTURING_BLOCK

    def test_plain_else_block(self, facade):
        """Test a non-capturing else block."""
        invocation = facade.parse("some", "x, else { 1 }")

        assert invocation.directive == InnerDirective.SOME
        assert invocation.fallback_kind == InnerFallbackKind.BLOCK

    def test_or_with_expression(self, facade):
        """Test an 'or' clause with a capture and an unbraced expression."""
        invocation = facade.parse("ok", "x, if Fruit.Apple, or |e| e + 70")

        assert invocation.directive == InnerDirective.OK
        assert invocation.fallback_kind == InnerFallbackKind.CAPTURING_WRAP
        assert not invocation.fallback.is_block
        assert invocation.fallback.body.text == "e + 70"

    def test_or_with_block(self, facade):
        """Test a non-capturing 'or' block."""
        invocation = facade.parse("ok", "x, if Fruit.Apple, or { 'no apple' }")

        assert invocation.fallback_kind == InnerFallbackKind.WRAP

    def test_multiline_target(self, facade):
        """Test a target spanning lines with a trailing comment."""
        invocation = facade.parse("inner", "lookup(\n    key,\n)  # find it\n, else { 0 }")

        assert invocation.target.text == "lookup(\n    key,\n)  # find it"

    @pytest.mark.parametrize("directive,arguments,message", [
        ("inner", "", r"Empty invocation"),
        ("inner", "x,", r"Trailing ','"),
        ("inner", "x, else { 0 }, if A", r"'if' clause must come before 'else'"),
        ("inner", "x, if A, if B", r"Only one 'if' clause"),
        ("ok", "x, if A, else { 0 }, or |e| e", r"Only one 'else' or 'or' clause"),
        ("inner", "x, if A, or |e| e", r"'or' clause is only valid in ok!"),
        ("some", "x, if A, or { 1 }", r"'or' clause is only valid in ok!"),
        ("ok", "x, or |e| e", r"'or' clause requires an 'if' clause"),
        ("inner", "x, else 0", r"Unexpected expression '0' in 'else' clause"),
        ("inner", "x, else |e| e + 1", r"Unexpected expression 'e \+ 1' in 'else' clause"),
        ("ok", "x, if A, or 5", r"Unexpected expression '5' in 'or' clause"),
        ("inner", "x, unless A", r"Unexpected expression 'unless A'"),
        ("inner", "x +", r"Invalid target expression"),
        ("inner", "x, if Fruit.(Apple)", r"Invalid variant path"),
        ("inner", "x, if 3", r"Invalid variant path"),
        ("inner", "x, else { return return }", r"Invalid statement in block"),
        ("inner", "x, else |class| { 0 }", r"Capture name 'class' is a Python keyword"),
        ("inner", "x, if", r"Unexpected end of invocation"),
        ("inner", "x, else", r"Missing body for 'else' clause"),
        ("inner", "x, else { 0 } extra", r"Unexpected expression 'extra'"),
        ("unwrap", "x", r"Unknown directive 'unwrap'"),
    ])
    def test_malformed_invocations(self, facade, directive, arguments, message):
        """Test that malformed invocations raise parse errors."""
        with pytest.raises(InnerParseError, match=message):
            facade.parse(directive, arguments)

    def test_error_names_token_and_alternatives(self, facade):
        """Test that a parse error names the unexpected token and what was expected."""
        with pytest.raises(InnerParseError) as exc_info:
            facade.parse("inner", "x, unless A")

        error = exc_info.value
        assert error.received == "Token: expression 'unless A'"
        assert error.expected == "'if', 'else' or 'or'"
        assert (error.line, error.column) == (1, 4)
        assert "Source Context:" in str(error)


class TestSplitDirective:
    """Test splitting a full 'name!(...)' directive."""

    @pytest.mark.parametrize("text,directive", [
        ("inner!(x)", InnerDirective.INNER),
        ("some!(x, if A)", InnerDirective.SOME),
        ("  ok! ( x, if A, or { 1 } ) ;", InnerDirective.OK),
    ])
    def test_directive_names(self, text, directive):
        """Test that the directive name selects the form."""
        found, _ = InnerParser.split_directive(text)
        assert found == directive

    def test_arguments_keep_positions(self):
        """Test that the argument text keeps the directive's layout."""
        _, arguments = InnerParser.split_directive("inner!(x, else { 0 })")

        assert arguments == "       x, else { 0 }"

    def test_error_column_in_directive(self, facade):
        """Test that error columns are relative to the full directive."""
        with pytest.raises(InnerParseError) as exc_info:
            facade.evaluate_directive("ok!(x, else 0)", {})

        assert exc_info.value.column == 13

    def test_unknown_directive(self):
        """Test an unknown directive name."""
        with pytest.raises(InnerParseError, match=r"Unknown directive 'unwrap!'"):
            InnerParser.split_directive("unwrap!(x)")

    def test_not_a_directive(self):
        """Test text without the directive shape."""
        with pytest.raises(InnerParseError, match=r"Not a directive invocation"):
            InnerParser.split_directive("x + 1")


class TestOrLiteral:
    """Test braces after 'or |e|' that hold a dict or set display."""

    def test_dict_display(self, facade):
        """Test that a dict display is parsed as the 'or' expression."""
        invocation = facade.parse("ok", "x, if Fruit.Apple, or |e| {'k': e}")

        assert invocation.fallback_kind == InnerFallbackKind.CAPTURING_WRAP
        assert not invocation.fallback.is_block
        assert invocation.fallback.body.text == "{'k': e}"
        assert invocation.fallback.body.column == 27

    def test_valid_block_stays_a_block(self, facade):
        """Test that braces holding valid statements remain a block."""
        invocation = facade.parse("ok", "x, if Fruit.Apple, or |e| { e }")

        assert invocation.fallback.is_block

    def test_else_braces_are_always_blocks(self, facade):
        """Test that only 'or' clauses accept a display."""
        with pytest.raises(InnerParseError, match=r"Invalid statement in block"):
            facade.parse("inner", "x, else |e| {'k': e}")

    def test_neither_block_nor_display(self, facade):
        """Test braces that are neither valid statements nor an expression."""
        with pytest.raises(InnerParseError, match=r"Invalid statement in block"):
            facade.parse("ok", "x, if Fruit.Apple, or |e| {'k': }")
