"""Parser for Inner directive invocations with detailed error messages."""

import ast
import keyword
import re
import textwrap
from typing import List, NoReturn

from inner.inner_ast import (
    InnerDirective, InnerFallbackClause, InnerInvocation, InnerSourceSpan, InnerVariantClause
)
from inner.inner_error import InnerParseError
from inner.inner_token import InnerToken, InnerTokenType


_DIRECTIVE_PATTERN = re.compile(r"^\s*([A-Za-z_]\w*)\s*!\s*\((.*)\)\s*;?\s*$", re.DOTALL)

_GRAMMAR_EXAMPLE = "x | x, if P | x, else { ... } | x, if P, else |e| { ... } | x, if P, or |e| expr"


def parse_python_expression(text: str) -> ast.expr:
    """
    Parse Python expression source, allowing it to span lines and carry comments.

    Raises:
        SyntaxError: If the text is not a single Python expression
    """
    return ast.parse(f"(\n{text}\n)", mode="eval").body


def normalize_block(body: str) -> str:
    """
    Turn the text between a block's braces into dedented Python statements.

    The first line starts right after '{' so it is stripped on its own, and the
    remaining lines are dedented together.  Blank lines are kept, so line N of the
    result is line N of the block counting from the '{' line.
    """
    lines = body.split('\n')
    first = lines[0].strip()
    if len(lines) == 1:
        return first

    rest = textwrap.dedent('\n'.join(lines[1:])).rstrip()
    return f"{first}\n{rest}"


def _is_block(body: str) -> bool:
    try:
        ast.parse(normalize_block(body))

    except SyntaxError:
        return False

    return True


def _is_expression(text: str) -> bool:
    try:
        parse_python_expression(text)

    except SyntaxError:
        return False

    return True


class InnerParser:
    """Parses directive tokens into an InnerInvocation with detailed error messages."""

    def __init__(self) -> None:
        self.tokens: List[InnerToken] = []
        self.pos = 0
        self.source = ""

    @staticmethod
    def split_directive(text: str) -> tuple[InnerDirective, str]:
        """
        Split a full directive such as 'inner!(x, if Fruit.Apple)' into its form and arguments.

        The returned argument text keeps the directive's line and column layout (the
        prefix is blanked out rather than removed) so error positions match the input.

        Raises:
            InnerParseError: If the text is not a directive or names an unknown form
        """
        match = _DIRECTIVE_PATTERN.match(text)
        if match is None:
            raise InnerParseError(
                message="Not a directive invocation",
                received=f"Found: {text.strip()[:40]!r}",
                expected="name!(arguments)",
                example="inner!(x, else { 0 })",
                suggestion="Write the directive name followed by '!' and a parenthesised argument list"
            )

        name = match.group(1)
        try:
            directive = InnerDirective.from_name(name)

        except ValueError as e:
            prefix = text[:match.start(1)]
            raise InnerParseError(
                message=f"Unknown directive '{name}!'",
                line=prefix.count('\n') + 1,
                column=len(prefix) - (prefix.rfind('\n') + 1) + 1,
                source=text,
                received=f"Directive: {name}!",
                expected="inner!, some! or ok!",
                suggestion="Use inner! to unwrap, some! to produce an Option, or ok! to produce a Result"
            ) from e

        prefix = text[:match.start(2)]
        masked = ''.join('\n' if c == '\n' else ' ' for c in prefix)
        return directive, masked + match.group(2)

    def parse(
        self,
        tokens: List[InnerToken],
        source: str = "",
        directive: InnerDirective | str = InnerDirective.INNER
    ) -> InnerInvocation:
        """
        Parse tokens into an invocation descriptor.

        Args:
            tokens: Tokens from InnerLexer
            source: Original invocation text, for error context
            directive: Which directive form is being invoked

        Returns:
            The parsed invocation

        Raises:
            InnerParseError: If the invocation is malformed
        """
        self.tokens = tokens
        self.pos = 0
        self.source = source

        try:
            directive = InnerDirective.from_name(directive)

        except ValueError as e:
            raise InnerParseError(message=str(e), expected="inner, some or ok") from e

        if not tokens:
            raise InnerParseError(
                message="Empty invocation",
                expected="A target expression",
                example=_GRAMMAR_EXAMPLE,
                suggestion="Provide the value to extract from"
            )

        target_token = self._expect(InnerTokenType.EXPRESSION, "target expression")
        self._check_expression(target_token, "target expression")
        target = self._span(target_token)

        variant: InnerVariantClause | None = None
        fallback: InnerFallbackClause | None = None

        while self._current() is not None:
            comma = self._expect(InnerTokenType.COMMA, "',' or end of invocation")
            token = self._current()
            if token is None:
                self._error(
                    "Trailing ',' without a clause",
                    comma,
                    expected="'if', 'else' or 'or' after ','",
                    suggestion="Remove the trailing comma or add a clause"
                )

            if token.type == InnerTokenType.IF:
                if variant is not None:
                    self._error("Only one 'if' clause is allowed", token, expected="'else', 'or' or end of invocation")

                if fallback is not None:
                    self._error(
                        f"'if' clause must come before '{fallback.keyword}'",
                        token,
                        expected="End of invocation",
                        example="x, if Fruit.Apple, else { 0 }"
                    )

                self._advance()
                path_token = self._expect(InnerTokenType.EXPRESSION, "variant path after 'if'")
                self._check_path(path_token)
                variant = InnerVariantClause(self._span(path_token))
                continue

            if token.type in (InnerTokenType.ELSE, InnerTokenType.OR):
                if fallback is not None:
                    self._error(
                        f"Only one 'else' or 'or' clause is allowed, found '{token.value}' after '{fallback.keyword}'",
                        token,
                        expected="End of invocation"
                    )

                if token.type == InnerTokenType.OR:
                    if directive != InnerDirective.OK:
                        self._error(
                            f"'or' clause is only valid in ok!, not {directive.value}!",
                            token,
                            expected="'else'",
                            suggestion="Use 'else' here, or switch to ok! to wrap the value in Err"
                        )

                    if variant is None:
                        self._error(
                            "'or' clause requires an 'if' clause",
                            token,
                            expected="'if P' before 'or'",
                            example="ok!(fruit, if Fruit.Apple, or |e| e + 70)"
                        )

                self._advance()
                fallback = self._parse_fallback(token)
                continue

            self._error(
                f"Unexpected {token.describe()}",
                token,
                expected="'if', 'else' or 'or'",
                example=_GRAMMAR_EXAMPLE
            )

        return InnerInvocation(
            directive=directive,
            target=target,
            variant=variant,
            fallback=fallback,
            source=source
        )

    def _parse_fallback(self, keyword_token: InnerToken) -> InnerFallbackClause:
        """Parse the body of an 'else' or 'or' clause."""
        binding = None
        if self._current() is not None and self._current_type() == InnerTokenType.PIPE:
            self._advance()
            ident = self._expect(InnerTokenType.IDENTIFIER, "capture name")
            if keyword.iskeyword(ident.value):
                self._error(
                    f"Capture name '{ident.value}' is a Python keyword",
                    ident,
                    expected="A plain identifier",
                    example="else |e| { ... }"
                )

            self._expect(InnerTokenType.PIPE, "closing '|'")
            binding = ident.value

        token = self._current()
        if token is not None and token.type == InnerTokenType.BLOCK:
            self._advance()

            # 'or |e| {...}' may also be a dict or set display when it is not a valid block
            if keyword_token.type == InnerTokenType.OR and binding is not None and not _is_block(token.value):
                literal = "{" + token.value + "}"
                if _is_expression(literal):
                    span = InnerSourceSpan(literal, token.line, token.column)
                    return InnerFallbackClause(keyword_token.value, span, binding, is_block=False)

            self._check_block(token)
            return InnerFallbackClause(keyword_token.value, self._span(token), binding, is_block=True)

        if keyword_token.type == InnerTokenType.OR and binding is not None:
            if token is not None and token.type == InnerTokenType.EXPRESSION:
                self._advance()
                self._check_expression(token, "'or' expression")
                return InnerFallbackClause(keyword_token.value, self._span(token), binding, is_block=False)

            expected = "A '{...}' block or an expression"

        else:
            expected = "A '{...}' block"

        if token is None:
            self._error(
                f"Missing body for '{keyword_token.value}' clause",
                keyword_token,
                expected=expected,
                example="else { 0 } or else |e| { e + 1 }"
            )

        self._error(
            f"Unexpected {token.describe()} in '{keyword_token.value}' clause",
            token,
            expected=expected,
            example="else { 0 } or else |e| { e + 1 }",
            suggestion="Wrap the fallback in braces"
        )

    def _check_expression(self, token: InnerToken, what: str) -> None:
        try:
            parse_python_expression(token.value)

        except SyntaxError as e:
            self._error(
                f"Invalid {what}",
                token,
                received=f"Python syntax error: {e.msg}",
                expected="A single Python expression"
            )

    def _check_path(self, token: InnerToken) -> None:
        parts = [part.strip() for part in token.value.split('.')]
        if not all(part.isidentifier() and not keyword.iskeyword(part) for part in parts):
            self._error(
                f"Invalid variant path '{token.value}'",
                token,
                expected="A dotted name such as Fruit.Apple or Some",
                example="inner!(fruit, if Fruit.Apple)"
            )

    def _check_block(self, token: InnerToken) -> None:
        try:
            ast.parse(normalize_block(token.value))

        except SyntaxError as e:
            self._error(
                "Invalid statement in block",
                token,
                received=f"Python syntax error: {e.msg}",
                expected="Python statements separated by newlines or ';'"
            )

    def _span(self, token: InnerToken) -> InnerSourceSpan:
        return InnerSourceSpan(token.value, token.line, token.column)

    def _current(self) -> InnerToken | None:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def _current_type(self) -> InnerTokenType | None:
        token = self._current()
        return token.type if token is not None else None

    def _advance(self) -> None:
        self.pos += 1

    def _expect(self, token_type: InnerTokenType, what: str) -> InnerToken:
        """Consume a token of the given type or raise a parse error naming what was expected."""
        token = self._current()
        if token is None:
            last = self.tokens[-1]
            raise InnerParseError(
                message="Unexpected end of invocation",
                line=last.line,
                column=last.column + last.length,
                source=self.source or None,
                received="End of input",
                expected=what.capitalize() if what[0].isalpha() else what
            )

        if token.type != token_type:
            self._error(f"Unexpected {token.describe()}", token, expected=what)

        self._advance()
        return token

    def _error(
        self,
        message: str,
        token: InnerToken,
        expected: str | None = None,
        received: str | None = None,
        example: str | None = None,
        suggestion: str | None = None
    ) -> NoReturn:
        raise InnerParseError(
            message=message,
            line=token.line,
            column=token.column,
            source=self.source or None,
            received=received or f"Token: {token.describe()}",
            expected=expected,
            example=example,
            suggestion=suggestion
        )
