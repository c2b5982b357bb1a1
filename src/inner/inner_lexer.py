"""Lexer for Inner directive invocations with detailed error messages."""

from typing import List

from inner.inner_error import InnerTokenError
from inner.inner_token import InnerToken, InnerTokenType


_KEYWORDS = {
    "if": InnerTokenType.IF,
    "else": InnerTokenType.ELSE,
    "or": InnerTokenType.OR,
}

_OPENERS = {'(': ')', '[': ']', '{': '}'}
_CLOSERS = {')', ']', '}'}


class InnerLexer:
    """
    Lexes the argument list of a directive invocation into tokens.

    Target expressions, variant paths and unbraced `or` expressions are kept as raw
    Python source text (EXPRESSION tokens).  Only top-level commas split clauses, so
    commas inside brackets, strings and blocks belong to the enclosing expression.
    """

    def __init__(self) -> None:
        self._source = ""
        self._pos = 0
        self._line = 1
        self._column = 1

    def lex(self, source: str) -> List[InnerToken]:
        """
        Lex a directive argument list.

        Args:
            source: The invocation arguments, e.g. 'x, if Fruit.Apple, else |e| { 0 }'

        Returns:
            List of tokens

        Raises:
            InnerTokenError: If tokenization fails with detailed context
        """
        self._source = source
        self._pos = 0
        self._line = 1
        self._column = 1

        tokens: List[InnerToken] = []

        while True:
            self._skip_whitespace()
            if self._pos >= len(source):
                break

            ch = source[self._pos]
            line = self._line
            column = self._column
            previous = tokens[-1].type if tokens else None

            if ch == ',':
                tokens.append(InnerToken(InnerTokenType.COMMA, ',', 1, line, column))
                self._advance(1)
                continue

            # Keywords are only recognised at the start of a clause
            if previous == InnerTokenType.COMMA:
                word = self._peek_word()
                if word in _KEYWORDS:
                    tokens.append(InnerToken(_KEYWORDS[word], word, len(word), line, column))
                    self._advance(len(word))
                    continue

            if previous in (InnerTokenType.ELSE, InnerTokenType.OR) and ch == '|':
                tokens.extend(self._read_capture())
                continue

            if previous in (InnerTokenType.ELSE, InnerTokenType.OR, InnerTokenType.PIPE) and ch == '{':
                start = self._pos
                self._scan_balanced(stop_at_comma=False)
                body = source[start + 1:self._pos - 1]
                tokens.append(InnerToken(InnerTokenType.BLOCK, body, self._pos - start, line, column))
                continue

            start = self._pos
            self._scan_balanced(stop_at_comma=True)
            text = source[start:self._pos].rstrip()
            tokens.append(InnerToken(InnerTokenType.EXPRESSION, text, len(text), line, column))

        return tokens

    def _advance(self, count: int) -> None:
        """Advance the read position, keeping line and column current."""
        for _ in range(count):
            if self._source[self._pos] == '\n':
                self._line += 1
                self._column = 1

            else:
                self._column += 1

            self._pos += 1

    def _skip_whitespace(self) -> None:
        """Skip whitespace and comments."""
        while self._pos < len(self._source):
            ch = self._source[self._pos]
            if ch == '#':
                self._skip_comment()
                continue

            if not ch.isspace():
                return

            self._advance(1)

    def _skip_comment(self) -> None:
        while self._pos < len(self._source) and self._source[self._pos] != '\n':
            self._advance(1)

    def _peek_word(self) -> str:
        """Return the identifier-like word starting at the current position."""
        end = self._pos
        while end < len(self._source) and (self._source[end].isalnum() or self._source[end] == '_'):
            end += 1

        return self._source[self._pos:end]

    def _read_capture(self) -> List[InnerToken]:
        """Read a '|name|' capture binding."""
        tokens = [InnerToken(InnerTokenType.PIPE, '|', 1, self._line, self._column)]
        self._advance(1)
        self._skip_whitespace()

        line = self._line
        column = self._column
        name = self._peek_word()
        if not name.isidentifier():
            found = self._source[self._pos:self._pos + 10] if self._pos < len(self._source) else "end of input"
            raise InnerTokenError(
                message="Invalid capture name",
                line=line,
                column=column,
                source=self._source,
                received=f"Found: {found!r}",
                expected="An identifier between '|' characters",
                example="else |e| { e + 1 }",
                suggestion="Use a plain Python identifier to name the captured value"
            )

        tokens.append(InnerToken(InnerTokenType.IDENTIFIER, name, len(name), line, column))
        self._advance(len(name))
        self._skip_whitespace()

        if self._pos >= len(self._source) or self._source[self._pos] != '|':
            raise InnerTokenError(
                message="Unterminated capture binding",
                line=self._line,
                column=self._column,
                source=self._source,
                received=f"Capture '|{name}' without closing '|'",
                expected="Closing '|' after the capture name",
                example="else |e| { e + 1 }",
                suggestion=f"Write '|{name}|' before the fallback body"
            )

        tokens.append(InnerToken(InnerTokenType.PIPE, '|', 1, self._line, self._column))
        self._advance(1)
        return tokens

    def _skip_string(self) -> None:
        """Skip a Python string literal, including triple-quoted strings."""
        quote = self._source[self._pos]
        if self._source.startswith(quote * 3, self._pos):
            quote = quote * 3

        line = self._line
        column = self._column
        self._advance(len(quote))

        while self._pos < len(self._source):
            if self._source[self._pos] == '\\':
                self._advance(min(2, len(self._source) - self._pos))
                continue

            if self._source.startswith(quote, self._pos):
                self._advance(len(quote))
                return

            self._advance(1)

        raise InnerTokenError(
            message="Unterminated string literal",
            line=line,
            column=column,
            source=self._source,
            expected=f"Closing {quote} at end of string",
            suggestion=f"Add the closing {quote}"
        )

    def _scan_balanced(self, stop_at_comma: bool) -> None:
        """
        Advance over balanced source text.

        Args:
            stop_at_comma: If True, scan an expression up to the next top-level comma or
                the end of input.  If False, the current character opens a block and the
                scan stops just after its matching close brace.

        Raises:
            InnerTokenError: On unbalanced brackets or unterminated strings
        """
        stack: List[tuple[str, int, int]] = []

        while self._pos < len(self._source):
            ch = self._source[self._pos]

            if ch in ('"', "'"):
                self._skip_string()
                continue

            if ch == '#':
                self._skip_comment()
                continue

            if ch in _OPENERS:
                stack.append((_OPENERS[ch], self._line, self._column))
                self._advance(1)
                continue

            if ch in _CLOSERS:
                if not stack:
                    raise InnerTokenError(
                        message=f"Unexpected closing '{ch}'",
                        line=self._line,
                        column=self._column,
                        source=self._source,
                        received=f"Found: {ch}",
                        expected="Balanced brackets",
                        suggestion=f"Remove the extra '{ch}' or add its opening bracket"
                    )

                expected, _, _ = stack.pop()
                if ch != expected:
                    raise InnerTokenError(
                        message=f"Mismatched closing '{ch}'",
                        line=self._line,
                        column=self._column,
                        source=self._source,
                        received=f"Found: {ch}",
                        expected=f"Closing '{expected}'",
                        suggestion="Check that every bracket is closed in the right order"
                    )

                self._advance(1)
                if not stack and not stop_at_comma:
                    return

                continue

            if ch == ',' and not stack and stop_at_comma:
                return

            self._advance(1)

        if stack:
            expected, line, column = stack[-1]
            what = "block" if expected == '}' and not stop_at_comma and len(stack) == 1 else "bracket"
            raise InnerTokenError(
                message=f"Unclosed {what}",
                line=line,
                column=column,
                source=self._source,
                received="End of input",
                expected=f"Closing '{expected}'",
                suggestion=f"Add the missing '{expected}'"
            )
