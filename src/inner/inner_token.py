"""Token types and token representation for Inner directive invocations."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class InnerTokenType(Enum):
    """Token types for Inner directive invocations."""
    EXPRESSION = "EXPRESSION"
    COMMA = ","
    PIPE = "|"
    IDENTIFIER = "IDENTIFIER"
    BLOCK = "BLOCK"
    IF = "if"
    ELSE = "else"
    OR = "or"


@dataclass
class InnerToken:
    """Represents a single token in an Inner directive invocation."""
    type: InnerTokenType
    value: Any
    length: int = 1
    line: int = 1  # Line number (1-indexed)
    column: int = 1  # Column number (1-indexed)

    def describe(self) -> str:
        """Describe the token for error messages."""
        if self.type in (InnerTokenType.EXPRESSION, InnerTokenType.IDENTIFIER):
            return f"{self.type.name.lower()} '{self.value}'"

        if self.type == InnerTokenType.BLOCK:
            return "block '{...}'"

        return f"'{self.type.value}'"

    def __repr__(self) -> str:
        return f"InnerToken({self.type.name}, {self.value!r}, line={self.line}, col={self.column})"
