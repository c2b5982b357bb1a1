"""Exception classes for Inner directive compilation and evaluation, with detailed context."""

from typing import Any


class InnerError(Exception):
    """
    Base exception for Inner compile-time errors.

    The message lists whichever details are known, in a fixed order: the location and
    the invocation lines around it with a marker under the offending column, then
    what was received and expected, context, a suggestion and an example.
    """

    def __init__(
        self,
        message: str,
        context: str | None = None,
        expected: str | None = None,
        received: str | None = None,
        suggestion: str | None = None,
        example: str | None = None,
        line: int | None = None,
        column: int | None = None,
        source: str | None = None
    ):
        """
        Initialize detailed error.

        Args:
            message: Core error description
            context: Additional context information
            expected: What was expected
            received: What was actually received
            suggestion: Suggestion for fixing the error
            example: Example of correct usage
            line: Line number (1-indexed)
            column: Column number (1-indexed)
            source: Invocation source for context display
        """
        self.message = message
        self.context = context
        self.expected = expected
        self.received = received
        self.suggestion = suggestion
        self.example = example
        self.line = line
        self.column = column
        self.source = source

        super().__init__(self._format_detailed_message())

    def _source_context(self) -> str:
        """Render the invocation lines around the error, two before and one after."""
        assert self.source is not None and self.line is not None
        lines = self.source.split('\n')
        first = max(1, self.line - 2)
        last = min(len(lines), self.line + 1)
        width = len(str(last))

        rendered = []
        for number in range(first, last + 1):
            indicator = "→" if number == self.line else " "
            rendered.append(f"  {indicator} {number:>{width}}: {lines[number - 1]}")
            if number == self.line and self.column is not None:
                # Under the column, past the "  → N: " prefix
                rendered.append(" " * (width + 6 + self.column - 1) + "^")

        return "\n".join(rendered)

    def _format_detailed_message(self) -> str:
        parts = [f"Error: {self.message}"]

        if self.line is not None and self.column is not None:
            parts.append(f"Location: Line {self.line}, Column {self.column}")
            if self.source is not None:
                parts.append(f"\nSource Context:\n{self._source_context()}")

        details = (
            ("Received", self.received),
            ("Expected", self.expected),
            ("Context", self.context),
            ("Suggestion", self.suggestion),
            ("Example", self.example),
        )
        parts.extend(f"{title}: {text}" for title, text in details if text)
        return "\n".join(parts)


class InnerTokenError(InnerError):
    """Tokenization errors with detailed context."""


class InnerParseError(InnerError):
    """Malformed directive invocations."""


class InnerResolveError(InnerError):
    """No variant predicate could be determined for a target value."""

    def __init__(self, value: Any, label: str | None = None, **kwargs: Any) -> None:
        """
        Initialize an unresolvable variant error.

        Args:
            value: The target value that could not be classified
            label: Source text or caller-supplied label for the target, if known
        """
        self.value = value
        self.label = label
        type_name = type(value).__name__
        target = f'"{label}"' if label else "the target"
        super().__init__(
            message=f"Cannot determine the expected variant of {target} (type {type_name})",
            received=f"Value: {value!r}",
            expected="An 'if' clause naming a variant, or a value implementing IntoResult",
            suggestion=f"Add an 'if' clause, or implement IntoResult.into_result() for {type_name}",
            example="inner!(fruit, if Fruit.Apple) or class Fruit(TaggedUnion, IntoResult): ...",
            **kwargs
        )


class InnerTypeError(InnerError):
    """A value or fallback result does not fit the type the directive requires."""


class InnerPanic(Exception):
    """
    Raised by the unwrap form when the target holds an unexpected variant and no fallback is given.

    This is the only runtime failure an expansion produces by itself.
    """

    def __init__(self, message: str, label: str | None = None, location: Any = None) -> None:
        """
        Initialize the panic.

        Args:
            message: Fully formatted diagnostic message
            label: Source text or label of the target expression
            location: Call site the failure is attributed to
        """
        self.message = message
        self.label = label
        self.location = location
        super().__init__(message)
