"""Panic messages for the unwrap form's default fallback."""

import sys
from dataclasses import dataclass


@dataclass(frozen=True)
class InnerLocation:
    """A call site that failures are attributed to."""
    filename: str
    line: int
    function: str | None = None

    @classmethod
    def from_caller(cls, depth: int = 1) -> "InnerLocation":
        """
        Capture the location of a caller.

        Args:
            depth: How many frames above the function calling this method to look.
                1 means that function's own caller.
        """
        frame = sys._getframe(depth + 1)
        return cls(frame.f_code.co_filename, frame.f_lineno, frame.f_code.co_name)

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}"


class InnerDiagnostic:
    """Builds the message carried by an InnerPanic."""

    def __init__(self, label_max_length: int = 80, include_location: bool = True) -> None:
        """
        Initialize the formatter.

        Args:
            label_max_length: Labels longer than this are shortened with '...'
            include_location: Append the call site to messages
        """
        self.label_max_length = label_max_length
        self.include_location = include_location

    def shorten(self, label: str) -> str:
        """Collapse whitespace in a label and cut it down to the configured length."""
        label = " ".join(label.split())
        if self.label_max_length > 3 and len(label) > self.label_max_length:
            return label[:self.label_max_length - 3] + "..."

        return label

    def panic_message(self, label: str | None, location: InnerLocation | None = None) -> str:
        """
        Format the panic message.

        Args:
            label: Source text of the target expression, or a caller-supplied label.
                Without one the message names the call site only.
            location: Call site to attribute the failure to
        """
        if label:
            message = f'Unexpected value found inside "{self.shorten(label)}"'

        else:
            message = "Unexpected value found"

        if self.include_location and location is not None:
            message += f" at {location}"

        return message
