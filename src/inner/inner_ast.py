"""Invocation descriptor produced by the Inner parser."""

from dataclasses import dataclass
from enum import Enum


class InnerDirective(Enum):
    """The three directive forms, keyed by the name used to invoke them."""
    INNER = "inner"  # unwrap the payload or run the fallback
    SOME = "some"  # produce an Option
    OK = "ok"  # produce a Result

    @classmethod
    def from_name(cls, name: "str | InnerDirective") -> "InnerDirective":
        """
        Look up a directive by name.

        Raises:
            ValueError: If the name is not a known directive
        """
        if isinstance(name, InnerDirective):
            return name

        for directive in cls:
            if directive.value == name:
                return directive

        known = ", ".join(d.value for d in cls)
        raise ValueError(f"Unknown directive '{name}' (expected one of: {known})")


class InnerFallbackKind(Enum):
    """What the mismatch branch of an expansion does."""
    ABSENT = "absent"
    BLOCK = "block"
    CAPTURING_BLOCK = "capturing_block"
    WRAP = "wrap"
    CAPTURING_WRAP = "capturing_wrap"


@dataclass(frozen=True)
class InnerSourceSpan:
    """A piece of invocation source text and where it starts."""
    text: str
    line: int = 1
    column: int = 1


@dataclass(frozen=True)
class InnerVariantClause:
    """An 'if P' clause naming the expected variant by dotted path."""
    path: InnerSourceSpan


@dataclass(frozen=True)
class InnerFallbackClause:
    """An 'else' or 'or' clause."""
    keyword: str
    body: InnerSourceSpan
    binding: str | None = None
    is_block: bool = True

    @property
    def kind(self) -> InnerFallbackKind:
        if self.keyword == "or":
            return InnerFallbackKind.CAPTURING_WRAP if self.binding else InnerFallbackKind.WRAP

        return InnerFallbackKind.CAPTURING_BLOCK if self.binding else InnerFallbackKind.BLOCK


@dataclass(frozen=True)
class InnerInvocation:
    """A parsed directive invocation."""
    directive: InnerDirective
    target: InnerSourceSpan
    variant: InnerVariantClause | None = None
    fallback: InnerFallbackClause | None = None
    source: str = ""

    @property
    def fallback_kind(self) -> InnerFallbackKind:
        return self.fallback.kind if self.fallback is not None else InnerFallbackKind.ABSENT
