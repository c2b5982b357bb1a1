"""Runtime half of the expansion synthesizer, called by generated code and the functional API."""

from typing import Any, Callable

from inner.inner_ast import InnerDirective, InnerFallbackKind
from inner.inner_diagnostic import InnerDiagnostic, InnerLocation
from inner.inner_fallback import InnerFallback, InnerFallbackStrategy
from inner.inner_resolver import InnerResolver
from inner.inner_variant import Ok, Some


class InnerRuntime:
    """
    Combines variant resolution and the fallback strategy into the three directive forms.

    Each form receives the already evaluated target, so the target expression is
    evaluated exactly once by the caller, and calls the fallback at most once, only
    when the predicate does not match.
    """

    def __init__(self, diagnostic: InnerDiagnostic | None = None) -> None:
        self.resolver = InnerResolver()
        self.strategy = InnerFallbackStrategy(diagnostic)

    def fallback(self, kind: str, function: Callable[..., Any] | None = None) -> InnerFallback:
        """Wrap a fallback function for the given kind name."""
        return InnerFallback(InnerFallbackKind(kind), function)

    def expand(
        self,
        directive: InnerDirective,
        value: Any,
        variant: Any = None,
        fallback: InnerFallback | None = None,
        label: str | None = None,
        location: InnerLocation | None = None
    ) -> Any:
        """
        Evaluate one directive against an evaluated target.

        Args:
            directive: Which form to produce
            value: The target value
            variant: The arm named by an 'if' clause, if any
            fallback: The mismatch branch; absent if None
            label: Source text or label of the target
            location: Call site the panic message is attributed to

        Returns:
            The payload (inner), an Option (some) or a Result (ok)
        """
        match = self.resolver.resolve(value, variant, label)
        if match.matched:
            if directive == InnerDirective.SOME:
                return Some(match.payload)

            if directive == InnerDirective.OK:
                return Ok(match.payload)

            return match.payload

        return self.strategy.mismatch(directive, match, fallback or InnerFallback(), label, location)

    def inner(self, value: Any, **kwargs: Any) -> Any:
        return self.expand(InnerDirective.INNER, value, **kwargs)

    def some(self, value: Any, **kwargs: Any) -> Any:
        return self.expand(InnerDirective.SOME, value, **kwargs)

    def ok(self, value: Any, **kwargs: Any) -> Any:
        return self.expand(InnerDirective.OK, value, **kwargs)
