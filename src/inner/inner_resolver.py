"""Variant resolution: decides whether a target value holds the expected arm."""

import logging
from dataclasses import dataclass
from typing import Any

from inner.inner_adapter import IntoResult
from inner.inner_ast import InnerDirective
from inner.inner_error import InnerResolveError, InnerTypeError
from inner.inner_variant import InnerVariant, Option, Result, TaggedUnion


@dataclass(frozen=True)
class InnerMatch:
    """
    Outcome of applying a variant predicate to a value.

    Attributes:
        matched: True if the value holds the expected arm
        payload: Payload of the expected arm (only meaningful when matched)
        value: The whole target value
        error: Payload of the arm the value actually holds, when it did not match
        explicit: True if the predicate came from an 'if' clause
    """
    matched: bool
    payload: Any = None
    value: Any = None
    error: Any = None
    explicit: bool = False

    def capture(self, directive: InnerDirective) -> Any:
        """
        Return what a capturing fallback receives on a mismatch.

        With an explicit variant the inner and some forms capture the whole value, while
        the ok form captures the mismatched arm's payload so it can become the Err value.
        Built-in containers and adapters always capture the error payload.
        """
        if self.explicit and directive != InnerDirective.OK:
            return self.value

        return self.error


class InnerResolver:
    """Classifies target values by runtime dispatch over their discriminant."""

    _logger = logging.getLogger("InnerResolver")

    def resolve(self, value: Any, variant: Any = None, label: str | None = None) -> InnerMatch:
        """
        Apply the expected-variant predicate to a value.

        Resolution order: an explicit variant, then the built-in Option and Result
        containers, then the IntoResult adapter.

        Args:
            value: The evaluated target
            variant: The arm named by an 'if' clause, if any
            label: Source text or label of the target, for error messages

        Returns:
            The match outcome

        Raises:
            InnerTypeError: If the variant is not an arm, the value is not of the arm's
                union type, or an adapter does not return a Result
            InnerResolveError: If no predicate can be determined
        """
        if variant is not None:
            return self._resolve_explicit(value, variant, label)

        if isinstance(value, Option):
            if value.is_some():
                return InnerMatch(matched=True, payload=value.payload, value=value)

            return InnerMatch(matched=False, value=value, error=())

        if isinstance(value, Result):
            if value.is_ok():
                return InnerMatch(matched=True, payload=value.payload, value=value)

            return InnerMatch(matched=False, value=value, error=value.payload)

        if isinstance(value, IntoResult):
            result = value.into_result()
            if not isinstance(result, Result):
                raise InnerTypeError(
                    message=f"{type(value).__name__}.into_result() did not return a Result",
                    received=f"Returned: {result!r}",
                    expected="Ok(payload) or Err(error)"
                )

            self._logger.debug("classified %r via IntoResult as %r", value, result)
            return InnerMatch(matched=result.is_ok(), payload=result.payload, value=value, error=result.payload)

        raise InnerResolveError(value, label)

    def _resolve_explicit(self, value: Any, variant: Any, label: str | None) -> InnerMatch:
        if not isinstance(variant, InnerVariant):
            raise InnerTypeError(
                message="'if' clause does not name a variant",
                received=f"Found: {variant!r}",
                expected="An arm of a TaggedUnion, such as Fruit.Apple",
                suggestion="Declare arms with variant() inside a TaggedUnion subclass"
            )

        assert variant.owner is not None
        if not isinstance(value, variant.owner):
            target = f'"{label}"' if label else "target"
            raise InnerTypeError(
                message=f"Cannot match {variant.qualified_name} against {target}",
                received=f"Value of type {type(value).__name__}: {value!r}",
                expected=f"A {variant.owner.__name__} value",
                context=f"{variant.qualified_name} is an arm of {variant.owner.__name__}"
            )

        assert isinstance(value, TaggedUnion)
        if variant.matches(value):
            return InnerMatch(matched=True, payload=value.payload, value=value, explicit=True)

        return InnerMatch(matched=False, value=value, error=value.payload, explicit=True)
