"""
Functional form of the directives.

These take an already evaluated value and callables for the fallback:

    inner(Some(1))                                         # 1
    inner(fruit, if_=Fruit.Apple, else_with=lambda e: 0)   # payload, or 0
    some(fruit, if_=Fruit.Apple)                           # Some(payload) or Nothing()
    ok(fruit, if_=Fruit.Apple, or_with=lambda e: e + 70)   # Ok(payload) or Err(e + 70)

Python cannot capture the source text of an argument, so pass `label` to have panic
messages name the target; without it they name the call site only.  Fallback callables
are ordinary functions: `return` inside them produces the fallback value and cannot
return from the enclosing function.
"""

from typing import Any, Callable, List, Optional, Tuple

from inner.inner_ast import InnerFallbackKind
from inner.inner_diagnostic import InnerLocation
from inner.inner_error import InnerParseError, InnerTypeError
from inner.inner_fallback import InnerFallback
from inner.inner_runtime import InnerRuntime


_runtime = InnerRuntime()

Fallback = Optional[Callable[..., Any]]


def _fallback(
    variant: Any,
    else_: Fallback,
    else_with: Fallback,
    or_: Fallback = None,
    or_with: Fallback = None
) -> InnerFallback:
    """Check the fallback arguments against the directive grammar and build the fallback."""
    given: List[Tuple[str, InnerFallbackKind, Callable[..., Any]]] = [
        (name, kind, function) for name, kind, function in (
            ("else_", InnerFallbackKind.BLOCK, else_),
            ("else_with", InnerFallbackKind.CAPTURING_BLOCK, else_with),
            ("or_", InnerFallbackKind.WRAP, or_),
            ("or_with", InnerFallbackKind.CAPTURING_WRAP, or_with),
        ) if function is not None
    ]

    if not given:
        return InnerFallback()

    if len(given) > 1:
        raise InnerParseError(
            message="Only one fallback may be given",
            received=f"Fallbacks: {', '.join(name for name, _, _ in given)}",
            expected="One of else_, else_with, or_, or_with"
        )

    name, kind, function = given[0]
    if kind in (InnerFallbackKind.WRAP, InnerFallbackKind.CAPTURING_WRAP) and variant is None:
        raise InnerParseError(
            message=f"{name} requires if_",
            expected="if_ naming the expected variant",
            example="ok(fruit, if_=Fruit.Apple, or_with=lambda e: e + 70)"
        )

    if not callable(function):
        raise InnerTypeError(
            message=f"{name} must be callable",
            received=f"Found: {function!r}",
            expected="A function" + (" taking the captured value" if name.endswith("_with") else " without arguments"),
            suggestion=f"Pass {name}=lambda{' e' if name.endswith('_with') else ''}: ..."
        )

    return InnerFallback(kind, function)


def inner(
    value: Any,
    if_: Any = None,
    else_: Fallback = None,
    else_with: Fallback = None,
    label: str | None = None
) -> Any:
    """
    Extract the payload of the expected arm.

    Args:
        value: Target value
        if_: Expected arm; without it value must be an Option, a Result or an IntoResult
        else_: Called without arguments on a mismatch; its result is returned
        else_with: Called with the captured value on a mismatch (the whole value when
            if_ is given, otherwise the error payload); its result is returned
        label: Names the target in panic messages

    Raises:
        InnerPanic: On a mismatch without a fallback
    """
    fallback = _fallback(if_, else_, else_with)
    return _runtime.inner(value, variant=if_, fallback=fallback, label=label, location=InnerLocation.from_caller())


def some(
    value: Any,
    if_: Any = None,
    else_: Fallback = None,
    else_with: Fallback = None,
    label: str | None = None
) -> Any:
    """
    Produce Some(payload) for the expected arm.

    On a mismatch the result is Nothing(), or Some(fallback result) when a fallback is
    given.  Never panics.
    """
    fallback = _fallback(if_, else_, else_with)
    return _runtime.some(value, variant=if_, fallback=fallback, label=label, location=InnerLocation.from_caller())


def ok(
    value: Any,
    if_: Any = None,
    else_: Fallback = None,
    else_with: Fallback = None,
    or_: Fallback = None,
    or_with: Fallback = None,
    label: str | None = None
) -> Any:
    """
    Produce Ok(payload) for the expected arm.

    On a mismatch:
    - no fallback: Err(captured payload)
    - or_ / or_with: Err(fallback result); these require if_
    - else_ / else_with: the fallback result itself, which must be a Result

    With if_, the captured payload is that of the arm the value actually holds.

    Raises:
        InnerTypeError: If an else_ fallback does not return a Result
    """
    fallback = _fallback(if_, else_, else_with, or_, or_with)
    return _runtime.ok(value, variant=if_, fallback=fallback, label=label, location=InnerLocation.from_caller())
