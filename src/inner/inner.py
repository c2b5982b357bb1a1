"""Main Inner class: compile and evaluate variant-extraction directives."""

import logging
import sys
from collections import OrderedDict
from typing import Any, Dict, Tuple

from inner.inner_ast import InnerDirective, InnerInvocation
from inner.inner_compiler import InnerCompiler, InnerExpansion
from inner.inner_config import InnerConfig
from inner.inner_diagnostic import InnerDiagnostic, InnerLocation
from inner.inner_error import InnerParseError
from inner.inner_parser import InnerParser
from inner.inner_runtime import InnerRuntime


class Inner:
    """
    Directive compiler for extracting the payload of an expected tagged-union arm.

    Three directive forms are supported:
    - inner: yield the payload, or run the fallback (panic by default)
    - some: produce Some(payload), or Nothing() / Some(fallback value)
    - ok: produce Ok(payload), or Err(...) / the fallback's own Result

    Arguments follow the grammar

        x
        x, if Fruit.Apple
        x, else { fallback }
        x, if Fruit.Apple, else |e| { fallback using e }
        x, if Fruit.Apple, or |e| expression          (ok only)

    where blocks hold Python statements and the value of a trailing expression
    statement is the block's value.

    Because the compiler sees the invocation text, a panic names the target expression
    exactly as written, e.g. 'Unexpected value found inside "z" at app.py:12'.
    """

    _logger = logging.getLogger("Inner")

    def __init__(self, config: InnerConfig | None = None) -> None:
        """
        Initialize the facade.

        Args:
            config: Configuration; defaults are used if omitted
        """
        self.config = config or InnerConfig()
        self.compiler = InnerCompiler()
        self.runtime = InnerRuntime(
            InnerDiagnostic(
                label_max_length=self.config.label_max_length,
                include_location=self.config.include_location
            )
        )
        self._cache: OrderedDict[Tuple[InnerDirective, str], InnerExpansion] = OrderedDict()

    def parse(self, directive: InnerDirective | str, arguments: str) -> InnerInvocation:
        """Parse a directive's arguments into an invocation descriptor."""
        return self.compiler.parse(arguments, directive)

    def compile(self, directive: InnerDirective | str, arguments: str) -> InnerExpansion:
        """
        Compile a directive, reusing a cached expansion if one exists.

        Args:
            directive: Directive form ('inner', 'some' or 'ok')
            arguments: Directive arguments

        Returns:
            The compiled expansion

        Raises:
            InnerTokenError: If the arguments cannot be tokenized
            InnerParseError: If the invocation is malformed
        """
        try:
            key = (InnerDirective.from_name(directive), arguments)

        except ValueError as e:
            raise InnerParseError(message=str(e), expected="inner, some or ok") from e

        expansion = self._cache.get(key)
        if expansion is not None:
            self._cache.move_to_end(key)
            self._logger.debug("cache hit for %s!(%s)", key[0].value, arguments.strip())
            return expansion

        expansion = self.compiler.compile(arguments, key[0])
        if self.config.cache_size > 0:
            self._cache[key] = expansion
            while len(self._cache) > self.config.cache_size:
                self._cache.popitem(last=False)

        return expansion

    def expand(self, directive: InnerDirective | str, arguments: str) -> str:
        """Return the generated Python source for a directive."""
        return self.compile(directive, arguments).source

    def evaluate(
        self,
        directive: InnerDirective | str,
        arguments: str,
        namespace: Dict[str, Any] | None = None,
        filename: str | None = None,
        line: int | None = None
    ) -> Any:
        """
        Compile and evaluate a directive.

        Args:
            directive: Directive form ('inner', 'some' or 'ok')
            arguments: Directive arguments
            namespace: Names visible to the directive; the caller's globals and locals
                if omitted
            filename: File to attribute a panic to; the caller's file if omitted
            line: Line to attribute a panic to; the caller's line if omitted

        Returns:
            The directive's result

        Raises:
            InnerTokenError: If the arguments cannot be tokenized
            InnerParseError: If the invocation is malformed
            InnerResolveError: If no variant predicate applies to the target
            InnerTypeError: If the target or a fallback result has the wrong type
            InnerPanic: If an inner directive without fallback finds an unexpected arm
        """
        if namespace is None:
            namespace = self._caller_namespace()

        location = self._location(filename, line)
        return self.compile(directive, arguments).evaluate(self.runtime, namespace, location)

    def evaluate_directive(
        self,
        text: str,
        namespace: Dict[str, Any] | None = None,
        filename: str | None = None,
        line: int | None = None
    ) -> Any:
        """
        Compile and evaluate a full directive such as 'ok!(fruit, if Fruit.Apple, or |e| e + 70)'.

        Args and exceptions are as for evaluate().
        """
        if namespace is None:
            namespace = self._caller_namespace()

        location = self._location(filename, line)
        directive, arguments = InnerParser.split_directive(text)
        return self.compile(directive, arguments).evaluate(self.runtime, namespace, location)

    def clear_cache(self) -> None:
        self._cache.clear()

    @staticmethod
    def _caller_namespace() -> Dict[str, Any]:
        # Two frames up: past the helper and the public method
        frame = sys._getframe(2)
        namespace = dict(frame.f_globals)
        namespace.update(frame.f_locals)
        return namespace

    @staticmethod
    def _location(filename: str | None, line: int | None) -> InnerLocation:
        caller = InnerLocation.from_caller(2)
        return InnerLocation(
            filename if filename is not None else caller.filename,
            line if line is not None else caller.line,
            caller.function
        )
