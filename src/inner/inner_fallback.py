"""
Fallback strategies: what an expansion does when the target holds an unexpected arm.

The strategy exists in two halves that follow the same rules.  `InnerFallbackBuilder`
generates the Python source for a parsed 'else'/'or' clause, and `InnerFallbackStrategy`
executes the mismatch branch at runtime for the generated code and the functional API.
"""

import ast
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Tuple

from inner.inner_ast import InnerDirective, InnerFallbackClause, InnerFallbackKind, InnerSourceSpan
from inner.inner_diagnostic import InnerDiagnostic, InnerLocation
from inner.inner_error import InnerPanic, InnerParseError, InnerTypeError
from inner.inner_parser import normalize_block, parse_python_expression
from inner.inner_resolver import InnerMatch
from inner.inner_variant import Err, Nothing, Result, Some


RUNTIME_NAME = "__inner_runtime__"
FALLBACK_NAME = "__inner_fallback__"

_CAPTURING_KINDS = (InnerFallbackKind.CAPTURING_BLOCK, InnerFallbackKind.CAPTURING_WRAP)
_WRAPPING_KINDS = (InnerFallbackKind.WRAP, InnerFallbackKind.CAPTURING_WRAP)


@dataclass(frozen=True)
class InnerFallback:
    """A fallback clause at runtime: its kind and the function holding its body."""
    kind: InnerFallbackKind = InnerFallbackKind.ABSENT
    function: Callable[..., Any] | None = None

    @property
    def captures(self) -> bool:
        return self.kind in _CAPTURING_KINDS

    @property
    def wraps(self) -> bool:
        return self.kind in _WRAPPING_KINDS


class InnerFallbackStrategy:
    """Runs the mismatch branch of an expansion."""

    _logger = logging.getLogger("InnerFallbackStrategy")

    def __init__(self, diagnostic: InnerDiagnostic | None = None) -> None:
        self.diagnostic = diagnostic or InnerDiagnostic()

    def mismatch(
        self,
        directive: InnerDirective,
        match: InnerMatch,
        fallback: InnerFallback,
        label: str | None = None,
        location: InnerLocation | None = None
    ) -> Any:
        """
        Produce the result of an expansion whose predicate did not match.

        Args:
            directive: The directive form being expanded
            match: The resolver's outcome
            fallback: The fallback clause, possibly absent
            label: Source text or label of the target
            location: Call site for the panic message

        Returns:
            The fallback value, shaped for the directive

        Raises:
            InnerPanic: For the inner form without a fallback
            InnerTypeError: If an ok form 'else' block does not produce a Result
            InnerParseError: If an 'or' fallback is used outside the ok form
        """
        if fallback.wraps and directive != InnerDirective.OK:
            raise InnerParseError(
                message=f"'or' fallback is only valid in ok, not {directive.value}",
                expected="An 'else' fallback"
            )

        if directive == InnerDirective.INNER:
            if fallback.kind == InnerFallbackKind.ABSENT:
                message = self.diagnostic.panic_message(label, location)
                self._logger.debug("panic: %s (value %r)", message, match.value)
                raise InnerPanic(message, label, location)

            return self._run(directive, match, fallback)

        if directive == InnerDirective.SOME:
            if fallback.kind == InnerFallbackKind.ABSENT:
                return Nothing()

            return Some(self._run(directive, match, fallback))

        if fallback.kind == InnerFallbackKind.ABSENT:
            return Err(match.capture(directive))

        if fallback.wraps:
            return Err(self._run(directive, match, fallback))

        result = self._run(directive, match, fallback)
        if not isinstance(result, Result):
            target = f'"{label}"' if label else "the target"
            raise InnerTypeError(
                message=f"'else' block of ok for {target} must produce a Result",
                received=f"Block produced: {result!r}",
                expected="Ok(value) or Err(error)",
                suggestion="Return Ok(...) or Err(...) from the block, or use 'or' to have the value wrapped in Err"
            )

        return result

    def _run(self, directive: InnerDirective, match: InnerMatch, fallback: InnerFallback) -> Any:
        assert fallback.function is not None, "Fallback without a function"
        if fallback.captures:
            return fallback.function(match.capture(directive))

        return fallback.function()


class _EscapingFlowFinder(ast.NodeVisitor):
    """Finds statements that would need to leave the fallback function."""

    def __init__(self) -> None:
        self.loop_depth = 0
        self.found: ast.AST | None = None

    def _record(self, node: ast.AST) -> None:
        if self.found is None:
            self.found = node

    def _visit_loop(self, node: ast.For | ast.AsyncFor | ast.While) -> None:
        if isinstance(node, ast.While):
            self.visit(node.test)

        else:
            self.visit(node.target)
            self.visit(node.iter)

        self.loop_depth += 1
        for statement in node.body:
            self.visit(statement)

        self.loop_depth -= 1
        for statement in node.orelse:
            self.visit(statement)

    visit_For = _visit_loop
    visit_AsyncFor = _visit_loop
    visit_While = _visit_loop

    def _visit_scope(self, node: ast.AST) -> None:
        # Nested functions and classes have their own flow rules
        return

    visit_FunctionDef = _visit_scope
    visit_AsyncFunctionDef = _visit_scope
    visit_Lambda = _visit_scope
    visit_ClassDef = _visit_scope

    def visit_Break(self, node: ast.Break) -> None:
        if self.loop_depth == 0:
            self._record(node)

    def visit_Continue(self, node: ast.Continue) -> None:
        if self.loop_depth == 0:
            self._record(node)

    def visit_Yield(self, node: ast.Yield) -> None:
        self._record(node)

    def visit_YieldFrom(self, node: ast.YieldFrom) -> None:
        self._record(node)

    def visit_Await(self, node: ast.Await) -> None:
        self._record(node)


_FLOW_NAMES = {
    ast.Break: "break",
    ast.Continue: "continue",
    ast.Yield: "yield",
    ast.YieldFrom: "yield from",
    ast.Await: "await",
}


def check_flow(tree: ast.AST, span: InnerSourceSpan, source: str, what: str, is_block: bool = True) -> None:
    """
    Reject flow control that would have to leave the generated function.

    A 'yield' or 'await' anywhere in a target or fallback turns the generated function
    into a generator or coroutine, and 'break'/'continue' outside a loop of the block
    cannot reach the caller's loop.

    Args:
        tree: Parsed block (a Module) or expression
        span: Source span the tree was parsed from
        source: Invocation source, for error context
        what: Names the checked text in the message, e.g. "a fallback block"
        is_block: True if the tree came from normalize_block(), where line 1 is the
            '{' line, False if it came from parse_python_expression()

    Raises:
        InnerParseError: If escaping flow control is found
    """
    finder = _EscapingFlowFinder()
    finder.visit(tree)
    if finder.found is None:
        return

    name = _FLOW_NAMES[type(finder.found)]
    lineno = getattr(finder.found, "lineno", 1)
    if is_block:
        line = span.line + lineno - 1
        column = span.column

    else:
        # parse_python_expression() puts the text on line 2
        col_offset = getattr(finder.found, "col_offset", 0)
        line = span.line + lineno - 2
        column = span.column + col_offset if lineno == 2 else col_offset + 1

    raise InnerParseError(
        message=f"'{name}' cannot leave {what}",
        line=line,
        column=column,
        source=source or None,
        received=f"Statement: {name}" if is_block else f"Expression: {name}",
        expected="Code that produces a value, returns, or raises",
        context="Targets and fallbacks run inside generated functions, so generators "
            "and loop control cannot reach the enclosing code",
        suggestion="Produce a marker value and act on it after the directive"
    )


class InnerFallbackBuilder:
    """Generates Python source for the mismatch branch of a directive."""

    def __init__(self, indent: str = "    ") -> None:
        self.indent = indent

    def build(self, clause: InnerFallbackClause | None, source: str = "") -> Tuple[List[str], str]:
        """
        Generate the fallback function and the expression that hands it to the runtime.

        Args:
            clause: The parsed 'else'/'or' clause, or None when absent
            source: Invocation source, for error context

        Returns:
            Tuple of (definition lines, fallback expression).  The definition lines are
            unindented and must be placed before the expression is evaluated.

        Raises:
            InnerParseError: If the fallback uses flow control that cannot leave it
        """
        if clause is None:
            return [], f"{RUNTIME_NAME}.fallback({InnerFallbackKind.ABSENT.value!r})"

        body = self._body(clause, source)
        lines = [f"def {FALLBACK_NAME}({clause.binding or ''}):"]
        lines.extend(self.indent + line for line in ast.unparse(body).split('\n'))
        return lines, f"{RUNTIME_NAME}.fallback({clause.kind.value!r}, {FALLBACK_NAME})"

    def _body(self, clause: InnerFallbackClause, source: str) -> ast.Module:
        """Build the fallback function body, returning the value of a trailing expression."""
        if not clause.is_block:
            expression = parse_python_expression(clause.body.text)
            check_flow(expression, clause.body, source, f"an '{clause.keyword}' expression", is_block=False)
            return ast.Module(body=[ast.Return(value=expression)], type_ignores=[])

        module = ast.parse(normalize_block(clause.body.text))
        check_flow(module, clause.body, source, "a fallback block")

        if not module.body:
            module.body = [ast.Return(value=ast.Constant(value=None))]

        elif isinstance(module.body[-1], ast.Expr):
            last = module.body[-1]
            module.body[-1] = ast.Return(value=last.value)

        return module
