"""Inner Compiler - orchestrates the directive compilation pipeline.

Lexing, parsing and code generation turn the text of one directive invocation into a
compiled expansion that can be evaluated against a caller's namespace.
"""

import logging
from dataclasses import dataclass
from types import CodeType
from typing import Any, Dict

from inner.inner_ast import InnerDirective, InnerInvocation
from inner.inner_codegen import EXPANSION_NAME, InnerCodeGen
from inner.inner_diagnostic import InnerLocation
from inner.inner_error import InnerParseError
from inner.inner_lexer import InnerLexer
from inner.inner_parser import InnerParser
from inner.inner_runtime import InnerRuntime


@dataclass(frozen=True)
class InnerExpansion:
    """A compiled directive invocation."""
    invocation: InnerInvocation
    source: str
    code: CodeType

    def evaluate(self, runtime: InnerRuntime, namespace: Dict[str, Any], location: InnerLocation | None = None) -> Any:
        """
        Run the expansion.

        Args:
            runtime: Runtime synthesizer the generated code calls into
            namespace: Names visible to the target, variant path and fallback body.
                It is copied, so the expansion never modifies it.
            location: Call site the panic message is attributed to

        Returns:
            The directive's result
        """
        scope = dict(namespace)
        exec(self.code, scope)  # pylint: disable=exec-used
        return scope[EXPANSION_NAME](runtime, location)


class InnerCompiler:
    """
    Main compiler pass manager.
    """

    _logger = logging.getLogger("InnerCompiler")

    def __init__(self) -> None:
        self.lexer = InnerLexer()
        self.parser = InnerParser()
        self.codegen = InnerCodeGen()

    def parse(self, arguments: str, directive: InnerDirective | str = InnerDirective.INNER) -> InnerInvocation:
        """
        Run the front end: lex and parse an argument list.

        Args:
            arguments: Directive arguments, e.g. 'x, if Fruit.Apple'
            directive: Directive form

        Returns:
            The invocation descriptor
        """
        tokens = self.lexer.lex(arguments)
        return self.parser.parse(tokens, arguments, directive)

    def compile(self, arguments: str, directive: InnerDirective | str = InnerDirective.INNER) -> InnerExpansion:
        """
        Compile a directive invocation.

        Args:
            arguments: Directive arguments
            directive: Directive form

        Returns:
            The compiled expansion

        Raises:
            InnerTokenError: If the arguments cannot be tokenized
            InnerParseError: If the invocation is malformed
        """
        invocation = self.parse(arguments, directive)
        source = self.codegen.generate(invocation)
        filename = f"<inner:{invocation.directive.value}>"

        try:
            code = compile(source, filename, "exec")

        except SyntaxError as e:
            raise InnerParseError(
                message="Invocation does not compile to valid Python",
                received=f"Python syntax error: {e.msg}",
                source=arguments,
                context=f"Generated code:\n{source}"
            ) from e

        self._logger.debug("compiled %s!(%s) to:\n%s", invocation.directive.value, arguments.strip(), source)
        return InnerExpansion(invocation, source, code)
