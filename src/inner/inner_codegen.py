"""Code generation half of the expansion synthesizer: invocation descriptor to Python source."""

import ast
from typing import List

from inner.inner_ast import InnerInvocation
from inner.inner_fallback import RUNTIME_NAME, InnerFallbackBuilder, check_flow
from inner.inner_parser import parse_python_expression


EXPANSION_NAME = "__inner_expansion__"
LOCATION_NAME = "__inner_location__"


class InnerCodeGen:
    """
    Generates the Python source for one directive invocation.

    The output is a single function definition:

        def __inner_expansion__(__inner_runtime__, __inner_location__):
            def __inner_fallback__(e):
                return e + 2
            return __inner_runtime__.inner(
                (x),
                variant=None,
                fallback=__inner_runtime__.fallback('capturing_block', __inner_fallback__),
                label='x',
                location=__inner_location__,
            )

    The target is a single call argument, so it is evaluated exactly once, and the
    fallback body only runs if the runtime calls it on a mismatch.
    """

    def __init__(self, indent: str = "    ") -> None:
        self.indent = indent
        self.fallback_builder = InnerFallbackBuilder(indent)

    def generate(self, invocation: InnerInvocation) -> str:
        """
        Generate Python source for an invocation.

        Args:
            invocation: The parsed directive

        Returns:
            Source of the expansion function, ending with a newline

        Raises:
            InnerParseError: If the target or fallback uses flow control that cannot leave
                the generated function
        """
        target_expression = parse_python_expression(invocation.target.text)
        check_flow(target_expression, invocation.target, invocation.source, "the target expression", is_block=False)
        target = ast.unparse(target_expression)

        variant = "None"
        if invocation.variant is not None:
            variant = ".".join(part.strip() for part in invocation.variant.path.text.split('.'))

        definition, fallback = self.fallback_builder.build(invocation.fallback, invocation.source)

        indent = self.indent
        lines: List[str] = [f"def {EXPANSION_NAME}({RUNTIME_NAME}, {LOCATION_NAME}):"]
        lines.extend(indent + line for line in definition)
        lines.extend([
            f"{indent}return {RUNTIME_NAME}.{invocation.directive.value}(",
            f"{indent * 2}({target}),",
            f"{indent * 2}variant={variant},",
            f"{indent * 2}fallback={fallback},",
            f"{indent * 2}label={invocation.target.text!r},",
            f"{indent * 2}location={LOCATION_NAME},",
            f"{indent})",
        ])
        return "\n".join(lines) + "\n"
