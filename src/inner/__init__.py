"""Inner: one-expression payload extraction for tagged unions, with controlled fallbacks."""

# Main API
from inner.inner import Inner
from inner.inner_api import inner, some, ok
from inner.inner_config import InnerConfig

# Exceptions
from inner.inner_error import (
    InnerError, InnerTokenError, InnerParseError, InnerResolveError, InnerTypeError, InnerPanic
)

# Tagged unions
from inner.inner_adapter import IntoResult
from inner.inner_variant import (
    TaggedUnion, InnerVariant, variant, Option, Result, Some, Nothing, Ok, Err
)

# Lower-level components (for advanced usage)
from inner.inner_ast import (
    InnerDirective, InnerFallbackKind, InnerFallbackClause, InnerInvocation, InnerSourceSpan, InnerVariantClause
)
from inner.inner_token import InnerToken, InnerTokenType
from inner.inner_lexer import InnerLexer
from inner.inner_parser import InnerParser
from inner.inner_resolver import InnerMatch, InnerResolver
from inner.inner_fallback import InnerFallback, InnerFallbackBuilder, InnerFallbackStrategy
from inner.inner_diagnostic import InnerDiagnostic, InnerLocation
from inner.inner_runtime import InnerRuntime
from inner.inner_codegen import InnerCodeGen
from inner.inner_compiler import InnerCompiler, InnerExpansion


__all__ = [
    # Main API
    "Inner", "inner", "some", "ok", "InnerConfig",

    # Exceptions
    "InnerError", "InnerTokenError", "InnerParseError", "InnerResolveError", "InnerTypeError", "InnerPanic",

    # Tagged unions
    "IntoResult", "TaggedUnion", "InnerVariant", "variant", "Option", "Result", "Some", "Nothing", "Ok", "Err",

    # Lower-level components
    "InnerDirective", "InnerFallbackKind", "InnerFallbackClause", "InnerInvocation", "InnerSourceSpan",
    "InnerVariantClause", "InnerToken", "InnerTokenType", "InnerLexer", "InnerParser", "InnerMatch",
    "InnerResolver", "InnerFallback", "InnerFallbackBuilder", "InnerFallbackStrategy", "InnerDiagnostic",
    "InnerLocation", "InnerRuntime", "InnerCodeGen", "InnerCompiler", "InnerExpansion"
]
