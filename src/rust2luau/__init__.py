"""rust2luau: translate a subset of Rust to Luau.

Provide parsing, AST transformation and Luau code generation for Rust
functions, bindings, conditionals, loops and match expressions.
"""

from rust2luau.compiler import (
    RustSyntaxError,
    TranslationFailedError,
    TranspileError,
    transpile,
    validate,
)
from rust2luau.config import TranspilerConfig

__all__ = [
    "RustSyntaxError",
    "TranslationFailedError",
    "TranspileError",
    "TranspilerConfig",
    "transpile",
    "validate",
]
