"""Code generation module for rust2luau.

Provide Luau code generation from a parsed Rust AST.
"""

from rust2luau.codegen.emitter import CodeEmitter
from rust2luau.codegen.generator import CodeGenerator

__all__ = ["CodeEmitter", "CodeGenerator"]
