"""Visitor modules for Luau code generation.

Provide specialized visitors for expressions, patterns, statements and
functions.
"""

from rust2luau.codegen.visitors.expressions import ExpressionVisitor
from rust2luau.codegen.visitors.functions import FunctionVisitor
from rust2luau.codegen.visitors.patterns import PatternVisitor
from rust2luau.codegen.visitors.statements import StatementVisitor

__all__ = [
    "ExpressionVisitor",
    "FunctionVisitor",
    "PatternVisitor",
    "StatementVisitor",
]
