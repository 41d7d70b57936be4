"""Pattern visitor for Luau code generation.

Turn match-arm patterns into boolean guard text over a scrutinee.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from rust2luau.ast.nodes import (
    BinaryExpr,
    IdentPattern,
    Literal,
    LiteralPattern,
    OrPattern,
    PathPattern,
    RangePattern,
    TuplePattern,
    UnaryExpr,
    WildcardPattern,
)
from rust2luau.codegen.errors import (
    UnsupportedPatternBoundError,
    UnsupportedPatternError,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from rust2luau.ast.nodes import AstNode
    from rust2luau.codegen.visitors.expressions import ExpressionVisitor


class Guard(Enum):
    """Sentinel guard values."""

    WILDCARD = "wildcard"
    """Matches anything; the caller emits a bare ``else``."""


WILDCARD = Guard.WILDCARD

GuardText = str | Guard
"""Result of translating a pattern."""

_GUARD_LITERAL_TYPES = frozenset({"int", "float", "string", "bool"})
_BOUND_LITERAL_TYPES = frozenset({"int", "float"})

_PATTERN_KINDS: dict[type, str] = {
    IdentPattern: "identifier",
    LiteralPattern: "literal",
    OrPattern: "or",
    PathPattern: "path",
    RangePattern: "range",
    TuplePattern: "tuple",
    WildcardPattern: "wildcard",
}


def describe_pattern(node: AstNode) -> str:
    """Get a short human-readable name for a pattern's shape."""
    return _PATTERN_KINDS.get(type(node), type(node).__name__)


def guard_subject(scrutinee: AstNode, text: str) -> str:
    """Parenthesize binary scrutinee text so guards keep its grouping."""
    if isinstance(scrutinee, BinaryExpr):
        return f"({text})"
    return text


class PatternVisitor:
    """Translate patterns to guard expressions.

    The scrutinee text is repeated in every guard; range guards mention it
    twice.
    """

    def __init__(self, expr_visitor: ExpressionVisitor) -> None:
        """Initialize the pattern visitor.

        Args:
            expr_visitor: Visitor used to render literal values.

        """
        self._expr_visitor = expr_visitor
        self._dispatch: dict[type, Callable[[AstNode, str], GuardText]] = {
            LiteralPattern: self._visit_literal,
            IdentPattern: self._visit_ident,
            RangePattern: self._visit_range,
            WildcardPattern: self._visit_wildcard,
            OrPattern: self._visit_or,
        }

    def visit(self, node: AstNode, scrutinee: str) -> GuardText:
        """Translate a pattern into a guard over ``scrutinee``.

        Args:
            node: Pattern node.
            scrutinee: Luau text of the matched value.

        Returns:
            Guard text, or ``WILDCARD`` for a catch-all pattern.

        Raises:
            UnsupportedPatternError: For tuple, path and other shapes.
            UnsupportedPatternBoundError: For non-literal range bounds.

        """
        visitor = self._dispatch.get(type(node))
        if visitor is None:
            kind = describe_pattern(node)
            if isinstance(node, PathPattern):
                kind = f"path '{'::'.join(node.segments)}'"
            raise UnsupportedPatternError(kind, position=getattr(node, "meta", None))
        return visitor(node, scrutinee)

    def _visit_literal(self, node: LiteralPattern, scrutinee: str) -> str:
        literal = node.literal
        if (
            not isinstance(literal, Literal)
            or literal.literal_type not in _GUARD_LITERAL_TYPES
        ):
            kind = describe_literal(literal)
            raise UnsupportedPatternError(f"{kind} literal", position=node.meta)
        return f"{scrutinee} == {self._expr_visitor.visit(literal)}"

    def _visit_ident(self, node: IdentPattern, scrutinee: str) -> str:
        # A binding is compared against the variable of the same name.
        return f"{scrutinee} == {node.name}"

    def _visit_range(self, node: RangePattern, scrutinee: str) -> str:
        """Generate an interval test for a range pattern."""
        low = self._bound(node.start, "lower", node)
        high = self._bound(node.end, "upper", node)
        upper_op = "<=" if node.inclusive else "<"
        return f"{low} <= {scrutinee} and {scrutinee} {upper_op} {high}"

    def _bound(self, bound: AstNode | None, which: str, node: RangePattern) -> str:
        if bound is None:
            raise UnsupportedPatternBoundError(
                "range pattern",
                f"missing {which} bound",
                position=node.meta,
            )
        if isinstance(bound, Literal) and bound.literal_type in _BOUND_LITERAL_TYPES:
            return self._expr_visitor.visit(bound)
        raise UnsupportedPatternBoundError(
            "range pattern",
            f"{which} bound is not a numeric literal",
            position=getattr(bound, "meta", None) or node.meta,
        )

    def _visit_wildcard(self, _node: WildcardPattern, _scrutinee: str) -> Guard:
        return WILDCARD

    def _visit_or(self, node: OrPattern, scrutinee: str) -> GuardText:
        """Join alternative guards with ``or``; any wildcard wins."""
        guards = [self.visit(case, scrutinee) for case in node.cases]
        if WILDCARD in guards:
            return WILDCARD
        return " or ".join(str(guard) for guard in guards)


def describe_literal(node: AstNode) -> str:
    """Describe a pattern literal, including negated non-numeric ones."""
    if isinstance(node, Literal):
        return node.literal_type
    if isinstance(node, UnaryExpr):
        return f"negated {describe_literal(node.operand)}"
    return type(node).__name__
