"""Expression visitor for Luau code generation.

Generate Luau expression text from Rust expression AST nodes.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from rust2luau.ast.nodes import (
    BinaryExpr,
    Block,
    CallExpr,
    ForLoop,
    Identifier,
    IfExpr,
    InfiniteLoop,
    Literal,
    MatchExpr,
    OpaqueExpr,
    ParenExpr,
    PathExpr,
    RangeExpr,
    UnaryExpr,
    WhileLoop,
)
from rust2luau.codegen.errors import (
    Degradation,
    UnsupportedExpressionError,
    UnsupportedOperatorError,
)
from rust2luau.log import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from rust2luau.ast.nodes import AstNode

logger = get_logger(__name__)

NIL = "nil"
"""Placeholder emitted for expressions with no lowering."""

# Map Rust binary operators to Luau operators
OPERATOR_MAP = {
    "+": "+",
    "-": "-",
    "*": "*",
    "/": "/",
    "==": "==",
    "!=": "~=",
    "<": "<",
    "<=": "<=",
    ">": ">",
    ">=": ">=",
    "&&": "and",
    "||": "or",
}

SHORT_CIRCUIT_OPERATORS = frozenset({"&&", "||"})
"""Operators whose right operand is only evaluated on demand."""

VALUE_EXPRESSIONS = (MatchExpr, IfExpr, Block)
"""Expressions whose lowering needs statements, hence a target to assign."""

_TRANSPARENT_UNARY = frozenset({"&", "&mut", "*"})

_LUAU_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

_EXPRESSION_KINDS: dict[type, str] = {
    BinaryExpr: "binary expression",
    Block: "block",
    CallExpr: "call",
    ForLoop: "for loop",
    Identifier: "identifier",
    IfExpr: "if",
    InfiniteLoop: "loop",
    MatchExpr: "match",
    ParenExpr: "parenthesized expression",
    PathExpr: "path",
    RangeExpr: "range",
    UnaryExpr: "unary expression",
    WhileLoop: "while loop",
}


def describe_expression(node: AstNode) -> str:
    """Get a short human-readable name for an expression's shape."""
    if isinstance(node, OpaqueExpr):
        return node.kind
    if isinstance(node, Literal):
        return f"{node.literal_type} literal"
    return _EXPRESSION_KINDS.get(type(node), type(node).__name__)


def quote_string(value: str) -> str:
    """Render a decoded string as a double-quoted Luau literal.

    Control characters without a short escape use the fixed-width decimal
    form so a following digit is never absorbed into the escape.
    """
    parts = ['"']
    for ch in value:
        escaped = _LUAU_ESCAPES.get(ch)
        if escaped is not None:
            parts.append(escaped)
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:  # noqa: PLR2004
            parts.append(f"\\{ord(ch):03d}")
        else:
            parts.append(ch)
    parts.append('"')
    return "".join(parts)


class ExpressionVisitor:
    """Generate Luau expressions from Rust AST nodes.

    Operators outside the translation table fail; expression shapes without
    a lowering are emitted as ``nil`` and recorded as degradations.
    Value expressions (match, if, block) are handed to the ``hoist``
    callback, which emits them as statements ahead of the current line and
    returns the name holding their value.
    """

    def __init__(
        self,
        *,
        hoist: Callable[[AstNode], str] | None = None,
        degradations: list[Degradation] | None = None,
    ) -> None:
        """Initialize the expression visitor.

        Args:
            hoist: Callback that lowers a value expression into a temporary.
            degradations: Shared list that collects nil placeholders.

        """
        self._hoist = hoist
        self._no_hoist_context: str | None = None
        self.degradations: list[Degradation] = (
            degradations if degradations is not None else []
        )
        self._dispatch: dict[type, Callable[..., str]] = {
            Literal: self._visit_literal,
            Identifier: self._visit_identifier,
            BinaryExpr: self._visit_binary,
            UnaryExpr: self._visit_unary,
            ParenExpr: self._visit_paren,
            CallExpr: self._visit_call,
            MatchExpr: self._visit_value_expression,
            IfExpr: self._visit_value_expression,
            Block: self._visit_value_expression,
        }

    @contextmanager
    def without_hoisting(self, context: str) -> Iterator[None]:
        """Disable hoisting where a hoisted value would run at the wrong time.

        Args:
            context: Description of the position, used in error messages.

        """
        previous = self._no_hoist_context
        self._no_hoist_context = context
        try:
            yield
        finally:
            self._no_hoist_context = previous

    def visit(self, node: AstNode) -> str:
        """Visit an expression node and generate Luau code.

        Args:
            node: The AST expression node to visit.

        Returns:
            Luau expression string.

        """
        visitor = self._dispatch.get(type(node))
        if visitor is not None:
            return visitor(node)
        return self._degrade(node)

    def _degrade(self, node: AstNode) -> str:
        kind = describe_expression(node)
        position = getattr(node, "meta", None)
        line = position.line if position else "?"
        logger.warning("No Luau lowering for %s at line %s, emitting nil", kind, line)
        self.degradations.append(Degradation(kind=kind, position=position))
        return NIL

    def _visit_literal(self, node: Literal) -> str:
        """Generate code for literal value.

        Args:
            node: Literal value node.

        Returns:
            Luau literal representation.

        """
        if node.literal_type == "string":
            return quote_string(str(node.value))
        if node.literal_type == "bool":
            return "true" if node.value else "false"
        if node.literal_type in ("int", "float"):
            return str(node.value)
        return self._degrade(node)

    def _visit_identifier(self, node: Identifier) -> str:
        return node.name

    def _visit_binary(self, node: BinaryExpr) -> str:
        """Generate code for binary operation.

        The operator is checked before either operand is translated, so an
        unsupported operator fails before anything is hoisted. The right
        operand of ``&&`` and ``||`` is never hoisted, since hoisting would
        evaluate it unconditionally.

        Args:
            node: Binary operation node.

        Returns:
            Luau binary expression.

        Raises:
            UnsupportedOperatorError: If the operator has no Luau counterpart.
            UnsupportedExpressionError: If a short-circuit right operand needs
                hoisting.

        """
        luau_op = OPERATOR_MAP.get(node.op)
        if luau_op is None:
            raise UnsupportedOperatorError(node.op, position=node.meta)
        left = self.visit(node.left)
        if node.op in SHORT_CIRCUIT_OPERATORS:
            with self.without_hoisting(f"the right operand of '{node.op}'"):
                right = self.visit(node.right)
        else:
            right = self.visit(node.right)
        return f"{left} {luau_op} {right}"

    def _visit_unary(self, node: UnaryExpr) -> str:
        """Generate code for unary operation.

        Borrows and dereferences have no runtime form and pass the operand
        through.
        """
        operand = self.visit(node.operand)
        if node.op in _TRANSPARENT_UNARY:
            return operand
        if node.op == "!":
            return f"not {operand}"
        if operand.startswith("-"):
            # "--" would start a Luau comment.
            return f"-({operand})"
        return f"-{operand}"

    def _visit_paren(self, node: ParenExpr) -> str:
        return f"({self.visit(node.inner)})"

    def _visit_call(self, node: CallExpr) -> str:
        """Generate code for a call to a plain function name."""
        if not isinstance(node.callee, Identifier):
            return self._degrade(node)
        args = ", ".join(self.visit(arg) for arg in node.args)
        return f"{node.callee.name}({args})"

    def _visit_value_expression(self, node: AstNode) -> str:
        """Hoist a match, if or block expression into a temporary.

        Raises:
            UnsupportedExpressionError: If hoisting is not possible here.

        """
        if self._hoist is None or self._no_hoist_context is not None:
            raise UnsupportedExpressionError(
                describe_expression(node),
                self._no_hoist_context or "expression position",
                position=node.meta,
            )
        return self._hoist(node)
