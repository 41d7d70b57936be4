"""AST node dataclasses for the Rust subset.

Define typed AST nodes with source position metadata for every construct the
translator understands. The tree is produced by the transformer and read by
the code generator; neither side mutates it after construction.
"""

from dataclasses import dataclass, field
from typing import Any

from rust2luau.log import get_logger

logger = get_logger(__name__)


# =============================================================================
# Base Types and Type Aliases
# =============================================================================


@dataclass
class SourcePosition:
    """Source position information for error reporting."""

    line: int
    column: int
    end_line: int | None = None
    end_column: int | None = None


# Type alias for any AST node
AstNode = Any


# =============================================================================
# Type Nodes
# =============================================================================


@dataclass
class TypeRef:
    """Type reference node (e.g., i32, &str, Vec<u8>, std::string::String).

    ``name`` is the last path segment; tuple, array and unit types use the
    pseudo names ``tuple``, ``array`` and ``()``.
    """

    name: str
    is_reference: bool = False
    args: list["TypeRef"] = field(default_factory=list)
    meta: SourcePosition | None = None


# =============================================================================
# Expression Nodes
# =============================================================================


@dataclass
class Literal:
    """Literal value node.

    ``value`` holds the decoded string, an int, or a bool. Float digits are
    kept as written (minus separators and suffix) so they print unchanged.
    """

    value: str | int | bool
    literal_type: str  # "string", "int", "float", "bool", "char"
    meta: SourcePosition | None = None


@dataclass
class Identifier:
    """Single-segment name reference (e.g., count)."""

    name: str
    meta: SourcePosition | None = None


@dataclass
class PathExpr:
    """Multi-segment path reference (e.g., std::f64::consts::PI)."""

    segments: list[str]
    meta: SourcePosition | None = None


@dataclass
class BinaryExpr:
    """Binary operation node (e.g., a + b, x <= 10)."""

    op: str  # source operator text: "+", "==", "&&", "<<", ...
    left: AstNode
    right: AstNode
    meta: SourcePosition | None = None


@dataclass
class UnaryExpr:
    """Unary operation node (e.g., -x, !done, &value, *ptr)."""

    op: str  # "-", "!", "&", "&mut", "*"
    operand: AstNode
    meta: SourcePosition | None = None


@dataclass
class ParenExpr:
    """Parenthesized expression node."""

    inner: AstNode
    meta: SourcePosition | None = None


@dataclass
class CallExpr:
    """Function call node (e.g., compute(a, b))."""

    callee: AstNode
    args: list[AstNode]
    meta: SourcePosition | None = None


@dataclass
class RangeExpr:
    """Range expression node (e.g., 0..10, ..=5, 3..)."""

    start: AstNode | None
    end: AstNode | None
    inclusive: bool
    meta: SourcePosition | None = None


@dataclass
class OpaqueExpr:
    """Expression shape the parser accepts but the translator has no lowering for.

    Covers method calls, field access, indexing, tuples and arrays.
    """

    kind: str
    meta: SourcePosition | None = None


@dataclass
class Block:
    """Braced block with statements and an optional tail expression."""

    statements: list[AstNode]
    tail: AstNode | None = None
    meta: SourcePosition | None = None


@dataclass
class IfExpr:
    """If expression node with optional else-if chain or else block."""

    condition: AstNode
    then_branch: Block
    else_branch: "Block | IfExpr | None" = None
    meta: SourcePosition | None = None


@dataclass
class MatchArm:
    """Single arm of a match expression (pattern [if guard] => body)."""

    pattern: AstNode
    body: AstNode
    guard: AstNode | None = None
    meta: SourcePosition | None = None


@dataclass
class MatchExpr:
    """Match expression node."""

    scrutinee: AstNode
    arms: list[MatchArm]
    meta: SourcePosition | None = None


@dataclass
class ForLoop:
    """For loop node (for pattern in iterable { body })."""

    pattern: AstNode
    iterable: AstNode
    body: Block
    meta: SourcePosition | None = None


@dataclass
class WhileLoop:
    """While loop node."""

    condition: AstNode
    body: Block
    meta: SourcePosition | None = None


@dataclass
class InfiniteLoop:
    """Unconditional loop node (loop { body })."""

    body: Block
    meta: SourcePosition | None = None


# =============================================================================
# Pattern Nodes
# =============================================================================


@dataclass
class LiteralPattern:
    """Literal pattern (e.g., 1, "on", true, -5)."""

    literal: Literal
    meta: SourcePosition | None = None


@dataclass
class IdentPattern:
    """Identifier binding pattern (e.g., x, mut total)."""

    name: str
    mutable: bool = False
    meta: SourcePosition | None = None


@dataclass
class RangePattern:
    """Range pattern (e.g., 1..=5, 0..10)."""

    start: AstNode | None
    end: AstNode | None
    inclusive: bool
    meta: SourcePosition | None = None


@dataclass
class WildcardPattern:
    """Wildcard pattern (_)."""

    meta: SourcePosition | None = None


@dataclass
class OrPattern:
    """Alternative patterns (e.g., 1 | 2 | 3)."""

    cases: list[AstNode]
    meta: SourcePosition | None = None


@dataclass
class TuplePattern:
    """Tuple pattern (e.g., (a, b))."""

    elements: list[AstNode]
    meta: SourcePosition | None = None


@dataclass
class PathPattern:
    """Path pattern (e.g., Color::Red)."""

    segments: list[str]
    meta: SourcePosition | None = None


# =============================================================================
# Statement Nodes
# =============================================================================


@dataclass
class LocalBinding:
    """Let statement node (e.g., let mut x: i32 = 5;)."""

    pattern: AstNode
    type_annotation: TypeRef | None = None
    init: AstNode | None = None
    meta: SourcePosition | None = None


@dataclass
class Assignment:
    """Assignment statement node (e.g., x = 42;)."""

    target: str
    value: AstNode
    meta: SourcePosition | None = None


@dataclass
class CompoundAssignment:
    """Compound assignment statement node (e.g., total += x;)."""

    target: str
    op: str  # operator without the trailing "=": "+", "-", "<<", ...
    value: AstNode
    meta: SourcePosition | None = None


@dataclass
class ExprStmt:
    """Expression used as a statement.

    ``has_semicolon`` is False for block-like expressions (if, match, loops)
    written without a trailing semicolon.
    """

    expr: AstNode
    has_semicolon: bool = True
    meta: SourcePosition | None = None


@dataclass
class ReturnStmt:
    """Return statement node."""

    value: AstNode | None = None
    meta: SourcePosition | None = None


@dataclass
class BreakStmt:
    """Break statement node."""

    meta: SourcePosition | None = None


@dataclass
class ContinueStmt:
    """Continue statement node."""

    meta: SourcePosition | None = None


STATEMENT_TYPES = (
    LocalBinding,
    Assignment,
    CompoundAssignment,
    ExprStmt,
    ReturnStmt,
    BreakStmt,
    ContinueStmt,
)
"""Node classes that only ever appear in statement position."""


# =============================================================================
# Item Nodes
# =============================================================================


@dataclass
class Param:
    """Function parameter (e.g., mut count: usize)."""

    name: str
    type_ref: TypeRef
    mutable: bool = False
    meta: SourcePosition | None = None


@dataclass
class FunctionDef:
    """Function definition node."""

    name: str
    params: list[Param]
    body: Block
    return_type: TypeRef | None = None
    is_public: bool = False
    meta: SourcePosition | None = None


@dataclass
class SourceFile:
    """Root node for one translation unit."""

    items: list[FunctionDef]
    meta: SourcePosition | None = None
