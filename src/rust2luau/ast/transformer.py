"""AST transformer for the Rust subset.

Transform Lark parse trees into typed AST node structures.
"""

# mypy: disable-error-code="type-arg,no-any-return"
# Note: Lark transformers receive heterogeneous children, making strict typing
# impractical. The type-arg and no-any-return errors are suppressed for this file.

import re
from typing import Any

from lark import Token, Transformer, Tree, v_args

from rust2luau.ast.nodes import (
    STATEMENT_TYPES,
    Assignment,
    BinaryExpr,
    Block,
    BreakStmt,
    CallExpr,
    CompoundAssignment,
    ContinueStmt,
    ExprStmt,
    ForLoop,
    FunctionDef,
    Identifier,
    IdentPattern,
    IfExpr,
    InfiniteLoop,
    Literal,
    LiteralPattern,
    LocalBinding,
    MatchArm,
    MatchExpr,
    OpaqueExpr,
    OrPattern,
    Param,
    ParenExpr,
    PathExpr,
    PathPattern,
    RangeExpr,
    RangePattern,
    ReturnStmt,
    SourceFile,
    SourcePosition,
    TuplePattern,
    TypeRef,
    UnaryExpr,
    WhileLoop,
    WildcardPattern,
)
from rust2luau.log import get_logger

logger = get_logger(__name__)

# Type alias for transformer method items parameter
# Using Any because Lark transformers receive heterogeneous children
TransformerItems = list[Any]
"""Type alias for transformer method input items list."""

RANGE_TOKENS = frozenset({"DOTDOT", "DOTDOTEQ"})
"""Token types that separate the bounds of a range."""

ARM_WITH_GUARD_LENGTH = 3
"""Number of children in a match arm that carries a guard."""

_INT_SUFFIX = re.compile(r"[iu](?:8|16|32|64|128|size)$")
_FLOAT_SUFFIX = re.compile(r"f(?:32|64)$")
_RADIX_PREFIXES = {"0x": 16, "0o": 8, "0b": 2}

_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "0": "\0",
    "\\": "\\",
    "'": "'",
    '"': '"',
}
_ESCAPE_SEQUENCE = re.compile(
    r"\\(x[0-9a-fA-F]{2}|u\{[0-9a-fA-F_]{1,6}\}|\r?\n\s*|.)",
    re.DOTALL,
)


def _meta_to_position(meta: object) -> SourcePosition | None:
    """Convert Lark meta object to SourcePosition.

    Args:
        meta: Lark meta object with line/column attributes.

    Returns:
        SourcePosition or None if meta has no line info.

    """
    line = getattr(meta, "line", None)
    if meta is not None and line is not None:
        return SourcePosition(
            line=line,
            column=getattr(meta, "column", 0),
            end_line=getattr(meta, "end_line", None),
            end_column=getattr(meta, "end_column", None),
        )
    return None


def _nodes(items: TransformerItems) -> list:
    """Drop keyword and punctuation tokens, keeping transformed children."""
    return [item for item in items if not isinstance(item, Token)]


def _has_token(items: TransformerItems, token_type: str) -> bool:
    return any(isinstance(item, Token) and item.type == token_type for item in items)


def _decode_escape(match: re.Match[str]) -> str:
    escape = match.group(1)
    if escape.startswith("x"):
        return chr(int(escape[1:], 16))
    if escape.startswith("u{"):
        return chr(int(escape[2:-1].replace("_", ""), 16))
    if escape.startswith(("\n", "\r")):
        # Line continuation swallows the newline and leading whitespace.
        return ""
    return _SIMPLE_ESCAPES.get(escape, escape)


def unescape_rust(body: str) -> str:
    """Decode the escape sequences of a Rust string or char literal body.

    Args:
        body: Literal text without the surrounding quotes.

    Returns:
        The decoded value.

    """
    return _ESCAPE_SEQUENCE.sub(_decode_escape, body)


def parse_int_literal(text: str) -> int:
    """Parse a Rust integer literal into its value.

    Separators and type suffixes are dropped; hex, octal and binary prefixes
    are honored. A leading zero does not mean octal.

    Args:
        text: Literal text as written in the source.

    Returns:
        The integer value.

    """
    digits = _INT_SUFFIX.sub("", text).replace("_", "")
    base = _RADIX_PREFIXES.get(digits[:2].lower())
    if base is not None:
        return int(digits[2:], base)
    return int(digits, 10)


def normalize_float_literal(text: str) -> str:
    """Strip separators and the type suffix from a Rust float literal."""
    return _FLOAT_SUFFIX.sub("", text).replace("_", "")


def _bounds(items: TransformerItems) -> tuple[Any, Any, bool]:
    """Split range children into (start, end, inclusive) around the operator."""
    op_index = next(
        i
        for i, item in enumerate(items)
        if isinstance(item, Token) and item.type in RANGE_TOKENS
    )
    start = items[op_index - 1] if op_index > 0 else None
    end = items[op_index + 1] if op_index + 1 < len(items) else None
    return start, end, items[op_index].type == "DOTDOTEQ"


class AstTransformer(Transformer):
    """Transform Lark parse tree to AST nodes."""

    # =========================================================================
    # Terminals
    # =========================================================================

    def NAME(self, token: Token) -> str:  # noqa: N802
        """Transform NAME token."""
        return str(token)

    # =========================================================================
    # Items
    # =========================================================================

    @v_args(meta=True)
    def start(self, meta: object, items: TransformerItems) -> SourceFile:
        """Transform start rule."""
        functions = [item for item in items if isinstance(item, FunctionDef)]
        logger.debug("Transformed %d function(s)", len(functions))
        return SourceFile(items=functions, meta=_meta_to_position(meta))

    @v_args(meta=True)
    def function_def(self, meta: object, items: TransformerItems) -> FunctionDef:
        """Transform function_def rule."""
        children = _nodes(items)
        name = children[0]
        params: list[Param] = []
        return_type = None
        for child in children[1:-1]:
            if isinstance(child, list):
                params = child
            elif isinstance(child, TypeRef):
                return_type = child
        return FunctionDef(
            name=name,
            params=params,
            body=children[-1],
            return_type=return_type,
            is_public=_has_token(items, "PUB"),
            meta=_meta_to_position(meta),
        )

    def param_list(self, items: TransformerItems) -> list[Param]:
        """Transform param_list rule."""
        return _nodes(items)

    @v_args(meta=True)
    def param(self, meta: object, items: TransformerItems) -> Param:
        """Transform param rule."""
        name, type_ref = _nodes(items)
        return Param(
            name=name,
            type_ref=type_ref,
            mutable=_has_token(items, "MUT"),
            meta=_meta_to_position(meta),
        )

    def return_type(self, items: TransformerItems) -> TypeRef:
        """Transform return_type rule."""
        return items[0]

    # =========================================================================
    # Types
    # =========================================================================

    @v_args(meta=True)
    def ref_type(self, meta: object, items: TransformerItems) -> TypeRef:
        """Transform ref_type rule (&T, &mut T)."""
        inner = _nodes(items)[0]
        return TypeRef(
            name=inner.name,
            is_reference=True,
            args=inner.args,
            meta=_meta_to_position(meta),
        )

    @v_args(meta=True)
    def path_type(self, meta: object, items: TransformerItems) -> TypeRef:
        """Transform path_type rule."""
        path = items[0]
        name = path[-1] if isinstance(path, list) else path
        args = items[1] if len(items) > 1 else []
        return TypeRef(name=name, args=args, meta=_meta_to_position(meta))

    def generic_args(self, items: TransformerItems) -> list[TypeRef]:
        """Transform generic_args rule."""
        return _nodes(items)

    @v_args(meta=True)
    def unit_type(self, meta: object, _items: TransformerItems) -> TypeRef:
        """Transform unit_type rule."""
        return TypeRef(name="()", meta=_meta_to_position(meta))

    @v_args(meta=True)
    def tuple_type(self, meta: object, items: TransformerItems) -> TypeRef:
        """Transform tuple_type rule."""
        return TypeRef(name="tuple", args=_nodes(items), meta=_meta_to_position(meta))

    @v_args(meta=True)
    def array_type(self, meta: object, items: TransformerItems) -> TypeRef:
        """Transform array_type rule; the length expression is dropped."""
        return TypeRef(name="array", args=[items[0]], meta=_meta_to_position(meta))

    def qualified_name(self, items: TransformerItems) -> list[str]:
        """Transform qualified_name rule into its path segments."""
        return list(items)

    # =========================================================================
    # Blocks and statements
    # =========================================================================

    @v_args(meta=True)
    def block(self, meta: object, items: TransformerItems) -> Block:
        """Transform block rule.

        A trailing block-like statement without a semicolon is the value of
        the block, so it is promoted to the tail expression.
        """
        children = [item for item in items if item is not None]
        tail = None
        if children and not isinstance(children[-1], STATEMENT_TYPES):
            tail = children.pop()
        elif (
            children
            and isinstance(children[-1], ExprStmt)
            and not children[-1].has_semicolon
        ):
            tail = children.pop().expr
        return Block(statements=children, tail=tail, meta=_meta_to_position(meta))

    @v_args(meta=True)
    def let_stmt(self, meta: object, items: TransformerItems) -> LocalBinding:
        """Transform let_stmt rule."""
        pattern, *rest = items
        type_annotation = None
        if rest and isinstance(rest[0], TypeRef):
            type_annotation = rest.pop(0)
        return LocalBinding(
            pattern=pattern,
            type_annotation=type_annotation,
            init=rest[0] if rest else None,
            meta=_meta_to_position(meta),
        )

    @v_args(meta=True)
    def assign_stmt(self, meta: object, items: TransformerItems) -> Assignment:
        """Transform assign_stmt rule."""
        target, value = items
        return Assignment(target=target, value=value, meta=_meta_to_position(meta))

    @v_args(meta=True)
    def compound_assign_stmt(
        self,
        meta: object,
        items: TransformerItems,
    ) -> CompoundAssignment:
        """Transform compound_assign_stmt rule."""
        target, op_token, value = items
        return CompoundAssignment(
            target=target,
            op=str(op_token)[:-1],
            value=value,
            meta=_meta_to_position(meta),
        )

    @v_args(meta=True)
    def return_stmt(self, meta: object, items: TransformerItems) -> ReturnStmt:
        """Transform return_stmt rule."""
        children = _nodes(items)
        value = children[0] if children else None
        return ReturnStmt(value=value, meta=_meta_to_position(meta))

    @v_args(meta=True)
    def break_stmt(self, meta: object, _items: TransformerItems) -> BreakStmt:
        """Transform break_stmt rule."""
        return BreakStmt(meta=_meta_to_position(meta))

    @v_args(meta=True)
    def continue_stmt(self, meta: object, _items: TransformerItems) -> ContinueStmt:
        """Transform continue_stmt rule."""
        return ContinueStmt(meta=_meta_to_position(meta))

    @v_args(meta=True)
    def expr_stmt(self, meta: object, items: TransformerItems) -> ExprStmt:
        """Transform expr_stmt rule."""
        return ExprStmt(expr=items[0], meta=_meta_to_position(meta))

    @v_args(meta=True)
    def block_like_stmt(self, meta: object, items: TransformerItems) -> ExprStmt:
        """Transform block_like_stmt rule."""
        return ExprStmt(
            expr=items[0],
            has_semicolon=_has_token(items, "SEMI"),
            meta=_meta_to_position(meta),
        )

    def empty_stmt(self, _items: TransformerItems) -> None:
        """Transform empty_stmt rule (a stray semicolon)."""
        return

    # =========================================================================
    # Block-like expressions
    # =========================================================================

    @v_args(meta=True)
    def if_expr(self, meta: object, items: TransformerItems) -> IfExpr:
        """Transform if_expr rule."""
        condition, then_branch, *rest = items
        return IfExpr(
            condition=condition,
            then_branch=then_branch,
            else_branch=rest[0] if rest else None,
            meta=_meta_to_position(meta),
        )

    @v_args(meta=True)
    def match_expr(self, meta: object, items: TransformerItems) -> MatchExpr:
        """Transform match_expr rule."""
        scrutinee, *arms = items
        return MatchExpr(scrutinee=scrutinee, arms=arms, meta=_meta_to_position(meta))

    @v_args(meta=True)
    def match_arm(self, meta: object, items: TransformerItems) -> MatchArm:
        """Transform match_arm rule."""
        guard = None
        if len(items) == ARM_WITH_GUARD_LENGTH:
            pattern, guard, body = items
        else:
            pattern, body = items
        return MatchArm(
            pattern=pattern,
            body=body,
            guard=guard,
            meta=_meta_to_position(meta),
        )

    def match_guard(self, items: TransformerItems) -> Any:
        """Transform match_guard rule."""
        return items[0]

    @v_args(meta=True)
    def while_expr(self, meta: object, items: TransformerItems) -> WhileLoop:
        """Transform while_expr rule."""
        condition, body = items
        return WhileLoop(condition=condition, body=body, meta=_meta_to_position(meta))

    @v_args(meta=True)
    def loop_expr(self, meta: object, items: TransformerItems) -> InfiniteLoop:
        """Transform loop_expr rule."""
        return InfiniteLoop(body=items[0], meta=_meta_to_position(meta))

    @v_args(meta=True)
    def for_expr(self, meta: object, items: TransformerItems) -> ForLoop:
        """Transform for_expr rule."""
        pattern, iterable, body = items
        return ForLoop(
            pattern=pattern,
            iterable=iterable,
            body=body,
            meta=_meta_to_position(meta),
        )

    # =========================================================================
    # Operator expressions
    # =========================================================================

    @v_args(meta=True)
    def range(self, meta: object, items: TransformerItems) -> RangeExpr:
        """Transform range rule."""
        start, end, inclusive = _bounds(items)
        return RangeExpr(
            start=start,
            end=end,
            inclusive=inclusive,
            meta=_meta_to_position(meta),
        )

    @v_args(meta=True)
    def binary(self, meta: object, items: TransformerItems) -> BinaryExpr:
        """Transform binary rule (every precedence level shares this shape)."""
        left, op_token, right = items
        return BinaryExpr(
            op=str(op_token),
            left=left,
            right=right,
            meta=_meta_to_position(meta),
        )

    @v_args(meta=True)
    def unary(self, meta: object, items: TransformerItems) -> UnaryExpr:
        """Transform unary rule."""
        op = str(items[0])
        if _has_token(items, "MUT"):
            op = "&mut"
        return UnaryExpr(op=op, operand=items[-1], meta=_meta_to_position(meta))

    @v_args(meta=True)
    def call(self, meta: object, items: TransformerItems) -> CallExpr:
        """Transform call rule."""
        callee, *rest = items
        return CallExpr(
            callee=callee,
            args=rest[0] if rest else [],
            meta=_meta_to_position(meta),
        )

    @v_args(meta=True)
    def method_call(self, meta: object, _items: TransformerItems) -> OpaqueExpr:
        """Transform method_call rule."""
        return OpaqueExpr(kind="method call", meta=_meta_to_position(meta))

    @v_args(meta=True)
    def field(self, meta: object, _items: TransformerItems) -> OpaqueExpr:
        """Transform field rule."""
        return OpaqueExpr(kind="field access", meta=_meta_to_position(meta))

    @v_args(meta=True)
    def index(self, meta: object, _items: TransformerItems) -> OpaqueExpr:
        """Transform index rule."""
        return OpaqueExpr(kind="index", meta=_meta_to_position(meta))

    def arg_list(self, items: TransformerItems) -> list:
        """Transform arg_list rule."""
        return list(items)

    # =========================================================================
    # Atoms and literals
    # =========================================================================

    @v_args(meta=True)
    def identifier(self, meta: object, items: TransformerItems) -> Identifier:
        """Transform identifier rule."""
        return Identifier(name=items[0], meta=_meta_to_position(meta))

    @v_args(meta=True)
    def path_expr(self, meta: object, items: TransformerItems) -> PathExpr:
        """Transform path_expr rule."""
        return PathExpr(segments=items[0], meta=_meta_to_position(meta))

    @v_args(meta=True)
    def paren(self, meta: object, items: TransformerItems) -> ParenExpr:
        """Transform paren rule."""
        return ParenExpr(inner=items[0], meta=_meta_to_position(meta))

    @v_args(meta=True)
    def unit_expr(self, meta: object, _items: TransformerItems) -> OpaqueExpr:
        """Transform unit_expr rule."""
        return OpaqueExpr(kind="unit", meta=_meta_to_position(meta))

    @v_args(meta=True)
    def tuple_expr(self, meta: object, _items: TransformerItems) -> OpaqueExpr:
        """Transform tuple_expr rule."""
        return OpaqueExpr(kind="tuple", meta=_meta_to_position(meta))

    @v_args(meta=True)
    def array_expr(self, meta: object, _items: TransformerItems) -> OpaqueExpr:
        """Transform array_expr rule."""
        return OpaqueExpr(kind="array", meta=_meta_to_position(meta))

    @v_args(meta=True)
    def int_lit(self, meta: object, items: TransformerItems) -> Literal:
        """Transform int_lit rule."""
        return Literal(
            value=parse_int_literal(str(items[0])),
            literal_type="int",
            meta=_meta_to_position(meta),
        )

    @v_args(meta=True)
    def float_lit(self, meta: object, items: TransformerItems) -> Literal:
        """Transform float_lit rule."""
        return Literal(
            value=normalize_float_literal(str(items[0])),
            literal_type="float",
            meta=_meta_to_position(meta),
        )

    @v_args(meta=True)
    def string_lit(self, meta: object, items: TransformerItems) -> Literal:
        """Transform string_lit rule, decoding escapes."""
        return Literal(
            value=unescape_rust(str(items[0])[1:-1]),
            literal_type="string",
            meta=_meta_to_position(meta),
        )

    @v_args(meta=True)
    def char_lit(self, meta: object, items: TransformerItems) -> Literal:
        """Transform char_lit rule, decoding escapes."""
        return Literal(
            value=unescape_rust(str(items[0])[1:-1]),
            literal_type="char",
            meta=_meta_to_position(meta),
        )

    @v_args(meta=True)
    def bool_lit(self, meta: object, items: TransformerItems) -> Literal:
        """Transform bool_lit rule."""
        return Literal(
            value=items[0].type == "TRUE",
            literal_type="bool",
            meta=_meta_to_position(meta),
        )

    # =========================================================================
    # Patterns
    # =========================================================================

    @v_args(meta=True)
    def neg_literal(self, meta: object, items: TransformerItems) -> Any:
        """Transform neg_literal rule (a minus sign before a pattern literal)."""
        literal = items[-1]
        position = _meta_to_position(meta)
        if literal.literal_type == "int":
            return Literal(value=-literal.value, literal_type="int", meta=position)
        if literal.literal_type == "float":
            return Literal(
                value=f"-{literal.value}",
                literal_type="float",
                meta=position,
            )
        return UnaryExpr(op="-", operand=literal, meta=position)

    @v_args(meta=True)
    def or_pattern(self, meta: object, items: TransformerItems) -> OrPattern:
        """Transform or_pattern rule."""
        return OrPattern(cases=_nodes(items), meta=_meta_to_position(meta))

    @v_args(meta=True)
    def wildcard_pattern(
        self,
        meta: object,
        _items: TransformerItems,
    ) -> WildcardPattern:
        """Transform wildcard_pattern rule."""
        return WildcardPattern(meta=_meta_to_position(meta))

    @v_args(meta=True)
    def ident_pattern(self, meta: object, items: TransformerItems) -> IdentPattern:
        """Transform ident_pattern rule."""
        return IdentPattern(
            name=_nodes(items)[0],
            mutable=_has_token(items, "MUT"),
            meta=_meta_to_position(meta),
        )

    @v_args(meta=True)
    def literal_pattern(self, meta: object, items: TransformerItems) -> LiteralPattern:
        """Transform literal_pattern rule."""
        return LiteralPattern(literal=items[0], meta=_meta_to_position(meta))

    @v_args(meta=True)
    def path_pattern(self, meta: object, items: TransformerItems) -> PathPattern:
        """Transform path_pattern rule."""
        return PathPattern(segments=items[0], meta=_meta_to_position(meta))

    @v_args(meta=True)
    def range_pattern(self, meta: object, items: TransformerItems) -> RangePattern:
        """Transform range_pattern rule."""
        start, end, inclusive = _bounds(items)
        return RangePattern(
            start=start,
            end=end,
            inclusive=inclusive,
            meta=_meta_to_position(meta),
        )

    @v_args(meta=True)
    def range_bound(self, meta: object, items: TransformerItems) -> Any:
        """Transform range_bound rule into an expression node."""
        bound = items[0]
        if isinstance(bound, list):
            return PathExpr(segments=bound, meta=_meta_to_position(meta))
        if isinstance(bound, str):
            return Identifier(name=bound, meta=_meta_to_position(meta))
        return bound

    @v_args(meta=True)
    def tuple_pattern(self, meta: object, items: TransformerItems) -> TuplePattern:
        """Transform tuple_pattern rule."""
        return TuplePattern(elements=_nodes(items), meta=_meta_to_position(meta))


def transform(tree: Tree[Token]) -> SourceFile:
    """Transform a Lark parse tree into an AST.

    Args:
        tree: Lark parse tree from parsing Rust source.

    Returns:
        Root SourceFile AST node.

    """
    transformer = AstTransformer()
    return transformer.transform(tree)
