"""AST package for rust2luau.

Provide the node dataclasses for the supported Rust subset and the lark
transformer that builds them from parse trees.
"""

from rust2luau.ast.nodes import (
    Assignment,
    AstNode,
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
from rust2luau.ast.transformer import AstTransformer, transform

__all__ = [
    "Assignment",
    "AstNode",
    "AstTransformer",
    "BinaryExpr",
    "Block",
    "BreakStmt",
    "CallExpr",
    "CompoundAssignment",
    "ContinueStmt",
    "ExprStmt",
    "ForLoop",
    "FunctionDef",
    "IdentPattern",
    "Identifier",
    "IfExpr",
    "InfiniteLoop",
    "Literal",
    "LiteralPattern",
    "LocalBinding",
    "MatchArm",
    "MatchExpr",
    "OpaqueExpr",
    "OrPattern",
    "Param",
    "ParenExpr",
    "PathExpr",
    "PathPattern",
    "RangeExpr",
    "RangePattern",
    "ReturnStmt",
    "SourceFile",
    "SourcePosition",
    "TuplePattern",
    "TypeRef",
    "UnaryExpr",
    "WhileLoop",
    "WildcardPattern",
    "transform",
]
