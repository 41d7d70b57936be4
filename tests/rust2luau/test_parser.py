"""Tests for the Rust subset parser and AST transformer.

Test that grammar constructs parse and build the expected AST nodes.
"""

import pytest
from lark.exceptions import UnexpectedInput

from rust2luau.ast.nodes import (
    Assignment,
    BinaryExpr,
    Block,
    BreakStmt,
    CallExpr,
    CompoundAssignment,
    ContinueStmt,
    ExprStmt,
    ForLoop,
    Identifier,
    IdentPattern,
    IfExpr,
    InfiniteLoop,
    Literal,
    LiteralPattern,
    LocalBinding,
    MatchExpr,
    OpaqueExpr,
    OrPattern,
    ParenExpr,
    PathExpr,
    PathPattern,
    RangeExpr,
    RangePattern,
    ReturnStmt,
    TuplePattern,
    UnaryExpr,
    WhileLoop,
    WildcardPattern,
)
from rust2luau.ast.transformer import (
    normalize_float_literal,
    parse_int_literal,
    unescape_rust,
)
from rust2luau.grammar.parser import ParserFactory


def body_of(parse, body: str) -> Block:
    """Parse a function body and return its block."""
    return parse(f"fn f() {{\n{body}\n}}").items[0].body


def tail_of(parse, expr: str):
    """Parse an expression as a function tail."""
    return body_of(parse, expr).tail


class TestParserFactory:
    """Test ParserFactory creation and caching."""

    def test_creates_parser_by_default(self) -> None:
        assert ParserFactory.create() is not None

    def test_parser_is_cached(self) -> None:
        assert ParserFactory.create() is ParserFactory.create()

    def test_debug_parser_is_fresh(self) -> None:
        assert ParserFactory.create(debug=True) is not ParserFactory.create()

    def test_parser_has_propagate_positions_enabled(self) -> None:
        parser = ParserFactory.create()
        assert parser.options.propagate_positions is True

    def test_clear_cache(self) -> None:
        first = ParserFactory.create()
        ParserFactory.clear_cache()
        assert ParserFactory.create() is not first


class TestFunctions:
    """Test parsing of function items."""

    def test_empty_file(self, parse) -> None:
        assert parse("").items == []

    def test_function_with_params_and_return_type(self, parse) -> None:
        ast = parse("pub fn add(a: i32, mut b: i32) -> i32 { a + b }")
        func = ast.items[0]
        assert func.name == "add"
        assert func.is_public is True
        assert [p.name for p in func.params] == ["a", "b"]
        assert func.params[1].mutable is True
        assert func.return_type.name == "i32"
        assert isinstance(func.body.tail, BinaryExpr)

    def test_function_without_return_type(self, parse) -> None:
        func = parse("fn noop() {}").items[0]
        assert func.return_type is None
        assert func.params == []
        assert func.body.statements == []
        assert func.body.tail is None

    def test_multiple_functions(self, parse) -> None:
        ast = parse("fn a() {}\nfn b() {}\nfn c() {}")
        assert [f.name for f in ast.items] == ["a", "b", "c"]

    def test_comments_and_attributes_ignored(self, parse) -> None:
        source = """
// leading comment
#[inline]
fn f() {
    /* block
       comment */
    let x = 1; // trailing
}
"""
        func = parse(source).items[0]
        assert len(func.body.statements) == 1

    def test_positions_are_recorded(self, parse) -> None:
        func = parse("\n\nfn f() {\n    let x = 1;\n}").items[0]
        assert func.meta.line == 3
        assert func.body.statements[0].meta.line == 4
        assert func.body.statements[0].meta.column == 5


class TestStatements:
    """Test parsing of statements inside blocks."""

    def test_let_with_type_and_value(self, parse) -> None:
        stmt = body_of(parse, "let mut x: i32 = 5;").statements[0]
        assert isinstance(stmt, LocalBinding)
        assert stmt.pattern == IdentPattern(name="x", mutable=True, meta=stmt.pattern.meta)
        assert stmt.type_annotation.name == "i32"
        assert stmt.init.value == 5

    def test_let_without_value(self, parse) -> None:
        stmt = body_of(parse, "let x;").statements[0]
        assert stmt.init is None
        assert stmt.type_annotation is None

    def test_let_wildcard(self, parse) -> None:
        stmt = body_of(parse, "let _ = f();").statements[0]
        assert isinstance(stmt.pattern, WildcardPattern)

    def test_assignment(self, parse) -> None:
        stmt = body_of(parse, "x = 1;").statements[0]
        assert isinstance(stmt, Assignment)
        assert stmt.target == "x"

    @pytest.mark.parametrize("op", ["+", "-", "*", "/", "%", "<<"])
    def test_compound_assignment(self, parse, op: str) -> None:
        stmt = body_of(parse, f"x {op}= 2;").statements[0]
        assert isinstance(stmt, CompoundAssignment)
        assert stmt.op == op

    def test_control_statements(self, parse) -> None:
        block = body_of(parse, "loop { break; continue; return; }")
        loop = block.tail
        assert isinstance(loop, InfiniteLoop)
        kinds = [type(s) for s in loop.body.statements]
        assert kinds == [BreakStmt, ContinueStmt, ReturnStmt]

    def test_return_with_value(self, parse) -> None:
        stmt = body_of(parse, "return a + 1;").statements[0]
        assert isinstance(stmt.value, BinaryExpr)

    def test_stray_semicolons_are_dropped(self, parse) -> None:
        block = body_of(parse, "let x = 1;; ;")
        assert len(block.statements) == 1

    def test_expression_statement(self, parse) -> None:
        stmt = body_of(parse, "print(x);").statements[0]
        assert isinstance(stmt, ExprStmt)
        assert isinstance(stmt.expr, CallExpr)


class TestBlockTails:
    """Test detection of a block's value expression."""

    def test_trailing_expression_is_tail(self, parse) -> None:
        block = body_of(parse, "let x = 1;\nx + 1")
        assert len(block.statements) == 1
        assert isinstance(block.tail, BinaryExpr)

    def test_trailing_semicolon_means_no_tail(self, parse) -> None:
        block = body_of(parse, "x + 1;")
        assert block.tail is None

    def test_trailing_if_without_semicolon_is_tail(self, parse) -> None:
        block = body_of(parse, "if a { 1 } else { 2 }")
        assert isinstance(block.tail, IfExpr)
        assert block.statements == []

    def test_trailing_if_with_semicolon_is_statement(self, parse) -> None:
        block = body_of(parse, "if a { b(); };")
        assert block.tail is None
        assert isinstance(block.statements[0].expr, IfExpr)

    def test_inner_if_without_semicolon_is_statement(self, parse) -> None:
        block = body_of(parse, "if a { b(); }\nc()")
        assert isinstance(block.statements[0].expr, IfExpr)
        assert isinstance(block.tail, CallExpr)


class TestControlFlow:
    """Test parsing of block-like expressions."""

    def test_if_else_if_chain(self, parse) -> None:
        node = tail_of(parse, "if a { 1 } else if b { 2 } else { 3 }")
        assert isinstance(node.else_branch, IfExpr)
        assert isinstance(node.else_branch.else_branch, Block)

    def test_while(self, parse) -> None:
        node = tail_of(parse, "while i < 10 { i += 1; }")
        assert isinstance(node, WhileLoop)
        assert node.condition.op == "<"

    def test_for_over_range(self, parse) -> None:
        node = tail_of(parse, "for i in 0..=10 { }")
        assert isinstance(node, ForLoop)
        assert node.pattern.name == "i"
        assert isinstance(node.iterable, RangeExpr)
        assert node.iterable.inclusive is True

    def test_match_arms(self, parse) -> None:
        node = tail_of(parse, "match n {\n 1 => a,\n 2 | 3 => { b }\n _ => c,\n}")
        assert isinstance(node, MatchExpr)
        assert len(node.arms) == 3
        assert isinstance(node.arms[0].pattern, LiteralPattern)
        assert isinstance(node.arms[1].pattern, OrPattern)
        assert isinstance(node.arms[1].body, Block)
        assert isinstance(node.arms[2].pattern, WildcardPattern)

    def test_match_guard(self, parse) -> None:
        node = tail_of(parse, "match n { x if x > 0 => 1, _ => 0 }")
        assert isinstance(node.arms[0].guard, BinaryExpr)
        assert node.arms[1].guard is None

    def test_match_in_let(self, parse) -> None:
        stmt = body_of(parse, "let s = match n { 1 => \"a\", _ => \"b\" };").statements[0]
        assert isinstance(stmt.init, MatchExpr)


class TestExpressions:
    """Test operator precedence and expression shapes."""

    def test_multiplication_binds_tighter(self, parse) -> None:
        node = tail_of(parse, "a + b * c")
        assert node.op == "+"
        assert node.right.op == "*"

    def test_left_associative(self, parse) -> None:
        node = tail_of(parse, "a - b - c")
        assert node.op == "-"
        assert node.left.op == "-"
        assert node.right == Identifier(name="c", meta=node.right.meta)

    def test_logical_precedence(self, parse) -> None:
        node = tail_of(parse, "a || b && c == d")
        assert node.op == "||"
        assert node.right.op == "&&"
        assert node.right.right.op == "=="

    def test_parentheses_are_kept(self, parse) -> None:
        node = tail_of(parse, "(a + b) * c")
        assert isinstance(node.left, ParenExpr)

    @pytest.mark.parametrize(
        ("source", "op"),
        [("-a", "-"), ("!a", "!"), ("*a", "*"), ("&a", "&"), ("&mut a", "&mut")],
    )
    def test_unary_operators(self, parse, source: str, op: str) -> None:
        node = tail_of(parse, source)
        assert isinstance(node, UnaryExpr)
        assert node.op == op

    def test_call_arguments(self, parse) -> None:
        node = tail_of(parse, "f(1, g(2), x)")
        assert isinstance(node, CallExpr)
        assert len(node.args) == 3
        assert isinstance(node.args[1], CallExpr)

    def test_path_expression(self, parse) -> None:
        node = tail_of(parse, "std::i32::MAX")
        assert isinstance(node, PathExpr)
        assert node.segments == ["std", "i32", "MAX"]

    @pytest.mark.parametrize(
        ("source", "kind"),
        [
            ("v.len()", "method call"),
            ("p.x", "field access"),
            ("v[0]", "index"),
            ("(1, 2)", "tuple"),
            ("[1, 2]", "array"),
            ("()", "unit"),
        ],
    )
    def test_opaque_shapes(self, parse, source: str, kind: str) -> None:
        node = tail_of(parse, source)
        assert isinstance(node, OpaqueExpr)
        assert node.kind == kind

    def test_open_range(self, parse) -> None:
        node = tail_of(parse, "..5")
        assert isinstance(node, RangeExpr)
        assert node.start is None
        assert node.end.value == 5


class TestLiterals:
    """Test literal decoding."""

    @pytest.mark.parametrize(
        ("text", "value"),
        [
            ("42", 42),
            ("1_000", 1000),
            ("255u8", 255),
            ("0xFF", 255),
            ("0o17", 15),
            ("0b1010", 10),
            ("0x_ff_i64", 255),
            ("007", 7),
        ],
    )
    def test_parse_int_literal(self, text: str, value: int) -> None:
        assert parse_int_literal(text) == value

    @pytest.mark.parametrize(
        ("text", "value"),
        [("3.14", "3.14"), ("1_000.5", "1000.5"), ("2.0f32", "2.0"), ("1e10", "1e10")],
    )
    def test_normalize_float_literal(self, text: str, value: str) -> None:
        assert normalize_float_literal(text) == value

    def test_unescape(self) -> None:
        assert unescape_rust(r"a\tb\n\"q\"\\") == 'a\tb\n"q"\\'
        assert unescape_rust(r"\x41\u{1F600}") == "A\U0001f600"

    def test_string_literal_node(self, parse) -> None:
        node = tail_of(parse, r'"hi\n"')
        assert node == Literal(value="hi\n", literal_type="string", meta=node.meta)

    def test_float_literal_node(self, parse) -> None:
        node = tail_of(parse, "2.5")
        assert node.literal_type == "float"
        assert node.value == "2.5"

    def test_bool_and_char(self, parse) -> None:
        assert tail_of(parse, "true").value is True
        assert tail_of(parse, "false").value is False
        assert tail_of(parse, "'x'").literal_type == "char"


class TestPatterns:
    """Test parsing of match patterns."""

    def arm_pattern(self, parse, pattern: str):
        return tail_of(parse, f"match n {{ {pattern} => 0, }}").arms[0].pattern

    def test_negative_literal(self, parse) -> None:
        pattern = self.arm_pattern(parse, "-5")
        assert isinstance(pattern, LiteralPattern)
        assert pattern.literal.value == -5

    def test_exclusive_range(self, parse) -> None:
        pattern = self.arm_pattern(parse, "1..10")
        assert isinstance(pattern, RangePattern)
        assert pattern.inclusive is False
        assert (pattern.start.value, pattern.end.value) == (1, 10)

    def test_inclusive_range_with_negative_start(self, parse) -> None:
        pattern = self.arm_pattern(parse, "-3..=3")
        assert pattern.inclusive is True
        assert pattern.start.value == -3

    def test_half_open_range(self, parse) -> None:
        pattern = self.arm_pattern(parse, "10..")
        assert pattern.end is None

    def test_range_with_named_bound(self, parse) -> None:
        pattern = self.arm_pattern(parse, "0..=LIMIT")
        assert isinstance(pattern.end, Identifier)

    def test_binding(self, parse) -> None:
        pattern = self.arm_pattern(parse, "other")
        assert isinstance(pattern, IdentPattern)

    def test_path(self, parse) -> None:
        pattern = self.arm_pattern(parse, "Color::Red")
        assert isinstance(pattern, PathPattern)
        assert pattern.segments == ["Color", "Red"]

    def test_tuple(self, parse) -> None:
        pattern = self.arm_pattern(parse, "(a, _)")
        assert isinstance(pattern, TuplePattern)
        assert len(pattern.elements) == 2


class TestSyntaxErrors:
    """Test that malformed input is rejected."""

    @pytest.mark.parametrize(
        "source",
        [
            "fn f( {}",
            "fn f() { let = 1; }",
            "fn f() { let x = 1 }",
            "fn f() { x = 1 + ; }",
            "fn f() {",
            "let x = 1;",
        ],
    )
    def test_rejects(self, parser, source: str) -> None:
        with pytest.raises(UnexpectedInput):
            parser.parse(source)
