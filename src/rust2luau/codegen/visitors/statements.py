"""Statement visitor for Luau code generation.

Emit Luau statements for Rust statements and block-like expressions,
including the lowering of match, if and block expressions used as values.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rust2luau.ast.nodes import (
    Assignment,
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
    LocalBinding,
    MatchExpr,
    OpaqueExpr,
    ParenExpr,
    RangeExpr,
    ReturnStmt,
    UnaryExpr,
    WhileLoop,
    WildcardPattern,
)
from rust2luau.codegen.errors import (
    UnsupportedGuardClauseError,
    UnsupportedIteratorError,
    UnsupportedLoopVariableError,
    UnsupportedOperatorError,
    UnsupportedPatternBoundError,
    UnsupportedPatternError,
    UnsupportedStatementError,
)
from rust2luau.codegen.types import map_type
from rust2luau.codegen.visitors.expressions import (
    VALUE_EXPRESSIONS,
    ExpressionVisitor,
    describe_expression,
)
from rust2luau.codegen.visitors.patterns import (
    WILDCARD,
    PatternVisitor,
    describe_pattern,
    guard_subject,
)
from rust2luau.log import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from rust2luau.ast.nodes import AstNode, SourcePosition
    from rust2luau.codegen.emitter import CodeEmitter
    from rust2luau.codegen.errors import Degradation
    from rust2luau.codegen.scope import TranslationState

    ValueSink = Callable[[str, int | None], None]
    """Receives the Luau text of a value and the Rust line it came from."""

logger = get_logger(__name__)

COMPOUND_OPERATORS = frozenset({"+", "-", "*", "/"})
"""Compound assignment operators Luau supports directly."""

LOOP_UPPER_UNBOUNDED = "math.huge"
"""Upper bound of a for loop over an open-ended range."""

DISCARD_NAME = "_"


def _line(node: AstNode) -> int | None:
    meta: SourcePosition | None = getattr(node, "meta", None)
    return meta.line if meta else None


class StatementVisitor:
    """Generate Luau statements for one function body at a time.

    Values produced by block-like expressions flow into a ``ValueSink``:
    assigning to a local for ``let`` and assignments, or ``return`` for the
    tail of a function with a return type.
    """

    def __init__(
        self,
        emitter: CodeEmitter,
        state: TranslationState,
        degradations: list[Degradation] | None = None,
    ) -> None:
        """Initialize the statement visitor.

        Args:
            emitter: Code emitter for output generation.
            state: Declared-name tracking for the current function.
            degradations: Shared list that collects nil placeholders.

        """
        self._emitter = emitter
        self._state = state
        self._expr_visitor = ExpressionVisitor(
            hoist=self._hoist_value,
            degradations=degradations,
        )
        self._pattern_visitor = PatternVisitor(self._expr_visitor)
        self._stmt_dispatch: dict[type, Callable[[AstNode], None]] = {
            LocalBinding: self._visit_local_binding,
            Assignment: self._visit_assignment,
            CompoundAssignment: self._visit_compound_assignment,
            ExprStmt: self._visit_expr_stmt,
            ReturnStmt: self._visit_return,
            BreakStmt: self._visit_break,
            ContinueStmt: self._visit_continue,
        }
        self._value_dispatch: dict[type, Callable[[AstNode, ValueSink], None]] = {
            MatchExpr: self._lower_match,
            IfExpr: self._lower_if,
            Block: self._lower_block,
        }
        self._expr_stmt_dispatch: dict[type, Callable[[AstNode], None]] = {
            CallExpr: self._visit_call_statement,
            IfExpr: self._visit_if_statement,
            MatchExpr: self._visit_match_statement,
            WhileLoop: self._visit_while,
            InfiniteLoop: self._visit_loop,
            ForLoop: self._visit_for,
            Block: lambda node: self._lower_block(node, None),
            ParenExpr: lambda node: self._visit_expression_statement(node.inner),
        }

    # =========================================================================
    # Blocks and value sinks
    # =========================================================================

    def visit_block(self, block: Block, sink: ValueSink | None = None) -> None:
        """Emit a block's statements in order, then its tail.

        The block gets its own scope, so a ``let`` inside it declares a new
        local even when an enclosing block has one of the same name.

        Args:
            block: The block to emit.
            sink: Receives the tail value; without one the tail is emitted
                as an expression statement.

        """
        self._state.enter_block()
        for stmt in block.statements:
            self.visit_statement(stmt)
        if block.tail is not None:
            if sink is None:
                self._visit_expression_statement(block.tail)
            else:
                self.lower_value(block.tail, sink)
        self._state.exit_block()

    def _lower_block(self, block: Block, sink: ValueSink | None) -> None:
        """Emit a bare block inside ``do ... end`` so its locals stay inside."""
        self._emitter.emit("do", source_line=_line(block))
        self._emitter.indent()
        self.visit_block(block, sink)
        self._emitter.dedent()
        self._emitter.emit("end")

    def lower_value(self, node: AstNode, sink: ValueSink) -> None:
        """Emit the statements computing ``node`` and pass its value to ``sink``.

        Loops have no value and are emitted as plain statements.
        """
        lowering = self._value_dispatch.get(type(node))
        if lowering is not None:
            lowering(node, sink)
        elif isinstance(node, (WhileLoop, InfiniteLoop, ForLoop)):
            self._visit_expression_statement(node)
        else:
            sink(self._expr_visitor.visit(node), _line(node))

    def _assign_to(self, name: str) -> ValueSink:
        def sink(value: str, line: int | None) -> None:
            self._emitter.emit(f"{name} = {value}", source_line=line)

        return sink

    def return_sink(self, value: str, line: int | None) -> None:
        """Emit ``return value``; used for function tails."""
        self._emitter.emit(f"return {value}", source_line=line)

    def _hoist_value(self, node: AstNode) -> str:
        """Lower a nested value expression into a fresh temporary."""
        temp = self._state.fresh_temp()
        logger.debug("Hoisting %s into %s", describe_expression(node), temp)
        self._emitter.emit(f"local {temp} = nil", source_line=_line(node))
        self._state.declare(temp)
        self.lower_value(node, self._assign_to(temp))
        return temp

    # =========================================================================
    # Statements
    # =========================================================================

    def visit_statement(self, stmt: AstNode) -> None:
        """Visit a statement node and emit Luau code.

        Args:
            stmt: The statement node.

        Raises:
            UnsupportedStatementError: For statement kinds with no lowering.

        """
        visitor = self._stmt_dispatch.get(type(stmt))
        if visitor is None:
            raise UnsupportedStatementError(
                type(stmt).__name__,
                position=getattr(stmt, "meta", None),
            )
        visitor(stmt)

    def _visit_local_binding(self, node: LocalBinding) -> None:
        """Generate code for a let statement.

        A name already declared in the same block is re-bound with a plain
        assignment. A name declared in an enclosing block gets a new
        ``local``; when its value needs statements, they fill a temporary
        first so the initializer still reads the outer binding.
        """
        if isinstance(node.pattern, WildcardPattern):
            name = DISCARD_NAME
        elif isinstance(node.pattern, IdentPattern):
            name = node.pattern.name
        else:
            raise UnsupportedPatternError(
                f"{describe_pattern(node.pattern)} let",
                position=node.meta,
            )
        line = _line(node)
        annotation = ""
        if node.type_annotation is not None:
            annotation = f": {map_type(node.type_annotation)}"

        if name != DISCARD_NAME and self._state.is_declared_here(name):
            if node.init is None:
                logger.debug("Re-binding %s without a value; nothing to emit", name)
            elif isinstance(node.init, VALUE_EXPRESSIONS):
                self.lower_value(node.init, self._assign_to(name))
            else:
                value = self._expr_visitor.visit(node.init)
                self._emitter.emit(f"{name} = {value}", source_line=line)
            return

        if node.init is None:
            self._emitter.emit(f"local {name}{annotation}", source_line=line)
        elif isinstance(node.init, VALUE_EXPRESSIONS) and self._state.is_declared(name):
            logger.debug("Shadowing outer %s; lowering its value into a temporary", name)
            value = self._hoist_value(node.init)
            self._emitter.emit(f"local {name}{annotation} = {value}", source_line=line)
        elif isinstance(node.init, VALUE_EXPRESSIONS):
            self._emitter.emit(f"local {name}{annotation} = nil", source_line=line)
            self._state.declare(name)
            self.lower_value(node.init, self._assign_to(name))
            return
        else:
            value = self._expr_visitor.visit(node.init)
            self._emitter.emit(f"local {name}{annotation} = {value}", source_line=line)
        if name != DISCARD_NAME:
            self._state.declare(name)

    def _visit_assignment(self, node: Assignment) -> None:
        """Generate code for assignment.

        Inside a function the first assignment to an undeclared name
        declares it.
        """
        target = node.target
        line = _line(node)
        declares = self._state.in_function and not self._state.is_declared(target)
        if isinstance(node.value, VALUE_EXPRESSIONS):
            if declares:
                self._emitter.emit(f"local {target} = nil", source_line=line)
                self._state.declare(target)
            self.lower_value(node.value, self._assign_to(target))
            return

        value = self._expr_visitor.visit(node.value)
        if declares:
            self._emitter.emit(f"local {target} = {value}", source_line=line)
            self._state.declare(target)
        else:
            self._emitter.emit(f"{target} = {value}", source_line=line)

    def _visit_compound_assignment(self, node: CompoundAssignment) -> None:
        if node.op not in COMPOUND_OPERATORS:
            raise UnsupportedOperatorError(f"{node.op}=", position=node.meta)
        value = self._expr_visitor.visit(node.value)
        self._emitter.emit(f"{node.target} {node.op}= {value}", source_line=_line(node))

    def _visit_expr_stmt(self, node: ExprStmt) -> None:
        self._visit_expression_statement(node.expr)

    def _visit_return(self, node: ReturnStmt) -> None:
        if node.value is None:
            self._emitter.emit("return", source_line=_line(node))
        else:
            self.lower_value(node.value, self.return_sink)

    def _visit_break(self, node: BreakStmt) -> None:
        self._emitter.emit("break", source_line=_line(node))

    def _visit_continue(self, node: ContinueStmt) -> None:
        self._emitter.emit("continue", source_line=_line(node))

    # =========================================================================
    # Expression statements
    # =========================================================================

    def _visit_expression_statement(self, expr: AstNode) -> None:
        """Emit an expression evaluated for its effect.

        Raises:
            UnsupportedStatementError: For expressions that cannot stand
                alone as a Luau statement.

        """
        if isinstance(expr, OpaqueExpr) and expr.kind == "unit":
            return
        visitor = self._expr_stmt_dispatch.get(type(expr))
        if visitor is None:
            raise UnsupportedStatementError(
                f"{describe_expression(expr)} used as a statement",
                position=getattr(expr, "meta", None),
            )
        visitor(expr)

    def _visit_call_statement(self, node: CallExpr) -> None:
        if not isinstance(node.callee, Identifier):
            raise UnsupportedStatementError(
                f"call through a {describe_expression(node.callee)}",
                position=node.meta,
            )
        self._emitter.emit(self._expr_visitor.visit(node), source_line=_line(node))

    def _visit_if_statement(self, node: IfExpr) -> None:
        self._emit_if_chain(node, self.visit_block)

    def _visit_match_statement(self, node: MatchExpr) -> None:
        self._emit_match_chain(node, self._emit_arm_statement)

    def _emit_arm_statement(self, body: AstNode) -> None:
        if isinstance(body, Block):
            self.visit_block(body)
        else:
            self._visit_expression_statement(body)

    # =========================================================================
    # Conditionals
    # =========================================================================

    def _lower_if(self, node: IfExpr, sink: ValueSink) -> None:
        self._emit_if_chain(node, lambda block: self.visit_block(block, sink))

    def _emit_if_chain(self, node: IfExpr, emit_branch: Callable[[Block], None]) -> None:
        """Emit an if/elseif/else chain closed by exactly one ``end``."""
        condition = self._expr_visitor.visit(node.condition)
        self._emitter.emit(f"if {condition} then", source_line=_line(node))
        self._emit_branches(node, emit_branch)
        self._emitter.emit("end")

    def _emit_branches(self, node: IfExpr, emit_branch: Callable[[Block], None]) -> None:
        self._emitter.indent()
        emit_branch(node.then_branch)
        self._emitter.dedent()

        else_branch = node.else_branch
        if isinstance(else_branch, IfExpr):
            with self._expr_visitor.without_hoisting("an else-if condition"):
                condition = self._expr_visitor.visit(else_branch.condition)
            self._emitter.emit(
                f"elseif {condition} then",
                source_line=_line(else_branch),
            )
            self._emit_branches(else_branch, emit_branch)
        elif else_branch is not None:
            self._emitter.emit("else")
            self._emitter.indent()
            emit_branch(else_branch)
            self._emitter.dedent()

    def _lower_match(self, node: MatchExpr, sink: ValueSink) -> None:
        def emit_arm(body: AstNode) -> None:
            if isinstance(body, Block):
                self.visit_block(body, sink)
            else:
                self.lower_value(body, sink)

        self._emit_match_chain(node, emit_arm)

    def _emit_match_chain(
        self,
        node: MatchExpr,
        emit_body: Callable[[AstNode], None],
    ) -> None:
        """Lower a match to an if chain with one branch per arm.

        Arms keep their source order. A wildcard arm becomes ``else`` when it
        is last; earlier wildcards become an always-true branch so the chain
        stays well formed and shadows the arms after it, as in Rust.
        """
        scrutinee = guard_subject(
            node.scrutinee,
            self._expr_visitor.visit(node.scrutinee),
        )
        last_index = len(node.arms) - 1
        for index, arm in enumerate(node.arms):
            if arm.guard is not None:
                raise UnsupportedGuardClauseError(position=arm.meta)
            guard = self._pattern_visitor.visit(arm.pattern, scrutinee)
            keyword = "if" if index == 0 else "elseif"
            if guard is WILDCARD and index == last_index and index > 0:
                self._emitter.emit("else")
            elif guard is WILDCARD:
                self._emitter.emit(f"{keyword} true then", source_line=_line(arm))
            else:
                self._emitter.emit(f"{keyword} {guard} then", source_line=_line(arm))
            self._emitter.indent()
            emit_body(arm.body)
            self._emitter.dedent()
        if node.arms:
            self._emitter.emit("end")

    # =========================================================================
    # Loops
    # =========================================================================

    def _visit_while(self, node: WhileLoop) -> None:
        with self._expr_visitor.without_hoisting("a while condition"):
            condition = self._expr_visitor.visit(node.condition)
        self._emitter.emit(f"while {condition} do", source_line=_line(node))
        self._emit_loop_body(node.body)

    def _visit_loop(self, node: InfiniteLoop) -> None:
        self._emitter.emit("while true do", source_line=_line(node))
        self._emit_loop_body(node.body)

    def _visit_for(self, node: ForLoop) -> None:
        """Generate a numeric for loop over a literal range.

        Luau ranges are inclusive, so an exclusive end is folded to end - 1.

        Raises:
            UnsupportedLoopVariableError: If the binding is not an identifier.
            UnsupportedIteratorError: If the iterable is not a range.
            UnsupportedPatternBoundError: If a bound is not an integer literal.

        """
        if isinstance(node.pattern, IdentPattern):
            variable = node.pattern.name
        elif isinstance(node.pattern, WildcardPattern):
            variable = DISCARD_NAME
        else:
            raise UnsupportedLoopVariableError(
                describe_pattern(node.pattern),
                position=node.meta,
            )

        iterable = node.iterable
        while isinstance(iterable, ParenExpr):
            iterable = iterable.inner
        if not isinstance(iterable, RangeExpr):
            raise UnsupportedIteratorError(
                describe_expression(iterable),
                position=getattr(iterable, "meta", None) or node.meta,
            )

        start = "0" if iterable.start is None else str(_loop_bound(iterable.start))
        if iterable.end is None:
            end = LOOP_UPPER_UNBOUNDED
        else:
            upper = _loop_bound(iterable.end)
            end = str(upper if iterable.inclusive else upper - 1)

        self._emitter.emit(
            f"for {variable} = {start}, {end} do",
            source_line=_line(node),
        )
        bound = [] if variable == DISCARD_NAME else [variable]
        self._emit_loop_body(node.body, bound)

    def _emit_loop_body(self, body: Block, bound: list[str] | None = None) -> None:
        self._emitter.indent()
        self._state.enter_block(bound or ())
        self.visit_block(body)
        self._state.exit_block()
        self._emitter.dedent()
        self._emitter.emit("end")


def _loop_bound(node: AstNode) -> int:
    """Get the value of an integer-literal loop bound, allowing a minus sign."""
    if isinstance(node, Literal) and node.literal_type == "int":
        return int(node.value)
    if isinstance(node, UnaryExpr) and node.op == "-":
        return -_loop_bound(node.operand)
    raise UnsupportedPatternBoundError(
        "loop range",
        "bound is not an integer literal",
        position=getattr(node, "meta", None),
    )
