"""Function visitor for Luau code generation.

Emit one global Luau function per Rust ``fn`` item.
"""

from rust2luau.ast.nodes import FunctionDef, TypeRef
from rust2luau.codegen.emitter import CodeEmitter
from rust2luau.codegen.errors import Degradation
from rust2luau.codegen.scope import TranslationState
from rust2luau.codegen.types import map_type
from rust2luau.codegen.visitors.statements import StatementVisitor
from rust2luau.log import get_logger

logger = get_logger(__name__)

UNIT_TYPE_NAME = "()"


def _returns_value(return_type: TypeRef | None) -> bool:
    return return_type is not None and return_type.name != UNIT_TYPE_NAME


class FunctionVisitor:
    """Generate Luau functions from Rust function definitions."""

    def __init__(
        self,
        emitter: CodeEmitter,
        state: TranslationState,
        degradations: list[Degradation] | None = None,
    ) -> None:
        """Initialize the function visitor.

        Args:
            emitter: Code emitter for output generation.
            state: Translation state reset at each function entry.
            degradations: Shared list that collects nil placeholders.

        """
        self._emitter = emitter
        self._state = state
        self._stmt_visitor = StatementVisitor(emitter, state, degradations)

    def visit(self, node: FunctionDef) -> None:
        """Emit a function header, its body and the closing ``end``.

        Parameters are declared on entry so assignments to them inside the
        body never emit a shadowing ``local``. In a function that returns a
        value the body's tail is returned.

        Args:
            node: Function definition node.

        """
        params = ", ".join(
            f"{param.name}: {map_type(param.type_ref)}" for param in node.params
        )
        header = f"function {node.name}({params})"
        if _returns_value(node.return_type):
            header += f": {map_type(node.return_type)}"

        self._emitter.emit(header, source_line=node.meta.line if node.meta else None)
        self._state.enter_function(node.name, [param.name for param in node.params])
        self._emitter.indent()
        if _returns_value(node.return_type):
            self._stmt_visitor.visit_block(node.body, self._stmt_visitor.return_sink)
        else:
            self._stmt_visitor.visit_block(node.body)
        self._emitter.dedent()
        self._emitter.emit("end")
        self._state.exit_function()
