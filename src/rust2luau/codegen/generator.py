"""Main code generator for rust2luau.

Transform a parsed Rust AST into Luau source text.
"""

from rust2luau.ast.nodes import SourceFile
from rust2luau.codegen.emitter import CodeEmitter
from rust2luau.codegen.errors import Degradation
from rust2luau.codegen.scope import TranslationState
from rust2luau.codegen.visitors.functions import FunctionVisitor
from rust2luau.config import TranspilerConfig
from rust2luau.log import get_logger

logger = get_logger(__name__)


class CodeGenerator:
    """Generate Luau code from a Rust AST.

    Each call to ``generate`` uses a fresh emitter and translation state, so
    one generator can be reused across files.
    """

    def __init__(self, config: TranspilerConfig | None = None) -> None:
        """Initialize the code generator.

        Args:
            config: Output settings; defaults apply when omitted.

        """
        self._config = config or TranspilerConfig()
        logger.debug("Created CodeGenerator")

    def generate(
        self,
        ast: SourceFile,
        source_file: str,
    ) -> tuple[str, list[Degradation]]:
        """Generate Luau code from a Rust AST.

        Args:
            ast: Parsed SourceFile AST node.
            source_file: Name of the original source file.

        Returns:
            Tuple of (generated Luau code, expressions emitted as nil).

        Raises:
            TranslationError: If the AST uses a construct with no lowering.

        """
        logger.debug("Generating Luau code for %s", source_file)

        emitter = CodeEmitter(
            source_file,
            indent_str=self._config.indent_str,
            source_comments=self._config.source_comments,
        )
        degradations: list[Degradation] = []
        visitor = FunctionVisitor(emitter, TranslationState(), degradations)

        for index, function in enumerate(ast.items):
            if index > 0:
                emitter.emit_blank()
            visitor.visit(function)

        code = emitter.get_code()
        logger.debug(
            "Generated %d lines of code with %d degradations",
            emitter.get_line_count(),
            len(degradations),
        )
        return code, degradations
