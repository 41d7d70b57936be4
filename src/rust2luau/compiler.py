"""Main compiler for rust2luau.

Provide the translation and validation entry points that run Rust source
through parsing, AST transformation and Luau code generation.
"""

from lark import Tree, UnexpectedCharacters, UnexpectedEOF, UnexpectedToken

from rust2luau.ast.nodes import SourceFile
from rust2luau.ast.transformer import transform
from rust2luau.codegen.errors import Degradation, TranslationError
from rust2luau.codegen.generator import CodeGenerator
from rust2luau.config import TranspilerConfig
from rust2luau.errors.codes import ErrorCode
from rust2luau.errors.diagnostics import Diagnostic
from rust2luau.grammar.parser import ParserFactory
from rust2luau.log import get_logger

logger = get_logger(__name__)

END_TOKEN_TYPE = "$END"
"""Lark token type reported when input ends early."""

MAX_EXPECTED_SHOWN = 8
"""Maximum number of expected tokens listed in a parse error hint."""


def normalize_source(source: str) -> str:
    """Normalize Rust source for parsing.

    Line endings are converted to ``\\n`` and a leading byte order mark is
    dropped, so reported columns match what editors show.

    Args:
        source: The Rust source code.

    Returns:
        Normalized source.

    """
    source = source.removeprefix("\ufeff")
    return source.replace("\r\n", "\n").replace("\r", "\n")


def _parse(source: str, filename: str, *, debug_parser: bool = False) -> Tree:
    try:
        parser = ParserFactory.create(debug=debug_parser)
        return parser.parse(source)
    except (UnexpectedCharacters, UnexpectedEOF, UnexpectedToken) as e:
        logger.debug("Parse error in %s: %s", filename, e)
        raise RustSyntaxError(str(e), filename=filename, parse_error=e) from e


def parse_source(
    source: str,
    filename: str,
    *,
    debug_parser: bool = False,
) -> SourceFile:
    """Parse Rust source into a SourceFile AST.

    Args:
        source: The Rust source code.
        filename: Name of the source file (for error messages).
        debug_parser: Enable parser debug mode for verbose output.

    Returns:
        The root AST node.

    Raises:
        RustSyntaxError: If parsing fails.

    """
    tree = _parse(normalize_source(source), filename, debug_parser=debug_parser)
    return transform(tree)


def transpile_with_warnings(
    source: str,
    filename: str,
    *,
    config: TranspilerConfig | None = None,
) -> tuple[str, list[Degradation]]:
    """Translate Rust source to Luau, returning the lossy spots as well.

    Args:
        source: The Rust source code.
        filename: Name of the source file (for error messages and comments).
        config: Output settings; defaults apply when omitted.

    Returns:
        Tuple of (Luau code, expressions emitted as nil).

    Raises:
        RustSyntaxError: If parsing fails.
        TranslationFailedError: If the source uses an unsupported construct.

    """
    logger.debug("Translating Rust file: %s", filename)
    ast = parse_source(source, filename)

    generator = CodeGenerator(config)
    try:
        code, degradations = generator.generate(ast, filename)
    except TranslationError as e:
        logger.debug("Translation error in %s: %s", filename, e)
        raise TranslationFailedError(str(e), filename=filename, error=e) from e

    logger.debug(
        "Translated %s: %d functions, %d lines of Luau",
        filename,
        len(ast.items),
        code.count("\n"),
    )
    return code, degradations


def transpile(
    source: str,
    filename: str,
    *,
    config: TranspilerConfig | None = None,
) -> str:
    """Translate Rust source to Luau source.

    Args:
        source: The Rust source code.
        filename: Name of the source file (for error messages and comments).
        config: Output settings; defaults apply when omitted.

    Returns:
        The generated Luau code.

    Raises:
        RustSyntaxError: If parsing fails.
        TranslationFailedError: If the source uses an unsupported construct.

    """
    code, _ = transpile_with_warnings(source, filename, config=config)
    return code


def validate(
    source: str,
    filename: str,
    *,
    debug_parser: bool = False,
) -> list[Diagnostic]:
    """Validate Rust source without producing output.

    Run the full pipeline and collect diagnostics instead of raising.

    Args:
        source: The Rust source code.
        filename: Name of the source file.
        debug_parser: Enable parser debug mode.

    Returns:
        List of diagnostics (errors and warnings).

    """
    logger.debug("Validating Rust file: %s", filename)
    source = normalize_source(source)

    try:
        ast = parse_source(source, filename, debug_parser=debug_parser)
    except RustSyntaxError as e:
        return [parse_error_to_diagnostic(e.parse_error, source, filename)]

    try:
        _, degradations = CodeGenerator().generate(ast, filename)
    except TranslationError as e:
        return [translation_error_to_diagnostic(e, filename)]

    return [degradation_to_diagnostic(d, filename) for d in degradations]


def get_file_stats(source: str, filename: str) -> dict[str, int]:
    """Get statistics about a Rust file.

    Args:
        source: The Rust source code.
        filename: Name of the source file.

    Returns:
        Dictionary with the number of functions, empty if parsing fails.

    """
    try:
        ast = parse_source(source, filename)
    except RustSyntaxError:
        return {}
    return {"functions": len(ast.items)}


def _end_of_input(source: str) -> tuple[int, int]:
    lines = source.split("\n")
    if len(lines) > 1 and not lines[-1]:
        lines.pop()
    return len(lines), len(lines[-1]) + 1


def parse_error_to_diagnostic(
    error: Exception,
    source: str,
    filename: str,
) -> Diagnostic:
    """Convert a lark parse error to an E0001 diagnostic.

    Args:
        error: UnexpectedCharacters, UnexpectedToken or UnexpectedEOF.
        source: Normalized source, used to locate the end of input.
        filename: Source filename.

    Returns:
        Diagnostic instance.

    """
    if isinstance(error, UnexpectedCharacters):
        return Diagnostic.error(
            message="invalid character",
            file=filename,
            line=error.line,
            column=error.column,
            code=ErrorCode.E0001,
            help_text=f"unexpected character '{error.char}'",
        )

    if isinstance(error, UnexpectedToken) and error.token.type != END_TOKEN_TYPE:
        expected = sorted(str(name) for name in error.expected)
        shown = ", ".join(expected[:MAX_EXPECTED_SHOWN])
        if len(expected) > MAX_EXPECTED_SHOWN:
            shown += ", ..."
        return Diagnostic.error(
            message=f"unexpected token '{error.token}'",
            file=filename,
            line=error.line,
            column=error.column,
            code=ErrorCode.E0001,
            end_column=error.column + len(str(error.token)),
            end_line=error.line,
            help_text=f"expected one of: {shown}",
        )

    line, column = _end_of_input(source)
    return Diagnostic.error(
        message="unexpected end of input",
        file=filename,
        line=line,
        column=column,
        code=ErrorCode.E0001,
        help_text="check for an unclosed brace or a missing ';'",
    )


def translation_error_to_diagnostic(
    error: TranslationError,
    filename: str,
) -> Diagnostic:
    """Convert a TranslationError to a Diagnostic.

    Args:
        error: The translation error.
        filename: Source filename.

    Returns:
        Diagnostic instance.

    """
    line = 1
    column = 1
    end_line = None
    end_column = None

    if error.position is not None:
        line = error.position.line
        column = error.position.column
        end_line = error.position.end_line
        end_column = error.position.end_column

    return Diagnostic.error(
        message=error.message,
        file=filename,
        line=line,
        column=column,
        code=error.code,
        end_line=end_line,
        end_column=end_column,
        help_text=error.help_text,
    )


def degradation_to_diagnostic(degradation: Degradation, filename: str) -> Diagnostic:
    """Convert a nil placeholder to a W0001 warning."""
    position = degradation.position
    return Diagnostic.warning(
        message=degradation.message,
        file=filename,
        line=position.line if position else 1,
        column=position.column if position else 1,
        code=ErrorCode.W0001,
        end_line=position.end_line if position else None,
        end_column=position.end_column if position else None,
    )


class TranspileError(Exception):
    """Base exception for rust2luau translation errors."""

    def __init__(self, message: str, *, filename: str | None = None) -> None:
        """Initialize translation error.

        Args:
            message: Error message.
            filename: Optional source filename.

        """
        super().__init__(message)
        self.filename = filename


class RustSyntaxError(TranspileError):
    """Exception for Rust parsing errors."""

    def __init__(
        self,
        message: str,
        *,
        filename: str | None = None,
        parse_error: Exception | None = None,
    ) -> None:
        """Initialize syntax error.

        Args:
            message: Error message.
            filename: Source filename.
            parse_error: Original Lark parse error.

        """
        super().__init__(message, filename=filename)
        self.parse_error = parse_error


class TranslationFailedError(TranspileError):
    """Exception for valid Rust outside the supported subset."""

    def __init__(
        self,
        message: str,
        *,
        filename: str | None = None,
        error: TranslationError | None = None,
    ) -> None:
        """Initialize translation failure.

        Args:
            message: Error message.
            filename: Source filename.
            error: The code generator's error, with code and position.

        """
        super().__init__(message, filename=filename)
        self.error = error
