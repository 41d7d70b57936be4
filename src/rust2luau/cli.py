"""Command line actions for rust2luau.

Translate Rust files to Luau, or check them and report diagnostics. Human
readable reports go to stderr; generated code and JSON reports go to stdout.
"""

import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from rust2luau.compiler import (
    RustSyntaxError,
    TranslationFailedError,
    degradation_to_diagnostic,
    get_file_stats,
    normalize_source,
    parse_error_to_diagnostic,
    transpile_with_warnings,
    translation_error_to_diagnostic,
    validate,
)
from rust2luau.config import TranspilerConfig
from rust2luau.errors.diagnostics import Diagnostic
from rust2luau.errors.reporter import DiagnosticReporter, format_success_message
from rust2luau.log import get_logger

logger = get_logger(__name__)

EXIT_SUCCESS = 0
"""All inputs translated or validated without errors."""

EXIT_VALIDATION_ERRORS = 1
"""At least one input has syntax or translation errors."""

EXIT_FILE_ERROR = 2
"""An input could not be read or an output could not be written."""

RUST_FILE_GLOB = "*.rs"

console = Console(stderr=True, highlight=False)


def _print_report(text: str) -> None:
    if text:
        console.print(text.rstrip("\n"), markup=False, soft_wrap=True)


def _print_error(message: str) -> None:
    console.print(f"[bold red]error:[/bold red] {escape(message)}", soft_wrap=True)


def _read_source(path: Path) -> str | None:
    """Read a Rust source file, reporting a file error on failure."""
    if not path.exists():
        _print_error(f"file not found: {path}")
        return None
    if not path.is_file():
        _print_error(f"not a file: {path}")
        return None
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _print_error(f"cannot read {path}: {e}")
        return None


# =============================================================================
# Check
# =============================================================================


def check_file(path: Path, *, json_output: bool = False) -> int:
    """Validate a single Rust file.

    Args:
        path: File to validate.
        json_output: Print a JSON report to stdout instead of text to stderr.

    Returns:
        Exit code.

    """
    source = _read_source(path)
    if source is None:
        return EXIT_FILE_ERROR

    filename = str(path)
    diagnostics = validate(source, filename)
    has_errors = any(d.is_error for d in diagnostics)

    reporter = DiagnosticReporter()
    if json_output:
        sys.stdout.write(reporter.format_json(diagnostics, filename) + "\n")
    else:
        reporter.add_source(filename, normalize_source(source))
        _print_report(reporter.format_diagnostics(diagnostics))
        if not has_errors:
            stats = get_file_stats(source, filename)
            status = format_success_message(
                functions=stats.get("functions", 0),
                warnings=len(diagnostics),
            )
            console.print(f"{escape(filename)}: [green]{status}[/green]", soft_wrap=True)

    return EXIT_VALIDATION_ERRORS if has_errors else EXIT_SUCCESS


def check_directory(path: Path, *, json_output: bool = False) -> int:
    """Validate every Rust file under a directory.

    Args:
        path: Directory to search recursively for ``*.rs`` files.
        json_output: Print one JSON report per file to stdout.

    Returns:
        The worst exit code over all files.

    """
    if not path.exists():
        _print_error(f"directory not found: {path}")
        return EXIT_FILE_ERROR
    if not path.is_dir():
        _print_error(f"not a directory: {path}")
        return EXIT_FILE_ERROR

    files = sorted(path.rglob(RUST_FILE_GLOB))
    if not files:
        logger.info("No Rust files found in %s", path)
        return EXIT_SUCCESS

    return max(check_file(file, json_output=json_output) for file in files)


def run_check(paths: list[Path], *, json_output: bool = False) -> int:
    """Validate files and directories.

    Args:
        paths: Files or directories to validate.
        json_output: Report diagnostics as JSON.

    Returns:
        The worst exit code over all inputs.

    """
    if not paths:
        _print_error("no input files")
        return EXIT_FILE_ERROR
    results = [
        check_directory(path, json_output=json_output)
        if path.is_dir()
        else check_file(path, json_output=json_output)
        for path in paths
    ]
    return max(results)


# =============================================================================
# Transpile
# =============================================================================


def _diagnostic_for(error: Exception, source: str, filename: str) -> Diagnostic:
    if isinstance(error, RustSyntaxError):
        return parse_error_to_diagnostic(error.parse_error, source, filename)
    if isinstance(error, TranslationFailedError) and error.error is not None:
        return translation_error_to_diagnostic(error.error, filename)
    return Diagnostic.error(message=str(error), file=filename, line=1, column=1)


def transpile_file(path: Path, config: TranspilerConfig) -> tuple[str | None, int]:
    """Translate one file, printing its diagnostics.

    Args:
        path: Rust source file.
        config: Output settings.

    Returns:
        Tuple of (Luau code or None on failure, exit code).

    """
    source = _read_source(path)
    if source is None:
        return None, EXIT_FILE_ERROR

    filename = str(path)
    reporter = DiagnosticReporter()
    reporter.add_source(filename, normalize_source(source))
    try:
        code, degradations = transpile_with_warnings(source, filename, config=config)
    except (RustSyntaxError, TranslationFailedError) as e:
        diagnostic = _diagnostic_for(e, normalize_source(source), filename)
        _print_report(reporter.format_diagnostics([diagnostic]))
        return None, EXIT_VALIDATION_ERRORS

    warnings = [degradation_to_diagnostic(d, filename) for d in degradations]
    _print_report(reporter.format_diagnostics(warnings))
    return code, EXIT_SUCCESS


def run_transpile(
    files: list[Path],
    out: Path | None,
    config: TranspilerConfig,
) -> int:
    """Translate files and write the concatenated Luau code.

    Output is written only when every file translates; it goes to ``out``
    when given, stdout otherwise.

    Args:
        files: Rust source files, translated in order.
        out: Optional output file.
        config: Output settings.

    Returns:
        Exit code.

    """
    if not files:
        _print_error("no input files")
        return EXIT_FILE_ERROR

    chunks: list[str] = []
    exit_code = EXIT_SUCCESS
    for path in files:
        code, result = transpile_file(path, config)
        exit_code = max(exit_code, result)
        if code is not None:
            chunks.append(code)
    if exit_code != EXIT_SUCCESS:
        return exit_code

    output = "\n".join(chunk for chunk in chunks if chunk)
    if out is None:
        sys.stdout.write(output)
        return EXIT_SUCCESS
    try:
        out.write_text(output, encoding="utf-8")
    except OSError as e:
        _print_error(f"cannot write {out}: {e}")
        return EXIT_FILE_ERROR
    logger.info("Wrote %s", out)
    return EXIT_SUCCESS
