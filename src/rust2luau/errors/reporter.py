"""Diagnostic reporter for rust2luau.

Render diagnostics rustc-style with source context and carets, or as JSON.
"""

import json
from io import StringIO

from rust2luau.errors.diagnostics import Diagnostic, Severity

GUTTER_WIDTH = 5
"""Width of the line number gutter."""

CONTEXT_LINES = 1
"""Number of context lines to show before/after the reported line."""

JSON_REPORT_VERSION = "1.0"


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"


class DiagnosticReporter:
    """Format diagnostics for terminals and tools.

    Example output:
        error[E0101]: unsupported operator '<<'
          --> shifts.rs:3:13
           |
         2 | fn shift(a: i32) -> i32 {
         3 |     let b = a << 2;
           |             ^^^^^^
         4 |     b
           |
    """

    def __init__(self, source_cache: dict[str, str] | None = None) -> None:
        """Initialize the reporter.

        Args:
            source_cache: Optional mapping of file path to source content.

        """
        self._sources: dict[str, str] = dict(source_cache or {})

    def add_source(self, file_path: str, source: str) -> None:
        """Register source content so reports can quote it."""
        self._sources[file_path] = source

    def format_diagnostic(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: The diagnostic to format.

        Returns:
            Multi-line report ending with a newline.

        """
        out = StringIO()
        label = diagnostic.severity.value
        if diagnostic.code is not None:
            label = f"{label}[{diagnostic.code.value}]"
        out.write(f"{label}: {diagnostic.message}\n")
        out.write(f"  --> {diagnostic.file}:{diagnostic.line}:{diagnostic.column}\n")

        blank_gutter = " " * GUTTER_WIDTH + "|\n"
        out.write(blank_gutter)
        lines = self._sources.get(diagnostic.file, "").split("\n")
        index = diagnostic.line - 1
        if diagnostic.file in self._sources and 0 <= index < len(lines):
            first = max(0, index - CONTEXT_LINES)
            last = min(len(lines), index + CONTEXT_LINES + 1)
            for i in range(first, last):
                out.write(f"{i + 1:>{GUTTER_WIDTH - 1}} | {lines[i]}\n")
                if i == index:
                    out.write(self._caret_line(diagnostic, lines[i]))
            out.write(blank_gutter)

        if diagnostic.help_text:
            out.write(f"{' ' * GUTTER_WIDTH}= help: {diagnostic.help_text}\n")
        return out.getvalue()

    def _caret_line(self, diagnostic: Diagnostic, source_line: str) -> str:
        start = max(0, diagnostic.column - 1)
        if diagnostic.end_column is not None and diagnostic.end_line == diagnostic.line:
            width = diagnostic.span_length
        else:
            end = start
            while end < len(source_line) and not source_line[end].isspace():
                end += 1
            width = max(1, end - start)
        # Keep tabs so the carets line up under tab-indented source.
        spacing = "".join("\t" if c == "\t" else " " for c in source_line[:start])
        return f"{' ' * GUTTER_WIDTH}| {spacing}{'^' * width}\n"

    def format_diagnostics(
        self,
        diagnostics: list[Diagnostic],
        *,
        include_summary: bool = True,
    ) -> str:
        """Format several diagnostics separated by blank lines.

        Args:
            diagnostics: Diagnostics to format.
            include_summary: Append a "Found N errors ..." line.

        Returns:
            The formatted report, or an empty string for no diagnostics.

        """
        if not diagnostics:
            return ""
        report = "\n".join(self.format_diagnostic(d) for d in diagnostics)
        if include_summary:
            report += "\n" + format_summary(diagnostics)
        return report

    def format_json(self, diagnostics: list[Diagnostic], file: str) -> str:
        """Format diagnostics for one file as a JSON document.

        Args:
            diagnostics: Diagnostics reported for the file.
            file: The file being checked.

        Returns:
            JSON string with ``valid``, ``errors`` and ``warnings`` keys.

        """
        errors = [d.to_dict() for d in diagnostics if d.severity == Severity.ERROR]
        warnings = [d.to_dict() for d in diagnostics if d.severity == Severity.WARNING]
        return json.dumps(
            {
                "version": JSON_REPORT_VERSION,
                "file": file,
                "valid": not errors,
                "errors": errors,
                "warnings": warnings,
            },
            indent=2,
        )


def format_summary(diagnostics: list[Diagnostic]) -> str:
    """Summarize error and warning counts across the reported files.

    Args:
        diagnostics: Diagnostics to count.

    Returns:
        Summary line, or an empty string when there is nothing to count.

    """
    errors = sum(1 for d in diagnostics if d.severity == Severity.ERROR)
    warnings = sum(1 for d in diagnostics if d.severity == Severity.WARNING)
    if not errors and not warnings:
        return ""
    parts = []
    if errors:
        parts.append(_plural(errors, "error"))
    if warnings:
        parts.append(_plural(warnings, "warning"))
    files = {d.file for d in diagnostics}
    where = next(iter(files)) if len(files) == 1 else _plural(len(files), "file")
    return f"Found {' and '.join(parts)} in {where}\n"


def format_success_message(*, functions: int = 0, warnings: int = 0) -> str:
    """Format the status line for a file that translated cleanly.

    Args:
        functions: Number of functions in the file.
        warnings: Number of degradation warnings.

    Returns:
        Status text such as ``valid (2 functions, 1 warning)``.

    """
    parts = []
    if functions:
        parts.append(_plural(functions, "function"))
    if warnings:
        parts.append(_plural(warnings, "warning"))
    if parts:
        return f"valid ({', '.join(parts)})"
    return "valid"
