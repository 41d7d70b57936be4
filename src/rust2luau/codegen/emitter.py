"""Code emitter for Luau code generation.

Own the output buffer and the indentation depth for one translation run.
"""

from rust2luau.log import get_logger

logger = get_logger(__name__)

DEFAULT_INDENT = "    "
"""Default indentation string (4 spaces)."""

MIN_INDENT_LEVEL = 0
"""Minimum indentation level."""


class CodeEmitter:
    """Collect Luau lines with consistent indentation.

    Every visitor of a run shares one emitter, so line order in the buffer is
    emission order. Depth changes are paired by the visitors around each
    block; ``dedent`` never goes below zero.
    """

    def __init__(
        self,
        source_file: str,
        *,
        indent_str: str = DEFAULT_INDENT,
        source_comments: bool = False,
    ) -> None:
        """Initialize a code emitter for a source file.

        Args:
            source_file: Name of the Rust source file, used in source comments.
            indent_str: String emitted once per indentation level.
            source_comments: Precede located lines with ``-- file:line``.

        """
        self._lines: list[str] = []
        self._indent_level = 0
        self._indent_str = indent_str
        self._source_file = source_file
        self._source_comments = source_comments
        logger.debug("Created CodeEmitter for %s", source_file)

    @property
    def prefix(self) -> str:
        """Get the indentation prefix for the current depth."""
        return self._indent_str * self._indent_level

    def emit(self, code: str, source_line: int | None = None) -> None:
        """Emit a line of code at the current depth.

        Args:
            code: The code to emit (single line, no trailing newline).
            source_line: Optional Rust line number the code came from.

        """
        if self._source_comments and source_line is not None:
            self.emit_comment(f"{self._source_file}:{source_line}")
        self._lines.append(f"{self.prefix}{code}")

    def emit_comment(self, text: str) -> None:
        """Emit a comment line.

        Args:
            text: The comment text (without the -- prefix).

        """
        self._lines.append(f"{self.prefix}-- {text}")

    def emit_blank(self) -> None:
        """Emit a blank line."""
        self._lines.append("")

    def indent(self) -> None:
        """Increase indentation level."""
        self._indent_level += 1
        logger.debug("Indent level: %d", self._indent_level)

    def dedent(self) -> None:
        """Decrease indentation level."""
        if self._indent_level > MIN_INDENT_LEVEL:
            self._indent_level -= 1
        logger.debug("Indent level: %d", self._indent_level)

    def get_code(self) -> str:
        """Get the generated code as a string.

        Returns:
            The complete generated code, one newline after every line.

        """
        if not self._lines:
            return ""
        return "\n".join(self._lines) + "\n"

    def get_line_count(self) -> int:
        """Get the number of lines emitted so far."""
        return len(self._lines)

    def get_indent_level(self) -> int:
        """Get the current indentation depth."""
        return self._indent_level
