"""Diagnostic messages for rust2luau.

Provide the diagnostic dataclass used to report errors and warnings with
their source location.
"""

from dataclasses import dataclass
from enum import Enum

from rust2luau.errors.codes import ErrorCode


class Severity(str, Enum):
    """Diagnostic severity levels."""

    ERROR = "error"
    """A failure that prevents code generation."""

    WARNING = "warning"
    """A lossy translation that still produced code."""

    NOTE = "note"
    """Additional information attached to a report."""


@dataclass
class Diagnostic:
    """A diagnostic message with source location.

    Lines and columns are 1-indexed, as reported by the parser.
    """

    severity: Severity
    message: str
    file: str
    line: int
    column: int
    code: ErrorCode | None = None
    end_line: int | None = None
    end_column: int | None = None
    help_text: str | None = None

    @classmethod
    def error(  # noqa: PLR0913
        cls,
        message: str,
        file: str,
        line: int,
        column: int,
        *,
        code: ErrorCode | None = None,
        end_line: int | None = None,
        end_column: int | None = None,
        help_text: str | None = None,
    ) -> "Diagnostic":
        """Create an error diagnostic.

        Args:
            message: The error message.
            file: Source file path.
            line: Line number (1-indexed).
            column: Column number (1-indexed).
            code: Optional error code.
            end_line: Optional end line.
            end_column: Optional end column (exclusive).
            help_text: Optional help text.

        Returns:
            A new Diagnostic with ERROR severity.

        """
        return cls(
            severity=Severity.ERROR,
            message=message,
            file=file,
            line=line,
            column=column,
            code=code,
            end_line=end_line,
            end_column=end_column,
            help_text=help_text,
        )

    @classmethod
    def warning(  # noqa: PLR0913
        cls,
        message: str,
        file: str,
        line: int,
        column: int,
        *,
        code: ErrorCode | None = None,
        end_line: int | None = None,
        end_column: int | None = None,
        help_text: str | None = None,
    ) -> "Diagnostic":
        """Create a warning diagnostic."""
        return cls(
            severity=Severity.WARNING,
            message=message,
            file=file,
            line=line,
            column=column,
            code=code,
            end_line=end_line,
            end_column=end_column,
            help_text=help_text,
        )

    @classmethod
    def note(
        cls,
        message: str,
        file: str,
        line: int = 1,
        column: int = 1,
    ) -> "Diagnostic":
        """Create a note diagnostic."""
        return cls(
            severity=Severity.NOTE,
            message=message,
            file=file,
            line=line,
            column=column,
        )

    @property
    def is_error(self) -> bool:
        """Check whether this diagnostic blocks code generation."""
        return self.severity == Severity.ERROR

    @property
    def span_length(self) -> int:
        """Length of the highlighted span, or 1 when it spans lines."""
        if self.end_column is not None and self.end_line == self.line:
            return max(1, self.end_column - self.column)
        return 1

    def to_dict(self) -> dict[str, object]:
        """Convert this diagnostic to a dictionary for JSON serialization.

        Returns:
            Dictionary representation suitable for JSON output.

        """
        location: dict[str, str | int] = {
            "file": self.file,
            "line": self.line,
            "column": self.column,
        }
        if self.end_line is not None:
            location["end_line"] = self.end_line
        if self.end_column is not None:
            location["end_column"] = self.end_column

        result: dict[str, object] = {
            "severity": self.severity.value,
            "message": self.message,
            "location": location,
        }
        if self.code is not None:
            result["code"] = self.code.value
            result["category"] = self.code.category
        if self.help_text is not None:
            result["help"] = self.help_text
        return result
