"""Translation failures raised by the code generator.

Each failure aborts the run; no partial output is produced. The exception
carries the error code and the position of the offending node so callers
can turn it into a diagnostic.
"""

from dataclasses import dataclass

from rust2luau.ast.nodes import SourcePosition
from rust2luau.errors.codes import ErrorCode, format_error_message


@dataclass
class Degradation:
    """An expression emitted as ``nil`` because it has no lowering."""

    kind: str
    """Short description of the expression shape (e.g. "method call")."""

    position: SourcePosition | None = None

    @property
    def message(self) -> str:
        """Get the warning text for this degradation."""
        return format_error_message(ErrorCode.W0001, kind=self.kind)


class TranslationError(Exception):
    """Base exception for constructs outside the supported subset."""

    code: ErrorCode = ErrorCode.E0107

    def __init__(
        self,
        message: str,
        *,
        position: SourcePosition | None = None,
        help_text: str | None = None,
    ) -> None:
        """Initialize translation error.

        Args:
            message: Error message.
            position: Source position of the offending node.
            help_text: Optional suggestion for working around the error.

        """
        super().__init__(message)
        self.message = message
        self.position = position
        self.help_text = help_text

    def __str__(self) -> str:
        """Format as ``[CODE] message (line N)``."""
        location = f" (line {self.position.line})" if self.position else ""
        return f"[{self.code.value}] {self.message}{location}"


class UnsupportedOperatorError(TranslationError):
    """Binary or compound operator with no Luau counterpart."""

    code = ErrorCode.E0101

    def __init__(self, op: str, *, position: SourcePosition | None = None) -> None:
        """Initialize with the offending operator text."""
        super().__init__(
            format_error_message(self.code, op=op),
            position=position,
        )
        self.op = op


class UnsupportedPatternError(TranslationError):
    """Pattern shape the translator cannot turn into a guard."""

    code = ErrorCode.E0102

    def __init__(self, kind: str, *, position: SourcePosition | None = None) -> None:
        """Initialize with a short description of the pattern shape."""
        super().__init__(
            format_error_message(self.code, kind=kind),
            position=position,
        )
        self.kind = kind


class UnsupportedPatternBoundError(TranslationError):
    """Range bound that is missing or not a literal."""

    code = ErrorCode.E0103

    def __init__(
        self,
        kind: str,
        reason: str,
        *,
        position: SourcePosition | None = None,
    ) -> None:
        """Initialize with the range kind ("range pattern", "loop range")."""
        super().__init__(
            format_error_message(self.code, kind=kind, reason=reason),
            position=position,
            help_text="use integer literals for both bounds",
        )


class UnsupportedGuardClauseError(TranslationError):
    """Match arm with an ``if`` guard."""

    code = ErrorCode.E0104

    def __init__(self, *, position: SourcePosition | None = None) -> None:
        """Initialize guard clause error."""
        super().__init__(
            format_error_message(self.code),
            position=position,
            help_text="move the condition into the arm body",
        )


class UnsupportedLoopVariableError(TranslationError):
    """For-loop binding that is not a plain identifier."""

    code = ErrorCode.E0105

    def __init__(self, kind: str, *, position: SourcePosition | None = None) -> None:
        """Initialize with the pattern kind found in place of the identifier."""
        super().__init__(
            format_error_message(self.code, kind=kind),
            position=position,
        )


class UnsupportedIteratorError(TranslationError):
    """For-loop iterable that is not a range expression."""

    code = ErrorCode.E0106

    def __init__(self, kind: str, *, position: SourcePosition | None = None) -> None:
        """Initialize with the kind of iterable found."""
        super().__init__(
            format_error_message(self.code, kind=kind),
            position=position,
            help_text="iterate over a literal range such as 0..10",
        )


class UnsupportedStatementError(TranslationError):
    """Statement kind with no lowering."""

    code = ErrorCode.E0107

    def __init__(self, kind: str, *, position: SourcePosition | None = None) -> None:
        """Initialize with a short description of the statement."""
        super().__init__(
            format_error_message(self.code, kind=kind),
            position=position,
        )


class UnsupportedExpressionError(TranslationError):
    """Value expression where no statements can be emitted ahead of it."""

    code = ErrorCode.E0108

    def __init__(
        self,
        kind: str,
        context: str,
        *,
        position: SourcePosition | None = None,
    ) -> None:
        """Initialize with the expression kind and the enclosing context."""
        super().__init__(
            format_error_message(self.code, kind=kind, context=context),
            position=position,
            help_text="bind the value to a local before the loop or branch",
        )
