"""Error code definitions for rust2luau.

Provide stable codes for every condition the translator reports, so that
diagnostics can be matched by tools without parsing message text.
"""

from enum import Enum

from rust2luau.log import get_logger

logger = get_logger(__name__)

_SYNTAX_MAX = 99
"""Maximum error code number for syntax errors."""


class ErrorCode(str, Enum):
    """Translator error codes.

    - E00xx: syntax errors reported by the parser
    - E01xx: translation errors (valid Rust outside the supported subset)
    - W0xxx: warnings; translation continues
    """

    # Syntax errors (E00xx)
    E0001 = "E0001"
    """Invalid token or unexpected end of input."""

    # Translation errors (E01xx)
    E0101 = "E0101"
    """Operator with no Luau counterpart."""

    E0102 = "E0102"
    """Pattern shape not covered."""

    E0103 = "E0103"
    """Missing or non-literal range bound."""

    E0104 = "E0104"
    """Match arm with an if guard."""

    E0105 = "E0105"
    """For-loop binding is not a plain identifier."""

    E0106 = "E0106"
    """For-loop iterable is not a range."""

    E0107 = "E0107"
    """Statement kind not covered."""

    E0108 = "E0108"
    """Value expression in a position where it cannot be hoisted."""

    # Warning codes (W0xxx)
    W0001 = "W0001"
    """Expression with no lowering, emitted as nil."""

    @property
    def category(self) -> str:
        """Get the error category for this code.

        Returns:
            Human-readable category name.

        """
        if self.value.startswith("W"):
            return "degradation"
        if int(self.value[1:]) <= _SYNTAX_MAX:
            return "syntax"
        return "translation"


# Error message templates for each code
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.E0001: "invalid token or unexpected end of input",
    ErrorCode.E0101: "unsupported operator '{op}'",
    ErrorCode.E0102: "unsupported {kind} pattern",
    ErrorCode.E0103: "unsupported {kind} bound: {reason}",
    ErrorCode.E0104: "match guards are not supported",
    ErrorCode.E0105: "unsupported for-loop variable: {kind} pattern",
    ErrorCode.E0106: "unsupported for-loop iterable: {kind}",
    ErrorCode.E0107: "unsupported statement: {kind}",
    ErrorCode.E0108: "{kind} expression cannot be used in {context}",
    ErrorCode.W0001: "{kind} has no Luau lowering and was emitted as nil",
}


def format_error_message(code: ErrorCode, **kwargs: str) -> str:
    """Format an error message with the given parameters.

    Args:
        code: The error code.
        **kwargs: Parameters to substitute in the message template.

    Returns:
        Formatted error message string.

    """
    template = ERROR_MESSAGES.get(code, "unknown error")
    try:
        return template.format(**kwargs)
    except KeyError as e:
        logger.warning("Missing parameter for error message: %s", e)
        return template
