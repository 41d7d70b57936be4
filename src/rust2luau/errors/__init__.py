"""Error handling and diagnostics for rust2luau.

Provide error codes, diagnostic messages, and rustc-style formatting for
reporting syntax and translation errors with source context.
"""

from rust2luau.errors.codes import ErrorCode
from rust2luau.errors.diagnostics import Diagnostic, Severity
from rust2luau.errors.reporter import DiagnosticReporter

__all__ = [
    "Diagnostic",
    "DiagnosticReporter",
    "ErrorCode",
    "Severity",
]
