"""Grammar package for rust2luau.

Provide the Lark grammar and parser factory for parsing Rust source files.
"""

from rust2luau.grammar.parser import ParserFactory

__all__ = ["ParserFactory"]
