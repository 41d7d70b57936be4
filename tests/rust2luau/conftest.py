"""Shared fixtures for rust2luau tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from lark import Lark

from rust2luau.args import Args
from rust2luau.ast.nodes import SourceFile
from rust2luau.ast.transformer import transform
from rust2luau.compiler import transpile
from rust2luau.grammar.parser import ParserFactory


@pytest.fixture
def parser() -> Lark:
    """Shared LALR parser for the Rust subset."""
    return ParserFactory.create()


@pytest.fixture
def parse(parser: Lark) -> Callable[[str], SourceFile]:
    """Parse Rust source straight to an AST."""

    def _parse(source: str) -> SourceFile:
        return transform(parser.parse(source))

    return _parse


@pytest.fixture
def luau() -> Callable[[str], str]:
    """Translate Rust source to Luau with default settings."""

    def _luau(source: str) -> str:
        return transpile(source, "test.rs")

    return _luau


@pytest.fixture
def make_args(tmp_path: Path) -> Callable[..., Args]:
    """Build command line args with defaults for every option."""

    def _make_args(**overrides: object) -> Args:
        values: dict[str, object] = {
            "files": [],
            "out": None,
            "check": False,
            "json": False,
            "indent": None,
            "tabs": False,
            "source_comments": False,
            "path": tmp_path,
            "verbose": False,
            "version": False,
        }
        values.update(overrides)
        return Args(**values)

    return _make_args
