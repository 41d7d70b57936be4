"""Tests for the code emitter.

Test line collection, indentation tracking and source comments.
"""

from rust2luau.codegen.emitter import CodeEmitter


class TestCodeEmitterBasics:
    """Test basic CodeEmitter functionality."""

    def test_create_emitter(self) -> None:
        """A new emitter renders nothing."""
        emitter = CodeEmitter("lib.rs")
        assert emitter.get_code() == ""
        assert emitter.get_line_count() == 0

    def test_emit_single_line(self) -> None:
        """Emit a single line of code."""
        emitter = CodeEmitter("lib.rs")
        emitter.emit("local x = 42")
        assert emitter.get_code() == "local x = 42\n"

    def test_emit_multiple_lines(self) -> None:
        """Lines are rendered in emission order."""
        emitter = CodeEmitter("lib.rs")
        emitter.emit("local x = 1")
        emitter.emit("local y = 2")
        emitter.emit("local z = x + y")
        assert emitter.get_code() == "local x = 1\nlocal y = 2\nlocal z = x + y\n"

    def test_emit_blank_line(self) -> None:
        """Blank lines carry no indentation."""
        emitter = CodeEmitter("lib.rs")
        emitter.indent()
        emitter.emit_blank()
        assert emitter.get_code() == "\n"

    def test_emit_comment(self) -> None:
        emitter = CodeEmitter("lib.rs")
        emitter.emit_comment("generated")
        assert emitter.get_code() == "-- generated\n"


class TestCodeEmitterIndentation:
    """Test CodeEmitter indentation handling."""

    def test_indent_increases_level(self) -> None:
        """Indenting prefixes the following lines with four spaces."""
        emitter = CodeEmitter("lib.rs")
        emitter.emit("function f()")
        emitter.indent()
        emitter.emit("return 1")
        emitter.dedent()
        emitter.emit("end")
        assert emitter.get_code() == "function f()\n    return 1\nend\n"

    def test_nested_indentation(self) -> None:
        emitter = CodeEmitter("lib.rs")
        emitter.indent()
        emitter.indent()
        emitter.emit("break")
        assert emitter.get_code() == "        break\n"
        assert emitter.get_indent_level() == 2

    def test_dedent_saturates_at_zero(self) -> None:
        """Dedenting at depth zero leaves the depth at zero."""
        emitter = CodeEmitter("lib.rs")
        emitter.dedent()
        emitter.dedent()
        assert emitter.get_indent_level() == 0
        emitter.emit("x = 1")
        assert emitter.get_code() == "x = 1\n"

    def test_custom_indent_string(self) -> None:
        emitter = CodeEmitter("lib.rs", indent_str="\t")
        emitter.indent()
        emitter.emit("x = 1")
        assert emitter.prefix == "\t"
        assert emitter.get_code() == "\tx = 1\n"


class TestSourceComments:
    """Test source location comments."""

    def test_comment_precedes_located_line(self) -> None:
        emitter = CodeEmitter("lib.rs", source_comments=True)
        emitter.indent()
        emitter.emit("local x = 1", source_line=3)
        assert emitter.get_code() == "    -- lib.rs:3\n    local x = 1\n"

    def test_unlocated_lines_have_no_comment(self) -> None:
        emitter = CodeEmitter("lib.rs", source_comments=True)
        emitter.emit("end")
        assert emitter.get_code() == "end\n"

    def test_comments_disabled_by_default(self) -> None:
        emitter = CodeEmitter("lib.rs")
        emitter.emit("local x = 1", source_line=3)
        assert emitter.get_code() == "local x = 1\n"
