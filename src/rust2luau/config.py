"""Pydantic model for translation settings."""

from pydantic import BaseModel, Field

DEFAULT_INDENT_WIDTH = 4
"""Default number of spaces per indentation level."""


class TranspilerConfig(BaseModel):
    """Settings that shape the generated Luau text."""

    indent_width: int = Field(default=DEFAULT_INDENT_WIDTH, ge=1)
    use_tabs: bool = False
    source_comments: bool = False

    @property
    def indent_str(self) -> str:
        """Get the string emitted once per indentation level."""
        if self.use_tabs:
            return "\t"
        return " " * self.indent_width
