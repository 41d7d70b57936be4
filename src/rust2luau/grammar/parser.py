"""Parser factory for the Rust subset.

Create configured Lark LALR parser instances for Rust source files.
"""

from pathlib import Path

from lark import Lark

from rust2luau.log import get_logger

logger = get_logger(__name__)

GRAMMAR_PATH = Path(__file__).parent / "rust.lark"
"""Path to the Rust subset grammar file."""


class ParserFactory:
    """Factory for creating Rust subset parser instances.

    LALR table construction is done once per process; the resulting parser
    is cached and shared. Lark parsers hold no per-parse state, so sharing
    a single instance is safe.
    """

    _grammar_cache: str | None = None
    """Cached grammar content to avoid repeated file reads."""

    _parser_cache: Lark | None = None
    """Cached production parser instance (non-debug mode)."""

    @classmethod
    def _load_grammar(cls) -> str:
        """Load the grammar file contents.

        Returns:
            The grammar string.

        """
        if cls._grammar_cache is None:
            logger.debug("Loading grammar from %s", GRAMMAR_PATH)
            cls._grammar_cache = GRAMMAR_PATH.read_text()
        return cls._grammar_cache

    @classmethod
    def create(cls, *, debug: bool = False) -> Lark:
        """Create a Rust subset parser.

        Args:
            debug: If True, returns a fresh parser built with lark's debug
                   flag so grammar conflicts are logged.

        Returns:
            Configured Lark parser instance.

        """
        if not debug and cls._parser_cache is not None:
            return cls._parser_cache

        logger.debug("Creating lalr parser (debug=%s)", debug)
        parser = Lark(
            cls._load_grammar(),
            parser="lalr",
            propagate_positions=True,
            maybe_placeholders=False,
            debug=debug,
        )

        if not debug:
            cls._parser_cache = parser

        return parser

    @classmethod
    def clear_cache(cls) -> None:
        """Clear all cached parser state.

        Use for testing or when the grammar may have changed.
        """
        cls._grammar_cache = None
        cls._parser_cache = None
