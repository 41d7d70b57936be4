"""Per-function translation state.

Track which local names are visible in each block of the function being
emitted, so a ``let`` can tell same-block shadowing (re-bound in place)
from shadowing an enclosing block (a new ``local``).
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from rust2luau.log import get_logger

logger = get_logger(__name__)

TEMP_PREFIX = "__match_"
"""Prefix of the temporaries that hold hoisted value expressions."""


@dataclass
class TranslationState:
    """Block scopes and function context for one generator run.

    The outermost scope holds the parameters; each emitted block pushes
    its own. Nothing carries over from one function to the next.
    """

    in_function: bool = False
    """Whether emission is currently inside a function body."""

    _scopes: list[set[str]] = field(default_factory=list)
    _temp_counter: int = 0

    def enter_function(self, name: str, params: list[str]) -> None:
        """Reset state for a new function whose parameters are already bound.

        Args:
            name: Function name, for logging.
            params: Parameter names, declared in the outermost scope.

        """
        self._scopes = [set(params)]
        self._temp_counter = 0
        self.in_function = True
        logger.debug("Entering function %s with params %s", name, params)

    def exit_function(self) -> None:
        """Discard the state of the function just emitted."""
        self._scopes = []
        self._temp_counter = 0
        self.in_function = False

    def enter_block(self, names: Iterable[str] = ()) -> None:
        """Open a nested scope, optionally with names bound on entry."""
        self._scopes.append(set(names))

    def exit_block(self) -> None:
        """Close the innermost scope and forget its names."""
        self._scopes.pop()

    def declare(self, name: str) -> None:
        """Record that ``local name`` has been emitted in the current block."""
        if not self._scopes:
            self._scopes.append(set())
        self._scopes[-1].add(name)

    def is_declared(self, name: str) -> bool:
        """Check whether ``name`` is visible from the current block."""
        return any(name in scope for scope in self._scopes)

    def is_declared_here(self, name: str) -> bool:
        """Check whether ``name`` was declared in the current block itself."""
        return bool(self._scopes) and name in self._scopes[-1]

    def fresh_temp(self) -> str:
        """Allocate the next hoisting temporary name (``__match_1``, ...)."""
        self._temp_counter += 1
        return f"{TEMP_PREFIX}{self._temp_counter}"
