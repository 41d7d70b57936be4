"""Mapping from Rust type references to Luau type annotations."""

from enum import Enum

from rust2luau.ast.nodes import TypeRef


class LuauType(str, Enum):
    """Luau annotations the translator emits."""

    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING = "string"
    ANY = "any"


NUMERIC_TYPES = frozenset(
    {
        "i8",
        "i16",
        "i32",
        "i64",
        "i128",
        "isize",
        "u8",
        "u16",
        "u32",
        "u64",
        "u128",
        "usize",
        "f32",
        "f64",
    },
)
"""Rust primitive types represented by Luau numbers."""

STRING_TYPES = frozenset({"String", "str"})
"""Rust types represented by Luau strings."""


def map_type_name(name: str) -> LuauType:
    """Map the last segment of a Rust type path to a Luau annotation.

    Unknown names never fail; they map to ``any``.
    """
    if name in NUMERIC_TYPES:
        return LuauType.NUMBER
    if name == "bool":
        return LuauType.BOOLEAN
    if name in STRING_TYPES:
        return LuauType.STRING
    return LuauType.ANY


def map_type(type_ref: TypeRef) -> str:
    """Get the Luau annotation text for a Rust type reference.

    References map to their referent. Generic types such as ``Vec<i32>`` are
    ``any`` whatever their arguments.

    Args:
        type_ref: Parsed type reference.

    Returns:
        One of ``number``, ``boolean``, ``string`` or ``any``.

    """
    if type_ref.args:
        return LuauType.ANY.value
    return map_type_name(type_ref.name).value
