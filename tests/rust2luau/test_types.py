"""Tests for mapping Rust types to Luau annotations."""

import pytest

from rust2luau.ast.nodes import TypeRef
from rust2luau.codegen.types import LuauType, map_type, map_type_name


class TestMapTypeName:
    """Test primitive type name mapping."""

    @pytest.mark.parametrize(
        "name",
        [
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
        ],
    )
    def test_numeric_types_map_to_number(self, name: str) -> None:
        assert map_type_name(name) == LuauType.NUMBER

    def test_bool_maps_to_boolean(self) -> None:
        assert map_type_name("bool") == LuauType.BOOLEAN

    @pytest.mark.parametrize("name", ["String", "str"])
    def test_string_types_map_to_string(self, name: str) -> None:
        assert map_type_name(name) == LuauType.STRING

    @pytest.mark.parametrize("name", ["char", "MyStruct", "Option", "()"])
    def test_unknown_types_map_to_any(self, name: str) -> None:
        """Unknown names never fail."""
        assert map_type_name(name) == LuauType.ANY


class TestMapType:
    """Test mapping of parsed type references."""

    def test_plain_type(self) -> None:
        assert map_type(TypeRef(name="i32")) == "number"

    def test_reference_maps_to_referent(self) -> None:
        assert map_type(TypeRef(name="str", is_reference=True)) == "string"

    def test_generic_type_is_any(self) -> None:
        vec = TypeRef(name="Vec", args=[TypeRef(name="i32")])
        assert map_type(vec) == "any"

    def test_tuple_type_is_any(self) -> None:
        pair = TypeRef(name="tuple", args=[TypeRef(name="i32"), TypeRef(name="i32")])
        assert map_type(pair) == "any"


class TestParsedTypes:
    """Test mapping of types as they come out of the parser."""

    @pytest.mark.parametrize(
        ("rust_type", "expected"),
        [
            ("i32", "number"),
            ("&str", "string"),
            ("&mut i64", "number"),
            ("std::string::String", "string"),
            ("Vec<i32>", "any"),
            ("Option<Vec<u8>>", "any"),
            ("(i32, bool)", "any"),
            ("[u8; 4]", "any"),
            ("char", "any"),
        ],
    )
    def test_parameter_annotation(self, parse, rust_type: str, expected: str) -> None:
        ast = parse(f"fn f(a: {rust_type}) {{}}")
        assert map_type(ast.items[0].params[0].type_ref) == expected
