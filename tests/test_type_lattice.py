# tests/test_type_lattice.py
"""
Literal shapes per declared type, and the explicit assignment relation.
"""

import pytest

from VerifierComponents.TypeLattice import (
    VARIABLE_TYPES,
    is_assignable,
    is_literal,
    is_type_name,
    literal_matches_type,
)


class TestLiteralShapes:

    @pytest.mark.parametrize(
        "var_type, good, bad",
        [
            ("int", ["0", "42", "-3", "+7"], ["5.0", ".5", "true", "'a'", "1e3"]),
            ("double", ["5", "-2.5", "1.", ".5"], ["true", "'1'", "\"1.0\"", "."]),
            ("boolean", ["true", "false", "3", "-1.5"], ["'t'", "\"true\"", "True"]),
            ("char", ["'a'", "' '", "'1'"], ["'ab'", "''", "\"a\"", "a"]),
            ("String", ["\"\"", "\"hi there\"", "\"a, b\""], ["'a'", "hi", "3"]),
        ],
    )
    def test_shapes(self, var_type, good, bad):
        for text in good:
            assert literal_matches_type(text, var_type), text
        for text in bad:
            assert not literal_matches_type(text, var_type), text

    def test_unknown_type_matches_nothing(self):
        assert not literal_matches_type("1", "float")

    def test_is_literal(self):
        assert is_literal("true")
        assert is_literal("-4")
        assert is_literal("'c'")
        assert not is_literal("x")
        assert not is_literal("a+1")

    @pytest.mark.parametrize("text", ["\u0661\u0662", "-\u0663", "\uff15", "1.\u0665"])
    def test_only_ascii_digits(self, text):
        assert not literal_matches_type(text, "int")
        assert not literal_matches_type(text, "double")
        assert not is_literal(text)


class TestAssignability:

    @pytest.mark.parametrize("var_type", VARIABLE_TYPES)
    def test_identity(self, var_type):
        assert is_assignable(var_type, var_type)

    @pytest.mark.parametrize(
        "target, source",
        [("double", "int"), ("boolean", "int"), ("boolean", "double")],
    )
    def test_widenings(self, target, source):
        assert is_assignable(target, source)

    @pytest.mark.parametrize(
        "target, source",
        [
            ("int", "double"),
            ("int", "boolean"),
            ("double", "boolean"),
            ("String", "char"),
            ("char", "String"),
            ("char", "int"),
            ("String", "int"),
        ],
    )
    def test_rejected(self, target, source):
        assert not is_assignable(target, source)


def test_type_names_are_case_sensitive():
    assert is_type_name("String")
    assert not is_type_name("string")
    assert not is_type_name("void")
