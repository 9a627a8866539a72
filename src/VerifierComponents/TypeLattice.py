"""Static type rules for the S-Java dialect.

Two stateless questions are answered here: does a literal have the right
shape for a declared type, and may a value of one declared type be stored in
a variable of another. Nothing in this module knows about scopes or lines.
"""

from __future__ import annotations

import re


VARIABLE_TYPES: tuple[str, ...] = ("int", "double", "boolean", "char", "String")

# Regex alternation used by the line classifier and the statement validators.
TYPE_PATTERN = "(?:" + "|".join(VARIABLE_TYPES) + ")"

INT_LITERAL = r"[+-]?\d+"
DOUBLE_LITERAL = r"[+-]?(?:\d+\.\d*|\d*\.\d+|\d+)"
BOOLEAN_LITERAL = r"(?:true|false)"
CHAR_LITERAL = r"'[^']'"
STRING_LITERAL = r'"[^"]*"'

_INT_RE = re.compile(INT_LITERAL, re.ASCII)
_DOUBLE_RE = re.compile(DOUBLE_LITERAL, re.ASCII)
_BOOLEAN_RE = re.compile(BOOLEAN_LITERAL, re.ASCII)
_CHAR_RE = re.compile(CHAR_LITERAL, re.ASCII)
_STRING_RE = re.compile(STRING_LITERAL, re.ASCII)

# target type -> source types it accepts besides itself
_WIDENINGS: dict[str, frozenset[str]] = {
    "double": frozenset({"int"}),
    "boolean": frozenset({"int", "double"}),
}


def is_type_name(text: str) -> bool:
    return text in VARIABLE_TYPES


def is_int_literal(text: str) -> bool:
    return _INT_RE.fullmatch(text) is not None


def is_numeric_literal(text: str) -> bool:
    """True for int and double shaped literals (``3``, ``-2``, ``1.``, ``.5``)."""
    return _DOUBLE_RE.fullmatch(text) is not None


def is_boolean_literal(text: str) -> bool:
    return _BOOLEAN_RE.fullmatch(text) is not None


def is_char_literal(text: str) -> bool:
    return _CHAR_RE.fullmatch(text) is not None


def is_string_literal(text: str) -> bool:
    return _STRING_RE.fullmatch(text) is not None


def is_literal(text: str) -> bool:
    """True if text has the shape of a literal of any type."""
    return (
        is_numeric_literal(text)
        or is_boolean_literal(text)
        or is_char_literal(text)
        or is_string_literal(text)
    )


def literal_matches_type(text: str, var_type: str) -> bool:
    """Check a literal's shape against a declared type.

    Only the shape is looked at: ``boolean`` accepts any numeric literal
    because numbers are truthy by value, which is never evaluated here.

    Args:
        text: Literal text as written in the source, already stripped.
        var_type: One of ``VARIABLE_TYPES``.

    Returns:
        True if the literal may initialize a variable of ``var_type``.
    """
    match var_type:
        case "int":
            return is_int_literal(text)
        case "double":
            return is_numeric_literal(text)
        case "boolean":
            return is_boolean_literal(text) or is_numeric_literal(text)
        case "char":
            return is_char_literal(text)
        case "String":
            return is_string_literal(text)
        case _:
            return False


def is_assignable(target_type: str, source_type: str) -> bool:
    """Explicit assignment rules: identity plus three one-way widenings.

    ``int -> double``, ``int -> boolean`` and ``double -> boolean`` are the
    only conversions. The relation is neither symmetric nor transitive beyond
    them (``double -> int`` is rejected).
    """
    if target_type == source_type:
        return True
    return source_type in _WIDENINGS.get(target_type, frozenset())
