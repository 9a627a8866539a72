"""Structural classification of single S-Java source lines.

Every line falls into exactly one category. The category is decided from the
line's shape alone (leading keyword, braces, parentheses and the trailing
semicolon); names and types are never resolved here. Each category is its own
frozen dataclass carrying the pieces of the line its validator needs, so
dispatch sites can ``match`` on the class.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from VerifierComponents.CleanLine import SourceLine
from VerifierComponents.TypeLattice import TYPE_PATTERN


VARIABLE_NAME = r"(?:[A-Za-z]\w*|_[A-Za-z0-9]\w*)"
METHOD_NAME = r"[A-Za-z]\w*"

RESERVED_WORDS = frozenset(
    {
        "int",
        "double",
        "boolean",
        "char",
        "String",
        "void",
        "final",
        "if",
        "while",
        "true",
        "false",
        "return",
    }
)

_VARIABLE_NAME_RE = re.compile(VARIABLE_NAME, re.ASCII)
_METHOD_NAME_RE = re.compile(METHOD_NAME, re.ASCII)

_METHOD_HEADER_RE = re.compile(r"^\s*void\s+(" + METHOD_NAME + r")\s*\((.*)\)\s*\{\s*$", re.ASCII)
_RETURN_RE = re.compile(r"^\s*return\s*;\s*$", re.ASCII)
_BLOCK_CLOSE_RE = re.compile(r"^\s*\}\s*$", re.ASCII)
_CONDITION_HEADER_RE = re.compile(r"^\s*(if|while)\s*\((.*)\)\s*\{\s*$", re.ASCII)
_DECLARATION_RE = re.compile(r"^\s*(final\s+)?(" + TYPE_PATTERN + r")\s+(.+);\s*$", re.ASCII)
_ASSIGNMENT_RE = re.compile(r"^\s*(" + VARIABLE_NAME + r"\s*=.+);\s*$", re.ASCII)
_METHOD_CALL_RE = re.compile(r"^\s*(" + METHOD_NAME + r")\s*\((.*)\)\s*;\s*$", re.ASCII)


def is_variable_name(text: str) -> bool:
    return _VARIABLE_NAME_RE.fullmatch(text) is not None and text not in RESERVED_WORDS


def is_method_name(text: str) -> bool:
    return _METHOD_NAME_RE.fullmatch(text) is not None and text not in RESERVED_WORDS


class LineType(Enum):
    COMMENT = "comment"
    BLANK = "blank"
    METHOD_HEADER = "method header"
    RETURN = "return"
    BLOCK_CLOSE = "block close"
    CONDITION_HEADER = "if/while header"
    VARIABLE_DECLARATION = "variable declaration"
    VARIABLE_ASSIGNMENT = "variable assignment"
    METHOD_CALL = "method call"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class ClassifiedLine:
    line_number: int
    text: str

    line_type: ClassVar[LineType]

    @property
    def is_skippable(self) -> bool:
        """Comments and blank lines carry no statement."""
        return self.line_type in (LineType.COMMENT, LineType.BLANK)


@dataclass(frozen=True)
class CommentLine(ClassifiedLine):
    line_type: ClassVar[LineType] = LineType.COMMENT


@dataclass(frozen=True)
class BlankLine(ClassifiedLine):
    line_type: ClassVar[LineType] = LineType.BLANK


@dataclass(frozen=True)
class MethodHeaderLine(ClassifiedLine):
    name: str
    parameters: str

    line_type: ClassVar[LineType] = LineType.METHOD_HEADER


@dataclass(frozen=True)
class ReturnLine(ClassifiedLine):
    line_type: ClassVar[LineType] = LineType.RETURN


@dataclass(frozen=True)
class BlockCloseLine(ClassifiedLine):
    line_type: ClassVar[LineType] = LineType.BLOCK_CLOSE


@dataclass(frozen=True)
class ConditionHeaderLine(ClassifiedLine):
    keyword: str
    condition: str

    line_type: ClassVar[LineType] = LineType.CONDITION_HEADER


@dataclass(frozen=True)
class DeclarationLine(ClassifiedLine):
    is_final: bool
    var_type: str
    items: str

    line_type: ClassVar[LineType] = LineType.VARIABLE_DECLARATION


@dataclass(frozen=True)
class AssignmentLine(ClassifiedLine):
    items: str

    line_type: ClassVar[LineType] = LineType.VARIABLE_ASSIGNMENT


@dataclass(frozen=True)
class MethodCallLine(ClassifiedLine):
    name: str
    arguments: str

    line_type: ClassVar[LineType] = LineType.METHOD_CALL


@dataclass(frozen=True)
class UnrecognizedLine(ClassifiedLine):
    line_type: ClassVar[LineType] = LineType.UNRECOGNIZED


def classify_line(text: str, line_number: int = 0) -> ClassifiedLine:
    """Classify one raw source line (without its line terminator).

    Patterns are tried in a fixed order so no line can belong to two
    categories: comment, blank, method header, return, block close,
    if/while header, declaration, assignment, method call.

    Args:
        text: The line as read from the source.
        line_number: 1-based line number, carried into the result.

    Returns:
        ClassifiedLine: the matching category, or ``UnrecognizedLine``.
    """
    if text.strip().startswith("//"):
        return CommentLine(line_number, text)

    if not text.strip():
        return BlankLine(line_number, text)

    m = _METHOD_HEADER_RE.match(text)
    if m:
        return MethodHeaderLine(line_number, text, name=m.group(1), parameters=m.group(2))

    if _RETURN_RE.match(text):
        return ReturnLine(line_number, text)

    if _BLOCK_CLOSE_RE.match(text):
        return BlockCloseLine(line_number, text)

    m = _CONDITION_HEADER_RE.match(text)
    if m:
        return ConditionHeaderLine(
            line_number, text, keyword=m.group(1), condition=m.group(2)
        )

    m = _DECLARATION_RE.match(text)
    if m:
        return DeclarationLine(
            line_number,
            text,
            is_final=m.group(1) is not None,
            var_type=m.group(2),
            items=m.group(3),
        )

    m = _ASSIGNMENT_RE.match(text)
    if m:
        return AssignmentLine(line_number, text, items=m.group(1))

    m = _METHOD_CALL_RE.match(text)
    if m:
        return MethodCallLine(line_number, text, name=m.group(1), arguments=m.group(2))

    return UnrecognizedLine(line_number, text)


def classify_source_line(line: SourceLine) -> ClassifiedLine:
    return classify_line(line.raw_line, line.line_number)


def classify_lines(lines: list[str]) -> tuple[ClassifiedLine, ...]:
    """Classify a sequence of raw lines, numbering them from 1."""
    return tuple(classify_line(text, i + 1) for i, text in enumerate(lines))


def split_outside_quotes(text: str, separator: str = ",") -> list[str]:
    """Split on ``separator`` where it is not inside a '...' or "..." literal.

    Empty pieces are kept (``"a,"`` gives ``["a", ""]``) so callers can
    report a missing item instead of skipping it. Pieces are stripped.
    """
    parts: list[str] = []
    current: list[str] = []
    quote: str | None = None
    for ch in text:
        if quote is not None:
            current.append(ch)
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
            current.append(ch)
        elif ch == separator:
            parts.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
    parts.append("".join(current).strip())
    return parts
