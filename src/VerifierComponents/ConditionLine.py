import re

from VerifierComponents.LineClassifier import is_variable_name
from VerifierComponents.Scopes import ScopeStack, resolve_variable
from VerifierComponents.Symbols import MethodError, Variable, VariableTable
from VerifierComponents.TypeLattice import is_boolean_literal, is_numeric_literal

_CONDITION_HEADER_RE = re.compile(r"^\s*(?:if|while)\s*\((.*)\)\s*\{\s*$", re.ASCII)
_OPERATOR_RE = re.compile(r"\|\||&&", re.ASCII)

CONDITION_TYPES = frozenset({"boolean", "int", "double"})


def split_condition(condition: str) -> list[str]:
    """Split on ``&&`` / ``||`` keeping empty terms, each term stripped.

    ``"a && "`` gives ``["a", ""]`` so a dangling operator is reported
    instead of silently dropped.
    """
    return [term.strip() for term in _OPERATOR_RE.split(condition)]


class ConditionLine:
    """Validator for an ``if (...) {`` or ``while (...) {`` header."""

    def __init__(self, text: str, line_number: int = 0):
        self.text = text
        self.line_number = line_number

    def compile(
        self, globals_table: VariableTable, scope: ScopeStack | None = None
    ) -> list[tuple[str, Variable]]:
        """Check the condition. Returns the variables it reads, in order."""
        m = _CONDITION_HEADER_RE.match(self.text)
        if not m:
            raise MethodError("invalid if/while syntax.", self.line_number)

        condition = m.group(1).strip()
        if not condition:
            raise MethodError("empty condition.", self.line_number)

        used = []
        for term in split_condition(condition):
            variable = self._validate_term(term, globals_table, scope)
            if variable is not None:
                used.append((term, variable))
        return used

    def _validate_term(
        self, term: str, globals_table: VariableTable, scope: ScopeStack | None
    ) -> Variable | None:
        if not term:
            raise MethodError("empty term in condition.", self.line_number)

        if is_boolean_literal(term) or is_numeric_literal(term):
            return None

        if not is_variable_name(term):
            raise MethodError(f"invalid condition expression: {term}.", self.line_number)

        variable = resolve_variable(term, globals_table, scope)
        if variable is None:
            raise MethodError(f"undefined variable in condition: {term}.", self.line_number)
        if not variable.initialized:
            raise MethodError(
                f"uninitialized variable in condition: {term}.", self.line_number
            )
        if variable.var_type not in CONDITION_TYPES:
            raise MethodError(
                f"invalid type in condition: {term} is {variable.var_type}.",
                self.line_number,
            )
        return variable
