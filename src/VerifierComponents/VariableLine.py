import re

from VerifierComponents.LineClassifier import (
    RESERVED_WORDS,
    VARIABLE_NAME,
    is_variable_name,
    split_outside_quotes,
)
from VerifierComponents.Scopes import ScopeStack, resolve_variable
from VerifierComponents.Symbols import Variable, VariableError, VariableTable
from VerifierComponents.TypeLattice import (
    TYPE_PATTERN,
    is_assignable,
    is_literal,
    literal_matches_type,
)

_DECLARATION_HEAD_RE = re.compile(r"^(final\s+)?(" + TYPE_PATTERN + r")\s+(.+?)\s*$", re.ASCII)
_DECLARATION_ITEM_RE = re.compile(r"^(" + VARIABLE_NAME + r")(?:\s*=\s*(.*))?$", re.ASCII)
_ASSIGNMENT_ITEM_RE = re.compile(r"^(" + VARIABLE_NAME + r")\s*=\s*(.*)$", re.ASCII)


class VariableLine:
    """Validator for one declaration or assignment statement.

    The same validator serves the global scope (pass 1, ``at_file_scope``
    True, no ``ScopeStack``) and method bodies (pass 2, with the body's
    ``ScopeStack``). Declarations are written into the globals or the
    innermost frame; assignments flip the target's ``initialized`` flag.
    """

    def __init__(self, text: str, line_number: int = 0):
        self.text = text
        self.line_number = line_number

    def _error(self, reason: str) -> VariableError:
        return VariableError(reason, self.line_number)

    def compile(
        self,
        globals_table: VariableTable,
        scope: ScopeStack | None = None,
        at_file_scope: bool = False,
    ) -> list[tuple[str, Variable]]:
        """Validate the statement and apply it to the symbol tables.

        Args:
            globals_table: Global variables (name -> Variable).
            scope: The active method-body scope; None at file scope.
            at_file_scope: True when validating a line outside any method.

        Returns:
            list[tuple[str, Variable]]: every variable declared or assigned,
            in source order.

        Raises:
            VariableError: on the first illegal item.
        """
        if not at_file_scope and scope is None:
            raise ValueError("A scope is required to validate a line inside a method body.")

        statement = self.text.strip()
        if not statement.endswith(";"):
            raise self._error("missing ';' at end of statement.")
        statement = statement[:-1].strip()
        if not statement:
            raise self._error("empty statement.")

        head = _DECLARATION_HEAD_RE.match(statement)
        if head:
            return self._compile_declaration(
                head.group(1) is not None,
                head.group(2),
                head.group(3),
                globals_table,
                scope,
                at_file_scope,
            )
        return self._compile_assignment(statement, globals_table, scope, at_file_scope)

    def _compile_declaration(
        self,
        is_final: bool,
        var_type: str,
        items: str,
        globals_table: VariableTable,
        scope: ScopeStack | None,
        at_file_scope: bool,
    ) -> list[tuple[str, Variable]]:
        declared = []
        for part in split_outside_quotes(items):
            item = _DECLARATION_ITEM_RE.match(part)
            if not item:
                raise self._error(f"invalid declaration: '{part}'.")
            name, value = item.group(1), item.group(2)

            if name in RESERVED_WORDS:
                raise self._error(f"reserved word cannot be a variable name: {name}.")

            if at_file_scope:
                if name in globals_table:
                    raise self._error(f"duplicate global variable: {name}.")
            elif scope.is_declared_in_current_frame(name):
                raise self._error(f"duplicate variable in scope: {name}.")

            if is_final and value is None:
                raise self._error(f"final variable must be initialized: {name}.")

            if value is not None:
                self._validate_value(var_type, value, globals_table, scope, at_file_scope)

            variable = Variable(var_type, is_final=is_final, initialized=value is not None)
            if at_file_scope:
                globals_table[name] = variable
            else:
                scope.declare(name, variable)
            declared.append((name, variable))
        return declared

    def _compile_assignment(
        self,
        statement: str,
        globals_table: VariableTable,
        scope: ScopeStack | None,
        at_file_scope: bool,
    ) -> list[tuple[str, Variable]]:
        assigned = []
        for part in split_outside_quotes(statement):
            item = _ASSIGNMENT_ITEM_RE.match(part)
            if not item:
                raise self._error(f"bad assignment syntax: '{part}'.")
            name, value = item.group(1), item.group(2)

            if at_file_scope:
                raise self._error(f"assignment outside a method body: {name}.")

            variable = resolve_variable(name, globals_table, scope)
            if variable is None:
                raise self._error(f"assign to undeclared variable: {name}.")
            if variable.is_final:
                raise self._error(f"cannot reassign final variable: {name}.")

            self._validate_value(variable.var_type, value, globals_table, scope, at_file_scope)
            variable.initialized = True
            assigned.append((name, variable))
        return assigned

    def _validate_value(
        self,
        target_type: str,
        value: str,
        globals_table: VariableTable,
        scope: ScopeStack | None,
        at_file_scope: bool,
    ) -> None:
        if not value:
            raise self._error("missing value after '='.")

        if is_literal(value):
            if not literal_matches_type(value, target_type):
                raise self._error(f"incorrect {target_type} value: {value}.")
            return

        if not is_variable_name(value):
            raise self._error(f"invalid value: {value}.")

        source = resolve_variable(value, globals_table, None if at_file_scope else scope)
        if source is None:
            raise self._error(f"reference to undeclared variable: {value}.")
        if not source.initialized:
            raise self._error(f"reference to uninitialized variable: {value}.")
        if not is_assignable(target_type, source.var_type):
            raise self._error(
                f"type mismatch in assignment: cannot assign {source.var_type} to {target_type}."
            )
