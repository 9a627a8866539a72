import re
from collections.abc import Generator, Sequence

from VerifierComponents.ConditionLine import ConditionLine
from VerifierComponents.LineClassifier import (
    VARIABLE_NAME,
    AssignmentLine,
    BlankLine,
    BlockCloseLine,
    ClassifiedLine,
    CommentLine,
    ConditionHeaderLine,
    DeclarationLine,
    MethodCallLine,
    ReturnLine,
    UnrecognizedLine,
    is_method_name,
    is_variable_name,
    split_outside_quotes,
)
from VerifierComponents.ProgressReport import SecondPassReport
from VerifierComponents.Scopes import ScopeStack, resolve_variable
from VerifierComponents.Symbols import (
    LineSyntaxError,
    MethodError,
    MethodSignature,
    MethodTable,
    Parameter,
    Variable,
    VariableTable,
)
from VerifierComponents.TypeLattice import (
    TYPE_PATTERN,
    is_assignable,
    is_literal,
    literal_matches_type,
)
from VerifierComponents.VariableLine import VariableLine

_METHOD_HEADER_RE = re.compile(r"^\s*void\s+(\w+)\s*\((.*)\)\s*\{\s*$", re.ASCII)
_PARAMETER_RE = re.compile(r"^(final\s+)?(" + TYPE_PATTERN + r")\s+(" + VARIABLE_NAME + r")$", re.ASCII)
_METHOD_CALL_RE = re.compile(r"^\s*(\w+)\s*\((.*)\)\s*;\s*$", re.ASCII)


def _split_list(text: str) -> list[str]:
    """Comma separated list; an all-blank list is empty, blank items are kept."""
    if not text.strip():
        return []
    return split_outside_quotes(text)


class MethodLine:
    """Validator for a method declaration: its header, then its body.

    The header is read in pass 1 (``parse_signature``) without looking at the
    body. The body is validated in pass 2 (``compile_body``), when the
    signatures of every method in the file are known.
    """

    def __init__(self, text: str, line_number: int = 0):
        self.text = text
        self.line_number = line_number

    def parse_signature(self) -> MethodSignature:
        """Extract the name and parameter list from the header line.

        Raises:
            MethodError: malformed header, bad method name, malformed or
                duplicated parameter.
        """
        m = _METHOD_HEADER_RE.match(self.text)
        if not m:
            raise MethodError("invalid method declaration.", self.line_number)

        name = m.group(1)
        if not is_method_name(name):
            raise MethodError(f"invalid method name: {name}.", self.line_number)

        parameters: list[Parameter] = []
        seen: set[str] = set()
        for part in _split_list(m.group(2)):
            param = _PARAMETER_RE.match(part)
            if not param or not is_variable_name(param.group(3)):
                raise MethodError(f"invalid parameter: '{part}'.", self.line_number)
            param_name = param.group(3)
            if param_name in seen:
                raise MethodError(f"duplicate parameter name: {param_name}.", self.line_number)
            seen.add(param_name)
            parameters.append(
                Parameter(param.group(2), param_name, is_final=param.group(1) is not None)
            )

        return MethodSignature(name, tuple(parameters), self.line_number)

    def compile_body(
        self,
        lines: Sequence[ClassifiedLine],
        start: int,
        end: int,
        globals_table: VariableTable,
        methods: MethodTable,
        signature: MethodSignature | None = None,
    ) -> Generator[SecondPassReport, None, None]:
        """Validate the body held in ``lines[start:end]``, one report per line.

        The walk stops at the close that brings the scope depth back to zero.
        Any line left unconsumed after that close is not looked at.

        Args:
            lines: All classified lines of the file.
            start: Index of the first body line (the line after the header).
            end: Index one past the last line that may belong to the body.
            globals_table: Global variables; their flags may change here and
                are reset by the caller afterwards.
            methods: Every method signature in the file.
            signature: This method's signature; parsed from the header if None.

        Yields:
            SecondPassReport: one per line looked at.

        Raises:
            VariableError | MethodError: on the first illegal line.
        """
        if signature is None:
            signature = self.parse_signature()

        scope = ScopeStack.for_method(signature, globals_table)
        has_return = False

        for line in lines[start:end]:
            report = SecondPassReport()
            report.current_line = line.line_number
            report.current_method = signature.name

            match line:
                case CommentLine() | BlankLine():
                    report.action_bar_message = f"Skipped {line.line_type.value} line."

                case ConditionHeaderLine():
                    report.looked_at_variables = ConditionLine(
                        line.text, line.line_number
                    ).compile(globals_table, scope)
                    scope.push_frame()
                    report.action_bar_message = (
                        f"Valid {line.keyword} condition '{line.condition.strip()}'. "
                        f"Opened block at depth {scope.depth}."
                    )

                case BlockCloseLine():
                    scope.pop_frame()
                    if scope.depth == 0:
                        if not has_return:
                            raise MethodError(
                                f"method must end with return statement: {signature.name}.",
                                line.line_number,
                            )
                        report.action_bar_message = f"Method '{signature.name}' closed."
                        yield report
                        return
                    report.action_bar_message = f"Closed block, back to depth {scope.depth}."

                case ReturnLine():
                    has_return = True
                    report.action_bar_message = "Found return statement."

                case DeclarationLine() | AssignmentLine():
                    touched = VariableLine(line.text, line.line_number).compile(
                        globals_table, scope, at_file_scope=False
                    )
                    report.looked_at_variables = touched
                    verb = "Declared" if isinstance(line, DeclarationLine) else "Assigned"
                    names = ", ".join(f"'{n}' ({v.var_type})" for n, v in touched)
                    report.action_bar_message = f"{verb} {names} at depth {scope.depth}."

                case MethodCallLine():
                    callee, used = validate_method_call(
                        line.text, line.line_number, globals_table, scope, methods
                    )
                    report.looked_at_variables = used
                    report.action_bar_message = f"Call matches {callee}."

                case UnrecognizedLine():
                    raise LineSyntaxError(
                        f"invalid line syntax: {line.text.strip()}", line.line_number
                    )

                case _:
                    raise MethodError(
                        f"unexpected line in method: {line.text.strip()}", line.line_number
                    )

            report.scope_depth = scope.depth
            yield report

        raise MethodError(f"method not closed properly: {signature.name}.", self.line_number)


def validate_method_call(
    text: str,
    line_number: int,
    globals_table: VariableTable,
    scope: ScopeStack | None,
    methods: MethodTable,
) -> tuple[MethodSignature, list[tuple[str, Variable]]]:
    """Check a call statement against the callee's signature.

    Literal arguments must have the parameter type's shape. Any other
    argument must name an initialized variable whose type is assignable to
    the parameter type.

    Returns:
        The callee's signature and the variables passed as arguments.
    """
    m = _METHOD_CALL_RE.match(text)
    if not m:
        raise MethodError("invalid method call syntax.", line_number)

    name = m.group(1)
    signature = methods.get(name)
    if signature is None:
        raise MethodError(f"call to undefined method: {name}.", line_number)

    arguments = _split_list(m.group(2))
    if len(arguments) != signature.arity:
        raise MethodError(
            f"wrong number of arguments for method {name}: "
            f"expected {signature.arity}, got {len(arguments)}.",
            line_number,
        )

    used = []
    for arg, param in zip(arguments, signature.parameters):
        if not arg:
            raise MethodError(f"empty argument in call to {name}.", line_number)

        if is_literal(arg):
            if not literal_matches_type(arg, param.var_type):
                raise MethodError(
                    f"invalid argument for parameter {param}: {arg}.", line_number
                )
            continue

        if not is_variable_name(arg):
            raise MethodError(f"invalid argument: {arg}.", line_number)

        variable = resolve_variable(arg, globals_table, scope)
        if variable is None:
            raise MethodError(f"undefined variable in method call: {arg}.", line_number)
        if not variable.initialized:
            raise MethodError(f"uninitialized variable in method call: {arg}.", line_number)
        if not is_assignable(param.var_type, variable.var_type):
            raise MethodError(
                f"type mismatch in method call: {arg} is {variable.var_type}, "
                f"parameter {param.name} is {param.var_type}.",
                line_number,
            )
        used.append((arg, variable))

    return signature, used
