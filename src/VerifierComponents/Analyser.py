"""File-level verification of an S-Java source: classification and two passes.

Pass 1 walks the file once, registering every method signature (skipping the
bodies) and every global variable. Pass 2 walks it again and validates each
method body, now that calls may refer to methods declared further down.

Every phase is a generator of progress reports so the UI can step through it
one line at a time; ``verify_lines`` simply drains all of them.
"""

from __future__ import annotations

from collections.abc import Callable, Generator, Sequence
from dataclasses import dataclass, field

from VerifierComponents.CleanLine import SourceLine
from VerifierComponents.LineClassifier import (
    AssignmentLine,
    BlankLine,
    BlockCloseLine,
    ClassifiedLine,
    CommentLine,
    ConditionHeaderLine,
    DeclarationLine,
    MethodHeaderLine,
    UnrecognizedLine,
    classify_source_line,
)
from VerifierComponents.MethodLine import MethodLine
from VerifierComponents.ProgressReport import (
    ClassificationReport,
    FirstPassReport,
    ProgressReport,
    SecondPassReport,
)
from VerifierComponents.Symbols import (
    LineSyntaxError,
    MethodError,
    MethodTable,
    VariableTable,
)
from VerifierComponents.VariableLine import VariableLine


@dataclass
class AnalysisResult:
    """What a legal file leaves behind once both passes succeeded."""

    lines: tuple[ClassifiedLine, ...]
    globals: VariableTable = field(default_factory=dict)
    methods: MethodTable = field(default_factory=dict)


def _line_syntax_error(line: ClassifiedLine) -> LineSyntaxError:
    return LineSyntaxError(f"invalid line syntax: {line.text.strip()}", line.line_number)


def find_block_end(lines: Sequence[ClassifiedLine], header_index: int) -> int:
    """Index of the ``}`` closing the block opened at ``header_index``.

    Method and if/while headers open a block, ``}`` closes one.

    Raises:
        LineSyntaxError: an unrecognized line is met before the close.
        MethodError: the file ends before the block is closed.
    """
    depth = 1
    for i in range(header_index + 1, len(lines)):
        match lines[i]:
            case UnrecognizedLine():
                raise _line_syntax_error(lines[i])
            case MethodHeaderLine() | ConditionHeaderLine():
                depth += 1
            case BlockCloseLine():
                depth -= 1
                if depth == 0:
                    return i

    header = lines[header_index]
    name = getattr(header, "name", header.text.strip())
    raise MethodError(f"method not closed properly: {name}.", header.line_number)


### Line classification ###


def get_line_classifier(
    source_lines: Sequence[SourceLine],
) -> Generator[ClassificationReport, None, tuple[ClassifiedLine, ...]]:
    """
    Classifies every source line.

    Args:
        source_lines (Sequence[SourceLine]): The numbered lines of the file.

    Yields:
        ClassificationReport: one report per line.

    Returns:
        tuple[ClassifiedLine, ...]: the classified lines, in source order.
    """
    classified: list[ClassifiedLine] = []
    for source_line in source_lines:
        line = classify_source_line(source_line)
        classified.append(line)

        report = ClassificationReport()
        report.current_line = source_line.line_number
        report.classified_line = line
        report.action_bar_message = f"Line {source_line.line_number} is a {line.line_type.value} line."
        yield report
    return tuple(classified)


### First pass: signatures and globals ###


def get_first_pass_reporter(
    lines: Sequence[ClassifiedLine],
    globals_table: VariableTable,
    methods: MethodTable,
) -> Generator[FirstPassReport, None, None]:
    """Registers method signatures and global variables.

    Method bodies are skipped. Only declarations may appear outside a method;
    any other statement at file scope is rejected.
    """
    i = 0
    while i < len(lines):
        line = lines[i]
        report = FirstPassReport()
        report.current_line = line.line_number

        match line:
            case CommentLine() | BlankLine():
                report.action_bar_message = f"Skipped {line.line_type.value} line."

            case MethodHeaderLine():
                signature = MethodLine(line.text, line.line_number).parse_signature()
                if signature.name in methods:
                    raise MethodError(
                        f"duplicate method name: {signature.name}.", line.line_number
                    )
                methods[signature.name] = signature
                end = find_block_end(lines, i)
                report.new_method = signature
                report.skipped_to_line = lines[end].line_number
                report.action_bar_message = (
                    f"Registered method {signature}; body skipped to line "
                    f"{report.skipped_to_line}."
                )
                i = end

            case DeclarationLine() | AssignmentLine():
                report.new_variables = VariableLine(line.text, line.line_number).compile(
                    globals_table, None, at_file_scope=True
                )
                names = ", ".join(f"'{n}' ({v})" for n, v in report.new_variables)
                report.action_bar_message = f"Declared global {names}."

            case UnrecognizedLine():
                raise _line_syntax_error(line)

            case _:
                raise MethodError(
                    f"invalid statement in global scope: {line.text.strip()}",
                    line.line_number,
                )

        yield report
        i += 1


### Second pass: method bodies ###


def _snapshot_initialization(globals_table: VariableTable) -> dict[str, bool]:
    return {name: var.initialized for name, var in globals_table.items()}


def _restore_initialization(globals_table: VariableTable, snapshot: dict[str, bool]) -> None:
    for name, initialized in snapshot.items():
        globals_table[name].initialized = initialized


def get_second_pass_reporter(
    lines: Sequence[ClassifiedLine],
    globals_table: VariableTable,
    methods: MethodTable,
) -> Generator[SecondPassReport, None, None]:
    """Validates every method body with all signatures known.

    A body may initialize globals, but the next body must not see that:
    the globals' ``initialized`` flags are put back after each method.
    """
    i = 0
    while i < len(lines):
        line = lines[i]
        if isinstance(line, MethodHeaderLine):
            end = find_block_end(lines, i)
            method_line = MethodLine(line.text, line.line_number)
            snapshot = _snapshot_initialization(globals_table)
            try:
                yield from method_line.compile_body(
                    lines, i + 1, end + 1, globals_table, methods, methods.get(line.name)
                )
            finally:
                _restore_initialization(globals_table, snapshot)

            report = SecondPassReport()
            report.current_line = lines[end].line_number
            report.current_method = line.name
            report.globals_restored = True
            report.action_bar_message = (
                f"Method '{line.name}' is valid. Global variables reset."
            )
            yield report
            i = end
        i += 1


### Whole file ###


def verify_lines(
    source_lines: Sequence[str],
    report_callback: Callable[[ProgressReport], None] | None = None,
) -> AnalysisResult:
    """Verify a whole source file given as lines.

    Args:
        source_lines: The file's lines without line terminators.
        report_callback: Called with every progress report, in order.

    Returns:
        AnalysisResult: the classified lines, globals and signatures.

    Raises:
        VerificationError: the first failure found, unchanged.
    """
    classifier = get_line_classifier(
        [SourceLine(text, i + 1) for i, text in enumerate(source_lines)]
    )
    while True:
        try:
            report = next(classifier)
        except StopIteration as done:
            lines = done.value
            break
        if report_callback:
            report_callback(report)

    result = AnalysisResult(lines)
    for report in get_first_pass_reporter(lines, result.globals, result.methods):
        if report_callback:
            report_callback(report)
    for report in get_second_pass_reporter(lines, result.globals, result.methods):
        if report_callback:
            report_callback(report)
    return result
