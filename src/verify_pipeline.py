from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Generator
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from VerifierComponents.Analyser import (
    get_first_pass_reporter,
    get_line_classifier,
    get_second_pass_reporter,
)
from VerifierComponents.CleanLine import SourceLine, split_source_lines
from VerifierComponents.LineClassifier import ClassifiedLine
from VerifierComponents.ProgressReport import (
    ClassificationReport,
    FirstPassReport,
    SecondPassReport,
)
from VerifierComponents.Symbols import (
    ErrorKind,
    MethodTable,
    VariableTable,
    VerificationError,
    table_to_markdown,
)

_log = logging.getLogger("sjavac")

OUT_SUCCESS: int = 0
OUT_SYNTAX_ERROR: int = 1
OUT_IO_ERROR: int = 2

SOURCE_SUFFIX = ".sjava"


class PipelineSession:
    """Shared verifier pipeline state.

    This is a UI-agnostic orchestrator that both the Textual UI and the CLI
    drive. It keeps the phase generators and the produced artifacts in one
    place, so phase sequencing and data flow can't drift between entrypoints.
    A ``VerificationError`` raised by a phase propagates out of its tick.
    """

    def __init__(self) -> None:
        self.reset_all()

    def reset_all(self) -> None:
        self.file_name: str = ""
        self.source_code: str = ""
        self.source_lines: list[SourceLine] = []

        self.classified_lines: tuple[ClassifiedLine, ...] = ()
        self.globals_table: VariableTable = {}
        self.methods: MethodTable = {}

        self._classification_generator: Optional[
            Generator[ClassificationReport, None, tuple[ClassifiedLine, ...]]
        ] = None
        self._first_pass_generator: Optional[Generator[FirstPassReport, None, None]] = None
        self._second_pass_generator: Optional[Generator[SecondPassReport, None, None]] = None

    # ----- Line classification -----

    def begin_classification(self, source_code: str, file_name: str = "") -> None:
        self.file_name = file_name
        self.source_code = source_code
        self.source_lines = split_source_lines(source_code)
        self.classified_lines = ()
        self._classification_generator = get_line_classifier(self.source_lines)

    def tick_classification(self) -> tuple[bool, ClassificationReport | None]:
        if self._classification_generator is None:
            raise RuntimeError("Classification generator not initialized.")
        try:
            report = next(self._classification_generator)
            return False, report
        except StopIteration as done:
            self.classified_lines = done.value
            return True, None

    # ----- First pass -----

    def begin_first_pass(self) -> None:
        self.globals_table = {}
        self.methods = {}
        self._first_pass_generator = get_first_pass_reporter(
            self.classified_lines, self.globals_table, self.methods
        )

    def tick_first_pass(self) -> tuple[bool, FirstPassReport | None]:
        if self._first_pass_generator is None:
            raise RuntimeError("First-pass generator not initialized.")
        try:
            report = next(self._first_pass_generator)
            return False, report
        except StopIteration:
            return True, None

    # ----- Second pass -----

    def begin_second_pass(self) -> None:
        self._second_pass_generator = get_second_pass_reporter(
            self.classified_lines, self.globals_table, self.methods
        )

    def tick_second_pass(self) -> tuple[bool, SecondPassReport | None]:
        if self._second_pass_generator is None:
            raise RuntimeError("Second-pass generator not initialized.")
        try:
            report = next(self._second_pass_generator)
            return False, report
        except StopIteration:
            return True, None


@dataclass
class VerificationOutcome:
    ok: bool
    message: str
    kind: ErrorKind | None = None
    error: VerificationError | None = None

    @property
    def exit_code(self) -> int:
        return OUT_SUCCESS if self.ok else OUT_SYNTAX_ERROR


def _run_phase(name: str, tick) -> None:
    _log.info("%s started.", name)
    while True:
        done, report = tick()
        if done:
            break
        if report is not None and report.action_bar_message:
            _log.debug("[%s] %s", report.current_phase_number, report.action_bar_message)
    _log.info("%s completed.", name)


def verify_source(
    source_code: str, file_name: str = "", session: PipelineSession | None = None
) -> VerificationOutcome:
    """Verify S-Java source text end-to-end using the same reporters as the UI.

    Args:
        source_code: Whole file contents.
        file_name: Used in log messages only.
        session: Session to run in; a fresh one when None. On return it
            holds whatever the phases produced before stopping.

    Returns:
        VerificationOutcome: ``ok`` with the verdict, and on failure the
        error's message and kind.
    """
    if session is None:
        session = PipelineSession()
    session.begin_classification(source_code, file_name=file_name)

    try:
        _run_phase("Line classification", session.tick_classification)

        session.begin_first_pass()
        _run_phase("First pass", session.tick_first_pass)

        session.begin_second_pass()
        _run_phase("Second pass", session.tick_second_pass)
    except VerificationError as e:
        _log.info("Verification of %s failed: %s", file_name or "<source>", e)
        return VerificationOutcome(False, str(e), e.kind, e)

    return VerificationOutcome(True, "Source code is legal.")


def read_source_file(path: str | Path) -> str:
    return Path(path).read_text(encoding="utf-8")


def verify_file(
    path: str | Path, session: PipelineSession | None = None
) -> VerificationOutcome:
    """Read and verify one source file. ``OSError`` propagates on read failure."""
    path = Path(path)
    source = read_source_file(path)
    return verify_source(source, file_name=path.name, session=session)


def _configure_logging(verbosity: int) -> None:
    """Set up the ``sjavac`` logger: 0 -> WARNING, 1 -> INFO, 2+ -> DEBUG."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root = logging.getLogger("sjavac")
    for old in list(root.handlers):
        root.removeHandler(old)
    root.setLevel(level)
    root.addHandler(handler)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sjavac",
        description="Verify that an S-Java source file is legal.",
    )
    parser.add_argument("source", help=f"Path to the source file ({SOURCE_SUFFIX}).")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="-v logs phase progress, -vv logs every line.",
    )
    parser.add_argument(
        "--symbols",
        action="store_true",
        help="Print the global variables and method signatures of a legal file.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point.

    Prints ``0`` (legal), ``1`` (illegal) or ``2`` (I/O problem) on stdout and
    the reason on stderr, and returns the same code.
    """
    args = build_arg_parser().parse_args(argv)
    _configure_logging(args.verbose)

    source_path = Path(args.source)
    if source_path.suffix != SOURCE_SUFFIX:
        print(OUT_IO_ERROR)
        print(
            f"Invalid file extension: expected {SOURCE_SUFFIX}, got '{source_path.name}'.",
            file=sys.stderr,
        )
        return OUT_IO_ERROR

    session = PipelineSession()
    try:
        outcome = verify_file(source_path, session=session)
    except (OSError, UnicodeDecodeError) as e:
        _log.error("Cannot read %s: %s", source_path, e)
        print(OUT_IO_ERROR)
        print(str(e), file=sys.stderr)
        return OUT_IO_ERROR

    print(outcome.exit_code)
    if not outcome.ok:
        print(outcome.message, file=sys.stderr)
    elif args.symbols:
        print(table_to_markdown(session.globals_table, session.methods))
    return outcome.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
