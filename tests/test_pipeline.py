# tests/test_pipeline.py
"""
The pipeline session, the file-level API and the sjavac command line,
plus the example corpus under examples/.
"""

import json
import logging

import pytest

from VerifierComponents.Symbols import ErrorKind
from verify_pipeline import (
    OUT_IO_ERROR,
    OUT_SUCCESS,
    OUT_SYNTAX_ERROR,
    PipelineSession,
    main,
    verify_file,
    verify_source,
)


LEGAL = "int a = 1;\nvoid m(double d) {\n    d = a;\n    return;\n}\n"
ILLEGAL = "void m() {\n    int a = true;\n    return;\n}\n"


@pytest.fixture(autouse=True)
def _detach_sjavac_handlers():
    """main() attaches a handler to whatever sys.stderr is during the test."""
    yield
    logger = logging.getLogger("sjavac")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


class TestPipelineSession:

    def test_ticks_through_all_phases(self):
        session = PipelineSession()
        session.begin_classification(LEGAL, file_name="legal.sjava")
        ticks = 0
        while not session.tick_classification()[0]:
            ticks += 1
        assert ticks == 5
        assert len(session.classified_lines) == 5

        session.begin_first_pass()
        while not session.tick_first_pass()[0]:
            pass
        assert list(session.methods) == ["m"]

        session.begin_second_pass()
        while not session.tick_second_pass()[0]:
            pass
        assert not session.globals_table["a"].is_final

    def test_tick_before_begin(self):
        with pytest.raises(RuntimeError):
            PipelineSession().tick_first_pass()

    def test_first_pass_starts_from_empty_tables(self):
        session = PipelineSession()
        verify_source(LEGAL, session=session)
        session.begin_first_pass()
        assert session.globals_table == {} and session.methods == {}


class TestVerifySource:

    def test_legal(self):
        outcome = verify_source(LEGAL)
        assert outcome.ok
        assert outcome.exit_code == OUT_SUCCESS
        assert outcome.message == "Source code is legal."
        assert outcome.kind is None

    def test_illegal(self):
        outcome = verify_source(ILLEGAL)
        assert not outcome.ok
        assert outcome.exit_code == OUT_SYNTAX_ERROR
        assert outcome.kind is ErrorKind.VARIABLE
        assert outcome.message == "Line 2: incorrect int value: true."
        assert outcome.error.line_number == 2

    @pytest.mark.parametrize("separator", ["\x0c", "\x1c", "\u2028"])
    def test_only_newlines_end_a_line(self, separator):
        outcome = verify_source(f"int a = 1;{separator}int b = 2;\n")
        assert not outcome.ok
        assert outcome.kind is ErrorKind.VARIABLE
        assert outcome.error.line_number == 1

    def test_crlf_source(self):
        session = PipelineSession()
        assert verify_source(LEGAL.replace("\n", "\r\n"), session=session).ok
        assert len(session.source_lines) == 5

    def test_session_keeps_tables(self):
        session = PipelineSession()
        verify_source(LEGAL, session=session)
        assert "a" in session.globals_table

    def test_verify_file(self, tmp_path):
        path = tmp_path / "ok.sjava"
        path.write_text(LEGAL, encoding="utf-8")
        assert verify_file(path).ok

    def test_verify_file_missing(self, tmp_path):
        with pytest.raises(OSError):
            verify_file(tmp_path / "absent.sjava")


class TestCommandLine:

    def _write(self, tmp_path, name, text):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    def test_legal_prints_zero(self, tmp_path, capsys):
        assert main([self._write(tmp_path, "ok.sjava", LEGAL)]) == OUT_SUCCESS
        captured = capsys.readouterr()
        assert captured.out == "0\n"
        assert captured.err == ""

    def test_illegal_prints_one_and_reason(self, tmp_path, capsys):
        assert main([self._write(tmp_path, "bad.sjava", ILLEGAL)]) == OUT_SYNTAX_ERROR
        captured = capsys.readouterr()
        assert captured.out == "1\n"
        assert "Line 2: incorrect int value: true." in captured.err

    def test_wrong_extension(self, tmp_path, capsys):
        assert main([self._write(tmp_path, "ok.java", LEGAL)]) == OUT_IO_ERROR
        captured = capsys.readouterr()
        assert captured.out == "2\n"
        assert "Invalid file extension" in captured.err

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "absent.sjava")]) == OUT_IO_ERROR
        assert capsys.readouterr().out.startswith("2\n")

    def test_undecodable_file(self, tmp_path, capsys):
        path = tmp_path / "latin.sjava"
        path.write_bytes(b"String s = \"\xe9\";\n")
        assert main([str(path)]) == OUT_IO_ERROR

    def test_symbols_table(self, tmp_path, capsys):
        main([self._write(tmp_path, "ok.sjava", LEGAL), "--symbols"])
        out = capsys.readouterr().out
        assert out.startswith("0\n")
        assert "| a | int | False | True |" in out
        assert "| void m(double d) | 2 |" in out

    def test_verbosity_sets_level_without_stacking_handlers(self, tmp_path, capsys):
        path = self._write(tmp_path, "ok.sjava", LEGAL)
        main([path, "-vv"])
        main([path, "-v"])
        logger = logging.getLogger("sjavac")
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert "First pass completed." in capsys.readouterr().err

    def test_usage_error(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main([])
        assert excinfo.value.code == 2


def _example_cases(examples_dir):
    data = json.loads(
        (examples_dir / "incorrect_examples" / "expected_errors.json").read_text(encoding="utf-8")
    )
    return data["cases"]


class TestExampleCorpus:

    def test_correct_examples_pass(self, examples_dir):
        files = sorted((examples_dir / "correct_examples").glob("*.sjava"))
        assert files
        for path in files:
            outcome = verify_file(path)
            assert outcome.ok, f"{path.name}: {outcome.message}"

    def test_incorrect_examples_fail_with_recorded_message(self, examples_dir):
        cases = _example_cases(examples_dir)
        files = sorted((examples_dir / "incorrect_examples").glob("*.sjava"))
        assert len(files) == len(cases)
        for path in files:
            expected = cases[f"examples/incorrect_examples/{path.name}"]
            outcome = verify_file(path)
            assert not outcome.ok, path.name
            assert outcome.message == expected["message"]
            assert outcome.kind.value == expected["kind"]
