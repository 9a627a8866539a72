# tests/test_analyser.py
"""
Whole-file verification: the two passes, forward calls, the global reset
between method bodies, block balance and first-error-wins.
"""

import pytest

from VerifierComponents.Analyser import (
    find_block_end,
    get_first_pass_reporter,
    get_line_classifier,
    get_second_pass_reporter,
    verify_lines,
)
from VerifierComponents.CleanLine import split_source_lines
from VerifierComponents.LineClassifier import classify_lines
from VerifierComponents.ProgressReport import (
    ClassificationReport,
    FirstPassReport,
    SecondPassReport,
)
from VerifierComponents.Symbols import (
    ErrorKind,
    LineSyntaxError,
    MethodError,
    VariableError,
    VerificationError,
)

from conftest import source_lines


class TestLegalFiles:

    def test_collects_globals_and_methods(self, verify):
        result = verify("""
            // globals
            int a = 1;
            final String s = "x";

            void main(int n) {
                a = n;
                return;
            }
            """)
        assert list(result.globals) == ["a", "s"]
        assert list(result.methods) == ["main"]
        assert result.methods["main"].line_number == 5
        assert len(result.lines) == 8

    def test_empty_file(self):
        result = verify_lines([])
        assert result.globals == {} and result.methods == {}

    def test_forward_call(self, verify):
        verify("""
            void first() {
                second(3);
                return;
            }

            void second(int n) {
                return;
            }
            """)

    def test_recursion(self, verify):
        verify("""
            void again(int n) {
                if (n) {
                    again(n);
                }
                return;
            }
            """)

    def test_body_may_use_a_global_declared_later(self, verify):
        verify("""
            void m() {
                int copy = late;
                return;
            }
            int late = 4;
            """)

    def test_global_assigned_then_read_in_same_method(self, verify):
        verify("""
            int g;
            void m() {
                g = 1;
                int copy = g;
                return;
            }
            """)

    def test_inner_block_may_shadow(self, verify):
        verify("""
            void m(int a) {
                if (a) {
                    String a = "inner";
                }
                a = 3;
                return;
            }
            """)


class TestGlobalReset:

    SOURCE = """
        int g;
        void setter() {
            g = 1;
            return;
        }
        void reader() {
            int copy = g;
            return;
        }
        """

    def test_initialization_does_not_leak_into_next_method(self, verify):
        with pytest.raises(VariableError) as excinfo:
            verify(self.SOURCE)
        assert str(excinfo.value) == "Line 7: reference to uninitialized variable: g."

    def test_flags_restored_after_a_failing_body(self):
        lines = classify_lines(source_lines("""
            int g;
            void m() {
                g = 1;
                undefined();
                return;
            }
            """))
        globals_table, methods = {}, {}
        list(get_first_pass_reporter(lines, globals_table, methods))
        with pytest.raises(MethodError):
            list(get_second_pass_reporter(lines, globals_table, methods))
        assert not globals_table["g"].initialized

    def test_reset_report_closes_each_method(self):
        lines = classify_lines(source_lines(self.SOURCE.replace("int copy = g;", "")))
        globals_table, methods = {}, {}
        list(get_first_pass_reporter(lines, globals_table, methods))
        reports = list(get_second_pass_reporter(lines, globals_table, methods))
        restored = [r.current_method for r in reports if r.globals_restored]
        assert restored == ["setter", "reader"]


class TestErrors:

    @pytest.mark.parametrize(
        "text, error_type, message",
        [
            ("""
                void m() {
                    return;
                }
                }
                """, MethodError, "Line 4: invalid statement in global scope: }"),
            ("""
                void m() {
                    if (true) {
                    return;
                }
                """, MethodError, "Line 1: method not closed properly: m."),
            ("""
                return;
                """, MethodError, "Line 1: invalid statement in global scope: return;"),
            ("""
                int a;
                if (a) {
                }
                """, MethodError, "Line 2: invalid statement in global scope: if (a) {"),
            ("""
                void m() {
                    return;
                }
                void m() {
                    return;
                }
                """, MethodError, "Line 4: duplicate method name: m."),
            ("""
                boolean b = true;
                void m() {
                    while (b && ) {
                    }
                    return;
                }
                """, MethodError, "Line 3: empty term in condition."),
            ("""
                final int k = 1;
                void m() {
                    k = 2;
                    return;
                }
                """, VariableError, "Line 3: cannot reassign final variable: k."),
            ("""
                double d = 2.5;
                void m() {
                    int i = d;
                    return;
                }
                """, VariableError,
                "Line 3: type mismatch in assignment: cannot assign double to int."),
            ("""
                int x
                """, LineSyntaxError, "Line 1: invalid line syntax: int x"),
            ("""
                int x = \u0661\u0662;
                """, VariableError, "Line 1: invalid value: \u0661\u0662."),
            ("""
                int a\u00e9 = 1;
                """, VariableError, "Line 1: invalid declaration: 'a\u00e9 = 1'."),
            ("""
                void m(int p\u00e9) {
                    return;
                }
                """, MethodError, "Line 1: invalid parameter: 'int p\u00e9'."),
        ],
    )
    def test_first_error(self, verify, text, error_type, message):
        with pytest.raises(error_type) as excinfo:
            verify(text)
        assert str(excinfo.value) == message

    def test_unrecognized_line_inside_skipped_body(self, verify):
        with pytest.raises(LineSyntaxError) as excinfo:
            verify("""
                void m() {
                    int[] a;
                    return;
                }
                """)
        assert excinfo.value.line_number == 2

    def test_global_errors_come_before_body_errors(self, verify):
        with pytest.raises(VerificationError) as excinfo:
            verify("""
                void m() {
                    nothing();
                    return;
                }
                int a = "text";
                """)
        assert excinfo.value.line_number == 5
        assert excinfo.value.kind is ErrorKind.VARIABLE

    def test_methods_cannot_see_each_others_locals(self, verify):
        with pytest.raises(VariableError) as excinfo:
            verify("""
                void a() {
                    int local = 1;
                    return;
                }
                void b() {
                    local = 2;
                    return;
                }
                """)
        assert excinfo.value.reason == "assign to undeclared variable: local."


class TestFindBlockEnd:

    def test_skips_nested_blocks(self):
        lines = classify_lines(["void m() {", "if (true) {", "}", "return;", "}", "int a;"])
        assert find_block_end(lines, 0) == 4
        assert find_block_end(lines, 1) == 2


class TestReporters:

    def test_phases_report_in_order(self):
        reports = []
        verify_lines(
            ["int a = 1;", "void m() {", "a = 2;", "return;", "}"],
            report_callback=reports.append,
        )
        phases = [r.current_phase_number for r in reports]
        assert phases == sorted(phases)
        assert phases.count("1") == 5
        assert isinstance(reports[0], ClassificationReport)
        assert any(isinstance(r, FirstPassReport) and r.new_method for r in reports)
        assert isinstance(reports[-1], SecondPassReport)
        assert reports[-1].globals_restored

    def test_classifier_returns_lines(self):
        generator = get_line_classifier(split_source_lines("int a;\n\n"))
        assert next(generator).current_line == 1
        assert next(generator).classified_line.line_number == 2
        with pytest.raises(StopIteration) as done:
            next(generator)
        assert len(done.value.value) == 2

    def test_first_pass_skips_bodies(self):
        lines = classify_lines(["void m() {", "x = 1;", "return;", "}", "int a;"])
        reports = list(get_first_pass_reporter(lines, {}, {}))
        assert [r.current_line for r in reports] == [1, 5]
        assert reports[0].skipped_to_line == 4
        assert reports[1].new_variables[0][0] == "a"


def test_verification_is_deterministic(examples_dir):
    path = examples_dir / "incorrect_examples" / "global_reset.sjava"
    lines = path.read_text(encoding="utf-8").splitlines()
    messages = set()
    for _ in range(3):
        with pytest.raises(VerificationError) as excinfo:
            verify_lines(lines)
        messages.add(str(excinfo.value))
    assert len(messages) == 1
