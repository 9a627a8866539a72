from textual.widgets import DataTable
from textual.widgets.data_table import CellDoesNotExist, RowDoesNotExist
from VerifierComponents.ProgressReport import (
    FirstPassReport,
    SecondPassReport,
)
from VerifierComponents.Symbols import MethodSignature, Variable


class SymbolTableWidget(DataTable):
    """UI widget for displaying global variables, method signatures and locals.

    Note: This is intentionally named `SymbolTableWidget` to avoid confusion with
    the verifier's symbol tables (plain dicts of `Variable`).
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.cursor_type = "row"
        self.zebra_stripes = True
        self.add_column("#", key="line_col")
        self.add_column("NAME", key="name_col")
        self.add_column("TYPE", key="type_col")
        self.add_column("FINAL", key="final_col")
        self.add_column("INIT", key="init_col")
        self.add_column("SCOPE", key="scope_col")
        self.fixed_columns = 2

    def add_method(self, signature: MethodSignature):
        params = ", ".join(str(p) for p in signature.parameters) or "none"
        self.add_row(
            str(signature.line_number),
            signature.name,
            f"void ({params})",
            "N/A",
            "N/A",
            "global",
            height=None,
            key=f"method:{signature.name}",
        )

    def add_variable(self, name: str, variable: Variable, line: int, scope: str):
        """Adds a variable row, or refreshes it if that variable is already listed."""
        key = f"{name}@{scope}"
        try:
            self.get_row_index(key)
        except RowDoesNotExist:
            self.add_row(
                str(line),
                name,
                variable.var_type,
                str(variable.is_final),
                str(variable.initialized),
                scope,
                key=key,
            )
            return
        self.update_cell(key, "init_col", str(variable.initialized))

    def _focus_row(self, key: str):
        try:
            row = self.get_row_index(key)
        except RowDoesNotExist:
            return
        self.move_cursor(row=row, scroll=True)

    def apply_progress_report(
        self,
        first_pass_report: FirstPassReport | None = None,
        second_pass_report: SecondPassReport | None = None,
        globals_table: dict[str, Variable] | None = None,
    ):
        """Applies a pass report: new symbols are added, touched ones refreshed.

        Args:
            globals_table: the live globals; a second pass variable that is the
                very object stored there is shown as global, otherwise as a local
                of the current method.
        """
        if first_pass_report:
            if first_pass_report.new_method:
                self.add_method(first_pass_report.new_method)
                self.move_cursor(row=self.row_count - 1, scroll=True)
            for name, variable in first_pass_report.new_variables:
                self.add_variable(name, variable, first_pass_report.current_line, "global")
                self.move_cursor(row=self.row_count - 1, scroll=True)
        elif second_pass_report:
            self.apply_second_pass_report(second_pass_report, globals_table or {})

    def apply_second_pass_report(self, report: SecondPassReport, globals_table: dict[str, Variable]):
        if report.globals_restored:
            self.refresh_globals(globals_table)
            self._focus_row(f"method:{report.current_method}")
            return
        for name, variable in report.looked_at_variables:
            scope = "global" if globals_table.get(name) is variable else report.current_method
            self.add_variable(name, variable, report.current_line, scope)
            self._focus_row(f"{name}@{scope}")

    def refresh_globals(self, globals_table: dict[str, Variable]):
        """Re-reads every global's initialized flag (after a method's reset)."""
        for name, variable in globals_table.items():
            try:
                self.update_cell(f"{name}@global", "init_col", str(variable.initialized))
            except (RowDoesNotExist, CellDoesNotExist):
                continue

