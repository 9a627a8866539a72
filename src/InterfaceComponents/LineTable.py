from rich.text import Text
from textual.widgets import DataTable
from VerifierComponents.LineClassifier import ClassifiedLine
from VerifierComponents.ProgressReport import (
    ClassificationReport,
    FirstPassReport,
)


class LineTable(DataTable):
    """Custom widget for displaying the classified source lines."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.cursor_type = "row"
        self.zebra_stripes = True
        self.add_columns("line #", "Category", "Content")

    def add_line(self, line: ClassifiedLine):
        """Adds a classified line to the table.

        Args:
            line (ClassifiedLine): The line to add.
        """
        self.add_row(
            str(line.line_number),
            line.line_type.value,
            Text(line.text.strip()),
            key=str(line.line_number),
        )

    def fill_table(self, lines):
        """Fills the table with classified lines.

        Args:
            lines (Sequence[ClassifiedLine]): The lines to add.
        """
        self.clear()
        for line in lines:
            self.add_line(line)

    def apply_progress_report(
        self,
        classification_report: ClassificationReport | None = None,
        first_pass_report: FirstPassReport | None = None,
    ):
        """Adds the newly classified line, or follows the first pass cursor."""
        if classification_report:
            line = classification_report.classified_line
            if line:
                self.add_line(line)
                self.move_cursor(row=self.row_count - 1, scroll=True)

        if first_pass_report and first_pass_report.current_line:
            # rows are added in line order, one per line
            self.move_cursor(row=first_pass_report.current_line - 1, scroll=True)
