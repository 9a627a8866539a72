from textual.widgets import TextArea
from textual.widgets.text_area import Selection
from VerifierComponents.ProgressReport import (
    ClassificationReport,
    SecondPassReport,
)

class SourceCodeEditor(TextArea):
    """Custom widget for a source code editor with specific configurations. Defaults to:
    - Tab behavior: indent
    - Show line numbers: True
    - Read only: False

    Methods:
    - apply_progress_report(report): Selects the line the report is about.
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.tab_behavior = "indent"
        self.show_line_numbers = True
        self.read_only = False

    def select_line(self, line_number: int):
        """Selects a whole source line (1-based) and scrolls it into view."""
        row = line_number - 1
        if row < 0 or row >= self.document.line_count:
            return
        self.selection = Selection(
            start=(row, 0),
            end=(row, len(self.document.get_line(row))),
        )
        self.scroll_cursor_visible(center=True)

    def apply_progress_report(self, report: ClassificationReport | SecondPassReport):
        """Applies a ProgressReport to the editor, highlighting the looked-at line.

        Args:
            report (ClassificationReport | SecondPassReport): report carrying current_line.
        """
        if report.current_line:
            self.select_line(report.current_line)
