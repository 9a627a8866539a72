"""Title, subtitle and action bar handling for the verifier UI."""

from rich.text import Text
from textual.css.query import NoMatches
from textual.widgets import Static


class UIStateManager:
    """Keeps the window title, the phase bar and the action bar in sync."""

    APP_NAME = "S-Java Verifier"

    def __init__(self, app):
        self.app = app
        self.file_name: str = ""
        self.phase_text: str = ""

    def set_file_name(self, name: str) -> None:
        self.file_name = name
        self.refresh_title()

    def set_phase_info(self, phase_text: str) -> None:
        """Sets the text shown in the phase bar, e.g. 'Step 2: First Pass'."""
        self.phase_text = phase_text
        self.refresh_title()

    def refresh_title(self) -> None:
        file_label = self.file_name or "(unsaved)"
        self.app.title = f"{self.APP_NAME} | File: {file_label}"
        try:
            self.app.query_one("#title-bar", Static).update(self.phase_text)
        except NoMatches:
            # not composed yet; on_mount refreshes again
            pass

    def post_to_action_bar(self, message: str, style_class: str = "info") -> None:
        """Shows a message in the action bar.

        Args:
            message: The message to display
            style_class: CSS class for styling ("info", "success", "error")
        """
        action_bar = self.app.query_one("#action-bar", Static)
        action_bar.update(Text(message))
        action_bar.remove_class("info", "error", "success")
        action_bar.add_class(style_class)
