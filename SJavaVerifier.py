from pathlib import Path
import sys

_SRC_DIR = Path(__file__).resolve().parent / "src"
if _SRC_DIR.exists():
    src_str = str(_SRC_DIR)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)

from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import (
    Header,
    Footer,
    Static,
    Label,
    TextArea,
    Tree,
)
from textual.binding import Binding
from textual.reactive import reactive

from VerifierComponents.Symbols import VerificationError

from InterfaceComponents.VerifierPhase import (
    Phase,
    PHASES,
    SOURCE_INPUT,
    LINE_CLASSIFICATION,
    FIRST_PASS,
    SECOND_PASS,
)
from InterfaceComponents.DynamicPanel import DynamicPanel, DynamicPanelContentType
from InterfaceComponents.FileBrowserController import FileBrowserController
from InterfaceComponents.TickerController import TickerController
from InterfaceComponents.UIStateManager import UIStateManager

from verify_pipeline import PipelineSession


class SJavaVerifierApp(App):
    """Step-through interface for the S-Java verifier."""

    CSS_PATH = "src/InterfaceComponents/styles.tcss"

    BINDINGS = [
        Binding("ctrl+l", "load_file", "Load File"),
        Binding("ctrl+e", "load_example", "Load Example Code"),
        Binding("ctrl+s", "start_verification", "Start Verification"),
        Binding("ctrl+r", "toggle_auto_progress", "Pause/Unpause"),
        Binding("t", "manual_tick", "Progress 1 Tick"),
        Binding("+", "increase_speed", "Increase Speed"),
        Binding("-", "decrease_speed", "Decrease Speed"),
        Binding("ctrl+n", "complete_step", "Complete Step/next Step"),
    ]

    EXAMPLE_PATH = Path("examples") / "correct_examples" / "example.sjava"

    running = reactive(False, init=False)

    def watch_running(self, is_running: bool):
        if is_running:
            self.ticker.resume()
        else:
            self.ticker.pause()

    phase_completed = reactive(False, init=False)

    def watch_phase_completed(self, completed: bool):
        if not completed:
            return
        self.running = False
        message = f"{self.current_phase} "
        if self.phase_failed:
            message += f"failed. {self.error_message}"
            message += " Press ctrl+n to return to source code."
            status = "error"
        elif self.current_phase == PHASES[-1].name:
            message += "completed. Source code is legal. Press ctrl+n to start over."
            status = "success"
        else:
            message += "completed successfully. Press ctrl+n to proceed."
            status = "success"
        self.ui_state.post_to_action_bar(message, status)
        self.refresh_bindings()

    def __init__(self):
        super().__init__()
        self.pipeline = PipelineSession()
        self.ui_state = UIStateManager(self)
        self.ticker = TickerController(self)
        self.current_phase = ""
        self.phase_failed = False
        self.error_message = ""
        self.file_name = ""
        self._loaded_source = ""
        self._project_root: Path = Path(__file__).resolve().parent

    def compose(self) -> ComposeResult:
        """Create the layout of the application."""
        yield Header()
        yield Footer()

        with Container():
            yield Label("Initializing...", id="title-bar")

            with Horizontal():
                self.left_panel = DynamicPanel(
                    "Left Panel",
                    id="left-panel",
                    classes="dynamic-panel",
                )
                yield self.left_panel
                self.right_panel = DynamicPanel(
                    "Right Panel",
                    id="right-panel",
                    classes="dynamic-panel",
                )
                yield self.right_panel

            yield Static(
                "Type or paste S-Java in the left panel, or press ctrl+L to load a file.",
                id="action-bar",
            )

    def on_mount(self):
        self.file_browser = FileBrowserController(
            self.right_panel.directory_tree, self._project_root
        )
        self.ticker.start(self.progress_tick)
        self.set_phase(PHASES[0])

    def set_phase(self, phase: Phase):
        """Switch panels and state to the given phase and run its entering hook."""
        self.current_phase = phase.name
        self.ui_state.set_phase_info(
            f"Step {phase.step_number}: {phase.name} - {phase.description}"
        )

        self.left_panel.title = phase.left_panel_title
        self.left_panel.content_type = phase.left_panel_type  # type: ignore
        self.left_panel.source_editable = phase == PHASES[0]

        self.right_panel.title = phase.right_panel_title
        self.right_panel.content_type = phase.right_panel_type  # type: ignore

        self.ui_state.post_to_action_bar(
            phase.action_bar_message or f"{phase.name} started. Press t to step, ctrl+r to run.",
            "info",
        )

        entering_method = entering_methods.get(phase.name)
        if entering_method:
            entering_method(self)
        self.phase_completed = False
        self.phase_failed = False
        self.running = False
        self.error_message = ""
        self.refresh_bindings()

    def _set_source_code_programmatically(self, code: str, file_name: str) -> None:
        self._loaded_source = code
        self.left_panel.source_editor.text = code
        self.file_name = file_name
        self.ui_state.set_file_name(file_name)

    def on_tree_node_selected(self, event: Tree.NodeSelected) -> None:
        if self.current_phase != SOURCE_INPUT:
            return
        if self.right_panel.content_type != DynamicPanelContentType.DIRECTORY_TREE:
            return

        node = event.node
        if not isinstance(node.data, Path):
            return

        ok, content, detail = self.file_browser.load_selection(node, node.data)
        if not ok:
            self.ui_state.post_to_action_bar(detail, "error")
            return
        if content is None:
            return

        self._set_source_code_programmatically(content, detail)
        self.right_panel.content_type = DynamicPanelContentType.HIDDEN
        self.ui_state.post_to_action_bar(f"Loaded {detail}. Press ctrl+S to verify.", "success")

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if event.text_area.id != "source-code-editor":
            return
        if event.text_area.text == self._loaded_source:
            return
        if self.file_name:
            # edited text no longer matches the loaded file
            self.file_name = ""
            self.ui_state.set_file_name("")
            if self.right_panel.content_type == DynamicPanelContentType.DIRECTORY_TREE:
                self.right_panel.content_type = DynamicPanelContentType.HIDDEN

    def progress_tick(self):
        """Progress one tick in the current phase."""
        if self.phase_completed:
            return
        ticking_method = ticking_methods.get(self.current_phase)
        if ticking_method:
            self.phase_completed = ticking_method(self)

    def _fail(self, error: VerificationError) -> bool:
        self.error_message = str(error)
        self.phase_failed = True
        self.running = False
        return True

    ### Actions ###

    def action_load_file(self):
        """Toggle the file browser (phase 0 only)."""
        if self.right_panel.content_type == DynamicPanelContentType.DIRECTORY_TREE:
            self.right_panel.content_type = DynamicPanelContentType.HIDDEN
            return

        self.right_panel.content_type = DynamicPanelContentType.DIRECTORY_TREE
        self.file_browser.populate_tree()
        self.right_panel.directory_tree.focus()
        self.ui_state.post_to_action_bar("Select a .sjava file to load.", "info")

    def action_load_example(self):
        """Load the bundled example into the source editor."""
        example_path = self._project_root / self.EXAMPLE_PATH
        try:
            code = example_path.read_text(encoding="utf-8")
        except OSError as e:
            self.ui_state.post_to_action_bar(f"Error loading example code: {e}", "error")
            return
        self._set_source_code_programmatically(code, example_path.name)
        self.ui_state.post_to_action_bar("Example code loaded successfully.", "success")

    def action_start_verification(self):
        self.set_phase(PHASES[1])

    def action_toggle_auto_progress(self):
        self.running = not self.running
        self.refresh_bindings()

    def action_increase_speed(self):
        interval = self.ticker.increase_speed()
        self.ui_state.post_to_action_bar(f"One step every {interval:.2f}s.", "info")

    def action_decrease_speed(self):
        interval = self.ticker.decrease_speed()
        self.ui_state.post_to_action_bar(f"One step every {interval:.2f}s.", "info")

    def action_manual_tick(self):
        if not self.running:
            self.progress_tick()

    def action_complete_step(self):
        """Finish the current phase, or move on once it has finished."""
        if self.phase_failed:
            self.set_phase(PHASES[0])
        elif self.phase_completed:
            index = next(
                i for i, phase in enumerate(PHASES) if phase.name == self.current_phase
            )
            self.set_phase(PHASES[(index + 1) % len(PHASES)])
        else:
            self.running = False
            while not self.phase_completed:
                self.progress_tick()

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        """Check if an action may run."""
        at_input = self.current_phase == SOURCE_INPUT
        if action in ("load_file", "load_example", "start_verification"):
            return at_input
        if action == "toggle_auto_progress":
            return not at_input and not self.phase_completed
        if action in ("increase_speed", "decrease_speed"):
            return not at_input and self.running
        if action == "manual_tick":
            return not at_input and not self.running and not self.phase_completed
        if action == "complete_step":
            return not at_input
        return True

    ### Phase hooks ###

    def entering_line_classification(self):
        self.right_panel.line_table.clear()
        self.pipeline.begin_classification(
            self.left_panel.source_editor.text, file_name=self.file_name
        )

    def compute_line_classification_tick(self) -> bool:
        done, report = self.pipeline.tick_classification()
        if done:
            return True
        self.left_panel.source_editor.apply_progress_report(report)
        self.right_panel.line_table.apply_progress_report(classification_report=report)
        self.ui_state.post_to_action_bar(report.action_bar_message, "info")
        return False

    def entering_first_pass(self):
        self.left_panel.line_table.fill_table(self.pipeline.classified_lines)
        self.right_panel.symbol_table.clear()
        self.pipeline.begin_first_pass()

    def compute_first_pass_tick(self) -> bool:
        try:
            done, report = self.pipeline.tick_first_pass()
        except VerificationError as e:
            return self._fail(e)
        if done:
            return True
        self.left_panel.line_table.apply_progress_report(first_pass_report=report)
        self.right_panel.symbol_table.apply_progress_report(first_pass_report=report)
        self.ui_state.post_to_action_bar(report.action_bar_message, "info")
        return False

    def entering_second_pass(self):
        self.right_panel.symbol_table.move_cursor(row=0, scroll=True)
        self.pipeline.begin_second_pass()

    def compute_second_pass_tick(self) -> bool:
        try:
            done, report = self.pipeline.tick_second_pass()
        except VerificationError as e:
            self.right_panel.symbol_table.refresh_globals(self.pipeline.globals_table)
            return self._fail(e)
        if done:
            return True
        self.left_panel.source_editor.apply_progress_report(report)
        self.right_panel.symbol_table.apply_progress_report(
            second_pass_report=report, globals_table=self.pipeline.globals_table
        )
        self.ui_state.post_to_action_bar(report.action_bar_message, "info")
        return False


ticking_methods = {
    LINE_CLASSIFICATION: SJavaVerifierApp.compute_line_classification_tick,
    FIRST_PASS: SJavaVerifierApp.compute_first_pass_tick,
    SECOND_PASS: SJavaVerifierApp.compute_second_pass_tick,
}

entering_methods = {
    LINE_CLASSIFICATION: SJavaVerifierApp.entering_line_classification,
    FIRST_PASS: SJavaVerifierApp.entering_first_pass,
    SECOND_PASS: SJavaVerifierApp.entering_second_pass,
}


if __name__ == "__main__":
    SJavaVerifierApp().run()
