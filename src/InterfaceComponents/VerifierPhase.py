from dataclasses import dataclass
from InterfaceComponents.DynamicPanel import DynamicPanelContentType

@dataclass
class Phase:
    name: str
    step_number: str
    description: str
    left_panel_type: str
    left_panel_title: str
    right_panel_type: str
    right_panel_title: str
    action_bar_message: str = ""  # Optional message for the action bar

SOURCE_INPUT = "Source Code Input"
LINE_CLASSIFICATION = "Line Classification"
FIRST_PASS = "First Pass: signatures and globals"
SECOND_PASS = "Second Pass: method bodies"

# Define the phases of the verifier
PHASES = [
    Phase(
        name=SOURCE_INPUT,
        step_number="0",
        description="Source code should be provided in S-Java.",
        left_panel_type=DynamicPanelContentType.SOURCE_CODE_EDITOR,
        left_panel_title="Source code in S-Java",
        right_panel_type=DynamicPanelContentType.HIDDEN,
        right_panel_title="File Browser",
        action_bar_message="Please load (ctrl+L), paste (ctrl+V) or write source code, then press ctrl+S."
    ),
    Phase(
        name=LINE_CLASSIFICATION,
        step_number="1",
        description="Classify every line by its shape.",
        left_panel_type=DynamicPanelContentType.SOURCE_CODE_EDITOR,
        left_panel_title="Source code in S-Java",
        right_panel_type=DynamicPanelContentType.LINE_TABLE,
        right_panel_title="Classified lines"
    ),
    Phase(
        name=FIRST_PASS,
        step_number="2",
        description="Register method signatures and global variables; skip method bodies.",
        left_panel_type=DynamicPanelContentType.LINE_TABLE,
        left_panel_title="Classified lines",
        right_panel_type=DynamicPanelContentType.SYMBOL_TABLE,
        right_panel_title="Symbol table"
    ),
    Phase(
        name=SECOND_PASS,
        step_number="3",
        description="Validate every method body; globals are reset after each method.",
        left_panel_type=DynamicPanelContentType.SOURCE_CODE_EDITOR,
        left_panel_title="Source code in S-Java",
        right_panel_type=DynamicPanelContentType.SYMBOL_TABLE,
        right_panel_title="Symbol table"
    ),
]
