from textual.app import ComposeResult
from textual.containers import Container
from textual.widgets import (
    Tree,
    ContentSwitcher,
)
from textual.reactive import reactive
from InterfaceComponents.SourceCodeEditor import SourceCodeEditor
from InterfaceComponents.LineTable import LineTable
from InterfaceComponents.SymbolTable import SymbolTableWidget
from enum import StrEnum

class DynamicPanelContentType(StrEnum):
    DIRECTORY_TREE = "directory_tree"
    SOURCE_CODE_EDITOR = "source_code_editor"
    LINE_TABLE = "line_table"
    SYMBOL_TABLE = "symbol-table"
    HIDDEN = "hidden"

class DynamicPanel(Container):
    """Custom widget for a dynamic panel that adapts to different content types."""

    content_type = reactive(DynamicPanelContentType.HIDDEN)
    title = reactive("")
    source_editable = reactive(False)

    def __init__(self, title: str, **kwargs):
        super().__init__(**kwargs)
        self.title = title

        # creates the widgets to display the different types of contents
        self.directory_tree = Tree("Root", id="directory-tree")
        self.source_editor = SourceCodeEditor(id="source-code-editor")
        self.line_table = LineTable(id="line-table")
        self.symbol_table = SymbolTableWidget(id="symbol-table")

    def watch_content_type(self, content_type : DynamicPanelContentType):
        if content_type == "":
            return
        self.remove_class("hidden")
        switcher = self.query_one("#content-switcher", ContentSwitcher)
        match content_type:
            case DynamicPanelContentType.SOURCE_CODE_EDITOR:
                switcher.current = "source-code-editor"
            case DynamicPanelContentType.DIRECTORY_TREE:
                switcher.current = "directory-tree"
            case DynamicPanelContentType.LINE_TABLE:
                switcher.current = "line-table"
            case DynamicPanelContentType.SYMBOL_TABLE:
                switcher.current = "symbol-table"
            case DynamicPanelContentType.HIDDEN:
                self.add_class("hidden")
            case _:
                raise ValueError(
                    f"Unsupported content type: {content_type} for DynamicPanel."
                )

    def compose(self) -> ComposeResult:
        with ContentSwitcher(id="content-switcher", initial="source-code-editor"):
            yield self.directory_tree
            yield self.source_editor
            yield self.line_table
            yield self.symbol_table

    def watch_title(self, new_title: str):
        self.border_title = new_title

    def watch_source_editable(self, editable: bool):
        self.source_editor.read_only = not editable
