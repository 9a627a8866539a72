"""Directory tree population and .sjava file loading for the verifier UI."""

from pathlib import Path
from textual.widgets import Tree


class FileBrowserController:
    """Fills a Tree widget with the .sjava files found under a root directory."""

    HIDDEN_DIRS = frozenset({
        "src", "tests", "scripts", "__pycache__", ".git", ".github",
        ".venv", ".mypy_cache", ".pytest_cache", ".ruff_cache",
        "node_modules", "dist", "build",
    })

    ALLOWED_EXTENSIONS = {".sjava"}

    def __init__(self, tree_widget: Tree, project_root: Path):
        self.tree = tree_widget
        self.project_root = project_root

    def is_hidden_directory(self, path: Path) -> bool:
        return path.name in self.HIDDEN_DIRS or path.name.endswith(".egg-info")

    def is_valid_source_file(self, path: Path) -> bool:
        return path.is_file() and path.suffix.lower() in self.ALLOWED_EXTENSIONS

    def populate_tree(self) -> None:
        self.tree.clear()
        self.tree.root.label = str(self.project_root)
        self.tree.root.data = self.project_root
        self.tree.root.expand()
        self._add_directory(self.tree.root, self.project_root)

    def _add_directory(self, parent_node, directory: Path) -> None:
        try:
            entries = sorted(
                directory.iterdir(),
                key=lambda entry: (not entry.is_dir(), entry.name.lower()),
            )
        except (PermissionError, FileNotFoundError):
            return

        for entry in entries:
            if entry.is_dir():
                if not self.is_hidden_directory(entry):
                    child = parent_node.add(entry.name, data=entry)
                    self._add_directory(child, entry)
            elif self.is_valid_source_file(entry):
                parent_node.add_leaf(entry.name, data=entry)

    def load_selection(self, node, selected_path: Path) -> tuple[bool, str | None, str | None]:
        """Handles a selected tree node.

        Returns:
            (True, None, None) for a directory (the node is toggled),
            (True, content, file_name) for a loaded source file,
            (False, None, error_message) otherwise.
        """
        if selected_path.is_dir():
            node.toggle()
            return (True, None, None)

        if not self.is_valid_source_file(selected_path):
            return (False, None, f"Invalid file type: {selected_path.suffix}")

        try:
            content = selected_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return (False, None, f"Error loading file: {e}")
        return (True, content, selected_path.name)
