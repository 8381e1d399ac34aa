"""Fixtures for VirtualFileSystem."""

import pytest

from models.file_system import VirtualFileSystem
from models.history import DEFAULT_HISTORY_LIMIT


# A small React project, the shape agents usually generate
APP_FILES = {
    "/index.html": '<div id="root"></div>\n<script type="module" src="/src/main.jsx"></script>\n',
    "/src/main.jsx": (
        "import App from './App';\n"
        "createRoot(document.getElementById('root')).render(<App />);\n"
    ),
    "/src/App.jsx": (
        "import Button from './components/Button';\n"
        "\n"
        "export default function App() {\n"
        "  return <Button label=\"Hello\" />;\n"
        "}\n"
    ),
    "/src/components/Button.jsx": (
        "export default function Button({ label }) {\n"
        "  return <button>{label}</button>;\n"
        "}\n"
    ),
    "/src/styles.css": "button { color: red; }\n",
}


def create_file_system(
    files: dict[str, str] | None = None,
    history_limit: int = DEFAULT_HISTORY_LIMIT,
) -> VirtualFileSystem:
    """Create a VirtualFileSystem populated through create().

    Args:
        files: Mapping of path to content (defaults to none).
        history_limit: Maximum undo depth per file.

    Returns:
        VirtualFileSystem whose tree revision equals the number of files.
    """
    file_system = VirtualFileSystem(history_limit=history_limit)
    for path, content in (files or {}).items():
        file_system.create(path, content)
    return file_system


# Pytest fixtures
@pytest.fixture
def empty_file_system():
    """Provide an empty file system."""
    return create_file_system()


@pytest.fixture
def app_file_system():
    """Provide a file system holding APP_FILES."""
    return create_file_system(APP_FILES)


@pytest.fixture
def shallow_history_file_system():
    """Provide a file system with one file and an undo depth of 3."""
    return create_file_system({"/notes.txt": "v0\n"}, history_limit=3)
