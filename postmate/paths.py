"""Where PostMate keeps its local state.

The activity log, display preferences and the SQLite settings database share
one workspace folder. `POSTMATE_WORKSPACE` pins it; otherwise the first
writable folder of `~/PostMate` and `<tempdir>/PostMate` is used (hosted
Streamlit has a read-only home).
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Iterator

WORKSPACE_ENV = "POSTMATE_WORKSPACE"
FOLDER_NAME = "PostMate"

LOG_FILE = "app_log.json"
PREFERENCES_FILE = "preferences.json"
DB_FILE = "postmate.db"


def _default_locations() -> Iterator[Path]:
    yield Path.home() / FOLDER_NAME
    yield Path(tempfile.gettempdir()) / FOLDER_NAME


def _prepare(folder: Path) -> bool:
    """Create the folder and confirm a file can be written inside it."""
    try:
        folder.mkdir(parents=True, exist_ok=True)
        with tempfile.TemporaryFile(dir=folder):
            pass
    except OSError as e:
        print(f"⚠️ Workspace {folder} is not writable: {e}")
        return False
    return True


def get_workspace_path() -> Path:
    pinned = os.getenv(WORKSPACE_ENV)
    if pinned:
        folder = Path(pinned).expanduser().resolve()
        folder.mkdir(parents=True, exist_ok=True)
        return folder

    for folder in _default_locations():
        if _prepare(folder):
            return folder.resolve()
    raise OSError(f"No writable workspace folder; set {WORKSPACE_ENV}")


def get_log_path() -> Path:
    return get_workspace_path() / LOG_FILE


def get_preferences_path() -> Path:
    return get_workspace_path() / PREFERENCES_FILE


def get_db_path() -> Path:
    return get_workspace_path() / DB_FILE
