"""
Board storage backend (JSON files).

One pretty-printed document per entity under a per-user directory:

    settings.json           {folderPath, darkTheme, locale}
    workspace_<id>.json     {id, title, columns, createDate}
    board_<id>.json         {id, title, columns}

Loads never raise: a missing or unparseable document maps to an empty or
default result. Writes are not caught; an OSError fails the calling action.
"""
import json
import logging
from pathlib import Path
from typing import List, Optional, Dict, Any

from .errors import SchemaError
from .schema import Board, Settings, Workspace

logger = logging.getLogger(__name__)

DEFAULT_DIR = Path.home() / ".zingo"
SETTINGS_FILE = "settings.json"
WORKSPACE_PREFIX = "workspace_"
BOARD_PREFIX = "board_"


class FileStore:
    """JSON-file store for workspaces, boards and settings."""

    def __init__(self, directory: Optional[str] = None):
        """Initialize store and create the directory if needed."""
        self.directory = Path(directory).expanduser() if directory else DEFAULT_DIR
        self.directory.mkdir(parents=True, exist_ok=True)

    # ── Paths ────────────────────────────────────────────────────────────────

    @property
    def settings_path(self) -> Path:
        return self.directory / SETTINGS_FILE

    def workspace_path(self, workspace_id: str) -> Path:
        return self.directory / f"{WORKSPACE_PREFIX}{workspace_id}.json"

    def board_path(self, board_id: str) -> Path:
        return self.directory / f"{BOARD_PREFIX}{board_id}.json"

    # ── Raw document I/O ─────────────────────────────────────────────────────

    def _read(self, path: Path) -> Optional[Dict[str, Any]]:
        """Read one document. None when absent or corrupt (logged differently)."""
        if not path.exists():
            logger.debug(f"No document at {path}")
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Unreadable document {path}: {e}")
            return None

    def _write(self, path: Path, data: Dict[str, Any]) -> None:
        # Write to temp, then rename over the target
        tmp_path = path.with_suffix(".json.tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.write("\n")
            tmp_path.replace(path)
        except Exception:
            tmp_path.unlink(missing_ok=True)
            raise
        logger.debug(f"Wrote {path}")

    def _delete(self, path: Path) -> None:
        if path.exists():
            path.unlink()
            logger.info(f"Deleted {path.name}")

    # ── Workspaces ───────────────────────────────────────────────────────────

    def load_all_workspaces(self) -> List[Workspace]:
        """Every parseable workspace document; broken ones are skipped."""
        if not self.directory.exists():
            return []
        workspaces = []
        for path in sorted(self.directory.glob(f"{WORKSPACE_PREFIX}*.json")):
            data = self._read(path)
            if data is None:
                continue
            try:
                workspaces.append(Workspace.from_dict(data))
            except SchemaError as e:
                logger.warning(f"Skipping workspace document {path.name}: {e}")
        return workspaces

    def save_workspace(self, workspace: Workspace) -> None:
        self._write(self.workspace_path(workspace.id), workspace.to_dict())

    def delete_workspace(self, workspace_id: str) -> None:
        """Remove the workspace document only; the board is deleted separately."""
        self._delete(self.workspace_path(workspace_id))

    # ── Boards ───────────────────────────────────────────────────────────────

    def load_board(self, board_id: str) -> Optional[Board]:
        """The stored board, or None if it is missing or cannot be decoded."""
        data = self._read(self.board_path(board_id))
        if data is None:
            return None
        try:
            return Board.from_dict(data)
        except SchemaError as e:
            logger.warning(f"Corrupt board document for {board_id}: {e}")
            return None

    def save_board(self, board: Board) -> None:
        self._write(self.board_path(board.id), board.to_dict())

    def delete_board(self, board_id: str) -> None:
        self._delete(self.board_path(board_id))

    # ── Settings ─────────────────────────────────────────────────────────────

    def load_settings(self) -> Settings:
        """
        Stored settings, or defaults.

        A missing file is created with the defaults. A corrupt file is left
        untouched and defaults are returned for this session.
        """
        path = self.settings_path
        if not path.exists():
            settings = Settings.default()
            self.save_settings(settings)
            logger.info(f"Created default settings at {path}")
            return settings

        data = self._read(path)
        if data is not None:
            try:
                return Settings.from_dict(data)
            except SchemaError as e:
                logger.warning(f"Corrupt settings document {path}: {e}")
        return Settings.default()

    def save_settings(self, settings: Settings) -> None:
        self._write(self.settings_path, settings.to_dict())
