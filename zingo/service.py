"""
Board service: applies mutations and persists the result.

Each call loads the stored snapshot, runs the pure transform from
mutations.py, writes the new snapshot synchronously and then notifies
subscribers. Only open_board creates a missing board; mutations aimed at
a workspace without one are ignored and return None. Events:

    workspaces_changed   workspaces=list[Workspace]
    board_updated        board=Board
"""
import asyncio
import logging
from typing import Callable, Dict, List, Optional

from . import mutations
from .schema import Board, Card, Workspace
from .store import FileStore

logger = logging.getLogger(__name__)


class BoardService:
    """Routes user intents to snapshot mutations and file writes."""

    def __init__(self, store: FileStore, locale: str = "en"):
        self.store = store
        self.locale = locale
        self.subscribers: Dict[str, list] = {}  # event_type -> list of callbacks

    def subscribe(self, event_type: str, callback: Callable) -> None:
        """Register a callback for an event type."""
        self.subscribers.setdefault(event_type, []).append(callback)

    def _emit(self, event_type: str, **kwargs) -> None:
        for callback in self.subscribers.get(event_type, []):
            try:
                callback(**kwargs)
            except Exception:
                logger.exception(f"Error in {event_type} callback")

    # ── Workspaces ───────────────────────────────────────────────────────────

    def list_workspaces(self) -> List[Workspace]:
        return self.store.load_all_workspaces()

    def create_workspace(self, title: str, locale: Optional[str] = None) -> Workspace:
        """Create and persist a workspace plus its default board."""
        workspace, board = mutations.create_workspace(title, locale or self.locale)
        self.store.save_workspace(workspace)
        self.store.save_board(board)
        logger.info(f"Created workspace {workspace.id} ({title!r})")
        self._emit("workspaces_changed", workspaces=self.list_workspaces())
        return workspace

    def rename_workspace(self, workspace_id: str, title: str) -> Optional[Workspace]:
        for workspace in self.list_workspaces():
            if workspace.id == workspace_id:
                renamed = mutations.rename_workspace(workspace, title)
                self.store.save_workspace(renamed)
                self._emit("workspaces_changed", workspaces=self.list_workspaces())
                return renamed
        logger.debug(f"Rename ignored, no workspace {workspace_id}")
        return None

    def delete_workspace(self, workspace_id: str) -> None:
        """Delete the workspace document and its board document."""
        self.store.delete_workspace(workspace_id)
        self.store.delete_board(workspace_id)
        self._emit("workspaces_changed", workspaces=self.list_workspaces())

    # ── Boards ───────────────────────────────────────────────────────────────

    def open_board(self, workspace_id: str, title: str = "New Board") -> Board:
        """The workspace's board; a default one is created and saved if absent."""
        board = self.store.load_board(workspace_id)
        if board is None:
            board = mutations.new_board(workspace_id, title, self.locale)
            self.store.save_board(board)
            logger.info(f"Created default board for workspace {workspace_id}")
        return board

    async def open_board_async(self, workspace_id: str, title: str = "New Board") -> Board:
        """Screen-entry load. Yields to the loop once, then reads on the loop thread."""
        await asyncio.sleep(0)
        return self.open_board(workspace_id, title)

    def _current(self, workspace_id: str) -> Optional[Board]:
        """Stored board only; mutations never create one."""
        board = self.store.load_board(workspace_id)
        if board is None:
            logger.debug(f"No board for workspace {workspace_id}, mutation ignored")
        return board

    def _apply(self, workspace_id: str, transform: Callable[[Board], Board]) -> Optional[Board]:
        board = self._current(workspace_id)
        if board is None:
            return None
        updated = transform(board)
        if updated is board:
            return board
        self.store.save_board(updated)
        self._emit("board_updated", board=updated)
        return updated

    def add_column(self, workspace_id: str, title: str) -> Optional[Board]:
        return self._apply(workspace_id, lambda b: mutations.add_column(b, title))

    def rename_column(self, workspace_id: str, column_id: str, title: str) -> Optional[Board]:
        return self._apply(workspace_id, lambda b: mutations.rename_column(b, column_id, title))

    def delete_column(self, workspace_id: str, column_id: str) -> Optional[Board]:
        return self._apply(workspace_id, lambda b: mutations.delete_column(b, column_id))

    def add_card(self, workspace_id: str, column_id: str, card: Card) -> Optional[Board]:
        return self._apply(workspace_id, lambda b: mutations.add_card(b, column_id, card))

    def update_card(self, workspace_id: str, column_id: str, card: Card) -> Optional[Board]:
        return self._apply(workspace_id, lambda b: mutations.update_card(b, column_id, card))

    def delete_card(self, workspace_id: str, column_id: str, card_id: str) -> Optional[Board]:
        return self._apply(workspace_id, lambda b: mutations.delete_card(b, column_id, card_id))

    def move_card(
        self, workspace_id: str, card_id: str, source_column_id: str, target_column_id: str
    ) -> Optional[Board]:
        """Drop handler. Dropping onto the source column does nothing."""
        if source_column_id == target_column_id:
            return self._current(workspace_id)
        return self._apply(
            workspace_id,
            lambda b: mutations.move_card(b, card_id, source_column_id, target_column_id),
        )

    def reorder_card(self, workspace_id: str, column_id: str, card_id: str, index: int) -> Optional[Board]:
        return self._apply(
            workspace_id, lambda b: mutations.reorder_card(b, column_id, card_id, index)
        )

    def add_person(
        self,
        workspace_id: str,
        column_id: str,
        card_id: str,
        name: str,
        icon_color: Optional[int] = None,
    ) -> Optional[Board]:
        return self._apply(
            workspace_id,
            lambda b: mutations.add_person(b, column_id, card_id, name, icon_color),
        )

    def remove_person(self, workspace_id: str, column_id: str, card_id: str, person_id: str) -> Optional[Board]:
        return self._apply(
            workspace_id, lambda b: mutations.remove_person(b, column_id, card_id, person_id)
        )
