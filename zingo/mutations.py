"""
Copy-on-write transforms over board and workspace snapshots.

Every function takes a snapshot plus parameters and returns a new snapshot;
the input is never modified. Ids that do not resolve make the call a no-op
and the original snapshot is returned as-is.
"""
from dataclasses import replace
from datetime import date
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .schema import Board, Card, Column, Person, Workspace, new_id

DEFAULT_COLUMN_TITLES: Dict[str, Tuple[str, str, str]] = {
    "en": ("To do", "In progress", "Done"),
    "ru": ("Сделать", "В прогрессе", "Готово"),
    "es": ("Por hacer", "En progreso", "Hecho"),
    "fr": ("À faire", "En cours", "Terminé"),
    "de": ("Zu erledigen", "In Arbeit", "Erledigt"),
}


def default_column_titles(locale: str = "en") -> Tuple[str, str, str]:
    return DEFAULT_COLUMN_TITLES.get(locale, DEFAULT_COLUMN_TITLES["en"])


def _map_column(board: Board, column_id: str, fn) -> Board:
    """Apply fn to the column with column_id; same board if nothing changed."""
    changed = False
    columns = []
    for col in board.columns:
        if col.id == column_id:
            new_col = fn(col)
            changed = changed or new_col is not col
            columns.append(new_col)
        else:
            columns.append(col)
    if not changed:
        return board
    return replace(board, columns=tuple(columns))


def _map_card(board: Board, column_id: str, card_id: str, fn) -> Board:
    def on_column(col: Column) -> Column:
        changed = False
        cards = []
        for card in col.cards:
            if card.id == card_id:
                new_card = fn(card)
                changed = changed or new_card is not card
                cards.append(new_card)
            else:
                cards.append(card)
        return replace(col, cards=tuple(cards)) if changed else col

    return _map_column(board, column_id, on_column)


# ── Queries ──────────────────────────────────────────────────────────────────


def count_cards(board: Board) -> int:
    return sum(len(col.cards) for col in board.columns)


def find_card(board: Board, card_id: str) -> Optional[Tuple[Column, Card]]:
    """Locate a card anywhere on the board."""
    for col in board.columns:
        for card in col.cards:
            if card.id == card_id:
                return col, card
    return None


def all_ids(board: Board) -> Set[str]:
    """Every id used on the board: board, columns, cards and people."""
    ids = {board.id}
    for col in board.columns:
        ids.add(col.id)
        for card in col.cards:
            ids.add(card.id)
            ids.update(p.id for p in card.people)
    return ids


# ── Columns ──────────────────────────────────────────────────────────────────


def add_column(board: Board, title: str) -> Board:
    return replace(board, columns=board.columns + (Column(id=new_id(), title=title),))


def rename_column(board: Board, column_id: str, title: str) -> Board:
    return _map_column(board, column_id, lambda col: replace(col, title=title))


def delete_column(board: Board, column_id: str) -> Board:
    """Drop the column together with its cards."""
    columns = tuple(col for col in board.columns if col.id != column_id)
    if len(columns) == len(board.columns):
        return board
    return replace(board, columns=columns)


# ── Cards ────────────────────────────────────────────────────────────────────


def add_card(board: Board, column_id: str, card: Card) -> Board:
    """
    Append card to the column under a freshly generated id.

    Any id the caller supplied is discarded, so template cards never
    collide with existing ones.
    """
    taken = all_ids(board)
    card_id = new_id()
    while card_id in taken:
        card_id = new_id()
    fresh = replace(card, id=card_id)
    return _map_column(board, column_id, lambda col: replace(col, cards=col.cards + (fresh,)))


def update_card(board: Board, column_id: str, card: Card) -> Board:
    """Replace the card with the same id inside column_id."""
    return _map_card(board, column_id, card.id, lambda _old: card)


def delete_card(board: Board, column_id: str, card_id: str) -> Board:
    def on_column(col: Column) -> Column:
        cards = tuple(c for c in col.cards if c.id != card_id)
        return col if len(cards) == len(col.cards) else replace(col, cards=cards)

    return _map_column(board, column_id, on_column)


def move_card(board: Board, card_id: str, source_column_id: str, target_column_id: str) -> Board:
    """
    Remove the card from the source column and append it to the target.

    No-op when the card is not in the source column or the target column
    does not exist. With source == target the card ends up last in that
    column; callers treat that case as a no-op before calling.
    """
    source = board.column(source_column_id)
    target = board.column(target_column_id)
    if source is None or target is None:
        return board
    card = next((c for c in source.cards if c.id == card_id), None)
    if card is None:
        return board

    columns = []
    for col in board.columns:
        cards = col.cards
        if col.id == source_column_id:
            cards = tuple(c for c in cards if c.id != card_id)
        if col.id == target_column_id:
            cards = cards + (card,)
        columns.append(replace(col, cards=cards) if cards is not col.cards else col)
    return replace(board, columns=tuple(columns))


def reorder_card(board: Board, column_id: str, card_id: str, index: int) -> Board:
    """Move a card to position index within its column (clamped)."""
    def on_column(col: Column) -> Column:
        cards: List[Card] = list(col.cards)
        pos = next((i for i, c in enumerate(cards) if c.id == card_id), None)
        if pos is None:
            return col
        card = cards.pop(pos)
        target = max(0, min(index, len(cards)))
        if target == pos:
            return col
        cards.insert(target, card)
        return replace(col, cards=tuple(cards))

    return _map_column(board, column_id, on_column)


# ── People ───────────────────────────────────────────────────────────────────


def add_person(
    board: Board,
    column_id: str,
    card_id: str,
    name: str,
    icon_color: Optional[int] = None,
) -> Board:
    """Attach a new card-scoped person. Blank names are ignored."""
    name = name.strip()
    if not name:
        return board
    if icon_color is None:
        person = Person(id=new_id(), name=name)
    else:
        person = Person(id=new_id(), name=name, icon_color=icon_color)
    return _map_card(board, column_id, card_id, lambda c: replace(c, people=c.people + (person,)))


def remove_person(board: Board, column_id: str, card_id: str, person_id: str) -> Board:
    def on_card(card: Card) -> Card:
        people = tuple(p for p in card.people if p.id != person_id)
        return card if len(people) == len(card.people) else replace(card, people=people)

    return _map_card(board, column_id, card_id, on_card)


# ── Workspaces ───────────────────────────────────────────────────────────────


def new_board(workspace_id: str, title: str, locale: str = "en") -> Board:
    """Board seeded with the default columns, sharing the workspace id."""
    columns = tuple(Column(id=new_id(), title=t) for t in default_column_titles(locale))
    return Board(id=workspace_id, title=title, columns=columns)


def create_workspace(title: str, locale: str = "en") -> Tuple[Workspace, Board]:
    """A new workspace and its companion board."""
    workspace = Workspace(id=new_id(), title=title, columns=(), create_date=date.today())
    return workspace, new_board(workspace.id, title, locale)


def rename_workspace(workspace: Workspace, title: str) -> Workspace:
    return replace(workspace, title=title)


def delete_workspace(workspaces: Iterable[Workspace], workspace_id: str) -> List[Workspace]:
    return [w for w in workspaces if w.id != workspace_id]
