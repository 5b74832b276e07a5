"""
Board data model.

Workspace ─┬─ Board (same id) ─── Column* ─── Card* ─── Person*
           └─ createDate

Every entity is an immutable snapshot: changes produce a new value via
dataclasses.replace() (see mutations.py), never in-place edits.
JSON keys keep the camelCase names of the on-disk documents.
"""
import random
import string
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple, Dict, Any

from .errors import SchemaError

WHITE = 0xFFFFFFFF

# Material palette used for person avatars
PERSON_COLORS: Tuple[int, ...] = (
    0xFFEF5350, 0xFFEC407A, 0xFFAB47BC,
    0xFF7E57C2, 0xFF5C6BC0, 0xFF42A5F5,
    0xFF29B6F6, 0xFF26C6DA, 0xFF26A69A,
    0xFF66BB6A, 0xFF9CCC65, 0xFFFFEE58,
    0xFFFFCA28, 0xFFFFA726, 0xFFFF7043,
)


def new_id() -> str:
    """Fresh random entity id."""
    return str(uuid.uuid4())


def random_person_color() -> int:
    return random.choice(PERSON_COLORS)


# ── Colours ──────────────────────────────────────────────────────────────────
#
# In memory: unsigned 32-bit ARGB int. On disk: "#AARRGGBB".


def format_color(argb: int) -> str:
    return f"#{argb & 0xFFFFFFFF:08X}"


def parse_color(value: Any) -> int:
    """
    Decode a colour into unsigned 32-bit ARGB.

    Accepts the canonical hex string ("#AARRGGBB", "#RRGGBB", "#" optional)
    and, for files written by older versions, integers: a signed or unsigned
    32-bit ARGB value, or a 64-bit packed sRGB value with ARGB in the upper
    32 bits.
    """
    if isinstance(value, bool):
        raise SchemaError(f"Invalid color: {value!r}")
    if isinstance(value, int):
        if -(1 << 31) <= value <= 0xFFFFFFFF:
            return value & 0xFFFFFFFF
        packed = value & 0xFFFFFFFFFFFFFFFF
        return (packed >> 32) & 0xFFFFFFFF
    if isinstance(value, str):
        digits = value.strip().lstrip("#")
        if len(digits) in (6, 8) and all(c in string.hexdigits for c in digits):
            argb = int(digits, 16)
            return argb if len(digits) == 8 else 0xFF000000 | argb
    raise SchemaError(f"Invalid color: {value!r}")


def _parse_date(value: Any) -> date:
    if not isinstance(value, str):
        raise SchemaError(f"Invalid date: {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise SchemaError(f"Invalid date: {value!r}") from e


def _require(data: Dict[str, Any], key: str, kind: type) -> Any:
    if not isinstance(data, dict):
        raise SchemaError(f"Expected an object, got {type(data).__name__}")
    if key not in data:
        raise SchemaError(f"Missing field: {key}")
    value = data[key]
    if not isinstance(value, kind) or (kind is not bool and isinstance(value, bool)):
        raise SchemaError(f"Field {key!r} must be {kind.__name__}, got {type(value).__name__}")
    return value


def _columns_from(data: Dict[str, Any]) -> Tuple["Column", ...]:
    raw = _require(data, "columns", list)
    return tuple(Column.from_dict(c) for c in raw)


# ── Entities ─────────────────────────────────────────────────────────────────


class Difficulty(Enum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"

    @classmethod
    def from_str(cls, value: str) -> "Difficulty":
        try:
            return cls[str(value).upper()]
        except KeyError:
            return cls.EASY


@dataclass(frozen=True)
class Person:
    """A card-scoped assignee. Not shared between cards."""
    id: str
    name: str
    icon_color: int = field(default_factory=random_person_color)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "iconColor": format_color(self.icon_color),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Person":
        icon = data.get("iconColor") if isinstance(data, dict) else None
        return cls(
            id=_require(data, "id", str),
            name=_require(data, "name", str),
            icon_color=parse_color(icon) if icon is not None else random_person_color(),
        )


@dataclass(frozen=True)
class Card:
    id: str
    text: str
    description: str = ""
    difficulty: Difficulty = Difficulty.EASY
    color: int = WHITE
    people: Tuple[Person, ...] = ()
    deadline: Optional[date] = None

    def deadline_timestamp(self) -> Optional[int]:
        """Epoch milliseconds of local midnight on the deadline day."""
        if self.deadline is None:
            return None
        midnight = datetime(self.deadline.year, self.deadline.month, self.deadline.day)
        return int(midnight.timestamp() * 1000)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "description": self.description,
            "difficulty": self.difficulty.value,
            "color": format_color(self.color),
            "people": [p.to_dict() for p in self.people],
            "deadline": self.deadline.isoformat() if self.deadline else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Card":
        card_id = _require(data, "id", str)
        text = _require(data, "text", str)
        people = data.get("people") or []
        if not isinstance(people, list):
            raise SchemaError(f"Card {card_id}: people must be a list")
        description = data.get("description") or ""
        if not isinstance(description, str):
            raise SchemaError(f"Card {card_id}: description must be str")
        deadline = data.get("deadline")
        return cls(
            id=card_id,
            text=text,
            description=description,
            difficulty=Difficulty.from_str(data.get("difficulty", "EASY")),
            color=parse_color(data["color"]) if data.get("color") is not None else WHITE,
            people=tuple(Person.from_dict(p) for p in people),
            deadline=_parse_date(deadline) if deadline else None,
        )


@dataclass(frozen=True)
class Column:
    id: str
    title: str
    cards: Tuple[Card, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "cards": [c.to_dict() for c in self.cards],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Column":
        cards = data.get("cards", []) if isinstance(data, dict) else None
        if not isinstance(cards, list):
            raise SchemaError("Column cards must be a list")
        return cls(
            id=_require(data, "id", str),
            title=_require(data, "title", str),
            cards=tuple(Card.from_dict(c) for c in cards),
        )


@dataclass(frozen=True)
class Board:
    """Columns of one workspace. `id` always equals the owning workspace id."""
    id: str
    title: str
    columns: Tuple[Column, ...] = ()

    def column(self, column_id: str) -> Optional[Column]:
        for col in self.columns:
            if col.id == column_id:
                return col
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "columns": [c.to_dict() for c in self.columns],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Board":
        return cls(
            id=_require(data, "id", str),
            title=_require(data, "title", str),
            columns=_columns_from(data),
        )


@dataclass(frozen=True)
class Workspace:
    id: str
    title: str
    columns: Tuple[Column, ...] = ()
    create_date: date = field(default_factory=date.today)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "columns": [c.to_dict() for c in self.columns],
            "createDate": self.create_date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Workspace":
        return cls(
            id=_require(data, "id", str),
            title=_require(data, "title", str),
            columns=_columns_from(data),
            create_date=_parse_date(_require(data, "createDate", str)),
        )


@dataclass(frozen=True)
class Settings:
    """Process-wide user preferences."""
    folder_path: str
    dark_theme: bool = False
    locale: str = "ru"

    @classmethod
    def default(cls) -> "Settings":
        return cls(folder_path=str(Path.home()), dark_theme=False, locale="ru")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "folderPath": self.folder_path,
            "darkTheme": self.dark_theme,
            "locale": self.locale,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        return cls(
            folder_path=_require(data, "folderPath", str),
            dark_theme=_require(data, "darkTheme", bool),
            locale=_require(data, "locale", str),
        )
