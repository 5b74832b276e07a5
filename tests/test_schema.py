"""Tests for the board data model (schema.py)"""
from datetime import date

import pytest

from zingo.errors import SchemaError
from zingo.schema import (
    PERSON_COLORS, Board, Card, Column, Difficulty, Person, Settings, Workspace,
    format_color, parse_color,
)


class TestColors:

    def test_format_is_argb_hex(self):
        assert format_color(0xFFEF5350) == "#FFEF5350"
        assert format_color(0x00000000) == "#00000000"

    def test_parse_hex_forms(self):
        assert parse_color("#FFEF5350") == 0xFFEF5350
        assert parse_color("ffef5350") == 0xFFEF5350
        assert parse_color("#EF5350") == 0xFFEF5350

    def test_parse_signed_32bit_int(self):
        assert parse_color(-1) == 0xFFFFFFFF
        assert parse_color(-1093292) == 0xFFEF5154

    def test_parse_unsigned_32bit_int(self):
        assert parse_color(0xFF42A5F5) == 0xFF42A5F5

    def test_parse_packed_64bit_value(self):
        # ARGB in the upper 32 bits, as a signed 64-bit long
        packed = (0xFFEF5350 << 32) - (1 << 64)
        assert parse_color(packed) == 0xFFEF5350

    @pytest.mark.parametrize("bad", [
        "#12345", "zzzzzzzz", "-FFFFFFF", "0x123456", "FF_FF_FF", "+FFFFFF",
        None, True, 1.5, [],
    ])
    def test_parse_rejects_garbage(self, bad):
        with pytest.raises(SchemaError):
            parse_color(bad)


class TestDifficulty:

    def test_from_str_known(self):
        assert Difficulty.from_str("hard") == Difficulty.HARD

    def test_from_str_unknown_falls_back(self):
        assert Difficulty.from_str("impossible") == Difficulty.EASY


class TestCard:

    def test_defaults(self):
        card = Card(id="c1", text="Write docs")
        assert card.description == ""
        assert card.difficulty == Difficulty.EASY
        assert card.color == 0xFFFFFFFF
        assert card.people == ()
        assert card.deadline is None
        assert card.deadline_timestamp() is None

    def test_to_dict_uses_wire_names(self):
        card = Card(
            id="c1", text="Ship", difficulty=Difficulty.MEDIUM, color=0xFF26A69A,
            people=(Person(id="p1", name="Ann", icon_color=0xFFEC407A),),
            deadline=date(2024, 5, 17),
        )
        data = card.to_dict()
        assert data["difficulty"] == "MEDIUM"
        assert data["color"] == "#FF26A69A"
        assert data["deadline"] == "2024-05-17"
        assert data["people"] == [{"id": "p1", "name": "Ann", "iconColor": "#FFEC407A"}]

    def test_deadline_timestamp_is_local_midnight(self):
        card = Card(id="c1", text="x", deadline=date(2024, 1, 2))
        ts = card.deadline_timestamp()
        assert ts is not None
        assert ts % 1000 == 0

    def test_from_dict_reads_legacy_integer_color(self):
        card = Card.from_dict({"id": "c1", "text": "x", "color": -1})
        assert card.color == 0xFFFFFFFF

    def test_from_dict_missing_text(self):
        with pytest.raises(SchemaError):
            Card.from_dict({"id": "c1"})

    def test_from_dict_bad_deadline(self):
        with pytest.raises(SchemaError):
            Card.from_dict({"id": "c1", "text": "x", "deadline": "tomorrow"})

    def test_from_dict_description_must_be_text(self):
        with pytest.raises(SchemaError):
            Card.from_dict({"id": "c1", "text": "x", "description": 5})
        assert Card.from_dict({"id": "c1", "text": "x", "description": None}).description == ""


class TestPerson:

    def test_default_icon_color_from_palette(self):
        assert Person(id="p", name="Bob").icon_color in PERSON_COLORS

    def test_missing_icon_color_gets_palette_color(self):
        person = Person.from_dict({"id": "p", "name": "Bob"})
        assert person.icon_color in PERSON_COLORS


class TestBoardRoundTrip:

    def test_empty_board(self):
        board = Board(id="b", title="Empty")
        assert Board.from_dict(board.to_dict()) == board

    def test_full_board(self):
        board = Board(id="b", title="Full", columns=(
            Column(id="col1", title="To do", cards=(
                Card(id="c1", text="plain"),
                Card(
                    id="c2", text="rich", description="details",
                    difficulty=Difficulty.HARD, color=0x80FF0000,
                    people=(
                        Person(id="p1", name="Ann", icon_color=0xFFEF5350),
                        Person(id="p2", name="Ann", icon_color=0xFF5C6BC0),
                    ),
                    deadline=date(2025, 12, 31),
                ),
            )),
            Column(id="col2", title="Done"),
        ))
        assert Board.from_dict(board.to_dict()) == board

    def test_board_is_immutable(self):
        board = Board(id="b", title="t")
        with pytest.raises(AttributeError):
            board.title = "changed"

    def test_columns_must_be_list(self):
        with pytest.raises(SchemaError):
            Board.from_dict({"id": "b", "title": "t", "columns": "nope"})


class TestWorkspace:

    def test_round_trip(self):
        ws = Workspace(id="w", title="Home", create_date=date(2024, 3, 1))
        data = ws.to_dict()
        assert data == {"id": "w", "title": "Home", "columns": [], "createDate": "2024-03-01"}
        assert Workspace.from_dict(data) == ws

    def test_create_date_required(self):
        with pytest.raises(SchemaError):
            Workspace.from_dict({"id": "w", "title": "Home", "columns": []})


class TestSettings:

    def test_defaults(self):
        settings = Settings.default()
        assert settings.dark_theme is False
        assert settings.locale == "ru"

    def test_round_trip(self):
        settings = Settings(folder_path="/tmp", dark_theme=True, locale="en")
        assert settings.to_dict() == {"folderPath": "/tmp", "darkTheme": True, "locale": "en"}
        assert Settings.from_dict(settings.to_dict()) == settings

    def test_dark_theme_must_be_bool(self):
        with pytest.raises(SchemaError):
            Settings.from_dict({"folderPath": "/tmp", "darkTheme": "yes", "locale": "en"})
