"""Shared test fixtures for Zingo tests."""

import sys
from pathlib import Path

import pytest

# Ensure the package is importable without installing
sys.path.insert(0, str(Path(__file__).parent.parent))

from zingo.schema import Board, Card, Column
from zingo.store import FileStore


@pytest.fixture
def store(tmp_path):
    return FileStore(str(tmp_path / "zingo"))


@pytest.fixture
def board():
    """Board with A=[c1, c2], B=[]."""
    return Board(
        id="ws-1",
        title="Project",
        columns=(
            Column(id="A", title="To do", cards=(
                Card(id="c1", text="first"),
                Card(id="c2", text="second"),
            )),
            Column(id="B", title="Done"),
        ),
    )
