# tests/test_core/test_viewport.py
"""Cursor movement and scrolling of `Viewport`."""

import random

import pytest

from tedit.core.Document import Document
from tedit.core.Position import Position
from tedit.core.Viewport import Direction, Viewport


@pytest.fixture
def document() -> Document:
    return Document.from_lines(["hello", "hi", "", "a longer line"])


def moved(document: Document, start: Position, direction: Direction, page: int = 10) -> Position:
    viewport = Viewport()
    viewport.cursor = start
    viewport.move_cursor(direction, document, page)
    return viewport.cursor


def test_up_at_top_stays(document) -> None:
    assert moved(document, Position(2, 0), Direction.UP) == Position(2, 0)


def test_down_stops_one_past_last_row(document) -> None:
    assert moved(document, Position(0, 3), Direction.DOWN) == Position(0, 4)
    assert moved(document, Position(0, 4), Direction.DOWN) == Position(0, 4)


def test_down_clamps_column_to_shorter_row(document) -> None:
    assert moved(document, Position(5, 0), Direction.DOWN) == Position(2, 1)


def test_left_at_row_start_wraps_to_previous_row_end(document) -> None:
    assert moved(document, Position(0, 1), Direction.LEFT) == Position(5, 0)
    assert moved(document, Position(0, 0), Direction.LEFT) == Position(0, 0)


def test_right_at_row_end_wraps_to_next_row(document) -> None:
    assert moved(document, Position(2, 1), Direction.RIGHT) == Position(0, 2)
    assert moved(document, Position(0, 4), Direction.RIGHT) == Position(0, 4)


def test_home_and_end(document) -> None:
    assert moved(document, Position(3, 3), Direction.HOME) == Position(0, 3)
    assert moved(document, Position(3, 3), Direction.END) == Position(13, 3)


def test_page_moves_saturate(document) -> None:
    assert moved(document, Position(0, 3), Direction.PAGE_UP, page=2) == Position(0, 1)
    assert moved(document, Position(0, 1), Direction.PAGE_UP, page=5) == Position(0, 0)
    assert moved(document, Position(0, 0), Direction.PAGE_DOWN, page=2) == Position(0, 2)
    assert moved(document, Position(0, 3), Direction.PAGE_DOWN, page=5) == Position(0, 4)


def test_direction_accepts_key_names() -> None:
    assert Direction("pageup") is Direction.PAGE_UP
    assert Direction("end") is Direction.END


def test_scroll_follows_cursor_down_and_right() -> None:
    viewport = Viewport()
    viewport.cursor = Position(30, 12)
    viewport.scroll(width=20, height=10)
    assert viewport.offset == Position(11, 3)


def test_scroll_follows_cursor_back_up_and_left() -> None:
    viewport = Viewport()
    viewport.offset = Position(10, 10)
    viewport.cursor = Position(4, 2)
    viewport.scroll(width=20, height=10)
    assert viewport.offset == Position(4, 2)


def test_scroll_is_idempotent() -> None:
    viewport = Viewport()
    viewport.cursor = Position(50, 40)
    viewport.scroll(width=8, height=5)
    first = viewport.offset
    viewport.scroll(width=8, height=5)
    assert viewport.offset == first


def test_scroll_keeps_offset_when_cursor_visible() -> None:
    viewport = Viewport()
    viewport.offset = Position(2, 3)
    viewport.cursor = Position(5, 6)
    viewport.scroll(width=20, height=10)
    assert viewport.offset == Position(2, 3)


def test_scroll_with_zero_sized_window_keeps_cursor_at_offset() -> None:
    viewport = Viewport()
    viewport.cursor = Position(3, 7)
    viewport.scroll(width=0, height=0)
    assert viewport.offset == Position(3, 7)


@pytest.mark.parametrize("seed", [0, 1, 7, 42])
def test_random_moves_keep_cursor_on_document(document, seed) -> None:
    rng = random.Random(seed)
    viewport = Viewport()
    width, height = 4, 2

    for _ in range(500):
        viewport.move_cursor(rng.choice(list(Direction)), document, height)
        viewport.scroll(width, height)

        x, y = viewport.cursor.x, viewport.cursor.y
        row = document.row(y)
        assert 0 <= y <= len(document)
        assert 0 <= x <= (len(row) if row is not None else 0)
        assert viewport.offset.y <= y < viewport.offset.y + height
        assert viewport.offset.x <= x < viewport.offset.x + width
