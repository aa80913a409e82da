# tests/ui/test_draw_screen.py
"""Tests for the renderer.
=========================

The status and message bars are checked through the pure compose helpers.
`DrawScreen.draw` runs against a mocked curses window with colours disabled,
so no terminal is needed.
"""

import curses
from unittest.mock import patch

import pytest

from tedit.core.Document import Document
from tedit.core.Position import Position
from tedit.ui.DrawScreen import (
    MONOCHROME,
    NO_NAME,
    DrawScreen,
    compose_message_bar,
    compose_status_bar,
    compose_welcome,
)
from tedit.ui.Terminal import TerminalError


def test_status_bar_unnamed_document(make_editor) -> None:
    editor = make_editor(lines=["a", "b", "c"])
    bar = compose_status_bar(editor, 60)
    assert bar.startswith(f"{NO_NAME} - 3 lines")
    assert bar.endswith("No filetype | 1/3")
    assert len(bar) == 60


def test_status_bar_named_dirty_document(make_editor) -> None:
    editor = make_editor(lines=["x = 1", "y = 2"], file_name="a_rather_long_module_name.py")
    editor.document.dirty = True
    editor.cursor = Position(0, 1)
    bar = compose_status_bar(editor, 80)
    assert bar.startswith("a_rather_long_module - 2 lines (modified)")
    assert bar.endswith("Python | 2/2")


def test_status_bar_truncates_to_width(make_editor) -> None:
    editor = make_editor(lines=["a"])
    assert len(compose_status_bar(editor, 10)) == 10


def test_message_bar_blank_after_expiry(make_editor, clock) -> None:
    editor = make_editor()
    editor.status("Saved")
    assert compose_message_bar(editor, 80) == "Saved"
    clock.advance(5.0)
    assert compose_message_bar(editor, 80) == ""


def test_message_bar_truncates(make_editor) -> None:
    editor = make_editor()
    editor.status("x" * 100)
    assert compose_message_bar(editor, 20) == "x" * 20


def test_welcome_is_centred_and_fits() -> None:
    line = compose_welcome(40)
    assert line.startswith("~")
    assert "tedit v" in line
    assert len(line) <= 40


@pytest.fixture
def drawn_editor(make_editor):
    editor = make_editor(lines=["hello", "world"])
    editor.terminal.width, editor.terminal.height = 20, 5
    drawer = DrawScreen(editor)
    editor.drawer = drawer
    return editor, drawer


@patch("tedit.ui.DrawScreen.curses.has_colors", return_value=False)
def test_draw_renders_rows_tildes_and_bars(_has_colors, drawn_editor) -> None:
    editor, drawer = drawn_editor
    editor.cursor = Position(3, 1)
    drawer.draw()

    stdscr = editor.terminal.stdscr
    texts = [c.args[2] for c in stdscr.addstr.call_args_list]
    assert texts == ["hello", "world", "~", "~", "~"]
    status_line = stdscr.insstr.call_args_list[0].args
    assert status_line[0] == 5
    assert status_line[2].startswith(NO_NAME)
    stdscr.move.assert_called_with(1, 3)
    stdscr.refresh.assert_called_once()
    assert drawer.colors["status"] == MONOCHROME["status"]


@patch("tedit.ui.DrawScreen.curses.has_colors", return_value=False)
def test_draw_welcome_on_empty_document(_has_colors, make_editor) -> None:
    editor = make_editor()
    editor.terminal.width, editor.terminal.height = 40, 9
    DrawScreen(editor).draw()
    rows = {c.args[0]: c.args[2] for c in editor.terminal.stdscr.addstr.call_args_list}
    assert "tedit v" in rows[3]
    assert rows[0] == "~"


@patch("tedit.ui.DrawScreen.curses.has_colors", return_value=False)
def test_draw_respects_horizontal_offset(_has_colors, drawn_editor) -> None:
    editor, drawer = drawn_editor
    editor.viewport.offset = Position(2, 0)
    editor.cursor = Position(4, 0)
    drawer.draw()
    texts = [c.args[2] for c in editor.terminal.stdscr.addstr.call_args_list]
    assert texts[:2] == ["llo", "rld"]
    editor.terminal.stdscr.move.assert_called_with(0, 2)


@patch("tedit.ui.DrawScreen.curses.has_colors", return_value=False)
def test_draw_failure_raises_terminal_error(_has_colors, drawn_editor) -> None:
    editor, drawer = drawn_editor
    editor.terminal.stdscr.erase.side_effect = curses.error("boom")
    with pytest.raises(TerminalError):
        drawer.draw()
