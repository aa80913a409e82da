# tedit/ui/Terminal.py
"""Terminal.py
==============
The curses-backed terminal owned by the editor session.

`Terminal` is a context manager: entering puts the screen into an
editor-friendly mode (raw input, no echo, keypad decoding, short ESC delay),
exiting restores it. Together with `curses.wrapper` this guarantees the
terminal is restored on every exit path, including unrecoverable errors.

Any `curses.error` raised while reading a key or clearing the screen
surfaces as `TerminalError`, which the session treats as unrecoverable.
"""

from __future__ import annotations

import curses
import logging
from typing import Optional

from tedit.ui.KeyBinder import get_key_input

# Rows reserved below the text area: status bar and message bar.
BAR_ROWS = 2


class TerminalError(OSError):
    """Terminal I/O failed (drawing or reading input)."""


class Terminal:
    """Class Terminal
    =================
    Attributes:
        stdscr (curses.window): The standard screen window.
    """

    def __init__(self, stdscr: "curses.window") -> None:
        self.stdscr = stdscr
        self._entered = False

    def __enter__(self) -> "Terminal":
        self.enter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.exit()

    def enter(self) -> None:
        try:
            curses.raw()  # deliver all control chars (including ^Q, ^S) to us
        except curses.error:
            curses.cbreak()
        curses.noecho()
        self.stdscr.keypad(True)
        try:
            curses.set_escdelay(25)
        except (AttributeError, curses.error):
            pass
        try:
            curses.use_default_colors()
        except curses.error:
            pass
        self.stdscr.scrollok(False)
        self.stdscr.clearok(True)
        self.stdscr.erase()
        self._entered = True
        logging.debug("Terminal: entered raw editor mode.")

    def exit(self) -> None:
        if not self._entered:
            return
        try:
            self.stdscr.keypad(False)
            curses.noraw()
            curses.echo()
        except curses.error as e:
            logging.debug("Terminal: restoring modes failed: %r", e)
        self._entered = False
        logging.debug("Terminal: restored terminal modes.")

    def size(self) -> tuple[int, int]:
        """(width, height) of the text area, excluding the two bottom bars."""
        rows, cols = self.stdscr.getmaxyx()
        return cols, max(0, rows - BAR_ROWS)

    def read_key(self) -> str:
        """Blocks for the next key and returns its logical name."""
        try:
            return get_key_input(self.stdscr)
        except curses.error as e:
            raise TerminalError(f"could not read key: {e}") from e

    def clear_screen(self) -> None:
        try:
            self.stdscr.erase()
            self.stdscr.refresh()
        except curses.error as e:
            raise TerminalError(f"could not clear screen: {e}") from e

    def set_cursor_visible(self, visible: bool) -> Optional[int]:
        try:
            return curses.curs_set(1 if visible else 0)
        except curses.error:
            # Some terminals cannot hide the cursor.
            return None
