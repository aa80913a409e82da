# tedit/core/Viewport.py
"""Viewport Module for tedit
===========================
Cursor and visible-window bookkeeping.

The viewport keeps two document coordinates: the cursor and the offset (the
document cell shown at the top-left of the text area). Cursor moves are
clamped to the document shape; `scroll` then shifts the offset, one axis at a
time and only when the cursor has left the window on that axis.
"""

import logging
from enum import Enum

from tedit.core.Document import Document
from tedit.core.Position import Position


class Direction(str, Enum):
    """Cursor movements; values match the logical key names."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "pageup"
    PAGE_DOWN = "pagedown"
    HOME = "home"
    END = "end"


def _row_length(document: Document, y: int) -> int:
    row = document.row(y)
    return len(row) if row is not None else 0


class Viewport:
    """Class Viewport
    =================
    Attributes:
        cursor (Position): Cursor in document coordinates.
        offset (Position): Document coordinate shown at the top-left cell.
    """

    def __init__(self) -> None:
        self.cursor = Position()
        self.offset = Position()

    def move_cursor(self, direction: Direction, document: Document, page_height: int) -> None:
        """Moves the cursor one step in `direction`.

        The row may be one past the last document row, and the column one past
        the row end; both are valid append positions.
        """
        x, y = self.cursor.x, self.cursor.y
        height = len(document)
        width = _row_length(document, y)

        if direction is Direction.UP:
            y = max(0, y - 1)
        elif direction is Direction.DOWN:
            if y < height:
                y += 1
        elif direction is Direction.LEFT:
            if x > 0:
                x -= 1
            elif y > 0:
                y -= 1
                x = _row_length(document, y)
        elif direction is Direction.RIGHT:
            if x < width:
                x += 1
            elif y < height:
                y += 1
                x = 0
        elif direction is Direction.PAGE_UP:
            y = y - page_height if y > page_height else 0
        elif direction is Direction.PAGE_DOWN:
            y = y + page_height if y + page_height < height else height
        elif direction is Direction.HOME:
            x = 0
        elif direction is Direction.END:
            x = width

        # Re-clamp to the (possibly different) target row.
        x = min(x, _row_length(document, y))
        self.cursor = Position(x, y)
        logging.debug("cursor %s → (%d,%d)", direction.value, x, y)

    def scroll(self, width: int, height: int) -> None:
        """Shifts the offset so the cursor lies inside a `width` x `height` window."""
        x, y = self.cursor.x, self.cursor.y
        width = max(1, width)
        height = max(1, height)
        offset_x, offset_y = self.offset.x, self.offset.y

        if y < offset_y:
            offset_y = y
        elif y >= offset_y + height:
            offset_y = max(0, y - height + 1)

        if x < offset_x:
            offset_x = x
        elif x >= offset_x + width:
            offset_x = max(0, x - width + 1)

        self.offset = Position(offset_x, offset_y)
