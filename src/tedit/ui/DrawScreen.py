# tedit/ui/DrawScreen.py
"""DrawScreen.py
========================
DrawScreen renders one editor frame with curses.

It is responsible for:
- the text area: document rows sliced by the horizontal offset, with syntax
  colours and search-match highlighting, ``~`` past the end of the document
  and a welcome banner on an empty document,
- the status bar: file name, line count, modified flag, file type and
  cursor line,
- the message bar: the current status message while it is visible,
- placing the terminal cursor at the cursor's screen position.

The bar contents are built by pure helpers (`compose_status_bar`,
`compose_message_bar`) so they can be tested without a terminal.
"""

import curses
import logging
from typing import TYPE_CHECKING, Any, Optional

from tedit import __version__
from tedit.ui.Terminal import TerminalError
from tedit.utils.utils import display_width, hex_to_xterm, truncate_to_width

if TYPE_CHECKING:
    from tedit.core.Editor import Editor

NO_NAME = "[No Name]"

# style name -> (8-colour fallback, attribute)
STYLE_DEFINITIONS = {
    "default": (curses.COLOR_WHITE, curses.A_NORMAL),
    "comment": (curses.COLOR_WHITE, curses.A_DIM),
    "keyword": (curses.COLOR_MAGENTA, curses.A_NORMAL),
    "string": (curses.COLOR_CYAN, curses.A_NORMAL),
    "number": (curses.COLOR_BLUE, curses.A_NORMAL),
    "function": (curses.COLOR_YELLOW, curses.A_BOLD),
    "type": (curses.COLOR_YELLOW, curses.A_NORMAL),
    "match": (curses.COLOR_BLACK, curses.A_NORMAL),
    "status": (curses.COLOR_BLACK, curses.A_NORMAL),
}

MONOCHROME = {
    "default": curses.A_NORMAL,
    "comment": curses.A_DIM,
    "keyword": curses.A_BOLD,
    "function": curses.A_BOLD,
    "match": curses.A_REVERSE,
    "status": curses.A_REVERSE,
}


def compose_status_bar(editor: "Editor", width: int) -> str:
    """``<name> - <N> lines[ (modified)]`` left, ``<type> | <line>/<N>`` right."""
    document = editor.document
    file_name = NO_NAME
    if document.file_name:
        file_name = document.file_name[: editor.settings.filename_display_width]
    modified = " (modified)" if document.is_dirty() else ""
    left = f"{file_name} - {len(document)} lines{modified}"
    right = f"{document.file_type()} | {editor.cursor.y + 1}/{len(document)}"
    padding = max(0, width - display_width(left) - display_width(right))
    return truncate_to_width(left + " " * padding + right, width)


def compose_message_bar(editor: "Editor", width: int, now: Optional[float] = None) -> str:
    """The live status text truncated to `width`, blank once it has expired."""
    return truncate_to_width(editor.status_bus.visible_text(now), width)


def compose_welcome(width: int) -> str:
    message = f"tedit v{__version__}"
    padding = max(0, width - len(message)) // 2
    return truncate_to_width("~" + " " * max(0, padding - 1) + message, width)


## ================= class DrawScreen ==============================
class DrawScreen:
    """DrawScreen Class
    ===================
    Attributes:
        editor (Editor): The session being drawn.
        stdscr (curses.window): Window from the editor's terminal.
        colors (dict[str, int]): Style name -> curses attribute.
    """

    def __init__(self, editor: "Editor", config: Optional[dict[str, Any]] = None) -> None:
        self.editor = editor
        self.config = config or {}
        self.stdscr = editor.terminal.stdscr
        self.colors: dict[str, int] = {}

    def init_colors(self) -> None:
        """Builds colour pairs for every style, degrading to attributes."""
        self.colors = {}
        try:
            has_colors = curses.has_colors() and curses.COLORS >= 8
        except (curses.error, AttributeError):
            has_colors = False
        if not has_colors:
            logging.warning("Terminal has no or limited color support (< 8). Using monochrome attributes.")
            self.colors = {name: MONOCHROME.get(name, curses.A_NORMAL) for name in STYLE_DEFINITIONS}
            return

        curses.start_color()
        try:
            curses.use_default_colors()
        except curses.error:
            pass

        user_colors = self.config.get("colors", {})
        can_use_256_colors = curses.COLORS >= 256
        for pair_id, (name, (fallback, attr)) in enumerate(STYLE_DEFINITIONS.items(), start=1):
            fg = hex_to_xterm(user_colors[name]) if can_use_256_colors and name in user_colors else fallback
            bg = -1
            if name in ("match", "status"):
                bg_hex = user_colors.get(f"{name}_bg")
                if can_use_256_colors and bg_hex:
                    bg = hex_to_xterm(bg_hex)
                else:
                    bg = curses.COLOR_YELLOW if name == "match" else curses.COLOR_WHITE
            try:
                curses.init_pair(pair_id, fg, bg)
                self.colors[name] = curses.color_pair(pair_id) | attr
            except curses.error as e:
                logging.error(f"Failed to initialize curses pair for '{name}': {e}")
                self.colors[name] = MONOCHROME.get(name, attr)

    def draw(self) -> None:
        """Renders a full frame; raises TerminalError if curses fails."""
        if not self.colors:
            self.init_colors()
        editor = self.editor
        width, height = editor.terminal.size()
        try:
            editor.terminal.set_cursor_visible(False)
            editor.document.highlight(editor.highlighted_word, editor.offset.y + height)
            self.stdscr.erase()
            self._draw_rows(width, height)
            self._draw_status_bar(height, width)
            self._draw_message_bar(height + 1, width)
            self._position_cursor(width, height)
            editor.terminal.set_cursor_visible(True)
            self.stdscr.refresh()
        except curses.error as e:
            raise TerminalError(f"could not draw frame: {e}") from e

    def _draw_rows(self, width: int, height: int) -> None:
        editor = self.editor
        document = editor.document
        default = self.colors.get("default", curses.A_NORMAL)
        for screen_row in range(height):
            row = document.row(editor.offset.y + screen_row)
            if row is not None:
                x = 0
                for text, style in row.segments(editor.offset.x, editor.offset.x + width):
                    text = truncate_to_width(text, width - x)
                    if not text:
                        break
                    self.stdscr.addstr(screen_row, x, text, self.colors.get(style, default))
                    x += display_width(text)
            elif document.is_empty() and screen_row == height // 3:
                self.stdscr.addstr(screen_row, 0, compose_welcome(width), default)
            else:
                self.stdscr.addstr(screen_row, 0, "~", default)

    def _draw_status_bar(self, y: int, width: int) -> None:
        line = compose_status_bar(self.editor, width)
        line += " " * max(0, width - display_width(line))
        # insstr does not advance the cursor, so the bottom-right cell is safe.
        self.stdscr.insstr(y, 0, line, self.colors.get("status", curses.A_REVERSE))

    def _draw_message_bar(self, y: int, width: int) -> None:
        text = compose_message_bar(self.editor, width)
        if text:
            self.stdscr.insstr(y, 0, text)

    def _position_cursor(self, width: int, height: int) -> None:
        editor = self.editor
        screen_y = min(max(0, editor.cursor.y - editor.offset.y), max(0, height - 1))
        row = editor.document.row(editor.cursor.y)
        if row is not None:
            before = row.render(editor.offset.x, editor.cursor.x)
            screen_x = display_width(before)
        else:
            screen_x = max(0, editor.cursor.x - editor.offset.x)
        self.stdscr.move(screen_y, min(screen_x, max(0, width - 1)))
