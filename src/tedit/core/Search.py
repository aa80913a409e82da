# tedit/core/Search.py
"""Search Module for tedit
=========================
Incremental, bidirectional search built on the prompt.

Every keystroke typed into the search prompt re-runs the document lookup
from the cursor. Right/Down look forward for the next match (nudging the
cursor one cell right first so the current match is skipped), Left/Up look
backward, and any other key searches forward from the current position.
Cancelling the prompt puts the cursor back where the search started.
"""

import logging
from typing import TYPE_CHECKING

from tedit.core.Position import SearchDirection
from tedit.core.Prompt import prompt
from tedit.core.Viewport import Direction

if TYPE_CHECKING:
    from tedit.core.Editor import Editor

SEARCH_PROMPT = "Search (ESC to cancel, arrows to navigate): "

FORWARD_KEYS = {"right", "down"}
BACKWARD_KEYS = {"left", "up"}


class SearchNavigator:
    """Prompt handler moving the cursor to matches while the query is typed.

    Attributes:
        direction (SearchDirection): Direction of the most recent lookup.
    """

    def __init__(self) -> None:
        self.direction = SearchDirection.FORWARD

    def on_key(self, editor: "Editor", key: str, current_input: str) -> None:
        nudged = False
        if key in FORWARD_KEYS:
            self.direction = SearchDirection.FORWARD
            editor.move_cursor(Direction.RIGHT)
            nudged = True
        elif key in BACKWARD_KEYS:
            self.direction = SearchDirection.BACKWARD
        else:
            self.direction = SearchDirection.FORWARD

        match = editor.document.find(current_input, editor.cursor, self.direction)
        if match is not None:
            editor.cursor = match
            editor.scroll()
            editor.highlighted_word = current_input
            logging.debug("Search: %r found at (%d,%d)", current_input, match.x, match.y)
        elif nudged:
            editor.move_cursor(Direction.LEFT)


def search(editor: "Editor") -> bool:
    """Runs the search prompt.

    Returns:
        bool: True if the prompt was confirmed with a query, False if cancelled.
    """
    start = editor.cursor
    query = prompt(editor, SEARCH_PROMPT, SearchNavigator())
    if query is None:
        editor.cursor = start
        editor.scroll()
        logging.debug("Search cancelled; cursor restored to (%d,%d)", start.x, start.y)
    editor.highlighted_word = None
    return query is not None
