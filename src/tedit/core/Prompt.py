# tedit/core/Prompt.py
"""Prompt Module for tedit
=========================
Generic single-line input collected on the message bar.

The prompt shows ``label + input`` as the live status, blocks for one key,
applies it, then hands the key to a `PromptHandler` so the caller can react
while the user is still typing (incremental search does exactly that). The
handler is called for every key, the terminating Enter/Escape included,
before the loop exits.
"""

import logging
from typing import TYPE_CHECKING, Optional, Protocol

from tedit.ui.KeyBinder import BACKSPACE, ENTER, ESC, is_printable_char

if TYPE_CHECKING:
    from tedit.core.Editor import Editor


class PromptHandler(Protocol):
    """Per-keystroke hook of a prompt call site."""

    def on_key(self, editor: "Editor", key: str, current_input: str) -> None: ...


class NoopPromptHandler:
    """Handler for plain input prompts (e.g. "Save as")."""

    def on_key(self, editor: "Editor", key: str, current_input: str) -> None:
        return None


def prompt(editor: "Editor", label: str, handler: Optional[PromptHandler] = None) -> Optional[str]:
    """Collects a line of input.

    Returns:
        The entered text, or None when the prompt was cancelled with Escape
        or confirmed empty. The status is cleared on return.
    """
    handler = handler or NoopPromptHandler()
    result = ""
    logging.debug(f"Prompt called. Label: '{label}'")

    while True:
        editor.status(f"{label}{result}", refresh=True)
        key = editor.terminal.read_key()
        finished = False

        if key == BACKSPACE:
            result = result[:-1]
        elif key == ENTER:
            finished = True
        elif key == ESC:
            result = ""
            finished = True
        elif is_printable_char(key):
            result += key

        handler.on_key(editor, key, result)
        if finished:
            break

    editor.status_bus.clear()
    if not result:
        logging.debug("Prompt '%s' returned no result.", label)
        return None
    return result
