# tedit/core/Editor.py
"""Editor Module for tedit
=========================
The editor session: owns the document, the viewport, the status bus and the
backup guard, and drives the render -> read -> dispatch -> rescroll loop.

Quit confirmation:
    Ctrl-Q on a document with unsaved changes only counts down; each press
    warns how many more presses are needed. Any other key restores the full
    count and clears the warning. A clean document quits at once.

Error handling:
    Failures inside a key action are logged and reported on the message bar.
    A `TerminalError` is unrecoverable: it escapes the loop, `run` writes one
    emergency backup and re-raises so the entry point can report it.
"""

import logging
import time
from typing import Any, Callable, Optional, Union

from tedit.core import Search
from tedit.core.Backup import BackupGuard
from tedit.core.Document import Document
from tedit.core.Position import Position
from tedit.core.Prompt import NoopPromptHandler, PromptHandler, prompt
from tedit.core.StatusBus import StatusBus
from tedit.core.Viewport import Direction, Viewport
from tedit.integrations.Clipboard import Clipboard, ClipboardError
from tedit.ui.DrawScreen import DrawScreen
from tedit.ui.KeyBinder import KeyBinder, is_printable_char
from tedit.ui.Terminal import Terminal, TerminalError
from tedit.utils.logging_config import KEY_LOGGER
from tedit.utils.utils import EditorSettings

logger = logging.getLogger("tedit")

HELP_STATUS = "Ctrl-F find | Ctrl-S save | Ctrl-Q quit | Ctrl-B backup"
SAVE_AS_PROMPT = "Save as: "
COMMAND_MARKER = "::"


## ================= class Editor ==============================
class Editor:
    """Class Editor
    ===============
    Attributes:
        terminal (Terminal): Screen and keyboard.
        settings (EditorSettings): Thresholds of the interaction loop.
        document (Document): The text being edited.
        viewport (Viewport): Cursor and scroll offset.
        status_bus (StatusBus): The message-bar channel.
        backup_guard (BackupGuard): Keystroke-driven snapshot writer.
        keybinder (KeyBinder): Key -> action dispatch.
        quit_times (int): Ctrl-Q presses left before a dirty document is abandoned.
        should_quit (bool): Set once the session decided to end.
        highlighted_word (Optional[str]): Current search match to highlight.
    """

    def __init__(
        self,
        terminal: Terminal,
        config: Optional[dict[str, Any]] = None,
        file_name: Optional[str] = None,
        clock: Callable[[], float] = time.monotonic,
        clipboard: Optional[Clipboard] = None,
        drawer: Optional[Any] = None,
    ) -> None:
        self.terminal = terminal
        self.config = config or {}
        self.settings = EditorSettings.from_config(self.config)
        self.status_bus = StatusBus(
            clock=clock,
            visibility_seconds=self.settings.status_visibility_seconds,
            elapsed_prefix=self.settings.status_elapsed_prefix,
            initial_text=HELP_STATUS,
        )
        self.document = self._open_initial_document(file_name)
        self.viewport = Viewport()
        self.quit_times = self.settings.quit_confirmations
        self.should_quit = False
        self.highlighted_word: Optional[str] = None
        self.backup_guard = BackupGuard(self.settings, self.status_bus)
        self.clipboard = clipboard or Clipboard(self.settings)
        self.keybinder = KeyBinder(self)
        self.drawer = drawer or DrawScreen(self, self.config)
        logger.info(
            "Editor session created (file=%r, rows=%d, settings=%s)",
            self.document.file_name, len(self.document), self.settings,
        )

    def _open_initial_document(self, file_name: Optional[str]) -> Document:
        if not file_name:
            return Document()
        try:
            return Document.open(file_name)
        except OSError as e:
            logger.warning("Could not open '%s': %s", file_name, e)
            self.status_bus.emit(f"ERR: Could not open file: {file_name}")
            return Document()

    # --- Cursor and viewport ---
    @property
    def cursor(self) -> Position:
        return self.viewport.cursor

    @cursor.setter
    def cursor(self, value: Position) -> None:
        self.viewport.cursor = value

    @property
    def offset(self) -> Position:
        return self.viewport.offset

    def move_cursor(self, direction: Union[Direction, str]) -> None:
        _, height = self.terminal.size()
        self.viewport.move_cursor(Direction(direction), self.document, height)

    def scroll(self) -> None:
        width, height = self.terminal.size()
        self.viewport.scroll(width, height)

    # --- Status and drawing ---
    def status(self, message: str, refresh: bool = False) -> None:
        """Replaces the status message, optionally redrawing right away."""
        self.status_bus.emit(message)
        if refresh:
            self.refresh_screen()

    def refresh_screen(self) -> None:
        self.drawer.draw()

    def prompt(self, label: str, handler: Optional[PromptHandler] = None) -> Optional[str]:
        return prompt(self, label, handler)

    # --- Editing ---
    def insert_char(self, ch: str) -> None:
        self.document.insert(self.cursor, ch)
        self.move_cursor(Direction.RIGHT)

    def delete_char(self) -> None:
        self.document.delete(self.cursor)

    def backspace(self) -> None:
        if self.cursor.x > 0 or self.cursor.y > 0:
            self.move_cursor(Direction.LEFT)
            self.document.delete(self.cursor)

    # --- Commands ---
    def save(self) -> bool:
        if not self.document.file_name:
            new_name = self.prompt(SAVE_AS_PROMPT, NoopPromptHandler())
            if new_name is None:
                self.status("Save aborted")
                return False
            self.document.file_name = new_name

        try:
            self.document.save()
        except OSError as e:
            logger.exception("Saving '%s' failed", self.document.file_name)
            self.status(f"Error writing file: {e}")
            return False
        logger.info("Saved '%s' (%d lines).", self.document.file_name, len(self.document))
        self.status("File saved successfully.")
        return True

    def search(self) -> bool:
        return Search.search(self)

    def backup(self) -> Optional[str]:
        return self.backup_guard.backup(self.document)

    def emergency_backup(self) -> Optional[str]:
        logger.warning("Writing emergency backup before aborting.")
        return self.backup_guard.backup(self.document)

    def paste(self) -> bool:
        """Inserts the system clipboard text at the cursor."""
        try:
            text = self.clipboard.paste()
        except ClipboardError as e:
            logger.warning("Paste failed: %s", e)
            self.status(f"Paste failed: {e}")
            return False

        text = text.replace("\r\n", "\n").replace("\r", "\n")
        if not text:
            self.status("Clipboard is empty")
            return True

        # Each insert happens at the same position, so reversed order restores the text.
        at = self.cursor
        for ch in reversed(text):
            self.document.insert(at, ch)
        for _ in range(len(text)):
            self.move_cursor(Direction.RIGHT)
        logger.info("Pasted %d chars at (%d,%d).", len(text), at.x, at.y)
        self.status(f"Pasted {len(text)} characters")
        return True

    def command_mode(self) -> str:
        """Echoes typed characters on the message bar until a non-character key."""
        buffer = COMMAND_MARKER
        self.status(buffer, refresh=True)
        while True:
            key = self.terminal.read_key()
            if not is_printable_char(key):
                break
            buffer += key
            self.status(buffer, refresh=True)
        logger.debug("Command mode left with buffer %r", buffer)
        return buffer

    # --- Main loop ---
    def process_keypress(self) -> bool:
        """Reads and handles one key.

        Returns:
            bool: False once the session should end.
        """
        pressed_key = self.terminal.read_key()
        KEY_LOGGER.debug("key=%r cursor=(%d,%d)", pressed_key, self.cursor.x, self.cursor.y)

        if self.backup_guard.record_keystroke():
            self.backup()

        if self.keybinder.lookup(pressed_key) == "quit":
            self.scroll()
            if self.quit_times > 0 and self.document.is_dirty():
                self.quit_times -= 1
                logger.info("Quit requested with unsaved changes; %d confirmations left.", self.quit_times)
                self.status(
                    f"WARNING! File has unsaved changes. Press Ctrl-Q {self.quit_times} more times to quit."
                )
                self.should_quit = self.quit_times == 0
                return not self.should_quit
            self.should_quit = True
            return False

        try:
            self.keybinder.handle_input(pressed_key)
        except TerminalError:
            raise
        except Exception as e:
            logger.exception("Error while handling key %r", pressed_key)
            self.status(f"Error: {e}")

        self.scroll()
        if self.quit_times < self.settings.quit_confirmations:
            self.quit_times = self.settings.quit_confirmations
            self.status_bus.clear()
        return not self.should_quit

    def run(self) -> None:
        """Runs frames until quit.

        Any exception escaping a frame is logged, followed by exactly one
        emergency backup, and re-raised.
        """
        logger.info("Editor main loop started.")
        try:
            while True:
                self.refresh_screen()
                if not self.process_keypress():
                    break
        except Exception as e:
            logger.critical("Unhandled exception in main loop: %s", e, exc_info=True)
            self.emergency_backup()
            raise
        self.should_quit = True
        self.terminal.clear_screen()
        logger.info("Editor main loop finished.")
