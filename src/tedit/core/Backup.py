# tedit/core/Backup.py
"""Backup Module for tedit
=========================
Crash-safety snapshots, independent of the user's save target.

A snapshot is written to ``<file name><suffix>`` (``notes.txt.tmp``), or to a
fixed fallback name for unnamed documents. It is triggered every N processed
keystrokes, by the explicit backup command, and once more as a last resort
before an unrecoverable error ends the session.

The file is plain text: every row verbatim followed by a newline. A failed
write on one line marks the whole snapshot as failed but the remaining lines
are still written; only a fully successful snapshot resets the keystroke
counter and reports its path.
"""

import logging
from typing import Optional

from tedit.core.Document import Document
from tedit.core.StatusBus import StatusBus
from tedit.utils.utils import EditorSettings


class BackupGuard:
    """Class BackupGuard
    ====================
    Attributes:
        settings (EditorSettings): Interval, suffix and fallback name.
        keystrokes_since_backup (int): Keys processed since the last good snapshot.
    """

    def __init__(self, settings: EditorSettings, status_bus: StatusBus) -> None:
        self.settings = settings
        self.status_bus = status_bus
        self.keystrokes_since_backup = 0

    def target_path(self, document: Document) -> str:
        if document.file_name:
            return f"{document.file_name}{self.settings.backup_suffix}"
        return self.settings.backup_fallback_name

    def record_keystroke(self) -> bool:
        """Counts one processed key; True when a snapshot is due."""
        self.keystrokes_since_backup += 1
        interval = self.settings.backup_interval_keystrokes
        return interval > 0 and self.keystrokes_since_backup >= interval

    def backup(self, document: Document) -> Optional[str]:
        """Writes a snapshot of `document`.

        Returns:
            The snapshot path on success, None on failure. Never raises, so it
            is safe to call while another error is already propagating.
        """
        path = self.target_path(document)
        all_ok = True
        try:
            with open(path, "w", encoding=document.write_encoding(), newline="\n") as f:
                for line in document.lines():
                    try:
                        f.write(line)
                        f.write("\n")
                    except (OSError, ValueError) as e:
                        all_ok = False
                        logging.error(f"Backup: failed to write a line to '{path}': {e}")
        except OSError as e:
            logging.error(f"Backup to '{path}' failed: {e}", exc_info=True)
            self.status_bus.emit(f"Backup failed: {path}")
            return None

        if not all_ok:
            logging.warning(f"Backup to '{path}' incomplete; counter not reset.")
            self.status_bus.emit(f"Backup failed: {path}")
            return None

        self.keystrokes_since_backup = 0
        self.status_bus.emit(f"Backed up to {path}")
        logging.info(f"Backup written to '{path}' ({len(document)} lines).")
        return path
