# tedit/integrations/Clipboard.py
"""Clipboard.py
========================
Read access to the system clipboard for the paste command.

The clipboard is reached through `pyperclip`, which needs a platform helper
(xclip, xsel, wl-clipboard, pbpaste, ...). When that helper is missing, or the
system clipboard is disabled in ``[editor] use_system_clipboard``, `paste`
raises `ClipboardError` and the editor reports it on the message bar.
"""

import logging

import pyperclip

from tedit.utils.utils import EditorSettings


class ClipboardError(RuntimeError):
    """The system clipboard could not be read."""


# ================= Clipboard Class ==============================
class Clipboard:
    """Thin wrapper around pyperclip honouring the editor settings."""

    def __init__(self, settings: EditorSettings) -> None:
        self.enabled = settings.use_system_clipboard

    def paste(self) -> str:
        """Returns the current clipboard text ('' when it is empty)."""
        if not self.enabled:
            logging.debug("System clipboard usage is disabled by editor configuration.")
            raise ClipboardError("system clipboard is disabled")
        try:
            text = pyperclip.paste()
        except pyperclip.PyperclipException as e:
            logging.warning(
                f"System clipboard unavailable via pyperclip: {e}. "
                f"Ensure clipboard utilities (e.g., xclip, xsel, wl-copy, pbcopy) are installed."
            )
            raise ClipboardError(str(e)) from e
        return text or ""
