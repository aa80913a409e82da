# tedit/ui/KeyBinder.py
"""KeyBinder.py
==================
Description:
-----------------------
Translates key presses into editor actions.

Raw curses input (integer key codes, wide characters and ESC-prefixed
terminal sequences) is decoded into *logical keys*: a printable character is
itself, everything else is a short name such as ``"up"``, ``"pageup"``,
``"backspace"``, ``"enter"``, ``"esc"`` or ``"ctrl+q"``. The editor core only
ever sees logical keys.

The command bindings are fixed; they are not read from the configuration.

Main pieces:
1. get_key_input: Reads one key or key sequence from a curses window.
2. decode_key: Maps a raw curses code or character to a logical key.
3. KeyBinder.handle_input: Dispatches a logical key to the matching editor method.
4. KeyBinder.lookup: Reverse lookup from a key to its action name.
"""

import curses
import logging
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from tedit.core.Editor import Editor

# --- Logical key names ---
UP, DOWN, LEFT, RIGHT = "up", "down", "left", "right"
PAGE_UP, PAGE_DOWN, HOME, END = "pageup", "pagedown", "home", "end"
DELETE, BACKSPACE, ENTER, ESC, TAB = "delete", "backspace", "enter", "esc", "\t"
RESIZE = "resize"

NAVIGATION_KEYS = frozenset({UP, DOWN, LEFT, RIGHT, PAGE_UP, PAGE_DOWN, HOME, END})

# Fixed command table: action name -> logical key.
KEYBINDINGS: dict[str, str] = {
    "quit": "ctrl+q",
    "save_file": "ctrl+s",
    "find": "ctrl+f",
    "backup": "ctrl+b",
    "paste": "ctrl+v",
    "command_mode": "ctrl+x",
}

# Escape sequences without the leading ESC, as read by get_key_input().
ESCAPE_SEQUENCE_MAP: dict[str, str] = {
    # Arrows (CSI and SS3)
    "[A": UP, "[B": DOWN, "[C": RIGHT, "[D": LEFT,
    "OA": UP, "OB": DOWN, "OC": RIGHT, "OD": LEFT,
    # Home/End (CSI/SS3 and tilde variants)
    "[H": HOME, "[F": END, "OH": HOME, "OF": END,
    "[1~": HOME, "[4~": END, "[7~": HOME, "[8~": END,
    # Delete/PageUp/PageDown (~ style)
    "[3~": DELETE, "[5~": PAGE_UP, "[6~": PAGE_DOWN,
}


def _curses_key_names() -> dict[int, str]:
    names = {
        curses.KEY_UP: UP,
        curses.KEY_DOWN: DOWN,
        curses.KEY_LEFT: LEFT,
        curses.KEY_RIGHT: RIGHT,
        curses.KEY_PPAGE: PAGE_UP,
        curses.KEY_NPAGE: PAGE_DOWN,
        curses.KEY_HOME: HOME,
        getattr(curses, "KEY_END", curses.KEY_LL): END,
        curses.KEY_DC: DELETE,
        curses.KEY_BACKSPACE: BACKSPACE,
        curses.KEY_ENTER: ENTER,
    }
    if hasattr(curses, "KEY_RESIZE"):
        names[curses.KEY_RESIZE] = RESIZE
    return names


def is_printable_char(key: str) -> bool:
    """True for a single visible character (control characters excluded)."""
    return len(key) == 1 and key.isprintable()


def decode_key(raw: int | str) -> str:
    """Maps a raw curses key code or character to its logical key name."""
    if isinstance(raw, str):
        if len(raw) != 1:
            return raw
        if raw.isprintable():
            return raw
        code = ord(raw)
    else:
        code = raw
        name = _curses_key_names().get(code)
        if name:
            return name
        if 32 <= code < 0x110000 and chr(code).isprintable():
            return chr(code)

    if code in (10, 13):
        return ENTER
    if code == 9:
        return TAB
    if code in (8, 127):
        return BACKSPACE
    if code == 27:
        return ESC
    if 1 <= code <= 26:
        return f"ctrl+{chr(code + ord('a') - 1)}"
    logging.debug("decode_key: unnamed key code %r", code)
    return f"code-{code}"


def get_key_input(window: "curses.window") -> str:
    """Blocks for one key and returns it as a logical key.

    ESC handling:
    - a lone ESC is ``"esc"``,
    - ESC + printable is an Alt chord, ``"alt+<char>"``,
    - known CSI/SS3 sequences map through ESCAPE_SEQUENCE_MAP,
    - anything else collapses to ``"esc"``.

    Raises:
        curses.error: propagated from the window; the terminal layer turns it
            into a TerminalError.
    """
    raw = window.get_wch()
    if raw not in ("\x1b", 27):
        return decode_key(raw)

    seq = ""
    window.nodelay(True)
    try:
        while True:
            nx = window.getch()
            if nx == curses.ERR:
                break
            if 0 <= nx <= 255:
                seq += chr(nx)
    finally:
        window.nodelay(False)

    if not seq:
        return ESC
    if len(seq) == 1 and seq.isprintable():
        return f"alt+{seq.lower()}"
    mapped = ESCAPE_SEQUENCE_MAP.get(seq)
    if mapped:
        logging.debug("get_key_input: ESC %r -> %r", seq, mapped)
        return mapped
    logging.warning("get_key_input: unknown escape sequence: ESC + %r", seq)
    return ESC


# ==================== KeyBinder Class ====================
class KeyBinder:
    """Class KeyBinder
    ====================
    Maps logical keys to editor actions.

    Attributes:
        editor (Editor): The session whose methods are invoked.
        keybindings (dict): Action name -> logical key (fixed table).
        action_map (dict): Logical key -> bound editor method.
    """

    def __init__(self, editor: "Editor") -> None:
        self.editor = editor
        self.keybindings = dict(KEYBINDINGS)
        self.action_map = self._setup_action_map()

    def _setup_action_map(self) -> dict[str, Callable[[], object]]:
        action_to_method_map: dict[str, Callable[[], object]] = {
            "save_file": self.editor.save,
            "find": self.editor.search,
            "backup": self.editor.backup,
            "paste": self.editor.paste,
            "command_mode": self.editor.command_mode,
        }
        final_key_action_map: dict[str, Callable[[], object]] = {}
        for action_name, key in self.keybindings.items():
            method = action_to_method_map.get(action_name)
            if method is None:
                # "quit" is handled by the session itself (confirmation protocol).
                continue
            final_key_action_map[key] = method
        logging.debug(
            "Final constructed action map: %s",
            {k: getattr(v, "__name__", repr(v)) for k, v in final_key_action_map.items()},
        )
        return final_key_action_map

    def lookup(self, key: str) -> Optional[str]:
        """Name of the action bound to `key`, or None."""
        for action_name, bound_key in self.keybindings.items():
            if bound_key == key:
                return action_name
        return None

    def handle_input(self, key: str) -> bool:
        """Processes one logical key.

        Returns:
            bool: True if the key was mapped to an action, False if ignored.
        """
        action = self.action_map.get(key)
        if action is not None:
            logging.debug("handle_input: key %r -> %s", key, getattr(action, "__name__", action))
            action()
            return True

        if key in NAVIGATION_KEYS:
            self.editor.move_cursor(key)
        elif key == ENTER:
            self.editor.insert_char("\n")
        elif key == DELETE:
            self.editor.delete_char()
        elif key == BACKSPACE:
            self.editor.backspace()
        elif key == TAB or is_printable_char(key):
            self.editor.insert_char(key)
        else:
            logging.debug("Unhandled input: %r", key)
            return False
        return True
