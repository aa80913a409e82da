# tedit/utils/utils.py
"""
tedit.utils.utils
=================

Configuration and small helpers shared by the tedit editor.

Key functionalities include:
- Robust Configuration Loading: a hardcoded, built-in default configuration is
  recursively merged with user settings from `~/.config/tedit/config.toml`.
- EditorSettings: the explicit, immutable startup configuration value that
  carries every editor threshold (quit confirmations, backup interval, status
  visibility) so they can be changed without touching the code.
- Helper Utilities: dictionary deep-merge, colour conversion and display-width
  aware truncation.

The editor is always runnable, even if the user configuration file is missing
or corrupted, because it falls back to the embedded defaults.
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import toml
from wcwidth import wcwidth

logger = logging.getLogger("tedit")

# --- Constants ---
WHITE_FG_IDX = 255
USER_CONFIG_PATH = Path.home() / ".config" / "tedit" / "config.toml"

# Direct, hardcoded representation of the default `config.toml`.
# It serves as the ultimate fallback, ensuring the editor can ALWAYS start.
DEFAULT_CONFIG: Dict[str, Any] = {
    "editor": {
        "quit_confirmations": 3,
        "backup_interval_keystrokes": 10,
        "status_visibility_seconds": 5.0,
        "backup_fallback_name": "tmp",
        "backup_suffix": ".tmp",
        "status_elapsed_prefix": True,
        "use_system_clipboard": True,
        "filename_display_width": 20,
    },
    "colors": {
        "default": "#C9D1D9",
        "comment": "#8B949E",
        "keyword": "#FF7B72",
        "string": "#A5D6FF",
        "number": "#79C0FF",
        "function": "#D2A8FF",
        "type": "#F2CC60",
        "status": "#3F3F3F",
        "status_bg": "#EFEFEF",
        "match": "#000000",
        "match_bg": "#FFAB70",
    },
    "logging": {
        "log_file": "~/.local/state/tedit/editor.log",
        "file_level": "DEBUG",
        "console_level": "WARNING",
        "log_to_console": False,
        "separate_error_log": False,
    },
}


@dataclass(frozen=True)
class EditorSettings:
    """Startup configuration for the editor core.

    Every threshold the interaction loop depends on lives here instead of in
    module constants, so tests can shrink or grow them freely.
    """

    quit_confirmations: int = 3
    backup_interval_keystrokes: int = 10
    status_visibility_seconds: float = 5.0
    backup_fallback_name: str = "tmp"
    backup_suffix: str = ".tmp"
    status_elapsed_prefix: bool = True
    use_system_clipboard: bool = True
    filename_display_width: int = 20

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]]) -> "EditorSettings":
        """Builds settings from the ``[editor]`` section of a config dict.

        Unknown keys are ignored. Values of the wrong type or negative numbers
        are replaced with the default and reported in the log.
        """
        section = (config or {}).get("editor", {})
        if not isinstance(section, dict):
            logger.warning("Config section [editor] is not a table; using defaults.")
            return cls()

        values: Dict[str, Any] = {}
        for field in fields(cls):
            if field.name not in section:
                continue
            raw = section[field.name]
            default = field.default
            try:
                if isinstance(default, bool):
                    if not isinstance(raw, bool):
                        raise TypeError(f"expected bool, got {type(raw).__name__}")
                    value: Any = raw
                elif isinstance(default, (int, float)):
                    if isinstance(raw, bool):
                        raise TypeError("expected a number, got bool")
                    value = type(default)(raw)
                    if value < 0:
                        raise ValueError("must not be negative")
                else:
                    value = str(raw)
                    if not value:
                        raise ValueError("must not be empty")
            except (TypeError, ValueError) as e:
                logger.warning(
                    "Invalid value %r for editor.%s (%s); using default %r.",
                    raw, field.name, e, default,
                )
                continue
            values[field.name] = value

        return cls(**values)


# --- Helper Functions ---

def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Loads and merges configurations, ensuring the editor can always run.
    """
    final_config = deep_merge({}, DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    user_config_path = path or USER_CONFIG_PATH
    if user_config_path.is_file():
        try:
            user_config = toml.load(user_config_path)
            final_config = deep_merge(final_config, user_config)
            logger.info(f"Successfully loaded and merged user config from {user_config_path}")
        except Exception as e:
            logger.error(f"Could not parse user config '{user_config_path}': {e}. Using defaults.")

    return final_config


def hex_to_xterm(hex_color: str) -> int:
    """
    Converts a hexadecimal color string to the nearest xterm-256 color index.
    """
    hex_color = hex_color.lstrip("#")
    if len(hex_color) != 6:
        return WHITE_FG_IDX
    try:
        r, g, b = (int(hex_color[i:i+2], 16) for i in (0, 2, 4))
    except ValueError:
        return WHITE_FG_IDX

    if r == g == b:
        if r < 8: return 16
        if r > 248: return 231
        return round(((r - 8) / 247) * 24) + 232

    return int(
        16
        + (36 * round(r / 255 * 5))
        + (6 * round(g / 255 * 5))
        + round(b / 255 * 5)
    )


def truncate_to_width(text: str, max_width: int) -> str:
    """Return `text` clipped to `max_width` terminal cells.

    Wide characters (e.g. CJK) count as two cells; non-printable characters
    are treated as a single cell.
    """
    result: list[str] = []
    consumed = 0
    for ch in text:
        w = wcwidth(ch)
        if w < 0:
            w = 1
        if consumed + w > max_width:
            break
        result.append(ch)
        consumed += w
    return "".join(result)


def display_width(text: str) -> int:
    """Number of terminal cells `text` occupies."""
    total = 0
    for ch in text:
        w = wcwidth(ch)
        total += w if w >= 0 else 1
    return total
