# tedit/main.py
"""
tedit Main Entry Point
======================

Launches the editor. It performs:
1) Configuration & Logging: loads config and initializes logging first.
2) Locale: enables the user's locale so curses renders wide characters.
3) Curses Wrapper: safely initializes/tears down curses to avoid terminal corruption.
4) Application Run: opens the optional file from the command line and runs
   the editor until the user quits.

A failure that ends the session is reported on stderr once curses has
restored the terminal, and the process exits with status 1.
"""

from __future__ import annotations

import curses
import locale
import logging
import signal
import sys
from typing import Any, Optional

from tedit.utils.logging_config import setup_logging
from tedit.utils.utils import load_config

logger = logging.getLogger("tedit")


def main_app_runner(stdscr: "curses.window", config: dict[str, Any], file_to_open: Optional[str]) -> None:
    """
    Target for `curses.wrapper`: puts the terminal into editor mode and runs the session.
    """
    from tedit.core.Editor import Editor
    from tedit.ui.Terminal import Terminal

    # Ignore terminal suspension (Ctrl+Z), typical for full-screen TUIs.
    if hasattr(signal, "SIGTSTP"):
        try:
            signal.signal(signal.SIGTSTP, signal.SIG_IGN)
        except (OSError, ValueError):
            pass

    with Terminal(stdscr) as terminal:
        editor = Editor(terminal, config=config, file_name=file_to_open)
        editor.run()


def start() -> None:
    """Console-script entry point (`tedit [FILE]`)."""
    try:
        config = load_config()
        setup_logging(config)
    except Exception as e:
        print(f"FATAL: Could not initialize configuration or logging system: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info("tedit starting up...")

    # Locale is important for proper character width/encoding behavior in curses.
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        logger.warning("Could not set system locale. Character rendering may be affected.")

    file_to_open = sys.argv[1] if len(sys.argv) > 1 and sys.argv[1].strip() else None

    try:
        curses.wrapper(main_app_runner, config, file_to_open)
    except Exception as e:
        logger.critical("Unhandled exception at the top level.", exc_info=True)
        print(f"tedit: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info("tedit shut down gracefully.")


if __name__ == "__main__":
    start()
