# tedit/utils/logging_config.py
"""tedit.utils.logging_config
============================

Logging configuration for the tedit editor.

It defines the global logger objects and a single setup function,
`setup_logging`, which configures application-wide handlers and levels from
the ``[logging]`` section of the configuration dictionary.

Features:
    - Rotating file logging for general editor events (editor.log).
    - Optional console logging to stderr. Disabled by default because curses
      owns the terminal while the editor runs.
    - Optional separate error log file (error.log) for ERROR and CRITICAL events.
    - Optional key event tracing (keytrace.log) enabled via the TEDIT_KEYTRACE
      environment variable.
    - Automatic creation of log directories, with fallback to the system temp
      directory on failure.
    - Safe reconfiguration: existing handlers are cleared to avoid duplicate logs.
    - Never raises; errors are reported to stderr and logging continues
      best-effort.

Globals:
    logger: Main application logger ("tedit").
    KEY_LOGGER: Logger for raw key-press trace events ("tedit.keyevents").
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Optional


# ======================== Global loggers ========================
# Created at import-time, unconfigured until ``setup_logging()`` attaches handlers.
logger = logging.getLogger("tedit")  # main application logger
KEY_LOGGER = logging.getLogger("tedit.keyevents")  # raw key-press trace


def _ensure_log_dir(log_filename: str, fallback_name: str) -> str:
    """Creates the directory for `log_filename`, or returns a temp-dir fallback path."""
    log_dir = os.path.dirname(log_filename)
    if log_dir and not os.path.exists(log_dir):
        try:
            os.makedirs(log_dir)
        except OSError as e_mkdir:
            print(f"Error creating log directory '{log_dir}': {e_mkdir}", file=sys.stderr)
            log_filename = os.path.join(tempfile.gettempdir(), fallback_name)
            print(f"Logging to temporary file: '{log_filename}'", file=sys.stderr)
    return log_filename


def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Configures application-wide logging handlers and log levels.

    The routine sets up up to four independent handlers:

    1. File handler – rotating editor.log capturing everything from
       the configured `file_level` (default DEBUG) upward.
    2. Console handler – optional `stderr` output whose threshold is
       `console_level` (default WARNING).
    3. Error-file handler – optional rotating error.log, stored next to the
       main log, that keeps only ERROR and CRITICAL events.
    4. Key-event handler – optional rotating keytrace.log enabled when the
       environment variable ``TEDIT_KEYTRACE`` is ``1/true/yes``; attached to
       the ``tedit.keyevents`` logger.

    Args:
        config (dict | None): Optional application configuration blob.
            Only the ``["logging"]`` sub-section is consulted; recognised
            keys are ``log_file``, ``file_level``, ``console_level``,
            ``log_to_console`` and ``separate_error_log``.
    """
    if config is None:
        config = {}
    logging_config = config.get("logging", {})

    log_filename = os.path.expanduser(logging_config.get("log_file", "editor.log"))
    log_filename = _ensure_log_dir(log_filename, "tedit.log")
    log_dir = os.path.dirname(log_filename)

    log_file_level_str = str(logging_config.get("file_level", "DEBUG")).upper()
    log_file_level = getattr(logging, log_file_level_str, logging.DEBUG)

    file_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s (%(filename)s:%(lineno)d)"
    )
    file_handler = None
    try:
        file_handler = logging.handlers.RotatingFileHandler(
            log_filename, maxBytes=2 * 1024 * 1024, backupCount=5, encoding="utf-8"
        )
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(log_file_level)
    except Exception as e_fh:
        print(
            f"Error setting up file logger for '{log_filename}': {e_fh}. File logging may be impaired.",
            file=sys.stderr,
        )

    # Console Handler
    console_handler = None
    if logging_config.get("log_to_console", False):
        console_level_str = str(logging_config.get("console_level", "WARNING")).upper()
        console_log_level = getattr(logging, console_level_str, logging.WARNING)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(
            logging.Formatter("%(levelname)-8s - %(name)-12s - %(message)s")
        )
        console_handler.setLevel(console_log_level)

    # Optional Separate Error Log File
    error_file_handler = None
    if logging_config.get("separate_error_log", False):
        error_log_filename = os.path.join(log_dir, "error.log")
        try:
            error_file_handler = logging.handlers.RotatingFileHandler(
                error_log_filename,
                maxBytes=1 * 1024 * 1024,
                backupCount=3,
                encoding="utf-8",
            )
            error_file_handler.setFormatter(file_formatter)
            error_file_handler.setLevel(logging.ERROR)
        except Exception as e_efh:
            print(
                f"Error setting up separate error log '{error_log_filename}': {e_efh}.",
                file=sys.stderr,
            )

    # Configure the root logger
    root_logger = logging.getLogger()
    root_logger.handlers = []  # Clear existing root handlers to avoid duplicates

    if file_handler:
        root_logger.addHandler(file_handler)
    if console_handler:
        root_logger.addHandler(console_handler)
    if error_file_handler:
        root_logger.addHandler(error_file_handler)

    root_logger.setLevel(log_file_level)

    # Key Event Logger
    key_event_logger = logging.getLogger("tedit.keyevents")
    key_event_logger.propagate = False
    key_event_logger.setLevel(logging.DEBUG)
    key_event_logger.handlers = []

    if os.environ.get("TEDIT_KEYTRACE", "").lower() in {"1", "true", "yes"}:
        try:
            key_trace_filename = os.path.join(log_dir, "keytrace.log")
            key_trace_handler = logging.handlers.RotatingFileHandler(
                key_trace_filename,
                maxBytes=1 * 1024 * 1024,
                backupCount=3,
                encoding="utf-8",
            )
            key_trace_handler.setFormatter(logging.Formatter("%(asctime)s - %(message)s"))
            key_event_logger.addHandler(key_trace_handler)
            key_event_logger.disabled = False
            logging.info("Key event tracing enabled, logging to '%s'.", key_trace_filename)
        except Exception as e_keytrace:
            logging.error(f"Failed to set up key trace logging: {e_keytrace}", exc_info=True)
            key_event_logger.disabled = True
    else:
        key_event_logger.addHandler(logging.NullHandler())
        key_event_logger.disabled = True
        logging.debug("Key event tracing is disabled.")

    logging.info(
        "Logging setup complete. Root logger level: %s.",
        logging.getLevelName(root_logger.level),
    )
    if file_handler:
        logging.info(
            f"File logging to '{log_filename}' at level: {logging.getLevelName(file_handler.level)}."
        )
    if console_handler:
        logging.info(
            f"Console logging to stderr at level: {logging.getLevelName(console_handler.level)}."
        )
