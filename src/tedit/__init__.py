# tedit/__init__.py
"""tedit: a small curses text editor with incremental search and crash-safety backups."""

__version__ = "0.1.0"
