# tests/conftest.py
"""Pytest configuration with shared fixtures for the tedit editor tests.

The editor session is built around `ScriptedTerminal`, a `FakeClock`, a
mocked clipboard and a mocked drawer, so no test needs a real terminal.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional
from unittest.mock import MagicMock

import pytest

from tedit.core.Document import Document
from tedit.core.Editor import Editor
from tests.stubs import FakeClock, ScriptedTerminal


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mock_clipboard() -> MagicMock:
    clipboard = MagicMock()
    clipboard.paste.return_value = ""
    return clipboard


@pytest.fixture
def mock_config() -> dict[str, dict[str, Any]]:
    """Baseline configuration: defaults, elapsed prefix off for exact assertions."""
    return {
        "editor": {
            "quit_confirmations": 3,
            "backup_interval_keystrokes": 10,
            "status_elapsed_prefix": False,
        },
    }


@pytest.fixture
def make_editor(
    clock: FakeClock, mock_clipboard: MagicMock, mock_config: dict[str, dict[str, Any]]
) -> Callable[..., Editor]:
    """Factory building an `Editor` on a scripted terminal.

    Args (of the returned callable):
        keys: Logical keys the terminal will return, in order.
        lines: Initial document content.
        file_name: File name given to the document (not opened).
        config: Overrides merged into the baseline ``[editor]`` section.
    """

    def _make(
        keys: Iterable[str] = (),
        lines: Optional[list[str]] = None,
        file_name: Optional[str] = None,
        config: Optional[dict[str, Any]] = None,
    ) -> Editor:
        editor_section = dict(mock_config["editor"])
        editor_section.update((config or {}).get("editor", {}))
        editor = Editor(
            ScriptedTerminal(keys),
            config={"editor": editor_section},
            clock=clock,
            clipboard=mock_clipboard,
            drawer=MagicMock(),
        )
        if lines is not None or file_name is not None:
            editor.document = Document.from_lines(lines or [], file_name)
        return editor

    return _make
