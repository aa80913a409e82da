# tests/test_core/test_prompt.py
"""Input collection of the message-bar prompt."""

from unittest.mock import MagicMock

from tedit.core.Prompt import prompt


def test_escape_cancels_with_none(make_editor) -> None:
    editor = make_editor(["a", "b", "esc"])
    assert prompt(editor, "Name: ") is None
    assert editor.status_bus.visible_text() == ""


def test_enter_returns_input(make_editor) -> None:
    editor = make_editor(["a", "b", "enter"])
    assert prompt(editor, "Name: ") == "ab"


def test_empty_input_returns_none(make_editor) -> None:
    editor = make_editor(["enter"])
    assert prompt(editor, "Name: ") is None


def test_backspace_removes_last_char_and_ignores_empty(make_editor) -> None:
    editor = make_editor(["backspace", "a", "b", "backspace", "c", "enter"])
    assert prompt(editor, "Name: ") == "ac"


def test_non_character_keys_are_not_appended(make_editor) -> None:
    editor = make_editor(["x", "up", "ctrl+a", "\t", "enter"])
    assert prompt(editor, "Name: ") == "x"


def test_handler_sees_every_key_including_terminator(make_editor) -> None:
    editor = make_editor(["a", "backspace", "esc"])
    handler = MagicMock()
    prompt(editor, "Find: ", handler)

    calls = [(c.args[1], c.args[2]) for c in handler.on_key.call_args_list]
    assert calls == [("a", "a"), ("backspace", ""), ("esc", "")]


def test_prompt_redraws_label_with_input(make_editor) -> None:
    editor = make_editor(["a", "enter"])
    prompt(editor, "Name: ")
    assert editor.drawer.draw.call_count == 2
