# tests/test_core/test_status_bus.py
"""Visibility window and replacement rules of `StatusBus`."""

from tedit.core.StatusBus import StatusBus, StatusMessage
from tests.stubs import FakeClock


def test_message_visible_until_duration_elapses() -> None:
    message = StatusMessage("saved", created_at=100.0)
    assert message.is_visible(104.9)
    assert not message.is_visible(105.0)


def test_emit_replaces_message_and_expires() -> None:
    clock = FakeClock()
    bus = StatusBus(clock=clock, elapsed_prefix=False)
    bus.emit("first")
    bus.emit("second")
    assert bus.visible_text() == "second"

    clock.advance(4.0)
    assert bus.is_visible()
    clock.advance(1.0)
    assert not bus.is_visible()
    assert bus.visible_text() == ""
    # Expired but not discarded.
    assert bus.message.text == "second"


def test_emit_prefixes_elapsed_seconds() -> None:
    clock = FakeClock()
    bus = StatusBus(clock=clock)
    clock.advance(12.7)
    bus.emit("Backed up to tmp")
    assert bus.message.text == "[12] Backed up to tmp"


def test_initial_text_and_clear() -> None:
    clock = FakeClock()
    bus = StatusBus(clock=clock, initial_text="help")
    assert bus.visible_text() == "help"
    bus.clear()
    assert bus.visible_text() == ""


def test_custom_visibility_window() -> None:
    clock = FakeClock()
    bus = StatusBus(clock=clock, visibility_seconds=1.0, elapsed_prefix=False)
    bus.emit("short")
    clock.advance(1.5)
    assert bus.visible_text() == ""
