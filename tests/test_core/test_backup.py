# tests/test_core/test_backup.py
"""Snapshot target, trigger counter and failure handling of `BackupGuard`."""

from pathlib import Path
from unittest.mock import call, mock_open, patch

from tedit.core.Backup import BackupGuard
from tedit.core.Document import Document
from tedit.core.Position import Position
from tedit.core.StatusBus import StatusBus
from tedit.utils.utils import EditorSettings
from tests.stubs import FakeClock


def make_guard(**settings) -> BackupGuard:
    bus = StatusBus(clock=FakeClock(), elapsed_prefix=False)
    return BackupGuard(EditorSettings(**settings), bus)


def test_target_path_uses_suffix_or_fallback() -> None:
    guard = make_guard()
    assert guard.target_path(Document(file_name="notes.md")) == "notes.md.tmp"
    assert guard.target_path(Document()) == "tmp"

    custom = make_guard(backup_suffix=".bak", backup_fallback_name="rescue.txt")
    assert custom.target_path(Document(file_name="a")) == "a.bak"
    assert custom.target_path(Document()) == "rescue.txt"


def test_record_keystroke_fires_at_interval() -> None:
    guard = make_guard(backup_interval_keystrokes=3)
    assert [guard.record_keystroke() for _ in range(4)] == [False, False, True, True]


def test_zero_interval_disables_keystroke_backups() -> None:
    guard = make_guard(backup_interval_keystrokes=0)
    assert not any(guard.record_keystroke() for _ in range(50))


def test_successful_backup_resets_counter(tmp_path: Path) -> None:
    guard = make_guard()
    guard.keystrokes_since_backup = 10
    doc = Document.from_lines(["abc", "de"], str(tmp_path / "f.txt"))

    path = guard.backup(doc)

    assert path == f"{tmp_path / 'f.txt'}.tmp"
    assert Path(path).read_text() == "abc\nde\n"
    assert guard.keystrokes_since_backup == 0
    assert guard.status_bus.visible_text() == f"Backed up to {path}"


def test_unwritable_target_reports_failure(tmp_path: Path) -> None:
    guard = make_guard()
    guard.keystrokes_since_backup = 10
    doc = Document.from_lines(["abc"], str(tmp_path / "missing" / "f.txt"))

    assert guard.backup(doc) is None
    assert guard.keystrokes_since_backup == 10
    assert guard.status_bus.visible_text() == f"Backup failed: {tmp_path / 'missing' / 'f.txt'}.tmp"


def test_failed_line_write_keeps_counter_and_continues() -> None:
    guard = make_guard()
    guard.keystrokes_since_backup = 10
    doc = Document.from_lines(["abc", "de", "f"], "f.txt")
    opener = mock_open()
    handle = opener.return_value
    handle.write.side_effect = [None, None, OSError("disk full"), None, None]

    with patch("tedit.core.Backup.open", opener, create=True):
        assert guard.backup(doc) is None

    assert guard.status_bus.visible_text() == "Backup failed: f.txt.tmp"
    assert guard.keystrokes_since_backup == 10
    # The remaining line is still written after the failure.
    assert handle.write.call_args_list[-2:] == [call("f"), call("\n")]


def test_backup_of_ascii_file_keeps_non_ascii_text(tmp_path: Path) -> None:
    source = tmp_path / "plain.txt"
    source.write_bytes(b"hello world\n")
    doc = Document.open(str(source))
    doc.insert(Position(11, 0), "é")

    path = make_guard().backup(doc)

    assert Path(path).read_bytes() == "hello worldé\n".encode("utf-8")
