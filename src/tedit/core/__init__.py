"""Public facade for tedit.core: re-export main classes from CamelCase modules."""

# Re-export classes/symbols from CamelCase modules
from .Backup import BackupGuard  # noqa: F401
from .Document import Document, Row  # noqa: F401
from .Editor import Editor  # noqa: F401
from .Position import Position, SearchDirection  # noqa: F401
from .StatusBus import StatusBus, StatusMessage  # noqa: F401
from .Viewport import Direction, Viewport  # noqa: F401


__all__ = [
    "BackupGuard",
    "Direction",
    "Document",
    "Editor",
    "Position",
    "Row",
    "SearchDirection",
    "StatusBus",
    "StatusMessage",
    "Viewport",
]
