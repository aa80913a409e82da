# tedit/core/Position.py
"""Value types shared by the editor core: document coordinates and search direction."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Position:
    """Zero-based (column, row) coordinate in document space.

    Validity is contextual: consumers clamp it to the document and row length.
    """

    x: int = 0
    y: int = 0


class SearchDirection(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"
