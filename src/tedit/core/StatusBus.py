# tedit/core/StatusBus.py
"""StatusBus Module for tedit
============================
Single-slot, time-scoped channel for user-visible messages.

Exactly one `StatusMessage` is live at a time: every `emit` replaces it
wholesale and no history is kept. Visibility is a pure predicate of the
message creation time and "now"; the renderer asks each frame whether the
message is still visible, but an expired message is never discarded, only
replaced by the next emission.

The clock is injected (defaults to `time.monotonic`) so expiry can be tested
without real time passing.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

Clock = Callable[[], float]


@dataclass(frozen=True)
class StatusMessage:
    text: str
    created_at: float

    def is_visible(self, now: float, duration: float = 5.0) -> bool:
        """True while less than `duration` seconds have passed since creation."""
        return now - self.created_at < duration


class StatusBus:
    """Holds the current status message and the session start time.

    Attributes:
        message (StatusMessage): The live message.
        session_start (float): Clock value at construction; used for the
            optional elapsed-time prefix on emitted messages.
        visibility_seconds (float): How long a message stays visible.
        elapsed_prefix (bool): Prefix emitted text with ``[<seconds>] ``.
    """

    def __init__(
        self,
        clock: Clock = time.monotonic,
        visibility_seconds: float = 5.0,
        elapsed_prefix: bool = True,
        initial_text: str = "",
    ) -> None:
        self._clock = clock
        self.visibility_seconds = visibility_seconds
        self.elapsed_prefix = elapsed_prefix
        self.session_start = clock()
        self.message = StatusMessage(initial_text, self.session_start)

    def emit(self, text: str) -> StatusMessage:
        """Replaces the live message with `text`, stamped with the current time."""
        now = self._clock()
        if self.elapsed_prefix:
            text = f"[{int(now - self.session_start)}] {text}"
        self.message = StatusMessage(text, now)
        logging.debug("Status message set to: %r", text)
        return self.message

    def clear(self) -> None:
        """Replaces the live message with an empty one."""
        self.message = StatusMessage("", self._clock())

    def is_visible(self, now: Optional[float] = None) -> bool:
        if now is None:
            now = self._clock()
        return self.message.is_visible(now, self.visibility_seconds)

    def visible_text(self, now: Optional[float] = None) -> str:
        """Text to show this frame: the message while visible, else blank."""
        return self.message.text if self.is_visible(now) else ""
