# smartcart/core/notifications.py
import logging
import threading
from collections import deque
from datetime import datetime, timezone
from typing import Literal

from sqlmodel import SQLModel, Field

logger = logging.getLogger(__name__)

Variant = Literal["default", "destructive"]


class Notification(SQLModel):
    """
    A user-visible toast.

    `destructive` is used for failures the user should notice
    (sync errors, failed login), `default` for everything else.
    """

    title: str
    description: str
    variant: Variant = "default"
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class Notifier:
    """
    Bounded buffer of pending notifications.

    The front end drains it through GET /notifications. When the buffer is
    full the oldest notification is dropped.
    """

    def __init__(self, maxlen: int = 50):
        self._pending: deque[Notification] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def notify(
        self,
        title: str,
        description: str,
        variant: Variant = "default",
    ) -> Notification:
        note = Notification(title=title, description=description, variant=variant)
        with self._lock:
            self._pending.append(note)
        logger.info(f"[{variant}] {title}: {description}")
        return note

    def pending(self) -> list[Notification]:
        with self._lock:
            return list(self._pending)

    def drain(self) -> list[Notification]:
        """Return and clear all pending notifications."""
        with self._lock:
            notes = list(self._pending)
            self._pending.clear()
        return notes
