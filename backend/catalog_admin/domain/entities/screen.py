"""Per-screen state: list cache, edit buffer and pending notifications.

A ``ScreenState`` is owned by exactly one operator session and one
collection. Workflows receive it explicitly and mutate it in place; nothing
here is shared between screens.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from .record import Record


class ScreenStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"


class FormMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass
class Notification:
    """A transient, operator-facing message (a toast)."""

    level: NotificationLevel
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class SelectedAsset:
    """An image picked in the form but not uploaded yet."""

    content: bytes
    filename: str
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass
class FormBuffer:
    """The in-progress create or edit."""

    mode: FormMode
    values: dict[str, Any]
    editing_id: str | None = None
    asset: SelectedAsset | None = None
    discount: float = 0.0
    errors: dict[str, str] = field(default_factory=dict)
    submitting: bool = False


@dataclass
class ScreenState:
    collection: str
    status: ScreenStatus = ScreenStatus.IDLE
    records: list[Record] = field(default_factory=list)
    form: FormBuffer | None = None
    notifications: list[Notification] = field(default_factory=list)

    def notify(self, level: NotificationLevel, message: str) -> None:
        self.notifications.append(Notification(level=level, message=message))

    def drain_notifications(self) -> list[Notification]:
        """Return pending notifications and clear the queue."""
        pending, self.notifications = self.notifications, []
        return pending

    def find_record(self, record_id: str) -> Record | None:
        for record in self.records:
            if record.id == record_id:
                return record
        return None
