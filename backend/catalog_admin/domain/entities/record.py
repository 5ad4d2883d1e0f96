"""Domain entity: one persisted document of a catalog collection."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def utc_timestamp() -> str:
    """Return the current UTC time as the ISO-8601 string stored in documents."""
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Record:
    """A document as read from the store.

    ``id`` is the store-assigned internal id; human-facing sequential ids
    (``productId``, testimonial ``id``) live inside ``data`` like any other
    field. The console only ever holds transient copies of records; the
    store remains the source of truth.
    """

    id: str
    collection: str
    data: dict[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        return self.data.get(name, default)

    def flag(self, name: str) -> bool:
        return bool(self.data.get(name, False))
