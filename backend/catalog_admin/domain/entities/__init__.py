from .record import Record, utc_timestamp
from .entity_definition import (
    Collection,
    EntityDefinition,
    FieldKind,
    FieldSpec,
    SortDirection,
)
from .screen import (
    FormBuffer,
    FormMode,
    Notification,
    NotificationLevel,
    ScreenState,
    ScreenStatus,
    SelectedAsset,
)

__all__ = [
    "Record",
    "utc_timestamp",
    "Collection",
    "EntityDefinition",
    "FieldKind",
    "FieldSpec",
    "SortDirection",
    "FormBuffer",
    "FormMode",
    "Notification",
    "NotificationLevel",
    "ScreenState",
    "ScreenStatus",
    "SelectedAsset",
]
