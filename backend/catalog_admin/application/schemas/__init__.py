from .record import RecordResponse
from .screen import (
    FeaturedViewSchema,
    FlagToggleRequest,
    FormView,
    NotificationSchema,
    OpenFormRequest,
    ScreenView,
    SelectedAssetSchema,
    SessionClosedResponse,
    SetFieldsRequest,
)

__all__ = [
    "RecordResponse",
    "FeaturedViewSchema",
    "FlagToggleRequest",
    "FormView",
    "NotificationSchema",
    "OpenFormRequest",
    "ScreenView",
    "SelectedAssetSchema",
    "SessionClosedResponse",
    "SetFieldsRequest",
]
