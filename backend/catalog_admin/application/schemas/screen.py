"""Pydantic DTOs for the screen endpoints: list view, form buffer and toggles."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from catalog_admin.domain.entities import FormMode, NotificationLevel, ScreenStatus

from .record import RecordResponse


class NotificationSchema(BaseModel):
    level: NotificationLevel
    message: str
    created_at: datetime

    model_config = {"from_attributes": True}


class SelectedAssetSchema(BaseModel):
    """Metadata of the picked image; the bytes stay on the server until submit."""

    filename: str
    mime_type: str
    size: int

    model_config = {"from_attributes": True}


class FormView(BaseModel):
    mode: FormMode
    values: dict[str, Any]
    editing_id: str | None = None
    asset: SelectedAssetSchema | None = None
    discount: float = 0.0
    errors: dict[str, str] = Field(default_factory=dict)
    submitting: bool = False

    model_config = {"from_attributes": True}


class FeaturedViewSchema(BaseModel):
    product_of_the_day: RecordResponse | None = None
    best_sellers: list[RecordResponse] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class ScreenView(BaseModel):
    """Everything an operator sees on one screen."""

    collection: str
    label: str
    status: ScreenStatus
    records: list[RecordResponse]
    form: FormView | None = None
    featured: FeaturedViewSchema | None = None
    notifications: list[NotificationSchema] = Field(default_factory=list)


class OpenFormRequest(BaseModel):
    """Open the create form, or the edit form when ``record_id`` is given."""

    record_id: str | None = Field(None, max_length=64)


class SetFieldsRequest(BaseModel):
    values: dict[str, Any] = Field(
        ..., examples=[{"title": "Rose Oil", "actualMRP": "100", "offeredMRP": "80"}],
    )


class FlagToggleRequest(BaseModel):
    enabled: bool
    confirm: bool = False


class SessionClosedResponse(BaseModel):
    session: str
    discarded: int = Field(..., description="Number of screen states dropped")
