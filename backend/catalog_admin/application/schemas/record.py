"""Pydantic DTOs for catalog documents."""

from typing import Any

from pydantic import BaseModel


class RecordResponse(BaseModel):
    """A document as shown in a screen's list."""

    id: str
    collection: str
    data: dict[str, Any]

    model_config = {"from_attributes": True}
