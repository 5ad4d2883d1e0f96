"""Configuration types that bind one catalog collection to the generic screen engine."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Collection(str, Enum):
    """Document collections managed by the console."""

    PRODUCTS = "products"
    COMBO_PRODUCTS = "combo-products"
    BLOGS = "blogs"
    BANNERS = "banners"
    CATEGORIES = "categories"
    TESTIMONIALS = "testimonials"
    USERS = "users"


class FieldKind(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    IMAGE = "image"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class FieldSpec:
    """How a single form field is validated and persisted."""

    required: bool = False
    kind: FieldKind = FieldKind.TEXT
    default: Any = ""
    integer: bool = False
    minimum: float | None = None
    maximum: float | None = None
    choices: tuple[str, ...] = ()


@dataclass(frozen=True)
class EntityDefinition:
    """Everything the generic workflow needs to know about one collection.

    ``fields`` preserves declaration order, which is also the order used in
    validation messages.
    """

    collection: Collection
    label: str
    fields: dict[str, FieldSpec]
    order_by: str | None = "createdAt"
    order_direction: SortDirection = SortDirection.DESC
    sequential_id_field: str | None = None
    has_pricing: bool = False
    compound_quantity: bool = False
    featured_flags: bool = False
    backfill_sequential_ids: bool = False

    @property
    def image_field(self) -> str | None:
        """Name of the (single) image field, if the collection has one."""
        for name, spec in self.fields.items():
            if spec.kind is FieldKind.IMAGE:
                return name
        return None

    def defaults(self) -> dict[str, Any]:
        """Blank form values for an ``open create``."""
        return {name: spec.default for name, spec in self.fields.items()}
