"""Collection bindings for the generic screen engine.

One ``EntityDefinition`` per collection. Adding a screen means adding an
entry here; the validator, form controller and workflow read nothing else.
"""

from catalog_admin.domain.entities import (
    Collection,
    EntityDefinition,
    FieldKind,
    FieldSpec,
)

QUANTITY_UNITS: tuple[str, ...] = (
    "ml",
    "l",
    "g",
    "kg",
    "pcs",
    "bottles",
    "packets",
    "boxes",
    "tubs",
    "tubes",
)
DEFAULT_QUANTITY_UNIT = "ml"

# Spellings found in documents written before the unit picker existed.
QUANTITY_UNIT_ALIASES: dict[str, str] = {
    "ltr": "l",
    "litre": "l",
    "litres": "l",
    "liter": "l",
    "liters": "l",
    "gm": "g",
    "gms": "g",
    "gram": "g",
    "grams": "g",
    "kgs": "kg",
    "pc": "pcs",
    "piece": "pcs",
    "pieces": "pcs",
    "bottle": "bottles",
    "packet": "packets",
    "box": "boxes",
    "tub": "tubs",
    "tube": "tubes",
}

PRODUCT_OF_THE_DAY = "isProductOfTheDay"
BEST_SELLER = "isBestSeller"

_TITLE = FieldSpec(required=True)
_PRICE = FieldSpec(required=True, kind=FieldKind.NUMBER, minimum=0)
_RATING = FieldSpec(kind=FieldKind.NUMBER, minimum=1, maximum=5)
_IMAGE = FieldSpec(required=True, kind=FieldKind.IMAGE)


DEFINITIONS: dict[Collection, EntityDefinition] = {
    Collection.PRODUCTS: EntityDefinition(
        collection=Collection.PRODUCTS,
        label="Product",
        fields={
            "title": _TITLE,
            "description": FieldSpec(required=True),
            "actualMRP": _PRICE,
            "offeredMRP": _PRICE,
            "rating": _RATING,
            "totalQuantity": FieldSpec(kind=FieldKind.NUMBER, integer=True, minimum=0),
            "imageUrl": _IMAGE,
        },
        sequential_id_field="productId",
        has_pricing=True,
    ),
    Collection.COMBO_PRODUCTS: EntityDefinition(
        collection=Collection.COMBO_PRODUCTS,
        label="Combo product",
        fields={
            "title": _TITLE,
            "description": FieldSpec(required=True),
            "actualMRP": _PRICE,
            "offeredMRP": _PRICE,
            "rating": _RATING,
            "quantityValue": FieldSpec(kind=FieldKind.NUMBER, minimum=0),
            "quantityUnit": FieldSpec(default=DEFAULT_QUANTITY_UNIT, choices=QUANTITY_UNITS),
            "imageUrl": _IMAGE,
        },
        sequential_id_field="productId",
        has_pricing=True,
        compound_quantity=True,
        featured_flags=True,
    ),
    Collection.BLOGS: EntityDefinition(
        collection=Collection.BLOGS,
        label="Blog",
        fields={
            "title": _TITLE,
            "content": FieldSpec(required=True),
            "thumbnailUrl": _IMAGE,
        },
    ),
    Collection.BANNERS: EntityDefinition(
        collection=Collection.BANNERS,
        label="Banner",
        fields={
            "text": FieldSpec(required=True),
            "imageUrl": _IMAGE,
        },
    ),
    Collection.CATEGORIES: EntityDefinition(
        collection=Collection.CATEGORIES,
        label="Category",
        fields={
            "name": FieldSpec(required=True),
            "imageUrl": _IMAGE,
        },
    ),
    Collection.TESTIMONIALS: EntityDefinition(
        collection=Collection.TESTIMONIALS,
        label="Testimonial",
        fields={
            "reviewerName": FieldSpec(required=True),
            "comment": FieldSpec(required=True),
            "rating": FieldSpec(kind=FieldKind.NUMBER, default=5, integer=True, minimum=1, maximum=5),
        },
        sequential_id_field="id",
        backfill_sequential_ids=True,
    ),
    Collection.USERS: EntityDefinition(
        collection=Collection.USERS,
        label="User",
        fields={
            "name": FieldSpec(required=True),
            "email": FieldSpec(required=True),
            "phone": FieldSpec(),
        },
        order_by=None,
    ),
}


def get_definition(collection: Collection | str) -> EntityDefinition:
    """Look up the binding for a collection (accepts the enum or its value)."""
    return DEFINITIONS[Collection(collection)]
