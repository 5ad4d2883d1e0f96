from .derived_fields import compute_discount, format_quantity, parse_legacy_quantity
from .form_validator import FormValidator
from .form_state_controller import FormStateController
from .entity_manager import EntityManagerWorkflow, FeaturedView
from .featured_flags import FeaturedFlagService
from .screen_registry import ScreenRegistry

__all__ = [
    "compute_discount",
    "format_quantity",
    "parse_legacy_quantity",
    "FormValidator",
    "FormStateController",
    "EntityManagerWorkflow",
    "FeaturedView",
    "FeaturedFlagService",
    "ScreenRegistry",
]
