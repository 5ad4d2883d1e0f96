"""Configuration-driven form validation shared by every screen."""

import logging

from catalog_admin.application.services.derived_fields import parse_number
from catalog_admin.domain.entities import (
    EntityDefinition,
    FieldKind,
    FieldSpec,
    FormBuffer,
    FormMode,
)
from catalog_admin.domain.exceptions import FormValidationError

logger = logging.getLogger(__name__)


class FormValidator:
    """Evaluates a form buffer against the field specs of its collection.

    Runs entirely locally. On failure the per-field reasons are written to
    ``form.errors`` and a FormValidationError naming every offending field
    (with its kind) is raised.
    """

    def __init__(self, definition: EntityDefinition):
        self._definition = definition

    def validate(self, form: FormBuffer) -> None:
        errors: dict[str, str] = {}
        for name, spec in self._definition.fields.items():
            reason = self._check(name, spec, form)
            if reason is not None:
                errors[name] = reason

        form.errors = errors
        if errors:
            kinds = {name: self._definition.fields[name].kind.value for name in errors}
            logger.debug(
                "Validation failed for %s: %s", self._definition.collection.value, errors
            )
            raise FormValidationError(errors, kinds)

    def _check(self, name: str, spec: FieldSpec, form: FormBuffer) -> str | None:
        value = form.values.get(name)

        if spec.kind is FieldKind.IMAGE:
            has_image = form.asset is not None or (
                form.mode is FormMode.EDIT and bool(value)
            )
            if spec.required and not has_image:
                return FormValidationError.MISSING
            return None

        if spec.kind is FieldKind.NUMBER:
            try:
                number = parse_number(value)
            except ValueError:
                return "must be a number"
            if number is None:
                return FormValidationError.MISSING if spec.required else None
            if spec.integer and not number.is_integer():
                return "must be a whole number"
            if spec.minimum is not None and number < spec.minimum:
                return f"must be at least {spec.minimum:g}"
            if spec.maximum is not None and number > spec.maximum:
                return f"must be at most {spec.maximum:g}"
            return None

        text = "" if value is None else str(value).strip()
        if not text:
            return FormValidationError.MISSING if spec.required else None
        if spec.choices and text not in spec.choices:
            return f"must be one of: {', '.join(spec.choices)}"
        return None
