"""Form state controller: the edit buffer of one screen and its derived fields."""

import logging
from typing import Any

from catalog_admin.application.services.derived_fields import (
    compute_discount,
    format_quantity,
    normalize_quantity_unit,
    parse_leading_integer,
    parse_legacy_quantity,
    parse_number,
)
from catalog_admin.application.services.form_validator import FormValidator
from catalog_admin.domain.definitions import DEFAULT_QUANTITY_UNIT
from catalog_admin.domain.entities import (
    EntityDefinition,
    FieldKind,
    FieldSpec,
    FormBuffer,
    FormMode,
    Record,
    ScreenState,
    SelectedAsset,
)
from catalog_admin.domain.exceptions import (
    FormNotOpenError,
    FormValidationError,
    InvalidAssetError,
    SubmissionInProgressError,
)

logger = logging.getLogger(__name__)

_PRICE_FIELDS = frozenset({"actualMRP", "offeredMRP"})


class FormStateController:
    """Holds the in-progress create/edit of a screen.

    All methods take the ScreenState explicitly and mutate ``state.form``;
    the controller itself is stateless and can be rebuilt per request.
    """

    def __init__(self, definition: EntityDefinition, validator: FormValidator | None = None):
        self._definition = definition
        self._validator = validator or FormValidator(definition)

    @property
    def definition(self) -> EntityDefinition:
        return self._definition

    # ── Opening / closing ───────────────────────────────────────────

    def open_create(self, state: ScreenState) -> FormBuffer:
        self._ensure_idle(state)
        state.form = FormBuffer(mode=FormMode.CREATE, values=self._definition.defaults())
        return state.form

    def open_edit(self, state: ScreenState, record: Record) -> FormBuffer:
        """Load a record into the buffer, converting legacy formats on the way."""
        self._ensure_idle(state)
        values: dict[str, Any] = {}
        for name, spec in self._definition.fields.items():
            values[name] = self._load_value(spec, record.get(name))

        if self._definition.compound_quantity:
            values["quantityValue"], values["quantityUnit"] = self._load_quantity(record)

        logger.debug("Opening %s %s for editing", self._definition.label, record.id)
        discount = record.get("discount") or 0
        state.form = FormBuffer(
            mode=FormMode.EDIT,
            values=values,
            editing_id=record.id,
            discount=float(discount),
        )
        return state.form

    def close(self, state: ScreenState) -> None:
        self._ensure_idle(state)
        state.form = None

    # ── Editing ─────────────────────────────────────────────────────

    def set_fields(self, state: ScreenState, changes: dict[str, Any]) -> FormBuffer:
        form = self._require_form(state)
        self._ensure_not_submitting(form)

        rejected: dict[str, str] = {}
        for name in changes:
            spec = self._definition.fields.get(name)
            if spec is None:
                rejected[name] = "unknown field"
            elif spec.kind is FieldKind.IMAGE:
                rejected[name] = "select an image file instead"
        if rejected:
            raise FormValidationError(rejected)

        form.values.update(changes)
        for name in changes:
            form.errors.pop(name, None)

        if self._definition.has_pricing and _PRICE_FIELDS.intersection(changes):
            form.discount = compute_discount(
                form.values.get("actualMRP"), form.values.get("offeredMRP")
            )
        return form

    def select_asset(
        self, state: ScreenState, content: bytes, filename: str, mime_type: str
    ) -> FormBuffer:
        form = self._require_form(state)
        self._ensure_not_submitting(form)
        if self._definition.image_field is None:
            raise InvalidAssetError(f"{self._definition.label} has no image field")
        if not mime_type or not mime_type.startswith("image/"):
            raise InvalidAssetError("Please select an image file")
        if not content:
            raise InvalidAssetError("the selected file is empty")

        form.asset = SelectedAsset(content=content, filename=filename, mime_type=mime_type)
        form.errors.pop(self._definition.image_field, None)
        return form

    def clear_asset(self, state: ScreenState) -> FormBuffer:
        form = self._require_form(state)
        self._ensure_not_submitting(form)
        form.asset = None
        return form

    # ── Submission helpers ──────────────────────────────────────────

    def validate(self, form: FormBuffer) -> None:
        self._validator.validate(form)

    def compose(self, form: FormBuffer, image_url: str | None) -> dict[str, Any]:
        """Build the typed document payload from a validated buffer."""
        data: dict[str, Any] = {}
        for name, spec in self._definition.fields.items():
            value = form.values.get(name)
            if spec.kind is FieldKind.IMAGE:
                data[name] = image_url or ""
            elif spec.kind is FieldKind.NUMBER:
                number = parse_number(value) or 0.0
                data[name] = int(number) if spec.integer else number
            else:
                data[name] = "" if value is None else str(value).strip()

        if self._definition.has_pricing:
            form.discount = compute_discount(data.get("actualMRP"), data.get("offeredMRP"))
            data["discount"] = form.discount

        if self._definition.compound_quantity:
            data["totalQuantity"] = format_quantity(
                data.get("quantityValue"), data.get("quantityUnit") or DEFAULT_QUANTITY_UNIT
            )
        return data

    # ── Internals ───────────────────────────────────────────────────

    @staticmethod
    def _load_value(spec: FieldSpec, raw: Any) -> Any:
        """Stored value as shown in the form.

        An optional number whose minimum excludes 0 was saved blank as 0 and
        loads blank again. Integer fields holding legacy text (``"500 ml"``)
        load their leading whole number.
        """
        if raw is None:
            return spec.default
        if spec.kind is not FieldKind.NUMBER:
            return raw
        try:
            number = parse_number(raw)
        except ValueError:
            if spec.integer:
                leading = parse_leading_integer(raw)
                if leading is not None:
                    return leading
            return raw
        if (
            number == 0
            and not spec.required
            and spec.minimum is not None
            and spec.minimum > 0
        ):
            return spec.default
        return raw

    @staticmethod
    def _load_quantity(record: Record) -> tuple[Any, str]:
        value = record.get("quantityValue")
        unit = record.get("quantityUnit")
        if value not in (None, "") and unit:
            return value, normalize_quantity_unit(str(unit))

        legacy = record.get("totalQuantity")
        if legacy not in (None, ""):
            return parse_legacy_quantity(legacy)
        return "", DEFAULT_QUANTITY_UNIT

    @staticmethod
    def _require_form(state: ScreenState) -> FormBuffer:
        if state.form is None:
            raise FormNotOpenError()
        return state.form

    @staticmethod
    def _ensure_not_submitting(form: FormBuffer) -> None:
        if form.submitting:
            raise SubmissionInProgressError()

    def _ensure_idle(self, state: ScreenState) -> None:
        if state.form is not None:
            self._ensure_not_submitting(state.form)
