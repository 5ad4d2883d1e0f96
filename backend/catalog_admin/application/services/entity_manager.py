"""Entity manager workflow: the generic load / submit / delete pipeline of a screen.

Every catalog screen is this workflow plus an EntityDefinition. Each
operation is a sequential awaited pipeline (upload, derive, write, refetch)
working on an explicitly passed ScreenState. Failures are surfaced as exactly
one notification on the screen and then re-raised to the caller; nothing is
retried automatically.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from catalog_admin.application.interfaces import AssetUploader, DocumentStore
from catalog_admin.application.services.form_state_controller import FormStateController
from catalog_admin.domain.definitions import BEST_SELLER, PRODUCT_OF_THE_DAY
from catalog_admin.domain.entities import (
    EntityDefinition,
    FormBuffer,
    FormMode,
    NotificationLevel,
    Record,
    ScreenState,
    ScreenStatus,
    SortDirection,
    utc_timestamp,
)
from catalog_admin.domain.exceptions import (
    CatalogAdminError,
    ConfirmationRequiredError,
    EntityNotFoundError,
    FormNotOpenError,
    FormValidationError,
    StoreError,
    SubmissionInProgressError,
)
from catalog_admin.infrastructure.logging.colored_logger import WorkflowLogger, WorkflowStage

logger = logging.getLogger(__name__)
wlog = WorkflowLogger("EntityManagerWorkflow")


def as_sequence_number(value: Any) -> int:
    """Coerce a stored sequential id to int; anything unusable counts as 0."""
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


@dataclass
class FeaturedView:
    """Featured subsets derived from a screen's cached list."""

    product_of_the_day: Record | None = None
    best_sellers: list[Record] = field(default_factory=list)


class EntityManagerWorkflow:
    """Orchestrates one screen: fetch-on-mount, submit, delete, derived views."""

    def __init__(
        self,
        definition: EntityDefinition,
        store: DocumentStore,
        uploader: AssetUploader,
        forms: FormStateController | None = None,
    ):
        self._definition = definition
        self._store = store
        self._uploader = uploader
        self._forms = forms or FormStateController(definition)

    @property
    def definition(self) -> EntityDefinition:
        return self._definition

    @property
    def forms(self) -> FormStateController:
        return self._forms

    @property
    def _collection(self) -> str:
        return self._definition.collection.value

    @property
    def _noun(self) -> str:
        return self._definition.label.lower()

    # ── Loading ─────────────────────────────────────────────────────

    async def mount(self, state: ScreenState) -> list[Record]:
        """Load the list the first time a screen is shown."""
        if state.status is ScreenStatus.IDLE:
            return await self.load(state)
        return state.records

    async def load(self, state: ScreenState) -> list[Record]:
        """Fetch the full list. A failure leaves an empty list and a notification."""
        state.status = ScreenStatus.LOADING
        try:
            with wlog.timed_step(WorkflowStage.LOAD, f"Fetching {self._collection}"):
                records = await self._fetch()
        except StoreError as exc:
            state.records = []
            state.status = ScreenStatus.READY
            state.notify(NotificationLevel.ERROR, f"Error fetching {self._collection}: {exc}")
            return state.records

        if self._definition.backfill_sequential_ids:
            records = await self._backfill_sequential_ids(state, records)

        state.records = records
        state.status = ScreenStatus.READY
        wlog.detail(f"{len(records)} {self._collection} loaded")
        return records

    async def _fetch(self) -> list[Record]:
        return await self._store.list_all(
            self._collection,
            order_by=self._definition.order_by,
            direction=self._definition.order_direction,
        )

    async def _backfill_sequential_ids(
        self, state: ScreenState, records: list[Record]
    ) -> list[Record]:
        """Give documents created before sequential ids existed an id of their own."""
        id_field = self._definition.sequential_id_field
        if id_field is None:
            return records

        missing = [r for r in records if as_sequence_number(r.get(id_field)) == 0]
        if not missing:
            return records

        next_id = max((as_sequence_number(r.get(id_field)) for r in records), default=0) + 1
        try:
            for record in missing:
                await self._store.update(
                    self._collection,
                    record.id,
                    {id_field: next_id, "updatedAt": utc_timestamp()},
                )
                next_id += 1
            logger.info("Assigned sequential ids to %d %s", len(missing), self._collection)
            return await self._fetch()
        except StoreError as exc:
            wlog.step_error(WorkflowStage.WRITE, "Sequential id backfill failed", error=exc)
            state.notify(NotificationLevel.ERROR, f"Error assigning {self._noun} ids: {exc}")
            return records

    # ── Form entry points ───────────────────────────────────────────

    def open_create(self, state: ScreenState) -> FormBuffer:
        return self._forms.open_create(state)

    async def open_edit(self, state: ScreenState, record_id: str) -> FormBuffer:
        """Open the edit form for a record from the cached list (or the store)."""
        record = state.find_record(record_id)
        if record is None:
            record = await self._store.get_by_id(self._collection, record_id)
        if record is None:
            raise EntityNotFoundError(self._definition.label, record_id)
        return self._forms.open_edit(state, record)

    # ── Submit ──────────────────────────────────────────────────────

    async def submit(self, state: ScreenState) -> str:
        """Validate, upload, compose and write the open form; returns the record id."""
        form = state.form
        if form is None:
            raise FormNotOpenError()
        if form.submitting:
            raise SubmissionInProgressError()

        try:
            self._forms.validate(form)
        except FormValidationError as exc:
            state.notify(NotificationLevel.ERROR, str(exc))
            raise

        creating = form.mode is FormMode.CREATE
        form.submitting = True
        try:
            record_id = await self._write(form, creating)
        except EntityNotFoundError as exc:
            state.notify(NotificationLevel.ERROR, f"Error saving {self._noun}: {exc}")
            await self.load(state)
            raise
        except CatalogAdminError as exc:
            state.notify(NotificationLevel.ERROR, f"Error saving {self._noun}: {exc}")
            raise
        finally:
            form.submitting = False

        outcome = "added" if creating else "updated"
        state.notify(NotificationLevel.SUCCESS, f"{self._definition.label} {outcome} successfully!")
        state.form = None
        await self.load(state)
        return record_id

    async def _write(self, form: FormBuffer, creating: bool) -> str:
        image_field = self._definition.image_field
        image_url = form.values.get(image_field) if image_field else None

        if form.asset is not None:
            asset = form.asset
            with wlog.timed_step(
                WorkflowStage.UPLOAD, f"Uploading {asset.filename}", bytes=asset.size
            ):
                image_url = await self._uploader.upload(
                    asset.content, asset.mime_type, asset.filename
                )

        data = self._forms.compose(form, image_url)
        now = utc_timestamp()
        data["updatedAt"] = now

        if creating:
            with wlog.timed_step(WorkflowStage.WRITE, f"Creating {self._noun}"):
                if self._definition.sequential_id_field:
                    data[self._definition.sequential_id_field] = await self.next_sequential_id()
                data["createdAt"] = now
                return await self._store.create(self._collection, data)

        record_id = form.editing_id or ""
        with wlog.timed_step(WorkflowStage.WRITE, f"Updating {self._noun}", id=record_id):
            await self._store.update(self._collection, record_id, data)
        return record_id

    async def next_sequential_id(self) -> int:
        """Max existing sequential id + 1, or 1 for an empty collection.

        Read-then-write without a uniqueness guarantee: two concurrent
        creators can derive the same id.
        """
        id_field = self._definition.sequential_id_field
        if id_field is None:
            raise ValueError(f"{self._collection} has no sequential id field")
        top = await self._store.get_top_by_field(
            self._collection, id_field, SortDirection.DESC, 1
        )
        if not top:
            return 1
        return as_sequence_number(top[0].get(id_field)) + 1

    # ── Delete ──────────────────────────────────────────────────────

    async def delete(self, state: ScreenState, record_id: str, confirmed: bool = False) -> None:
        if not confirmed:
            raise ConfirmationRequiredError(f"delete this {self._noun}")

        try:
            with wlog.timed_step(WorkflowStage.DELETE, f"Deleting {self._noun}", id=record_id):
                await self._store.delete(self._collection, record_id)
        except EntityNotFoundError as exc:
            state.notify(NotificationLevel.ERROR, f"Error deleting {self._noun}: {exc}")
            await self.load(state)
            raise
        except StoreError as exc:
            state.notify(NotificationLevel.ERROR, f"Error deleting {self._noun}: {exc}")
            raise

        if state.form is not None and state.form.editing_id == record_id:
            state.form = None
        state.notify(NotificationLevel.SUCCESS, f"{self._definition.label} deleted successfully!")
        await self.load(state)

    # ── Derived views ───────────────────────────────────────────────

    def featured(self, state: ScreenState) -> FeaturedView:
        """Current product of the day and best sellers, from the cached list."""
        if not self._definition.featured_flags:
            return FeaturedView()
        return FeaturedView(
            product_of_the_day=next(
                (r for r in state.records if r.flag(PRODUCT_OF_THE_DAY)), None
            ),
            best_sellers=[r for r in state.records if r.flag(BEST_SELLER)],
        )
