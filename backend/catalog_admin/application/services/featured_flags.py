"""Featured flag toggles for combo products, built on the plain update primitive."""

from catalog_admin.application.interfaces import DocumentStore
from catalog_admin.application.services.entity_manager import EntityManagerWorkflow
from catalog_admin.domain.definitions import BEST_SELLER, PRODUCT_OF_THE_DAY
from catalog_admin.domain.entities import NotificationLevel, ScreenState, ScreenStatus, utc_timestamp
from catalog_admin.domain.exceptions import (
    ConfirmationRequiredError,
    EntityNotFoundError,
    FeaturedLimitError,
    FeatureNotSupportedError,
    StoreError,
)
from catalog_admin.infrastructure.logging.colored_logger import WorkflowLogger, WorkflowStage

wlog = WorkflowLogger("FeaturedFlagService")

DEFAULT_BEST_SELLER_LIMIT = 4


class FeaturedFlagService:
    """Promotes and demotes records with two exclusivity policies.

    * product of the day: at most one holder; enabling demotes the current
      holder first (two sequential updates) and needs confirmation.
    * best seller: capped at ``best_seller_limit`` holders; the cap is checked
      against the cached list, so a rejection issues no store call.
    Disabling either flag needs no confirmation.
    """

    def __init__(
        self,
        workflow: EntityManagerWorkflow,
        store: DocumentStore,
        best_seller_limit: int = DEFAULT_BEST_SELLER_LIMIT,
    ):
        self._workflow = workflow
        self._definition = workflow.definition
        self._store = store
        self._best_seller_limit = best_seller_limit

    @property
    def _collection(self) -> str:
        return self._definition.collection.value

    async def set_product_of_the_day(
        self, state: ScreenState, record_id: str, enabled: bool, confirmed: bool = False
    ) -> None:
        self._ensure_supported()
        if enabled and not confirmed:
            raise ConfirmationRequiredError("make this the product of the day")

        async def apply() -> None:
            if await self._store.get_by_id(self._collection, record_id) is None:
                raise EntityNotFoundError(self._definition.label, record_id)
            now = utc_timestamp()
            if enabled:
                holders = await self._store.list_all(
                    self._collection, filters={PRODUCT_OF_THE_DAY: True}
                )
                for holder in holders:
                    if holder.id != record_id:
                        wlog.detail("Demoting current product of the day", id=holder.id)
                        await self._store.update(
                            self._collection,
                            holder.id,
                            {PRODUCT_OF_THE_DAY: False, "updatedAt": now},
                        )
            await self._store.update(
                self._collection, record_id, {PRODUCT_OF_THE_DAY: enabled, "updatedAt": now}
            )

        outcome = "set" if enabled else "removed"
        await self._toggle(
            state, record_id, apply, f"Product of the day {outcome} successfully!",
            "updating product of the day",
        )

    async def set_best_seller(
        self, state: ScreenState, record_id: str, enabled: bool, confirmed: bool = False
    ) -> None:
        self._ensure_supported()
        if enabled:
            if state.status is ScreenStatus.IDLE:
                await self._workflow.load(state)
            holders = [
                r for r in state.records if r.flag(BEST_SELLER) and r.id != record_id
            ]
            if len(holders) >= self._best_seller_limit:
                error = FeaturedLimitError("best sellers", self._best_seller_limit)
                state.notify(NotificationLevel.ERROR, str(error))
                raise error
            if not confirmed:
                raise ConfirmationRequiredError("mark this as a best seller")

        async def apply() -> None:
            await self._store.update(
                self._collection,
                record_id,
                {BEST_SELLER: enabled, "updatedAt": utc_timestamp()},
            )

        outcome = "added to" if enabled else "removed from"
        await self._toggle(
            state, record_id, apply, f"Product {outcome} best sellers successfully!",
            "updating best sellers",
        )

    async def _toggle(self, state, record_id, apply, success_message, operation) -> None:
        try:
            with wlog.timed_step(WorkflowStage.FLAG, operation.capitalize(), id=record_id):
                await apply()
        except EntityNotFoundError as exc:
            state.notify(NotificationLevel.ERROR, f"Error {operation}: {exc}")
            await self._workflow.load(state)
            raise
        except StoreError as exc:
            state.notify(NotificationLevel.ERROR, f"Error {operation}: {exc}")
            raise

        state.notify(NotificationLevel.SUCCESS, success_message)
        await self._workflow.load(state)

    def _ensure_supported(self) -> None:
        if not self._definition.featured_flags:
            raise FeatureNotSupportedError(self._collection, "featured flags")
