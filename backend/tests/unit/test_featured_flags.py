"""Unit tests for the product-of-the-day and best-seller toggles."""

import pytest

from catalog_admin.application.services import EntityManagerWorkflow, FeaturedFlagService
from catalog_admin.domain.definitions import BEST_SELLER, PRODUCT_OF_THE_DAY, get_definition
from catalog_admin.domain.entities import Collection, NotificationLevel, ScreenState
from catalog_admin.domain.exceptions import (
    ConfirmationRequiredError,
    EntityNotFoundError,
    FeaturedLimitError,
    FeatureNotSupportedError,
)
from tests.fakes import FakeAssetUploader, FakeDocumentStore

COMBOS = Collection.COMBO_PRODUCTS.value


def _combo(record_id: str, created_at: str, **flags) -> dict:
    return {"_id": record_id, "title": record_id.upper(), "createdAt": created_at, **flags}


def _service(store: FakeDocumentStore, collection: Collection = Collection.COMBO_PRODUCTS):
    workflow = EntityManagerWorkflow(get_definition(collection), store, FakeAssetUploader())
    return FeaturedFlagService(workflow, store, best_seller_limit=4), workflow


def _holders(store: FakeDocumentStore, flag: str) -> set[str]:
    return {rid for rid, data in store.documents(COMBOS).items() if data.get(flag)}


@pytest.mark.asyncio
async def test_product_of_the_day_moves_exclusively():
    store = FakeDocumentStore({COMBOS: [
        _combo("a", "1", isProductOfTheDay=True),
        _combo("b", "2"),
        _combo("c", "3"),
    ]})
    flags, workflow = _service(store)
    state = ScreenState(collection=COMBOS)
    await workflow.mount(state)

    await flags.set_product_of_the_day(state, "b", True, confirmed=True)

    assert _holders(store, PRODUCT_OF_THE_DAY) == {"b"}
    updates = [c[2][0] for c in store.calls if c[0] == "update"]
    assert updates == ["a", "b"]
    assert workflow.featured(state).product_of_the_day.id == "b"
    assert [n.message for n in state.notifications] == ["Product of the day set successfully!"]


@pytest.mark.asyncio
async def test_product_of_the_day_requires_confirmation_to_enable():
    store = FakeDocumentStore({COMBOS: [_combo("a", "1")]})
    flags, _ = _service(store)

    with pytest.raises(ConfirmationRequiredError):
        await flags.set_product_of_the_day(ScreenState(collection=COMBOS), "a", True)

    assert store.writes() == []


@pytest.mark.asyncio
async def test_disabling_product_of_the_day_needs_no_confirmation():
    store = FakeDocumentStore({COMBOS: [_combo("a", "1", isProductOfTheDay=True)]})
    flags, _ = _service(store)

    await flags.set_product_of_the_day(ScreenState(collection=COMBOS), "a", False)

    assert _holders(store, PRODUCT_OF_THE_DAY) == set()
    assert len(store.writes()) == 1


@pytest.mark.asyncio
async def test_product_of_the_day_on_missing_record_demotes_nobody():
    store = FakeDocumentStore({COMBOS: [_combo("a", "1", isProductOfTheDay=True)]})
    flags, _ = _service(store)
    state = ScreenState(collection=COMBOS)

    with pytest.raises(EntityNotFoundError):
        await flags.set_product_of_the_day(state, "ghost", True, confirmed=True)

    assert _holders(store, PRODUCT_OF_THE_DAY) == {"a"}
    assert state.notifications[0].level is NotificationLevel.ERROR


@pytest.mark.asyncio
async def test_fifth_best_seller_is_rejected_without_store_write():
    store = FakeDocumentStore({COMBOS: [
        *[_combo(f"b{i}", str(i), isBestSeller=True) for i in range(4)],
        _combo("e", "9"),
    ]})
    flags, workflow = _service(store)
    state = ScreenState(collection=COMBOS)
    await workflow.mount(state)
    calls_before = list(store.calls)

    with pytest.raises(FeaturedLimitError):
        await flags.set_best_seller(state, "e", True, confirmed=True)

    assert store.calls == calls_before
    assert [n.message for n in state.notifications] == [
        "You can only have 4 items marked as best sellers"
    ]


@pytest.mark.asyncio
async def test_best_seller_enable_updates_only_target():
    store = FakeDocumentStore({COMBOS: [
        _combo("a", "1", isBestSeller=True),
        _combo("b", "2"),
    ]})
    flags, workflow = _service(store)
    state = ScreenState(collection=COMBOS)

    with pytest.raises(ConfirmationRequiredError):
        await flags.set_best_seller(state, "b", True)
    assert store.writes() == []

    await flags.set_best_seller(state, "b", True, confirmed=True)

    assert _holders(store, BEST_SELLER) == {"a", "b"}
    assert [c[2][0] for c in store.writes()] == ["b"]
    assert {r.id for r in workflow.featured(state).best_sellers} == {"a", "b"}


@pytest.mark.asyncio
async def test_best_seller_disable_at_cap_is_allowed():
    store = FakeDocumentStore({COMBOS: [
        _combo(f"b{i}", str(i), isBestSeller=True) for i in range(4)
    ]})
    flags, workflow = _service(store)
    state = ScreenState(collection=COMBOS)
    await workflow.mount(state)

    await flags.set_best_seller(state, "b0", False)

    assert _holders(store, BEST_SELLER) == {"b1", "b2", "b3"}


@pytest.mark.asyncio
async def test_flags_are_rejected_on_plain_products():
    store = FakeDocumentStore()
    flags, _ = _service(store, Collection.PRODUCTS)

    with pytest.raises(FeatureNotSupportedError):
        await flags.set_best_seller(ScreenState(collection="products"), "a", True, confirmed=True)
    assert store.calls == []
