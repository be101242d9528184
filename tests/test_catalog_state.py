import pytest

from src.catalog.sorting import SortOption
from src.catalog.state import (
    CatalogState,
    CatalogStore,
    CommentAdded,
    CommentRemoved,
    ProductAdded,
    ProductRemoved,
    ProductsFailed,
    ProductsLoaded,
    ProductsRequested,
    ProductUpdated,
    SortChanged,
    reduce,
)
from src.integrations.contracts.catalog import Comment, Product, ProductFormData, Size
from src.integrations.contracts.outcomes import BackendSource, Failed, Served
from src.integrations.policy.catalog_service import CatalogService


def _product(pid, name="P", count=1, comments=None):
    return Product(id=pid, image_url="x", name=name, count=count, size=Size(1, 1), weight="1g", comments=comments or [])


def _comment(cid, pid):
    return Comment(id=cid, product_id=pid, description=f"c{cid}", date="1:00 01.01.2024")


class StubService:
    """Returns canned outcomes and records calls."""

    def __init__(self, outcome):
        self.outcome = outcome
        self.calls = []

    async def _answer(self, name, *args):
        self.calls.append((name, args))
        return self.outcome

    async def list_products(self):
        return await self._answer("list_products")

    async def create_product(self, form):
        return await self._answer("create_product", form)

    async def update_product(self, product_id, form):
        return await self._answer("update_product", product_id, form)

    async def delete_product(self, product_id):
        return await self._answer("delete_product", product_id)

    async def create_comment(self, product_id, description):
        return await self._answer("create_comment", product_id, description)

    async def delete_comment(self, comment_id):
        return await self._answer("delete_comment", comment_id)


def test_list_lifecycle_transitions():
    state = CatalogState(error="stale")

    state = reduce(state, ProductsRequested())
    assert state.loading is True
    assert state.error is None

    items = [_product(1)]
    loaded = reduce(state, ProductsLoaded(items))
    assert loaded.loading is False
    assert loaded.items == items

    failed = reduce(state, ProductsFailed("backend down"))
    assert failed.loading is False
    assert failed.error == "backend down"
    assert reduce(state, ProductsFailed()).error == "Failed to fetch products"


def test_add_update_remove_product():
    state = CatalogState(items=[_product(1, "A"), _product(2, "B")])

    state = reduce(state, ProductAdded(_product(3, "C")))
    assert [p.id for p in state.items] == [1, 2, 3]

    state = reduce(state, ProductUpdated(_product(2, "B2")))
    assert [p.name for p in state.items] == ["A", "B2", "C"]

    unchanged = reduce(state, ProductUpdated(_product(9, "ghost")))
    assert [p.id for p in unchanged.items] == [1, 2, 3]

    state = reduce(state, ProductRemoved(1))
    assert [p.id for p in state.items] == [2, 3]


def test_comment_added_to_matching_product_only():
    original = _product(1)
    state = CatalogState(items=[original, _product(2)])

    state = reduce(state, CommentAdded(_comment(5, 1)))
    assert [c.id for c in state.items[0].comments] == [5]
    assert state.items[1].comments == []
    assert original.comments == []

    same = reduce(state, CommentAdded(_comment(6, 42)))
    assert [[c.id for c in p.comments] for p in same.items] == [[5], []]


def test_comment_removed_from_every_product():
    state = CatalogState(items=[_product(1, comments=[_comment(5, 1), _comment(6, 1)]), _product(2, comments=[_comment(7, 2)])])

    state = reduce(state, CommentRemoved(6))

    assert [[c.id for c in p.comments] for p in state.items] == [[5], [7]]


def test_sort_change_does_not_reorder_items():
    items = [_product(1, count=5), _product(2, count=1), _product(3, count=3)]
    state = reduce(CatalogState(items=items), SortChanged(SortOption.COUNT))

    assert state.sort_by is SortOption.COUNT
    assert [p.id for p in state.items] == [1, 2, 3]


def test_unknown_action_is_rejected():
    with pytest.raises(TypeError):
        reduce(CatalogState(), object())


def test_store_notifies_subscribers_until_unsubscribed():
    store = CatalogStore(StubService(None))
    seen = []
    unsubscribe = store.subscribe(lambda s: seen.append(s.sort_by))

    store.set_sort_by(SortOption.NAME_DESC)
    unsubscribe()
    store.set_sort_by(SortOption.COUNT)

    assert seen == [SortOption.NAME_DESC]
    assert store.state.sort_by is SortOption.COUNT


@pytest.mark.asyncio
async def test_fetch_products_loads_items():
    items = [_product(1, count=5), _product(2, count=1), _product(3, count=3)]
    store = CatalogStore(StubService(Served(value=items, source=BackendSource.LOCAL)))
    loading_flags = []
    store.subscribe(lambda s: loading_flags.append(s.loading))

    outcome = await store.fetch_products()

    assert outcome.source is BackendSource.LOCAL
    assert loading_flags == [True, False]
    assert [p.id for p in store.state.items] == [1, 2, 3]

    store.set_sort_by(SortOption.COUNT)
    assert [p.count for p in store.sorted_items()] == [1, 3, 5]
    assert [p.count for p in store.state.items] == [5, 1, 3]


@pytest.mark.asyncio
async def test_fetch_products_failure_sets_error():
    store = CatalogStore(StubService(Failed(error=ValueError("corrupt local data"))))

    await store.fetch_products()

    assert store.state.loading is False
    assert store.state.error == "corrupt local data"


@pytest.mark.asyncio
async def test_failed_mutation_leaves_state_untouched():
    initial = CatalogState(items=[_product(1)])
    store = CatalogStore(StubService(Failed(error=RuntimeError("disk full"))), state=initial)
    form = ProductFormData(image_url="u", name="W", count=1, width=1, height=1, weight="1g")

    for outcome in (
        await store.add_product(form),
        await store.update_product(1, form),
        await store.delete_product(1),
        await store.add_comment(1, "hi"),
        await store.delete_comment(1),
    ):
        assert isinstance(outcome, Failed)

    assert store.state is initial


@pytest.mark.asyncio
async def test_store_round_trip_against_offline_service(offline_service):
    store = CatalogStore(offline_service)
    form = ProductFormData(image_url="u", name="Widget", count=2, width=10, height=5, weight="1kg")

    await store.add_product(form)
    product = store.state.items[0]
    await store.add_comment(product.id, "nice")
    comment_id = store.get_product(product.id).comments[0].id

    await store.fetch_products()
    assert [c.description for c in store.get_product(product.id).comments] == ["nice"]

    await store.delete_comment(comment_id)
    assert store.get_product(product.id).comments == []

    await store.delete_product(product.id)
    assert store.state.items == []


@pytest.mark.asyncio
async def test_store_uses_real_service_fallback(unreachable_remote, local_client):
    store = CatalogStore(CatalogService(remote=unreachable_remote, local=local_client))

    outcome = await store.fetch_products()

    assert outcome.source is BackendSource.LOCAL
    assert [p.name for p in store.sorted_items()] == ["Apple iPhone 14", "Samsung Galaxy S23"]
