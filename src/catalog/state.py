"""
Catalogue state container.

Holds the denormalized product list the views render from. State only changes
through `CatalogStore.dispatch`, which runs the pure `reduce` function; the
async helpers call CatalogService and dispatch only confirmed results.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional, Union

from src.catalog.sorting import SortOption, sort_products
from src.integrations.contracts.catalog import Comment, Product, ProductFormData
from src.integrations.contracts.outcomes import Failed, Outcome, Served

logger = logging.getLogger(__name__)

DEFAULT_FETCH_ERROR = "Failed to fetch products"


@dataclass(frozen=True)
class CatalogState:
    items: List[Product] = field(default_factory=list)
    loading: bool = False
    error: Optional[str] = None
    sort_by: SortOption = SortOption.NAME


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProductsRequested:
    pass


@dataclass(frozen=True)
class ProductsLoaded:
    items: List[Product]


@dataclass(frozen=True)
class ProductsFailed:
    message: Optional[str] = None


@dataclass(frozen=True)
class ProductAdded:
    product: Product


@dataclass(frozen=True)
class ProductUpdated:
    product: Product


@dataclass(frozen=True)
class ProductRemoved:
    product_id: int


@dataclass(frozen=True)
class CommentAdded:
    comment: Comment


@dataclass(frozen=True)
class CommentRemoved:
    comment_id: int


@dataclass(frozen=True)
class SortChanged:
    sort_by: SortOption


Action = Union[
    ProductsRequested,
    ProductsLoaded,
    ProductsFailed,
    ProductAdded,
    ProductUpdated,
    ProductRemoved,
    CommentAdded,
    CommentRemoved,
    SortChanged,
]


def reduce(state: CatalogState, action: Action) -> CatalogState:
    """Return the next state; `state` and its products are never modified."""
    if isinstance(action, ProductsRequested):
        return replace(state, loading=True, error=None)

    if isinstance(action, ProductsLoaded):
        return replace(state, loading=False, items=list(action.items))

    if isinstance(action, ProductsFailed):
        return replace(state, loading=False, error=action.message or DEFAULT_FETCH_ERROR)

    if isinstance(action, ProductAdded):
        return replace(state, items=[*state.items, action.product])

    if isinstance(action, ProductUpdated):
        items = [action.product if p.id == action.product.id else p for p in state.items]
        return replace(state, items=items)

    if isinstance(action, ProductRemoved):
        return replace(state, items=[p for p in state.items if p.id != action.product_id])

    if isinstance(action, CommentAdded):
        comment = action.comment
        items = [
            replace(p, comments=[*p.comments, comment]) if p.id == comment.product_id else p
            for p in state.items
        ]
        return replace(state, items=items)

    if isinstance(action, CommentRemoved):
        items = [
            replace(p, comments=[c for c in p.comments if c.id != action.comment_id])
            for p in state.items
        ]
        return replace(state, items=items)

    if isinstance(action, SortChanged):
        return replace(state, sort_by=SortOption(action.sort_by))

    raise TypeError(f"Unsupported catalogue action: {type(action).__name__}")


Listener = Callable[[CatalogState], None]


class CatalogStore:
    def __init__(self, catalog_service, state: Optional[CatalogState] = None):
        self.service = catalog_service
        self._state = state or CatalogState()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> CatalogState:
        return self._state

    def dispatch(self, action: Action) -> CatalogState:
        self._state = reduce(self._state, action)
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- Derived views -------------------------------------------------------

    def sorted_items(self) -> List[Product]:
        return sort_products(self._state.items, self._state.sort_by)

    def get_product(self, product_id: int) -> Optional[Product]:
        return next((p for p in self._state.items if p.id == product_id), None)

    def set_sort_by(self, sort_by: SortOption) -> CatalogState:
        return self.dispatch(SortChanged(SortOption(sort_by)))

    # --- Async actions -------------------------------------------------------

    async def fetch_products(self) -> Outcome:
        self.dispatch(ProductsRequested())
        outcome = await self.service.list_products()
        if isinstance(outcome, Served):
            self.dispatch(ProductsLoaded(outcome.value))
        elif isinstance(outcome, Failed):
            logger.warning("Product listing failed on every backend: %s", outcome.error)
            self.dispatch(ProductsFailed(str(outcome.error) or None))
        return outcome

    async def add_product(self, form: ProductFormData) -> Outcome:
        outcome = await self.service.create_product(form)
        if isinstance(outcome, Served):
            self.dispatch(ProductAdded(outcome.value))
        return outcome

    async def update_product(self, product_id: int, form: ProductFormData) -> Outcome:
        outcome = await self.service.update_product(product_id, form)
        if isinstance(outcome, Served):
            self.dispatch(ProductUpdated(outcome.value))
        return outcome

    async def delete_product(self, product_id: int) -> Outcome:
        outcome = await self.service.delete_product(product_id)
        if isinstance(outcome, Served):
            self.dispatch(ProductRemoved(outcome.value))
        return outcome

    async def add_comment(self, product_id: int, description: str) -> Outcome:
        outcome = await self.service.create_comment(product_id, description)
        if isinstance(outcome, Served):
            self.dispatch(CommentAdded(outcome.value))
        return outcome

    async def delete_comment(self, comment_id: int) -> Outcome:
        outcome = await self.service.delete_comment(comment_id)
        if isinstance(outcome, Served):
            self.dispatch(CommentRemoved(outcome.value))
        return outcome
