"""
Local Catalogue Client (on-device storage).

Purpose:
- Serves the catalogue from a key-value store when the remote collection API
  is unreachable.
- Keeps products (without comments) and comments in two separate JSON arrays
  and joins them at read time, the same way the remote API stores them.

Usage:
- Wired by src/catalog/dependencies.py as the fallback half of CatalogService
- Can be used directly against an InMemoryKeyValueStore in tests

Ids:
- New ids are max(existing ids) + 1, or 1 for an empty collection. There is no
  persistent counter, so the id of a deleted maximum can be handed out again.
"""

from __future__ import annotations

import copy
import json
import logging
from typing import Any, Dict, List, Optional

from src.integrations.contracts.catalog import Comment, Product, ProductFormData
from src.integrations.contracts.interfaces import CatalogClient, ProductNotFoundError
from src.integrations.policy.response_wrappers import (
    normalize_comment_list,
    normalize_product,
    normalize_product_list,
)
from src.utils.timestamps import format_now

logger = logging.getLogger(__name__)

PRODUCTS_KEY = "shopApp_products"
COMMENTS_KEY = "shopApp_comments"

DEFAULT_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "imageUrl": "https://via.placeholder.com/200x200",
        "name": "Apple iPhone 14",
        "count": 5,
        "size": {"width": 146.7, "height": 71.5},
        "weight": "172g",
    },
    {
        "id": 2,
        "imageUrl": "https://via.placeholder.com/200x200",
        "name": "Samsung Galaxy S23",
        "count": 3,
        "size": {"width": 151.0, "height": 70.6},
        "weight": "168g",
    },
]

DEFAULT_COMMENTS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "productId": 1,
        "description": "Great phone with excellent camera quality!",
        "date": "14:30 15.08.2024",
    },
]


def _next_id(records: List[Any]) -> int:
    return 1 if not records else max(r.id for r in records) + 1


class LocalCatalogClient(CatalogClient):
    def __init__(
        self,
        store,
        products_key: str = PRODUCTS_KEY,
        comments_key: str = COMMENTS_KEY,
        seed_products: Optional[List[Dict[str, Any]]] = None,
        seed_comments: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        self.store = store
        self.products_key = products_key
        self.comments_key = comments_key
        self._seed_products = DEFAULT_PRODUCTS if seed_products is None else seed_products
        self._seed_comments = DEFAULT_COMMENTS if seed_comments is None else seed_comments

    # ------------------------------------------------------------------ #
    # Storage helpers
    # ------------------------------------------------------------------ #
    def ensure_initialized(self) -> None:
        # Absent or empty-string entries are seeded; a stored "[]" is kept as-is.
        if not self.store.get_item(self.products_key):
            logger.info("Seeding local product collection under %s", self.products_key)
            self.store.set_item(self.products_key, json.dumps(copy.deepcopy(self._seed_products)))
        if not self.store.get_item(self.comments_key):
            logger.info("Seeding local comment collection under %s", self.comments_key)
            self.store.set_item(self.comments_key, json.dumps(copy.deepcopy(self._seed_comments)))

    def _read_products(self) -> List[Product]:
        self.ensure_initialized()
        raw = self.store.get_item(self.products_key)
        return normalize_product_list(json.loads(raw)) if raw else []

    def _write_products(self, products: List[Product]) -> None:
        self.store.set_item(self.products_key, json.dumps([p.to_resource() for p in products]))

    def _read_comments(self) -> List[Comment]:
        self.ensure_initialized()
        raw = self.store.get_item(self.comments_key)
        return normalize_comment_list(json.loads(raw)) if raw else []

    def _write_comments(self, comments: List[Comment]) -> None:
        self.store.set_item(self.comments_key, json.dumps([c.to_dict() for c in comments]))

    # ------------------------------------------------------------------ #
    # Products
    # ------------------------------------------------------------------ #
    async def list_products(self) -> List[Product]:
        products = self._read_products()
        comments = self._read_comments()
        for product in products:
            product.comments = [c for c in comments if c.product_id == product.id]
        return products

    async def create_product(self, form: ProductFormData) -> Product:
        products = self._read_products()
        payload = form.to_payload()
        payload["id"] = _next_id(products)
        created = normalize_product(payload)
        products.append(created)
        self._write_products(products)
        logger.info("Created local product id=%s", created.id)
        return created

    async def update_product(self, product_id: int, form: ProductFormData) -> Product:
        products = self._read_products()
        target = next((p for p in products if p.id == product_id), None)
        if target is None:
            raise ProductNotFoundError(product_id)

        updated = normalize_product({**form.to_payload(), "id": product_id})
        target.image_url = updated.image_url
        target.name = updated.name
        target.count = updated.count
        target.size = updated.size
        target.weight = updated.weight
        self._write_products(products)

        target.comments = [c for c in self._read_comments() if c.product_id == product_id]
        return target

    async def delete_product(self, product_id: int) -> int:
        products = self._read_products()
        self._write_products([p for p in products if p.id != product_id])
        comments = self._read_comments()
        self._write_comments([c for c in comments if c.product_id != product_id])
        return product_id

    # ------------------------------------------------------------------ #
    # Comments
    # ------------------------------------------------------------------ #
    async def create_comment(self, product_id: int, description: str) -> Comment:
        comments = self._read_comments()
        created = Comment(
            id=_next_id(comments),
            product_id=product_id,
            description=description,
            date=format_now(),
        )
        comments.append(created)
        self._write_comments(comments)
        return created

    async def delete_comment(self, comment_id: int) -> int:
        comments = self._read_comments()
        self._write_comments([c for c in comments if c.id != comment_id])
        return comment_id
