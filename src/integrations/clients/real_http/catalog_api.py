"""
Remote Catalogue HTTP Client.

Talks to a json-server style collection API:
- GET/POST /products, PATCH/DELETE /products/{id}
- GET /comments?productId={id}, POST /comments, DELETE /comments/{id}

Products are stored without comments; every read that returns a product
re-fetches its comments and embeds them.

Every request is bounded by `timeout_seconds` (3s by default) and cancelled
when it runs over. Non-2xx statuses raise httpx.HTTPStatusError. Nothing is
retried here.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, Awaitable, Dict, Iterable, List, Optional, TypeVar

import httpx

from src.integrations.contracts.catalog import Comment, Product, ProductFormData
from src.integrations.contracts.interfaces import CatalogClient
from src.integrations.policy.response_wrappers import (
    normalize_comment,
    normalize_comment_list,
    normalize_product,
    normalize_product_list,
)
from src.utils.timestamps import format_now

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_BASE_URL = "http://localhost:3001"
DEFAULT_TIMEOUT_SECONDS = 3.0


async def _gather_all(aws: Iterable[Awaitable[T]]) -> List[T]:
    """Run awaitables together; the first failure cancels the rest and is re-raised."""
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    if not tasks:
        return []
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class RemoteCatalogClient(CatalogClient):
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or os.getenv("CATALOG_API_URL", DEFAULT_BASE_URL)).rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout_seconds,
            transport=self._transport,
            headers={"Content-Type": "application/json"},
        )

    async def _request(self, client: httpx.AsyncClient, method: str, path: str, **kwargs: Any) -> httpx.Response:
        response = await asyncio.wait_for(client.request(method, path, **kwargs), timeout=self.timeout_seconds)
        response.raise_for_status()
        return response

    async def _fetch_comments(self, client: httpx.AsyncClient, product_id: int) -> List[Comment]:
        response = await self._request(client, "GET", "/comments", params={"productId": product_id})
        return normalize_comment_list(response.json())

    # ------------------------------------------------------------------ #
    # Products
    # ------------------------------------------------------------------ #
    async def list_products(self) -> List[Product]:
        async with self._client() as client:
            response = await self._request(client, "GET", "/products")
            products = normalize_product_list(response.json())

            comment_lists = await _gather_all(self._fetch_comments(client, p.id) for p in products)

        for product, comments in zip(products, comment_lists):
            product.comments = comments
        logger.debug("Fetched %d products from %s", len(products), self.base_url)
        return products

    async def create_product(self, form: ProductFormData) -> Product:
        payload: Dict[str, Any] = form.to_payload()
        payload["comments"] = []

        async with self._client() as client:
            response = await self._request(client, "POST", "/products", json=payload)
            data = response.json()

        return normalize_product(data, comments=[])

    async def update_product(self, product_id: int, form: ProductFormData) -> Product:
        payload: Dict[str, Any] = {"id": product_id, **form.to_payload()}

        async with self._client() as client:
            response = await self._request(client, "PATCH", f"/products/{product_id}", json=payload)
            data = response.json()
            comments = await self._fetch_comments(client, product_id)

        return normalize_product(data, comments=comments)

    async def delete_product(self, product_id: int) -> int:
        async with self._client() as client:
            await self._request(client, "DELETE", f"/products/{product_id}")

            comments = await self._fetch_comments(client, product_id)
            await _gather_all(self._request(client, "DELETE", f"/comments/{c.id}") for c in comments)

        logger.info("Deleted remote product id=%s with %d comments", product_id, len(comments))
        return product_id

    # ------------------------------------------------------------------ #
    # Comments
    # ------------------------------------------------------------------ #
    async def create_comment(self, product_id: int, description: str) -> Comment:
        payload = {"productId": product_id, "description": description, "date": format_now()}

        async with self._client() as client:
            response = await self._request(client, "POST", "/comments", json=payload)
            data = response.json()

        return normalize_comment(data)

    async def delete_comment(self, comment_id: int) -> int:
        async with self._client() as client:
            await self._request(client, "DELETE", f"/comments/{comment_id}")
        return comment_id
