"""
Catalogue Service

Single entry point for catalogue persistence. Each operation is tried against
the remote collection API first; on any failure it is replayed against the
local store with the same arguments. The result says which backend answered.

There is no reconciliation between the two backends: once a session falls back
to local storage its writes are not replayed to the remote API.
"""

import logging
from typing import Any, Awaitable, Callable, List

from src.integrations.contracts.catalog import Comment, Product, ProductFormData
from src.integrations.contracts.interfaces import CatalogClient
from src.integrations.contracts.outcomes import BackendSource, Failed, Outcome, Served

logger = logging.getLogger(__name__)


class CatalogService:
    def __init__(self, remote: CatalogClient, local: CatalogClient):
        self.remote = remote
        self.local = local

    async def _with_fallback(
        self,
        operation: str,
        call: Callable[[CatalogClient], Awaitable[Any]],
    ) -> Outcome:
        try:
            value = await call(self.remote)
            return Served(value=value, source=BackendSource.REMOTE)
        except Exception as remote_exc:
            logger.warning("Remote %s failed, using local storage: %r", operation, remote_exc)
            remote_error = remote_exc

        try:
            value = await call(self.local)
        except Exception as local_exc:
            logger.error("Local %s failed: %s", operation, local_exc, exc_info=True)
            return Failed(error=local_exc, remote_error=remote_error)
        return Served(value=value, source=BackendSource.LOCAL, remote_error=remote_error)

    async def list_products(self) -> "Outcome[List[Product]]":
        return await self._with_fallback("list_products", lambda c: c.list_products())

    async def create_product(self, form: ProductFormData) -> "Outcome[Product]":
        return await self._with_fallback("create_product", lambda c: c.create_product(form))

    async def update_product(self, product_id: int, form: ProductFormData) -> "Outcome[Product]":
        return await self._with_fallback("update_product", lambda c: c.update_product(product_id, form))

    async def delete_product(self, product_id: int) -> "Outcome[int]":
        return await self._with_fallback("delete_product", lambda c: c.delete_product(product_id))

    async def create_comment(self, product_id: int, description: str) -> "Outcome[Comment]":
        return await self._with_fallback("create_comment", lambda c: c.create_comment(product_id, description))

    async def delete_comment(self, comment_id: int) -> "Outcome[int]":
        return await self._with_fallback("delete_comment", lambda c: c.delete_comment(comment_id))
