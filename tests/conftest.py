"""Pytest fixtures for catalogue storage, clients and the persistence facade."""

import json

import httpx
import pytest

from src.database.kv_store import InMemoryKeyValueStore
from src.integrations.clients.local.local_catalog import COMMENTS_KEY, PRODUCTS_KEY, LocalCatalogClient
from src.integrations.clients.real_http.catalog_api import RemoteCatalogClient
from src.integrations.contracts.interfaces import CatalogClient
from src.integrations.policy.catalog_service import CatalogService


class FakeCollectionServer:
    """In-memory stand-in for a json-server `/products` + `/comments` API."""

    def __init__(self, products=None, comments=None):
        self.collections = {
            "products": {p["id"]: dict(p) for p in products or []},
            "comments": {c["id"]: dict(c) for c in comments or []},
        }
        self.requests = []
        self.bodies = []        # (method, path, decoded JSON body)
        self.failures = {}      # (method, path) -> status code

    @property
    def products(self):
        return self.collections["products"]

    @property
    def comments(self):
        return self.collections["comments"]

    def fail(self, method: str, path: str, status_code: int = 500) -> None:
        self.failures[(method, path)] = status_code

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append((request.method, path, dict(request.url.params)))
        if request.content:
            self.bodies.append((request.method, path, json.loads(request.content)))

        if (request.method, path) in self.failures:
            return httpx.Response(self.failures[(request.method, path)], json={"error": "boom"})

        parts = path.strip("/").split("/")
        collection = self.collections.get(parts[0])
        if collection is None:
            return httpx.Response(404, json={})

        if len(parts) == 1:
            if request.method == "GET":
                items = list(collection.values())
                product_id = request.url.params.get("productId")
                if product_id is not None:
                    items = [c for c in items if str(c["productId"]) == product_id]
                return httpx.Response(200, json=items)
            if request.method == "POST":
                body = json.loads(request.content)
                body["id"] = max(collection, default=0) + 1
                collection[body["id"]] = body
                return httpx.Response(201, json=body)
            return httpx.Response(405, json={})

        item_id = int(parts[1])
        if item_id not in collection:
            return httpx.Response(404, json={})
        if request.method == "GET":
            return httpx.Response(200, json=collection[item_id])
        if request.method == "PATCH":
            collection[item_id].update(json.loads(request.content))
            return httpx.Response(200, json=collection[item_id])
        if request.method == "DELETE":
            collection.pop(item_id)
            return httpx.Response(200, json={})
        return httpx.Response(405, json={})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class UnreachableCatalogClient(CatalogClient):
    """Remote client whose every call fails like a refused connection."""

    def __init__(self):
        self.calls = []

    def _fail(self, operation):
        self.calls.append(operation)
        raise httpx.ConnectError("connection refused")

    async def list_products(self):
        self._fail("list_products")

    async def create_product(self, form):
        self._fail("create_product")

    async def update_product(self, product_id, form):
        self._fail("update_product")

    async def delete_product(self, product_id):
        self._fail("delete_product")

    async def create_comment(self, product_id, description):
        self._fail("create_comment")

    async def delete_comment(self, comment_id):
        self._fail("delete_comment")


@pytest.fixture
def fake_server():
    return FakeCollectionServer(
        products=[
            {"id": 1, "imageUrl": "a.png", "name": "Lamp", "count": 4, "size": {"width": 20, "height": 40}, "weight": "2kg"},
            {"id": 2, "imageUrl": "b.png", "name": "Chair", "count": 1, "size": {"width": 50, "height": 90}, "weight": "7kg"},
        ],
        comments=[
            {"id": 1, "productId": 1, "description": "Bright", "date": "9:15 01.02.2024"},
            {"id": 2, "productId": 1, "description": "Sturdy base", "date": "10:00 02.02.2024"},
            {"id": 3, "productId": 2, "description": "Comfy", "date": "11:30 03.02.2024"},
        ],
    )


@pytest.fixture
def remote_client(fake_server):
    return RemoteCatalogClient(base_url="http://catalog.test", transport=fake_server.transport())


@pytest.fixture
def memory_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def empty_store():
    """Store whose collections exist but hold no records (no seeding)."""
    return InMemoryKeyValueStore({PRODUCTS_KEY: "[]", COMMENTS_KEY: "[]"})


@pytest.fixture
def local_client(memory_store):
    return LocalCatalogClient(memory_store)


@pytest.fixture
def empty_local_client(empty_store):
    return LocalCatalogClient(empty_store)


@pytest.fixture
def unreachable_remote():
    return UnreachableCatalogClient()


@pytest.fixture
def offline_service(unreachable_remote, empty_local_client):
    return CatalogService(remote=unreachable_remote, local=empty_local_client)
