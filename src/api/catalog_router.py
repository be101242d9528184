from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, status
from pydantic import BaseModel

from src.catalog.sorting import SortOption
from src.catalog.state import CatalogStore
from src.catalog.validation import validate_comment_description, validate_product_form
from src.error_handler import ErrorHandler
from src.integrations.contracts.outcomes import Outcome, Served

router = APIRouter()
error_handler = ErrorHandler()


def get_catalog_store(request: Request) -> CatalogStore:
    return request.app.state.catalog_store


class CommentRequest(BaseModel):
    description: Optional[str] = None


class SortRequest(BaseModel):
    sort_by: SortOption


def _require_served(outcome: Outcome, operation: str) -> Served:
    if not outcome.ok:
        raise HTTPException(
            status_code=error_handler.status_code_for(outcome),
            detail=error_handler.handle_failure(outcome, operation),
        )
    return outcome


@router.get("/products")
async def list_products(
    sort_by: Optional[SortOption] = Query(default=None),
    store: CatalogStore = Depends(get_catalog_store),
):
    if sort_by is not None:
        store.set_sort_by(sort_by)

    outcome = await store.fetch_products()
    state = store.state
    if state.error:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"error": "list_failed", "message": state.error},
        )

    return {
        "items": [p.to_dict() for p in store.sorted_items()],
        "sort_by": state.sort_by.value,
        "loading": state.loading,
        "error": state.error,
        "source": outcome.source.value,
    }


@router.get("/products/{product_id}")
async def get_product(product_id: int, store: CatalogStore = Depends(get_catalog_store)):
    product = store.get_product(product_id)
    if product is None and not store.state.loading:
        await store.fetch_products()
        product = store.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return product.to_dict()


@router.post("/products", status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: Dict[str, Any] = Body(...),
    store: CatalogStore = Depends(get_catalog_store),
):
    form = validate_product_form(payload)
    served = _require_served(await store.add_product(form), "create_product")
    return {"product": served.value.to_dict(), "source": served.source.value}


@router.put("/products/{product_id}")
async def update_product(
    product_id: int,
    payload: Dict[str, Any] = Body(...),
    store: CatalogStore = Depends(get_catalog_store),
):
    form = validate_product_form(payload)
    served = _require_served(await store.update_product(product_id, form), "update_product")
    return {"product": served.value.to_dict(), "source": served.source.value}


@router.delete("/products/{product_id}")
async def delete_product(product_id: int, store: CatalogStore = Depends(get_catalog_store)):
    served = _require_served(await store.delete_product(product_id), "delete_product")
    return {"id": served.value, "source": served.source.value}


@router.post("/products/{product_id}/comments", status_code=status.HTTP_201_CREATED)
async def add_comment(
    product_id: int,
    body: CommentRequest,
    store: CatalogStore = Depends(get_catalog_store),
):
    description = validate_comment_description(body.description)
    served = _require_served(await store.add_comment(product_id, description), "create_comment")
    return {"comment": served.value.to_dict(), "source": served.source.value}


@router.delete("/comments/{comment_id}")
async def delete_comment(comment_id: int, store: CatalogStore = Depends(get_catalog_store)):
    served = _require_served(await store.delete_comment(comment_id), "delete_comment")
    return {"id": served.value, "source": served.source.value}


@router.put("/sort")
async def set_sort(body: SortRequest, store: CatalogStore = Depends(get_catalog_store)):
    state = store.set_sort_by(body.sort_by)
    return {"sort_by": state.sort_by.value}
