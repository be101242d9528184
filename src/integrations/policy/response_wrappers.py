from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.integrations.contracts.catalog import Comment, Product, Size


class IntegrationResponseError(ValueError):
    def __init__(self, message: str, *, payload: Optional[Any] = None) -> None:
        super().__init__(message)
        self.payload = payload if payload is not None else {}


class SizeModel(BaseModel):
    width: float
    height: float


class ProductResourceModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    image_url: str = Field(alias="imageUrl")
    name: str
    count: int
    size: SizeModel
    weight: str


class CommentResourceModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    product_id: int = Field(alias="productId")
    description: str
    date: str


def normalize_product(raw: Any, comments: Optional[List[Comment]] = None) -> Product:
    """Validate a stored product resource and embed the given comments."""
    model = _build_model(ProductResourceModel, raw)
    return Product(
        id=model.id,
        image_url=model.image_url,
        name=model.name,
        count=model.count,
        size=Size(width=model.size.width, height=model.size.height),
        weight=model.weight,
        comments=list(comments or []),
    )


def normalize_comment(raw: Any) -> Comment:
    model = _build_model(CommentResourceModel, raw)
    return Comment(
        id=model.id,
        product_id=model.product_id,
        description=model.description,
        date=model.date,
    )


def normalize_product_list(raw: Any) -> List[Product]:
    return [normalize_product(item) for item in _require_list(raw, "products")]


def normalize_comment_list(raw: Any) -> List[Comment]:
    return [normalize_comment(item) for item in _require_list(raw, "comments")]


def _require_list(raw: Any, label: str) -> List[Any]:
    if not isinstance(raw, list):
        raise IntegrationResponseError(f"Expected a list of {label}; got {type(raw).__name__}.", payload=raw)
    return raw


def _build_model(model_type, raw: Any):
    if not isinstance(raw, dict):
        raise IntegrationResponseError(f"Expected an object; got {type(raw).__name__}.", payload=raw)
    try:
        return model_type.model_validate(raw)
    except ValidationError as exc:
        raise IntegrationResponseError(f"Response validation failed: {exc}", payload=raw) from exc
