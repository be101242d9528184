"""
Catalogue contracts.

Defines the product/comment shapes shared by every catalogue backend:
- clients/real_http/catalog_api.py (remote json-server style collection API)
- clients/local/local_catalog.py (on-device key-value storage)

Wire format is camelCase (`imageUrl`, `productId`, nested `size`); the
dataclasses below use snake_case and convert at the edges with
`to_resource()` / `to_dict()`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class Size:
    width: float
    height: float

    def to_dict(self) -> Dict[str, Any]:
        return {"width": self.width, "height": self.height}


@dataclass
class Comment:
    id: int
    product_id: int
    description: str
    date: str                            # "H:MM DD.MM.YYYY", generated client-side

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "productId": self.product_id,
            "description": self.description,
            "date": self.date,
        }


@dataclass
class Product:
    id: int
    image_url: str
    name: str
    count: int
    size: Size
    weight: str
    comments: List[Comment] = field(default_factory=list)

    def to_resource(self) -> Dict[str, Any]:
        """Stored product shape: comments live in their own collection."""
        return {
            "id": self.id,
            "imageUrl": self.image_url,
            "name": self.name,
            "count": self.count,
            "size": self.size.to_dict(),
            "weight": self.weight,
        }

    def to_dict(self) -> Dict[str, Any]:
        data = self.to_resource()
        data["comments"] = [c.to_dict() for c in self.comments]
        return data


@dataclass
class ProductFormData:
    """Edit buffer for create/update; carries no id and is never stored as-is."""

    image_url: str
    name: str
    count: int
    width: float
    height: float
    weight: str

    def to_payload(self) -> Dict[str, Any]:
        return {
            "imageUrl": self.image_url,
            "name": self.name,
            "count": self.count,
            "size": {"width": self.width, "height": self.height},
            "weight": self.weight,
        }
