from abc import ABC, abstractmethod
from typing import List

from .catalog import Comment, Product, ProductFormData


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class ProductNotFoundError(LookupError):
    """Raised by the local store when an update targets a missing product."""

    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id


# ---------------------------------------------------------------------------
# Abstract catalogue backend interface
# ---------------------------------------------------------------------------

class CatalogClient(ABC):
    """Every catalogue backend (remote API or local store) implements this."""

    @abstractmethod
    async def list_products(self) -> List[Product]:
        """Return all products with their comments embedded."""

    @abstractmethod
    async def create_product(self, form: ProductFormData) -> Product:
        """Create a product and return it with an empty comment list."""

    @abstractmethod
    async def update_product(self, product_id: int, form: ProductFormData) -> Product:
        """Replace the editable fields of a product; comments are untouched."""

    @abstractmethod
    async def delete_product(self, product_id: int) -> int:
        """Delete a product and every comment referencing it."""

    @abstractmethod
    async def create_comment(self, product_id: int, description: str) -> Comment:
        """Attach a new comment, timestamped now, to a product."""

    @abstractmethod
    async def delete_comment(self, comment_id: int) -> int:
        """Delete a single comment."""
