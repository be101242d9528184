"""
Integrations layer.
This package contains all code used to reach catalogue storage:
- The remote collection API (json-server style products/comments resources)
- On-device key-value storage used when the remote API is unavailable

Key rule:
- The state layer MUST NOT call backends directly.
- It calls CatalogService (src/integrations/policy/catalog_service.py), which
  tries the remote client first and falls back to the local client.

Switching implementations:
- Backend construction happens in ONE place (src/catalog/dependencies.py).
"""

from .contracts.catalog import Comment, Product, ProductFormData, Size
from .contracts.interfaces import CatalogClient, ProductNotFoundError
from .contracts.outcomes import BackendSource, Failed, Outcome, Served

__all__ = [
    # catalog
    "Comment", "Product", "ProductFormData", "Size",
    # interfaces
    "CatalogClient", "ProductNotFoundError",
    # outcomes
    "BackendSource", "Failed", "Outcome", "Served",
]
