"""
View-time ordering of the product list.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List

from src.integrations.contracts.catalog import Product


class SortOption(str, Enum):
    NAME = "name"
    NAME_DESC = "nameDesc"
    COUNT = "count"
    COUNT_DESC = "countDesc"


def _name_key(product: Product):
    return (product.name.casefold(), product.name)


def sort_products(items: Iterable[Product], sort_by: SortOption) -> List[Product]:
    """Return a new, stably sorted list; `items` itself is left untouched."""
    sort_by = SortOption(sort_by)
    if sort_by is SortOption.NAME:
        return sorted(items, key=_name_key)
    if sort_by is SortOption.NAME_DESC:
        return sorted(items, key=_name_key, reverse=True)
    if sort_by is SortOption.COUNT:
        return sorted(items, key=lambda p: p.count)
    return sorted(items, key=lambda p: p.count, reverse=True)
