"""
Lightweight in-memory key-value store for local development and tests.

Implements the same string-in/string-out interface as the file and Redis
backed stores so the local catalogue client can run without touching disk.
"""

from __future__ import annotations

from typing import Dict, Optional


class InMemoryKeyValueStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        # key -> raw string value (JSON for catalogue collections)
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def ping(self) -> bool:
        return True
