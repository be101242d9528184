"""
Typed outcomes for catalogue operations.

Every facade call answers with either `Served` (tagged with the backend that
produced the value) or `Failed` (both backends gave up). Callers branch on the
type instead of catching exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")


class BackendSource(str, Enum):
    REMOTE = "remote"
    LOCAL = "local"


@dataclass(frozen=True)
class Served(Generic[T]):
    value: T
    source: BackendSource
    remote_error: Optional[Exception] = None     # set when the local store answered

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failed:
    error: Exception
    remote_error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self):
        raise self.error


Outcome = Union[Served[T], Failed]
