"""Repository Protocol — dependency inversion for testability.

The application service holds ``lock(product_id)`` around every
load -> compute -> store cycle, so a store must guarantee that at most one
holder of a given product id runs at a time. Different ids never contend.
"""

from collections.abc import Iterable
from contextlib import AbstractAsyncContextManager
from typing import Protocol

from src.qm_drop.domain.models import DropState


class DropStateStoreProtocol(Protocol):
    async def get(self, product_id: str) -> DropState | None: ...

    async def put(self, product_id: str, state: DropState) -> None: ...

    async def reset(self, states: Iterable[DropState]) -> None: ...

    def lock(self, product_id: str) -> AbstractAsyncContextManager[None]: ...
