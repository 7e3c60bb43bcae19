"""InMemoryDropStateStore — single-process store, one asyncio.Lock per product."""

import asyncio
from collections import defaultdict
from collections.abc import Iterable

from src.qm_drop.domain.models import DropState


class InMemoryDropStateStore:
    def __init__(self) -> None:
        self._states: dict[str, DropState] = {}
        self._locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def get(self, product_id: str) -> DropState | None:
        return self._states.get(product_id)

    async def put(self, product_id: str, state: DropState) -> None:
        self._states[product_id] = state

    async def reset(self, states: Iterable[DropState]) -> None:
        self._states = {s.product_id: s for s in states}

    def lock(self, product_id: str) -> asyncio.Lock:
        return self._locks[product_id]
