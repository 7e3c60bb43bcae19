"""RedisDropStateStore — shared state for multiple API workers.

Keys:
  drop:state:{product_id}  JSON-encoded DropState
  drop:lock:{product_id}   Redis lock held around each read-modify-write

A lock that cannot be acquired within the timeout, or that expired while
held, surfaces as DropBusyError (503) so callers can retry.
"""

import logging
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager

import redis.asyncio as aioredis
from redis.exceptions import LockError

from src.qm_common.errors import DropBusyError
from src.qm_drop.domain.models import DropState
from src.qm_drop.infrastructure.serialization import state_from_json, state_to_json

logger = logging.getLogger(__name__)

_STATE_KEY = "drop:state:{}"
_LOCK_KEY = "drop:lock:{}"


class RedisDropStateStore:
    def __init__(self, client: aioredis.Redis, lock_timeout: float = 5.0) -> None:
        self._redis = client
        self._lock_timeout = lock_timeout

    async def get(self, product_id: str) -> DropState | None:
        raw = await self._redis.get(_STATE_KEY.format(product_id))
        if raw is None:
            return None
        return state_from_json(raw)

    async def put(self, product_id: str, state: DropState) -> None:
        await self._redis.set(_STATE_KEY.format(product_id), state_to_json(state))

    async def reset(self, states: Iterable[DropState]) -> None:
        async with self._redis.pipeline(transaction=True) as pipe:
            for state in states:
                pipe.set(_STATE_KEY.format(state.product_id), state_to_json(state))
            await pipe.execute()

    @asynccontextmanager
    async def lock(self, product_id: str) -> AsyncIterator[None]:
        # timeout bounds a crashed holder; blocking_timeout bounds the waiter
        redis_lock = self._redis.lock(
            _LOCK_KEY.format(product_id),
            timeout=self._lock_timeout,
            blocking_timeout=self._lock_timeout,
        )
        try:
            async with redis_lock:
                yield
        except LockError as exc:
            logger.warning("Drop lock failed: drop=%s error=%s", product_id, exc)
            raise DropBusyError(product_id) from exc
