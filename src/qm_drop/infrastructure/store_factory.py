"""Pick the DropState store backend from settings."""

import logging

from config.settings import Settings
from src.qm_common.enums import StoreBackend
from src.qm_common.redis_client import get_redis
from src.qm_drop.domain.repository import DropStateStoreProtocol
from src.qm_drop.infrastructure.memory_store import InMemoryDropStateStore
from src.qm_drop.infrastructure.redis_store import RedisDropStateStore

logger = logging.getLogger(__name__)


async def build_store(settings: Settings) -> DropStateStoreProtocol:
    backend = StoreBackend(settings.DROP_STORE_BACKEND)
    logger.info("Drop state store backend: %s", backend.value)
    if backend is StoreBackend.REDIS:
        client = await get_redis()
        return RedisDropStateStore(client, lock_timeout=settings.REDIS_LOCK_TIMEOUT_SECONDS)
    return InMemoryDropStateStore()
