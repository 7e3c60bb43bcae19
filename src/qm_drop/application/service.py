"""DropApplicationService — request-surface adapter around the pure engine.

Each mutating call runs load -> engine -> verify -> store under the store's
per-product lock, so two requests for the same drop never both observe an
unlocked state. Different drops proceed in parallel.
"""

import logging
from collections.abc import Callable
from contextlib import AsyncExitStack
from datetime import datetime, timedelta

from src.qm_catalog.catalog import DropCatalog
from src.qm_common.datetime_utils import utc_now
from src.qm_common.enums import DropErrorCode, ViewStatus
from src.qm_common.errors import DropAlreadySoldError, DropLockedByOtherError
from src.qm_drop.application.schemas import (
    DropListResponse,
    DropStatusResponse,
    PurchaseResponse,
    ViewResponse,
)
from src.qm_drop.domain.invariants import verify_drop_invariants
from src.qm_drop.domain.models import DropConfig, DropState
from src.qm_drop.domain.repository import DropStateStoreProtocol
from src.qm_drop.engine.pricing import (
    LOCK_DURATION,
    apply_purchase,
    apply_view,
    init_drop,
    release_lock,
)

logger = logging.getLogger(__name__)


class DropApplicationService:
    def __init__(
        self,
        catalog: DropCatalog,
        store: DropStateStoreProtocol,
        clock: Callable[[], datetime] = utc_now,
        lock_duration: timedelta = LOCK_DURATION,
    ) -> None:
        self._catalog = catalog
        self._store = store
        self._clock = clock
        self._lock_duration = lock_duration

    async def initialize(self) -> None:
        """Create state for catalog drops the store has not seen yet."""
        for config in self._catalog:
            async with self._store.lock(config.product_id):
                if await self._store.get(config.product_id) is None:
                    await self._store.put(config.product_id, init_drop(config))

    async def reset(self) -> None:
        """Re-initialize every drop from the catalog (simulation/test only).

        Holds every product lock, taken in catalog order, so an in-flight
        view or buy cannot write its pre-reset state back afterwards.
        """
        async with AsyncExitStack() as stack:
            for config in self._catalog:
                await stack.enter_async_context(self._store.lock(config.product_id))
            await self._store.reset(init_drop(c) for c in self._catalog)
        logger.info("Reset %d drops", len(self._catalog))

    async def list_drops(self) -> DropListResponse:
        now = self._clock()
        items = []
        for config in self._catalog:
            state = await self._load_state(config)
            items.append(DropStatusResponse.from_domain(config, state, now))
        return DropListResponse(items=items)

    async def get_status(self, product_id: str) -> DropStatusResponse:
        config = self._catalog.get(product_id)
        state = await self._load_state(config)
        return DropStatusResponse.from_domain(config, state, self._clock())

    async def view(self, product_id: str, viewer_id: str) -> ViewResponse:
        config = self._catalog.get(product_id)
        async with self._store.lock(product_id):
            state = await self._load_state(config)
            now = self._clock()
            result = apply_view(
                state, config, viewer_id, now=now, lock_duration=self._lock_duration
            )
            verify_drop_invariants(result.state, config)
            # Persist even when queued: the queue itself is state
            if result.state is not state:
                await self._store.put(product_id, result.state)

        if result.status is ViewStatus.LOCKED and result.fee_charged:
            logger.info(
                "Lock granted: drop=%s viewer=%s fee=%d drop_amount=%d price=%d",
                product_id, viewer_id, result.fee_charged, result.drop_amount, result.new_price,
            )
        elif result.status is ViewStatus.QUEUED:
            logger.info(
                "Queued: drop=%s viewer=%s position=%d",
                product_id, viewer_id, result.queue_position,
            )
        return ViewResponse.from_result(config, result, now)

    async def cancel(self, product_id: str, viewer_id: str) -> DropStatusResponse:
        config = self._catalog.get(product_id)
        async with self._store.lock(product_id):
            state = await self._load_state(config)
            new_state = release_lock(state, viewer_id)
            if new_state is not state:
                verify_drop_invariants(new_state, config)
                await self._store.put(product_id, new_state)
                logger.info("Lock released: drop=%s viewer=%s", product_id, viewer_id)
        return DropStatusResponse.from_domain(config, new_state, self._clock())

    async def buy(self, product_id: str, buyer_id: str) -> PurchaseResponse:
        config = self._catalog.get(product_id)
        async with self._store.lock(product_id):
            state = await self._load_state(config)
            result = apply_purchase(state, config, buyer_id, now=self._clock())
            if result.success:
                verify_drop_invariants(result.state, config)
                await self._store.put(product_id, result.state)

        if not result.success:
            logger.warning(
                "Purchase rejected: drop=%s buyer=%s reason=%s",
                product_id, buyer_id, result.error_code,
            )
            if result.error_code is DropErrorCode.ALREADY_SOLD:
                raise DropAlreadySoldError(product_id)
            raise DropLockedByOtherError(product_id)

        logger.info(
            "Sold: drop=%s buyer=%s price=%d supplier_total=%d qomo_total=%d",
            product_id, buyer_id, result.sold_price,
            result.total_supplier_revenue, result.total_qomo_revenue,
        )
        return PurchaseResponse.from_result(result)

    async def _load_state(self, config: DropConfig) -> DropState:
        state = await self._store.get(config.product_id)
        return state if state is not None else init_drop(config)
