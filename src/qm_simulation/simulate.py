"""Scripted drop simulation over the same service + store path as the API.

For every catalog drop: reset, N sequential viewers (each reveals the price
and then releases the lock), then one purchase. Logs the resulting metrics.

Run with: python -m src.qm_simulation.simulate [--views 10]
"""

import argparse
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from src.qm_catalog.catalog import DropCatalog
from src.qm_common.datetime_utils import utc_now
from src.qm_common.money import cents_to_display
from src.qm_drop.application.service import DropApplicationService
from src.qm_drop.domain.repository import DropStateStoreProtocol
from src.qm_drop.infrastructure.memory_store import InMemoryDropStateStore

logger = logging.getLogger(__name__)

WINNER_ID = "buyer_WINNER"


class SimulatedClock:
    """Manually advanced clock so lock windows do not depend on wall time."""

    def __init__(self, start: datetime | None = None) -> None:
        self._now = start or utc_now()

    def __call__(self) -> datetime:
        return self._now

    def advance(self, delta: timedelta) -> None:
        self._now += delta


@dataclass
class SimulationReport:
    product_id: str
    name: str
    base_price: int
    final_price: int
    total_views: int
    total_platform_revenue: int
    total_supplier_platform_revenue: int
    total_qomo_revenue: int
    sold_price: int
    total_supplier_revenue: int
    settled_qomo_revenue: int


async def run_simulation(
    catalog: DropCatalog,
    store: DropStateStoreProtocol | None = None,
    views: int = 10,
    clock: SimulatedClock | None = None,
) -> list[SimulationReport]:
    clock = clock or SimulatedClock()
    service = DropApplicationService(catalog, store or InMemoryDropStateStore(), clock=clock)
    await service.reset()

    reports: list[SimulationReport] = []
    for config in catalog:
        logger.info(">>> SIMULATING PRODUCT: %s (%s)", config.name, config.product_id)
        logger.info("BASE PRICE: %s", cents_to_display(config.base_price))

        for i in range(1, views + 1):
            viewer_id = f"viewer_{i}"
            await service.view(config.product_id, viewer_id)
            clock.advance(timedelta(seconds=5))
            await service.cancel(config.product_id, viewer_id)

        status = await service.get_status(config.product_id)
        logger.info(
            "STATUS AFTER %d VIEWS: price=%s views=%d platform=%s supplier_share=%s qomo_share=%s",
            views,
            status.current_price_display,
            status.total_views,
            cents_to_display(status.total_platform_revenue_cents),
            cents_to_display(status.total_supplier_platform_revenue_cents),
            cents_to_display(status.total_qomo_revenue_cents),
        )

        purchase = await service.buy(config.product_id, WINNER_ID)
        logger.info(
            "PURCHASE: paid=%s supplier_total=%s qomo_total=%s",
            purchase.sold_price_display,
            purchase.total_supplier_revenue_display,
            purchase.total_qomo_revenue_display,
        )

        reports.append(
            SimulationReport(
                product_id=config.product_id,
                name=config.name,
                base_price=config.base_price,
                final_price=status.current_price_cents,
                total_views=status.total_views,
                total_platform_revenue=status.total_platform_revenue_cents,
                total_supplier_platform_revenue=status.total_supplier_platform_revenue_cents,
                total_qomo_revenue=status.total_qomo_revenue_cents,
                sold_price=purchase.sold_price_cents,
                total_supplier_revenue=purchase.total_supplier_revenue_cents,
                settled_qomo_revenue=purchase.total_qomo_revenue_cents,
            )
        )
    return reports


def main() -> None:
    parser = argparse.ArgumentParser(description="Simulate drop views and a purchase.")
    parser.add_argument("--views", type=int, default=10)
    parser.add_argument("--catalog", default=None, help="JSON catalog path")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    catalog = DropCatalog.from_file(args.catalog) if args.catalog else DropCatalog.default()
    asyncio.run(run_simulation(catalog, views=args.views))


if __name__ == "__main__":
    main()
