"""Drop invariant verification after each engine transition."""

import logging

from src.qm_drop.domain.models import DropConfig, DropState

logger = logging.getLogger(__name__)


def verify_drop_invariants(state: DropState, config: DropConfig) -> None:
    """Verify drop invariants. Raises AssertionError if violated.

    INV-1: current_price >= min_price
    INV-2: current_price <= base_price
    INV-3: queue has no duplicates
    INV-4: lock holder is never queued
    INV-5: lock holder and expiry are set together
    INV-6: sold drop has no lock, empty queue, sold_price == current_price
    """
    pid = state.product_id
    assert state.current_price >= config.min_price, (
        f"INV-1 violated: {pid} price={state.current_price} < min_price={config.min_price}"
    )
    assert state.current_price <= config.base_price, (
        f"INV-2 violated: {pid} price={state.current_price} > base_price={config.base_price}"
    )
    assert len(set(state.queue)) == len(state.queue), (
        f"INV-3 violated: {pid} duplicate queue entries {state.queue}"
    )
    assert state.active_viewer_id is None or state.active_viewer_id not in state.queue, (
        f"INV-4 violated: {pid} lock holder {state.active_viewer_id} is queued"
    )
    assert (state.active_viewer_id is None) == (state.active_view_expires_at is None), (
        f"INV-5 violated: {pid} viewer={state.active_viewer_id}"
        f" expires_at={state.active_view_expires_at}"
    )
    if state.is_sold:
        assert state.active_viewer_id is None and not state.queue, (
            f"INV-6 violated: {pid} sold with lock or queue"
        )
        assert state.sold_price == state.current_price, (
            f"INV-6 violated: {pid} sold_price={state.sold_price}"
            f" != current_price={state.current_price}"
        )

    logger.debug(
        "Invariants OK: drop=%s, price=%d, views=%d", pid, state.current_price, state.total_views
    )
