"""Drop pricing engine — pure state transitions for one product.

Every operation takes a DropState and returns a new one (inside a result
value where there is one). Nothing here performs I/O, logs, or reads the
clock: ``now`` always comes from the caller, and lock expiry is evaluated
lazily against it.

Lock lifecycle per product:

    Unlocked --apply_view(eligible)--> Locked(actor, expiry)
    Locked --release_lock(holder) / expiry--> Unlocked
    Unlocked | Locked(buyer) --apply_purchase--> Sold (terminal)
"""
from dataclasses import replace
from datetime import datetime, timedelta

from src.qm_common.enums import DropErrorCode, ViewStatus
from src.qm_drop.domain.models import DropConfig, DropState, PurchaseResult, ViewEventResult
from src.qm_drop.engine.fee import next_price, split_fee
from src.qm_drop.engine.queue import dequeue, enqueue, position

LOCK_DURATION = timedelta(seconds=30)

_SOLD_MESSAGE = "Product is already sold."
_LOCKED_MESSAGE = "Product is currently locked by another user."


def init_drop(config: DropConfig) -> DropState:
    """Fresh state for a drop: base price, no lock, empty queue, zero totals."""
    return DropState(product_id=config.product_id, current_price=config.base_price)


def apply_view(
    state: DropState,
    config: DropConfig,
    viewer_id: str,
    *,
    now: datetime,
    lock_duration: timedelta = LOCK_DURATION,
) -> ViewEventResult:
    """Reveal the live price to viewer_id, queue them, or report the sale.

    The fee is charged once per lock acquisition. A holder re-polling its own
    lock gets the same expiry back at no charge.
    """
    if state.is_sold:
        return ViewEventResult(
            success=False,
            status=ViewStatus.SOLD,
            new_price=state.current_price,
            state=state,
            error_code=DropErrorCode.ALREADY_SOLD,
            error=_SOLD_MESSAGE,
        )

    if state.is_locked_by(viewer_id, now):
        return ViewEventResult(
            success=True,
            status=ViewStatus.LOCKED,
            new_price=state.current_price,
            state=state,
            expires_at=state.active_view_expires_at,
        )

    if state.lock_is_active(now):
        queued = replace(state, queue=enqueue(state.queue, viewer_id))
        return _queued(queued, viewer_id)

    # No active lock. Waiters ahead of viewer keep their turn even though
    # the previous lock has expired; stale lock fields are dropped here.
    if state.queue and state.queue[0] != viewer_id:
        queued = replace(
            state,
            active_viewer_id=None,
            active_view_expires_at=None,
            queue=enqueue(state.queue, viewer_id),
        )
        return _queued(queued, viewer_id)

    return _grant_lock(state, config, viewer_id, now, lock_duration)


def _queued(state: DropState, viewer_id: str) -> ViewEventResult:
    return ViewEventResult(
        success=False,
        status=ViewStatus.QUEUED,
        new_price=state.current_price,
        state=state,
        queue_position=position(state.queue, viewer_id),
    )


def _grant_lock(
    state: DropState,
    config: DropConfig,
    viewer_id: str,
    now: datetime,
    lock_duration: timedelta,
) -> ViewEventResult:
    split = split_fee(config)
    price = next_price(state.current_price, split.price_drop_amount, config.min_price)
    effective_drop = state.current_price - price
    expires_at = now + lock_duration

    new_state = replace(
        state,
        current_price=price,
        total_views=state.total_views + 1,
        total_platform_revenue=state.total_platform_revenue + split.platform_revenue,
        total_supplier_platform_revenue=(
            state.total_supplier_platform_revenue + split.supplier_share
        ),
        total_qomo_revenue=state.total_qomo_revenue + split.qomo_share,
        active_viewer_id=viewer_id,
        active_view_expires_at=expires_at,
        queue=dequeue(state.queue, viewer_id),
    )
    return ViewEventResult(
        success=True,
        status=ViewStatus.LOCKED,
        new_price=price,
        state=new_state,
        drop_amount=effective_drop,
        fee_charged=config.viewing_fee,
        expires_at=expires_at,
    )


def release_lock(state: DropState, viewer_id: str) -> DropState:
    """Cancel viewer_id's lock. No-op for anyone else.

    The queue is left alone: the head becomes eligible on its next view call.
    """
    if state.active_viewer_id != viewer_id:
        return state
    return replace(state, active_viewer_id=None, active_view_expires_at=None)


def apply_purchase(
    state: DropState,
    config: DropConfig,
    buyer_id: str,
    *,
    now: datetime,
) -> PurchaseResult:
    """Settle the sale at the current live price.

    Supplier receives the sale price plus its accrued share of viewing fees;
    the operator keeps its accrued share. Lock and queue are cleared.
    """
    if state.is_sold:
        return PurchaseResult(
            success=False,
            state=state,
            error_code=DropErrorCode.ALREADY_SOLD,
            error=_SOLD_MESSAGE,
        )

    if state.lock_is_active(now) and not state.is_locked_by(buyer_id, now):
        return PurchaseResult(
            success=False,
            state=state,
            error_code=DropErrorCode.LOCKED_BY_OTHER,
            error=_LOCKED_MESSAGE,
        )

    sold_price = state.current_price
    new_state = replace(
        state,
        is_sold=True,
        buyer_id=buyer_id,
        sold_price=sold_price,
        sold_at=now,
        active_viewer_id=None,
        active_view_expires_at=None,
        queue=(),
    )
    return PurchaseResult(
        success=True,
        state=new_state,
        sold_price=sold_price,
        total_supplier_revenue=sold_price + state.total_supplier_platform_revenue,
        total_qomo_revenue=state.total_qomo_revenue,
    )
