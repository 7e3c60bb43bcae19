"""Pydantic schemas for the drops API.

Money is exposed twice: *_cents (int, authoritative) and *_display ("$1,096.00").
Lock expiry is exposed as ISO timestamp, epoch ms and whole seconds remaining
so clients can run a countdown without parsing dates.
"""

import math
from datetime import datetime

from pydantic import BaseModel, field_validator

from src.qm_common.datetime_utils import to_epoch_ms
from src.qm_common.enums import ViewStatus
from src.qm_common.money import cents_to_display
from src.qm_drop.domain.models import DropConfig, DropState, PurchaseResult, ViewEventResult

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


def _actor_id(v: str) -> str:
    if not v or v != v.strip():
        raise ValueError("id must be non-empty without surrounding whitespace")
    return v


class ViewRequest(BaseModel):
    viewer_id: str

    @field_validator("viewer_id")
    @classmethod
    def check_viewer_id(cls, v: str) -> str:
        return _actor_id(v)


class BuyRequest(BaseModel):
    buyer_id: str

    @field_validator("buyer_id")
    @classmethod
    def check_buyer_id(cls, v: str) -> str:
        return _actor_id(v)


# ---------------------------------------------------------------------------
# Drop status
# ---------------------------------------------------------------------------


def seconds_remaining(expires_at: datetime | None, now: datetime) -> int:
    if expires_at is None:
        return 0
    return max(0, math.ceil((expires_at - now).total_seconds()))


class DropStatusResponse(BaseModel):
    product_id: str
    name: str
    base_price_cents: int
    base_price_display: str
    current_price_cents: int
    current_price_display: str
    min_price_cents: int
    viewing_fee_cents: int
    viewing_fee_display: str
    is_sold: bool
    buyer_id: str | None
    sold_price_cents: int | None
    sold_at: str | None
    lock_active: bool
    active_viewer_id: str | None
    active_view_expires_at: str | None
    seconds_remaining: int
    queue: list[str]
    total_views: int
    total_platform_revenue_cents: int
    total_supplier_platform_revenue_cents: int
    total_qomo_revenue_cents: int

    @classmethod
    def from_domain(
        cls, config: DropConfig, state: DropState, now: datetime
    ) -> "DropStatusResponse":
        active = state.lock_is_active(now)
        expires_at = state.active_view_expires_at if active else None
        return cls(
            product_id=state.product_id,
            name=config.name,
            base_price_cents=config.base_price,
            base_price_display=cents_to_display(config.base_price),
            current_price_cents=state.current_price,
            current_price_display=cents_to_display(state.current_price),
            min_price_cents=config.min_price,
            viewing_fee_cents=config.viewing_fee,
            viewing_fee_display=cents_to_display(config.viewing_fee),
            is_sold=state.is_sold,
            buyer_id=state.buyer_id,
            sold_price_cents=state.sold_price,
            sold_at=state.sold_at.isoformat() if state.sold_at else None,
            lock_active=active,
            active_viewer_id=state.active_viewer_id if active else None,
            active_view_expires_at=expires_at.isoformat() if expires_at else None,
            seconds_remaining=seconds_remaining(expires_at, now),
            queue=list(state.queue),
            total_views=state.total_views,
            total_platform_revenue_cents=state.total_platform_revenue,
            total_supplier_platform_revenue_cents=state.total_supplier_platform_revenue,
            total_qomo_revenue_cents=state.total_qomo_revenue,
        )


class DropListResponse(BaseModel):
    items: list[DropStatusResponse]


# ---------------------------------------------------------------------------
# View
# ---------------------------------------------------------------------------


class ViewResponse(BaseModel):
    success: bool
    status: ViewStatus
    expires_at: str | None
    expires_at_ms: int | None
    seconds_remaining: int
    queue_position: int | None
    drop_amount_cents: int
    new_price_cents: int
    new_price_display: str
    fee_charged_cents: int
    error_code: str | None
    error: str | None
    drop: DropStatusResponse

    @classmethod
    def from_result(
        cls, config: DropConfig, result: ViewEventResult, now: datetime
    ) -> "ViewResponse":
        return cls(
            success=result.success,
            status=result.status,
            expires_at=result.expires_at.isoformat() if result.expires_at else None,
            expires_at_ms=to_epoch_ms(result.expires_at) if result.expires_at else None,
            seconds_remaining=seconds_remaining(result.expires_at, now),
            queue_position=result.queue_position,
            drop_amount_cents=result.drop_amount,
            new_price_cents=result.new_price,
            new_price_display=cents_to_display(result.new_price),
            fee_charged_cents=result.fee_charged,
            error_code=result.error_code.value if result.error_code else None,
            error=result.error,
            drop=DropStatusResponse.from_domain(config, result.state, now),
        )


# ---------------------------------------------------------------------------
# Purchase
# ---------------------------------------------------------------------------


class PurchaseResponse(BaseModel):
    product_id: str
    buyer_id: str
    sold_price_cents: int
    sold_price_display: str
    total_supplier_revenue_cents: int
    total_supplier_revenue_display: str
    total_qomo_revenue_cents: int
    total_qomo_revenue_display: str
    sold_at: str | None

    @classmethod
    def from_result(cls, result: PurchaseResult) -> "PurchaseResponse":
        state = result.state
        return cls(
            product_id=state.product_id,
            buyer_id=state.buyer_id or "",
            sold_price_cents=result.sold_price,
            sold_price_display=cents_to_display(result.sold_price),
            total_supplier_revenue_cents=result.total_supplier_revenue,
            total_supplier_revenue_display=cents_to_display(result.total_supplier_revenue),
            total_qomo_revenue_cents=result.total_qomo_revenue,
            total_qomo_revenue_display=cents_to_display(result.total_qomo_revenue),
            sold_at=state.sold_at.isoformat() if state.sold_at else None,
        )
