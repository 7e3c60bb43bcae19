"""Drop domain models — pure dataclasses, no I/O.

Money fields are int cents; share fields are int basis points (10000 = 1.0).
"""
from dataclasses import dataclass
from datetime import datetime

from src.qm_common.enums import DropErrorCode, ViewStatus
from src.qm_common.errors import InvalidDropConfigError
from src.qm_common.money import BPS_DENOMINATOR


@dataclass(frozen=True)
class DropConfig:
    """Immutable pricing parameters for one product, supplied by the catalog."""

    product_id: str
    name: str
    base_price: int  # starting live price
    viewing_fee: int  # charged once per lock acquisition
    price_drop_share_bps: int  # part of the fee that lowers the price
    platform_share_bps: int  # part of the fee kept as platform revenue
    supplier_share_of_platform_bps: int
    qomo_share_of_platform_bps: int
    min_price: int  # price floor


def validate_config(config: DropConfig) -> None:
    """Raise InvalidDropConfigError if the config cannot drive a drop."""
    if not config.product_id:
        raise InvalidDropConfigError("product_id must not be empty")
    for name in ("base_price", "viewing_fee", "min_price"):
        if getattr(config, name) < 0:
            raise InvalidDropConfigError(f"{config.product_id}: {name} must be >= 0")
    if config.min_price > config.base_price:
        raise InvalidDropConfigError(
            f"{config.product_id}: min_price {config.min_price}"
            f" exceeds base_price {config.base_price}"
        )
    for name in (
        "price_drop_share_bps",
        "platform_share_bps",
        "supplier_share_of_platform_bps",
        "qomo_share_of_platform_bps",
    ):
        bps = getattr(config, name)
        if not (0 <= bps <= BPS_DENOMINATOR):
            raise InvalidDropConfigError(
                f"{config.product_id}: {name} must be within 0..10000, got {bps}"
            )


@dataclass(frozen=True)
class DropState:
    """Mutable-by-replacement state of one drop. Engine ops return new instances."""

    product_id: str
    current_price: int
    is_sold: bool = False
    buyer_id: str | None = None
    sold_price: int | None = None
    sold_at: datetime | None = None
    # Lock & queue
    active_viewer_id: str | None = None
    active_view_expires_at: datetime | None = None
    queue: tuple[str, ...] = ()
    # Accumulated financials
    total_views: int = 0
    total_platform_revenue: int = 0
    total_supplier_platform_revenue: int = 0
    total_qomo_revenue: int = 0

    def lock_is_active(self, now: datetime) -> bool:
        """A lock is active only while it has a holder and an expiry in the future."""
        return (
            self.active_viewer_id is not None
            and self.active_view_expires_at is not None
            and self.active_view_expires_at > now
        )

    def is_locked_by(self, actor_id: str, now: datetime) -> bool:
        return self.lock_is_active(now) and self.active_viewer_id == actor_id


@dataclass(frozen=True)
class FeeSplit:
    """How one viewing fee is distributed."""

    price_drop_amount: int
    platform_revenue: int
    supplier_share: int
    qomo_share: int


@dataclass(frozen=True)
class ViewEventResult:
    success: bool
    status: ViewStatus
    new_price: int
    state: DropState
    drop_amount: int = 0
    fee_charged: int = 0
    expires_at: datetime | None = None
    queue_position: int | None = None
    error_code: DropErrorCode | None = None
    error: str | None = None


@dataclass(frozen=True)
class PurchaseResult:
    success: bool
    state: DropState
    sold_price: int = 0
    total_supplier_revenue: int = 0  # sold price + supplier share of fees
    total_qomo_revenue: int = 0  # operator share of fees
    error_code: DropErrorCode | None = None
    error: str | None = None
