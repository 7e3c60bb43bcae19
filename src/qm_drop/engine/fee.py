"""Viewing-fee distribution — every step rounded half-up to the cent."""

from src.qm_common.money import apply_bps
from src.qm_drop.domain.models import DropConfig, FeeSplit


def split_fee(config: DropConfig) -> FeeSplit:
    """Split one viewing fee into price drop, platform revenue and its two shares.

    price_drop       = fee x price_drop_share
    platform_revenue = fee x platform_share
    supplier_share   = platform_revenue x supplier_share_of_platform
    qomo_share       = platform_revenue x qomo_share_of_platform
    """
    platform_revenue = apply_bps(config.viewing_fee, config.platform_share_bps)
    return FeeSplit(
        price_drop_amount=apply_bps(config.viewing_fee, config.price_drop_share_bps),
        platform_revenue=platform_revenue,
        supplier_share=apply_bps(platform_revenue, config.supplier_share_of_platform_bps),
        qomo_share=apply_bps(platform_revenue, config.qomo_share_of_platform_bps),
    )


def next_price(current_price: int, drop_amount: int, min_price: int) -> int:
    """Lower the price by drop_amount, never below the floor."""
    return max(min_price, current_price - drop_amount)
