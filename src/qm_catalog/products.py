"""Launch catalog — the drops offered when no CATALOG_PATH is configured.

$5 viewing fee: 80% lowers the price, 20% is platform revenue,
split 25% supplier / 75% Qomo.
"""

from src.qm_drop.domain.models import DropConfig


def _drop(product_id: str, name: str, base_price: int, min_price: int) -> DropConfig:
    return DropConfig(
        product_id=product_id,
        name=name,
        base_price=base_price,
        viewing_fee=500,
        price_drop_share_bps=8000,
        platform_share_bps=2000,
        supplier_share_of_platform_bps=2500,
        qomo_share_of_platform_bps=7500,
        min_price=min_price,
    )


DEFAULT_PRODUCTS: tuple[DropConfig, ...] = (
    _drop("iphone17", "iPhone 17 Pro", 110000, 100000),
    _drop("ps5slim", "PlayStation 5 Slim", 48500, 42500),
    _drop("macbookairm4", "MacBook Air M4", 90000, 80000),
)
