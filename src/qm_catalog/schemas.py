"""Pydantic models for catalog files (dollar amounts and fractional shares)."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from src.qm_common.money import dollars_to_cents, fraction_to_bps
from src.qm_drop.domain.models import DropConfig


class CatalogEntry(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str | None = Field(default=None, min_length=1)
    base_price: Decimal = Field(alias="basePrice", ge=0)
    viewing_fee: Decimal = Field(alias="viewingFee", ge=0)
    min_price: Decimal = Field(alias="minPrice", ge=0)
    price_drop_share: Decimal = Field(alias="priceDropShare", ge=0, le=1)
    platform_share: Decimal = Field(alias="platformShare", ge=0, le=1)
    supplier_share_of_platform: Decimal = Field(alias="supplierShareOfPlatform", ge=0, le=1)
    qomo_share_of_platform: Decimal = Field(alias="qomoShareOfPlatform", ge=0, le=1)

    def to_domain(self, product_id: str) -> DropConfig:
        """Convert to cents / bps. Raises ValueError for amounts that cannot be quantized."""
        return DropConfig(
            product_id=product_id,
            name=self.name or product_id,
            base_price=dollars_to_cents(self.base_price),
            viewing_fee=dollars_to_cents(self.viewing_fee),
            price_drop_share_bps=fraction_to_bps(self.price_drop_share),
            platform_share_bps=fraction_to_bps(self.platform_share),
            supplier_share_of_platform_bps=fraction_to_bps(self.supplier_share_of_platform),
            qomo_share_of_platform_bps=fraction_to_bps(self.qomo_share_of_platform),
            min_price=dollars_to_cents(self.min_price),
        )


CatalogFile = TypeAdapter(dict[str, CatalogEntry])
