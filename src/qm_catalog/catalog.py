"""DropCatalog — immutable product-id -> DropConfig lookup, built at startup.

JSON catalog format (dollar amounts and fractional shares, keyed by id):

    {
      "iphone17": {
        "name": "iPhone 17 Pro",
        "basePrice": "1100", "viewingFee": "5", "minPrice": "1000",
        "priceDropShare": "0.8", "platformShare": "0.2",
        "supplierShareOfPlatform": "0.25", "qomoShareOfPlatform": "0.75"
      }
    }
"""

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from pydantic import ValidationError

from src.qm_catalog.products import DEFAULT_PRODUCTS
from src.qm_catalog.schemas import CatalogEntry, CatalogFile
from src.qm_common.errors import DropNotFoundError, InvalidDropConfigError
from src.qm_drop.domain.models import DropConfig, validate_config

logger = logging.getLogger(__name__)


class DropCatalog:
    def __init__(self, configs: Iterable[DropConfig]) -> None:
        self._configs: dict[str, DropConfig] = {}
        for config in configs:
            validate_config(config)
            if config.product_id in self._configs:
                raise InvalidDropConfigError(f"duplicate product_id {config.product_id}")
            self._configs[config.product_id] = config

    @classmethod
    def default(cls) -> "DropCatalog":
        return cls(DEFAULT_PRODUCTS)

    @classmethod
    def from_file(cls, path: str | Path) -> "DropCatalog":
        try:
            entries = CatalogFile.validate_json(Path(path).read_bytes())
        except ValidationError as exc:
            raise InvalidDropConfigError(f"{path}: {exc}") from exc
        catalog = cls(_to_config(pid, entry) for pid, entry in entries.items())
        logger.info("Loaded %d drops from %s", len(catalog), path)
        return catalog

    def get(self, product_id: str) -> DropConfig:
        try:
            return self._configs[product_id]
        except KeyError:
            raise DropNotFoundError(product_id) from None

    def list_configs(self) -> list[DropConfig]:
        return list(self._configs.values())

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._configs

    def __iter__(self) -> Iterator[DropConfig]:
        return iter(self._configs.values())

    def __len__(self) -> int:
        return len(self._configs)


def _to_config(product_id: str, entry: CatalogEntry) -> DropConfig:
    try:
        return entry.to_domain(product_id)
    except ValueError as exc:
        raise InvalidDropConfigError(f"{product_id}: {exc}") from exc
