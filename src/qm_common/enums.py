"""Global enums — values are part of the API contract."""

from enum import Enum


class ViewStatus(str, Enum):
    """Outcome of a view attempt on a drop."""
    LOCKED = "LOCKED"
    QUEUED = "QUEUED"
    SOLD = "SOLD"


class DropErrorCode(str, Enum):
    ALREADY_SOLD = "already-sold"
    LOCKED_BY_OTHER = "locked-by-other"


class StoreBackend(str, Enum):
    MEMORY = "memory"
    REDIS = "redis"
