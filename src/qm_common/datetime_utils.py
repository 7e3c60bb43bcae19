"""UTC datetime utilities."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def to_epoch_ms(dt: datetime) -> int:
    """Milliseconds since the Unix epoch, for client-side countdowns."""
    return int(dt.timestamp() * 1000)
