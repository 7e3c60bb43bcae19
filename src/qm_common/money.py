"""Integer arithmetic utilities for cents-based drop pricing.

All prices, fees and revenue totals use int (cents). No float.
Fractions (price-drop share, platform share, ...) use int basis points:
10000 bps == 1.0. Every share is applied with round-half-up to the cent,
so no value ever carries sub-cent error between steps.
"""

from decimal import ROUND_HALF_UP, Decimal

BPS_DENOMINATOR = 10000


def validate_bps(bps: int) -> None:
    """Validate that a share is in the range [0, 10000] bps."""
    if not (0 <= bps <= BPS_DENOMINATOR):
        raise ValueError(f"Share must be between 0 and 10000 bps, got {bps}")


def apply_bps(amount: int, bps: int) -> int:
    """Return amount x bps / 10000 rounded half-up to the cent.

    Using integer half-up: (a * bps + 5000) // 10000
    """
    if amount < 0:
        raise ValueError(f"Amount must be non-negative, got {amount}")
    validate_bps(bps)
    return (amount * bps + BPS_DENOMINATOR // 2) // BPS_DENOMINATOR


def cents_to_display(cents: int) -> str:
    """Convert cents to display string: 109625 -> '$1,096.25', -1200 -> '-$12.00'."""
    if cents < 0:
        abs_cents = -cents
        return f"-${abs_cents // 100:,}.{abs_cents % 100:02d}"
    return f"${cents // 100:,}.{cents % 100:02d}"


def _parse_decimal(value: str | int | Decimal, kind: str) -> Decimal:
    try:
        dec = Decimal(str(value))
    except ArithmeticError as exc:
        raise ValueError(f"Not a valid {kind}: {value!r}") from exc
    if not dec.is_finite():
        raise ValueError(f"Not a valid {kind}: {value!r}")
    return dec


def _scaled_half_up(dec: Decimal, scale: int, kind: str, value: object) -> int:
    try:
        return int((dec * scale).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except ArithmeticError as exc:
        raise ValueError(f"Not a valid {kind}: {value!r}") from exc


def dollars_to_cents(value: str | int | Decimal) -> int:
    """Parse a dollar amount ('1100', '5.00', 4.5 as str) into cents, half-up.

    NaN and infinities are rejected with ValueError.
    """
    dec = _parse_decimal(value, "dollar amount")
    return _scaled_half_up(dec, 100, "dollar amount", value)


def fraction_to_bps(value: str | int | Decimal) -> int:
    """Parse a fraction ('0.8', '0.25', 1) into basis points, half-up."""
    dec = _parse_decimal(value, "fraction")
    bps = _scaled_half_up(dec, BPS_DENOMINATOR, "fraction", value)
    validate_bps(bps)
    return bps
