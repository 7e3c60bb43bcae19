"""Unit tests for verify_drop_invariants and validate_config."""
from dataclasses import replace
from datetime import UTC, datetime

import pytest

from src.qm_common.errors import InvalidDropConfigError
from src.qm_drop.domain.invariants import verify_drop_invariants
from src.qm_drop.domain.models import DropConfig, DropState, validate_config

T0 = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _make_config(**kwargs) -> DropConfig:
    defaults = dict(
        product_id="macbookairm4", name="MacBook Air M4",
        base_price=90000, viewing_fee=500,
        price_drop_share_bps=8000, platform_share_bps=2000,
        supplier_share_of_platform_bps=2500, qomo_share_of_platform_bps=7500,
        min_price=80000,
    )
    defaults.update(kwargs)
    return DropConfig(**defaults)


def _state(**kwargs) -> DropState:
    return replace(DropState(product_id="macbookairm4", current_price=89600), **kwargs)


class TestVerifyInvariants:
    def test_valid_state_passes(self) -> None:
        verify_drop_invariants(
            _state(active_viewer_id="a", active_view_expires_at=T0, queue=("b",)),
            _make_config(),
        )

    def test_below_floor(self) -> None:
        with pytest.raises(AssertionError, match="INV-1"):
            verify_drop_invariants(_state(current_price=79999), _make_config())

    def test_above_base(self) -> None:
        with pytest.raises(AssertionError, match="INV-2"):
            verify_drop_invariants(_state(current_price=90001), _make_config())

    def test_duplicate_queue(self) -> None:
        with pytest.raises(AssertionError, match="INV-3"):
            verify_drop_invariants(_state(queue=("b", "b")), _make_config())

    def test_holder_in_queue(self) -> None:
        state = _state(active_viewer_id="a", active_view_expires_at=T0, queue=("a",))
        with pytest.raises(AssertionError, match="INV-4"):
            verify_drop_invariants(state, _make_config())

    def test_half_set_lock(self) -> None:
        with pytest.raises(AssertionError, match="INV-5"):
            verify_drop_invariants(_state(active_viewer_id="a"), _make_config())

    def test_sold_with_queue(self) -> None:
        state = _state(is_sold=True, sold_price=89600, queue=("b",))
        with pytest.raises(AssertionError, match="INV-6"):
            verify_drop_invariants(state, _make_config())

    def test_sold_price_mismatch(self) -> None:
        state = _state(is_sold=True, sold_price=1)
        with pytest.raises(AssertionError, match="INV-6"):
            verify_drop_invariants(state, _make_config())


class TestValidateConfig:
    def test_valid(self) -> None:
        validate_config(_make_config())

    def test_empty_id(self) -> None:
        with pytest.raises(InvalidDropConfigError, match="product_id"):
            validate_config(_make_config(product_id=""))

    def test_negative_fee(self) -> None:
        with pytest.raises(InvalidDropConfigError, match="viewing_fee"):
            validate_config(_make_config(viewing_fee=-1))

    def test_floor_above_base(self) -> None:
        with pytest.raises(InvalidDropConfigError, match="min_price"):
            validate_config(_make_config(min_price=90001))

    def test_share_out_of_range(self) -> None:
        with pytest.raises(InvalidDropConfigError, match="platform_share_bps"):
            validate_config(_make_config(platform_share_bps=10001))
