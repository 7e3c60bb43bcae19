"""Randomized sequences checking drop invariants across many operations.

Each run drives the pure engine with a seeded mix of views, cancels,
purchases and clock jumps, then checks the rules that must hold after
every single step.
"""
import random
from datetime import UTC, datetime, timedelta

import pytest

from src.qm_common.enums import ViewStatus
from src.qm_drop.domain.invariants import verify_drop_invariants
from src.qm_drop.domain.models import DropConfig
from src.qm_drop.engine.fee import split_fee
from src.qm_drop.engine.pricing import apply_purchase, apply_view, init_drop, release_lock

T0 = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
ACTORS = [f"u{i}" for i in range(6)]


def _make_config(**kwargs) -> DropConfig:
    defaults = dict(
        product_id="ps5slim", name="PlayStation 5 Slim",
        base_price=48500, viewing_fee=500,
        price_drop_share_bps=8000, platform_share_bps=2000,
        supplier_share_of_platform_bps=2500, qomo_share_of_platform_bps=7500,
        min_price=47000,
    )
    defaults.update(kwargs)
    return DropConfig(**defaults)


@pytest.mark.parametrize("seed", range(20))
def test_random_sequences_keep_invariants(seed: int) -> None:
    rng = random.Random(seed)
    config = _make_config(viewing_fee=rng.choice([500, 333, 999, 7]))
    split = split_fee(config)
    state = init_drop(config)
    now = T0
    granted = 0

    for _ in range(300):
        now += timedelta(seconds=rng.choice([0, 1, 5, 31]))
        actor = rng.choice(ACTORS)
        op = rng.random()
        before = state
        if op < 0.75:
            result = apply_view(state, config, actor, now=now)
            state = result.state
            if result.status is ViewStatus.LOCKED and result.fee_charged:
                granted += 1
                # grants follow queue order: nobody behind the winner was skipped
                if actor in before.queue:
                    assert before.queue[0] == actor
            elif before.lock_is_active(now) and before.active_viewer_id == actor:
                assert result.fee_charged == 0
                assert state.current_price == before.current_price
        elif op < 0.95:
            state = release_lock(state, actor)
            if before.active_viewer_id != actor:
                assert state is before
        else:
            state = apply_purchase(state, config, actor, now=now).state

        verify_drop_invariants(state, config)
        assert state.current_price >= config.min_price
        # at most one active lock holder, never also queued
        if state.lock_is_active(now):
            assert state.active_viewer_id not in state.queue
        # per-view shares accumulate without loss
        assert state.total_views == granted
        assert state.total_platform_revenue == granted * split.platform_revenue
        assert state.total_supplier_platform_revenue == granted * split.supplier_share
        assert state.total_qomo_revenue == granted * split.qomo_share
        if before.is_sold:
            assert state == before


def test_price_never_below_floor_after_many_views() -> None:
    config = _make_config()
    state = init_drop(config)
    now = T0
    for i in range(1000):
        now += timedelta(seconds=31)
        state = apply_view(state, config, f"v{i}", now=now).state
        assert state.current_price >= config.min_price
    assert state.current_price == config.min_price
    assert state.total_views == 1000
    assert state.total_platform_revenue == 1000 * 100


def test_settlement_conserves_fee_shares() -> None:
    config = _make_config(viewing_fee=333)
    split = split_fee(config)
    state = init_drop(config)
    now = T0
    for i in range(17):
        now += timedelta(seconds=31)
        state = apply_view(state, config, f"v{i}", now=now).state

    result = apply_purchase(state, config, "v16", now=now)

    assert result.total_supplier_revenue == result.sold_price + 17 * split.supplier_share
    assert result.total_qomo_revenue == 17 * split.qomo_share
    assert (
        result.total_supplier_revenue + result.total_qomo_revenue
        == result.sold_price
        + state.total_supplier_platform_revenue
        + state.total_qomo_revenue
    )
