"""
Cross-engine property tests.

Checks the guarantees shared by or relating the three engines on small
exhaustive instances and on synthetic catalogs:
- Invalid input and insufficient capacity fail with 422 on every engine
- DP is optimal (verified against exhaustive search)
- Every success meets the target
- Hybrid never costs more than greedy
- Hybrid equals DP below the threshold
- Identical inputs give identical outputs
"""

import random
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from itertools import combinations

import pytest

from app.engine import (
    DynamicProgrammingEngine,
    GreedyEngine,
    HybridEngine,
    total_cost,
    total_volume,
)
from app.models import Asset, FailureCode, SelectionFailure, SelectionSuccess
from app.provider import generate_assets


NOEL = date(2025, 12, 25)

ENGINES = [
    pytest.param(DynamicProgrammingEngine(), id="dp"),
    pytest.param(GreedyEngine(), id="greedy"),
    pytest.param(HybridEngine(), id="hybrid"),
]


# =============================================================================
# Helpers
# =============================================================================


def make_asset(code: str, activation_cost: float, volume: int) -> Asset:
    """Create an Asset for testing."""
    return Asset(code=code, name=code, activation_cost=activation_cost, volume=volume)


def random_instance(seed: int) -> tuple[int, list[Asset]]:
    """Small random instance suitable for exhaustive search."""
    rng = random.Random(seed)
    assets = [
        make_asset(f"R{i}", round(rng.uniform(0, 50), 2), rng.randint(1, 30))
        for i in range(rng.randint(1, 9))
    ]
    return rng.randint(1, 120), assets


def brute_force_min_cost(target_volume: int, assets: list[Asset]):
    """Cheapest cost over all subsets reaching target_volume (None if none)."""
    best = None
    for size in range(1, len(assets) + 1):
        for subset in combinations(assets, size):
            if total_volume(subset) >= target_volume:
                cost = total_cost(subset)
                if best is None or cost < best:
                    best = cost
    return best


# =============================================================================
# Shared Contract
# =============================================================================


class TestSharedContract:
    """Every engine enforces the same input contract."""

    @pytest.mark.parametrize("engine", ENGINES)
    def test_empty_candidates(self, engine):
        result = engine.select_assets(8, [])

        assert isinstance(result, SelectionFailure)
        assert result.error_code == FailureCode.UNPROCESSABLE

    @pytest.mark.parametrize("engine", ENGINES)
    @pytest.mark.parametrize("target_volume", [0, -1])
    def test_non_positive_target(self, engine, target_volume):
        result = engine.select_assets(target_volume, [make_asset("A", 1.0, 10)])

        assert isinstance(result, SelectionFailure)
        assert result.error_code == FailureCode.UNPROCESSABLE

    @pytest.mark.parametrize("engine", ENGINES)
    @pytest.mark.parametrize("seed", range(10))
    def test_insufficient_capacity(self, engine, seed):
        _, assets = random_instance(seed)
        target_volume = total_volume(assets) + 1

        result = engine.select_assets(target_volume, assets)

        assert isinstance(result, SelectionFailure)
        assert result.error_code == FailureCode.UNPROCESSABLE

    @pytest.mark.parametrize("engine", ENGINES)
    @pytest.mark.parametrize("seed", range(5))
    def test_insufficient_capacity_above_threshold(self, engine, seed):
        assets = generate_assets(20, NOEL, total_volume_target=200_000, seed=seed)
        target_volume = total_volume(assets) + 1

        result = engine.select_assets(target_volume, assets)

        assert target_volume > 100_000
        assert isinstance(result, SelectionFailure)
        assert result.error_code == FailureCode.UNPROCESSABLE
        assert result.reason == "Insufficient assets to meet target volume"

    @pytest.mark.parametrize("engine", ENGINES)
    def test_cheap_beats_expensive(self, engine):
        assets = [make_asset("EXPENSIVE", 1000.0, 100), make_asset("CHEAP", 100.0, 100)]

        result = engine.select_assets(100, assets)

        assert isinstance(result, SelectionSuccess)
        assert [a.code for a in result.assets] == ["CHEAP"]

    @pytest.mark.parametrize("engine", ENGINES)
    def test_two_assets_needed(self, engine):
        assets = [make_asset("A", 10.0, 100), make_asset("B", 10.0, 100)]

        result = engine.select_assets(150, assets)

        assert isinstance(result, SelectionSuccess)
        assert sorted(a.code for a in result.assets) == ["A", "B"]


# =============================================================================
# Optimality and Sufficiency
# =============================================================================


class TestOptimality:
    """DP matches exhaustive search; heuristics are never cheaper than DP."""

    @pytest.mark.parametrize("seed", range(40))
    def test_dp_matches_exhaustive_search(self, seed):
        target_volume, assets = random_instance(seed)
        best = brute_force_min_cost(target_volume, assets)

        result = DynamicProgrammingEngine().select_assets(target_volume, assets)

        if best is None:
            assert isinstance(result, SelectionFailure)
        else:
            assert isinstance(result, SelectionSuccess)
            assert total_cost(result.assets) == pytest.approx(best, abs=1e-9)

    @pytest.mark.parametrize("engine", ENGINES)
    @pytest.mark.parametrize("seed", range(40))
    def test_success_meets_target(self, engine, seed):
        target_volume, assets = random_instance(seed)

        result = engine.select_assets(target_volume, assets)

        if isinstance(result, SelectionSuccess):
            assert total_volume(result.assets) >= target_volume
            assert len({a.code for a in result.assets}) == len(result.assets)

    @pytest.mark.parametrize("seed", range(40))
    def test_greedy_never_cheaper_than_dp(self, seed):
        target_volume, assets = random_instance(seed)

        dp = DynamicProgrammingEngine().select_assets(target_volume, assets)
        greedy = GreedyEngine().select_assets(target_volume, assets)

        assert type(dp) is type(greedy)
        if isinstance(dp, SelectionSuccess):
            assert total_cost(dp.assets) <= total_cost(greedy.assets) + 1e-9


# =============================================================================
# Hybrid Properties
# =============================================================================


class TestHybridProperties:
    """Hybrid is bounded by greedy and equals DP below the threshold."""

    @pytest.mark.parametrize("seed", range(20))
    def test_hybrid_not_worse_than_greedy(self, seed):
        assets = generate_assets(20, NOEL, total_volume_target=200_000, seed=seed)
        target_volume = 150_000

        greedy = GreedyEngine().select_assets(target_volume, assets)
        hybrid = HybridEngine().select_assets(target_volume, assets)

        assert isinstance(greedy, SelectionSuccess)
        assert isinstance(hybrid, SelectionSuccess)
        assert total_volume(hybrid.assets) >= target_volume
        assert total_cost(hybrid.assets) <= total_cost(greedy.assets)

    @pytest.mark.parametrize("seed", range(20))
    def test_hybrid_matches_dp_below_threshold(self, seed):
        assets = generate_assets(15, NOEL, total_volume_target=50_000, seed=seed)
        target_volume = 10_000

        dp = DynamicProgrammingEngine().select_assets(target_volume, assets)
        hybrid = HybridEngine().select_assets(target_volume, assets)

        assert isinstance(dp, SelectionSuccess)
        assert isinstance(hybrid, SelectionSuccess)
        assert total_cost(hybrid.assets) == total_cost(dp.assets)


# =============================================================================
# Determinism
# =============================================================================


class TestDeterminism:
    """Same inputs, same outputs."""

    @pytest.mark.parametrize("engine", ENGINES)
    def test_repeated_calls_identical(self, engine):
        assets = generate_assets(40, NOEL, total_volume_target=20_000, seed=3)

        first = engine.select_assets(7_500, assets)
        second = engine.select_assets(7_500, assets)

        assert isinstance(first, SelectionSuccess)
        assert [a.code for a in first.assets] == [a.code for a in second.assets]

    @pytest.mark.parametrize("engine", ENGINES)
    def test_concurrent_calls_share_engine_and_catalog(self, engine):
        assets = generate_assets(40, NOEL, total_volume_target=20_000, seed=4)
        snapshot = list(assets)
        expected = engine.select_assets(5_000, assets)

        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda _: engine.select_assets(5_000, assets), range(8)))

        assert all(result == expected for result in results)
        assert assets == snapshot
