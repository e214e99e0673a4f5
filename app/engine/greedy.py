"""
Greedy selection heuristic.

Fast (O(N log N)) but not optimal. Works in two phases:
1. Accumulation: take assets in order of cost efficiency (cost per kW) until
   the target volume is reached.
2. Refinement: walk the selection from the most expensive asset down and drop
   every asset the selection can do without.

A specific combination of less efficient assets can fit the target more
tightly than the efficiency order does, so greedy may cost strictly more
than DynamicProgrammingEngine.
"""

from typing import Sequence

from app.engine.interface import (
    check_selection_input,
    insufficient_assets_failure,
)
from app.models import Asset, SelectionResult, SelectionSuccess


def cost_efficiency(asset: Asset) -> float:
    """Activation cost per unit of volume (lower = better)."""
    return asset.activation_cost / asset.volume


def accumulate_by_efficiency(
    target_volume: int,
    assets: Sequence[Asset],
) -> tuple[list[Asset], int]:
    """
    Add assets in cost-efficiency order until target_volume is reached.

    Stops right after the asset that reaches or passes the target. If the
    candidates run out first, the returned volume is below target_volume.

    Returns:
        (selected assets, accumulated volume)
    """
    selected: list[Asset] = []
    current_volume = 0

    for asset in sorted(assets, key=cost_efficiency):
        selected.append(asset)
        current_volume += asset.volume
        if current_volume >= target_volume:
            break

    return selected, current_volume


def trim_redundant(
    selected: Sequence[Asset],
    current_volume: int,
    target_volume: int,
) -> tuple[list[Asset], int]:
    """
    Drop assets that are unnecessary once overshoot is accounted for.

    Most expensive assets are considered first; an asset is removed when the
    remaining volume would still meet target_volume.

    Returns:
        (kept assets sorted by descending cost, remaining volume)
    """
    kept: list[Asset] = []

    for asset in sorted(selected, key=lambda a: a.activation_cost, reverse=True):
        if current_volume - asset.volume >= target_volume:
            current_volume -= asset.volume
        else:
            kept.append(asset)

    return kept, current_volume


def greedy_selection(
    target_volume: int,
    assets: Sequence[Asset],
) -> tuple[list[Asset], int]:
    """Run accumulation then refinement. Returns (assets, volume)."""
    selected, current_volume = accumulate_by_efficiency(target_volume, assets)
    return trim_redundant(selected, current_volume, target_volume)


class GreedyEngine:
    """
    Heuristic selection engine.

    Unlike a bare accumulation loop, this engine checks the final volume and
    reports insufficient capacity as a failure instead of returning an
    under-target selection.
    """

    def select_assets(
        self,
        target_volume: int,
        candidates: Sequence[Asset],
    ) -> SelectionResult:
        failure = check_selection_input(target_volume, candidates)
        if failure is not None:
            return failure

        selected, achieved = greedy_selection(target_volume, candidates)
        if achieved < target_volume:
            return insufficient_assets_failure()
        return SelectionSuccess(assets=selected)
