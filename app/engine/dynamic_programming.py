"""
Exact selection by dynamic programming.

The problem is a 0/1 knapsack turned around: reach *at least* a target volume
at minimum activation cost. costs[v] holds the cheapest cost found so far to
achieve volume v, where index target_volume stands for "target_volume or
more" (overshoot is free, so every overshoot collapses into that bucket).

Each asset is used at most once. The textbook formulation scans achieved
volumes from target_volume - 1 down to 0 for every asset; the per-asset pass
here is vectorised with numpy but reads only pre-asset values and breaks ties
exactly like that descending scan (strict <, first-found solution kept).

Memory is O(target_volume) for the cost table plus the chain nodes that are
still referenced. Very large targets can exhaust memory; route those through
HybridEngine instead.
"""

from typing import Optional, Sequence

import numpy as np

from app.engine.interface import (
    check_selection_input,
    insufficient_assets_failure,
    total_volume,
)
from app.models import Asset, SelectionResult, SelectionSuccess


# A chain node is (asset just added, chain of the predecessor volume).
# Nodes are immutable, so a chain keeps describing the selection it was
# built from even after the table entry it came from is improved.
Chain = Optional[tuple[Asset, "Chain"]]


def solve_min_cost_cover(
    target_volume: int,
    assets: Sequence[Asset],
) -> Optional[list[Asset]]:
    """
    Find the cheapest subset of assets whose volume reaches target_volume.

    Args:
        target_volume: Minimum volume to reach (must be > 0)
        assets: Candidate assets, processed in the given order

    Returns:
        Selected assets (reverse selection order), or None if even all
        assets together cannot reach target_volume
    """
    # Unreachable targets fail before the table is allocated
    if total_volume(assets) < target_volume:
        return None

    costs = np.full(target_volume + 1, np.inf)
    costs[0] = 0.0
    chains: list[Chain] = [None] * (target_volume + 1)

    for asset in assets:
        volume = asset.volume
        cost = asset.activation_cost

        # Sources below split land inside the table, the rest overflow into
        # the target bucket.
        split = max(0, target_volume - volume)

        # Overflow bucket: scan sources from target_volume - 1 downwards so
        # argmin returns the first-found source on ties.
        overflow = costs[split:target_volume][::-1] + cost
        best = int(np.argmin(overflow))
        top: Optional[tuple[float, Chain]] = None
        if overflow[best] < costs[target_volume]:
            source = target_volume - 1 - best
            top = (float(overflow[best]), (asset, chains[source]))

        if split > 0:
            candidates = costs[:split] + cost
            improved = np.flatnonzero(candidates < costs[volume:target_volume])
            if improved.size:
                costs[improved + volume] = candidates[improved]
                # Descending, so chains[source] is still the pre-asset chain.
                for source in improved[::-1].tolist():
                    chains[source + volume] = (asset, chains[source])

        if top is not None:
            costs[target_volume], chains[target_volume] = top

    if np.isinf(costs[target_volume]):
        return None

    selected: list[Asset] = []
    node = chains[target_volume]
    while node is not None:
        asset, node = node
        selected.append(asset)
    return selected


class DynamicProgrammingEngine:
    """
    Optimal selection engine.

    Guarantees the minimum total activation cost among all subsets that meet
    the target. Runs in O(len(candidates) * target_volume) time.
    """

    def select_assets(
        self,
        target_volume: int,
        candidates: Sequence[Asset],
    ) -> SelectionResult:
        failure = check_selection_input(target_volume, candidates)
        if failure is not None:
            return failure

        selected = solve_min_cost_cover(target_volume, candidates)
        if selected is None:
            return insufficient_assets_failure()
        return SelectionSuccess(assets=selected)
