"""
Hybrid selection engine.

DP cost grows with the target volume, greedy cost with the number of
candidates. The hybrid engine keeps DP exact for small targets and, for large
ones, lets greedy cover most of the volume so that DP only has to solve the
last dp_reduction_target kW:

1. target <= hybrid_threshold: pure DP.
2. Greedy (accumulate + trim) for target - dp_reduction_target.
3. If the greedy selection already covers the full target, return it.
4. DP over the unused assets for the remaining gap.
5. Trim the combined selection against the full target.
6. Return whichever is cheaper: that result or a pure greedy run.

Step 6 bounds the hybrid cost by the plain greedy cost.
"""

import logging
from typing import Sequence

from app.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from app.engine.dynamic_programming import solve_min_cost_cover
from app.engine.greedy import greedy_selection, trim_redundant
from app.engine.interface import (
    check_selection_input,
    insufficient_assets_failure,
    total_cost,
    total_volume,
)
from app.models import Asset, SelectionResult, SelectionSuccess


logger = logging.getLogger(__name__)


class HybridEngine:
    """
    Volume-threshold dispatcher between DP and greedy.

    Exact (identical to DynamicProgrammingEngine) for targets up to
    config.hybrid_threshold; bounded-memory and at least as cheap as
    GreedyEngine above it.
    """

    def __init__(self, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> None:
        self.config = config

    def select_assets(
        self,
        target_volume: int,
        candidates: Sequence[Asset],
    ) -> SelectionResult:
        failure = check_selection_input(target_volume, candidates)
        if failure is not None:
            return failure

        if total_volume(candidates) < target_volume:
            return insufficient_assets_failure()

        if target_volume <= self.config.hybrid_threshold:
            return self._select_dp(target_volume, candidates)

        # Greedy phase: cover everything but the last dp_reduction_target kW
        greedy_target = target_volume - self.config.dp_reduction_target
        greedy_assets, greedy_volume = greedy_selection(greedy_target, candidates)
        dp_target = target_volume - greedy_volume

        logger.debug(f"Hybrid: greedy covered {greedy_volume} kW, DP gap {dp_target} kW")
        if dp_target <= 0:
            logger.debug("Hybrid: greedy selection met target volume, skipping DP")
            return SelectionSuccess(assets=greedy_assets)

        # DP phase on the assets greedy left unused
        used_codes = {a.code for a in greedy_assets}
        remaining = [a for a in candidates if a.code not in used_codes]
        dp_result = self._select_dp(dp_target, remaining)
        if not isinstance(dp_result, SelectionSuccess):
            return dp_result

        combined = greedy_assets + dp_result.assets
        refined, _ = trim_redundant(combined, total_volume(combined), target_volume)

        # Safety net: never worse than plain greedy
        pure_greedy, _ = greedy_selection(target_volume, candidates)
        if total_cost(pure_greedy) < total_cost(refined):
            logger.debug("Hybrid: pure greedy is cheaper than greedy + DP")
            return SelectionSuccess(assets=pure_greedy)
        return SelectionSuccess(assets=refined)

    def _select_dp(
        self,
        target_volume: int,
        candidates: Sequence[Asset],
    ) -> SelectionResult:
        selected = solve_min_cost_cover(target_volume, candidates)
        if selected is None:
            return insufficient_assets_failure()
        return SelectionSuccess(assets=selected)
