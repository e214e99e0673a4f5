"""
Selection Engine Interface.

This module defines the contract shared by every selection engine and the
input checks that the contract itself enforces.

Engines are pure and stateless: they never mutate assets, never perform I/O
and return failures as values. Concurrent calls need no coordination as long
as each receives its own candidate sequence.
"""

from typing import Optional, Protocol, Sequence, runtime_checkable

from app.models import Asset, FailureCode, SelectionFailure, SelectionResult


NO_ASSETS_REASON = "No assets available"
INSUFFICIENT_ASSETS_REASON = "Insufficient assets to meet target volume"


@runtime_checkable
class SelectionEngine(Protocol):
    """
    Protocol implemented by DynamicProgrammingEngine, GreedyEngine and
    HybridEngine.
    """

    def select_assets(
        self,
        target_volume: int,
        candidates: Sequence[Asset],
    ) -> SelectionResult:
        """
        Select assets whose summed volume meets or exceeds target_volume.

        Args:
            target_volume: Minimum volume (kW) the selection must reach
            candidates: Assets available for selection

        Returns:
            SelectionSuccess with the chosen assets, or SelectionFailure
            (422) if the input is invalid or capacity is insufficient
        """
        ...


# =============================================================================
# Shared Helpers
# =============================================================================


def no_assets_failure() -> SelectionFailure:
    return SelectionFailure(reason=NO_ASSETS_REASON, error_code=FailureCode.UNPROCESSABLE)


def insufficient_assets_failure() -> SelectionFailure:
    return SelectionFailure(
        reason=INSUFFICIENT_ASSETS_REASON, error_code=FailureCode.UNPROCESSABLE
    )


def check_selection_input(
    target_volume: int,
    candidates: Sequence[Asset],
) -> Optional[SelectionFailure]:
    """Return a 422 failure for a non-positive target or no candidates."""
    if target_volume <= 0 or not candidates:
        return no_assets_failure()
    return None


def total_volume(assets: Sequence[Asset]) -> int:
    return sum(a.volume for a in assets)


def total_cost(assets: Sequence[Asset]) -> float:
    return sum(a.activation_cost for a in assets)
