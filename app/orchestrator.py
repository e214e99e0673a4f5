"""
Orchestrator for the Flex Selector service.

The orchestrator is a thin coordination layer between the HTTP API and the
selection engines:
- Validate the requested volume
- Filter the catalog to the assets available on the requested date
- Invoke exactly one engine and pass its result through
- Convert unexpected errors into 500-classified failures

The engines themselves never see dates and never raise for expected
conditions.
"""

import logging
from datetime import date
from typing import Sequence

from app.engine.interface import SelectionEngine, no_assets_failure, total_cost, total_volume
from app.models import (
    Asset,
    AssetResponse,
    FailureCode,
    SelectionFailure,
    SelectionResult,
    SelectionSuccess,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Helper Functions
# =============================================================================


def filter_available(assets: Sequence[Asset], request_date: date) -> list[Asset]:
    """Return the assets that can be activated on request_date."""
    return [a for a in assets if request_date in a.availability]


def summarize_selection(assets: Sequence[Asset]) -> str:
    """One-line summary of a selection for logs."""
    if not assets:
        return "No assets selected."
    return (
        f"{len(assets)} assets, "
        f"{total_volume(assets):,} kW, "
        f"cost {total_cost(assets):,.2f}"
    )


def to_asset_responses(assets: Sequence[Asset]) -> list[AssetResponse]:
    """Map selected assets to the API response shape."""
    return [AssetResponse.from_asset(a) for a in assets]


# =============================================================================
# Main Entry Point
# =============================================================================


def find_assets(
    request_date: date,
    volume: int,
    engine: SelectionEngine,
    catalog: Sequence[Asset],
) -> SelectionResult:
    """
    Select the cheapest assets covering `volume` on `request_date`.

    Args:
        request_date: Date on which the assets must be available
        volume: Target volume (kW)
        engine: Selection engine to invoke
        catalog: Full asset catalog (read-only)

    Returns:
        The engine's SelectionResult, or a SelectionFailure:
        - 422 "Invalid volume" if volume <= 0
        - 422 "No assets available" if nothing is available on that date
        - 500 "Error processing assets" if anything raised
    """
    if volume <= 0:
        return SelectionFailure(reason="Invalid volume", error_code=FailureCode.UNPROCESSABLE)

    try:
        available = filter_available(catalog, request_date)
        if not available:
            logger.info(f"No assets available on {request_date.isoformat()}")
            return no_assets_failure()

        logger.info(
            f"Selecting {volume} kW on {request_date.isoformat()} "
            f"from {len(available)} available assets with {type(engine).__name__}"
        )
        result = engine.select_assets(volume, available)
    except Exception:
        logger.exception(f"Selection failed for {volume} kW on {request_date.isoformat()}")
        return SelectionFailure(
            reason="Error processing assets",
            error_code=FailureCode.INTERNAL_ERROR,
        )

    if isinstance(result, SelectionSuccess):
        logger.info(f"Selected {summarize_selection(result.assets)}")
    else:
        logger.info(f"Selection failed ({result.error_code.value}): {result.reason}")
    return result
