"""
Pydantic models for the Flex Selector service.

This module contains the data models shared by the selection engines, the
orchestrator and the HTTP layer. Models handle validation and serialization
only - no business logic.
"""

import datetime
from datetime import date
from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Enums
# =============================================================================


class EngineKind(str, Enum):
    """Selection engine backing the service."""

    DP = "dp"
    GREEDY = "greedy"
    HYBRID = "hybrid"


class FailureCode(int, Enum):
    """Classification of a failed selection, mapped to a transport status."""

    UNPROCESSABLE = 422  # Invalid volume, no candidates, insufficient capacity
    INTERNAL_ERROR = 500  # Unexpected failure during computation


# =============================================================================
# Core Models
# =============================================================================


class Asset(BaseModel):
    """
    A single flexibility asset that can be activated to deliver volume.

    Cost is all-or-nothing: activating the asset costs activation_cost no
    matter how much of its volume is actually needed.
    """

    model_config = ConfigDict(frozen=True)

    code: str = Field(..., description="Unique stable identifier")
    name: str = Field(..., description="Human-readable name")
    activation_cost: float = Field(..., ge=0, description="Cost incurred if selected")
    availability: list[date] = Field(
        default_factory=list, description="Dates on which the asset can be activated"
    )
    volume: int = Field(..., gt=0, description="Capacity contributed if selected (kW)")


class SelectionSuccess(BaseModel):
    """Assets chosen by an engine. No ordering guarantee."""

    kind: Literal["success"] = "success"
    assets: list[Asset] = Field(default_factory=list)


class SelectionFailure(BaseModel):
    """Terminal failure of a selection attempt."""

    kind: Literal["failure"] = "failure"
    reason: str = Field(..., description="Human-readable reason")
    error_code: FailureCode = Field(..., description="422 (validation) or 500 (internal)")


SelectionResult = Union[SelectionSuccess, SelectionFailure]


# =============================================================================
# API Models
# =============================================================================


class AssetRequest(BaseModel):
    """Request body for POST /assets."""

    date: datetime.date = Field(..., description="Activation date")
    volume: int = Field(..., description="Target volume to cover (kW)")


class AssetResponse(BaseModel):
    """One selected asset in the POST /assets response."""

    code: str
    name: str
    price: float = Field(..., description="Activation cost")
    availability: list[date]
    volume: int

    @classmethod
    def from_asset(cls, asset: Asset) -> "AssetResponse":
        return cls(
            code=asset.code,
            name=asset.name,
            price=asset.activation_cost,
            availability=list(asset.availability),
            volume=asset.volume,
        )


class ErrorResponse(BaseModel):
    """Error response body for failed selections."""

    error: str = Field(..., description="Failure reason")
    code: int = Field(..., description="Failure classification (HTTP status)")
