"""
Configuration for the Flex Selector service.

All configurable parameters live here - no magic numbers in engine code.
Environment overrides are parsed by load_service_config / load_provider_config.
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field, model_validator

from app.models import EngineKind


# =============================================================================
# Engine Configuration
# =============================================================================


class EngineConfig(BaseModel):
    """
    Tuning parameters for the hybrid selection engine.

    Targets up to hybrid_threshold are solved exactly by DP. Larger targets
    are reduced by a greedy pass so that the DP table never grows beyond
    roughly dp_reduction_target entries.
    """

    hybrid_threshold: int = Field(
        default=100_000, gt=0, description="Targets above this use greedy + DP"
    )
    dp_reduction_target: int = Field(
        default=50_000, gt=0, description="Volume left for the DP refinement phase"
    )

    @model_validator(mode="after")
    def check_reduction_below_threshold(self) -> "EngineConfig":
        if self.dp_reduction_target >= self.hybrid_threshold:
            raise ValueError(
                f"dp_reduction_target ({self.dp_reduction_target}) must be below "
                f"hybrid_threshold ({self.hybrid_threshold})"
            )
        return self


DEFAULT_ENGINE_CONFIG = EngineConfig()


# =============================================================================
# Asset Provider Configuration
# =============================================================================


class ProviderConfig(BaseModel):
    """
    Parameters of the synthetic asset catalog.

    Increasing asset_count alone yields smaller assets, since volumes are
    scaled so the whole catalog approximates total_volume_target.
    """

    asset_count: int = Field(default=1500, gt=0, description="Number of generated assets")
    total_volume_target: int = Field(
        default=1_000_000, gt=0, description="Approximate total catalog volume (kW)"
    )
    seed: int = Field(default=0, description="Random seed for reproducible catalogs")
    base_price_factor: float = Field(
        default=2.0, gt=0, description="Cost per kW before +/-50% noise"
    )


DEFAULT_PROVIDER_CONFIG = ProviderConfig()


# =============================================================================
# Service Configuration
# =============================================================================


class ServiceConfig(BaseModel):
    """Wiring of the HTTP service."""

    selection_engine: EngineKind = Field(
        default=EngineKind.HYBRID, description="Engine used by POST /assets"
    )


# Environment variable -> ProviderConfig field
PROVIDER_ENV_VARS: dict[str, str] = {
    "ASSET_PROVIDER_COUNT": "asset_count",
    "ASSET_PROVIDER_TOTAL_VOLUME_TARGET": "total_volume_target",
    "ASSET_PROVIDER_SEED": "seed",
    "ASSET_PROVIDER_BASE_PRICE_FACTOR": "base_price_factor",
}


def load_service_config(environ: Optional[Mapping[str, str]] = None) -> ServiceConfig:
    """
    Build ServiceConfig from the environment.

    SELECTION_ENGINE selects the engine (dp, greedy or hybrid). Unknown
    values raise pydantic.ValidationError.
    """
    env = os.environ if environ is None else environ
    engine = env.get("SELECTION_ENGINE")
    if not engine:
        return ServiceConfig()
    return ServiceConfig(selection_engine=engine.strip().lower())


def load_provider_config(environ: Optional[Mapping[str, str]] = None) -> ProviderConfig:
    """
    Build ProviderConfig from ASSET_PROVIDER_* environment variables.

    Unset variables keep their defaults; pydantic coerces and validates
    the string values.
    """
    env = os.environ if environ is None else environ
    overrides = {
        field: env[var] for var, field in PROVIDER_ENV_VARS.items() if env.get(var)
    }
    return ProviderConfig(**overrides)
