"""
FastAPI Application for the Flex Selector service.

This module provides the HTTP API layer. It is a thin layer that delegates
all selection logic to the orchestrator.

Endpoints:
    GET /health - Service health check
    POST /assets - Select the cheapest assets covering a volume on a date
"""

import logging
from functools import lru_cache
from pathlib import Path

# Load .env file if it exists
from dotenv import load_dotenv

env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from app.config import DEFAULT_ENGINE_CONFIG, load_provider_config, load_service_config
from app.engine.factory import create_engine
from app.engine.interface import SelectionEngine
from app.models import (
    Asset,
    AssetRequest,
    AssetResponse,
    ErrorResponse,
    FailureCode,
    SelectionSuccess,
)
from app.orchestrator import find_assets, to_asset_responses
from app.provider import AssetProvider


logger = logging.getLogger(__name__)


def get_selection_engine() -> SelectionEngine:
    """
    Get the selection engine based on environment configuration.

    SELECTION_ENGINE picks dp, greedy or hybrid (default).
    """
    service_config = load_service_config()
    logger.info(f"Using {service_config.selection_engine.value} selection engine")
    return create_engine(service_config.selection_engine, DEFAULT_ENGINE_CONFIG)


@lru_cache(maxsize=1)
def get_asset_catalog() -> list[Asset]:
    """
    Get the asset catalog, generated once per process.

    ASSET_PROVIDER_* variables control the synthetic catalog.
    """
    return AssetProvider(load_provider_config()).assets


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title="Flex Selector API",
    version="1.0.0",
    description="Least-cost selection of flexibility assets for demand response",
)


# =============================================================================
# Endpoints
# =============================================================================


@app.get(
    "/health",
    summary="Health check",
    description="Returns service health status",
    tags=["System"],
)
def health_check() -> dict:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "Flex Selector API",
        "version": "1.0.0",
    }


@app.post(
    "/assets",
    response_model=list[AssetResponse],
    responses={
        422: {"model": ErrorResponse, "description": "Invalid volume or insufficient assets"},
        500: {"model": ErrorResponse, "description": "Internal error"},
    },
    tags=["Selection"],
)
def select_assets(request: AssetRequest):
    """
    Select the cheapest assets covering the requested volume.

    Status Codes:
        200: Success, list of selected assets (no ordering guarantee)
        422: Invalid volume, no assets available, or insufficient assets
             (also returned by FastAPI for malformed bodies)
        500: Internal error
    """
    try:
        engine = get_selection_engine()
        catalog = get_asset_catalog()
    except Exception as e:
        logger.exception("Failed to set up asset selection")
        error_response = ErrorResponse(
            error=f"Error processing assets: {e}",
            code=FailureCode.INTERNAL_ERROR.value,
        )
        return JSONResponse(
            status_code=FailureCode.INTERNAL_ERROR.value,
            content=error_response.model_dump(),
        )

    result = find_assets(request.date, request.volume, engine, catalog)

    if isinstance(result, SelectionSuccess):
        return to_asset_responses(result.assets)

    error_response = ErrorResponse(error=result.reason, code=result.error_code.value)
    return JSONResponse(
        status_code=result.error_code.value,
        content=error_response.model_dump(),
    )
