"""
Catalog validation for the Flex Selector service.

Pydantic already enforces per-field bounds (volume > 0, activation_cost >= 0).
The functions here add the semantic checks the engines rely on but do not
perform themselves, such as unique asset codes. All functions are pure and
return lists of error messages.
"""

from typing import Sequence

from app.models import Asset


class ValidationError(Exception):
    """
    Raised when catalog validation fails.

    Attributes:
        errors: List of validation error messages
    """

    def __init__(self, errors: list[str]):
        self.errors = errors
        message = "; ".join(errors) if errors else "Validation failed"
        super().__init__(message)


def validate_asset(asset: Asset) -> list[str]:
    """Validate a single asset. Returns list of errors."""
    errors: list[str] = []

    if not asset.code or not asset.code.strip():
        errors.append("Asset has empty code")

    if not asset.name or not asset.name.strip():
        errors.append(f"Asset {asset.code}: name must not be empty")

    return errors


def validate_assets(assets: Sequence[Asset]) -> list[str]:
    """
    Validate an asset catalog. Returns list of errors.

    An empty catalog is valid: the orchestrator reports it as a selection
    failure instead.

    Checks:
    - Asset codes are unique (the hybrid engine removes assets by code)
    - Each individual asset is valid
    """
    errors: list[str] = []

    seen: set[str] = set()
    duplicates: set[str] = set()
    for asset in assets:
        if asset.code in seen:
            duplicates.add(asset.code)
        seen.add(asset.code)
    if duplicates:
        errors.append(f"Asset codes must be unique; duplicates: {sorted(duplicates)}")

    for asset in assets:
        errors.extend(validate_asset(asset))

    return errors
