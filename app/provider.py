"""
Synthetic asset catalog.

Generates a reproducible catalog of flexibility assets for the service and
for engine benchmarks:
- One third of the assets are available on `today`, the rest the day before
  or after.
- 50% of assets are small (10-100 kW), 45% medium (101-1000 kW) and 5% large
  (1001-5000 kW) before scaling.
- Volumes are scaled so the whole catalog approximates total_volume_target.
  Increasing only the count therefore yields smaller assets.
- Cost is volume * base_price_factor with +/-50% uniform noise.
"""

import logging
import random
from datetime import date, timedelta
from typing import Optional

from app.config import DEFAULT_PROVIDER_CONFIG, ProviderConfig
from app.models import Asset
from app.validation import ValidationError, validate_assets


logger = logging.getLogger(__name__)


def _raw_volume(rng: random.Random) -> int:
    roll = rng.randrange(100)
    if roll < 50:
        return rng.randint(10, 100)
    if roll < 95:
        return rng.randint(101, 1000)
    return rng.randint(1001, 5000)


def generate_assets(
    count: int,
    today: date,
    total_volume_target: int = 1_000_000,
    seed: int = 42,
    base_price_factor: float = 1.0,
) -> list[Asset]:
    """
    Generate a seeded list of synthetic assets.

    Args:
        count: Number of assets to generate
        today: Base date for availability (each asset gets today - 1, today
            or today + 1)
        total_volume_target: Approximate summed volume of the catalog (kW)
        seed: Random seed; equal arguments give equal catalogs
        base_price_factor: Cost per kW before noise

    Returns:
        List of `count` assets with codes ASSET-0 .. ASSET-{count-1}
    """
    if count <= 0:
        return []

    rng = random.Random(seed)

    raw: list[tuple[int, date]] = []
    for _ in range(count):
        volume = _raw_volume(rng)
        day = today + timedelta(days=rng.randint(-1, 1))
        raw.append((volume, day))

    factor = total_volume_target / sum(volume for volume, _ in raw)

    assets: list[Asset] = []
    for index, (volume, day) in enumerate(raw):
        scaled = volume * factor
        noise = 0.5 + rng.random()
        assets.append(
            Asset(
                code=f"ASSET-{index}",
                name=f"Generated Asset {index}",
                activation_cost=max(1.0, round(scaled * base_price_factor * noise, 2)),
                availability=[day],
                volume=max(1, round(scaled)),
            )
        )

    return assets


class AssetProvider:
    """
    Holds the asset catalog served by the API.

    The catalog is generated once, at construction, and is read-only
    afterwards.
    """

    def __init__(
        self,
        config: ProviderConfig = DEFAULT_PROVIDER_CONFIG,
        today: Optional[date] = None,
    ) -> None:
        self.config = config
        self.today = today or date.today()
        self.assets = generate_assets(
            count=config.asset_count,
            today=self.today,
            total_volume_target=config.total_volume_target,
            seed=config.seed,
            base_price_factor=config.base_price_factor,
        )

        errors = validate_assets(self.assets)
        if errors:
            raise ValidationError(errors)

        logger.info(
            f"Generated {len(self.assets)} assets around {self.today.isoformat()} "
            f"(seed={config.seed}, total={sum(a.volume for a in self.assets)} kW)"
        )
