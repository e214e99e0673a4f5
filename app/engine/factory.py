"""
Engine construction from configuration.

Which engine backs the service is a wiring concern: the engines themselves
hold no knowledge of the configuration that selected them.
"""

from app.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from app.engine.dynamic_programming import DynamicProgrammingEngine
from app.engine.greedy import GreedyEngine
from app.engine.hybrid import HybridEngine
from app.engine.interface import SelectionEngine
from app.models import EngineKind


def create_engine(
    kind: EngineKind,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> SelectionEngine:
    """
    Build the selection engine named by kind.

    Raises:
        ValueError: If kind is not a known EngineKind
    """
    if kind == EngineKind.DP:
        return DynamicProgrammingEngine()
    if kind == EngineKind.GREEDY:
        return GreedyEngine()
    if kind == EngineKind.HYBRID:
        return HybridEngine(config)
    raise ValueError(f"Unsupported selection engine: {kind!r}")
