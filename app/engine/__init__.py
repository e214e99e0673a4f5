"""
Engine module for the Flex Selector service.

Contains the interchangeable selection engines (DP, greedy, hybrid) behind
one select_assets contract. All engines are pure and deterministic.
"""

from app.engine.dynamic_programming import DynamicProgrammingEngine, solve_min_cost_cover
from app.engine.factory import create_engine
from app.engine.greedy import (
    GreedyEngine,
    accumulate_by_efficiency,
    greedy_selection,
    trim_redundant,
)
from app.engine.hybrid import HybridEngine
from app.engine.interface import SelectionEngine, total_cost, total_volume

__all__ = [
    # Contract
    "SelectionEngine",
    "create_engine",
    "total_cost",
    "total_volume",
    # Exact
    "DynamicProgrammingEngine",
    "solve_min_cost_cover",
    # Heuristic
    "GreedyEngine",
    "accumulate_by_efficiency",
    "greedy_selection",
    "trim_redundant",
    # Hybrid
    "HybridEngine",
]
