"""Route discovery, evaluation and split optimization.

Module structure:
- types.py: Path, EvaluatedRoute, RouteStep and SplitRoute dataclasses
- pathfinding.py: CurrencyGraph and PathFinder for path discovery
- gas.py: GasParams and gas cost estimation
- evaluation.py: RouteEvaluator, path simulation and ranking
- selection.py: SingleRouteSelector
- split.py: SplitRouteOptimizer (greedy chunk allocation)
- quote.py: Quote and QuoteBuilder
"""

from quoter.routing.evaluation import RouteEvaluator, evaluate, rank_routes, simulate_path
from quoter.routing.gas import GasParams
from quoter.routing.pathfinding import CurrencyGraph, PathFinder, find_all_paths
from quoter.routing.quote import Quote, QuoteBuilder
from quoter.routing.selection import SingleRouteSelector
from quoter.routing.split import SplitAllocation, SplitRouteOptimizer
from quoter.routing.types import EvaluatedRoute, Path, RouteStep, SplitRoute

__all__ = [
    "CurrencyGraph",
    "EvaluatedRoute",
    "GasParams",
    "Path",
    "PathFinder",
    "Quote",
    "QuoteBuilder",
    "RouteEvaluator",
    "RouteStep",
    "SingleRouteSelector",
    "SplitAllocation",
    "SplitRoute",
    "SplitRouteOptimizer",
    "evaluate",
    "find_all_paths",
    "rank_routes",
    "simulate_path",
]
