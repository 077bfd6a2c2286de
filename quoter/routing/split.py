"""Greedy split routing across several candidate routes.

The total input is cut into N equal chunks. Each iteration scans every
candidate for the extra output one more chunk would buy on top of what it
already holds, and gives the chunk to the best one. Swap curves of AMMs are
concave, so feeding the currently steepest route is a sound approximation
of the optimal allocation at chunk granularity.

Each iteration is a parallel scan into a fresh gains list, then a
single-threaded arg-max and exactly one update of the allocation vector.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

import structlog

from quoter.constants import SPLIT_ROUTING_ITERATIONS
from quoter.parallel import INLINE, WorkerPool
from quoter.routing.evaluation import simulate_path, simulate_steps
from quoter.routing.gas import GasParams, estimate_gas_cost_usd
from quoter.routing.types import EvaluatedRoute, Path, SplitRoute

logger = structlog.get_logger()


@dataclass(frozen=True)
class SplitAllocation:
    """Outcome of the allocation loop.

    Attributes:
        allocations: Input assigned to each candidate, in candidate order
        chunk_size: Size of one chunk (0 when the amount was below N)
        chunks_committed: How many chunks the loop handed out
        remainder: Amount added on top of the chunks to the default route
        default_index: Candidate that received the remainder
    """

    allocations: tuple[int, ...]
    chunk_size: int = 0
    chunks_committed: int = 0
    remainder: int = 0
    default_index: int | None = None

    @property
    def total(self) -> int:
        return sum(self.allocations)

    @property
    def used_indices(self) -> list[int]:
        return [i for i, amount in enumerate(self.allocations) if amount > 0]


def marginal_gain(path: Path, current: int, chunk: int) -> int | None:
    """Extra output from adding one chunk to a route holding `current`.

    Returns:
        The (non-negative) gain, or None if the route cannot take the chunk
    """
    before = simulate_path(path, current)
    after = simulate_path(path, current + chunk)
    if before is None or after is None:
        return None
    return max(after - before, 0)


def _best_index(gains: Sequence[int | None]) -> int | None:
    """Index of the largest gain; ties go to the lowest index."""
    best: int | None = None
    for i, gain in enumerate(gains):
        if gain is None:
            continue
        if best is None or gain > gains[best]:  # type: ignore[operator]
            best = i
    return best


class SplitRouteOptimizer:
    """Distributes an input amount across candidate routes.

    Args:
        iterations: Number of chunks N
        gas_params: Gas pricing, for the per-route cost of the result
        eth_price: Native asset USD price, for the per-route cost
        workers: Pool for the per-iteration marginal gain scan
    """

    def __init__(
        self,
        iterations: int = SPLIT_ROUTING_ITERATIONS,
        gas_params: GasParams | None = None,
        eth_price: Decimal = Decimal(0),
        workers: WorkerPool = INLINE,
    ) -> None:
        if iterations <= 0:
            raise ValueError(f"iterations must be positive, got {iterations}")
        self.iterations = iterations
        self.gas_params = gas_params or GasParams(base_fee=0)
        self.eth_price = Decimal(eth_price)
        self.workers = workers

    def optimize(self, candidates: Sequence[EvaluatedRoute], amount_in: int) -> SplitAllocation:
        """Allocate amount_in across the candidates.

        The allocations always sum to amount_in exactly (when there is at
        least one candidate).
        """
        count = len(candidates)
        if count == 0:
            return SplitAllocation(allocations=())
        if amount_in <= 0:
            return SplitAllocation(allocations=(0,) * count)

        chunk = amount_in // self.iterations
        allocations = [0] * count

        if chunk == 0:
            allocations[0] = amount_in
            return SplitAllocation(
                allocations=tuple(allocations),
                remainder=amount_in,
                default_index=0,
            )

        committed = 0
        for _ in range(self.iterations):
            current = tuple(allocations)
            gains = self.workers.map(
                lambda i: marginal_gain(candidates[i].path, current[i], chunk),
                range(count),
            )
            best = _best_index(gains)
            if best is None:
                logger.debug("split_no_eligible_route", committed=committed)
                break
            allocations[best] += chunk
            committed += 1

        # Integer division dust (and anything the loop could not place) goes
        # to the route holding the most
        remainder = amount_in - chunk * committed
        default_index = max(range(count), key=lambda i: (allocations[i], -i))
        allocations[default_index] += remainder

        return SplitAllocation(
            allocations=tuple(allocations),
            chunk_size=chunk,
            chunks_committed=committed,
            remainder=remainder,
            default_index=default_index,
        )

    def build_routes(
        self,
        candidates: Sequence[EvaluatedRoute],
        allocation: SplitAllocation,
    ) -> list[SplitRoute] | None:
        """Re-simulate every funded candidate at its final allocation.

        Candidates with no allocation are dropped.

        Returns:
            The split routes in candidate order, or None if any funded route
            fails to simulate at its allocation.
        """
        routes: list[SplitRoute] = []
        for i in allocation.used_indices:
            path = candidates[i].path
            amount_in = allocation.allocations[i]
            steps = simulate_steps(path, amount_in)
            if not steps:
                logger.warning(
                    "split_route_simulation_failed",
                    route=path.describe(),
                    amount_in=amount_in,
                )
                return None
            gas_cost_usd, gas_used = estimate_gas_cost_usd(path.hops, self.gas_params, self.eth_price)
            routes.append(
                SplitRoute(
                    path=path,
                    amount_in=amount_in,
                    amount_out=steps[-1].amount_out,
                    steps=steps,
                    gas_used=gas_used,
                    gas_cost_usd=gas_cost_usd,
                )
            )
        return routes


__all__ = ["SplitAllocation", "SplitRouteOptimizer", "marginal_gain"]
