"""Path simulation and route ranking.

Every path is simulated end to end against the snapshot; paths where any
hop fails, or where a hop swallows a non-zero input, are dropped without
surfacing an error. Survivors are priced in USD net of gas so they can be
ranked.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal, localcontext

import structlog

from quoter.parallel import INLINE, WorkerPool
from quoter.pools.base import PoolSimulationError, pool_currency
from quoter.routing.gas import GasParams, estimate_gas_cost_usd
from quoter.routing.types import EvaluatedRoute, Path, RouteStep

logger = structlog.get_logger()

# Decimal digits for USD values; a uint256 has 78
VALUE_PRECISION = 100


def simulate_steps(path: Path, amount_in: int) -> tuple[RouteStep, ...] | None:
    """Simulate a path hop by hop and record every step.

    A zero input yields zero-amount steps without calling the pools.

    Returns:
        The ordered steps, or None if a hop failed or returned zero output
        for a non-zero input.
    """
    if amount_in < 0:
        return None

    steps: list[RouteStep] = []
    current = amount_in

    for i, pool in enumerate(path.pools):
        step_in = path.currencies[i]
        step_out = path.currencies[i + 1]

        if current == 0:
            amount_out = 0
        else:
            pool_in = pool_currency(pool, step_in)
            if pool_in is None or pool_currency(pool, step_out) is None:
                return None
            try:
                amount_out = pool.simulate_swap(pool_in, current)
            except (PoolSimulationError, ArithmeticError, ValueError) as e:
                logger.debug(
                    "hop_simulation_failed",
                    pool=pool.address[-8:],
                    hop=i,
                    amount_in=current,
                    error=str(e),
                )
                return None
            if amount_out <= 0:
                return None

        steps.append(
            RouteStep(
                pool=pool,
                currency_in=step_in,
                currency_out=step_out,
                amount_in=current,
                amount_out=amount_out,
            )
        )
        current = amount_out

    return tuple(steps)


def simulate_path(path: Path, amount_in: int) -> int | None:
    """Output of a path for amount_in, or None if the simulation failed."""
    steps = simulate_steps(path, amount_in)
    if steps is None:
        return None
    return steps[-1].amount_out if steps else 0


class RouteEvaluator:
    """Simulates and prices candidate paths for one quote request.

    Args:
        gas_params: Gas pricing for the request
        eth_price: USD price of the native asset (for gas)
        currency_out_price: USD price of the output currency (for ranking)
        workers: Pool used to evaluate paths concurrently
    """

    def __init__(
        self,
        gas_params: GasParams,
        eth_price: Decimal,
        currency_out_price: Decimal,
        workers: WorkerPool = INLINE,
    ) -> None:
        self.gas_params = gas_params
        self.eth_price = Decimal(eth_price)
        self.currency_out_price = Decimal(currency_out_price)
        self.workers = workers

    def evaluate(self, paths: Sequence[Path], amount_in: int) -> list[EvaluatedRoute]:
        """Simulate every path at amount_in.

        Paths that fail are absent from the result. The remaining routes
        keep discovery order (their `index` is the position in `paths`).
        """
        indexed = list(enumerate(paths))
        results = self.workers.map(lambda item: self._evaluate_one(item[0], item[1], amount_in), indexed)
        routes = [route for route in results if route is not None]

        if len(routes) < len(paths):
            logger.debug("paths_discarded", evaluated=len(paths), discarded=len(paths) - len(routes))
        return routes

    def _evaluate_one(self, index: int, path: Path, amount_in: int) -> EvaluatedRoute | None:
        if amount_in <= 0 or not path.pools:
            return None

        amount_out = simulate_path(path, amount_in)
        if not amount_out:
            return None

        with localcontext() as ctx:
            ctx.prec = VALUE_PRECISION
            gas_cost_usd, gas_used = estimate_gas_cost_usd(path.hops, self.gas_params, self.eth_price)
            out_value_usd = path.currency_out.format_amount(amount_out) * self.currency_out_price
            net_value_usd = out_value_usd - gas_cost_usd

        return EvaluatedRoute(
            path=path,
            amount_in=amount_in,
            amount_out=amount_out,
            gas_used=gas_used,
            gas_cost_usd=gas_cost_usd,
            net_value_usd=net_value_usd,
            index=index,
        )


def evaluate(
    paths: Sequence[Path],
    amount_in: int,
    gas_params: GasParams,
    eth_price: Decimal,
    currency_out_price: Decimal,
    workers: WorkerPool = INLINE,
) -> list[EvaluatedRoute]:
    """Evaluate paths without keeping a RouteEvaluator around."""
    evaluator = RouteEvaluator(gas_params, eth_price, currency_out_price, workers)
    return evaluator.evaluate(paths, amount_in)


def rank_routes(routes: Sequence[EvaluatedRoute]) -> list[EvaluatedRoute]:
    """Order routes by net USD value, best first; ties keep discovery order."""
    return sorted(routes, key=lambda route: (-route.net_value_usd, route.index))


def select_unique_top_routes(routes: Sequence[EvaluatedRoute], max_routes: int) -> list[EvaluatedRoute]:
    """Take the best `max_routes` routes with distinct pool sequences.

    Args:
        routes: Ranked routes (best first)
        max_routes: Maximum number of routes to keep
    """
    selected: list[EvaluatedRoute] = []
    seen: set[tuple[str, ...]] = set()
    for route in routes:
        if len(selected) >= max_routes:
            break
        key = route.path.pool_key
        if key in seen:
            continue
        seen.add(key)
        selected.append(route)
    return selected


__all__ = [
    "RouteEvaluator",
    "evaluate",
    "rank_routes",
    "select_unique_top_routes",
    "simulate_path",
    "simulate_steps",
]
