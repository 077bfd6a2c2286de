"""Quoter facade that runs the routing pipeline end to end.

    PathFinder -> RouteEvaluator -> SingleRouteSelector | SplitRouteOptimizer -> QuoteBuilder

Everything is computed from the caller's pool snapshot; nothing is kept
between calls except the immutable configuration.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

import structlog

from quoter.config import DEFAULT_QUOTER_CONFIG, QuoterConfig
from quoter.models.currency import Currency
from quoter.parallel import WorkerPool
from quoter.pools.base import LiquidityCheck, Pool
from quoter.routing.evaluation import RouteEvaluator, rank_routes, select_unique_top_routes
from quoter.routing.gas import GasParams
from quoter.routing.pathfinding import PathFinder, relevant_pools
from quoter.routing.quote import Quote, QuoteBuilder
from quoter.routing.selection import SingleRouteSelector
from quoter.routing.split import SplitAllocation, SplitRouteOptimizer
from quoter.routing.types import EvaluatedRoute

logger = structlog.get_logger()


class Quoter:
    """Computes swap quotes over a pool snapshot.

    Args:
        config: Engine limits and gas constants. Defaults to DEFAULT_QUOTER_CONFIG.
        liquidity_check: Predicate deciding which pools are routable.
            Defaults to each pool's own has_sufficient_liquidity().
    """

    def __init__(
        self,
        config: QuoterConfig | None = None,
        liquidity_check: LiquidityCheck | None = None,
    ) -> None:
        self.config = config or DEFAULT_QUOTER_CONFIG
        self.liquidity_check = liquidity_check
        self.selector = SingleRouteSelector()
        self.builder = QuoteBuilder()

    def quote(
        self,
        pools: Iterable[Pool],
        currency_in: Currency,
        currency_out: Currency,
        amount_in: int,
        eth_price: Decimal,
        currency_out_price: Decimal,
        base_fee: int,
        priority_fee: int = 0,
        max_hops: int | None = None,
    ) -> Quote:
        """Quote the trade through the single best route.

        Returns:
            A Quote with `route` set, or an empty Quote if nothing routes.
        """
        gas_params = self._gas_params(base_fee, priority_fee)
        with WorkerPool(self.config.max_workers) as workers:
            ranked = self._ranked_routes(
                pools, currency_in, currency_out, amount_in,
                gas_params, eth_price, currency_out_price, max_hops, workers,
            )

        best = self.selector.select(ranked)
        if best is None:
            logger.warning("no_route_found", currency_in=str(currency_in), currency_out=str(currency_out))
            return self.builder.empty(currency_in, currency_out, amount_in)

        steps = self.selector.materialize(best)
        if steps is None:
            logger.warning("route_materialization_failed", route=best.path.describe())
            return self.builder.empty(currency_in, currency_out, amount_in)

        logger.info(
            "single_route_selected",
            route=best.path.describe(),
            amount_in=amount_in,
            amount_out=best.amount_out,
            net_value_usd=str(best.net_value_usd),
        )
        return self.builder.from_single(currency_in, currency_out, best, steps)

    def quote_split(
        self,
        pools: Iterable[Pool],
        currency_in: Currency,
        currency_out: Currency,
        amount_in: int,
        eth_price: Decimal,
        currency_out_price: Decimal,
        base_fee: int,
        priority_fee: int = 0,
        max_hops: int | None = None,
        max_split_routes: int | None = None,
    ) -> Quote:
        """Quote the trade split across up to max_split_routes routes.

        The split never yields less than sending everything through the
        single candidate with the highest raw output; if it would, that
        candidate carries the whole amount instead.

        Returns:
            A Quote with `split_routes` set, or an empty Quote.
        """
        gas_params = self._gas_params(base_fee, priority_fee)
        max_routes = self.config.max_split_routes if max_split_routes is None else max_split_routes
        if max_routes < 1:
            logger.warning("invalid_max_split_routes", max_split_routes=max_routes)
            return self.builder.empty(currency_in, currency_out, amount_in)

        with WorkerPool(self.config.max_workers) as workers:
            ranked = self._ranked_routes(
                pools, currency_in, currency_out, amount_in,
                gas_params, eth_price, currency_out_price, max_hops, workers,
            )
            if not ranked:
                logger.warning("no_route_found", currency_in=str(currency_in), currency_out=str(currency_out))
                return self.builder.empty(currency_in, currency_out, amount_in)

            candidates = select_unique_top_routes(ranked, max_routes)
            optimizer = SplitRouteOptimizer(
                iterations=self.config.split_iterations,
                gas_params=gas_params,
                eth_price=Decimal(eth_price),
                workers=workers,
            )
            allocation = optimizer.optimize(candidates, amount_in)
            routes = optimizer.build_routes(candidates, allocation)

        best_single = _best_raw_output(candidates)
        split_total = sum(r.amount_out for r in routes) if routes is not None else None

        if split_total is None or split_total < best_single.amount_out:
            logger.info(
                "split_fallback_single_route",
                split_total=split_total,
                single_total=best_single.amount_out,
            )
            routes = optimizer.build_routes([best_single], SplitAllocation(allocations=(amount_in,)))
            if not routes:
                return self.builder.empty(currency_in, currency_out, amount_in)

        logger.info(
            "split_routes_selected",
            candidates=len(candidates),
            routes=len(routes),
            allocations=[r.amount_in for r in routes],
            amount_out=sum(r.amount_out for r in routes),
        )
        return self.builder.from_split(currency_in, currency_out, routes)

    def _gas_params(self, base_fee: int, priority_fee: int) -> GasParams:
        return GasParams(
            base_fee=base_fee,
            priority_fee=priority_fee,
            base_gas=self.config.base_gas,
            hop_gas=self.config.hop_gas,
        )

    def _ranked_routes(
        self,
        pools: Iterable[Pool],
        currency_in: Currency,
        currency_out: Currency,
        amount_in: int,
        gas_params: GasParams,
        eth_price: Decimal,
        currency_out_price: Decimal,
        max_hops: int | None,
        workers: WorkerPool,
    ) -> list[EvaluatedRoute]:
        """Find, evaluate and rank every path for the pair."""
        hops = self.config.max_hops if max_hops is None else max_hops
        pool_list = list(pools)
        if self.config.prefilter_relevant_pools:
            pool_list = relevant_pools(pool_list, currency_in, currency_out)

        finder = PathFinder(pool_list, self.liquidity_check)
        paths = finder.find_all_paths(currency_in, currency_out, hops)
        logger.info(
            "paths_discovered",
            currency_in=str(currency_in),
            currency_out=str(currency_out),
            pools=len(pool_list),
            paths=len(paths),
        )
        if not paths:
            return []

        evaluator = RouteEvaluator(gas_params, Decimal(eth_price), Decimal(currency_out_price), workers)
        routes = evaluator.evaluate(paths, amount_in)
        logger.info("routes_evaluated", paths=len(paths), routes=len(routes))
        return rank_routes(routes)


def _best_raw_output(candidates: list[EvaluatedRoute]) -> EvaluatedRoute:
    """Candidate with the largest full-amount output; ties keep rank order."""
    best = candidates[0]
    for route in candidates[1:]:
        if route.amount_out > best.amount_out:
            best = route
    return best


__all__ = ["Quoter"]
