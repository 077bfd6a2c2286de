"""Currency graph and path discovery for multi-hop routing.

Pools are edges between canonical currencies (native assets folded into
their wrapped form). PathFinder enumerates every acyclic pool sequence
between two currencies up to a hop limit, in breadth-first order.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

import structlog

from quoter.models.currency import Currency, canonical
from quoter.pools.base import LiquidityCheck, Pool, default_liquidity_check
from quoter.routing.types import Path

logger = structlog.get_logger()


class CurrencyGraph:
    """Adjacency list of canonical currencies connected by pools.

    Neighbor lists keep pool insertion order so traversal order, and with it
    every tie-break downstream, is reproducible.
    """

    def __init__(self) -> None:
        self._adjacency: dict[Currency, list[tuple[Currency, Pool]]] = {}
        self._pool_addresses: set[str] = set()

    @classmethod
    def from_pools(
        cls,
        pools: Iterable[Pool],
        liquidity_check: LiquidityCheck | None = None,
    ) -> CurrencyGraph:
        """Build a graph from the pools the liquidity check accepts.

        Args:
            pools: Pools of the snapshot
            liquidity_check: Predicate deciding if a pool is routable.
                Defaults to asking the pool itself.
        """
        check = liquidity_check or default_liquidity_check
        graph = cls()
        for pool in pools:
            if not check(pool):
                logger.debug("pool_skipped_low_liquidity", pool=pool.address[-8:])
                continue
            graph.add_pool(pool)
        return graph

    def add_pool(self, pool: Pool) -> None:
        """Add a bidirectional edge for a pool (first occurrence of an address wins)."""
        address = pool.address.lower()
        if address in self._pool_addresses:
            return
        node0 = canonical(pool.currency0)
        node1 = canonical(pool.currency1)
        if node0 == node1:
            # e.g. an ETH/WETH pool: a self loop in canonical space
            return
        self._pool_addresses.add(address)
        self._adjacency.setdefault(node0, []).append((node1, pool))
        self._adjacency.setdefault(node1, []).append((node0, pool))

    def get_neighbors(self, currency: Currency) -> list[tuple[Currency, Pool]]:
        """(neighbor, pool) pairs reachable in one hop from a currency."""
        return self._adjacency.get(canonical(currency), [])

    def has_currency(self, currency: Currency) -> bool:
        return canonical(currency) in self._adjacency

    @property
    def currency_count(self) -> int:
        return len(self._adjacency)

    @property
    def pool_count(self) -> int:
        return len(self._pool_addresses)


class PathFinder:
    """Path enumeration over one pool snapshot.

    The graph is built lazily on first use and results are cached per
    (start, end, max_hops) for the lifetime of the instance.

    Usage:
        finder = PathFinder(pools)
        paths = finder.find_all_paths(usdc, eth, max_hops=3)
    """

    def __init__(
        self,
        pools: Iterable[Pool],
        liquidity_check: LiquidityCheck | None = None,
    ) -> None:
        self._pools = list(pools)
        self._liquidity_check = liquidity_check
        self._graph: CurrencyGraph | None = None
        self._path_cache: dict[tuple[Currency, Currency, int], list[Path]] = {}

    @property
    def graph(self) -> CurrencyGraph:
        if self._graph is None:
            self._graph = CurrencyGraph.from_pools(self._pools, self._liquidity_check)
        return self._graph

    def find_all_paths(self, start: Currency, end: Currency, max_hops: int) -> list[Path]:
        """Find every acyclic path from start to end with at most max_hops pools.

        Paths are returned in discovery order: shorter paths first, and
        among equal lengths in pool insertion order.

        Returns:
            List of paths, empty if none exist or the inputs are degenerate.
        """
        start_node = canonical(start)
        end_node = canonical(end)

        if max_hops <= 0 or start_node == end_node:
            return []

        cache_key = (start, end, max_hops)
        if cache_key in self._path_cache:
            return list(self._path_cache[cache_key])

        graph = self.graph
        if not graph.has_currency(start_node) or not graph.has_currency(end_node):
            self._path_cache[cache_key] = []
            return []

        paths: list[Path] = []
        queue: deque[tuple[tuple[Currency, ...], tuple[Pool, ...]]] = deque()
        queue.append(((start_node,), ()))

        while queue:
            nodes, pools = queue.popleft()
            if len(pools) >= max_hops:
                continue

            for neighbor, pool in graph.get_neighbors(nodes[-1]):
                # Avoid cycles: the next currency must not already be on the path
                if neighbor in nodes:
                    continue
                next_nodes = nodes + (neighbor,)
                next_pools = pools + (pool,)
                if neighbor == end_node:
                    paths.append(_to_path(next_nodes, next_pools, start, end))
                    # Extending past the end could never come back to it
                    continue
                queue.append((next_nodes, next_pools))

        logger.debug(
            "paths_found",
            currency_in=str(start),
            currency_out=str(end),
            max_hops=max_hops,
            count=len(paths),
        )
        self._path_cache[cache_key] = paths
        return list(paths)


def _to_path(
    nodes: tuple[Currency, ...],
    pools: tuple[Pool, ...],
    start: Currency,
    end: Currency,
) -> Path:
    """Swap the canonical boundary nodes back to the requested currencies."""
    return Path(currencies=(start,) + nodes[1:-1] + (end,), pools=pools)


def find_all_paths(
    pools: Iterable[Pool],
    start: Currency,
    end: Currency,
    max_hops: int,
    liquidity_check: LiquidityCheck | None = None,
) -> list[Path]:
    """Find every acyclic path between two currencies.

    Convenience wrapper around PathFinder for one-off queries.
    """
    return PathFinder(pools, liquidity_check).find_all_paths(start, end, max_hops)


def relevant_pools(pools: Iterable[Pool], start: Currency, end: Currency) -> list[Pool]:
    """Prefilter pools for a pair.

    Keeps pools touching the start or end currency plus pools connecting two
    base currencies (the usual intermediate hops). Order is preserved.
    """
    start_node = canonical(start)
    end_node = canonical(end)
    kept: list[Pool] = []
    for pool in pools:
        nodes = {canonical(pool.currency0), canonical(pool.currency1)}
        touches_pair = start_node in nodes or end_node in nodes
        connects_bases = pool.currency0.is_base and pool.currency1.is_base
        if touches_pair or connects_bases:
            kept.append(pool)
    return kept


__all__ = ["CurrencyGraph", "PathFinder", "find_all_paths", "relevant_pools"]
