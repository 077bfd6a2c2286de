"""Point-in-time pool snapshot.

PoolSnapshot holds the pools a single quote is computed against. It is
filled once by the caller (the pool-state synchronizer) and then only read
by the routing engine.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import structlog

from quoter.pools.base import Pool

logger = structlog.get_logger()


class PoolSnapshot:
    """Ordered collection of pools keyed by address.

    Insertion order is preserved and drives the order in which the path
    finder discovers paths, which keeps quotes reproducible.
    """

    def __init__(self, pools: Iterable[Pool] | None = None) -> None:
        self._pools: dict[str, Pool] = {}
        if pools:
            for pool in pools:
                self.add_pool(pool)

    def add_pool(self, pool: Pool) -> None:
        """Add a pool to the snapshot.

        A pool whose address is already present replaces the previous state
        but keeps its original position.
        """
        key = pool.address.lower()
        if key in self._pools:
            logger.debug("pool_replaced", pool=key[-8:])
        self._pools[key] = pool

    @property
    def pools(self) -> list[Pool]:
        return list(self._pools.values())

    @property
    def pool_count(self) -> int:
        return len(self._pools)

    def __iter__(self) -> Iterator[Pool]:
        return iter(self._pools.values())

    def __len__(self) -> int:
        return len(self._pools)


__all__ = ["PoolSnapshot"]
