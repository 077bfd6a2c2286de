"""Base definitions for liquidity pools.

The routing engine only consumes pools through the Pool protocol, so any
AMM implementation (constant product, concentrated liquidity, ...) can be
routed as long as its swap simulation is a pure function of the snapshot.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from quoter.models.currency import Currency


class DexKind(str, Enum):
    """Protocol variant of a pool."""

    UNISWAP_V2 = "uniswap_v2"
    UNISWAP_V3 = "uniswap_v3"
    UNISWAP_V4 = "uniswap_v4"
    PANCAKESWAP_V2 = "pancakeswap_v2"
    PANCAKESWAP_V3 = "pancakeswap_v3"


class PoolSimulationError(Exception):
    """A pool could not simulate a swap.

    Raised for unknown currencies, uninitialized state or insufficient
    liquidity. The evaluator treats it as a failed hop.
    """

    def __init__(self, pool_address: str, reason: str) -> None:
        self.pool_address = pool_address
        self.reason = reason
        super().__init__(f"Pool {pool_address}: {reason}")


@runtime_checkable
class Pool(Protocol):
    """Interface every routable pool implements.

    Implementations must not mutate shared state in simulate_swap; the
    evaluator calls it concurrently from worker threads.
    """

    @property
    def address(self) -> str: ...

    @property
    def currency0(self) -> Currency: ...

    @property
    def currency1(self) -> Currency: ...

    @property
    def fee(self) -> int: ...

    @property
    def dex_kind(self) -> DexKind: ...

    def simulate_swap(self, currency_in: Currency, amount_in: int) -> int:
        """Simulate an exact-input swap.

        Args:
            currency_in: Currency being sold into the pool
            amount_in: Raw input amount

        Returns:
            Raw output amount

        Raises:
            PoolSimulationError: If the swap cannot be simulated
        """
        ...

    def has_sufficient_liquidity(self) -> bool:
        """Whether the pool holds enough liquidity to be worth routing through."""
        ...


# Caller-supplied liquidity predicate
LiquidityCheck = Callable[[Pool], bool]


def default_liquidity_check(pool: Pool) -> bool:
    """Ask the pool itself."""
    return pool.has_sufficient_liquidity()


def pool_currency(pool: Pool, currency: Currency) -> Currency | None:
    """Return the pool's own currency matching `currency` canonically.

    A pool holding WETH matches a request for ETH (and vice versa), which is
    how native/wrapped equivalence reaches the pool oracle.
    """
    target = currency.wrapped()
    for candidate in (pool.currency0, pool.currency1):
        if candidate.wrapped() == target:
            return candidate
    return None


__all__ = [
    "DexKind",
    "LiquidityCheck",
    "Pool",
    "PoolSimulationError",
    "default_liquidity_check",
    "pool_currency",
]
