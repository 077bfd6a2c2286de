"""Type definitions for the routing module."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from quoter.models.currency import Currency
from quoter.pools.base import Pool


@dataclass(frozen=True)
class Path:
    """An acyclic sequence of pools connecting two currencies.

    `currencies` has one more element than `pools`: pool i swaps
    currencies[i] into currencies[i + 1]. The first and last currencies are
    the ones the caller asked for (possibly native), interior ones are the
    canonical wrapped forms.
    """

    currencies: tuple[Currency, ...]
    pools: tuple[Pool, ...]

    @property
    def hops(self) -> int:
        return len(self.pools)

    @property
    def currency_in(self) -> Currency:
        return self.currencies[0]

    @property
    def currency_out(self) -> Currency:
        return self.currencies[-1]

    @property
    def pool_key(self) -> tuple[str, ...]:
        """Pool addresses in hop order; identifies the path shape."""
        return tuple(pool.address for pool in self.pools)

    def describe(self) -> str:
        return " -> ".join(str(currency) for currency in self.currencies)


@dataclass(frozen=True)
class EvaluatedRoute:
    """A path simulated at a trial amount, used only for ranking."""

    path: Path
    amount_in: int
    amount_out: int
    gas_used: int
    gas_cost_usd: Decimal
    # USD value of amount_out minus gas cost
    net_value_usd: Decimal
    # Position in path discovery order, used as the tie-breaker
    index: int


@dataclass(frozen=True)
class RouteStep:
    """One concrete hop with exact amounts."""

    pool: Pool
    currency_in: Currency
    currency_out: Currency
    amount_in: int
    amount_out: int


@dataclass(frozen=True)
class SplitRoute:
    """A path executed with its allocated share of the input."""

    path: Path
    amount_in: int
    amount_out: int
    steps: tuple[RouteStep, ...]
    gas_used: int
    gas_cost_usd: Decimal


__all__ = ["EvaluatedRoute", "Path", "RouteStep", "SplitRoute"]
