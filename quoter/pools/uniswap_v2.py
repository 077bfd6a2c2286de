"""UniswapV2-style constant product pool.

UniswapV2 uses the constant product formula: x * y = k
with a fee (0.3% by default) charged on the input amount.
"""

from __future__ import annotations

from dataclasses import dataclass

from quoter.models.currency import Currency
from quoter.pools.base import DexKind, PoolSimulationError, pool_currency


def get_amount_out(
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    fee_multiplier: int = 9970,
) -> int:
    """Calculate output amount using the constant product formula.

    Formula: amount_out = (in * fee * res_out) / (res_in * 10000 + in * fee)

    Args:
        amount_in: Input token amount
        reserve_in: Reserve of input token in pool
        reserve_out: Reserve of output token in pool
        fee_multiplier: 10000 - fee in bps (9970 for 0.3%, 9975 for 0.25%)

    Returns:
        Output token amount (0 for non-positive inputs or empty reserves)
    """
    if amount_in <= 0:
        return 0
    if reserve_in <= 0 or reserve_out <= 0:
        return 0

    amount_in_with_fee = amount_in * fee_multiplier
    numerator = amount_in_with_fee * reserve_out
    denominator = reserve_in * 10000 + amount_in_with_fee

    return numerator // denominator


@dataclass(frozen=True)
class UniswapV2Pool:
    """A UniswapV2 liquidity pool at a fixed reserve snapshot."""

    address: str
    currency0: Currency
    currency1: Currency
    reserve0: int
    reserve1: int
    # Fee in basis points (30 = 0.3%)
    # Standard UniswapV2 is 30 bps, but some forks use different fees
    fee_bps: int = 30
    dex_kind: DexKind = DexKind.UNISWAP_V2
    # Both reserves must reach this to be considered routable
    min_reserve: int = 1

    def __post_init__(self) -> None:
        if not 0 <= self.fee_bps < 10000:
            raise ValueError(f"Invalid fee_bps for pool {self.address}: {self.fee_bps}")
        if self.reserve0 < 0 or self.reserve1 < 0:
            raise ValueError(f"Negative reserves for pool {self.address}")
        object.__setattr__(self, "address", self.address.lower())

    @property
    def fee(self) -> int:
        """Fee tier in basis points."""
        return self.fee_bps

    @property
    def fee_multiplier(self) -> int:
        """Fee multiplier for AMM math (10000 - fee_bps).

        For 30 bps (0.3%), this returns 9970.
        """
        return 10000 - self.fee_bps

    def get_reserves(self, currency_in: Currency) -> tuple[int, int]:
        """Get reserves ordered as (reserve_in, reserve_out).

        Raises:
            PoolSimulationError: If the currency is not in the pool
        """
        matched = pool_currency(self, currency_in)
        if matched is None:
            raise PoolSimulationError(self.address, f"{currency_in} not in pool")
        if matched == self.currency0:
            return self.reserve0, self.reserve1
        return self.reserve1, self.reserve0

    def simulate_swap(self, currency_in: Currency, amount_in: int) -> int:
        """Simulate an exact-input swap against the snapshot reserves."""
        if amount_in < 0:
            raise PoolSimulationError(self.address, f"negative amount {amount_in}")
        reserve_in, reserve_out = self.get_reserves(currency_in)
        if reserve_in == 0 or reserve_out == 0:
            raise PoolSimulationError(self.address, "empty reserves")
        return get_amount_out(amount_in, reserve_in, reserve_out, self.fee_multiplier)

    def has_sufficient_liquidity(self) -> bool:
        return self.reserve0 >= self.min_reserve and self.reserve1 >= self.min_reserve


__all__ = ["UniswapV2Pool", "get_amount_out"]
