"""Gas cost estimation for routes."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from quoter.constants import BASE_GAS, HOP_GAS, NATIVE_DECIMALS


@dataclass(frozen=True)
class GasParams:
    """Gas pricing for one quote request.

    Attributes:
        base_fee: Current block base fee in wei per gas
        priority_fee: Caller-chosen priority fee in wei per gas
        base_gas: Gas for the first swap (includes fixed overhead)
        hop_gas: Gas for every additional hop
    """

    base_fee: int
    priority_fee: int = 0
    base_gas: int = BASE_GAS
    hop_gas: int = HOP_GAS

    def __post_init__(self) -> None:
        if self.base_fee < 0 or self.priority_fee < 0:
            raise ValueError("Gas fees cannot be negative")

    @property
    def gas_price(self) -> int:
        """Total price per gas unit in wei."""
        return self.base_fee + self.priority_fee


def estimate_gas_used(hops: int, gas_params: GasParams) -> int:
    """Gas units for a route of `hops` pools (0 for an empty route)."""
    if hops <= 0:
        return 0
    return gas_params.base_gas + gas_params.hop_gas * (hops - 1)


def estimate_gas_cost_usd(hops: int, gas_params: GasParams, eth_price: Decimal) -> tuple[Decimal, int]:
    """Estimate the USD cost of executing a route.

    Args:
        hops: Number of pools in the route
        gas_params: Base and priority fee
        eth_price: USD price of the chain's native asset

    Returns:
        Tuple of (cost in USD, gas units)
    """
    gas_used = estimate_gas_used(hops, gas_params)
    cost_wei = gas_params.gas_price * gas_used
    cost_native = Decimal(cost_wei).scaleb(-NATIVE_DECIMALS)
    return cost_native * eth_price, gas_used


__all__ = ["GasParams", "estimate_gas_cost_usd", "estimate_gas_used"]
