"""Pool management package.

Provides the Pool protocol, the UniswapV2 constant product pool and the
PoolSnapshot container the routing engine reads from.
"""

from .base import (
    DexKind,
    LiquidityCheck,
    Pool,
    PoolSimulationError,
    default_liquidity_check,
    pool_currency,
)
from .snapshot import PoolSnapshot
from .uniswap_v2 import UniswapV2Pool, get_amount_out

__all__ = [
    "DexKind",
    "LiquidityCheck",
    "Pool",
    "PoolSimulationError",
    "PoolSnapshot",
    "UniswapV2Pool",
    "default_liquidity_check",
    "get_amount_out",
    "pool_currency",
]
