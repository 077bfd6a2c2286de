"""Test helpers module for shared test utilities.

- constants: Currencies used across tests
- factories: Pool factories and fake pools
"""

from tests.helpers.constants import (
    DAI,
    ETH,
    TOKEN_A,
    TOKEN_B,
    TOKEN_C,
    TOKEN_D,
    TOKEN_E,
    USDC,
    WETH,
)
from tests.helpers.factories import (
    FailingPool,
    LinearPool,
    OneLessPool,
    ZeroOutputPool,
    make_linear_pool,
    make_v2_pool,
    pool_address,
)

__all__ = [
    # Constants
    "DAI",
    "ETH",
    "TOKEN_A",
    "TOKEN_B",
    "TOKEN_C",
    "TOKEN_D",
    "TOKEN_E",
    "USDC",
    "WETH",
    # Factories
    "FailingPool",
    "LinearPool",
    "OneLessPool",
    "ZeroOutputPool",
    "make_linear_pool",
    "make_v2_pool",
    "pool_address",
]
