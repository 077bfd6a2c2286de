"""Pytest configuration and fixtures."""

from decimal import Decimal

import pytest

from quoter.config import QuoterConfig
from quoter.quoter import Quoter
from quoter.routing.gas import GasParams
from tests.helpers import TOKEN_A, TOKEN_B, TOKEN_C, USDC, WETH, make_v2_pool


@pytest.fixture
def zero_gas() -> GasParams:
    """Gas pricing that makes every route free."""
    return GasParams(base_fee=0)


@pytest.fixture
def mainnet_gas() -> GasParams:
    """20 gwei base fee plus 1 gwei tip."""
    return GasParams(base_fee=20 * 10**9, priority_fee=10**9)


@pytest.fixture
def eth_price() -> Decimal:
    return Decimal("2500")


@pytest.fixture
def weth_usdc_pool():
    """Deep WETH/USDC pool: 20K WETH against 50M USDC."""
    return make_v2_pool(
        WETH,
        USDC,
        "a1",
        reserve0=20_000 * 10**18,
        reserve1=50_000_000 * 10**6,
    )


@pytest.fixture
def triangle_pools():
    """A-B direct plus A-C-B detour, all balanced."""
    return [
        make_v2_pool(TOKEN_A, TOKEN_B, "01"),
        make_v2_pool(TOKEN_A, TOKEN_C, "02"),
        make_v2_pool(TOKEN_C, TOKEN_B, "03"),
    ]


@pytest.fixture
def inline_quoter() -> Quoter:
    """Quoter that never starts worker threads."""
    return Quoter(config=QuoterConfig(max_workers=1))
