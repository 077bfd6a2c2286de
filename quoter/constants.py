"""Protocol constants for the swap quoter.

Centralizes chain parameters, well-known token addresses and gas estimates.
"""

from quoter.models.types import is_valid_address


def _validate_token_address(name: str, address: str) -> str:
    """Validate and return a token address.

    Raises:
        ValueError: If the address is invalid
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars)")
    return address


# Native assets use the zero address as their identity
NATIVE_ADDRESS = "0x0000000000000000000000000000000000000000"

# Decimals of every EVM native asset (ETH, BNB, ...)
NATIVE_DECIMALS = 18

# Chain ids
ETHEREUM = 1
OPTIMISM = 10
BSC = 56
BASE = 8453
ARBITRUM = 42161

# Gas estimation constants
# First swap pays the fixed overhead (transfers, router entry), every
# additional hop only pays for the pool interaction
BASE_GAS = 140_000
HOP_GAS = 80_000

# Number of chunks the split optimizer distributes
SPLIT_ROUTING_ITERATIONS = 100

# Well-known token addresses (lowercase for consistency)
WETH = _validate_token_address("WETH", "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2")
USDC = _validate_token_address("USDC", "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48")
USDT = _validate_token_address("USDT", "0xdac17f958d2ee523a2206206994597c13d831ec7")
DAI = _validate_token_address("DAI", "0x6b175474e89094c44da98b954eedeac495271d0f")

# Wrapped native token per chain: (address, symbol)
WRAPPED_NATIVE: dict[int, tuple[str, str]] = {
    ETHEREUM: (WETH, "WETH"),
    OPTIMISM: (
        _validate_token_address("WETH_OP", "0x4200000000000000000000000000000000000006"),
        "WETH",
    ),
    BSC: (
        _validate_token_address("WBNB", "0xbb4cdb9cbd36b01bd1cbaebf2de08d9173bc095c"),
        "WBNB",
    ),
    BASE: (
        _validate_token_address("WETH_BASE", "0x4200000000000000000000000000000000000006"),
        "WETH",
    ),
    ARBITRUM: (
        _validate_token_address("WETH_ARB", "0x82af49447d8a07e3bd95bd0d56f35241523fbab1"),
        "WETH",
    ),
}

NATIVE_SYMBOL: dict[int, str] = {
    ETHEREUM: "ETH",
    OPTIMISM: "ETH",
    BSC: "BNB",
    BASE: "ETH",
    ARBITRUM: "ETH",
}

# Tokens commonly used as intermediate hops (mainnet)
BASE_TOKENS: dict[int, frozenset[str]] = {
    ETHEREUM: frozenset({WETH, USDC, USDT, DAI}),
}
