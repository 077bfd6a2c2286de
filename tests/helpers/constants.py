"""Shared currencies and addresses for tests."""

from quoter.constants import DAI as DAI_ADDRESS
from quoter.constants import ETHEREUM, USDC as USDC_ADDRESS, WETH as WETH_ADDRESS
from quoter.models.currency import Currency

CHAIN_ID = ETHEREUM

# Real mainnet currencies
ETH = Currency.native(CHAIN_ID)
WETH = Currency.token(CHAIN_ID, WETH_ADDRESS, "WETH", 18)
USDC = Currency.token(CHAIN_ID, USDC_ADDRESS, "USDC", 6)
DAI = Currency.token(CHAIN_ID, DAI_ADDRESS, "DAI", 18)

# Synthetic tokens for graph tests
TOKEN_A = Currency.token(CHAIN_ID, "0x" + "aa" * 20, "A", 18)
TOKEN_B = Currency.token(CHAIN_ID, "0x" + "bb" * 20, "B", 18)
TOKEN_C = Currency.token(CHAIN_ID, "0x" + "cc" * 20, "C", 18)
TOKEN_D = Currency.token(CHAIN_ID, "0x" + "dd" * 20, "D", 18)
TOKEN_E = Currency.token(CHAIN_ID, "0x" + "ee" * 20, "E", 18)
