"""Currency value type.

A Currency is either the chain's native asset (ETH, BNB, ...) or an ERC20
token. Native assets have a canonical wrapped form (WETH, WBNB, ...) which
is what pools actually hold.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from quoter.constants import (
    BASE_TOKENS,
    NATIVE_ADDRESS,
    NATIVE_DECIMALS,
    NATIVE_SYMBOL,
    WRAPPED_NATIVE,
)
from quoter.models.types import normalize_address


@dataclass(frozen=True)
class Currency:
    """An immutable currency identity.

    Equality and hashing only consider (chain_id, address, is_native);
    symbol and decimals are descriptive metadata.
    """

    chain_id: int
    address: str
    symbol: str = field(default="", compare=False)
    decimals: int = field(default=18, compare=False)
    is_native: bool = False

    def __post_init__(self) -> None:
        if self.decimals < 0 or self.decimals > 77:
            raise ValueError(f"Invalid decimals for {self.symbol or self.address}: {self.decimals}")
        object.__setattr__(self, "address", normalize_address(self.address))

    @classmethod
    def native(cls, chain_id: int) -> Currency:
        """The native asset of a chain."""
        return cls(
            chain_id=chain_id,
            address=NATIVE_ADDRESS,
            symbol=NATIVE_SYMBOL.get(chain_id, "ETH"),
            decimals=NATIVE_DECIMALS,
            is_native=True,
        )

    @classmethod
    def token(cls, chain_id: int, address: str, symbol: str = "", decimals: int = 18) -> Currency:
        """An ERC20 token."""
        return cls(chain_id=chain_id, address=address, symbol=symbol, decimals=decimals)

    @classmethod
    def wrapped_native(cls, chain_id: int) -> Currency:
        """The wrapped form of the chain's native asset.

        Raises:
            ValueError: If the chain has no known wrapped native token
        """
        try:
            address, symbol = WRAPPED_NATIVE[chain_id]
        except KeyError:
            raise ValueError(f"No wrapped native token known for chain {chain_id}") from None
        return cls(chain_id=chain_id, address=address, symbol=symbol, decimals=NATIVE_DECIMALS)

    def wrapped(self) -> Currency:
        """Canonical form: the wrapped token for a native asset, else self.

        A native asset on a chain without a known wrapped token stays native.
        """
        if self.is_native and self.chain_id in WRAPPED_NATIVE:
            return Currency.wrapped_native(self.chain_id)
        return self

    @property
    def is_wrapped_native(self) -> bool:
        """True for WETH-like tokens."""
        wrapped = WRAPPED_NATIVE.get(self.chain_id)
        return not self.is_native and wrapped is not None and wrapped[0] == self.address

    @property
    def is_base(self) -> bool:
        """True for currencies commonly used as intermediate hops."""
        if self.is_native or self.is_wrapped_native:
            return True
        return self.address in BASE_TOKENS.get(self.chain_id, frozenset())

    def format_amount(self, raw: int) -> Decimal:
        """Convert a raw integer amount into units of this currency."""
        return Decimal(raw).scaleb(-self.decimals)

    def __str__(self) -> str:
        return self.symbol or self.address[-8:]


def canonical(currency: Currency) -> Currency:
    """Graph identity of a currency.

    Native assets and their wrapped form are the same node when routing.
    """
    return currency.wrapped()


__all__ = ["Currency", "canonical"]
