"""Pydantic models for the quote HTTP API."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from quoter.models.currency import Currency
from quoter.models.types import Address, Uint256
from quoter.pools.base import DexKind
from quoter.pools.uniswap_v2 import UniswapV2Pool
from quoter.routing.quote import Quote
from quoter.routing.types import RouteStep


class CurrencyModel(BaseModel):
    """A currency; omit the address (or set native) for the native asset."""

    chain_id: int = Field(alias="chainId", ge=1)
    address: Address | None = None
    symbol: str = ""
    decimals: int = Field(default=18, ge=0, le=77)
    native: bool = False

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _check_identity(self) -> CurrencyModel:
        if not self.native and self.address is None:
            raise ValueError("Token currencies require an address")
        return self

    def to_currency(self) -> Currency:
        if self.native:
            return Currency.native(self.chain_id)
        if self.address is None:
            raise ValueError("Token currencies require an address")
        return Currency.token(self.chain_id, self.address, self.symbol, self.decimals)

    @classmethod
    def from_currency(cls, currency: Currency) -> CurrencyModel:
        return cls(
            chainId=currency.chain_id,
            address=currency.address,
            symbol=currency.symbol,
            decimals=currency.decimals,
            native=currency.is_native,
        )


class PoolModel(BaseModel):
    """Constant product pool state."""

    address: Address
    token0: CurrencyModel
    token1: CurrencyModel
    reserve0: Uint256
    reserve1: Uint256
    fee_bps: int = Field(default=30, alias="feeBps", ge=0, lt=10000)
    kind: DexKind = DexKind.UNISWAP_V2
    min_reserve: Uint256 = Field(default="1", alias="minReserve")

    model_config = {"populate_by_name": True}

    def to_pool(self) -> UniswapV2Pool:
        return UniswapV2Pool(
            address=self.address,
            currency0=self.token0.to_currency(),
            currency1=self.token1.to_currency(),
            reserve0=int(self.reserve0),
            reserve1=int(self.reserve1),
            fee_bps=self.fee_bps,
            dex_kind=self.kind,
            min_reserve=int(self.min_reserve),
        )


class QuoteRequest(BaseModel):
    """Request body for POST /quote."""

    currency_in: CurrencyModel = Field(alias="currencyIn")
    currency_out: CurrencyModel = Field(alias="currencyOut")
    amount_in: Uint256 = Field(alias="amountIn")
    pools: list[PoolModel] = Field(default_factory=list)
    eth_price: Decimal = Field(alias="ethPrice", ge=0)
    currency_out_price: Decimal = Field(alias="currencyOutPrice", ge=0)
    base_fee: Uint256 = Field(alias="baseFee")
    priority_fee: Uint256 = Field(default="0", alias="priorityFee")
    max_hops: int | None = Field(default=None, alias="maxHops", ge=0, le=6)
    split: bool = False
    max_split_routes: int | None = Field(default=None, alias="maxSplitRoutes", ge=1, le=10)

    model_config = {"populate_by_name": True}


class StepModel(BaseModel):
    """One hop of a route."""

    pool: str
    dex_kind: str = Field(alias="dexKind")
    fee: int
    currency_in: CurrencyModel = Field(alias="currencyIn")
    currency_out: CurrencyModel = Field(alias="currencyOut")
    amount_in: str = Field(alias="amountIn")
    amount_out: str = Field(alias="amountOut")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_step(cls, step: RouteStep) -> StepModel:
        return cls(
            pool=step.pool.address,
            dexKind=str(step.pool.dex_kind.value),
            fee=step.pool.fee,
            currencyIn=CurrencyModel.from_currency(step.currency_in),
            currencyOut=CurrencyModel.from_currency(step.currency_out),
            amountIn=str(step.amount_in),
            amountOut=str(step.amount_out),
        )


class RouteModel(BaseModel):
    """A route with its share of the input."""

    amount_in: str = Field(alias="amountIn")
    amount_out: str = Field(alias="amountOut")
    gas_used: int = Field(alias="gasUsed")
    gas_cost_usd: str = Field(alias="gasCostUsd")
    steps: list[StepModel]

    model_config = {"populate_by_name": True}


class QuoteResponse(BaseModel):
    """Response body for POST /quote.

    `found` is false for an empty quote; a found quote can still have a zero
    amountOut.
    """

    found: bool
    currency_in: CurrencyModel | None = Field(default=None, alias="currencyIn")
    currency_out: CurrencyModel | None = Field(default=None, alias="currencyOut")
    amount_in: str = Field(default="0", alias="amountIn")
    amount_out: str = Field(default="0", alias="amountOut")
    split: bool = False
    routes: list[RouteModel] = Field(default_factory=list)
    swap_steps: list[StepModel] = Field(default_factory=list, alias="swapSteps")
    gas_used: int = Field(default=0, alias="gasUsed")
    gas_cost_usd: str = Field(default="0", alias="gasCostUsd")

    model_config = {"populate_by_name": True}

    @classmethod
    def empty(cls, request: QuoteRequest) -> QuoteResponse:
        """Not-found response echoing the requested pair and amount."""
        return cls(
            found=False,
            currencyIn=request.currency_in,
            currencyOut=request.currency_out,
            amountIn=str(request.amount_in),
        )

    @classmethod
    def from_quote(cls, quote: Quote) -> QuoteResponse:
        if quote.route is not None:
            routes = [
                RouteModel(
                    amountIn=str(quote.amount_in),
                    amountOut=str(quote.amount_out),
                    gasUsed=quote.gas_used,
                    gasCostUsd=str(quote.gas_cost_usd),
                    steps=[StepModel.from_step(step) for step in quote.route],
                )
            ]
        else:
            routes = [
                RouteModel(
                    amountIn=str(route.amount_in),
                    amountOut=str(route.amount_out),
                    gasUsed=route.gas_used,
                    gasCostUsd=str(route.gas_cost_usd),
                    steps=[StepModel.from_step(step) for step in route.steps],
                )
                for route in quote.split_routes
            ]

        return cls(
            found=not quote.is_empty,
            currencyIn=CurrencyModel.from_currency(quote.currency_in),
            currencyOut=CurrencyModel.from_currency(quote.currency_out),
            amountIn=str(quote.amount_in),
            amountOut=str(quote.amount_out),
            split=quote.is_split,
            routes=routes,
            swapSteps=[StepModel.from_step(step) for step in quote.swap_steps],
            gasUsed=quote.gas_used,
            gasCostUsd=str(quote.gas_cost_usd),
        )
