"""Tests for the Quoter facade."""

from dataclasses import dataclass
from decimal import Decimal

import pytest

from quoter.config import DEFAULT_QUOTER_CONFIG, QuoterConfig
from quoter.models.currency import Currency
from quoter.pools.snapshot import PoolSnapshot
from quoter.quoter import Quoter
from quoter.routing.pathfinding import find_all_paths
from tests.helpers import (
    DAI,
    ETH,
    TOKEN_A,
    TOKEN_B,
    TOKEN_C,
    TOKEN_D,
    USDC,
    WETH,
    LinearPool,
    OneLessPool,
    make_linear_pool,
    make_v2_pool,
    pool_address,
)

ONE = 10**18


def quote_args(**overrides):
    """Keyword arguments for selling 10 WETH into USDC at 20 gwei."""
    args = dict(
        currency_in=WETH,
        currency_out=USDC,
        amount_in=10 * ONE,
        eth_price=Decimal("2500"),
        currency_out_price=Decimal("1"),
        base_fee=20 * 10**9,
    )
    args.update(overrides)
    return args


@pytest.fixture
def usdc_pools():
    """Three WETH/USDC pools of different depth plus a WETH/DAI/USDC detour."""
    return PoolSnapshot(
        [
            make_v2_pool(WETH, USDC, "01", reserve0=2_000 * ONE, reserve1=5_000_000 * 10**6),
            make_v2_pool(WETH, USDC, "02", reserve0=800 * ONE, reserve1=2_000_000 * 10**6),
            make_v2_pool(USDC, WETH, "03", reserve0=1_000_000 * 10**6, reserve1=400 * ONE),
            make_v2_pool(WETH, DAI, "04", reserve0=1_000 * ONE, reserve1=2_500_000 * ONE),
            make_v2_pool(DAI, USDC, "05", reserve0=10_000_000 * ONE, reserve1=10_000_000 * 10**6),
        ]
    )


class TestSingleQuote:
    """Tests for Quoter.quote."""

    def test_default_config(self) -> None:
        assert Quoter().config is DEFAULT_QUOTER_CONFIG

    def test_native_sell(self, inline_quoter, weth_usdc_pool) -> None:
        quote = inline_quoter.quote([weth_usdc_pool], **quote_args(currency_in=ETH, amount_in=ONE))

        assert not quote.is_empty
        assert quote.currency_in == ETH
        assert quote.amount_out == weth_usdc_pool.simulate_swap(WETH, ONE)
        assert len(quote.route) == 1
        assert quote.route[0].currency_in == ETH
        assert quote.gas_used == 140_000

    def test_picks_deepest_pool(self, inline_quoter, usdc_pools) -> None:
        quote = inline_quoter.quote(usdc_pools, **quote_args())
        assert quote.route[0].pool.address == pool_address("01")

    def test_no_route(self, inline_quoter) -> None:
        quote = inline_quoter.quote([make_v2_pool(TOKEN_A, TOKEN_B)], **quote_args())

        assert quote.is_empty
        assert quote.amount_in == 10 * ONE
        assert quote.amount_out == 0

    def test_zero_amount(self, inline_quoter, weth_usdc_pool) -> None:
        """Paths exist structurally but none survives evaluation."""
        assert find_all_paths([weth_usdc_pool], WETH, USDC, max_hops=3)
        assert inline_quoter.quote([weth_usdc_pool], **quote_args(amount_in=0)).is_empty
        assert inline_quoter.quote_split([weth_usdc_pool], **quote_args(amount_in=0)).is_empty

    def test_max_hops_override(self, inline_quoter) -> None:
        pools = [
            make_linear_pool(TOKEN_A, TOKEN_C, "01", numerator=2),
            make_linear_pool(TOKEN_C, TOKEN_B, "02"),
            make_linear_pool(TOKEN_A, TOKEN_B, "03"),
        ]
        args = quote_args(currency_in=TOKEN_A, currency_out=TOKEN_B, amount_in=ONE, base_fee=0)

        assert len(inline_quoter.quote(pools, **args).route) == 2
        assert len(inline_quoter.quote(pools, **args, max_hops=1).route) == 1

    def test_liquidity_check_applies(self, weth_usdc_pool) -> None:
        quoter = Quoter(config=QuoterConfig(max_workers=1), liquidity_check=lambda pool: False)
        assert quoter.quote([weth_usdc_pool], **quote_args()).is_empty

    def test_prefilter_keeps_routable_pools(self, usdc_pools) -> None:
        pools = list(usdc_pools) + [make_v2_pool(TOKEN_C, TOKEN_D, "06")]
        plain = Quoter(config=QuoterConfig(max_workers=1)).quote(pools, **quote_args())
        filtered = Quoter(config=QuoterConfig(max_workers=1, prefilter_relevant_pools=True)).quote(
            pools, **quote_args()
        )
        assert filtered == plain

    def test_large_amount_picks_larger_output(self, inline_quoter) -> None:
        pools = [OneLessPool(pool_address("01"), TOKEN_A, TOKEN_B), make_linear_pool(TOKEN_A, TOKEN_B, "02")]
        args = quote_args(
            currency_in=TOKEN_A,
            currency_out=TOKEN_B,
            amount_in=10**30,
            currency_out_price=Decimal("1.5"),
            base_fee=0,
        )

        quote = inline_quoter.quote(pools, **args)

        assert quote.amount_out == 10**30
        assert quote.route[0].pool.address == pool_address("02")

    def test_native_pool_on_chain_without_wrapped_token(self, inline_quoter) -> None:
        """A native pool the wrapped table does not know is routed, not fatal."""
        pol = Currency.native(137)
        token_x = Currency.token(137, "0x" + "aa" * 20, "X")
        token_y = Currency.token(137, "0x" + "bb" * 20, "Y")
        pools = [make_v2_pool(token_x, token_y, "01"), make_v2_pool(pol, token_x, "02")]

        quote = inline_quoter.quote(pools, **quote_args(currency_in=token_x, currency_out=token_y, amount_in=ONE))

        assert not quote.is_empty
        assert quote.amount_out == pools[0].simulate_swap(token_x, ONE)

    def test_idempotent(self, inline_quoter, usdc_pools) -> None:
        first = inline_quoter.quote(usdc_pools, **quote_args())
        second = inline_quoter.quote(usdc_pools, **quote_args())
        assert first == second


class TestSplitQuote:
    """Tests for Quoter.quote_split."""

    def test_allocations_sum_to_input(self, inline_quoter, usdc_pools) -> None:
        quote = inline_quoter.quote_split(usdc_pools, **quote_args(amount_in=100 * ONE))

        assert quote.is_split
        assert len(quote.split_routes) > 1
        assert sum(r.amount_in for r in quote.split_routes) == 100 * ONE
        assert quote.amount_in == 100 * ONE
        assert quote.amount_out == sum(r.amount_out for r in quote.split_routes)
        assert quote.swaps_len == sum(len(r.steps) for r in quote.split_routes)

    def test_routes_sorted_by_allocation(self, inline_quoter, usdc_pools) -> None:
        quote = inline_quoter.quote_split(usdc_pools, **quote_args(amount_in=100 * ONE))
        amounts = [r.amount_in for r in quote.split_routes]
        assert amounts == sorted(amounts, reverse=True)

    def test_split_at_least_best_single(self, inline_quoter, usdc_pools) -> None:
        args = quote_args(amount_in=100 * ONE)
        split = inline_quoter.quote_split(usdc_pools, **args)
        single = inline_quoter.quote(usdc_pools, **args)
        assert split.amount_out >= single.amount_out

    def test_one_route_matches_single(self, inline_quoter, usdc_pools) -> None:
        args = quote_args(amount_in=100 * ONE, base_fee=0)
        split = inline_quoter.quote_split(usdc_pools, **args, max_split_routes=1)
        single = inline_quoter.quote(usdc_pools, **args)

        assert len(split.split_routes) == 1
        assert split.amount_out == single.amount_out
        assert split.swap_steps == single.swap_steps

    def test_falls_back_when_split_loses(self, inline_quoter) -> None:
        """A route that only pays off at size is never starved by chunking."""

        @dataclass(frozen=True)
        class BulkPool(LinearPool):
            """Output grows with the square of the input."""

            def simulate_swap(self, currency_in, amount_in):
                return amount_in * amount_in // 50

        bulk = BulkPool(pool_address("01"), TOKEN_A, TOKEN_B)
        flat = make_linear_pool(TOKEN_A, TOKEN_B, "02")
        args = quote_args(currency_in=TOKEN_A, currency_out=TOKEN_B, amount_in=100, base_fee=0)

        quote = inline_quoter.quote_split([bulk, flat], **args)

        assert quote.amount_out == 200
        assert [r.path.pools[0] for r in quote.split_routes] == [bulk]

    def test_zero_routes_is_empty(self, inline_quoter, usdc_pools) -> None:
        """An explicit zero is honored rather than replaced by the default."""
        quote = inline_quoter.quote_split(usdc_pools, **quote_args(), max_split_routes=0)

        assert quote.is_empty
        assert quote.amount_in == 10 * ONE
        assert quote.amount_out == 0

    def test_no_route(self, inline_quoter) -> None:
        quote = inline_quoter.quote_split([make_v2_pool(TOKEN_A, TOKEN_B)], **quote_args())
        assert quote.is_empty
        assert not quote.is_split

    def test_threaded_matches_inline(self, usdc_pools) -> None:
        args = quote_args(amount_in=250 * ONE)
        inline = Quoter(config=QuoterConfig(max_workers=1)).quote_split(usdc_pools, **args)
        threaded = Quoter(config=QuoterConfig(max_workers=8)).quote_split(usdc_pools, **args)
        assert threaded == inline

    def test_idempotent(self, inline_quoter, usdc_pools) -> None:
        args = quote_args(amount_in=100 * ONE)
        assert inline_quoter.quote_split(usdc_pools, **args) == inline_quoter.quote_split(usdc_pools, **args)
