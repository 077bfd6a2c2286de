"""Tests for SingleRouteSelector."""

from decimal import Decimal

from quoter.routing.evaluation import evaluate
from quoter.routing.pathfinding import find_all_paths
from quoter.routing.selection import SingleRouteSelector
from tests.helpers import TOKEN_A, TOKEN_B, TOKEN_C, make_linear_pool


class TestSingleRouteSelector:
    def test_single_pool_route(self, zero_gas) -> None:
        """Selling 100 A into a pool that returns 98 B gives one step."""
        pool = make_linear_pool(TOKEN_A, TOKEN_B, numerator=98, denominator=100)
        routes = evaluate(find_all_paths([pool], TOKEN_A, TOKEN_B, 1), 100, zero_gas, Decimal(0), Decimal(1))

        selector = SingleRouteSelector()
        best = selector.select(routes)
        steps = selector.materialize(best)

        assert best.amount_out == 98
        assert len(steps) == 1
        assert steps[0].pool is pool
        assert (steps[0].amount_in, steps[0].amount_out) == (100, 98)
        assert (steps[0].currency_in, steps[0].currency_out) == (TOKEN_A, TOKEN_B)

    def test_no_routes(self) -> None:
        assert SingleRouteSelector().select([]) is None

    def test_picks_highest_net_value(self, zero_gas) -> None:
        pools = [
            make_linear_pool(TOKEN_A, TOKEN_B, "01", numerator=9, denominator=10),
            make_linear_pool(TOKEN_A, TOKEN_C, "02", numerator=2),
            make_linear_pool(TOKEN_C, TOKEN_B, "03"),
        ]
        routes = evaluate(find_all_paths(pools, TOKEN_A, TOKEN_B, 2), 1000, zero_gas, Decimal(0), Decimal(1))

        selector = SingleRouteSelector()
        best = selector.select(routes)
        steps = selector.materialize(best)

        assert best.path.describe() == "A -> C -> B"
        assert [s.amount_out for s in steps] == [2000, 2000]
