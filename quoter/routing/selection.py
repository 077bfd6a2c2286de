"""Best single route selection."""

from __future__ import annotations

from collections.abc import Sequence

from quoter.routing.evaluation import rank_routes, simulate_steps
from quoter.routing.types import EvaluatedRoute, RouteStep


class SingleRouteSelector:
    """Picks the highest-value route and expands it into steps.

    EvaluatedRoute keeps no per-hop detail, so the winner is simulated once
    more at its amount to recover the exact step amounts.
    """

    def select(self, routes: Sequence[EvaluatedRoute]) -> EvaluatedRoute | None:
        """Route with the highest net value, or None when there is none."""
        if not routes:
            return None
        return rank_routes(routes)[0]

    def materialize(self, route: EvaluatedRoute) -> tuple[RouteStep, ...] | None:
        """Ordered steps of a route at its evaluated amount_in."""
        steps = simulate_steps(route.path, route.amount_in)
        if not steps:
            return None
        return steps


__all__ = ["SingleRouteSelector"]
