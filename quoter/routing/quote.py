"""Quote model and builder.

A Quote is the single output shape of the engine, whether the trade goes
through one route or is split across several. `swap_steps` is the flattened
hop list a transaction encoder consumes.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from quoter.models.currency import Currency
from quoter.routing.types import EvaluatedRoute, RouteStep, SplitRoute


@dataclass(frozen=True)
class Quote:
    """Final routing result for one request.

    Exactly one of `route` (single mode) or `split_routes` (split mode) is
    populated for a found quote; an empty quote has neither.
    """

    currency_in: Currency
    currency_out: Currency
    amount_in: int
    amount_out: int
    route: tuple[RouteStep, ...] | None = None
    split_routes: tuple[SplitRoute, ...] = ()
    swap_steps: tuple[RouteStep, ...] = ()
    gas_used: int = 0
    gas_cost_usd: Decimal = Decimal(0)

    @property
    def is_empty(self) -> bool:
        """True when no route was found (distinct from a zero-output quote)."""
        return self.route is None and not self.split_routes

    @property
    def is_split(self) -> bool:
        return bool(self.split_routes)

    @property
    def total_gas_used(self) -> int:
        return self.gas_used

    @property
    def total_gas_cost_usd(self) -> Decimal:
        return self.gas_cost_usd

    @property
    def formatted_amount_in(self) -> Decimal:
        return self.currency_in.format_amount(self.amount_in)

    @property
    def formatted_amount_out(self) -> Decimal:
        return self.currency_out.format_amount(self.amount_out)

    @property
    def swaps_len(self) -> int:
        return len(self.swap_steps)

    def effective_price_after_gas(
        self,
        currency_in_price: Decimal,
        currency_out_price: Decimal,
    ) -> Decimal | None:
        """USD value received net of gas per USD value sold.

        Returns:
            The ratio, or None when either side has no value
        """
        if self.is_empty or self.amount_in == 0 or currency_out_price == 0:
            return None
        value_in = self.formatted_amount_in * Decimal(currency_in_price)
        if value_in == 0:
            return None
        value_out = self.formatted_amount_out * Decimal(currency_out_price)
        return (value_out - self.gas_cost_usd) / value_in

    def describe(self) -> str:
        """Human readable summary, one line per route."""
        if self.is_empty:
            return f"No route {self.currency_in} -> {self.currency_out}"

        if self.route is not None:
            groups = [(self.amount_in, self.amount_out, self.route)]
        else:
            groups = [(r.amount_in, r.amount_out, r.steps) for r in self.split_routes]

        lines = []
        for number, (amount_in, amount_out, steps) in enumerate(groups, start=1):
            currencies = [str(steps[0].currency_in)] + [str(step.currency_out) for step in steps]
            pools = ", ".join(f"{step.pool.address} ({step.pool.fee})" for step in steps)
            lines.append(
                f"Route {number}: {' -> '.join(currencies)} "
                f"(in: {self.currency_in.format_amount(amount_in)}, "
                f"out: {self.currency_out.format_amount(amount_out)}) pools: {pools}"
            )
        return "\n".join(lines)


class QuoteBuilder:
    """Normalizes single-route and split-route results into a Quote."""

    def empty(self, currency_in: Currency, currency_out: Currency, amount_in: int) -> Quote:
        return Quote(
            currency_in=currency_in,
            currency_out=currency_out,
            amount_in=amount_in,
            amount_out=0,
        )

    def from_single(
        self,
        currency_in: Currency,
        currency_out: Currency,
        route: EvaluatedRoute,
        steps: Sequence[RouteStep],
    ) -> Quote:
        """Quote for one route; amounts come from the materialized steps."""
        steps = tuple(steps)
        return Quote(
            currency_in=currency_in,
            currency_out=currency_out,
            amount_in=steps[0].amount_in,
            amount_out=steps[-1].amount_out,
            route=steps,
            swap_steps=steps,
            gas_used=route.gas_used,
            gas_cost_usd=route.gas_cost_usd,
        )

    def from_split(
        self,
        currency_in: Currency,
        currency_out: Currency,
        split_routes: Sequence[SplitRoute],
    ) -> Quote:
        """Quote for several routes, largest allocation first.

        Totals are sums over the routes; steps are flattened in route order.
        """
        if not split_routes:
            return self.empty(currency_in, currency_out, 0)

        ordered = tuple(sorted(split_routes, key=lambda r: -r.amount_in))
        return Quote(
            currency_in=currency_in,
            currency_out=currency_out,
            amount_in=sum(r.amount_in for r in ordered),
            amount_out=sum(r.amount_out for r in ordered),
            split_routes=ordered,
            swap_steps=tuple(step for r in ordered for step in r.steps),
            gas_used=sum(r.gas_used for r in ordered),
            gas_cost_usd=sum((r.gas_cost_usd for r in ordered), Decimal(0)),
        )


__all__ = ["Quote", "QuoteBuilder"]
