"""API endpoints for the swap quoter."""

import asyncio
from decimal import Decimal
from functools import lru_cache

import structlog
from fastapi import APIRouter, Depends

from quoter.api.schemas import QuoteRequest, QuoteResponse
from quoter.config import QuoterConfig
from quoter.pools.snapshot import PoolSnapshot
from quoter.quoter import Quoter
from quoter.routing.quote import Quote

logger = structlog.get_logger()

router = APIRouter()


@lru_cache(maxsize=1)
def get_default_quoter() -> Quoter:
    """Quoter configured from QUOTER_* environment variables."""
    return Quoter(config=QuoterConfig.from_env())


def get_quoter() -> Quoter:
    """Dependency provider for the quoter instance.

    Override this in tests to inject a differently configured quoter:
        app.dependency_overrides[get_quoter] = lambda: my_quoter
    """
    return get_default_quoter()


def run_quote(quoter: Quoter, request: QuoteRequest) -> Quote:
    """Convert the request into engine inputs and compute the quote."""
    snapshot = PoolSnapshot(pool.to_pool() for pool in request.pools)
    args = dict(
        pools=snapshot,
        currency_in=request.currency_in.to_currency(),
        currency_out=request.currency_out.to_currency(),
        amount_in=int(request.amount_in),
        eth_price=Decimal(request.eth_price),
        currency_out_price=Decimal(request.currency_out_price),
        base_fee=int(request.base_fee),
        priority_fee=int(request.priority_fee),
        max_hops=request.max_hops,
    )
    if request.split:
        return quoter.quote_split(**args, max_split_routes=request.max_split_routes)
    return quoter.quote(**args)


@router.post("/quote")
async def quote(
    quote_request: QuoteRequest,
    quoter_instance: Quoter = Depends(get_quoter),
) -> QuoteResponse:
    """Quote a swap against the pools in the request.

    Error Handling:
        - Invalid request schema: Returns 422 Validation Error (Pydantic)
        - No route: Returns found=false
        - Engine exception: Logs error, returns found=false
    """
    logger.info(
        "received_quote_request",
        pool_count=len(quote_request.pools),
        amount_in=quote_request.amount_in,
        split=quote_request.split,
    )

    try:
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, run_quote, quoter_instance, quote_request)
    except Exception:
        logger.exception(
            "quoter_error",
            pool_count=len(quote_request.pools),
            message="Quoter raised an exception, returning empty quote",
        )
        return QuoteResponse.empty(quote_request)

    response = QuoteResponse.from_quote(result)
    logger.info(
        "returning_quote",
        found=response.found,
        amount_out=response.amount_out,
        routes=len(response.routes),
    )
    return response
