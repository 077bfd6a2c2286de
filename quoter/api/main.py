"""FastAPI application for the swap quoter.

Note: Rate limiting is intentionally not implemented at the application level.
It should be handled at the infrastructure layer (reverse proxy / load balancer).
"""

import logging
import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from quoter import __version__
from quoter.api.endpoints import router

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("QUOTER_HOST", "0.0.0.0")
PORT = int(os.environ.get("QUOTER_PORT", "8000"))
DEBUG = os.environ.get("QUOTER_DEBUG", "false").lower() in ("true", "1", "yes")

# Maximum request body size (10 MB); pool snapshots can be large
MAX_REQUEST_SIZE = 10 * 1024 * 1024

app = FastAPI(
    title="Swap Quoter",
    description="Split-routing swap quotes over a pool snapshot",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def configure_logging(debug: bool = DEBUG) -> None:
    """Configure structlog for the server process."""
    log_level = logging.DEBUG if debug else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )


def run() -> None:
    """Run the quoter API server.

    Configuration via environment variables:
    - QUOTER_HOST: Host to bind to (default: 0.0.0.0)
    - QUOTER_PORT: Port to bind to (default: 8000)
    - QUOTER_DEBUG: Enable debug logging and reload mode (default: false)
    - QUOTER_MAX_HOPS, QUOTER_MAX_SPLIT_ROUTES, QUOTER_SPLIT_ITERATIONS,
      QUOTER_MAX_WORKERS, ...: engine limits, see QuoterConfig.from_env
    """
    configure_logging(DEBUG)
    uvicorn.run(
        "quoter.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
