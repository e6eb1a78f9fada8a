"""FastAPI application for the Miniswap pool."""

import logging

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from miniswap import __version__
from miniswap.api.endpoints import router
from miniswap.api.error_handlers import register_error_handlers
from miniswap.config import ApiSettings

settings = ApiSettings.from_env()

# Maximum request body size (64 KB). Every request body is a handful of fields.
MAX_REQUEST_SIZE = 64 * 1024

app = FastAPI(
    title="Miniswap",
    description="Two-asset constant product liquidity pool",
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
register_error_handlers(app)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def configure_logging(level: str) -> None:
    """Configure structlog for console output at the given level."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level)
        ),
    )


def run() -> None:
    """Run the pool API server.

    Configuration via environment variables:
    - MINISWAP_HOST: Host to bind to (default: 0.0.0.0)
    - MINISWAP_PORT: Port to bind to (default: 8000)
    - MINISWAP_DEBUG: Enable debug/reload mode (default: false)
    - MINISWAP_LOG_LEVEL: Log level (default: INFO)
    - MINISWAP_TOKEN_X / MINISWAP_TOKEN_Y: Pool tokens (default: KSM / DOT)
    """
    configure_logging(settings.log_level)
    uvicorn.run(
        "miniswap.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
