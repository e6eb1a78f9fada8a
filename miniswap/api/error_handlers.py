"""Exception handlers mapping pool errors to JSON responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from miniswap.errors import PoolError

logger = structlog.get_logger()


def register_error_handlers(app: FastAPI) -> None:
    """Register the pool error handler on the app."""

    @app.exception_handler(PoolError)
    async def pool_error_handler(request: Request, exc: PoolError) -> JSONResponse:
        logger.info(
            "request_rejected",
            path=request.url.path,
            error=exc.code,
            detail=str(exc),
        )
        return JSONResponse(
            status_code=exc.http_status,
            content={"error": {"code": exc.code, "message": str(exc)}},
        )
