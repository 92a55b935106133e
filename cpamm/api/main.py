"""FastAPI application for the pool service.

Note: Authentication of callers is not implemented here; the service
trusts the ``caller`` field and is meant to sit behind a gateway that
binds it to the authenticated account.
"""

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cpamm import __version__
from cpamm.api.endpoints import router
from cpamm.config import ServiceSettings
from cpamm.errors import (
    LedgerError,
    PoolAlreadyExists,
    PoolError,
    PoolNotFound,
    ReentrancyError,
)
from cpamm.log import configure_logging
from cpamm.models.api import ErrorResponse

SETTINGS = ServiceSettings.from_env()

# Maximum request body size (1 MiB); every body is a handful of fields
MAX_REQUEST_SIZE = 1024 * 1024

app = FastAPI(
    title="cpamm",
    description="Constant-product liquidity pool service",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


def _error_status(err: Exception) -> int:
    if isinstance(err, PoolNotFound):
        return 404
    if isinstance(err, (PoolAlreadyExists, ReentrancyError)):
        return 409
    return 400


@app.exception_handler(PoolError)
@app.exception_handler(LedgerError)
@app.exception_handler(ReentrancyError)
async def operation_rejected(_request: Request, err: Exception) -> JSONResponse:
    """Map a rejected pool or ledger operation to a JSON error body."""
    body = ErrorResponse(error=getattr(err, "kind", type(err).__name__), detail=str(err))
    return JSONResponse(status_code=_error_status(err), content=body.model_dump())


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the pool service.

    Configuration via environment variables:
    - CPAMM_HOST: Host to bind to (default: 0.0.0.0)
    - CPAMM_PORT: Port to bind to (default: 8000)
    - CPAMM_DEBUG: Enable debug/reload mode (default: false)
    - CPAMM_LOG_LEVEL: Log level (default: INFO)
    - CPAMM_FEE_BASIS: Default swap fee for new pools in thousandths (default: 0)
    """
    configure_logging(SETTINGS.log_level)
    uvicorn.run(
        "cpamm.api.main:app",
        host=SETTINGS.host,
        port=SETTINGS.port,
        reload=SETTINGS.debug,
    )


if __name__ == "__main__":
    run()
