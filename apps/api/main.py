"""HTTP entry point for the demo API.

Each route delegates to :class:`apps.api.DemoService`.  Calculator errors and
unmatched routes are turned into ``{"error": ...}`` bodies by the exception
handlers registered below.  Run with ``python -m apps.api.main``; setting
``APP_ENV=test`` keeps :func:`serve` from binding a socket.
"""

from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from apps.api import DemoService
from apps.calculator import CalculatorError
from lib.config.api_loader import ApiConfig, load_api_config
from lib.contracts.api import (
    CalculationRequest,
    CalculationResponse,
    ErrorResponse,
    HealthResponse,
    HelloResponse,
    TimeResponse,
    UsersResponse,
)
from lib.telemetry.logger import configure_logging, get_logger


ROUTE_NOT_FOUND = "Route not found"

logger = get_logger(__name__)
config = load_api_config()
service = DemoService(config)
app = FastAPI(title="Demo API", version="1.0.0")


@app.exception_handler(CalculatorError)
async def calculator_error_handler(request: Request, exc: CalculatorError):
    logger.debug("rejected calculation: %s", exc)
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Routes match on method and path together, so a wrong method is a miss.
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content={"error": ROUTE_NOT_FOUND})
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.get("/health", response_model=HealthResponse)
async def health():
    """Liveness probe with the current UTC timestamp."""

    return service.health()


@app.get("/api/hello", response_model=HelloResponse)
async def hello():
    return service.hello()


@app.get("/api/users", response_model=UsersResponse)
async def users():
    return service.users()


@app.post(
    "/api/calculate",
    response_model=CalculationResponse,
    responses={400: {"model": ErrorResponse}},
)
async def calculate(req: Optional[CalculationRequest] = None):
    """Apply ``operation`` to ``a`` and ``b``.

    An empty body is treated like a body with every field missing.
    """

    return service.calculate(req or CalculationRequest())


@app.get("/api/time", response_model=TimeResponse)
async def current_time():
    return service.current_time()


def serve(cfg: Optional[ApiConfig] = None) -> bool:
    """Start the server unless running under a test harness.

    Returns ``True`` once :func:`uvicorn.run` has returned and ``False`` when
    binding was suppressed.
    """

    cfg = cfg or config
    configure_logging(cfg.log_level)
    if cfg.is_test:
        logger.info("APP_ENV=%s, not binding a socket", cfg.env)
        return False
    logger.info("Server running on port %s", cfg.port)
    uvicorn.run(app, host=cfg.host, port=cfg.port, log_level=cfg.log_level.lower())
    return True


if __name__ == "__main__":  # pragma: no cover
    serve()
