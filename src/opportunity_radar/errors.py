"""Exception handlers and request logging for the HTTP API."""
import logging
import time

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)
request_logger = logging.getLogger("opportunity_radar.requests")

API_PREFIX = "/api"


def install_error_handlers(app: FastAPI, *, expose_details: bool) -> None:
    """Validation failures become 400; anything unhandled becomes a generic 500.

    HTTPException keeps FastAPI's default `{"detail": ...}` body.
    """

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid request data", "errors": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        content = {"message": "Internal server error"}
        if expose_details:
            content["detail"] = str(exc)
        return JSONResponse(status_code=500, content=content)


def install_request_logging(app: FastAPI) -> None:
    """Log `METHOD path status in Nms` for every /api request."""

    @app.middleware("http")
    async def log_api_requests(request: Request, call_next):  # noqa: ANN001, ANN202
        if not request.url.path.startswith(API_PREFIX):
            return await call_next(request)
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        level = logging.INFO
        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        request_logger.log(
            level, "%s %s %d in %.0fms",
            request.method, request.url.path, response.status_code, elapsed_ms,
        )
        return response
