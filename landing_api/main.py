from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from landing_api.api.contact import router as contact_router
from landing_api.api.metrics import router as metrics_router
from landing_api.config import get_settings
from landing_api.db.session import get_engine
from landing_api.models.schemas import HealthResponse
from landing_api.observability.logging import configure_logging
from landing_api.observability.middleware import CORSMiddleware, RequestContextMiddleware, cors_headers
from landing_api.services.counter_store import get_counter_store
from landing_api.services.synthesizer import iso_utc

logger = logging.getLogger(__name__)


app = FastAPI(title="Landing Metrics API", version="1.0.0")
app.include_router(metrics_router)
app.include_router(contact_router)
app.add_middleware(CORSMiddleware, allow_origin=get_settings().cors_allow_origin)
app.add_middleware(RequestContextMiddleware)


@app.on_event("startup")
def _startup() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    settings.data_path.mkdir(parents=True, exist_ok=True)
    get_engine()
    state = get_counter_store().snapshot()
    logger.info("counter state loaded: requests=%s version=%s", state.requests_count, state.version)


@app.exception_handler(StarletteHTTPException)
async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Routing is by path only; a known path with the wrong method is still "not found".
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content={"error": "Not found"})
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(Exception)
async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    # Runs in ServerErrorMiddleware, outside CORSMiddleware, so CORS headers are set here.
    logger.error("unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
        headers=cors_headers(get_settings().cors_allow_origin),
    )


@app.exception_handler(RequestValidationError)
async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"error": "Invalid request body", "detail": jsonable_encoder(exc.errors())},
    )


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(timestamp=iso_utc(datetime.now(timezone.utc)))
