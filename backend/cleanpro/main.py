# backend/cleanpro/main.py

import logging
import os
import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import api_crm, api_quote, api_rate
from .core.config import settings
from .core.observability import setup_logging
from .database import get_db_session, init_db
from .services.rate_seed import seed_default_rates
from .utils.errors import ServiceError

# Configure logging before creating any loggers
setup_logging()
logger = logging.getLogger(__name__)

_BOOT_TS = time.time()

app = FastAPI(title=settings.PROJECT_NAME, default_response_class=ORJSONResponse)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials="*" not in settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def catch_exceptions(request: Request, call_next):
    """Return JSON responses for HTTP errors and log them."""
    try:
        response = await call_next(request)
    except StarletteHTTPException as exc:  # return the original status and detail
        logger.error(
            "HTTP error %s at %s: %s", exc.status_code, request.url.path, exc.detail
        )
        response = ORJSONResponse(
            status_code=exc.status_code, content={"detail": exc.detail}
        )
    except Exception as exc:  # pragma: no cover - generic handler
        logger.exception("Unhandled error: %s", exc)
        response = ORJSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal Server Error"},
        )
    return response


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    """Translate crud/service failures into the ``error_response`` shape."""
    http_exc = exc.to_http()
    return ORJSONResponse(status_code=http_exc.status_code, content={"detail": http_exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Return validation errors with details and log them for debugging."""
    errors = exc.errors()
    logger.warning("Validation error at %s: %s", request.url.path, errors)
    field_errors = {
        ".".join(str(p) for p in err.get("loc", ())[1:]) or "body": err.get("type", "invalid")
        for err in errors
    }
    return ORJSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": {"message": "Invalid request", "field_errors": field_errors}},
    )


@app.get("/healthz", tags=["health"])
async def healthz():
    """Liveness check: process can respond; does not touch the DB."""
    return {
        "status": "ok",
        "uptime_s": round(time.time() - _BOOT_TS, 1),
        "pid": os.getpid(),
    }


api_prefix = settings.API_V1_STR  # usually "/api/v1"

app.include_router(api_rate.router, prefix=api_prefix)
app.include_router(api_quote.router, prefix=api_prefix)
app.include_router(api_crm.router, prefix=api_prefix)


@app.on_event("startup")
def prepare_database() -> None:
    init_db()
    if not settings.SEED_DEFAULT_RATES:
        return
    with get_db_session() as db:
        seed_default_rates(db)


@app.get("/")
async def root():
    return {"message": f"Welcome to the {settings.PROJECT_NAME}"}
