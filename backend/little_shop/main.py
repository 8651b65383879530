"""
Little Shop - Backend API
Merchants, items and coupons
"""
import logging
from contextlib import asynccontextmanager

import psycopg2
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Load environment variables before settings are read
load_dotenv()

from little_shop.api import coupons, items, merchants, serializers
from little_shop.core.config import settings
from little_shop.core.database import get_db_connection_dict_with_retry, init_db
from little_shop.core.errors import LittleShopError
from little_shop.core.logging_config import setup_logging

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.CREATE_TABLES_ON_STARTUP:
        init_db()
    logger.info(f"{settings.API_TITLE} {settings.API_VERSION} started")
    yield


app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION,
    debug=settings.API_DEBUG,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)


# ============================================================================
# Error envelope
# ============================================================================

@app.exception_handler(LittleShopError)
async def little_shop_error_handler(request: Request, exc: LittleShopError):
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.messages}")
    return JSONResponse(
        status_code=exc.status_code,
        content=serializers.error_body(exc.envelope_errors())
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are 422; malformed query strings and path ids are 400"""
    messages = []
    in_query = False
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location) or "request"
        messages.append(f"{field}: {error.get('msg')}")
        in_query = in_query or error.get("loc", ("",))[0] in ("query", "path")

    return JSONResponse(
        status_code=400 if in_query else 422,
        content=serializers.error_body(messages)
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=serializers.error_body(["Internal server error"])
    )


# ============================================================================
# Routers
# ============================================================================

app.include_router(items.router, prefix="/api/v1/items", tags=["Items"])
app.include_router(merchants.router, prefix="/api/v1/merchants", tags=["Merchants"])
app.include_router(coupons.router, prefix="/api/v1/merchants", tags=["Coupons"])


@app.get("/")
async def root():
    return {
        "message": settings.API_TITLE,
        "status": "online",
        "version": settings.API_VERSION
    }


@app.get("/health")
def health():
    """Liveness plus a single-attempt database round trip"""
    try:
        conn = get_db_connection_dict_with_retry(max_retries=1, retry_delay=0)
        try:
            with conn.cursor() as cursor:
                cursor.execute("SELECT 1")
        finally:
            conn.close()
    except psycopg2.Error as e:
        logger.warning(f"Health check could not reach the database: {e}")
        return {"status": "degraded", "version": settings.API_VERSION, "database": "disconnected"}

    return {"status": "healthy", "version": settings.API_VERSION, "database": "connected"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("little_shop.main:app", host=settings.API_HOST, port=settings.API_PORT)
