"""AI Lesson Planner - FastAPI app entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.core.errors import (
    UpstreamError,
    http_exception_handler,
    internal_error_response,
    upstream_error_handler,
    validation_exception_handler,
)
from app.db.base import Base
from app.db.session import engine
from app.routers import auth, generate, plans, settings as settings_router

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

CORS_PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="AI-assisted lesson plans with Google sign-in",
    lifespan=lifespan,
)

app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(UpstreamError, upstream_error_handler)


@app.middleware("http")
async def catch_unhandled(request: Request, call_next):
    """Last-resort boundary: any fault becomes a 500 with diagnostics."""
    try:
        return await call_next(request)
    except Exception as exc:
        return internal_error_response(request, exc)


@app.middleware("http")
async def cors(request: Request, call_next):
    """Allow every origin with credentials; answer any OPTIONS with 204."""
    logger.info("Request: %s %s", request.method, request.url.path)
    cors_headers = {
        "Access-Control-Allow-Origin": settings.cors_allow_origin,
        "Access-Control-Allow-Credentials": "true",
    }
    if request.method == "OPTIONS":
        return Response(status_code=204, headers={**cors_headers, **CORS_PREFLIGHT_HEADERS})

    response = await call_next(request)
    response.headers.update(cors_headers)
    return response


app.include_router(auth.router, prefix=settings.api_prefix)
app.include_router(settings_router.router, prefix=settings.api_prefix)
app.include_router(generate.router, prefix=settings.api_prefix)
app.include_router(plans.router, prefix=settings.api_prefix)


@app.get("/health")
async def health():
    return {"status": "ok"}
