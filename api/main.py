import logging
import os
from contextlib import asynccontextmanager

import asyncpg
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from auth import router as auth_router
from cats import router as cats_router
from core import db, validation
from core.errors import AppError, ValidationError
from core.logging_config import configure_logging
from users import router as users_router

configure_logging()
logger = logging.getLogger(__name__)


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return ["http://localhost:5173", "http://127.0.0.1:5173"]
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(exc: AppError) -> JSONResponse:
    content: dict = {"detail": exc.message}
    if isinstance(exc, ValidationError):
        content["errors"] = [
            {"field": e.field, "rule": e.rule, "message": e.message} for e in exc.errors
        ]
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request_failed method=%s path=%s detail=%s", request.method, request.url.path, exc.message)
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(ValidationError(validation.field_errors(exc.errors())))


@app.exception_handler(asyncpg.PostgresError)
async def storage_error_handler(request: Request, exc: asyncpg.PostgresError) -> JSONResponse:
    # Storage internals stay in the log.
    logger.exception("storage_error method=%s path=%s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.include_router(auth_router.router, tags=["auth"])
app.include_router(users_router.router, tags=["users"])
app.include_router(cats_router.router, tags=["cats"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "cat registry api"}
