# -*- coding: utf-8 -*-
"""
Food diary REST API.

Public: /api/register, /api/login, /health.
Bearer-token protected: /api/profile, /api/food-records[/{id}].
"""

from __future__ import annotations

import logging
import sqlite3

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import responses
from .app_db import init_app_db
from .auth.api import router as auth_router
from .auth.security import get_current_user_from_request
from .config import settings
from .records.api import router as records_router

logger = logging.getLogger(__name__)

STORAGE_ERROR = "Internal storage error"

app = FastAPI(
    title="Food Diary",
    description="Personal food diary: accounts and dated meal records",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

# Create tables at import so test clients work without lifespan events.
init_app_db(settings.app_db_path)


_PROTECTED_PREFIXES = (
    "/api/profile",
    "/api/food-records",
)


@app.middleware("http")
async def _auth_gate(request: Request, call_next):
    path = request.url.path
    if request.method != "OPTIONS" and any(path.startswith(p) for p in _PROTECTED_PREFIXES):
        try:
            request.state.user = get_current_user_from_request(request)
        except HTTPException as exc:
            logger.warning("Rejected %s %s: %s", request.method, path, exc.detail)
            return responses.error(str(exc.detail), exc.status_code)
        except sqlite3.Error as exc:
            logger.error("Storage failure authenticating %s %s: %s", request.method, path, exc)
            return responses.error(STORAGE_ERROR, 500)
    return await call_next(request)


# Registered after the auth gate so it wraps it and 401s still carry CORS headers.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Origin", "Content-Type", "Accept", "Authorization"],
)


@app.exception_handler(StarletteHTTPException)
async def _http_error(request: Request, exc: StarletteHTTPException):
    return responses.error(str(exc.detail), exc.status_code)


@app.exception_handler(RequestValidationError)
async def _validation_error(request: Request, exc: RequestValidationError):
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return responses.error("Invalid request parameters: " + "; ".join(parts), 400)


@app.exception_handler(sqlite3.Error)
async def _storage_error(request: Request, exc: sqlite3.Error):
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return responses.error(STORAGE_ERROR, 500)


app.include_router(auth_router)
app.include_router(records_router)


@app.get("/health")
def health() -> dict:
    return {"status": "ok", "message": "Food diary service is running"}


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting food diary API on %s:%s", settings.host, settings.port)
    uvicorn.run("food_diary.api:app", host=settings.host, port=settings.port, reload=False)
