"""
FastAPI app entry point aggregating per-entity routers under factchecker/routes.
Keep as `uvicorn factchecker.api:app`.
"""
from __future__ import annotations

import logging
import sqlite3
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from . import __version__
from .config import get_log_level, get_port
from .db import Store, ensure_schema
from .errors import AppError, DuplicateError
from .logs import ensure_log_schema

logger = logging.getLogger(__name__)


def _error_body(message, status: int) -> dict:
    return {"error": {"message": message, "status": status}}


def create_app(db_path: str | None = None) -> FastAPI:
    logging.getLogger("factchecker").setLevel(get_log_level())
    store = Store(db_path)

    def _startup():
        store.open()
        ensure_schema(store)
        ensure_log_schema(store)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await run_in_threadpool(_startup)
        app.state.store = store
        try:
            yield
        finally:
            await run_in_threadpool(store.close)

    app = FastAPI(title="factchecker-api", version=__version__, lifespan=lifespan)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message, exc.status_code))

    @app.exception_handler(sqlite3.IntegrityError)
    async def integrity_error_handler(request: Request, exc: sqlite3.IntegrityError):
        # constraint backstop for a duplicate that slipped past the service check
        msg = str(exc)
        if "UNIQUE" in msg or "PRIMARY KEY" in msg:
            err = DuplicateError(f"Duplicate: {msg}")
        else:
            logger.error("%s %s failed: %s", request.method, request.url.path, msg)
            err = AppError(msg, 500)
        return JSONResponse(status_code=err.status_code, content=_error_body(err.message, err.status_code))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errs = [
            f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg', '')}"
            for e in exc.errors()
        ]
        return JSONResponse(status_code=400, content=_error_body(errs, 400))

    # Include routers (split by entity)
    from .routes import auth as auth_routes
    from .routes import base as base_routes
    from .routes import companies as companies_routes
    from .routes import jobs as jobs_routes
    from .routes import logs as logs_routes
    from .routes import posts as posts_routes
    from .routes import topics as topics_routes
    from .routes import users as users_routes

    app.include_router(base_routes.router)
    app.include_router(auth_routes.router)
    app.include_router(companies_routes.router)
    app.include_router(jobs_routes.router)
    app.include_router(users_routes.router)
    app.include_router(topics_routes.router)
    app.include_router(posts_routes.router)
    app.include_router(logs_routes.router)

    return app


app = create_app()


def main():
    import uvicorn

    uvicorn.run("factchecker.api:app", host="0.0.0.0", port=get_port())
