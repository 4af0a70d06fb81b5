import uuid
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from notestore.app import App
from notestore.config import Config
from notestore.errors import StorageError, UserError
from notestore.web.error_handlers import (
    general_exception_handler,
    http_exception_handler,
    request_validation_handler,
    storage_error_handler,
    user_error_handler,
)
from notestore.web.routers import health_router, notes_router


async def bind_request_context(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """Tag every log line emitted while serving a request with its id, method and path."""
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, method=request.method, path=request.url.path)
    response = await call_next(request)
    response.headers["x-request-id"] = request_id
    return response


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        app.state.app = app_instance
        app.state.config = config
        async with app_instance.lifespan():
            yield

    app = FastAPI(title="Notes API", version="0.1.0", lifespan=lifespan)

    app.middleware("http")(bind_request_context)

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PATCH", "DELETE"],
            allow_headers=["content-type"],
        )

    app.include_router(health_router, prefix="/api")
    app.include_router(notes_router, prefix="/api")

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    return app
