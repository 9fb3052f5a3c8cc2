from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Literal

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from expensetracker.app import App
from expensetracker.config import Config
from expensetracker.errors import UserError
from expensetracker.web.error_handlers import general_exception_handler, request_validation_handler, user_error_handler
from expensetracker.web.openapi import set_custom_openapi
from expensetracker.web.routers import auth_router, expenses_router


class HealthResponse(BaseModel):
    status: Literal["OK"] = "OK"


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        async with app_instance.lifespan():
            yield

    app = FastAPI(
        title="Expense Tracker API",
        lifespan=lifespan,
    )
    # Available before lifespan runs so error handlers can always reach it
    app.state.app = app_instance
    app.state.config = config

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
            allow_headers=["Content-Type", "Authorization"],
        )

    # Health check endpoint (at root level, not under /api)
    @app.get("/health", tags=["health"])
    async def health_check() -> HealthResponse:
        return HealthResponse()

    app.include_router(auth_router, prefix="/api")
    app.include_router(expenses_router, prefix="/api")

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    return app
