"""FastAPI application factory.

`create_app(settings)` wires the routers, CORS and the error handlers around
one StorefrontContext. `create_app_from_env` is the uvicorn factory; it
reads AUTH_JWT_SECRET at startup so a missing secret stops the process
before the first request.

    uvicorn --factory storefront_api.app:create_app_from_env
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from storefront_auth.settings import AuthSettings
from storefront_manager.context import StorefrontContext
from storefront_manager.replies import (
    CORS_ALLOW_HEADERS,
    CORS_ALLOW_METHODS,
    invalid_body_reply,
)

from storefront_api.responses import ReplyError, to_response
from storefront_api.routes import auth, discounts

logger = logging.getLogger(__name__)


async def _reply_error(request: Request, exc: ReplyError) -> JSONResponse:
    return to_response(exc.reply)


async def _invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"Rejected {request.method} {request.url.path}: invalid body")
    return to_response(invalid_body_reply())


def create_app(settings: AuthSettings, context: StorefrontContext | None = None) -> FastAPI:
    app = FastAPI(
        title="Storefront API",
        description="Customer accounts and promo codes for the storefront",
        version="1.0.0",
    )
    app.state.storefront = context or StorefrontContext.from_settings(settings)

    app.include_router(auth.router, prefix="/api")
    app.include_router(discounts.router, prefix="/api")

    app.add_exception_handler(ReplyError, _reply_error)
    app.add_exception_handler(RequestValidationError, _invalid_body)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=CORS_ALLOW_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
    )
    return app


def create_app_from_env() -> FastAPI:
    return create_app(AuthSettings.from_env())
