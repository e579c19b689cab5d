"""HTTP-triggered functions for customer auth and promo codes.

Each handler mirrors the FastAPI route of the same path: same gate, same
flows, same JsonReply mapping, so the two deployments answer identically.
The Functions host adds the `api/` prefix to every route.

Handlers are methods on StorefrontFunctions so they share one explicitly
built StorefrontContext; `register(app)` binds them to a FunctionApp.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

import azure.functions as func
from storefront_manager.accounts import current_customer, log_in, sign_up
from storefront_manager.context import StorefrontContext
from storefront_manager.promos import check_promo, find_active_discount
from storefront_manager.replies import (
    JsonReply,
    account_reply,
    auth_failure_reply,
    discount_reply,
    evaluation_reply,
)
from storefront_shared.account_models import LogInRequest, SignUpRequest
from storefront_shared.discount_models import CheckPromoRequest

from storefront_functions.http import handle_options, parse_body, to_http_response

logger = logging.getLogger(__name__)

Handler = Callable[[func.HttpRequest], Awaitable[func.HttpResponse]]


class StorefrontFunctions:
    """The storefront's function-per-route handlers."""

    def __init__(self, ctx: StorefrontContext) -> None:
        self.ctx = ctx

    def routes(self) -> list[tuple[str, str, list[str], Handler]]:
        """(function name, route, methods, handler) for every function."""
        return [
            ("auth-signup", "auth/signup", ["POST", "OPTIONS"], self.signup),
            ("auth-login", "auth/login", ["POST", "OPTIONS"], self.login),
            ("auth-me", "auth/me", ["GET", "OPTIONS"], self.me),
            ("discounts-get-code", "discounts/code/{code}", ["GET", "OPTIONS"], self.discount_by_code),
            ("discounts-validate", "discounts/validate", ["POST", "OPTIONS"], self.validate_promo),
        ]

    def register(self, app: func.FunctionApp) -> None:
        for name, route, methods, handler in self.routes():
            app.function_name(name=name)(
                app.route(route=route, methods=methods)(_trigger(handler))
            )

    async def signup(self, req: func.HttpRequest) -> func.HttpResponse:
        if req.method == "OPTIONS":
            return handle_options()
        body = parse_body(req, SignUpRequest)
        if isinstance(body, JsonReply):
            return to_http_response(body)
        return to_http_response(account_reply(await sign_up(body, self.ctx), success_status=201))

    async def login(self, req: func.HttpRequest) -> func.HttpResponse:
        if req.method == "OPTIONS":
            return handle_options()
        body = parse_body(req, LogInRequest)
        if isinstance(body, JsonReply):
            return to_http_response(body)
        return to_http_response(account_reply(await log_in(body, self.ctx)))

    async def me(self, req: func.HttpRequest) -> func.HttpResponse:
        if req.method == "OPTIONS":
            return handle_options()
        result = self.ctx.gate.authenticate(req.headers)
        if not result.success or result.identity is None:
            return to_http_response(auth_failure_reply(result))
        return to_http_response(account_reply(current_customer(result.identity)))

    async def discount_by_code(self, req: func.HttpRequest) -> func.HttpResponse:
        if req.method == "OPTIONS":
            return handle_options()
        code = req.route_params.get("code", "")
        return to_http_response(discount_reply(await find_active_discount(code)))

    async def validate_promo(self, req: func.HttpRequest) -> func.HttpResponse:
        if req.method == "OPTIONS":
            return handle_options()
        body = parse_body(req, CheckPromoRequest)
        if isinstance(body, JsonReply):
            return to_http_response(body)
        return to_http_response(evaluation_reply(await check_promo(body)))


def _trigger(handler: Handler) -> Handler:
    """Plain-function wrapper: the Functions indexer wants a `req` parameter."""

    async def trigger(req: func.HttpRequest) -> func.HttpResponse:
        return await handler(req)

    trigger.__name__ = handler.__name__
    return trigger


def create_function_app(ctx: StorefrontContext) -> func.FunctionApp:
    app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)
    StorefrontFunctions(ctx).register(app)
    logger.info("Storefront functions registered")
    return app
