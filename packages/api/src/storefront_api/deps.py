"""Route dependencies: the service context and the authenticated customer."""

from __future__ import annotations

from fastapi import Depends, Request
from storefront_manager.context import StorefrontContext
from storefront_manager.replies import auth_failure_reply
from storefront_shared.auth_models import CustomerIdentity

from storefront_api.responses import ReplyError


def get_context(request: Request) -> StorefrontContext:
    return request.app.state.storefront


def require_customer(
    request: Request, ctx: StorefrontContext = Depends(get_context)
) -> CustomerIdentity:
    """Run the request headers through the gate; 401 before the route body runs."""
    result = ctx.gate.authenticate(request.headers)
    if not result.success or result.identity is None:
        raise ReplyError(auth_failure_reply(result))
    return result.identity
