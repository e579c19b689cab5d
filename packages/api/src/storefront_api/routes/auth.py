"""Customer auth routes: /api/auth/signup, /api/auth/login, /api/auth/me."""

from fastapi import APIRouter, Depends
from storefront_manager.accounts import current_customer, log_in, sign_up
from storefront_manager.context import StorefrontContext
from storefront_manager.replies import account_reply
from storefront_shared.account_models import LogInRequest, SignUpRequest
from storefront_shared.auth_models import CustomerIdentity

from storefront_api.deps import get_context, require_customer
from storefront_api.responses import to_response

router = APIRouter(prefix="/auth", tags=["Customer auth"])


@router.post("/signup", summary="Create a customer account")
async def signup(body: SignUpRequest, ctx: StorefrontContext = Depends(get_context)):
    return to_response(account_reply(await sign_up(body, ctx), success_status=201))


@router.post("/login", summary="Log in and get a session token")
async def login(body: LogInRequest, ctx: StorefrontContext = Depends(get_context)):
    return to_response(account_reply(await log_in(body, ctx)))


@router.get("/me", summary="The customer behind the bearer token")
async def me(user: CustomerIdentity = Depends(require_customer)):
    return to_response(account_reply(current_customer(user)))
