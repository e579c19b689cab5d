"""Customer account flows: signup, login, and "who am I".

Flows call the account store activities in-process (they are plain async
functions) and report every expected failure through AccountResult.error, so
both HTTP surfaces can map them to the same status codes via replies.py.

Password hashing is CPU-bound scrypt, so it runs in a worker thread to keep
the event loop responsive.
"""

from __future__ import annotations

import asyncio
import logging
import re

from storefront_data_access.activities import enroll_account, find_account
from storefront_shared.account_models import (
    AccountResult,
    EnrollAccountRequest,
    FindAccountRequest,
    LogInRequest,
    SignUpRequest,
)
from storefront_shared.auth_models import CustomerIdentity

from storefront_manager.context import StorefrontContext

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 8

INVALID_INPUT = "invalid_input"
CONFLICT = "conflict"
INVALID_CREDENTIALS = "invalid_credentials"
ACCOUNT_DISABLED = "account_disabled"
STORE_FAILURE = "store_failure"


def normalize_email(value: str) -> str:
    return value.strip().lower()


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def _failure(error: str, message: str) -> AccountResult:
    return AccountResult(success=False, message=message, error=error)


async def sign_up(request: SignUpRequest, ctx: StorefrontContext) -> AccountResult:
    """Create an account and issue its first session token."""
    name = request.name.strip()
    email = normalize_email(request.email)
    password = request.password

    if not name:
        return _failure(INVALID_INPUT, "Name is required")
    if not is_valid_email(email):
        return _failure(INVALID_INPUT, "Valid email is required")
    if len(password) < MIN_PASSWORD_LENGTH:
        return _failure(INVALID_INPUT, "Password must be at least 8 characters")

    existing = await find_account(FindAccountRequest(email=email))
    if not existing.success:
        logger.error(f"Signup lookup failed: {existing.message}")
        return _failure(STORE_FAILURE, "Failed to create account")
    if existing.account:
        return _failure(CONFLICT, "An account with this email already exists")

    password_hash = await asyncio.to_thread(ctx.passwords.hash, password)
    enrolled = await enroll_account(
        EnrollAccountRequest(name=name, email=email, password_hash=password_hash)
    )
    if not enrolled.success or enrolled.account is None:
        logger.error(f"Signup enrollment failed: {enrolled.message}")
        return _failure(STORE_FAILURE, "Failed to create account")

    user = enrolled.account.to_identity()
    logger.info(f"Customer signed up: {user.id}")
    return AccountResult(
        success=True,
        message="Account created",
        token=ctx.tokens.sign(user),
        user=user,
    )


async def log_in(request: LogInRequest, ctx: StorefrontContext) -> AccountResult:
    """Check credentials and issue a fresh session token.

    Unknown email and wrong password share one message so the response does
    not reveal which emails have accounts.
    """
    email = normalize_email(request.email)
    password = request.password

    if not is_valid_email(email):
        return _failure(INVALID_INPUT, "Valid email is required")
    if not password:
        return _failure(INVALID_INPUT, "Password is required")

    found = await find_account(FindAccountRequest(email=email))
    if not found.success:
        logger.error(f"Login lookup failed: {found.message}")
        return _failure(STORE_FAILURE, "Failed to log in")

    account = found.account
    if account is None:
        return _failure(INVALID_CREDENTIALS, "Invalid email or password")
    if not account.is_active:
        return _failure(ACCOUNT_DISABLED, "Account is disabled")

    verified = await asyncio.to_thread(ctx.passwords.verify, password, account.password_hash)
    if not verified:
        logger.info(f"Failed login for account {account.id}")
        return _failure(INVALID_CREDENTIALS, "Invalid email or password")

    user = account.to_identity()
    return AccountResult(
        success=True,
        message="Logged in",
        token=ctx.tokens.sign(user),
        user=user,
    )


def current_customer(identity: CustomerIdentity) -> AccountResult:
    """The customer the gate authenticated. No store round trip."""
    return AccountResult(success=True, message="Authenticated", user=identity)
