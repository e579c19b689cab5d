"""Customer account boundary models: the contract between the storefront
manager flows and the account store in Data Access.

Request/Result pairs follow the same pattern as discount_models.py. Account
flows report expected failures through `AccountResult.error` rather than
exceptions; the HTTP surfaces map those codes to status codes.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from storefront_shared.auth_models import CustomerIdentity
from storefront_shared.models import StorefrontResult


class CustomerAccount(BaseModel):
    """A row of CustomerAccounts. `password_hash` is a stored credential."""

    id: str
    name: str
    email: str
    password_hash: str
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_identity(self) -> CustomerIdentity:
        return CustomerIdentity(id=self.id, email=self.email, name=self.name)


# ============================================================================
# Account store Request/Result pairs
# ============================================================================


class FindAccountRequest(BaseModel):
    email: str


class FindAccountResult(StorefrontResult):
    account: CustomerAccount | None = None


class EnrollAccountRequest(BaseModel):
    name: str
    email: str
    password_hash: str


class EnrollAccountResult(StorefrontResult):
    account: CustomerAccount | None = None


# ============================================================================
# Account flows
# ============================================================================


class SignUpRequest(BaseModel):
    """Signup form body. Fields default to empty so validation owns the errors."""

    name: str = ""
    email: str = ""
    password: str = ""


class LogInRequest(BaseModel):
    email: str = ""
    password: str = ""


class AccountResult(StorefrontResult):
    """Outcome of signup/login.

    `error` is one of invalid_input, conflict, invalid_credentials,
    account_disabled, store_failure; None on success.
    """

    error: str | None = None
    token: str | None = None
    user: CustomerIdentity | None = None
