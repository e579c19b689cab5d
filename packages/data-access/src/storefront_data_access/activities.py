"""Data Access activities: the account store and the discount store.

Run on DATA_ACCESS_QUEUE. Each activity uses the SQLAlchemy Core query builder
with aioodbc for parameterized SQL against the storefront tables in Azure SQL.

Business verbs, not table verbs: callers ask to "find an account" or "redeem a
discount", never to "select from CustomerAccounts". Expected failures and
database errors come back as `success=False` results rather than exceptions,
so a Temporal caller never retries a business rejection.
"""

from __future__ import annotations

import secrets
import time
from datetime import UTC, datetime

from sqlalchemy import insert, or_, select, update
from storefront_shared.account_models import (
    CustomerAccount,
    EnrollAccountRequest,
    EnrollAccountResult,
    FindAccountRequest,
    FindAccountResult,
)
from storefront_shared.discount_models import (
    DiscountCode,
    LookupDiscountRequest,
    LookupDiscountResult,
    RedeemDiscountRequest,
    RedeemDiscountResult,
)
from temporalio import activity

from storefront_data_access.client import get_engine
from storefront_data_access.tables import customer_accounts, customers, discounts

# ============================================================================
# Helpers
# ============================================================================


def new_customer_id() -> str:
    """`cus-<epoch millis>-<8 random chars>`, the id format the admin tools expect."""
    return f"cus-{int(time.time() * 1000)}-{secrets.token_hex(4)}"


def _account_from_row(row) -> CustomerAccount:
    return CustomerAccount(
        id=row["id"],
        name=row["name"],
        email=row["email"],
        password_hash=row["passwordHash"],
        is_active=bool(row["isActive"]),
        created_at=row.get("createdAt"),
        updated_at=row.get("updatedAt"),
    )


# ============================================================================
# find_account
# ============================================================================


@activity.defn
async def find_account(request: FindAccountRequest) -> FindAccountResult:
    """Look up a customer account by (normalized) email."""
    activity.logger.info(f"Data Access: finding account for {request.email}")
    try:
        async with get_engine().begin() as conn:
            result = await conn.execute(
                select(customer_accounts).where(customer_accounts.c.email == request.email)
            )
            row = result.mappings().fetchone()
            if not row:
                return FindAccountResult(success=True, message="No account with that email")

            return FindAccountResult(
                success=True,
                message="Account found",
                account=_account_from_row(row),
            )
    except Exception as e:
        return FindAccountResult(success=False, message=f"find_account failed: {e}")


# ============================================================================
# enroll_account
# ============================================================================


@activity.defn
async def enroll_account(request: EnrollAccountRequest) -> EnrollAccountResult:
    """Create a customer account and, if the CRM has never seen the email, a
    CRM customer record. Both writes share one transaction."""
    activity.logger.info(f"Data Access: enrolling account for {request.email}")
    try:
        async with get_engine().begin() as conn:
            account_id = new_customer_id()
            # Azure SQL DATETIME columns are naive; store UTC.
            now = datetime.now(UTC).replace(tzinfo=None)

            await conn.execute(
                insert(customer_accounts).values(
                    id=account_id,
                    name=request.name,
                    email=request.email,
                    passwordHash=request.password_hash,
                    isActive=True,
                    createdAt=now,
                    updatedAt=now,
                )
            )

            existing = await conn.execute(
                select(customers.c.id).where(customers.c.email == request.email)
            )
            if not existing.fetchone():
                await conn.execute(
                    insert(customers).values(
                        id=account_id,
                        name=request.name,
                        email=request.email,
                        phone="",
                        segment="new",
                        totalSpent=0,
                        orderCount=0,
                        lastActive=now,
                        joinedAt=now,
                        tags="[]",
                        notes="",
                    )
                )

            return EnrollAccountResult(
                success=True,
                message="Account created",
                account=CustomerAccount(
                    id=account_id,
                    name=request.name,
                    email=request.email,
                    password_hash=request.password_hash,
                    is_active=True,
                    created_at=now,
                    updated_at=now,
                ),
            )
    except Exception as e:
        return EnrollAccountResult(success=False, message=f"enroll_account failed: {e}")


# ============================================================================
# lookup_discount
# ============================================================================


@activity.defn
async def lookup_discount(request: LookupDiscountRequest) -> LookupDiscountResult:
    """Fetch a promo code by its exact code.

    With `active_only` the store hides deactivated codes entirely (the public
    lookup route); without it the evaluator gets to say "no longer active".
    """
    try:
        async with get_engine().begin() as conn:
            query = select(discounts).where(discounts.c.code == request.code)
            if request.active_only:
                query = query.where(discounts.c.isActive == True)  # noqa: E712

            result = await conn.execute(query)
            row = result.mappings().fetchone()
            if not row:
                return LookupDiscountResult(
                    success=True, message=f"No discount with code {request.code}"
                )

            return LookupDiscountResult(
                success=True,
                message="Discount found",
                discount=DiscountCode.model_validate(dict(row)),
            )
    except Exception as e:
        return LookupDiscountResult(success=False, message=f"lookup_discount failed: {e}")


# ============================================================================
# redeem_discount
# ============================================================================


@activity.defn
async def redeem_discount(request: RedeemDiscountRequest) -> RedeemDiscountResult:
    """Count one use of a promo code, atomically.

    The usage check and the increment are a single conditional UPDATE, so two
    orders racing for the last use cannot both succeed: the loser updates zero
    rows and gets `redeemed=False`.
    """
    activity.logger.info(
        f"Data Access: redeeming {request.code} for order {request.order_id or '-'}"
    )
    try:
        async with get_engine().begin() as conn:
            result = await conn.execute(
                update(discounts)
                .where(
                    discounts.c.code == request.code,
                    discounts.c.isActive == True,  # noqa: E712
                    or_(
                        discounts.c.maxUses.is_(None),
                        discounts.c.usedCount < discounts.c.maxUses,
                    ),
                )
                .values(usedCount=discounts.c.usedCount + 1)
            )
            if result.rowcount != 1:
                return RedeemDiscountResult(
                    success=False,
                    message=f"{request.code}: usage limit reached or code inactive",
                    code=request.code,
                )

            return RedeemDiscountResult(
                success=True,
                message=f"{request.code} redeemed",
                code=request.code,
                redeemed=True,
            )
    except Exception as e:
        return RedeemDiscountResult(
            success=False, message=f"redeem_discount failed: {e}", code=request.code
        )
