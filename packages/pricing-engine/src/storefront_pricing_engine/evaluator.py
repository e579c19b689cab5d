"""Promo code evaluation.

`evaluate()` is a pure decision function: given the stored discount (or None
when the lookup found nothing) and what the customer is buying, it returns a
DiscountEvaluation. It never touches the database and never bumps
`usedCount`; redemption is a separate conditional update in Data Access,
run only once an order is finalized.

Checks run in a fixed order and the first failure wins:

    1. exists / is active        -> CODE_NOT_FOUND / CODE_INACTIVE
    2. scope                     -> SCOPE_MISMATCH
    3. now <= end date           -> EXPIRED
    4. now >= start date         -> NOT_YET_ACTIVE
    5. usedCount < maxUses       -> USAGE_LIMIT_REACHED
    6. subtotal >= minPurchase   -> MINIMUM_PURCHASE_NOT_MET

Each reason maps to its own storefront message, so a shopper always learns
exactly why their code was refused.
"""

from __future__ import annotations

import math

from storefront_shared.discount_models import (
    DiscountCode,
    DiscountEvaluation,
    DiscountRejection,
    PurchaseContext,
)


def format_money(amount: float) -> str:
    """`5000` -> `5,000`; `49.5` -> `49.50`."""
    if float(amount).is_integer():
        return f"{amount:,.0f}"
    return f"{amount:,.2f}"


def _reject(
    reason: DiscountRejection,
    message: str,
    code: str | None = None,
    **extra: object,
) -> DiscountEvaluation:
    return DiscountEvaluation(success=False, message=message, code=code, reason=reason, **extra)


def discount_amount(discount: DiscountCode, subtotal: float) -> float:
    """What comes off `subtotal`. Never negative, never more than the subtotal."""
    if discount.type == "percentage":
        # Half-up, matching the storefront's displayed totals.
        amount = math.floor(subtotal * discount.value / 100 + 0.5)
    else:
        amount = discount.value
    return float(max(0, min(amount, subtotal)))


def evaluate(discount: DiscountCode | None, context: PurchaseContext) -> DiscountEvaluation:
    """Decide whether `discount` can be redeemed against `context`."""
    if discount is None:
        return _reject(DiscountRejection.CODE_NOT_FOUND, "Invalid promo code")

    code = discount.code
    if not discount.is_active:
        return _reject(DiscountRejection.CODE_INACTIVE, "This code is no longer active", code)

    if discount.applies_to != "all" and discount.applies_to != context.applies_to:
        return _reject(
            DiscountRejection.SCOPE_MISMATCH,
            f"This code applies to {discount.applies_to} only",
            code,
            required_scope=discount.applies_to,
        )

    if context.now > discount.end_date:
        return _reject(DiscountRejection.EXPIRED, "This code has expired", code)

    if context.now < discount.start_date:
        return _reject(DiscountRejection.NOT_YET_ACTIVE, "This code is not yet active", code)

    if discount.max_uses is not None and discount.used_count >= discount.max_uses:
        return _reject(
            DiscountRejection.USAGE_LIMIT_REACHED, "This code has reached its usage limit", code
        )

    # minPurchase of 0 is stored by the admin form for "no minimum".
    if discount.min_purchase and context.subtotal < discount.min_purchase:
        return _reject(
            DiscountRejection.MINIMUM_PURCHASE_NOT_MET,
            f"Minimum purchase of {discount.currency} {format_money(discount.min_purchase)} required",
            code,
            minimum_purchase=discount.min_purchase,
        )

    amount = discount_amount(discount, context.subtotal)
    return DiscountEvaluation(
        success=True,
        message=f"{code} applied: {discount.currency} {format_money(amount)} off",
        code=code,
        amount=amount,
    )
