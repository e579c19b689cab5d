"""Promo code flows for the storefront checkout.

`check_promo` is what runs when a shopper types a code: normalize it, look it
up (inactive codes included, so the shopper hears "no longer active" rather
than "invalid"), and hand it to the evaluator. Nothing is redeemed here; that
happens in RedeemPromoWorkflow once the order is finalized.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from storefront_data_access.activities import lookup_discount
from storefront_pricing_engine.evaluator import evaluate
from storefront_shared.discount_models import (
    CheckPromoRequest,
    DiscountEvaluation,
    LookupDiscountRequest,
    LookupDiscountResult,
    PurchaseContext,
)

logger = logging.getLogger(__name__)


def normalize_code(code: str) -> str:
    """Codes are stored upper-case; the storefront input upper-cases as you type."""
    return code.strip().upper()


async def find_active_discount(code: str) -> LookupDiscountResult:
    """Public lookup by code. Deactivated codes are reported as absent."""
    return await lookup_discount(
        LookupDiscountRequest(code=normalize_code(code), active_only=True)
    )


async def check_promo(
    request: CheckPromoRequest, now: datetime | None = None
) -> DiscountEvaluation:
    """Evaluate a code against the shopper's current cart."""
    code = normalize_code(request.code)
    context = PurchaseContext(
        applies_to=request.applies_to,
        subtotal=request.subtotal,
        now=now or datetime.now(UTC),
    )
    if not code:
        return evaluate(None, context)

    found = await lookup_discount(LookupDiscountRequest(code=code))
    if not found.success:
        logger.error(f"Promo lookup failed for {code}: {found.message}")
        return DiscountEvaluation(success=False, message="Failed to validate code", code=code)

    evaluation = evaluate(found.discount, context)
    if evaluation.success:
        logger.info(f"Promo {code} accepted: {evaluation.amount} off {request.subtotal}")
    else:
        logger.info(f"Promo {code} rejected: {evaluation.reason}")
    return evaluation
