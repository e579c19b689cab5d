"""RedeemPromoWorkflow: Data Access → Pricing Engine → Data Access.

Runs once an order has been finalized with a promo code applied:

1. Data Access (data-access-queue): look the code up again. The checkout
   evaluation may be minutes old.
2. Pricing Engine (in-workflow, pure): re-evaluate against the final
   subtotal at workflow time.
3. Data Access: count the use with a conditional update. If another order
   took the last use in the meantime, the update matches no row and the
   redemption is refused rather than over-counted.

The workflow runs on storefront-manager-queue; the store activities are
dispatched to the Data Access worker via `task_queue=`. Orders start it
through `storefront_manager.redemption.redeem_promo`.
"""

from datetime import timedelta

from temporalio import workflow

with workflow.unsafe.imports_passed_through():
    from storefront_data_access.activities import lookup_discount, redeem_discount
    from storefront_pricing_engine.evaluator import evaluate
    from storefront_shared.discount_models import (
        LookupDiscountRequest,
        LookupDiscountResult,
        PurchaseContext,
        RedeemDiscountRequest,
        RedeemDiscountResult,
        RedeemPromoRequest,
        RedeemPromoResult,
    )
    from storefront_shared.task_queues import DATA_ACCESS_QUEUE


@workflow.defn
class RedeemPromoWorkflow:
    """Re-validates a promo code for a finalized order and counts the use."""

    @workflow.run
    async def run(self, request: RedeemPromoRequest) -> RedeemPromoResult:
        code = request.code.strip().upper()

        lookup: LookupDiscountResult = await workflow.execute_activity(
            lookup_discount,
            LookupDiscountRequest(code=code),
            task_queue=DATA_ACCESS_QUEUE,
            start_to_close_timeout=timedelta(seconds=30),
        )
        if not lookup.success:
            return RedeemPromoResult(
                success=False, message=lookup.message, code=code, order_id=request.order_id
            )

        evaluation = evaluate(
            lookup.discount,
            PurchaseContext(
                applies_to=request.applies_to,
                subtotal=request.subtotal,
                now=workflow.now(),
            ),
        )
        if not evaluation.success:
            return RedeemPromoResult(
                success=False,
                message=evaluation.message,
                code=code,
                order_id=request.order_id,
                reason=evaluation.reason,
            )

        redeemed: RedeemDiscountResult = await workflow.execute_activity(
            redeem_discount,
            RedeemDiscountRequest(code=code, order_id=request.order_id),
            task_queue=DATA_ACCESS_QUEUE,
            start_to_close_timeout=timedelta(seconds=30),
        )

        return RedeemPromoResult(
            success=redeemed.redeemed,
            message=redeemed.message,
            code=code,
            order_id=request.order_id,
            amount=evaluation.amount if redeemed.redeemed else 0.0,
            redeemed=redeemed.redeemed,
        )
