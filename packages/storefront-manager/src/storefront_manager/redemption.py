"""Client-side entry point for RedeemPromoWorkflow.

The order pipeline calls `redeem_promo` once an order carrying a promo code
is finalized:

    client = await connect()
    result = await redeem_promo(client, RedeemPromoRequest(...))

The workflow id is derived from the order and the code, and duplicate ids are
rejected, so retrying the same order never counts the code twice.
"""

from __future__ import annotations

import logging

from storefront_shared.discount_models import RedeemPromoRequest, RedeemPromoResult
from storefront_shared.task_queues import STOREFRONT_MANAGER_QUEUE
from temporalio.client import Client
from temporalio.common import WorkflowIDReusePolicy
from temporalio.exceptions import WorkflowAlreadyStartedError

from storefront_manager.promos import normalize_code
from storefront_manager.workflows.redeem import RedeemPromoWorkflow

logger = logging.getLogger(__name__)


def redemption_workflow_id(request: RedeemPromoRequest) -> str:
    return f"redeem-{request.order_id}-{normalize_code(request.code)}"


async def redeem_promo(client: Client, request: RedeemPromoRequest) -> RedeemPromoResult:
    """Run RedeemPromoWorkflow for a finalized order and wait for its result."""
    workflow_id = redemption_workflow_id(request)
    try:
        return await client.execute_workflow(
            RedeemPromoWorkflow.run,
            request,
            id=workflow_id,
            task_queue=STOREFRONT_MANAGER_QUEUE,
            id_reuse_policy=WorkflowIDReusePolicy.REJECT_DUPLICATE,
        )
    except WorkflowAlreadyStartedError:
        logger.warning(f"Redemption {workflow_id} already started; not counting it again")
        return RedeemPromoResult(
            success=False,
            message=f"{normalize_code(request.code)} already redeemed for order {request.order_id}",
            code=normalize_code(request.code),
            order_id=request.order_id,
        )
