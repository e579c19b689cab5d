"""Component registry: maps component names to their workflows and activities.

This is the lookup table the runner uses to decide what to register on a
worker. Each entry specifies:

- task_queue: Which Temporal task queue this worker polls
- workflows: Workflow classes to register (only the Storefront Manager has these)
- activities: Activity functions to register

The auth and pricing engines are not here: they are libraries called
in-process by the HTTP surfaces and by RedeemPromoWorkflow itself.
"""

from dataclasses import dataclass, field
from typing import Any

from storefront_data_access.activities import (
    enroll_account,
    find_account,
    lookup_discount,
    redeem_discount,
)
from storefront_manager.workflows.redeem import RedeemPromoWorkflow
from storefront_shared.task_queues import DATA_ACCESS_QUEUE, STOREFRONT_MANAGER_QUEUE


@dataclass
class ComponentConfig:
    """Configuration for a single component's worker."""

    task_queue: str
    workflows: list[Any] = field(default_factory=list)
    activities: list[Any] = field(default_factory=list)


COMPONENTS: dict[str, ComponentConfig] = {
    "storefront-manager": ComponentConfig(
        task_queue=STOREFRONT_MANAGER_QUEUE,
        workflows=[RedeemPromoWorkflow],
    ),
    "data-access": ComponentConfig(
        task_queue=DATA_ACCESS_QUEUE,
        activities=[find_account, enroll_account, lookup_discount, redeem_discount],
    ),
}
