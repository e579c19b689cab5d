"""Task queue name constants for each component.

Every component that runs on a Temporal worker gets its own task queue. The
auth and pricing engines are plain libraries: they have no queue and no worker
process, because both HTTP surfaces call them in-process.

These constants are the single source of truth for queue names. Both the worker
runner (which starts workers listening on the right queue) and the workflow
definitions (which dispatch activities to the right queue) reference these.
"""

# Manager: runs workflows that orchestrate activities across other queues
STOREFRONT_MANAGER_QUEUE = "storefront-manager-queue"

# Resource Access: storage abstraction activities
DATA_ACCESS_QUEUE = "data-access-queue"
