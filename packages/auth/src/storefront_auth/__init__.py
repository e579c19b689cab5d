"""Customer identity and sessions for both storefront surfaces.

This is a library, not a component: it has no task queue and no worker
process. The FastAPI app and the Azure Functions app construct it once from
an explicit AuthSettings and call it in-process.
"""
