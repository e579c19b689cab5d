"""Pydantic base models shared across components.

These serve as the contract types that flow between the HTTP surfaces, the
manager flows, workflows and activities. Using Pydantic gives us validation at
component boundaries: a bad discount record or a malformed request fails fast
with a clear error rather than propagating garbage downstream.
"""

from pydantic import BaseModel


class StorefrontResult(BaseModel):
    """Standard result envelope returned by boundary operations.

    Every activity and manager flow returns this (or a subclass) so callers
    have a consistent interface for checking success/failure without catching
    exceptions for expected business failures (rejected promo codes, taken
    emails, wrong passwords).
    """

    success: bool
    message: str
