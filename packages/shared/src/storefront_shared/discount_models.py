"""Promo code boundary models: the contract between the surfaces, the pricing
engine, the storefront manager and Data Access.

Design choices:
  - DiscountCode mirrors a row of the Discounts table. The storefront and the
    database speak camelCase (`appliesTo`, `minPurchase`), so every model here
    uses a camelCase alias generator while still accepting snake_case names.
  - Datetimes are normalized to UTC-aware values on the way in. Azure SQL
    hands back naive datetimes, and comparing naive with aware raises.
  - Rejection reasons are a closed enum because the storefront shows a
    distinct message for each one.
  - All Results extend StorefrontResult for consistent success/failure handling.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from storefront_shared.models import StorefrontResult

DiscountType = Literal["percentage", "fixed"]
DiscountScope = Literal["products", "events", "tickets", "all"]
PurchaseScope = Literal["products", "events", "tickets"]


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Domain objects
# ============================================================================


class DiscountCode(_CamelModel):
    """A promo code as stored by the discount store. Read-only to the evaluator."""

    id: str | None = None
    code: str
    description: str = ""
    type: DiscountType
    value: float
    currency: str = "BDT"
    applies_to: DiscountScope = "all"
    min_purchase: float | None = None
    max_uses: int | None = None
    used_count: int = 0
    start_date: datetime
    end_date: datetime
    is_active: bool = True

    @field_validator("description", "currency", mode="before")
    @classmethod
    def _null_to_default(cls, value: object, info: ValidationInfo) -> object:
        # Nullable columns; the admin form can write NULL into either.
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    @field_validator("start_date", "end_date")
    @classmethod
    def _normalize_dates(cls, value: datetime) -> datetime:
        return _as_utc(value)


class PurchaseContext(_CamelModel):
    """What the customer is buying when they present a code."""

    applies_to: PurchaseScope
    subtotal: float
    now: datetime

    @field_validator("now")
    @classmethod
    def _normalize_now(cls, value: datetime) -> datetime:
        return _as_utc(value)


class DiscountRejection(StrEnum):
    """Why a code cannot be redeemed, in evaluation order."""

    CODE_NOT_FOUND = "code_not_found"
    CODE_INACTIVE = "code_inactive"
    SCOPE_MISMATCH = "scope_mismatch"
    EXPIRED = "expired"
    NOT_YET_ACTIVE = "not_yet_active"
    USAGE_LIMIT_REACHED = "usage_limit_reached"
    MINIMUM_PURCHASE_NOT_MET = "minimum_purchase_not_met"


class DiscountEvaluation(StorefrontResult):
    """Evaluator verdict. On success `amount` is what comes off the subtotal."""

    code: str | None = None
    reason: DiscountRejection | None = None
    amount: float = 0.0
    minimum_purchase: float | None = None  # only for MINIMUM_PURCHASE_NOT_MET
    required_scope: DiscountScope | None = None  # only for SCOPE_MISMATCH


# ============================================================================
# Request/Result pairs
# ============================================================================


class CheckPromoRequest(_CamelModel):
    """A shopper typing a code into the cart or ticket checkout."""

    code: str
    applies_to: PurchaseScope
    subtotal: float


class LookupDiscountRequest(BaseModel):
    code: str
    active_only: bool = False


class LookupDiscountResult(StorefrontResult):
    discount: DiscountCode | None = None


class RedeemDiscountRequest(BaseModel):
    code: str
    order_id: str | None = None


class RedeemDiscountResult(StorefrontResult):
    code: str
    redeemed: bool = False


class RedeemPromoRequest(_CamelModel):
    """Input to RedeemPromoWorkflow, sent once an order has been finalized."""

    code: str
    order_id: str
    applies_to: PurchaseScope
    subtotal: float


class RedeemPromoResult(StorefrontResult):
    code: str
    order_id: str
    reason: DiscountRejection | None = None
    amount: float = 0.0
    redeemed: bool = False
