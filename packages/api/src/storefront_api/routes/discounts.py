"""Promo code routes: public lookup by code and checkout validation."""

from fastapi import APIRouter
from storefront_manager.promos import check_promo, find_active_discount
from storefront_manager.replies import discount_reply, evaluation_reply
from storefront_shared.discount_models import CheckPromoRequest

from storefront_api.responses import to_response

router = APIRouter(prefix="/discounts", tags=["Discounts"])


@router.get("/code/{code}", summary="Active discount by code, or null")
async def get_by_code(code: str):
    return to_response(discount_reply(await find_active_discount(code)))


@router.post("/validate", summary="Check a promo code against a cart")
async def validate(body: CheckPromoRequest):
    return to_response(evaluation_reply(await check_promo(body)))
