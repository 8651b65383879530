"""
Merchant Coupons API Endpoints

Every route is nested under a merchant, and coupons are only ever looked up
through that merchant.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from little_shop.api import serializers
from little_shop.api.dependencies import get_coupon_lifecycle_service, get_coupon_service
from little_shop.domain.coupon import CouponCreate
from little_shop.services.coupon_lifecycle_service import CouponLifecycleService
from little_shop.services.coupon_service import CouponService

router = APIRouter()


# Request models
class CouponCreateRequest(BaseModel):
    coupon: CouponCreate


@router.get("/{merchant_id}/coupons")
def list_coupons(
    merchant_id: int,
    status: Optional[str] = Query(None, description="Filter by status (active, inactive)"),
    service: CouponService = Depends(get_coupon_service)
):
    coupons = service.list_coupons(merchant_id, status=status)
    return serializers.many(serializers.coupon_resource, coupons)


@router.get("/{merchant_id}/coupons/{coupon_id}")
def get_coupon(
    merchant_id: int,
    coupon_id: int,
    service: CouponService = Depends(get_coupon_service)
):
    return serializers.one(serializers.coupon_resource, service.get_coupon(merchant_id, coupon_id))


@router.post("/{merchant_id}/coupons", status_code=201)
def create_coupon(
    merchant_id: int,
    body: CouponCreateRequest,
    service: CouponService = Depends(get_coupon_service)
):
    coupon = service.create_coupon(merchant_id, body.coupon)
    return {
        "message": "Coupon saved successfully!",
        "data": serializers.coupon_resource(coupon)
    }


@router.patch("/{merchant_id}/coupons/{coupon_id}/activate")
def activate_coupon(
    merchant_id: int,
    coupon_id: int,
    service: CouponLifecycleService = Depends(get_coupon_lifecycle_service)
):
    coupon = service.activate(merchant_id, coupon_id)
    return {
        "message": "Coupon activated successfully!",
        "data": serializers.coupon_resource(coupon)
    }


@router.patch("/{merchant_id}/coupons/{coupon_id}/deactivate")
def deactivate_coupon(
    merchant_id: int,
    coupon_id: int,
    service: CouponLifecycleService = Depends(get_coupon_lifecycle_service)
):
    coupon = service.deactivate(merchant_id, coupon_id)
    return {
        "message": "Coupon deactivated successfully.",
        "data": serializers.coupon_resource(coupon)
    }
