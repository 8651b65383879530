"""
FastAPI dependency providers for services

Tests swap these out through app.dependency_overrides.
"""
from little_shop.services.coupon_lifecycle_service import CouponLifecycleService
from little_shop.services.coupon_service import CouponService
from little_shop.services.item_service import ItemService
from little_shop.services.merchant_service import MerchantService


def get_item_service() -> ItemService:
    return ItemService()


def get_merchant_service() -> MerchantService:
    return MerchantService()


def get_coupon_service() -> CouponService:
    return CouponService()


def get_coupon_lifecycle_service() -> CouponLifecycleService:
    return CouponLifecycleService()
