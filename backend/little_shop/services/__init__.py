"""
Service Layer - Business Logic
"""
from little_shop.services.item_query_service import ItemQueryEngine
from little_shop.services.coupon_lifecycle_service import CouponLifecycleService
from little_shop.services.item_service import ItemService
from little_shop.services.coupon_service import CouponService
from little_shop.services.merchant_service import MerchantService

__all__ = [
    'ItemQueryEngine',
    'CouponLifecycleService',
    'ItemService',
    'CouponService',
    'MerchantService'
]
