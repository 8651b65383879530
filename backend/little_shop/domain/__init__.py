"""
Domain Layer - Business Entities

Pydantic models for merchants, items and coupons, plus the payloads used to
create and update them.
"""
from little_shop.domain.merchant import Merchant, MerchantCreate
from little_shop.domain.item import Item, ItemCreate, ItemUpdate
from little_shop.domain.coupon import Coupon, CouponCreate, CouponStatus, MAX_ACTIVE_COUPONS

__all__ = [
    'Merchant', 'MerchantCreate',
    'Item', 'ItemCreate', 'ItemUpdate',
    'Coupon', 'CouponCreate', 'CouponStatus', 'MAX_ACTIVE_COUPONS',
]
