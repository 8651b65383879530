"""
Repository Layer - Data Access

This layer handles all database queries and returns domain models.
Repositories abstract away SQL details from business logic.
"""
from little_shop.repositories.merchant_repository import MerchantRepository
from little_shop.repositories.item_repository import ItemRepository
from little_shop.repositories.coupon_repository import CouponRepository

__all__ = [
    'MerchantRepository',
    'ItemRepository',
    'CouponRepository'
]
