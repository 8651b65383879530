"""
Coupon Lifecycle Service - activate / deactivate coupons

States: inactive (initial) -> active -> inactive ...

A merchant may have at most MAX_ACTIVE_COUPONS coupons active at the same
time. Activation checks the count and writes the new status inside a single
transaction that holds the merchant's lock (CouponRepository.locked_for_merchant),
so two concurrent activations for one merchant cannot both pass the check.

Coupons are always resolved through the merchant that owns them: a coupon id
belonging to another merchant is reported as not found.
"""
import logging
from typing import Optional

from little_shop.core.errors import CapacityExceededError, NotFoundError
from little_shop.domain.coupon import MAX_ACTIVE_COUPONS, Coupon, CouponStatus
from little_shop.repositories.coupon_repository import CouponRepository

logger = logging.getLogger(__name__)


class CouponLifecycleService:
    """Coupon state transitions with the per-merchant active cap"""

    def __init__(self, coupons: Optional[CouponRepository] = None, max_active: int = MAX_ACTIVE_COUPONS):
        self.coupons = coupons or CouponRepository()
        self.max_active = max_active

    @staticmethod
    def _owned_coupon(store, merchant_id: int, coupon_id: int) -> Coupon:
        coupon = store.find_by_id(coupon_id)
        if coupon is None or not coupon.belongs_to(merchant_id):
            raise NotFoundError(f"Couldn't find Coupon with 'id'={coupon_id}")
        return coupon

    def activate(self, merchant_id: int, coupon_id: int) -> Coupon:
        """
        Mark a coupon active

        The cap applies to every activation request: a merchant already at
        max_active is rejected even when the coupon itself is active. Below
        the cap, activating an active coupon changes nothing.

        Raises:
            NotFoundError: merchant or coupon missing, or coupon owned by another merchant
            CapacityExceededError: merchant already has max_active active coupons
        """
        with self.coupons.locked_for_merchant(merchant_id) as store:
            coupon = self._owned_coupon(store, merchant_id, coupon_id)

            active_count = store.count_active(merchant_id)
            if active_count >= self.max_active:
                logger.warning(
                    f"Merchant {merchant_id} already has {active_count} active coupons; "
                    f"coupon {coupon_id} left inactive"
                )
                raise CapacityExceededError(
                    f"A merchant can only have up to {self.max_active} active coupons at a time"
                )
            if coupon.is_active:
                return coupon

            activated = store.update_status(coupon_id, CouponStatus.ACTIVE)

        logger.info(f"Coupon {coupon_id} activated for merchant {merchant_id} ({active_count + 1} active)")
        return activated

    def deactivate(self, merchant_id: int, coupon_id: int) -> Coupon:
        """
        Mark a coupon inactive; deactivating an inactive coupon is a no-op

        Raises:
            NotFoundError: merchant or coupon missing, or coupon owned by another merchant
        """
        with self.coupons.locked_for_merchant(merchant_id) as store:
            coupon = self._owned_coupon(store, merchant_id, coupon_id)
            if not coupon.is_active:
                return coupon

            deactivated = store.update_status(coupon_id, CouponStatus.INACTIVE)

        logger.info(f"Coupon {coupon_id} deactivated for merchant {merchant_id}")
        return deactivated
