"""
Coupon Service - listing, lookup and creation of a merchant's coupons

Status changes are not handled here; see CouponLifecycleService.
"""
import logging
from typing import List, Optional

from little_shop.core.errors import InvalidQueryError, NotFoundError, ValidationFailedError
from little_shop.domain.coupon import Coupon, CouponCreate, CouponStatus
from little_shop.repositories.coupon_repository import CouponRepository
from little_shop.repositories.merchant_repository import MerchantRepository

logger = logging.getLogger(__name__)


def parse_status(value: Optional[str]) -> Optional[CouponStatus]:
    """Turn a raw status filter into a CouponStatus, rejecting anything else"""
    if value is None or value == "":
        return None
    try:
        return CouponStatus(value)
    except ValueError:
        raise InvalidQueryError("Invalid coupon status") from None


class CouponService:
    """Service for coupon reads and creation"""

    def __init__(
        self,
        coupons: Optional[CouponRepository] = None,
        merchants: Optional[MerchantRepository] = None
    ):
        self.coupons = coupons or CouponRepository()
        self.merchants = merchants or MerchantRepository()

    def _require_merchant(self, merchant_id: int) -> None:
        if not self.merchants.exists(merchant_id):
            raise NotFoundError("Merchant not found")

    def list_coupons(self, merchant_id: int, status: Optional[str] = None) -> List[Coupon]:
        """
        A merchant's coupons, optionally filtered by status

        Raises:
            NotFoundError: merchant missing, or no coupon matches
            InvalidQueryError: status is not 'active' or 'inactive'
        """
        self._require_merchant(merchant_id)
        status_filter = parse_status(status)

        coupons = self.coupons.find_by_merchant(merchant_id, status=status_filter)
        if not coupons:
            raise NotFoundError("No coupons found for this merchant")
        return coupons

    def get_coupon(self, merchant_id: int, coupon_id: int) -> Coupon:
        self._require_merchant(merchant_id)

        coupon = self.coupons.find_by_id(coupon_id)
        if coupon is None or not coupon.belongs_to(merchant_id):
            raise NotFoundError(f"Couldn't find Coupon with 'id'={coupon_id}")
        return coupon

    def create_coupon(self, merchant_id: int, data: CouponCreate) -> Coupon:
        """
        Create an inactive coupon

        Raises:
            NotFoundError: merchant missing
            ValidationFailedError: blank name/code or code already used
        """
        self._require_merchant(merchant_id)

        errors = data.validation_errors()
        if data.code and self.coupons.find_by_code(data.code) is not None:
            errors.append("Code has already been taken")
        if errors:
            raise ValidationFailedError(errors)

        coupon = self.coupons.create(merchant_id, data)
        logger.info(f"Coupon {coupon.id} ({coupon.code}) created for merchant {merchant_id}")
        return coupon
