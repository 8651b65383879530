"""
Merchant Service
"""
import logging
from typing import List, Optional

from little_shop.core.errors import NotFoundError, ValidationFailedError
from little_shop.domain.merchant import Merchant, MerchantCreate
from little_shop.repositories.merchant_repository import MerchantRepository

logger = logging.getLogger(__name__)


class MerchantService:
    """Service for merchant lookups and creation"""

    def __init__(self, merchants: Optional[MerchantRepository] = None):
        self.merchants = merchants or MerchantRepository()

    def list_merchants(self) -> List[Merchant]:
        return self.merchants.find_all()

    def get_merchant(self, merchant_id: int) -> Merchant:
        merchant = self.merchants.find_by_id(merchant_id)
        if merchant is None:
            raise NotFoundError("Merchant not found")
        return merchant

    def create_merchant(self, data: MerchantCreate) -> Merchant:
        if not data.name or not data.name.strip():
            raise ValidationFailedError("Name can't be blank")

        merchant = self.merchants.create(data.name)
        logger.info(f"Merchant {merchant.id} created")
        return merchant
