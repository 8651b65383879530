"""
Coupon Domain Model

A promotional code owned by a merchant. Coupons start inactive and only change
status through CouponLifecycleService.
"""
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# A merchant may have at most this many coupons active at once
MAX_ACTIVE_COUPONS = 5


class CouponStatus(str, Enum):
    """Closed set of coupon states"""
    ACTIVE = "active"
    INACTIVE = "inactive"


class Coupon(BaseModel):
    """
    Coupon domain model

    Fields:
        id: Internal coupon ID
        name: Display name
        code: Code customers type at checkout (unique)
        percent_off: Percentage discount (optional)
        dollar_off: Fixed discount (optional)
        status: active | inactive
        merchant_id: Owning merchant
    """

    id: int = Field(..., description="Internal coupon ID")
    name: str = Field(..., description="Coupon name")
    code: str = Field(..., description="Coupon code")
    percent_off: Optional[Decimal] = Field(None, description="Percent discount")
    dollar_off: Optional[Decimal] = Field(None, description="Dollar discount")
    status: CouponStatus = Field(CouponStatus.INACTIVE, description="Lifecycle status")
    merchant_id: int = Field(..., description="Owning merchant ID")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)

    @property
    def is_active(self) -> bool:
        return self.status == CouponStatus.ACTIVE

    def belongs_to(self, merchant_id: int) -> bool:
        return self.merchant_id == merchant_id

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'code': self.code,
            'percent_off': float(self.percent_off) if self.percent_off is not None else None,
            'dollar_off': float(self.dollar_off) if self.dollar_off is not None else None,
            'status': self.status.value,
            'merchant_id': self.merchant_id,
        }


class CouponCreate(BaseModel):
    """Schema for creating a coupon; status is never accepted from the caller"""
    name: Optional[str] = None
    code: Optional[str] = None
    percent_off: Optional[Decimal] = None
    dollar_off: Optional[Decimal] = None

    def validation_errors(self) -> List[str]:
        errors = []
        if not self.name or not self.name.strip():
            errors.append("Name can't be blank")
        if not self.code or not self.code.strip():
            errors.append("Code can't be blank")
        return errors
