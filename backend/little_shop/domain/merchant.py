"""
Merchant Domain Model

A merchant owns items and coupons; the API only exposes its name.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Merchant(BaseModel):
    """Merchant domain model"""

    id: int = Field(..., description="Internal merchant ID")
    name: str = Field(..., description="Merchant name")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)

    def to_dict(self) -> dict:
        return {'name': self.name}


class MerchantCreate(BaseModel):
    """Schema for creating a merchant"""
    name: Optional[str] = None
