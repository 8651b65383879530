"""
Item Domain Model

Represents a sellable product owned by a single merchant.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Item(BaseModel):
    """
    Item domain model - represents a product a merchant sells

    Fields:
        id: Internal item ID (primary key, natural order)
        name: Item name
        description: Item description
        unit_price: Price per unit (fixed-point)
        merchant_id: Owning merchant
        created_at: When the item was created
        updated_at: When the item was last updated
    """

    id: int = Field(..., description="Internal item ID")
    name: str = Field(..., description="Item name")
    description: str = Field(..., description="Item description")
    unit_price: Decimal = Field(..., description="Price per unit")
    merchant_id: int = Field(..., description="Owning merchant ID")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)

    def to_dict(self) -> dict:
        """Public attributes, Decimal converted to float for JSON"""
        return {
            'name': self.name,
            'description': self.description,
            'unit_price': float(self.unit_price),
            'merchant_id': self.merchant_id,
        }


class ItemCreate(BaseModel):
    """
    Schema for creating an item

    Every field is optional at parse time so that missing values surface as
    readable validation messages instead of a schema error.
    Unknown fields in the request body are ignored.
    """
    name: Optional[str] = None
    description: Optional[str] = None
    unit_price: Optional[Decimal] = None
    merchant_id: Optional[int] = None

    def validation_errors(self) -> List[str]:
        errors = []
        if not self.name or not self.name.strip():
            errors.append("Name can't be blank")
        if not self.description or not self.description.strip():
            errors.append("Description can't be blank")
        if self.unit_price is None:
            errors.append("Unit price can't be blank")
            errors.append("Unit price is not a number")
        elif not self.unit_price.is_finite():
            errors.append("Unit price is not a number")
        return errors


class ItemUpdate(BaseModel):
    """
    Schema for a partial item update

    Only fields present in the request are applied; use
    ``model_dump(exclude_unset=True)`` to get them.
    """
    name: Optional[str] = None
    description: Optional[str] = None
    unit_price: Optional[Decimal] = None
    merchant_id: Optional[int] = None

    def changes(self) -> dict:
        """Fields the caller actually supplied"""
        return self.model_dump(exclude_unset=True)

    def validation_errors(self) -> List[str]:
        changes = self.changes()
        errors = []
        if 'name' in changes and (not self.name or not self.name.strip()):
            errors.append("Name can't be blank")
        if 'description' in changes and (not self.description or not self.description.strip()):
            errors.append("Description can't be blank")
        if 'unit_price' in changes:
            if self.unit_price is None:
                errors.append("Unit price can't be blank")
                errors.append("Unit price is not a number")
            elif not self.unit_price.is_finite():
                errors.append("Unit price is not a number")
        if 'merchant_id' in changes and self.merchant_id is None:
            errors.append("Merchant must exist")
        return errors
