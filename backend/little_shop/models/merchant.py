"""
Merchants table
"""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from little_shop.core.database import Base


class Merchant(Base):
    __tablename__ = "merchants"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    items = relationship("Item", back_populates="merchant", cascade="all, delete-orphan")
    coupons = relationship("Coupon", back_populates="merchant", cascade="all, delete-orphan")
    invoices = relationship("Invoice", back_populates="merchant")
