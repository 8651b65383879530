"""
Coupons table
"""
from sqlalchemy import Column, Integer, String, DateTime, DECIMAL, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from little_shop.core.database import Base


class Coupon(Base):
    __tablename__ = "coupons"
    __table_args__ = (
        # Serves the per-merchant active count taken during activation
        Index("ix_coupons_merchant_status", "merchant_id", "status"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    code = Column(String(100), nullable=False, unique=True)
    percent_off = Column(DECIMAL(5, 2))
    dollar_off = Column(DECIMAL(12, 2))
    status = Column(String(20), nullable=False, default="inactive", server_default="inactive")
    merchant_id = Column(Integer, ForeignKey("merchants.id"), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    merchant = relationship("Merchant", back_populates="coupons")
