"""
Database models (schema bootstrap only; repositories query with psycopg2)
"""
from .merchant import Merchant
from .item import Item
from .coupon import Coupon
from .invoice import Invoice, InvoiceItem

__all__ = [
    "Merchant",
    "Item",
    "Coupon",
    "Invoice",
    "InvoiceItem",
]
