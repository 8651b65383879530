"""
Pytest fixtures and configuration for Little Shop backend tests

Repositories are never hit against a live database here: unit tests mock the
psycopg2 connection, and the coupon lifecycle tests use an in-memory store that
mirrors CouponRepository's per-merchant locking.
"""
import threading
import time
from collections import defaultdict
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from little_shop.core.errors import NotFoundError
from little_shop.domain.coupon import Coupon, CouponStatus
from little_shop.domain.item import Item
from little_shop.repositories.item_repository import ItemRepository
from little_shop.repositories.merchant_repository import MerchantRepository


class InMemoryCouponStore:
    """
    Stand-in for CouponRepository used by lifecycle tests

    locked_for_merchant serializes callers per merchant the way the
    SELECT ... FOR UPDATE on merchants does in PostgreSQL.
    ``pause`` widens the gap between counting and writing so races show up.
    """

    def __init__(self, merchant_ids=(), coupons=(), pause: float = 0.0):
        self.merchant_ids = set(merchant_ids)
        self.coupons = {coupon.id: coupon for coupon in coupons}
        self.pause = pause
        self._locks = defaultdict(threading.Lock)
        self._locks_guard = threading.Lock()

    @contextmanager
    def locked_for_merchant(self, merchant_id: int):
        if merchant_id not in self.merchant_ids:
            raise NotFoundError("Merchant not found")
        with self._locks_guard:
            lock = self._locks[merchant_id]
        with lock:
            yield self

    def find_by_id(self, coupon_id: int):
        return self.coupons.get(coupon_id)

    def count_active(self, merchant_id: int) -> int:
        total = sum(
            1 for coupon in self.coupons.values()
            if coupon.merchant_id == merchant_id and coupon.status == CouponStatus.ACTIVE
        )
        if self.pause:
            time.sleep(self.pause)
        return total

    def update_status(self, coupon_id: int, status: CouponStatus):
        coupon = self.coupons.get(coupon_id)
        if coupon is None:
            return None
        updated = coupon.model_copy(update={'status': status})
        self.coupons[coupon_id] = updated
        return updated


@pytest.fixture
def make_item():
    """Factory for Item domain models with sensible defaults"""
    def _make(id, name="Item", unit_price="10.00", merchant_id=1, description="A thing"):
        return Item(
            id=id,
            name=name,
            description=description,
            unit_price=Decimal(str(unit_price)),
            merchant_id=merchant_id,
            created_at=datetime(2024, 1, 1)
        )
    return _make


@pytest.fixture
def make_coupon():
    """Factory for Coupon domain models"""
    def _make(id, merchant_id=1, status=CouponStatus.INACTIVE, code=None, name=None):
        return Coupon(
            id=id,
            name=name or f"Coupon {id}",
            code=code or f"CODE{id}",
            percent_off=Decimal("10"),
            dollar_off=None,
            status=status,
            merchant_id=merchant_id
        )
    return _make


@pytest.fixture
def grocery_items(make_item):
    """grapes 4.99, oreos 1.05, bananas 15.50 in insertion order"""
    return [
        make_item(1, name="grapes", unit_price="4.99"),
        make_item(2, name="oreos", unit_price="1.05"),
        make_item(3, name="bananas", unit_price="15.50"),
    ]


@pytest.fixture
def item_repo():
    return MagicMock(spec=ItemRepository)


@pytest.fixture
def merchant_repo():
    repo = MagicMock(spec=MerchantRepository)
    repo.exists.return_value = True
    return repo


@pytest.fixture
def coupon_store_factory(make_coupon):
    """
    Build an InMemoryCouponStore for merchant 1 (and 2) with
    ``active`` active coupons and ``inactive`` inactive ones for merchant 1
    """
    def _build(active=0, inactive=1, pause=0.0, extra=()):
        coupons = []
        next_id = 1
        for _ in range(active):
            coupons.append(make_coupon(next_id, status=CouponStatus.ACTIVE))
            next_id += 1
        for _ in range(inactive):
            coupons.append(make_coupon(next_id))
            next_id += 1
        coupons.extend(extra)
        return InMemoryCouponStore(merchant_ids={1, 2}, coupons=coupons, pause=pause)
    return _build


@pytest.fixture
def mock_connection():
    """
    psycopg2 connection/cursor pair for repository tests

    Returns (connection, cursor); patch
    little_shop.repositories.base.get_db_connection_dict_with_retry to return
    the connection.
    """
    conn = MagicMock()
    cursor = MagicMock()
    conn.cursor.return_value = cursor
    return conn, cursor
