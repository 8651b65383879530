"""
Coupon Repository - Data Access Layer for Coupons

Besides plain reads and writes, this repository provides the per-merchant
transaction used by coupon activation: ``locked_for_merchant`` takes a row
lock on the merchant so that concurrent activations for the same merchant
run one after another, while other merchants are unaffected.
"""
from contextlib import contextmanager
from typing import Iterator, List, Optional

from psycopg2 import errors as pg_errors

from little_shop.core.errors import NotFoundError, ValidationFailedError
from little_shop.domain.coupon import Coupon, CouponCreate, CouponStatus
from little_shop.repositories.base import BaseRepository

COUPON_COLUMNS = (
    "id, name, code, percent_off, dollar_off, status, merchant_id, created_at, updated_at"
)


class CouponRepository(BaseRepository):
    """Repository for Coupon data access"""

    @staticmethod
    def _map_row_to_coupon(row: dict) -> Coupon:
        return Coupon(
            id=row['id'],
            name=row['name'],
            code=row['code'],
            percent_off=row.get('percent_off'),
            dollar_off=row.get('dollar_off'),
            status=CouponStatus(row['status']),
            merchant_id=row['merchant_id'],
            created_at=row.get('created_at'),
            updated_at=row.get('updated_at')
        )

    @contextmanager
    def locked_for_merchant(self, merchant_id: int) -> Iterator["CouponRepository"]:
        """
        Open one transaction holding a lock on the merchant row

        Yields a CouponRepository bound to that transaction. The transaction
        commits when the block exits normally and rolls back otherwise, so a
        rejected activation never leaves a partial write.

        Raises:
            NotFoundError: merchant does not exist
        """
        conn = self._connect()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT id
                FROM merchants
                WHERE id = %s
                FOR UPDATE
            """, (merchant_id,))

            if cursor.fetchone() is None:
                raise NotFoundError("Merchant not found")

            yield CouponRepository(cursor=cursor)
            conn.commit()

        except Exception:
            conn.rollback()
            raise

        finally:
            cursor.close()
            conn.close()

    def find_by_id(self, coupon_id: int) -> Optional[Coupon]:
        with self._cursor() as cursor:
            cursor.execute(f"""
                SELECT {COUPON_COLUMNS}
                FROM coupons
                WHERE id = %s
            """, (coupon_id,))

            row = cursor.fetchone()
            if not row:
                return None

            return self._map_row_to_coupon(row)

    def find_by_code(self, code: str) -> Optional[Coupon]:
        with self._cursor() as cursor:
            cursor.execute(f"""
                SELECT {COUPON_COLUMNS}
                FROM coupons
                WHERE code = %s
            """, (code,))

            row = cursor.fetchone()
            if not row:
                return None

            return self._map_row_to_coupon(row)

    def find_by_merchant(
        self,
        merchant_id: int,
        status: Optional[CouponStatus] = None
    ) -> List[Coupon]:
        """
        Find a merchant's coupons in natural order

        Args:
            merchant_id: Owning merchant
            status: Only coupons in this state
        """
        conditions = ["merchant_id = %s"]
        params = [merchant_id]

        if status is not None:
            conditions.append("status = %s")
            params.append(status.value)

        where_clause = " AND ".join(conditions)

        with self._cursor() as cursor:
            cursor.execute(f"""
                SELECT {COUPON_COLUMNS}
                FROM coupons
                WHERE {where_clause}
                ORDER BY id
            """, params)

            return [self._map_row_to_coupon(row) for row in cursor.fetchall()]

    def count_active(self, merchant_id: int) -> int:
        with self._cursor() as cursor:
            cursor.execute("""
                SELECT COUNT(*) AS total
                FROM coupons
                WHERE merchant_id = %s AND status = %s
            """, (merchant_id, CouponStatus.ACTIVE.value))

            return cursor.fetchone()['total']

    def create(self, merchant_id: int, data: CouponCreate) -> Coupon:
        """
        Insert a coupon in the inactive state

        Raises:
            ValidationFailedError: code already used by another coupon
            NotFoundError: merchant removed since it was checked
        """
        try:
            with self._cursor() as cursor:
                cursor.execute(f"""
                    INSERT INTO coupons
                        (name, code, percent_off, dollar_off, status, merchant_id, created_at, updated_at)
                    VALUES (%s, %s, %s, %s, %s, %s, NOW(), NOW())
                    RETURNING {COUPON_COLUMNS}
                """, (
                    data.name,
                    data.code,
                    data.percent_off,
                    data.dollar_off,
                    CouponStatus.INACTIVE.value,
                    merchant_id
                ))

                return self._map_row_to_coupon(cursor.fetchone())
        except pg_errors.UniqueViolation:
            raise ValidationFailedError("Code has already been taken") from None
        except pg_errors.ForeignKeyViolation:
            raise NotFoundError("Merchant not found") from None

    def update_status(self, coupon_id: int, status: CouponStatus) -> Optional[Coupon]:
        """
        Persist a status change

        Returns:
            Updated Coupon, or None if the coupon does not exist
        """
        with self._cursor() as cursor:
            cursor.execute(f"""
                UPDATE coupons
                SET status = %s, updated_at = NOW()
                WHERE id = %s
                RETURNING {COUPON_COLUMNS}
            """, (status.value, coupon_id))

            row = cursor.fetchone()
            if not row:
                return None

            return self._map_row_to_coupon(row)
