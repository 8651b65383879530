"""
Merchant Repository - Data Access Layer for Merchants
"""
from typing import List, Optional

from little_shop.domain.merchant import Merchant
from little_shop.repositories.base import BaseRepository


class MerchantRepository(BaseRepository):
    """Repository for Merchant data access"""

    @staticmethod
    def _map_row_to_merchant(row: dict) -> Merchant:
        return Merchant(
            id=row['id'],
            name=row['name'],
            created_at=row.get('created_at'),
            updated_at=row.get('updated_at')
        )

    def find_by_id(self, merchant_id: int) -> Optional[Merchant]:
        with self._cursor() as cursor:
            cursor.execute("""
                SELECT id, name, created_at, updated_at
                FROM merchants
                WHERE id = %s
            """, (merchant_id,))

            row = cursor.fetchone()
            if not row:
                return None

            return self._map_row_to_merchant(row)

    def find_all(self) -> List[Merchant]:
        with self._cursor() as cursor:
            cursor.execute("""
                SELECT id, name, created_at, updated_at
                FROM merchants
                ORDER BY id
            """)

            return [self._map_row_to_merchant(row) for row in cursor.fetchall()]

    def exists(self, merchant_id: int) -> bool:
        with self._cursor() as cursor:
            cursor.execute("SELECT 1 FROM merchants WHERE id = %s", (merchant_id,))
            return cursor.fetchone() is not None

    def create(self, name: str) -> Merchant:
        with self._cursor() as cursor:
            cursor.execute("""
                INSERT INTO merchants (name, created_at, updated_at)
                VALUES (%s, NOW(), NOW())
                RETURNING id, name, created_at, updated_at
            """, (name,))

            return self._map_row_to_merchant(cursor.fetchone())
