"""
Item Repository - Data Access Layer for Items

Handles all database queries for items and returns Item domain models.
Lists always come back in natural order (ascending id); the query engine
relies on that for its tie-breaks.
"""
from typing import List, Optional

from psycopg2 import errors as pg_errors

from little_shop.core.errors import ConstraintViolationError, ValidationFailedError
from little_shop.domain.item import Item, ItemCreate
from little_shop.repositories.base import BaseRepository

ITEM_COLUMNS = "id, name, description, unit_price, merchant_id, created_at, updated_at"

# Columns a partial update is allowed to touch
UPDATABLE_COLUMNS = ('name', 'description', 'unit_price', 'merchant_id')


class ItemRepository(BaseRepository):
    """Repository for Item data access"""

    @staticmethod
    def _map_row_to_item(row: dict) -> Item:
        return Item(
            id=row['id'],
            name=row['name'],
            description=row['description'],
            unit_price=row['unit_price'],
            merchant_id=row['merchant_id'],
            created_at=row.get('created_at'),
            updated_at=row.get('updated_at')
        )

    def find_by_id(self, item_id: int) -> Optional[Item]:
        """
        Find item by ID

        Returns:
            Item or None if not found
        """
        with self._cursor() as cursor:
            cursor.execute(f"""
                SELECT {ITEM_COLUMNS}
                FROM items
                WHERE id = %s
            """, (item_id,))

            row = cursor.fetchone()
            if not row:
                return None

            return self._map_row_to_item(row)

    def find_all(self, merchant_id: Optional[int] = None) -> List[Item]:
        """
        Find all items, optionally scoped to one merchant

        Args:
            merchant_id: Only return this merchant's items

        Returns:
            Items in natural (id) order
        """
        with self._cursor() as cursor:
            if merchant_id is None:
                cursor.execute(f"""
                    SELECT {ITEM_COLUMNS}
                    FROM items
                    ORDER BY id
                """)
            else:
                cursor.execute(f"""
                    SELECT {ITEM_COLUMNS}
                    FROM items
                    WHERE merchant_id = %s
                    ORDER BY id
                """, (merchant_id,))

            return [self._map_row_to_item(row) for row in cursor.fetchall()]

    def create(self, data: ItemCreate) -> Item:
        """
        Insert a validated item and return it with its new id

        Raises:
            ValidationFailedError: merchant removed since it was checked
        """
        try:
            with self._cursor() as cursor:
                cursor.execute(f"""
                    INSERT INTO items (name, description, unit_price, merchant_id, created_at, updated_at)
                    VALUES (%s, %s, %s, %s, NOW(), NOW())
                    RETURNING {ITEM_COLUMNS}
                """, (data.name, data.description, data.unit_price, data.merchant_id))

                return self._map_row_to_item(cursor.fetchone())
        except pg_errors.ForeignKeyViolation:
            raise ValidationFailedError("Merchant must exist") from None

    def update(self, item_id: int, changes: dict) -> Optional[Item]:
        """
        Apply a partial update

        Args:
            item_id: Item to update
            changes: Column -> new value; keys outside UPDATABLE_COLUMNS are ignored

        Returns:
            Updated Item, or None if the item does not exist

        Raises:
            ConstraintViolationError: merchant_id points at no merchant
        """
        columns = [column for column in UPDATABLE_COLUMNS if column in changes]
        if not columns:
            return self.find_by_id(item_id)

        assignments = ", ".join(f"{column} = %s" for column in columns)
        params = [changes[column] for column in columns]

        try:
            with self._cursor() as cursor:
                cursor.execute(f"""
                    UPDATE items
                    SET {assignments}, updated_at = NOW()
                    WHERE id = %s
                    RETURNING {ITEM_COLUMNS}
                """, params + [item_id])

                row = cursor.fetchone()
        except pg_errors.ForeignKeyViolation:
            raise ConstraintViolationError("Invalid merchant") from None

        if not row:
            return None

        return self._map_row_to_item(row)

    def delete(self, item_id: int) -> bool:
        """
        Delete an item; invoice_items rows go with it (ON DELETE CASCADE)

        Returns:
            True if a row was deleted
        """
        with self._cursor() as cursor:
            cursor.execute("""
                DELETE FROM items
                WHERE id = %s
                RETURNING id
            """, (item_id,))

            return cursor.fetchone() is not None
