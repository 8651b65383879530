"""
Unit tests for ItemRepository

These tests validate repository logic without requiring a database connection.
"""
from datetime import datetime
from decimal import Decimal
from unittest.mock import patch

import pytest
from psycopg2 import errors as pg_errors

from little_shop.core.errors import ConstraintViolationError, ValidationFailedError
from little_shop.domain.item import Item, ItemCreate
from little_shop.repositories.item_repository import ItemRepository


def _row(id, name, price, merchant_id=1):
    return {
        'id': id,
        'name': name,
        'description': f"{name} description",
        'unit_price': Decimal(price),
        'merchant_id': merchant_id,
        'created_at': datetime.now(),
        'updated_at': None
    }


class TestItemRepository:
    """Test ItemRepository methods"""

    @patch('little_shop.repositories.base.get_db_connection_dict_with_retry')
    def test_find_by_id_returns_item(self, mock_get_conn, mock_connection):
        # Arrange
        conn, cursor = mock_connection
        mock_get_conn.return_value = conn
        cursor.fetchone.return_value = _row(1, 'toothpaste', '45.55')

        # Act
        item = ItemRepository().find_by_id(1)

        # Assert
        assert isinstance(item, Item)
        assert item.name == 'toothpaste'
        assert item.unit_price == Decimal('45.55')
        cursor.execute.assert_called_once()
        cursor.close.assert_called_once()
        conn.close.assert_called_once()

    @patch('little_shop.repositories.base.get_db_connection_dict_with_retry')
    def test_find_by_id_returns_none_when_not_found(self, mock_get_conn, mock_connection):
        conn, cursor = mock_connection
        mock_get_conn.return_value = conn
        cursor.fetchone.return_value = None

        assert ItemRepository().find_by_id(999) is None

    @patch('little_shop.repositories.base.get_db_connection_dict_with_retry')
    def test_find_all_orders_by_id(self, mock_get_conn, mock_connection):
        conn, cursor = mock_connection
        mock_get_conn.return_value = conn
        cursor.fetchall.return_value = [_row(1, 'grapes', '4.99'), _row(2, 'oreos', '1.05')]

        items = ItemRepository().find_all()

        assert [item.id for item in items] == [1, 2]
        sql = cursor.execute.call_args[0][0]
        assert "ORDER BY id" in sql
        assert "WHERE" not in sql

    @patch('little_shop.repositories.base.get_db_connection_dict_with_retry')
    def test_find_all_scoped_to_merchant(self, mock_get_conn, mock_connection):
        conn, cursor = mock_connection
        mock_get_conn.return_value = conn
        cursor.fetchall.return_value = []

        ItemRepository().find_all(merchant_id=3)

        sql, params = cursor.execute.call_args[0]
        assert "merchant_id = %s" in sql
        assert params == (3,)

    @patch('little_shop.repositories.base.get_db_connection_dict_with_retry')
    def test_create_commits(self, mock_get_conn, mock_connection):
        conn, cursor = mock_connection
        mock_get_conn.return_value = conn
        cursor.fetchone.return_value = _row(5, 'dog', '12345')

        item = ItemRepository().create(
            ItemCreate(name='dog', description='dog description', unit_price=12345, merchant_id=1)
        )

        assert item.id == 5
        conn.commit.assert_called_once()

    @patch('little_shop.repositories.base.get_db_connection_dict_with_retry')
    def test_update_only_touches_supplied_columns(self, mock_get_conn, mock_connection):
        conn, cursor = mock_connection
        mock_get_conn.return_value = conn
        cursor.fetchone.return_value = _row(1, 'stamps', '2.00')

        item = ItemRepository().update(1, {'name': 'stamps', 'id': 99})

        sql, params = cursor.execute.call_args[0]
        assert "SET name = %s, updated_at = NOW()" in sql
        assert params == ['stamps', 1]
        assert item.name == 'stamps'

    @patch('little_shop.repositories.base.get_db_connection_dict_with_retry')
    def test_update_missing_item_returns_none(self, mock_get_conn, mock_connection):
        conn, cursor = mock_connection
        mock_get_conn.return_value = conn
        cursor.fetchone.return_value = None

        assert ItemRepository().update(42, {'name': 'x'}) is None

    @patch('little_shop.repositories.base.get_db_connection_dict_with_retry')
    def test_delete_reports_whether_row_existed(self, mock_get_conn, mock_connection):
        conn, cursor = mock_connection
        mock_get_conn.return_value = conn
        cursor.fetchone.side_effect = [{'id': 7}, None]

        repo = ItemRepository()
        assert repo.delete(7) is True
        assert repo.delete(8) is False

    @patch('little_shop.repositories.base.get_db_connection_dict_with_retry')
    def test_error_rolls_back(self, mock_get_conn, mock_connection):
        conn, cursor = mock_connection
        mock_get_conn.return_value = conn
        cursor.execute.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError):
            ItemRepository().delete(1)

        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()
        conn.close.assert_called_once()

    @patch('little_shop.repositories.base.get_db_connection_dict_with_retry')
    def test_create_with_vanished_merchant_is_validation_failure(self, mock_get_conn, mock_connection):
        conn, cursor = mock_connection
        mock_get_conn.return_value = conn
        cursor.execute.side_effect = pg_errors.ForeignKeyViolation("items_merchant_id_fkey")

        with pytest.raises(ValidationFailedError) as exc_info:
            ItemRepository().create(
                ItemCreate(name='dog', description='dog description', unit_price=1, merchant_id=9)
            )

        assert exc_info.value.messages == ["Merchant must exist"]
        conn.rollback.assert_called_once()

    @patch('little_shop.repositories.base.get_db_connection_dict_with_retry')
    def test_update_to_vanished_merchant_is_constraint_violation(self, mock_get_conn, mock_connection):
        conn, cursor = mock_connection
        mock_get_conn.return_value = conn
        cursor.execute.side_effect = pg_errors.ForeignKeyViolation("items_merchant_id_fkey")

        with pytest.raises(ConstraintViolationError) as exc_info:
            ItemRepository().update(1, {'merchant_id': 9})

        assert exc_info.value.messages == ["Invalid merchant"]
        conn.rollback.assert_called_once()
