"""
Shared cursor handling for repositories
"""
from contextlib import contextmanager
from typing import Iterator

from little_shop.core.database import get_db_connection_dict_with_retry


class BaseRepository:
    """
    Base class for psycopg2 repositories

    A repository built with a cursor runs every query on that cursor and leaves
    commit/rollback to whoever owns the transaction. Without one, each method
    opens its own connection and commits when it finishes.
    """

    def __init__(self, cursor=None):
        self._bound_cursor = cursor

    @staticmethod
    def _connect():
        return get_db_connection_dict_with_retry()

    @contextmanager
    def _cursor(self) -> Iterator:
        if self._bound_cursor is not None:
            yield self._bound_cursor
            return

        conn = self._connect()
        cursor = conn.cursor()
        try:
            yield cursor
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()
