"""
Item Service - item CRUD rules and query entry points

Validation, merchant existence checks and the glue between ItemRepository
and ItemQueryEngine live here; routers only translate HTTP to these calls.
"""
import logging
from decimal import Decimal
from typing import List, Optional

from little_shop.core.errors import (
    ConstraintViolationError,
    InvalidQueryError,
    NotFoundError,
    ValidationFailedError,
)
from little_shop.domain.item import Item, ItemCreate, ItemUpdate
from little_shop.repositories.item_repository import ItemRepository
from little_shop.repositories.merchant_repository import MerchantRepository
from little_shop.services.item_query_service import ItemQueryEngine

logger = logging.getLogger(__name__)

SORT_OPTIONS = ('price',)


class ItemService:
    """Service for item business logic"""

    def __init__(
        self,
        items: Optional[ItemRepository] = None,
        merchants: Optional[MerchantRepository] = None
    ):
        self.items = items or ItemRepository()
        self.merchants = merchants or MerchantRepository()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_items(self, sorted_by: Optional[str] = None, merchant_id: Optional[int] = None) -> List[Item]:
        """
        All items in natural order, or by price when sorted_by == 'price'

        Raises:
            InvalidQueryError: unknown sort key
            NotFoundError: merchant_id given but merchant missing
        """
        if sorted_by is not None and sorted_by not in SORT_OPTIONS:
            raise InvalidQueryError(f"Invalid sort option '{sorted_by}'")

        if merchant_id is not None and not self.merchants.exists(merchant_id):
            raise NotFoundError("Merchant not found")

        items = self.items.find_all(merchant_id=merchant_id)
        if sorted_by == 'price':
            return ItemQueryEngine.sort_by_price(items)
        return items

    def get_item(self, item_id: int) -> Item:
        item = self.items.find_by_id(item_id)
        if item is None:
            raise NotFoundError(f"Couldn't find Item with 'id'={item_id}")
        return item

    @staticmethod
    def _check_search_params(
        name: Optional[str],
        min_price: Optional[Decimal],
        max_price: Optional[Decimal]
    ) -> None:
        has_price = min_price is not None or max_price is not None

        if name is not None and has_price:
            raise InvalidQueryError("Cannot send both name and price")
        if name is None and not has_price:
            raise InvalidQueryError("Must provide name or price parameter")
        if name is not None and not name.strip():
            raise InvalidQueryError("Name parameter cannot be empty")

        errors = []
        if min_price is not None and min_price < 0:
            errors.append("min_price must be greater than or equal to 0")
        if max_price is not None and max_price < 0:
            errors.append("max_price must be greater than or equal to 0")
        if errors:
            raise InvalidQueryError(errors)

    def find_item(
        self,
        name: Optional[str] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None
    ) -> Item:
        """
        Single best match for a name fragment or a price range

        Raises:
            InvalidQueryError: bad parameter combination
            NotFoundError: nothing matched
        """
        self._check_search_params(name, min_price, max_price)
        items = self.items.find_all()

        if name is not None:
            item = ItemQueryEngine.find_one_by_name(items, name)
        else:
            item = ItemQueryEngine.find_one_by_price(items, min_price, max_price)

        if item is None:
            raise NotFoundError("No item matches the given query")
        return item

    def find_items(
        self,
        name: Optional[str] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None
    ) -> List[Item]:
        """Every match for a name fragment or a price range; may be empty"""
        self._check_search_params(name, min_price, max_price)
        items = self.items.find_all()

        if name is not None:
            return ItemQueryEngine.find_all_by_name(items, name)
        return ItemQueryEngine.find_all_by_price(items, min_price, max_price)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create_item(self, data: ItemCreate) -> Item:
        """
        Raises:
            ValidationFailedError: missing fields or unknown merchant
        """
        errors = data.validation_errors()
        if data.merchant_id is None or not self.merchants.exists(data.merchant_id):
            errors.append("Merchant must exist")
        if errors:
            raise ValidationFailedError(errors)

        item = self.items.create(data)
        logger.info(f"Item {item.id} created for merchant {item.merchant_id}")
        return item

    def update_item(self, item_id: int, data: ItemUpdate) -> Item:
        """
        Apply only the fields present in the request

        Raises:
            NotFoundError: item missing
            ValidationFailedError: a supplied field is blank or null
            ConstraintViolationError: supplied merchant_id does not exist
        """
        self.get_item(item_id)

        errors = data.validation_errors()
        if errors:
            raise ValidationFailedError(errors)

        changes = data.changes()
        if 'merchant_id' in changes and not self.merchants.exists(changes['merchant_id']):
            raise ConstraintViolationError("Invalid merchant")

        item = self.items.update(item_id, changes)
        if item is None:
            raise NotFoundError(f"Couldn't find Item with 'id'={item_id}")

        logger.info(f"Item {item_id} updated: {sorted(changes)}")
        return item

    def delete_item(self, item_id: int) -> None:
        if not self.items.delete(item_id):
            raise NotFoundError(f"Couldn't find Item with 'id'={item_id}")
        logger.info(f"Item {item_id} deleted")
