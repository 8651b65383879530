"""
Item Query Engine - name and price lookups over a collection of items

Every operation takes items already in natural order (ascending id), as
ItemRepository.find_all returns them, and never mutates or caches them.
Python's sort is stable, so ties on price keep that natural order.

Supported queries:
- sort_by_price: all items, cheapest first
- find_one_by_name / find_all_by_name: case-insensitive substring on name
- find_one_by_price / find_all_by_price: inclusive min/max bounds

Prices are compared as Decimal; float inputs are converted through str()
so that 4.99 means Decimal('4.99') rather than its binary approximation.
"""
from decimal import Decimal
from typing import List, Optional, Sequence, Union

from little_shop.core.errors import InvalidQueryError
from little_shop.domain.item import Item

Price = Union[Decimal, int, float, str]


def _to_decimal(value: Optional[Price]) -> Optional[Decimal]:
    if value is None or isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


class ItemQueryEngine:
    """Stateless filter/sort operations over items"""

    @staticmethod
    def sort_by_price(items: Sequence[Item]) -> List[Item]:
        """All items by ascending unit price; equal prices keep their order"""
        return sorted(items, key=lambda item: item.unit_price)

    @staticmethod
    def _require_fragment(fragment: Optional[str]) -> str:
        if not fragment:
            raise InvalidQueryError("Name parameter cannot be empty")
        return fragment.lower()

    @classmethod
    def find_all_by_name(cls, items: Sequence[Item], fragment: str) -> List[Item]:
        """Every item whose name contains fragment, ignoring case"""
        needle = cls._require_fragment(fragment)
        return [item for item in items if needle in item.name.lower()]

    @classmethod
    def find_one_by_name(cls, items: Sequence[Item], fragment: str) -> Optional[Item]:
        """First matching item in natural order, or None"""
        needle = cls._require_fragment(fragment)
        return next((item for item in items if needle in item.name.lower()), None)

    @staticmethod
    def _within_bounds(
        items: Sequence[Item],
        min_price: Optional[Price],
        max_price: Optional[Price]
    ) -> List[Item]:
        if min_price is None and max_price is None:
            raise InvalidQueryError("Must provide min_price or max_price")

        low = _to_decimal(min_price)
        high = _to_decimal(max_price)

        return [
            item for item in items
            if (low is None or item.unit_price >= low)
            and (high is None or item.unit_price <= high)
        ]

    @classmethod
    def find_all_by_price(
        cls,
        items: Sequence[Item],
        min_price: Optional[Price] = None,
        max_price: Optional[Price] = None
    ) -> List[Item]:
        """
        Items priced within [min_price, max_price], cheapest first

        A missing bound leaves that side open. min_price > max_price simply
        matches nothing.
        """
        return cls.sort_by_price(cls._within_bounds(items, min_price, max_price))

    @classmethod
    def find_one_by_price(
        cls,
        items: Sequence[Item],
        min_price: Optional[Price] = None,
        max_price: Optional[Price] = None
    ) -> Optional[Item]:
        """
        The matching item with the alphabetically lowest name (case-sensitive)

        Returns None when nothing is priced within the bounds.
        """
        matches = cls._within_bounds(items, min_price, max_price)
        if not matches:
            return None
        return min(matches, key=lambda item: item.name)
