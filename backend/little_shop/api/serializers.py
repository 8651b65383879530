"""
Response shaping

Every resource is rendered as {"id": "<id>", "type": "<kind>", "attributes": {...}}
and wrapped under "data".
"""
from typing import Iterable, List

from little_shop.domain.coupon import Coupon
from little_shop.domain.item import Item
from little_shop.domain.merchant import Merchant

ERROR_MESSAGE = "Your query could not be completed"


def _resource(kind: str, entity) -> dict:
    return {
        "id": str(entity.id),
        "type": kind,
        "attributes": entity.to_dict()
    }


def item_resource(item: Item) -> dict:
    return _resource("item", item)


def merchant_resource(merchant: Merchant) -> dict:
    return _resource("merchant", merchant)


def coupon_resource(coupon: Coupon) -> dict:
    return _resource("coupon", coupon)


def many(resource, entities: Iterable) -> dict:
    return {"data": [resource(entity) for entity in entities]}


def one(resource, entity) -> dict:
    return {"data": resource(entity)}


def error_body(messages: List[str]) -> dict:
    return {
        "message": ERROR_MESSAGE,
        "errors": messages
    }
