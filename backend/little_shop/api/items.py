"""
Items API Endpoints

List, search and maintain items. Only name, description, unit_price and
merchant_id are read from request bodies; anything else is ignored.
"""
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from little_shop.api import serializers
from little_shop.api.dependencies import get_item_service
from little_shop.domain.item import ItemCreate, ItemUpdate
from little_shop.services.item_service import ItemService

router = APIRouter()


@router.get("")
def list_items(
    sorted_by: Optional[str] = Query(None, alias="sorted", description="Sort key; only 'price' is supported"),
    service: ItemService = Depends(get_item_service)
):
    """All items, in id order or cheapest first with ?sorted=price"""
    items = service.list_items(sorted_by=sorted_by)
    return serializers.many(serializers.item_resource, items)


@router.get("/find")
def find_item(
    name: Optional[str] = Query(None, description="Case-insensitive name fragment"),
    min_price: Optional[Decimal] = Query(None, description="Inclusive lower price bound"),
    max_price: Optional[Decimal] = Query(None, description="Inclusive upper price bound"),
    service: ItemService = Depends(get_item_service)
):
    """
    Single item matching a name fragment or a price range

    By name: first match in id order. By price: the match whose name sorts first.
    """
    item = service.find_item(name=name, min_price=min_price, max_price=max_price)
    return serializers.one(serializers.item_resource, item)


@router.get("/find_all")
def find_all_items(
    name: Optional[str] = Query(None, description="Case-insensitive name fragment"),
    min_price: Optional[Decimal] = Query(None, description="Inclusive lower price bound"),
    max_price: Optional[Decimal] = Query(None, description="Inclusive upper price bound"),
    service: ItemService = Depends(get_item_service)
):
    """Every item matching a name fragment or a price range (possibly none)"""
    items = service.find_items(name=name, min_price=min_price, max_price=max_price)
    return serializers.many(serializers.item_resource, items)


@router.get("/{item_id}")
def get_item(item_id: int, service: ItemService = Depends(get_item_service)):
    return serializers.one(serializers.item_resource, service.get_item(item_id))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_item(data: ItemCreate, service: ItemService = Depends(get_item_service)):
    item = service.create_item(data)
    return serializers.one(serializers.item_resource, item)


@router.patch("/{item_id}")
@router.put("/{item_id}")
def update_item(item_id: int, data: ItemUpdate, service: ItemService = Depends(get_item_service)):
    """Partial update: fields missing from the body keep their value"""
    item = service.update_item(item_id, data)
    return serializers.one(serializers.item_resource, item)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(item_id: int, service: ItemService = Depends(get_item_service)):
    service.delete_item(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
