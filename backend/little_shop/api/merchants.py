"""
Merchants API Endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from little_shop.api import serializers
from little_shop.api.dependencies import get_item_service, get_merchant_service
from little_shop.domain.merchant import MerchantCreate
from little_shop.services.item_service import ItemService
from little_shop.services.merchant_service import MerchantService

router = APIRouter()


@router.get("")
def list_merchants(service: MerchantService = Depends(get_merchant_service)):
    return serializers.many(serializers.merchant_resource, service.list_merchants())


@router.post("", status_code=status.HTTP_201_CREATED)
def create_merchant(data: MerchantCreate, service: MerchantService = Depends(get_merchant_service)):
    merchant = service.create_merchant(data)
    return serializers.one(serializers.merchant_resource, merchant)


@router.get("/{merchant_id}")
def get_merchant(merchant_id: int, service: MerchantService = Depends(get_merchant_service)):
    return serializers.one(serializers.merchant_resource, service.get_merchant(merchant_id))


@router.get("/{merchant_id}/items")
def list_merchant_items(
    merchant_id: int,
    sorted_by: Optional[str] = Query(None, alias="sorted", description="Sort key; only 'price' is supported"),
    service: ItemService = Depends(get_item_service)
):
    """One merchant's items, in id order or cheapest first"""
    items = service.list_items(sorted_by=sorted_by, merchant_id=merchant_id)
    return serializers.many(serializers.item_resource, items)
