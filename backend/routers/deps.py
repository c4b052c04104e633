from typing import Dict

from fastapi import Depends, HTTPException, status

from core.converters import format_indian_number, format_nepali_currency
from core.exceptions import InventoryError, RecordNotFound
from db.store import CollectionStore, get_store
from schemas.inventory import StockItem, StockTransaction
from services.catalog import Catalog


def get_catalog(store: CollectionStore = Depends(get_store)) -> Catalog:
    return Catalog(store)


def http_error(e: InventoryError) -> HTTPException:
    if isinstance(e, RecordNotFound):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


def item_response(item: StockItem) -> Dict:
    """Stored record plus the strings the dashboard shows for it."""
    return {
        **item.to_record(),
        "priceDisplay": format_nepali_currency(item.price),
        "quantityDisplay": f"{format_indian_number(item.quantity)} {item.measuring_unit}".strip(),
    }


def transaction_response(tx: StockTransaction) -> Dict:
    return {**tx.to_record(), "stockValueDisplay": format_nepali_currency(tx.stock_value)}
