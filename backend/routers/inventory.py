from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status

from core.exceptions import InventoryError
from routers.deps import get_catalog, http_error, item_response, transaction_response
from schemas.inventory import (
    AddStockRequest,
    StockItemCreate,
    StockItemUpdate,
    StockOutRequest,
    TransactionUpdate,
)
from services.catalog import Catalog

router = APIRouter()
transactions_router = APIRouter()


def _movement_response(catalog: Catalog, tx) -> Dict:
    try:
        item = item_response(catalog.get_stock_item(tx.stock_item_id))
    except InventoryError:
        item = None
    return {"transaction": transaction_response(tx), "item": item}


# -- stock items -------------------------------------------------------------

@router.get("/", response_model=List[Dict])
def list_stock_items(
    search: str = Query("", description="Matches name, description or category"),
    category: str = Query("all"),
    status_filter: str = Query("all", alias="status"),
    catalog: Catalog = Depends(get_catalog),
):
    return [item_response(i) for i in catalog.list_stock_items(search, category, status_filter)]


@router.get("/categories", response_model=List[str])
def list_categories(catalog: Catalog = Depends(get_catalog)):
    return catalog.categories()


@router.get("/{item_id}", response_model=Dict)
def get_stock_item(item_id: int, catalog: Catalog = Depends(get_catalog)):
    try:
        return item_response(catalog.get_stock_item(item_id))
    except InventoryError as e:
        raise http_error(e)


@router.post("/", response_model=Dict, status_code=status.HTTP_201_CREATED)
def create_stock_item(payload: StockItemCreate, catalog: Catalog = Depends(get_catalog)):
    try:
        return item_response(catalog.create_stock_item(payload))
    except InventoryError as e:
        raise http_error(e)


@router.patch("/{item_id}", response_model=Dict)
def update_stock_item(item_id: int, payload: StockItemUpdate, catalog: Catalog = Depends(get_catalog)):
    try:
        return item_response(catalog.update_stock_item(item_id, payload))
    except InventoryError as e:
        raise http_error(e)


@router.delete("/{item_id}", response_model=Dict)
def delete_stock_item(item_id: int, catalog: Catalog = Depends(get_catalog)):
    try:
        catalog.delete_stock_item(item_id)
    except InventoryError as e:
        raise http_error(e)
    return {"ok": True}


@router.get("/{item_id}/transactions", response_model=List[Dict])
def stock_item_history(item_id: int, catalog: Catalog = Depends(get_catalog)):
    try:
        catalog.get_stock_item(item_id)
    except InventoryError as e:
        raise http_error(e)
    return [
        {**transaction_response(tx), "label": tx.kind.history_label}
        for tx in catalog.ledger.history(item_id)
    ]


@router.post("/{item_id}/stock-in", response_model=Dict, status_code=status.HTTP_201_CREATED)
def stock_in(item_id: int, payload: AddStockRequest, catalog: Catalog = Depends(get_catalog)):
    try:
        tx = catalog.stock_in(
            item_id,
            payload.quantity,
            payload.per_unit_price,
            payload.supplier_name,
            payload.date_time,
            payload.notes,
        )
    except InventoryError as e:
        raise http_error(e)
    return _movement_response(catalog, tx)


@router.post("/{item_id}/stock-out", response_model=Dict, status_code=status.HTTP_201_CREATED)
def stock_out(item_id: int, payload: StockOutRequest, catalog: Catalog = Depends(get_catalog)):
    try:
        tx = catalog.stock_out(item_id, payload)
    except InventoryError as e:
        raise http_error(e)
    return _movement_response(catalog, tx)


# -- ledger --------------------------------------------------------------------

@transactions_router.get("/", response_model=List[Dict])
def activity_log(
    stock_item_id: Optional[int] = Query(None, alias="stockItemId"),
    catalog: Catalog = Depends(get_catalog),
):
    entries = catalog.ledger.activity_log()
    if stock_item_id is not None:
        entries = [e for e in entries if e.transaction.stock_item_id == stock_item_id]
    return [{**transaction_response(e.transaction), "itemName": e.item_name} for e in entries]


@transactions_router.patch("/{transaction_id}", response_model=Dict)
def edit_transaction(transaction_id: int, payload: TransactionUpdate, catalog: Catalog = Depends(get_catalog)):
    try:
        tx = catalog.ledger.edit_transaction(
            transaction_id,
            new_quantity=payload.quantity,
            new_party=payload.party,
            new_unit_price=payload.per_unit_price,
            new_date_time=payload.date_time,
            new_notes=payload.notes,
        )
    except InventoryError as e:
        raise http_error(e)
    return _movement_response(catalog, tx)


@transactions_router.delete("/{transaction_id}", response_model=Dict)
def delete_transaction(transaction_id: int, catalog: Catalog = Depends(get_catalog)):
    catalog.ledger.delete_transaction(transaction_id)
    return {"ok": True}


@transactions_router.post("/reconcile", response_model=List[Dict])
def reconcile_all(catalog: Catalog = Depends(get_catalog)):
    return [item_response(i) for i in catalog.ledger.reconcile_on_load()]
