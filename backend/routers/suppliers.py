from fastapi import APIRouter, Depends, Query, status
from typing import Dict, List

from core.exceptions import InventoryError
from routers.deps import get_catalog, http_error
from schemas.suppliers import SupplierCreate, SupplierUpdate
from services.catalog import Catalog

router = APIRouter()


@router.get("/", response_model=List[Dict])
def list_suppliers(
    search: str = Query("", description="Matches legal name, contact person, email or phone"),
    catalog: Catalog = Depends(get_catalog),
):
    return [s.to_record() for s in catalog.list_suppliers(search)]


@router.get("/{supplier_id}", response_model=Dict)
def get_supplier(supplier_id: int, catalog: Catalog = Depends(get_catalog)):
    try:
        return catalog.suppliers.get(supplier_id).to_record()
    except InventoryError as e:
        raise http_error(e)


@router.post("/", response_model=Dict, status_code=status.HTTP_201_CREATED)
def create_supplier(payload: SupplierCreate, catalog: Catalog = Depends(get_catalog)):
    return catalog.create_supplier(payload).to_record()


@router.patch("/{supplier_id}", response_model=Dict)
def update_supplier(supplier_id: int, payload: SupplierUpdate, catalog: Catalog = Depends(get_catalog)):
    try:
        return catalog.update_supplier(supplier_id, payload).to_record()
    except InventoryError as e:
        raise http_error(e)


@router.delete("/{supplier_id}", response_model=Dict)
def delete_supplier(supplier_id: int, catalog: Catalog = Depends(get_catalog)):
    try:
        catalog.delete_supplier(supplier_id)
    except InventoryError as e:
        raise http_error(e)
    return {"ok": True}
