from typing import Dict, List

from fastapi import APIRouter, Depends, status

from core.exceptions import InventoryError
from routers.deps import get_catalog, http_error
from schemas.catalog import (
    MeasuringUnitCreate,
    MeasuringUnitUpdate,
    StockGroupCreate,
    StockGroupUpdate,
)
from services.catalog import Catalog

units_router = APIRouter()
groups_router = APIRouter()


@units_router.get("/", response_model=List[Dict])
def list_measuring_units(catalog: Catalog = Depends(get_catalog)):
    return [u.to_record() for u in catalog.list_measuring_units()]


@units_router.post("/", response_model=Dict, status_code=status.HTTP_201_CREATED)
def create_measuring_unit(payload: MeasuringUnitCreate, catalog: Catalog = Depends(get_catalog)):
    return catalog.create_measuring_unit(payload).to_record()


@units_router.patch("/{unit_id}", response_model=Dict)
def update_measuring_unit(unit_id: int, payload: MeasuringUnitUpdate, catalog: Catalog = Depends(get_catalog)):
    try:
        return catalog.update_measuring_unit(unit_id, payload).to_record()
    except InventoryError as e:
        raise http_error(e)


@units_router.delete("/{unit_id}", response_model=Dict)
def delete_measuring_unit(unit_id: int, catalog: Catalog = Depends(get_catalog)):
    try:
        catalog.delete_measuring_unit(unit_id)
    except InventoryError as e:
        raise http_error(e)
    return {"ok": True}


@groups_router.get("/", response_model=List[Dict])
def list_stock_groups(catalog: Catalog = Depends(get_catalog)):
    return [g.to_record() for g in catalog.list_stock_groups()]


@groups_router.post("/", response_model=Dict, status_code=status.HTTP_201_CREATED)
def create_stock_group(payload: StockGroupCreate, catalog: Catalog = Depends(get_catalog)):
    return catalog.create_stock_group(payload).to_record()


@groups_router.patch("/{group_id}", response_model=Dict)
def update_stock_group(group_id: int, payload: StockGroupUpdate, catalog: Catalog = Depends(get_catalog)):
    try:
        return catalog.update_stock_group(group_id, payload).to_record()
    except InventoryError as e:
        raise http_error(e)


@groups_router.delete("/{group_id}", response_model=Dict)
def delete_stock_group(group_id: int, catalog: Catalog = Depends(get_catalog)):
    try:
        catalog.delete_stock_group(group_id)
    except InventoryError as e:
        raise http_error(e)
    return {"ok": True}
