from typing import Dict

from fastapi import APIRouter, Depends

from db.store import (
    MEASURING_UNITS,
    STOCK_GROUPS,
    STOCK_ITEMS,
    STOCK_TRANSACTIONS,
    SUPPLIERS,
    snapshot,
)
from routers.deps import get_catalog
from schemas.catalog import SidebarPreference
from services.catalog import Catalog

router = APIRouter()


@router.get("/sidebar", response_model=SidebarPreference)
def get_sidebar(catalog: Catalog = Depends(get_catalog)):
    return SidebarPreference(collapsed=catalog.sidebar_collapsed())


@router.put("/sidebar", response_model=SidebarPreference)
def set_sidebar(payload: SidebarPreference, catalog: Catalog = Depends(get_catalog)):
    return SidebarPreference(collapsed=catalog.set_sidebar_collapsed(payload.collapsed))


@router.get("/export", response_model=Dict)
def export_data(catalog: Catalog = Depends(get_catalog)):
    return snapshot(
        catalog.store,
        [STOCK_ITEMS, STOCK_TRANSACTIONS, SUPPLIERS, MEASURING_UNITS, STOCK_GROUPS],
    )


@router.post("/reset", response_model=Dict)
def reset_data(catalog: Catalog = Depends(get_catalog)):
    catalog.clear_all_data()
    return {"ok": True}
