import logging

from fastapi import FastAPI
import uvicorn
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from core.config import settings
from db.database import create_db_and_tables
from db.store import get_store
from routers.catalog import groups_router, units_router
from routers.inventory import router as stock_items_router, transactions_router
from routers.settings import router as settings_router
from routers.suppliers import router as suppliers_router
from services.ledger import Ledger

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    if settings.reconcile_on_startup:
        # honour dependency overrides so start-up reconciles the same store the routes use
        store = app.dependency_overrides.get(get_store, get_store)()
        items = Ledger(store).reconcile_on_load()
        logger.info("Reconciled %d stock items against the ledger", len(items))
    yield


app = FastAPI(
    title="Restaurant Inventory API",
    description="API for managing restaurant stock items, suppliers and the stock ledger",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", tags=["health"])
def health() -> dict:
    return {"status": "ok"}


# Stock items and the ledger
app.include_router(stock_items_router, prefix="/stock-items", tags=["stock-items"])
app.include_router(transactions_router, prefix="/transactions", tags=["transactions"])

# Lookup lists
app.include_router(suppliers_router, prefix="/suppliers", tags=["suppliers"])
app.include_router(units_router, prefix="/measuring-units", tags=["measuring-units"])
app.include_router(groups_router, prefix="/stock-groups", tags=["stock-groups"])

app.include_router(settings_router, prefix="/settings", tags=["settings"])

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
