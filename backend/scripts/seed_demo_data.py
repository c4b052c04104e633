import argparse
import sys
from pathlib import Path

"""
Seed demo data (measuring units, stock groups, suppliers, stock items with
opening stock) into the configured store.

This script can be run from either:
- backend/: `python scripts/seed_demo_data.py`
- repo root: `python backend/scripts/seed_demo_data.py`

Pass --reset to wipe the existing collections first.
"""

# Allow running from repo root by ensuring `backend/` is on sys.path
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from db.database import create_db_and_tables  # noqa: E402
from db.store import CollectionStore  # noqa: E402
from schemas.catalog import MeasuringUnitCreate, StockGroupCreate  # noqa: E402
from schemas.inventory import StockItemCreate, StockOutRequest  # noqa: E402
from schemas.suppliers import SupplierCreate  # noqa: E402
from services.catalog import Catalog  # noqa: E402


DEMO_UNITS = [
    ("Kilograms", "kg"),
    ("Grams", "g"),
    ("Liters", "L"),
    ("Milliliters", "ml"),
    ("Pieces", "pcs"),
]

DEMO_GROUPS = [
    ("Vegetables", "Fresh vegetables and produce"),
    ("Meat", "Fresh meat and poultry products"),
    ("Dairy", "Dairy products and milk-based items"),
    ("Grains", "Rice, wheat, and grain products"),
    ("Beverages", "Drinks and beverage products"),
]

DEMO_SUPPLIERS = [
    SupplierCreate(legal_name="ABC Suppliers", contact_person="Ram Shrestha", phone_number="9800000001"),
    SupplierCreate(legal_name="Quality Foods Ltd", contact_person="Sita Karki", phone_number="9800000002"),
    SupplierCreate(legal_name="Fresh Market Supplies", contact_person="Hari Thapa", phone_number="9800000003"),
]

DEMO_ITEMS = [
    StockItemCreate(name="Tomatoes", category="Vegetables", measuring_unit="kg", initial_stock=50,
                    price=120, supplier="Fresh Market Supplies", reorder_level=10),
    StockItemCreate(name="Chicken Breast", category="Meat", measuring_unit="kg", initial_stock=20,
                    price=650, supplier="Quality Foods Ltd", reorder_level=5),
    StockItemCreate(name="Basmati Rice", category="Grains", measuring_unit="kg", initial_stock=100,
                    price=180, supplier="ABC Suppliers", reorder_level=25),
    StockItemCreate(name="Milk", category="Dairy", measuring_unit="L", initial_stock=0,
                    price=110, supplier="Quality Foods Ltd", reorder_level=8),
]


def seed(catalog: Catalog, reset: bool = False) -> None:
    if reset:
        catalog.clear_all_data()

    if not catalog.list_measuring_units():
        for name, abbreviation in DEMO_UNITS:
            catalog.create_measuring_unit(MeasuringUnitCreate(name=name, abbreviation=abbreviation))
    if not catalog.list_stock_groups():
        for name, description in DEMO_GROUPS:
            catalog.create_stock_group(StockGroupCreate(name=name, description=description))
    if not catalog.list_suppliers():
        for supplier in DEMO_SUPPLIERS:
            catalog.create_supplier(supplier)

    existing = {i.name.lower() for i in catalog.list_stock_items()}
    created = {}
    for payload in DEMO_ITEMS:
        if payload.name.lower() in existing:
            print(f"Skipping existing stock item {payload.name}")
            continue
        item = catalog.create_stock_item(payload)
        created[item.name] = item
        print(f"Created {item.name}: {item.quantity} {item.measuring_unit} ({item.status.value})")

    # leave one item low on stock so the dashboard has something to flag
    tomatoes = created.get("Tomatoes")
    if tomatoes is not None:
        catalog.stock_out(tomatoes.id, StockOutRequest(quantity=42, reason_for_deduction="used-for-dishes"))
        print("Recorded usage of 42 kg Tomatoes")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed demo inventory data")
    parser.add_argument("--reset", action="store_true", help="clear all collections before seeding")
    args = parser.parse_args()

    create_db_and_tables()
    seed(Catalog(CollectionStore()), reset=args.reset)


if __name__ == "__main__":
    main()
