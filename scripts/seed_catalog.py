"""Loads a small demo catalog (categories, suppliers, products) into DATA_DIR."""
import logging
from typing import Dict

from app.config import settings
from app.database import FileBackedDB, create_db
from app.db.repository import CategoryRepository, ProductRepository, SupplierRepository

logger = logging.getLogger("seed_catalog")

CATEGORIES = [
    {"name": "Beverages", "description": "Soft drinks, coffees, teas"},
    {"name": "Condiments", "description": "Sauces, relishes, spreads"},
    {"name": "Seafood", "description": "Seaweed and fish"},
]

SUPPLIERS = [
    {"name": "Exotic Liquids", "email": "orders@exotic-liquids.example", "phoneNumber": "0171-555-2222", "address": "49 Gilbert St., London"},
    {"name": "Tokyo Traders", "email": "sales@tokyo-traders.example", "phoneNumber": "03-3555-5011", "address": "9-8 Sekimai, Tokyo"},
]

# (name, price, discount, stock, category index, supplier index)
PRODUCTS = [
    ("Chai", 18.0, 5, 39, 0, 0),
    ("Chang", 19.0, 0, 17, 0, 0),
    ("Aniseed Syrup", 10.0, 10, 13, 1, 0),
    ("Ikura", 31.0, 20, 31, 2, 1),
    ("Konbu", 6.0, 0, 24, 2, 1),
    ("Genen Shouyu", 15.5, 15, 39, 1, 1),
]


def seed(db: FileBackedDB) -> Dict[str, int]:
    """Insert the demo catalog unless products already exist. Returns inserted row counts."""
    products = ProductRepository(db)
    if products.count({}):
        logger.info("Products table already populated, skipping seed")
        return {"categories": 0, "suppliers": 0, "products": 0}

    categories = [CategoryRepository(db).create(c) for c in CATEGORIES]
    suppliers = [SupplierRepository(db).create(s) for s in SUPPLIERS]
    for name, price, discount, stock, cat, sup in PRODUCTS:
        products.create({
            "name": name,
            "price": price,
            "discount": discount,
            "stock": stock,
            "categoryId": categories[cat]["_id"],
            "supplierId": suppliers[sup]["_id"],
            "description": "",
        })
    return {"categories": len(categories), "suppliers": len(suppliers), "products": len(PRODUCTS)}


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    counts = seed(create_db(settings))
    logger.info("Seeded %s into %s", counts, settings.DATA_DIR)
