"""
Repositories over the file-backed store.

Rows come out of the store as strings; repositories hand back typed dicts
built through the domain models. Products are returned with their
`category` and `supplier` references populated.
"""
from typing import Any, Dict, Iterable, List, Mapping, Optional

from app.database import FileBackedDB
from app.models.category import Category
from app.models.product import Product
from app.models.supplier import Supplier


class EntityRepository:
    table: str = ""
    model: Any = None

    def __init__(self, db: FileBackedDB):
        self.db = db

    def _out(self, row: Dict[str, Any]) -> Dict[str, Any]:
        return self.model.from_dict(row).to_dict()

    def list(self) -> List[Dict[str, Any]]:
        return [self._out(r) for r in self.db.list_records(self.table)]

    def get(self, entity_id: str) -> Optional[Dict[str, Any]]:
        row = self.db.get_record(self.table, "_id", entity_id)
        return self._out(row) if row else None

    def exists(self, entity_id: str) -> bool:
        return self.db.get_record(self.table, "_id", entity_id) is not None

    def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        saved = self.db.create_record(self.table, dict(data), id_field="_id")
        return self._out(saved)

    def delete(self, entity_id: str) -> Optional[Dict[str, Any]]:
        removed = self.db.delete_record(self.table, "_id", entity_id)
        return self._out(removed) if removed else None


class CategoryRepository(EntityRepository):
    table = "categories"
    model = Category


class SupplierRepository(EntityRepository):
    table = "suppliers"
    model = Supplier


class ProductRepository(EntityRepository):
    table = "products"
    model = Product

    def __init__(self, db: FileBackedDB):
        super().__init__(db)
        self.categories = CategoryRepository(db)
        self.suppliers = SupplierRepository(db)

    def _populate(self, products: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        products = list(products)
        if not products:
            return products
        categories = {c["_id"]: c for c in self.categories.list()}
        suppliers = {s["_id"]: s for s in self.suppliers.list()}
        for p in products:
            p["category"] = categories.get(p.get("categoryId"))
            p["supplier"] = suppliers.get(p.get("supplierId"))
        return products

    def find(self, predicate: Mapping[str, Any], skip: int = 0, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        rows = self.db.find(self.table, predicate, skip=skip, limit=limit)
        return self._populate(self._out(r) for r in rows)

    def count(self, predicate: Mapping[str, Any]) -> int:
        return self.db.count(self.table, predicate)

    def get(self, entity_id: str) -> Optional[Dict[str, Any]]:
        product = super().get(entity_id)
        if product is None:
            return None
        return self._populate([product])[0]

    def update(self, product_id: str, updates: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        updated = self.db.update_record(self.table, "_id", product_id, dict(updates))
        if updated is None:
            return None
        return self._populate([self._out(updated)])[0]
