# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_db
from app.database import FileBackedDB
from app.db.repository import CategoryRepository, ProductRepository, SupplierRepository
from app.main import app


@pytest.fixture
def db(tmp_path):
    """Isolated store rooted in a per-test temp directory."""
    return FileBackedDB(tmp_path / "data")


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_header():
    """
    Helper that returns a callable to build Authorization header from a token.
    Usage: hdr = auth_header(token)
    """
    def _h(tok: str):
        return {"Authorization": f"Bearer {tok}"}
    return _h


@pytest.fixture
def make_category(db):
    def _fn(name="Lighting", description=None):
        return CategoryRepository(db).create({"name": name, "description": description})
    return _fn


@pytest.fixture
def make_supplier(db):
    def _fn(name="Acme Supply", email="sales@acme.example"):
        return SupplierRepository(db).create({"name": name, "email": email})
    return _fn


@pytest.fixture
def category(make_category):
    return make_category()


@pytest.fixture
def supplier(make_supplier):
    return make_supplier()


@pytest.fixture
def make_product(db, category, supplier):
    """
    Insert a product straight into the store.
    Usage: p = make_product(name="Desk Lamp", stock=5)
    """
    def _fn(name="Desk Lamp", price=25.0, discount=0, stock=10, categoryId=None, supplierId=None, description=None):
        return ProductRepository(db).create({
            "name": name,
            "price": price,
            "discount": discount,
            "stock": stock,
            "categoryId": categoryId or category["_id"],
            "supplierId": supplierId or supplier["_id"],
            "description": description,
        })
    return _fn


@pytest.fixture
def product_payload(category, supplier):
    def _fn(**overrides):
        payload = {
            "name": "Floor Lamp",
            "price": 120.0,
            "discount": 10,
            "stock": 4,
            "categoryId": category["_id"],
            "supplierId": supplier["_id"],
            "description": "Brass floor lamp",
        }
        payload.update(overrides)
        return payload
    return _fn
