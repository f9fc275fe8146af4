import logging
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from app.core.errors import NotFound, ValidationFailed
from app.core.query import DEFAULT_LIMIT, ProductFilter, build_product_query
from app.database import is_valid_id
from app.db.repository import ProductRepository

logger = logging.getLogger(__name__)


def assemble_page(products: Iterable[Dict[str, Any]], total: int) -> Dict[str, Any]:
    """Wrap a page of products and the unpaginated match count."""
    return {"payload": list(products), "total": total}


def list_products(repo: ProductRepository, filters: ProductFilter, default_limit: int = DEFAULT_LIMIT) -> Dict[str, Any]:
    """
    Run a filtered, paginated product listing.
    find and count are separate reads, so `total` may drift from the page under concurrent writes.
    """
    query = build_product_query(filters, default_limit=default_limit)
    logger.debug("product query: predicate=%s skip=%s limit=%s", query.predicate, query.skip, query.limit)
    products = repo.find(query.predicate, skip=query.skip, limit=query.limit)
    total = repo.count(query.predicate)
    return assemble_page(products, total)


def get_product(repo: ProductRepository, product_id: str) -> Dict[str, Any]:
    product = repo.get(product_id)
    if product is None:
        raise NotFound("Product not found")
    return product


def _reference_errors(repo: ProductRepository, data: Mapping[str, Any]) -> List[Tuple[str, str]]:
    errors: List[Tuple[str, str]] = []
    checks = (
        ("categoryId", "Category", repo.categories),
        ("supplierId", "Supplier", repo.suppliers),
    )
    for field, label, refs in checks:
        if field not in data:
            continue
        value = data[field]
        if not is_valid_id(value):
            errors.append((field, f"{field} is not a valid id"))
        elif not refs.exists(value):
            errors.append((field, f"{label} {value} does not exist"))
    return errors


def create_product(repo: ProductRepository, data: Mapping[str, Any]) -> Dict[str, Any]:
    errors = _reference_errors(repo, data)
    if errors:
        raise ValidationFailed(errors)
    saved = repo.create(data)
    logger.info("Created product %s (%s)", saved["_id"], saved["name"])
    return repo.get(saved["_id"])


def update_product(repo: ProductRepository, product_id: str, updates: Mapping[str, Any]) -> Dict[str, Any]:
    """Apply an already-validated partial update. Unknown ids raise NotFound before references are checked."""
    if not repo.exists(product_id):
        raise NotFound("Product not found")
    errors = _reference_errors(repo, updates)
    if errors:
        raise ValidationFailed(errors)
    if not updates:
        return get_product(repo, product_id)
    updated = repo.update(product_id, updates)
    if updated is None:
        # deleted between the existence check and the write
        raise NotFound("Product not found")
    logger.info("Updated product %s fields=%s", product_id, sorted(updates))
    return updated


def delete_product(repo: ProductRepository, product_id: str) -> Dict[str, Any]:
    removed = repo.delete(product_id)
    if removed is None:
        raise NotFound("Object not found")
    logger.info("Deleted product %s", product_id)
    return removed
