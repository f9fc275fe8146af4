from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

DEFAULT_LIMIT = 10

# numeric fields that accept a (start, end) range, in the order they are applied
RANGE_FIELDS = ("stock", "price", "discount")


@dataclass
class RangeFilter:
    """Inclusive numeric interval; either bound may be omitted."""
    start: Optional[float] = None
    end: Optional[float] = None

    def is_set(self) -> bool:
        # 0 is a real bound, only None means "absent"
        return self.start is not None or self.end is not None

    def to_condition(self) -> Dict[str, Any]:
        condition: Dict[str, Any] = {"$exists": True}
        if self.start is not None:
            condition["$gte"] = self.start
        if self.end is not None:
            condition["$lte"] = self.end
        return condition


@dataclass
class ProductFilter:
    """
    Typed form of the list endpoint's query string.

    category / supplier are ids matched exactly, `name` is an unanchored
    regex fragment, and each range constrains the field of the same name.
    """
    category: Optional[str] = None
    supplier: Optional[str] = None
    name: Optional[str] = None
    skip: Optional[int] = None
    limit: Optional[int] = None
    stock: RangeFilter = field(default_factory=RangeFilter)
    price: RangeFilter = field(default_factory=RangeFilter)
    discount: RangeFilter = field(default_factory=RangeFilter)


@dataclass
class CatalogQuery:
    predicate: Dict[str, Any]
    skip: int = 0
    limit: int = DEFAULT_LIMIT


def build_product_query(filters: ProductFilter, default_limit: int = DEFAULT_LIMIT) -> CatalogQuery:
    """
    Turn a ProductFilter into a store predicate plus pagination.

    Pure transformation: nothing is validated here, bad operands are
    rejected by the store when the predicate is evaluated. No upper bound
    is applied to `limit`; callers are expected to cap it.
    """
    predicate: Dict[str, Any] = {}

    if filters.category:
        predicate["categoryId"] = filters.category
    if filters.supplier:
        predicate["supplierId"] = filters.supplier
    if filters.name:
        predicate["name"] = {"$regex": filters.name}

    for field_name in RANGE_FIELDS:
        bounds: RangeFilter = getattr(filters, field_name)
        if bounds.is_set():
            predicate[field_name] = bounds.to_condition()

    skip = filters.skip if filters.skip is not None else 0
    limit = filters.limit if filters.limit is not None else default_limit
    return CatalogQuery(predicate=predicate, skip=skip, limit=limit)
