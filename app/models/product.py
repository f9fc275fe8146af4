# app/models/product.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any


def _to_float(raw: Any, default: float = 0.0) -> float:
    try:
        return float(raw) if raw not in (None, "") else default
    except (TypeError, ValueError):
        return default


@dataclass
class Product:
    """
    Catalog product. The file-backed store keeps everything as strings,
    so `from_dict` converts rows back to proper types.
    """
    id: Optional[str] = None
    name: str = ""
    price: float = 0.0
    discount: float = 0.0
    stock: int = 0
    categoryId: Optional[str] = None
    supplierId: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Product":
        if d is None:
            raise ValueError("Cannot construct Product from None")
        return cls(
            id=d.get("_id") or d.get("id") or None,
            name=str(d.get("name") or ""),
            price=_to_float(d.get("price")),
            discount=_to_float(d.get("discount")),
            stock=int(_to_float(d.get("stock"))),
            categoryId=d.get("categoryId") or None,
            supplierId=d.get("supplierId") or None,
            description=d.get("description") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Row shape used by the store (id stored under `_id`)."""
        out = asdict(self)
        out["_id"] = out.pop("id")
        return out
