# app/models/category.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any


@dataclass
class Category:
    id: Optional[str] = None
    name: str = ""
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Category":
        if d is None:
            raise ValueError("Cannot construct Category from None")
        return cls(
            id=d.get("_id") or d.get("id") or None,
            name=str(d.get("name") or ""),
            description=d.get("description") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["_id"] = out.pop("id")
        return out
