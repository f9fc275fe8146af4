# app/models/supplier.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any


@dataclass
class Supplier:
    id: Optional[str] = None
    name: str = ""
    email: Optional[str] = None
    phoneNumber: Optional[str] = None
    address: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Supplier":
        if d is None:
            raise ValueError("Cannot construct Supplier from None")
        # phone numbers may have been parsed as numbers by a spreadsheet; keep them as text
        phone = d.get("phoneNumber")
        return cls(
            id=d.get("_id") or d.get("id") or None,
            name=str(d.get("name") or ""),
            email=d.get("email") or None,
            phoneNumber=str(phone) if phone not in (None, "") else None,
            address=d.get("address") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["_id"] = out.pop("id")
        return out
