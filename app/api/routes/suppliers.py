from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_supplier_repository
from app.api.schemas.supplier import SupplierCreate, SupplierOut
from app.db.repository import SupplierRepository

router = APIRouter(prefix="/api/suppliers", tags=["suppliers"])


@router.get("/", response_model=List[SupplierOut])
def list_suppliers(repo: SupplierRepository = Depends(get_supplier_repository)):
    return repo.list()


@router.get("/{supplier_id}", response_model=SupplierOut)
def get_supplier(supplier_id: str, repo: SupplierRepository = Depends(get_supplier_repository)):
    supplier = repo.get(supplier_id)
    if not supplier:
        raise HTTPException(status_code=404, detail="Supplier not found")
    return supplier


@router.post("/", response_model=SupplierOut, status_code=201)
def create_supplier(payload: SupplierCreate, repo: SupplierRepository = Depends(get_supplier_repository)):
    return repo.create(payload.model_dump())


@router.delete("/{supplier_id}", response_model=SupplierOut)
def delete_supplier(supplier_id: str, repo: SupplierRepository = Depends(get_supplier_repository)):
    removed = repo.delete(supplier_id)
    if not removed:
        raise HTTPException(status_code=404, detail="Supplier not found")
    return removed
