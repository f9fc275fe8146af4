from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_category_repository
from app.api.schemas.category import CategoryCreate, CategoryOut
from app.db.repository import CategoryRepository

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("/", response_model=List[CategoryOut])
def list_categories(repo: CategoryRepository = Depends(get_category_repository)):
    return repo.list()


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: str, repo: CategoryRepository = Depends(get_category_repository)):
    category = repo.get(category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.post("/", response_model=CategoryOut, status_code=201)
def create_category(payload: CategoryCreate, repo: CategoryRepository = Depends(get_category_repository)):
    return repo.create(payload.model_dump())


@router.delete("/{category_id}", response_model=CategoryOut)
def delete_category(category_id: str, repo: CategoryRepository = Depends(get_category_repository)):
    # products keep the dangling categoryId; they are listed with category = null
    removed = repo.delete(category_id)
    if not removed:
        raise HTTPException(status_code=404, detail="Category not found")
    return removed
