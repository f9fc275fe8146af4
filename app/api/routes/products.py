# app/api/routes/products.py
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from pydantic import ValidationError

from app.api.deps import get_current_product, get_product_repository
from app.api.schemas.product import (
    LoginRequest,
    ProductCreate,
    ProductOut,
    ProductPage,
    ProductResult,
    ProductUpdate,
    TokenResponse,
)
from app.config import settings
from app.core.errors import NotFound, ValidationFailed
from app.core.query import ProductFilter, RangeFilter
from app.core.security import create_product_token
from app.database import is_valid_id
from app.db.repository import ProductRepository
from app.services import catalog

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("/", response_model=ProductPage)
def list_products(
    category: Optional[str] = Query(None, description="category id (exact match)"),
    sup: Optional[str] = Query(None, description="supplier id (exact match)"),
    product: Optional[str] = Query(None, max_length=100, description="name fragment, case-sensitive regex"),
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1, le=settings.MAX_PAGE_LIMIT),
    stock_start: Optional[float] = Query(None, alias="stockStart"),
    stock_end: Optional[float] = Query(None, alias="stockEnd"),
    price_start: Optional[float] = Query(None, alias="priceStart"),
    price_end: Optional[float] = Query(None, alias="priceEnd"),
    discount_start: Optional[float] = Query(None, alias="discountStart"),
    discount_end: Optional[float] = Query(None, alias="discountEnd"),
    repo: ProductRepository = Depends(get_product_repository),
):
    """
    List products with optional filters. Returns `{payload, total}` where
    `total` counts every match regardless of skip/limit.
    """
    filters = ProductFilter(
        category=category,
        supplier=sup,
        name=product,
        skip=skip,
        limit=limit,
        stock=RangeFilter(stock_start, stock_end),
        price=RangeFilter(price_start, price_end),
        discount=RangeFilter(discount_start, discount_end),
    )
    return catalog.list_products(repo, filters, default_limit=settings.DEFAULT_PAGE_LIMIT)


@router.post("/login/{product_id}", response_model=TokenResponse)
def login_product(
    product_id: str,
    payload: Optional[LoginRequest] = Body(None),
    repo: ProductRepository = Depends(get_product_repository),
):
    """
    Issue a bearer token for a product. The body's `_id` wins over the path id when both are given.
    """
    target = payload.id if payload and payload.id else product_id
    product = repo.get(target)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    token = create_product_token(product["_id"], product["name"], product["price"])
    return {"token": token, "payload": product}


@router.get("/profile/{product_id}", response_model=ProductOut)
def product_profile(product_id: str, current: Dict[str, Any] = Depends(get_current_product)):
    if current["_id"] != product_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Token was issued for another product")
    return current


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: str, repo: ProductRepository = Depends(get_product_repository)):
    return catalog.get_product(repo, product_id)


@router.post("/", response_model=ProductResult, status_code=201)
def create_product(payload: ProductCreate, repo: ProductRepository = Depends(get_product_repository)):
    created = catalog.create_product(repo, payload.model_dump())
    return {"ok": True, "message": "Created", "result": created}


@router.patch("/{product_id}", response_model=ProductResult)
def update_product(
    product_id: str,
    payload: Dict[str, Any] = Body(...),
    repo: ProductRepository = Depends(get_product_repository),
):
    """
    Partial update. The id is looked up before the body is validated, so an
    unknown id is a 404 whatever the payload.
    """
    if not repo.exists(product_id):
        raise NotFound("Product not found")
    try:
        updates = ProductUpdate.model_validate(payload).model_dump(exclude_unset=True)
    except ValidationError as exc:
        errors = [(".".join(str(p) for p in e["loc"]) or "body", e["msg"]) for e in exc.errors()]
        raise ValidationFailed(errors, provider="pydantic")
    updated = catalog.update_product(repo, product_id, updates)
    return {"ok": True, "message": "Updated", "result": updated}


@router.delete("/{product_id}", response_model=ProductResult)
def delete_product(product_id: str, repo: ProductRepository = Depends(get_product_repository)):
    if not is_valid_id(product_id):
        raise ValidationFailed([("id", "id is not a valid identifier")], location="path")
    try:
        removed = catalog.delete_product(repo, product_id)
    except NotFound:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail="Object not found")
    return {"ok": True, "result": removed}
