from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import settings
from app.core.security import decode_product_token
from app.database import FileBackedDB, create_db
from app.db.repository import CategoryRepository, ProductRepository, SupplierRepository

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache()
def get_db() -> FileBackedDB:
    """
    Dependency that returns the file-backed store built from settings.
    Usage:
        db = Depends(get_db)
    Tests replace it through `app.dependency_overrides[get_db]`.
    """
    return create_db(settings)


def get_product_repository(db: FileBackedDB = Depends(get_db)) -> ProductRepository:
    return ProductRepository(db)


def get_category_repository(db: FileBackedDB = Depends(get_db)) -> CategoryRepository:
    return CategoryRepository(db)


def get_supplier_repository(db: FileBackedDB = Depends(get_db)) -> SupplierRepository:
    return SupplierRepository(db)


async def get_token_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Dict[str, Any]:
    """Verify the bearer token and return its claims. Raises 401 if missing or invalid."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise credentials_exception
    claims = decode_product_token(credentials.credentials)
    if claims is None:
        raise credentials_exception
    return claims


def get_current_product(
    claims: Dict[str, Any] = Depends(get_token_claims),
    repo: ProductRepository = Depends(get_product_repository),
) -> Dict[str, Any]:
    """
    Resolve the product the bearer token was issued for (populated, as stored now).
    A token for a product that has since been deleted gives 404.
    """
    product = repo.get(claims["sub"])
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    return product
