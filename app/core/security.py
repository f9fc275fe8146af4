from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt, JWTError

from app.config import settings


def create_product_token(product_id: str, name: str, price: float, expires_minutes: Optional[int] = None) -> str:
    """
    Issue a signed token identifying a product. The product id is the
    `sub` claim; name and price travel alongside it.
    """
    if expires_minutes is None:
        expires_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES
    now = datetime.now(timezone.utc)
    to_encode = {
        "sub": str(product_id),
        "name": name,
        "price": price,
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_product_token(token: str) -> Optional[Dict[str, Any]]:
    """Return the verified claims, or None if the token is invalid, expired or has no subject."""
    if not token:
        return None
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None
    if not payload.get("sub"):
        return None
    return payload
