"""
API Dependencies

Provides dependency injection for services, storage and the current user.
This centralizes service creation for API endpoints.
"""

import logging
from functools import lru_cache

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from automart.core.security import TokenError, decode_access_token
from automart.db.session import get_db
from automart.infrastructure.storage.uploader import Uploader, get_default_uploader
from automart.repositories.category_repository import CategoryRepository
from automart.repositories.product_repository import ProductRepository
from automart.repositories.user_repository import UserRepository
from automart.schemas.user import AuthUser
from automart.services import AuthService, CategoryService, ProductService

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor
security = HTTPBearer(auto_error=False)


@lru_cache()
def get_uploader() -> Uploader:
    """
    Get the shared image uploader

    The MinIO client is thread safe, so one instance serves every request.
    """
    return get_default_uploader()


def get_product_service(
        db: Session = Depends(get_db),
        uploader: Uploader = Depends(get_uploader),
) -> ProductService:
    return ProductService(
        product_repository=ProductRepository(db),
        category_repository=CategoryRepository(db),
        uploader=uploader,
    )


def get_category_service(db: Session = Depends(get_db)) -> CategoryService:
    return CategoryService(
        category_repository=CategoryRepository(db),
        product_repository=ProductRepository(db),
    )


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(user_repository=UserRepository(db))


async def get_current_user(
        credentials: HTTPAuthorizationCredentials = Depends(security),
) -> AuthUser:
    """
    Extract and validate the user from the bearer token.

    Raises:
        HTTPException: 401 if the header is missing, the token is invalid
            or it has expired
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = decode_access_token(credentials.credentials)
        user = AuthUser(id=int(payload["sub"]), email=payload.get("email"), role=payload.get("role", ""))
    except TokenError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    except ValueError:
        logger.warning(f"Invalid user id in token: {payload.get('sub')}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: malformed user ID",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.debug(f"Authenticated user: {user.id}")
    return user
