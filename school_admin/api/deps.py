from datetime import timedelta
from functools import lru_cache
from typing import Dict, Optional

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError
from sqlalchemy.orm import Session

from school_admin.core.config import settings
from school_admin.core.database import get_db
from school_admin.core.exceptions import UnauthorizedException
from school_admin.core.security import PasswordHasher, TokenExpiredError, TokenInvalidError, TokenService
from school_admin.schemas.auth import TokenClaims
from school_admin.services.teacher.auth import AuthService
from school_admin.services.teacher.credentials import TeacherCredentialStore

__all__ = [
    "get_db",
    "get_password_hasher",
    "get_token_service",
    "get_auth_service",
    "require_teacher",
    "list_query_params",
]

# Missing header is reported by require_teacher, not by FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=settings.PASSWORD_HASH_ROUNDS)


@lru_cache
def get_token_service() -> TokenService:
    return TokenService(
        secret=settings.SECRET_KEY.get_secret_value(),
        algorithm=settings.ALGORITHM,
        ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def get_auth_service(
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(TeacherCredentialStore(db), hasher, tokens)


def require_teacher(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """
    Auth gate for protected route groups.

    Usage:
        api_router.include_router(router, dependencies=[Depends(require_teacher)])
        def endpoint(user: TokenClaims = Depends(require_teacher)): ...
    """
    if credentials is None:
        raise UnauthorizedException("Missing bearer token", reason="missing_token")

    try:
        claims = tokens.verify(credentials.credentials)
    except TokenExpiredError:
        raise UnauthorizedException("Invalid or expired token", reason="token_expired")
    except TokenInvalidError:
        raise UnauthorizedException("Invalid or expired token", reason="token_invalid")

    try:
        return TokenClaims.model_validate(claims)
    except ValidationError:
        raise UnauthorizedException("Invalid or expired token", reason="token_claims")


def list_query_params(
    page: Optional[str] = Query(None, description="Page number (default 1)"),
    limit: Optional[str] = Query(None, description="Items per page (default 10)"),
    sort: Optional[str] = Query(None, description="Sort by creation time: asc or desc (default asc)"),
    populate: Optional[str] = Query(None, description="Comma-separated relations to include, e.g. courseId"),
) -> Dict[str, Optional[str]]:
    """Raw list parameters; validation happens in services.pagination."""
    return {"page": page, "limit": limit, "sort": sort, "populate": populate}
