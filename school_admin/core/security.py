"""
Password hashing and bearer token handling.

Provides:
- PasswordHasher: salted bcrypt hashes with a configurable cost
- TokenService: signed JWT access tokens with an expiry claim

Both are constructed from settings once and handed to the services that need
them; nothing here reads configuration per call.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

# bcrypt ignores (newer releases reject) anything past 72 bytes
BCRYPT_MAX_BYTES = 72

REQUIRED_CLAIMS = ("id", "email", "exp")


class HashFormatError(Exception):
    """The stored value is not a bcrypt hash."""


class TokenInvalidError(Exception):
    """Token has a bad signature, is malformed or lacks identity claims."""


class TokenExpiredError(TokenInvalidError):
    """Token signature is fine but its expiry is in the past."""


def _encode_password(plain: str) -> bytes:
    return (plain or "").encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """One-way bcrypt hashing with a fresh salt on every call."""

    def __init__(self, rounds: int = 10) -> None:
        self.rounds = rounds

    def hash(self, plain: str) -> str:
        return bcrypt.hashpw(_encode_password(plain), bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, plain: str, hashed: Optional[str]) -> bool:
        """
        Constant-time check of `plain` against a stored hash.

        Returns False on mismatch; raises HashFormatError when `hashed` is
        missing or not a bcrypt hash.
        """
        if not hashed:
            raise HashFormatError("No password hash stored")
        try:
            return bcrypt.checkpw(_encode_password(plain), hashed.encode("utf-8"))
        except ValueError as e:
            raise HashFormatError(str(e)) from e


class TokenService:
    """Issues and verifies HMAC-signed JWT access tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta = timedelta(hours=1)) -> None:
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, claims: Dict[str, Any], ttl: Optional[timedelta] = None) -> str:
        issued_at = datetime.now(timezone.utc)
        payload = dict(claims)
        payload["iat"] = issued_at
        payload["exp"] = issued_at + (ttl if ttl is not None else self.ttl)
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except JWTError as e:
            raise TokenInvalidError(str(e)) from e

        missing = [name for name in REQUIRED_CLAIMS if name not in claims]
        if missing:
            raise TokenInvalidError(f"Token is missing claims: {', '.join(missing)}")
        return claims
