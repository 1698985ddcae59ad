"""
Teacher registration and login.

Login failures all surface as the same UnauthorizedException so callers cannot
tell an unknown email from a wrong password. The distinguishing `reason` is
kept on the exception for logging only.
"""

import logging
from functools import lru_cache

from school_admin.core.exceptions import ConflictException, UnauthorizedException
from school_admin.core.security import HashFormatError, PasswordHasher, TokenService
from school_admin.models.teacher import Teacher
from school_admin.schemas.auth import TeacherRegister
from school_admin.services.teacher.credentials import TeacherCredentialStore

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


@lru_cache(maxsize=8)
def _dummy_hash(hasher: PasswordHasher) -> str:
    """A hash at the hasher's cost, checked against when no teacher matches."""
    return hasher.hash("unknown-teacher")


class AuthService:
    def __init__(self, store: TeacherCredentialStore, hasher: PasswordHasher, tokens: TokenService) -> None:
        self.store = store
        self.hasher = hasher
        self.tokens = tokens

    def register(self, payload: TeacherRegister) -> Teacher:
        email = str(payload.email)
        if self.store.find_by_identity(payload.name, payload.department, email) is not None:
            raise ConflictException("Teacher already exists")

        teacher = self.store.create(
            name=payload.name,
            department=payload.department,
            email=email,
            password_hash=self.hasher.hash(payload.password),
        )
        logger.info("Registered teacher %s", teacher.id)
        return teacher

    def login(self, email: str, password: str) -> str:
        """Check credentials and return a signed access token."""
        teacher = self.store.find_by_email(email)
        if teacher is None:
            # Same bcrypt cost as a real check, so timing does not reveal unknown emails
            self.hasher.verify(password, _dummy_hash(self.hasher))
            raise self._reject("unknown_email")

        try:
            matches = self.hasher.verify(password, teacher.password_hash)
        except HashFormatError:
            logger.warning("Teacher %s has no usable password hash", teacher.id)
            raise self._reject("malformed_hash")
        if not matches:
            raise self._reject("password_mismatch")

        token = self.tokens.issue({"id": teacher.id, "name": teacher.name, "email": teacher.email})
        logger.info("Teacher %s logged in", teacher.id)
        return token

    @staticmethod
    def _reject(reason: str) -> UnauthorizedException:
        return UnauthorizedException(INVALID_CREDENTIALS, reason=reason)
