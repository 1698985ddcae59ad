"""Unit tests for password hashing and token handling."""

from datetime import timedelta

import pytest
from jose import jwt

from school_admin.core.security import (
    HashFormatError,
    PasswordHasher,
    TokenExpiredError,
    TokenInvalidError,
    TokenService,
)

SECRET = "unit-test-secret"
CLAIMS = {"id": 7, "name": "Ada Lovelace", "email": "ada@example.com"}


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(secret=SECRET)


@pytest.mark.unit
class TestPasswordHasher:
    """Tests for PasswordHasher."""

    def test_default_cost_is_ten_rounds(self) -> None:
        assert PasswordHasher().hash("secret").startswith("$2b$10$")

    def test_hash_is_salted(self, hasher: PasswordHasher) -> None:
        first = hasher.hash("secret")
        second = hasher.hash("secret")

        assert first != second
        assert "secret" not in first

    def test_verify_matching_password(self, hasher: PasswordHasher) -> None:
        assert hasher.verify("secret", hasher.hash("secret")) is True

    def test_verify_wrong_password(self, hasher: PasswordHasher) -> None:
        assert hasher.verify("wrong", hasher.hash("secret")) is False

    def test_long_passwords_are_accepted(self, hasher: PasswordHasher) -> None:
        password = "x" * 200
        assert hasher.verify(password, hasher.hash(password)) is True

    @pytest.mark.parametrize("stored", [None, "", "not-a-bcrypt-hash", "$2b$10$short"])
    def test_malformed_hash_raises(self, hasher: PasswordHasher, stored) -> None:
        with pytest.raises(HashFormatError):
            hasher.verify("secret", stored)


@pytest.mark.unit
class TestTokenService:
    """Tests for TokenService."""

    def test_issued_token_verifies(self, tokens: TokenService) -> None:
        claims = tokens.verify(tokens.issue(CLAIMS))

        assert claims["id"] == 7
        assert claims["name"] == "Ada Lovelace"
        assert claims["email"] == "ada@example.com"
        assert claims["exp"] - claims["iat"] == 3600

    def test_custom_ttl(self, tokens: TokenService) -> None:
        claims = tokens.verify(tokens.issue(CLAIMS, ttl=timedelta(minutes=5)))

        assert claims["exp"] - claims["iat"] == 300

    def test_expired_token(self, tokens: TokenService) -> None:
        token = tokens.issue(CLAIMS, ttl=timedelta(seconds=-10))

        with pytest.raises(TokenExpiredError):
            tokens.verify(token)

    def test_wrong_secret(self, tokens: TokenService) -> None:
        token = TokenService(secret="another-secret").issue(CLAIMS)

        with pytest.raises(TokenInvalidError) as exc_info:
            tokens.verify(token)
        assert not isinstance(exc_info.value, TokenExpiredError)

    def test_tampered_payload(self, tokens: TokenService) -> None:
        header, payload, signature = tokens.issue(CLAIMS).split(".")
        forged = jwt.encode({**CLAIMS, "id": 1, "exp": 9999999999}, "guess", algorithm="HS256").split(".")[1]

        with pytest.raises(TokenInvalidError):
            tokens.verify(".".join([header, forged, signature]))

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    def test_malformed_token(self, tokens: TokenService, token: str) -> None:
        with pytest.raises(TokenInvalidError):
            tokens.verify(token)

    def test_missing_identity_claims(self, tokens: TokenService) -> None:
        token = tokens.issue({"name": "nobody"})

        with pytest.raises(TokenInvalidError, match="id, email"):
            tokens.verify(token)

    def test_empty_secret_rejected(self) -> None:
        with pytest.raises(ValueError):
            TokenService(secret="")
