"""Тесты проверки пароля и жизненного цикла токена на фейковом хранилище."""
import asyncio
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from vehicle_tracker.auth import issue_token, verify_credentials, verify_token
from vehicle_tracker.config import Settings, parse_duration
from vehicle_tracker.db.models import User
from vehicle_tracker.errors import InvalidCredentialsError, TooLongError, UnauthorizedError
from vehicle_tracker.schemas import Principal
from vehicle_tracker.security import decode_token, hash_password, verify_password

SECRET = "unit-test-secret-for-token-verification"


class FakeUsers:
    """Хранилище пользователей в памяти с тем же интерфейсом, что у UserRepository."""

    def __init__(self, *users: User) -> None:
        self.users = {user.username: user for user in users}

    async def find_credential_by_username(self, username: str):
        return self.users.get(username)

    async def get_by_identity(self, user_id: int, username: str):
        user = self.users.get(username)
        if user is None or user.user_id != user_id:
            return None
        return user


@pytest.fixture(scope="module")
def alice() -> User:
    return User(
        user_id=7,
        username="alice",
        password_hash=hash_password("correct horse"),
        email="alice@example.com",
        name="Alice",
        onboarding=False,
        selected_vehicle_id=3,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(jwt_secret=SECRET, jwt_expiration="1d")


def test_password_hash_roundtrip() -> None:
    hashed = hash_password("password123")
    assert hashed.startswith("$2b$10$")
    assert verify_password("password123", hashed)
    assert not verify_password("password124", hashed)


def test_password_longer_than_bcrypt_limit_in_bytes() -> None:
    with pytest.raises(TooLongError):
        hash_password("ж" * 40)


def test_verify_credentials_returns_minimal_principal(alice: User) -> None:
    principal = asyncio.run(verify_credentials(FakeUsers(alice), "alice", "correct horse"))
    assert principal == Principal(user_id=7, username="alice", email="alice@example.com")


def test_unknown_user_and_wrong_password_are_indistinguishable(alice: User) -> None:
    users = FakeUsers(alice)
    with pytest.raises(InvalidCredentialsError) as unknown:
        asyncio.run(verify_credentials(users, "bob", "correct horse"))
    with pytest.raises(InvalidCredentialsError) as wrong:
        asyncio.run(verify_credentials(users, "alice", "wrong horse"))

    assert type(unknown.value) is type(wrong.value)
    assert unknown.value.payload() == wrong.value.payload() == {
        "status": 401,
        "message": "Unauthorized",
        "name": "AuthenticationError",
    }
    assert vars(unknown.value) == vars(wrong.value)


def test_issued_token_claims(settings: Settings) -> None:
    principal = Principal(user_id=7, username="alice", email="alice@example.com")
    before_ms = int(datetime.now(timezone.utc).timestamp() * 1000)
    token = issue_token(principal, settings)

    assert isinstance(token, str)
    assert token.count(".") == 2
    header = jwt.get_unverified_header(token)
    assert header["alg"] == "HS256"

    claims = decode_token(token, secret=SECRET)
    assert set(claims) == {"user_id", "username", "email", "iat", "exp"}
    assert claims["iat"] >= before_ms
    assert claims["exp"] - claims["iat"] // 1000 in (86399, 86400)


def test_token_verifies_and_rebuilds_principal_from_record(alice: User, settings: Settings) -> None:
    stale = Principal(user_id=7, username="alice", email="old@example.com")
    token = issue_token(stale, settings)

    principal = asyncio.run(verify_token(FakeUsers(alice), token, settings))
    assert principal.email == "alice@example.com"
    assert principal.name == "Alice"
    assert principal.onboarding is False
    assert principal.selected_vehicle_id == 3


def test_expired_token_is_rejected(alice: User, settings: Settings) -> None:
    principal = Principal(user_id=7, username="alice", email="alice@example.com")
    issued = datetime.now(timezone.utc) - timedelta(days=2)
    token = issue_token(principal, settings, now=issued)

    with pytest.raises(UnauthorizedError):
        asyncio.run(verify_token(FakeUsers(alice), token, settings))


def test_token_for_deleted_account_is_rejected(settings: Settings) -> None:
    principal = Principal(user_id=7, username="alice", email="alice@example.com")
    token = issue_token(principal, settings)

    with pytest.raises(UnauthorizedError):
        asyncio.run(verify_token(FakeUsers(), token, settings))


def test_token_with_mismatched_identity_is_rejected(alice: User, settings: Settings) -> None:
    principal = Principal(user_id=8, username="alice", email="alice@example.com")
    token = issue_token(principal, settings)

    with pytest.raises(UnauthorizedError):
        asyncio.run(verify_token(FakeUsers(alice), token, settings))


@pytest.mark.parametrize(
    "token",
    [
        "not-a-token",
        "",
        jwt.encode({"user_id": 7, "username": "alice", "exp": 4102444800}, "another-secret-of-enough-length-for-hmac"),
        jwt.encode({"user_id": 7, "username": "alice"}, SECRET),
    ],
    ids=["garbage", "empty", "foreign-signature", "no-exp"],
)
def test_malformed_tokens_are_unauthorized(alice: User, settings: Settings, token: str) -> None:
    with pytest.raises(UnauthorizedError):
        asyncio.run(verify_token(FakeUsers(alice), token, settings))


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1d", timedelta(days=1)),
        ("12h", timedelta(hours=12)),
        ("30m", timedelta(minutes=30)),
        ("45s", timedelta(seconds=45)),
        ("3600", timedelta(hours=1)),
        (600, timedelta(minutes=10)),
    ],
)
def test_parse_duration(raw, expected: timedelta) -> None:
    assert parse_duration(raw) == expected


@pytest.mark.parametrize("raw", ["1w", "soon", "0", "-5m"])
def test_parse_duration_rejects_bad_values(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_duration(raw)


def test_settings_parse_expiration_from_string() -> None:
    assert Settings(jwt_expiration="2h").jwt_expiration == timedelta(hours=2)
