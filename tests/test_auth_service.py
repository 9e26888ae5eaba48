"""Registration, login and email checks."""

import asyncio
import time

import pytest

from task_management.errors import DuplicateUserError, InvalidCredentialsError
from task_management.models.user import User
from task_management.repositories.user_repository import UserRepository
from task_management.services import auth_service as auth_service_module
from task_management.services.auth_service import AuthService
from tests.conftest import TEST_EMAIL, TEST_PASSWORD


@pytest.fixture
def auth_service(db_session, context):
    return AuthService(db_session, context.jwt_service, bcrypt_rounds=4)


@pytest.fixture
async def registered(auth_service, db_session):
    session = await auth_service.register("ana", TEST_EMAIL, TEST_PASSWORD)
    await db_session.commit()
    return session


async def test_register_returns_valid_session(registered, context):
    assert registered.username == "ana"
    assert registered.email == TEST_EMAIL
    assert context.jwt_service.validate_token(registered.token)

    claims = context.jwt_service.decode_token(registered.token)
    assert int(claims["exp"]) == int(registered.expires_at.timestamp())


async def test_password_is_stored_hashed(registered, db_session):
    user = await UserRepository(db_session).get_by_email(TEST_EMAIL)
    assert user.password_hash != TEST_PASSWORD
    assert user.password_hash.startswith("$2")


async def test_login_round_trip(registered, auth_service, context):
    session = await auth_service.login(TEST_EMAIL, TEST_PASSWORD)

    assert session.username == "ana"
    claims = context.jwt_service.decode_token(session.token)
    assert claims["email"] == TEST_EMAIL


async def test_login_email_is_case_insensitive(registered, auth_service):
    session = await auth_service.login(TEST_EMAIL.upper(), TEST_PASSWORD)
    assert session.email == TEST_EMAIL


async def test_wrong_password_and_unknown_email_fail_identically(registered, auth_service):
    with pytest.raises(InvalidCredentialsError) as wrong_password:
        await auth_service.login(TEST_EMAIL, "not-the-password")
    with pytest.raises(InvalidCredentialsError) as unknown_email:
        await auth_service.login("nobody@mail.com", TEST_PASSWORD)

    assert type(wrong_password.value) is type(unknown_email.value)
    assert wrong_password.value.message == unknown_email.value.message == "Invalid credentials"


async def test_duplicate_registration_is_rejected(registered, auth_service):
    with pytest.raises(DuplicateUserError):
        await auth_service.register("ana2", TEST_EMAIL.upper(), "another-password")


async def test_duplicate_insert_race_is_rejected(registered, auth_service, db_session, monkeypatch):
    async def email_is_free(self, email):
        return False

    monkeypatch.setattr(UserRepository, "exists_by_email", email_is_free)

    with pytest.raises(DuplicateUserError):
        await auth_service.register("ana2", TEST_EMAIL, "another-password")
    await db_session.rollback()


async def test_user_exists(registered, auth_service):
    assert await auth_service.user_exists(TEST_EMAIL)
    assert await auth_service.user_exists(TEST_EMAIL.title())
    assert not await auth_service.user_exists("nobody@mail.com")


async def test_registered_email_is_stored_lower_case(auth_service, db_session):
    await auth_service.register("bob", "Bob@Mail.com", TEST_PASSWORD)
    await db_session.commit()

    user = await db_session.get(User, 1)
    assert user.email == "bob@mail.com"


async def test_password_check_does_not_block_other_requests(registered, auth_service, monkeypatch):
    ticks = {"count": 0, "during_check": 0}
    real_verify = auth_service_module.verify_password

    def slow_verify(plain_password, hashed_password):
        before = ticks["count"]
        time.sleep(0.3)
        ticks["during_check"] = ticks["count"] - before
        return real_verify(plain_password, hashed_password)

    async def ticker():
        while True:
            ticks["count"] += 1
            await asyncio.sleep(0.01)

    monkeypatch.setattr(auth_service_module, "verify_password", slow_verify)

    background = asyncio.create_task(ticker())
    try:
        session = await auth_service.login(TEST_EMAIL, TEST_PASSWORD)
    finally:
        background.cancel()
        await asyncio.gather(background, return_exceptions=True)

    assert session.email == TEST_EMAIL
    assert ticks["during_check"] >= 5
