import pytest

from spectrum_accounts.application import accounts
from spectrum_accounts.domain.entities import Subject
from spectrum_accounts.domain.errors import (
    Unauthorized,
    UserAlreadyExists,
    UserNotFound,
    ValidationFailure,
)

ALICE = Subject(user_id=42)
ADMIN = Subject(user_id=1, role="admin")


@pytest.mark.asyncio
async def test_list_users_requires_admin(uow):
    with pytest.raises(Unauthorized):
        await accounts.list_users(uow, ALICE)


@pytest.mark.asyncio
async def test_list_users_as_admin(uow):
    users = await accounts.list_users(uow, ADMIN, limit=10)
    assert [u.id for u in users] == [1, 42]


@pytest.mark.asyncio
async def test_list_users_respects_limit(uow):
    users = await accounts.list_users(uow, ADMIN, limit=1)
    assert len(users) == 1


@pytest.mark.asyncio
async def test_get_profile(uow):
    user = await accounts.get_profile(uow, ALICE)
    assert user.email == "a@b.com"


@pytest.mark.asyncio
async def test_get_profile_deleted_user(uow):
    with pytest.raises(UserNotFound):
        await accounts.get_profile(uow, Subject(user_id=999))


@pytest.mark.asyncio
async def test_get_user_by_email(uow):
    user = await accounts.get_user_by_email(uow, "  A@B.COM")
    assert user.id == 42

    with pytest.raises(ValidationFailure):
        await accounts.get_user_by_email(uow, " ")
    with pytest.raises(UserNotFound):
        await accounts.get_user_by_email(uow, "nobody@b.com")


@pytest.mark.asyncio
async def test_update_profile_own_account(uow):
    user = await accounts.update_profile(
        uow,
        ALICE,
        user_id=42,
        email="New@B.com",
        phone="08000000000",
        address="3 Shelf Road",
    )
    assert user.email == "new@b.com"
    assert user.phone == "08000000000"
    assert uow.committed is True


@pytest.mark.asyncio
async def test_update_profile_someone_else(uow):
    with pytest.raises(Unauthorized):
        await accounts.update_profile(
            uow, ALICE, user_id=1, email="x@y.com", phone="08000000000", address="x"
        )
    assert uow.committed is False


@pytest.mark.asyncio
async def test_update_profile_email_taken(uow):
    with pytest.raises(UserAlreadyExists):
        await accounts.update_profile(
            uow,
            ALICE,
            user_id=42,
            email="admin@shelf.io",
            phone="08000000000",
            address="x",
        )
    assert uow.rolled_back is True


@pytest.mark.asyncio
async def test_update_password(uow, hash_password_stub):
    await accounts.update_password(
        uow, ALICE, user_id=42, password="N3w!Password", hash_password=hash_password_stub
    )
    assert uow.db_users.hashes[42] == "hashed-N3w!Password"
    assert uow.committed is True


@pytest.mark.asyncio
async def test_update_password_weak(uow, hash_password_stub):
    with pytest.raises(ValidationFailure):
        await accounts.update_password(
            uow, ALICE, user_id=42, password="short", hash_password=hash_password_stub
        )
    assert uow.db_users.hashes[42] == "hashed-Passw0rd!"


@pytest.mark.asyncio
async def test_deactivate_user(uow):
    await accounts.deactivate_user(uow, ALICE, 42)
    assert 42 not in uow.db_users.users
    assert uow.committed is True


@pytest.mark.asyncio
async def test_deactivate_other_user_forbidden(uow):
    with pytest.raises(Unauthorized):
        await accounts.deactivate_user(uow, ALICE, 1)
    assert 1 in uow.db_users.users
