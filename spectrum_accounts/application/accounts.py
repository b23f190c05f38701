"""Account use cases behind the authenticated /users routes."""

from typing import Callable

import spectrum_accounts.domain.services as domain_services
from spectrum_accounts.domain.entities import Subject, User
from spectrum_accounts.domain.errors import (
    Unauthorized,
    UserNotFound,
    ValidationFailure,
)
from spectrum_accounts.domain.ports.unit_of_work import UnitOfWorkPort


def _ensure_self(subject: Subject, user_id: int) -> None:
    if subject.user_id != user_id:
        raise Unauthorized("token does not belong to this user")


async def list_users(
    uow: UnitOfWorkPort, subject: Subject, *, limit: int = 10, offset: int = 0
) -> list[User]:
    if not subject.is_admin:
        raise Unauthorized("admin role required")
    async with uow as transaction:
        return await transaction.db_users.list_all(limit=limit, offset=offset)


async def get_profile(uow: UnitOfWorkPort, subject: Subject) -> User:
    async with uow as transaction:
        user = await transaction.db_users.get_by_id(subject.user_id)
    if user is None:
        raise UserNotFound(subject.user_id)
    return user


async def get_user_by_email(uow: UnitOfWorkPort, email: str) -> User:
    normalized_email = email.strip().lower()
    if not normalized_email:
        raise ValidationFailure("no input entered")
    async with uow as transaction:
        user = await transaction.db_users.get_by_email(normalized_email)
    if user is None:
        raise UserNotFound(normalized_email)
    return user


async def update_profile(
    uow: UnitOfWorkPort,
    subject: Subject,
    *,
    user_id: int,
    email: str,
    phone: str,
    address: str,
) -> User:
    _ensure_self(subject, user_id)
    async with uow as transaction:
        user = await transaction.db_users.update_profile(
            user_id, email=email.strip().lower(), phone=phone, address=address
        )
        if user is None:
            raise UserNotFound(user_id)
        await transaction.commit()
    return user


async def update_password(
    uow: UnitOfWorkPort,
    subject: Subject,
    *,
    user_id: int,
    password: str,
    hash_password: Callable[..., str],
) -> User:
    domain_services.ensure_strong_password(password)
    _ensure_self(subject, user_id)
    hashed_password = hash_password(password)
    async with uow as transaction:
        user = await transaction.db_users.update_password(user_id, hashed_password)
        if user is None:
            raise UserNotFound(user_id)
        await transaction.commit()
    return user


async def deactivate_user(uow: UnitOfWorkPort, subject: Subject, user_id: int) -> None:
    _ensure_self(subject, user_id)
    async with uow as transaction:
        removed = await transaction.db_users.delete(user_id)
        if not removed:
            raise UserNotFound(user_id)
        await transaction.commit()
