from typing import Callable

import spectrum_accounts.domain.services as domain_services
from spectrum_accounts.domain.entities import User
from spectrum_accounts.domain.ports.unit_of_work import UnitOfWorkPort


async def register_user(
    uow: UnitOfWorkPort,
    *,
    firstname: str,
    lastname: str,
    email: str,
    phone: str,
    address: str,
    password: str,
    hash_password: Callable[..., str],
) -> User:
    domain_services.ensure_strong_password(password)
    candidate = User(
        email=email,
        firstname=firstname.strip(),
        lastname=lastname.strip(),
        phone=phone,
        address=address,
    )
    hashed_password = hash_password(password)

    async with uow as transaction:
        user = await transaction.db_users.create(candidate, hashed_password)
        await transaction.commit()
    return user
