from __future__ import annotations

from typing import Optional

import psycopg
from psycopg import errors as pg_errors

from spectrum_accounts.domain.entities import User
from spectrum_accounts.domain.errors import UserAlreadyExists
from spectrum_accounts.domain.ports.user_repository import UserRepositoryPort

_COLUMNS = (
    "id, firstname, lastname, email, phone, address, is_admin, created_at, updated_at"
)


def _row_to_user(row: tuple) -> User:
    (
        id_,
        firstname,
        lastname,
        email,
        phone,
        address,
        is_admin,
        created_at,
        updated_at,
    ) = row
    return User(
        id=int(id_),
        firstname=firstname or "",
        lastname=lastname or "",
        email=str(email),
        phone=phone or "",
        address=address or "",
        is_admin=bool(is_admin),
        created_at=created_at,
        updated_at=updated_at,
    )


class PgUserRepository(UserRepositoryPort):
    """
    Postgres implementation of UserRepositoryPort.

    NOTE:
    - This repo is constructed with an *active async connection* supplied by the UoW.
    - It does not commit; the UnitOfWork controls the transaction boundary.
    """

    def __init__(self, conn: psycopg.AsyncConnection) -> None:
        self._conn = conn

    async def _fetch_one(self, sql: str, params: tuple) -> Optional[User]:
        async with self._conn.cursor() as cur:
            await cur.execute(sql, params)
            row = await cur.fetchone()
        return _row_to_user(row) if row else None

    async def create(self, user: User, password_hash: str) -> User:
        sql = f"""
        INSERT INTO users (firstname, lastname, email, phone, address, hashed_password)
        VALUES (%s, %s, LOWER(TRIM(%s)), %s, %s, %s)
        RETURNING {_COLUMNS}
        """
        try:
            created = await self._fetch_one(
                sql,
                (
                    user.firstname,
                    user.lastname,
                    user.email,
                    user.phone,
                    user.address,
                    password_hash,
                ),
            )
        except pg_errors.UniqueViolation as e:
            raise UserAlreadyExists(user.email) from e
        if created is None:
            raise RuntimeError("insert into users returned no row")
        return created

    async def get_by_id(self, user_id: int) -> Optional[User]:
        sql = f"SELECT {_COLUMNS} FROM users WHERE id = %s"
        return await self._fetch_one(sql, (user_id,))

    async def get_by_email(self, email: str) -> Optional[User]:
        sql = f"SELECT {_COLUMNS} FROM users WHERE email = LOWER(TRIM(%s))"
        return await self._fetch_one(sql, (email,))

    async def get_by_email_with_hash(self, email: str) -> Optional[tuple[User, str]]:
        sql = f"""
        SELECT {_COLUMNS}, hashed_password
        FROM users
        WHERE email = LOWER(TRIM(%s))
        """
        async with self._conn.cursor() as cur:
            await cur.execute(sql, (email,))
            row = await cur.fetchone()
        if not row:
            return None
        return _row_to_user(row[:-1]), row[-1]

    async def list_all(self, limit: int, offset: int = 0) -> list[User]:
        sql = f"SELECT {_COLUMNS} FROM users ORDER BY id LIMIT %s OFFSET %s"
        async with self._conn.cursor() as cur:
            await cur.execute(sql, (limit, offset))
            rows = await cur.fetchall()
        return [_row_to_user(r) for r in rows]

    async def update_profile(
        self, user_id: int, *, email: str, phone: str, address: str
    ) -> Optional[User]:
        sql = f"""
        UPDATE users
        SET email = LOWER(TRIM(%s)), phone = %s, address = %s, updated_at = now()
        WHERE id = %s
        RETURNING {_COLUMNS}
        """
        try:
            return await self._fetch_one(sql, (email, phone, address, user_id))
        except pg_errors.UniqueViolation as e:
            raise UserAlreadyExists(email) from e

    async def update_password(self, user_id: int, password_hash: str) -> Optional[User]:
        sql = f"""
        UPDATE users
        SET hashed_password = %s, updated_at = now()
        WHERE id = %s
        RETURNING {_COLUMNS}
        """
        return await self._fetch_one(sql, (password_hash, user_id))

    async def delete(self, user_id: int) -> bool:
        async with self._conn.cursor() as cur:
            await cur.execute("DELETE FROM users WHERE id = %s", (user_id,))
            return cur.rowcount > 0
