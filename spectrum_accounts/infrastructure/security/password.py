from __future__ import annotations

from passlib.context import CryptContext

from spectrum_accounts.settings import get_settings

_pwd = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(plain: str, *, rounds: int | None = None) -> str:
    """
    Hash a password using bcrypt. If rounds is None, use settings.bcrypt_rounds.
    """
    if rounds is None:
        rounds = int(get_settings().bcrypt_rounds)
    return _pwd.hash(plain, rounds=rounds)


def verify_password(plain: str, password_hash: str) -> bool:
    """
    Verify a password against its bcrypt hash. A malformed or unknown hash
    counts as a mismatch.
    """
    try:
        return _pwd.verify(plain, password_hash)
    except ValueError:
        return False
