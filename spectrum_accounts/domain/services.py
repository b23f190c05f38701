from __future__ import annotations

import hmac
import re
import secrets

from spectrum_accounts.domain.errors import ValidationFailure

CODE_MIN = 1000
CODE_SPAN = 9000

PASSWORD_MIN_LENGTH = 8
_DIGIT = re.compile(r"\d")
_UPPER = re.compile(r"[A-Z]")
_SYMBOL = re.compile(r"[^A-Za-z0-9]")


def generate_code() -> str:
    """Zero-padded 4-digit numeric code in 1000..9999."""
    return f"{CODE_MIN + secrets.randbelow(CODE_SPAN):04d}"


def secure_compare(a: str, b: str) -> bool:
    """Exact string equality in constant time."""
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


def password_problems(password: str) -> list[str]:
    problems: list[str] = []
    if len(password) < PASSWORD_MIN_LENGTH:
        problems.append(
            f"Password must be minimum of {PASSWORD_MIN_LENGTH} characters"
        )
    if not _DIGIT.search(password):
        problems.append("Password must contain at least a number")
    if not _SYMBOL.search(password):
        problems.append("Password must contain at least a symbol")
    if not _UPPER.search(password):
        problems.append("Password must contain an upper case letter")
    return problems


def ensure_strong_password(password: str) -> None:
    problems = password_problems(password)
    if problems:
        raise ValidationFailure("; ".join(problems))
