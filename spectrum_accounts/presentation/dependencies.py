from functools import partial
from typing import Annotated, Callable

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from spectrum_accounts.domain.entities import Subject
from spectrum_accounts.domain.ports.notifier import NotifierPort
from spectrum_accounts.domain.ports.token_verifier import TokenVerifierPort
from spectrum_accounts.domain.ports.unit_of_work import UnitOfWorkPort
from spectrum_accounts.domain.ports.verification_cache import VerificationCachePort
from spectrum_accounts.infrastructure.db.uow import PgUnitOfWork
from spectrum_accounts.infrastructure.redis_cache.sessions import RedisSessions
from spectrum_accounts.infrastructure.redis_cache.verification_cache import (
    RedisVerificationCache,
)
from spectrum_accounts.infrastructure.security.password import (
    hash_password,
    verify_password,
)
from spectrum_accounts.settings import Settings

bearer_scheme = HTTPBearer(auto_error=False)

# Handles below are created in spectrum_accounts.main lifespan() and live on app.state.


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_uow(request: Request) -> UnitOfWorkPort:
    return PgUnitOfWork(request.app.state.pool)


def get_verification_cache(request: Request) -> VerificationCachePort:
    return RedisVerificationCache(request.app.state.redis)


def get_notifier(request: Request) -> NotifierPort:
    return request.app.state.notifier


def get_sessions(request: Request) -> RedisSessions:
    cfg = get_app_settings(request)
    return RedisSessions(request.app.state.redis, ttl_seconds=cfg.session_ttl_seconds)


def get_token_verifier(
    sessions: Annotated[RedisSessions, Depends(get_sessions)],
) -> TokenVerifierPort:
    return sessions


def get_hash_password(request: Request) -> Callable[..., str]:
    return partial(hash_password, rounds=get_app_settings(request).bcrypt_rounds)


def get_verify_password() -> Callable[[str, str], bool]:
    return verify_password


def get_code_ttl_seconds(request: Request) -> int:
    return get_app_settings(request).code_ttl_seconds


def get_list_page_size(request: Request) -> int:
    return get_app_settings(request).list_page_size


async def get_current_subject(
    auth: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)],
    verifier: Annotated[TokenVerifierPort, Depends(get_token_verifier)],
) -> Subject:
    if auth is None or not auth.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: Missing or invalid token",
        )
    subject = await verifier.verify(auth.credentials)
    if subject is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid or expired token"
        )
    return subject
