import base64

import pytest
from fastapi.testclient import TestClient

from spectrum_accounts.domain.entities import Subject
from spectrum_accounts.main import create_app
from spectrum_accounts.presentation.dependencies import (
    get_code_ttl_seconds,
    get_hash_password,
    get_list_page_size,
    get_notifier,
    get_sessions,
    get_uow,
    get_verification_cache,
    get_verify_password,
)
from tests.fakes import FakeNotifier, FakeSessions, FakeUoW, FakeVerificationCache


@pytest.fixture()
def app_and_deps(seed):
    app = create_app()
    repo, _ = seed
    uow = FakeUoW(repo)
    cache = FakeVerificationCache()
    notifier = FakeNotifier()
    sessions = FakeSessions()

    app.dependency_overrides[get_uow] = lambda: uow
    app.dependency_overrides[get_verification_cache] = lambda: cache
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_sessions] = lambda: sessions
    app.dependency_overrides[get_verify_password] = lambda: (
        lambda plain, hashed: hashed == "hashed-" + plain
    )
    app.dependency_overrides[get_hash_password] = lambda: (lambda plain: "hashed-" + plain)
    app.dependency_overrides[get_code_ttl_seconds] = lambda: 600
    app.dependency_overrides[get_list_page_size] = lambda: 10

    try:
        yield app, uow, cache, notifier, sessions
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def client(app_and_deps):
    app = app_and_deps[0]
    return TestClient(app, raise_server_exceptions=False)


def basic_auth(email: str, password: str) -> dict[str, str]:
    token = base64.b64encode(f"{email}:{password}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def alice_token(app_and_deps) -> str:
    sessions: FakeSessions = app_and_deps[4]
    return sessions.issue(Subject(user_id=42))


@pytest.fixture()
def admin_token(app_and_deps) -> str:
    sessions: FakeSessions = app_and_deps[4]
    return sessions.issue(Subject(user_id=1, role="admin"))
